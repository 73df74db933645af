"""Shared pytest fixtures for mudir tests."""

import pytest

from mudir.logging_config import reset_logging
from mudir.storage.file_storage import JsonFileStorage
from mudir.store.record_store import RecordStore
from mudir.workspace import Workspace


class ManualTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True


class ManualTimers:
    """Timer factory that records every timer it creates."""

    def __init__(self):
        self.created = []

    def __call__(self, interval, function):
        timer = ManualTimer(interval, function)
        self.created.append(timer)
        return timer

    @property
    def armed(self):
        return [t for t in self.created if t.started and not t.cancelled]

    def fire(self):
        """Fire every armed timer, as if the window elapsed."""
        for timer in self.armed:
            timer.cancelled = True
            timer.function()


class CountingScheduler:
    """Scheduler that only counts notifications."""

    def __init__(self):
        self.calls = 0

    def schedule(self):
        self.calls += 1


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo the CLI's logging configuration between tests."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def data_path(tmp_path):
    """Path of a not-yet-existing JSON document."""
    return tmp_path / "mudir_db.json"


@pytest.fixture
def storage(data_path):
    """JSON file storage in a temporary directory."""
    return JsonFileStorage(str(data_path))


@pytest.fixture
def timers():
    """Manually driven timer factory."""
    return ManualTimers()


@pytest.fixture
def workspace(storage, timers):
    """An opened workspace whose debounce timer is driven by the test."""
    return Workspace.open(storage, window=1.0, timer_factory=timers)


@pytest.fixture
def scheduler():
    """Scheduler that counts store notifications."""
    return CountingScheduler()


@pytest.fixture
def store(scheduler):
    """Empty record store wired to a counting scheduler."""
    return RecordStore(scheduler=scheduler)


@pytest.fixture
def inventory_service(workspace):
    """InventoryService backed by the test workspace."""
    return workspace.inventory


@pytest.fixture
def ledger_service(workspace):
    """LedgerService backed by the test workspace."""
    return workspace.ledger


@pytest.fixture
def sample_collection(inventory_service):
    """Collection with the default Name/Quantity/Price schema."""
    return inventory_service.quick_create_collection("Stationery")


@pytest.fixture
def sample_party(ledger_service):
    """A party with no transactions."""
    return ledger_service.add_party("Sharma Traders", phone="9876543210")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(data_path):
    """Global options pointing the CLI at the temporary document."""
    return ["--data-path", str(data_path)]
