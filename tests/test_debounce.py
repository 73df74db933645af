"""Tests for the debounced writer."""

import threading

from mudir.domain.entities import AppSettings, Snapshot
from mudir.storage.debounce import DebouncedWriter


class Recorder:
    """Collects written snapshots."""

    def __init__(self, result=True):
        self.written = []
        self.result = result

    def __call__(self, snapshot):
        self.written.append(snapshot)
        return self.result


def make_writer(timers, recorder, state):
    return DebouncedWriter(
        write=recorder,
        snapshot=lambda: Snapshot(meta=AppSettings(organization_name=state["name"])),
        window=1.0,
        timer_factory=timers,
    )


def test_burst_coalesces_into_one_write(timers):
    recorder = Recorder()
    state = {"name": "first"}
    writer = make_writer(timers, recorder, state)

    for n in range(10):
        state["name"] = f"change {n}"
        writer.schedule()

    assert len(timers.armed) == 1
    assert timers.armed[0].interval == 1.0
    assert timers.armed[0].daemon is True

    timers.fire()

    assert len(recorder.written) == 1
    assert recorder.written[0].meta.organization_name == "change 9"
    assert not writer.pending


def test_snapshot_taken_when_timer_fires(timers):
    recorder = Recorder()
    state = {"name": "before"}
    writer = make_writer(timers, recorder, state)

    writer.schedule()
    state["name"] = "after"
    timers.fire()

    assert recorder.written[0].meta.organization_name == "after"


def test_no_write_without_schedule(timers):
    recorder = Recorder()
    writer = make_writer(timers, recorder, {"name": ""})

    assert writer.flush() is False
    assert recorder.written == []


def test_cancel_drops_pending_write(timers):
    recorder = Recorder()
    writer = make_writer(timers, recorder, {"name": ""})

    writer.schedule()
    writer.cancel()
    timers.fire()

    assert recorder.written == []
    assert not writer.pending


def test_flush_writes_immediately(timers):
    recorder = Recorder()
    writer = make_writer(timers, recorder, {"name": "now"})
    writer.schedule()

    assert writer.flush() is True
    assert len(recorder.written) == 1
    assert timers.created[0].cancelled


def test_superseded_timer_does_not_write(timers):
    """A stale timer callback that races a newer schedule() is ignored."""
    recorder = Recorder()
    writer = make_writer(timers, recorder, {"name": ""})
    writer.schedule()
    stale = timers.created[0]
    writer.schedule()

    stale.function()

    assert recorder.written == []
    assert writer.pending


def test_failed_write_is_reported_not_raised(timers):
    recorder = Recorder(result=False)
    writer = make_writer(timers, recorder, {"name": ""})
    writer.schedule()

    assert writer.flush() is False
    assert len(recorder.written) == 1


class BlockingRecorder:
    """Holds the first write open until released, noting any overlap."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.in_flight = 0
        self.max_in_flight = 0
        self.order = []
        self._lock = threading.Lock()

    def __call__(self, snapshot):
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            first = not self.started.is_set()
            self.started.set()
        if first:
            self.release.wait(5)
        with self._lock:
            self.order.append(snapshot.meta.organization_name)
            self.in_flight -= 1
        return True


def test_flush_waits_for_timer_write_in_progress(timers):
    """A flush during a timer write runs after it, and the newest state lands last."""
    recorder = BlockingRecorder()
    state = {"name": "first"}
    writer = make_writer(timers, recorder, state)

    writer.schedule()
    timer_thread = threading.Thread(target=timers.armed[0].function)
    timer_thread.start()
    assert recorder.started.wait(5)

    state["name"] = "second"
    writer.schedule()
    flusher = threading.Thread(target=writer.flush)
    flusher.start()
    flusher.join(0.2)

    assert flusher.is_alive()

    recorder.release.set()
    timer_thread.join(5)
    flusher.join(5)

    assert recorder.max_in_flight == 1
    assert recorder.order == ["first", "second"]
    assert not writer.pending
