"""Settings model sharing the record store's persistence cycle."""

import threading
from dataclasses import replace
from typing import Optional

from mudir.domain.entities import AppSettings
from mudir.store.record_store import ChangeScheduler


class SettingsModel:
    """Holds the singleton AppSettings and notifies the scheduler on change."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        scheduler: Optional[ChangeScheduler] = None,
    ):
        self.scheduler = scheduler
        self._lock = threading.RLock()
        self._settings = settings or AppSettings()

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def _apply(self, updated: AppSettings, notify: bool = True) -> AppSettings:
        with self._lock:
            if updated == self._settings:
                return self._settings
            self._settings = updated
        if notify and self.scheduler is not None:
            self.scheduler.schedule()
        return updated

    def replace(self, settings: AppSettings, notify: bool = True) -> AppSettings:
        """Replace all settings (hydration and import)."""
        return self._apply(settings, notify=notify)

    def update_organization_name(self, name: str) -> AppSettings:
        return self._apply(replace(self._settings, organization_name=name))

    def update_currency(self, symbol: str) -> AppSettings:
        return self._apply(replace(self._settings, user_currency=symbol))

    def complete_onboarding(self) -> AppSettings:
        """Clear the new-user flag."""
        return self._apply(replace(self._settings, is_new_user=False))
