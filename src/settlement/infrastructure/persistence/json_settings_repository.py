"""JSON-file-backed implementation of SettingsRepository."""

from __future__ import annotations

from settlement.domain.model.platform_settings import PlatformSettings
from settlement.domain.model.value_objects import CommissionRate
from settlement.domain.repository.settings_repository import SettingsRepository
from settlement.infrastructure.persistence.json_file import JsonFileRepository


class JsonSettingsRepository(JsonFileRepository, SettingsRepository):

    _empty: dict = {}

    def get(self) -> PlatformSettings:
        raw = self._load_raw()
        if "commission_percent" not in raw:
            return PlatformSettings()
        settings = PlatformSettings(commission=CommissionRate.of(raw["commission_percent"]))
        updated_at = self._time(raw.get("updated_at"))
        if updated_at is not None:
            settings.updated_at = updated_at
        return settings

    def save(self, settings: PlatformSettings) -> None:
        self._persist_raw(
            {
                "commission_percent": str(settings.commission.value),
                "updated_at": self._time_raw(settings.updated_at),
            }
        )
