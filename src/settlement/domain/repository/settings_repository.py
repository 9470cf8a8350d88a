"""Abstract repository for the PlatformSettings singleton."""

from __future__ import annotations

from abc import ABC, abstractmethod

from settlement.domain.model.platform_settings import PlatformSettings


class SettingsRepository(ABC):

    @abstractmethod
    def get(self) -> PlatformSettings:
        """Return the settings, falling back to defaults when none are stored."""

    @abstractmethod
    def save(self, settings: PlatformSettings) -> None:
        """Persist the settings."""
