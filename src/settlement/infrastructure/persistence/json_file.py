"""Shared file helpers for the JSON-backed repositories."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any

from settlement.domain.model.value_objects import Money


class JsonFileRepository:
    """Loads and rewrites one JSON document per repository.

    Writes go to a sibling temp file first and are then renamed over the
    original, so a reader never sees a half-written document.
    """

    _empty: Any = []

    def __init__(self, file_path: Path, currency: str = "USD") -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> Any:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, data: Any) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        tmp_path.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(self._empty), encoding="utf-8")

    # --- Field codecs ---------------------------------------------------------

    def _money(self, raw: str | None, currency: str | None = None) -> Money | None:
        if raw is None:
            return None
        return Money(Decimal(str(raw)), currency or self._currency)

    @staticmethod
    def _money_raw(money: Money | None) -> str | None:
        return None if money is None else str(money.amount)

    @staticmethod
    def _time(raw: str | None) -> datetime | None:
        """Parse an ISO-8601 timestamp; a missing offset means UTC."""
        if not raw:
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        value = datetime.fromisoformat(raw)
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    @staticmethod
    def _time_raw(value: datetime | None) -> str | None:
        return value.isoformat() if value else None
