"""Runtime configuration, read from the environment and an optional ``.env``."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_STRIPE_API_BASE = "https://api.stripe.com"


def validate_currency(value: str | None) -> str:
    v = (value or "USD").strip().upper()
    if len(v) != 3 or not v.isalpha():
        raise ValueError("Invalid currency code: expected ISO4217 length 3")
    return v


@dataclass(frozen=True)
class SettlementConfig:
    data_dir: Path
    stripe_secret_key: str
    stripe_api_base: str
    currency: str
    transfer_timeout: float
    log_level: str

    @classmethod
    def load(cls, env_file: Path | None = None) -> SettlementConfig:
        """Build the config from environment variables.

        Values already present in the environment win over the ``.env`` file.
        """
        load_dotenv(env_file or _PROJECT_ROOT / ".env")

        data_dir = Path(os.getenv("SETTLEMENT_DATA_DIR", str(_PROJECT_ROOT / "data")))
        timeout_raw = os.getenv("TRANSFER_TIMEOUT_SECONDS", "30")
        try:
            transfer_timeout = float(timeout_raw)
        except ValueError as exc:
            raise ValueError(
                f"TRANSFER_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}"
            ) from exc
        if transfer_timeout <= 0:
            raise ValueError("TRANSFER_TIMEOUT_SECONDS must be positive")

        return cls(
            data_dir=data_dir,
            stripe_secret_key=os.getenv("STRIPE_SECRET_KEY", ""),
            stripe_api_base=os.getenv("STRIPE_API_BASE", DEFAULT_STRIPE_API_BASE).rstrip("/"),
            currency=validate_currency(os.getenv("PAYOUT_CURRENCY")),
            transfer_timeout=transfer_timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
