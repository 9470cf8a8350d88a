import pytest

from settlement.infrastructure.config import SettlementConfig


@pytest.fixture
def env(monkeypatch, tmp_path):
    # Registered first so values loaded from a .env file are removed afterwards.
    for name in ("STRIPE_API_BASE", "PAYOUT_CURRENCY", "TRANSFER_TIMEOUT_SECONDS", "LOG_LEVEL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("SETTLEMENT_DATA_DIR", str(tmp_path))
    return monkeypatch


def test_defaults(env, tmp_path):
    config = SettlementConfig.load(env_file=tmp_path / "missing.env")

    assert config.data_dir == tmp_path
    assert config.currency == "USD"
    assert config.transfer_timeout == 30.0
    assert config.stripe_api_base == "https://api.stripe.com"


def test_dotenv_file_is_read(env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PAYOUT_CURRENCY=eur\nTRANSFER_TIMEOUT_SECONDS=12.5\n", encoding="utf-8")

    config = SettlementConfig.load(env_file=env_file)

    assert config.currency == "EUR"
    assert config.transfer_timeout == 12.5


def test_non_numeric_timeout_keeps_the_parse_error(env, tmp_path):
    env.setenv("TRANSFER_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ValueError, match="must be a number") as excinfo:
        SettlementConfig.load(env_file=tmp_path / "missing.env")

    assert isinstance(excinfo.value.__cause__, ValueError)


@pytest.mark.parametrize("value", ["0", "-5"])
def test_timeout_must_be_positive(env, tmp_path, value):
    env.setenv("TRANSFER_TIMEOUT_SECONDS", value)
    with pytest.raises(ValueError, match="must be positive"):
        SettlementConfig.load(env_file=tmp_path / "missing.env")


def test_bad_currency(env, tmp_path):
    env.setenv("PAYOUT_CURRENCY", "dollars")
    with pytest.raises(ValueError, match="Invalid currency code"):
        SettlementConfig.load(env_file=tmp_path / "missing.env")
