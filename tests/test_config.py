# tests/test_config.py
import pytest

from catalog.config import ConfigurationError, get_settings


def test_defaults(monkeypatch):
    for key in ("CATALOG_MAX_RECORDS", "CATALOG_NEW_PRODUCT_DAYS", "CATALOG_SEED_DATA",
                "CATALOG_CORS_ORIGINS", "CATALOG_PORT"):
        monkeypatch.delenv(key, raising=False)
    s = get_settings()
    assert s.max_records == 10000
    assert s.new_product_days == 30
    assert s.seed_data is True
    assert s.cors_origins == ["*"]
    assert s.port == 8085


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CATALOG_MAX_RECORDS", "25")
    monkeypatch.setenv("CATALOG_SEED_DATA", "no")
    monkeypatch.setenv("CATALOG_CORS_ORIGINS", "http://localhost:5173, http://example.com")
    s = get_settings()
    assert s.max_records == 25
    assert s.seed_data is False
    assert s.cors_origins == ["http://localhost:5173", "http://example.com"]


@pytest.mark.parametrize("key,value", [
    ("CATALOG_MAX_RECORDS", "lots"),
    ("CATALOG_MAX_RECORDS", "0"),
    ("CATALOG_SEED_DATA", "maybe"),
])
def test_bad_values(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigurationError):
        get_settings()


def test_log_level_is_normalised(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    assert get_settings().log_level == "DEBUG"
    monkeypatch.delenv("LOG_LEVEL")
    assert get_settings().log_level == "INFO"


@pytest.mark.parametrize("value", ["verbose", "trace", "10"])
def test_unknown_log_level_is_rejected(monkeypatch, value):
    monkeypatch.setenv("LOG_LEVEL", value)
    with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
        get_settings()
