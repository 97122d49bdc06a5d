import pytest
from pydantic import ValidationError

from manage_service.config.settings import Settings

_ENV_KEYS = (
    "AUTH_PROTOCOL",
    "AUTH_HOST",
    "AUTH_PORT",
    "DATASTORE_WRITER_PROTOCOL",
    "DATASTORE_WRITER_HOST",
    "DATASTORE_WRITER_PORT",
    "MANAGE_HOST",
    "MANAGE_PORT",
    "MANAGE_ADDRESS",
    "MANAGE_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_are_deterministic(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)

    settings = Settings(_env_file=None)

    assert settings.auth_url == "http://localhost:9004"
    assert settings.datastore_writer_url == "http://localhost:9011"
    assert settings.manage_host == "0.0.0.0"
    assert settings.manage_port == 9008
    assert settings.manage_address == "localhost:9008"
    assert settings.manage_timeout_seconds == 5.0
    assert settings.log_level == "INFO"


def test_service_urls_follow_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("AUTH_PROTOCOL", "https")
    monkeypatch.setenv("AUTH_HOST", "auth")
    monkeypatch.setenv("AUTH_PORT", "443")
    monkeypatch.setenv("DATASTORE_WRITER_HOST", "datastore-writer")
    monkeypatch.setenv("DATASTORE_WRITER_PORT", "9011")

    settings = Settings(_env_file=None)

    assert settings.auth_url == "https://auth:443"
    assert settings.datastore_writer_url == "http://datastore-writer:9011"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("AUTH_PROTOCOL", "ftp"),
        ("AUTH_PORT", "0"),
        ("DATASTORE_WRITER_PORT", "70000"),
        ("MANAGE_TIMEOUT_SECONDS", "0"),
        ("AUTH_HOST", ""),
    ],
)
def test_invalid_values_raise_validation_error(
    monkeypatch: pytest.MonkeyPatch,
    key: str,
    value: str,
) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv(key, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
