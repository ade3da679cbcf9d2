import pytest
from pydantic import ValidationError

from message_drop.core.config import Settings
from message_drop.main import create_app


def test_missing_secret_fails_fast(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize(
    "secret",
    ["message-drop-jwt-secret-change-me", "message-drop-secret-key-change-me", "short"],
)
def test_known_or_weak_secret_is_refused(secret):
    with pytest.raises(ValidationError):
        Settings(SECRET_KEY=secret, _env_file=None)


def test_secret_read_from_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-the-environment-123")
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.SECRET_KEY == "from-the-environment-123"
    assert settings.PORT == 8080
    assert settings.ACCESS_TOKEN_EXPIRE_DAYS == 30
    assert settings.BCRYPT_ROUNDS == 12


def test_bcrypt_rounds_bounds():
    with pytest.raises(ValidationError):
        Settings(SECRET_KEY="a-perfectly-fine-secret", BCRYPT_ROUNDS=3, _env_file=None)


def test_app_holds_process_resources(settings):
    app = create_app(settings)
    assert app.state.settings is settings
    assert app.state.engine is not None
    assert app.state.hasher is not None
