from message_drop.core.config import Settings
from message_drop.core.security import (
    normalize_passcode,
    create_access_token,
    resolve_access_token,
)
from conftest import TEST_SECRET


def test_hash_is_salted_and_verifies(hasher):
    first = hasher.hash("secret1")
    second = hasher.hash("secret1")
    assert first != second
    assert "secret1" not in first
    assert hasher.verify("secret1", first)
    assert hasher.verify("secret1", second)
    assert not hasher.verify("secret2", first)


def test_cost_factor_is_embedded_in_digest(hasher):
    assert hasher.hash("secret1").startswith("$2b$04$")


def test_default_cost_factor_is_twelve():
    from message_drop.core.security import PasswordHasher

    digest = PasswordHasher().hash("x")
    assert digest.startswith("$2b$12$")


def test_verify_never_raises_on_malformed_digest(hasher):
    assert hasher.verify("secret1", "not-a-bcrypt-hash") is False
    assert hasher.verify("secret1", "") is False
    assert hasher.verify("secret1", None) is False


def test_normalize_passcode():
    assert normalize_passcode("  Blue Sky  ") == "blue sky"
    assert normalize_passcode("BLUE") == "blue"


def test_token_round_trip(settings):
    token = create_access_token(settings, 7, "alice")
    user = resolve_access_token(settings, token)
    assert user.user_id == 7
    assert user.username == "alice"


def test_token_signed_with_other_key_is_rejected(settings):
    other = Settings(SECRET_KEY="another-secret-key-9876543210", _env_file=None)
    token = create_access_token(other, 7, "alice")
    assert resolve_access_token(settings, token) is None


def test_expired_token_is_rejected(settings):
    expired = Settings(SECRET_KEY=TEST_SECRET, ACCESS_TOKEN_EXPIRE_DAYS=-1, _env_file=None)
    token = create_access_token(expired, 7, "alice")
    assert resolve_access_token(settings, token) is None


def test_garbage_token_is_rejected(settings):
    assert resolve_access_token(settings, "not.a.token") is None
    assert resolve_access_token(settings, "") is None
    assert resolve_access_token(settings, None) is None
