import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from message_drop.core.config import Settings
from message_drop.core.security import PasswordHasher
from message_drop.database import create_db_engine, init_db
from message_drop.main import create_app

TEST_SECRET = "test-secret-key-0123456789"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        SECRET_KEY=TEST_SECRET,
        DATABASE_URL="sqlite://",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="DEBUG",
        _env_file=None,
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def db(settings):
    engine = create_db_engine(settings)
    init_db(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def make_client(app):
    """Each client keeps its own cookie jar, i.e. its own browser session."""
    clients = []

    def _make() -> TestClient:
        client = TestClient(app, base_url="https://testserver")
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


def register(client: TestClient, username: str, password: str = "secret1"):
    return client.post("/register", json={"username": username, "password": password})


def publish(client: TestClient, generic_message: str = "Hi!"):
    return client.post("/drops", json={"genericMessage": generic_message})


def add_message(client: TestClient, nickname: str, passcode: str = "blue", **extra):
    body = {
        "nickname": nickname,
        "question": extra.pop("question", "Color?"),
        "passcode": passcode,
        "content": extra.pop("content", "Surprise!"),
    }
    body.update(extra)
    return client.post("/drops/messages", json=body)
