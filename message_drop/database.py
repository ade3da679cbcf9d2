# message_drop/database.py
import logging

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from message_drop.core.config import Settings

# register every table on SQLModel.metadata
import message_drop.models.user  # noqa: F401
import message_drop.models.drop  # noqa: F401
import message_drop.models.message  # noqa: F401
import message_drop.models.view  # noqa: F401

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(settings: Settings) -> Engine:
    url = settings.DATABASE_URL
    kwargs = {"echo": settings.SQL_ECHO}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # an in-memory database only lives as long as its single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_db(engine: Engine) -> None:
    """
    Create all tables that are defined via SQLModel subclasses.
    """
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready")


def get_db(request: Request):
    with Session(request.app.state.engine) as session:
        yield session
