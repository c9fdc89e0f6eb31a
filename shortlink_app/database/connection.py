"""
Database engine and session setup.

The engine and session factory are built once at startup and handed to the
store. Sessions are opened per store operation, never shared across threads.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections may be used from the request thread pool."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create tables (and their indexes) if they don't exist."""
    # Import models so they're registered with Base
    from shortlink_app.models import ShortUrl  # noqa: F401

    Base.metadata.create_all(bind=engine)
