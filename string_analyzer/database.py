import logging
from typing import Any, Dict, Iterator, cast

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from string_analyzer.config import get_settings

logger = logging.getLogger("string_analyzer.db")

_settings = get_settings()


class Base(DeclarativeBase):
    pass


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def _make_engine(url: str) -> Engine:
    engine_kwargs: Dict[str, Any] = {"future": True, "pool_pre_ping": True}
    if make_url(url).get_backend_name() == "sqlite":
        # Route handlers run in a threadpool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            # One shared connection, otherwise each thread gets its own empty database
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs.pop("pool_pre_ping")
    return create_engine(url, **engine_kwargs)


try:
    engine: Engine = _make_engine(_settings.database_url)
except Exception as e:
    logger.critical("Failed to initialize database engine: %s", e)
    raise RuntimeError("Database engine initialization failed") from e

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_database_dsn(hide_password: bool = True) -> str:
    """Return the configured DB DSN string."""
    return cast(str, engine.url.render_as_string(hide_password=hide_password))


def init_db() -> None:
    """Create tables that do not exist yet."""
    from string_analyzer import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized: %s", get_database_dsn())
    except Exception as e:
        logger.critical("Database initialization failed: %s", e)
        raise RuntimeError("Failed to initialize database") from e


def shutdown_db() -> None:
    """Dispose the engine's connection pool."""
    engine.dispose()
    logger.info("Database connection pool closed.")
