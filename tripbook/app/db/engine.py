"""Database engine and session factory."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from tripbook.app.config import Settings
from tripbook.app.db.models import Base


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create SQLAlchemy engine from settings.

    Raises:
        ValueError: If storage_url is unset or empty.
    """
    if not settings.storage_url:
        raise ValueError(
            "TRIPBOOK_STORAGE_URL must be set to a valid connection string "
            "(e.g. sqlite:///tripbook.db)."
        )

    return create_engine(settings.storage_url, pool_pre_ping=True, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_storage(engine: Engine) -> None:
    """Create storage tables if they do not exist."""
    Base.metadata.create_all(engine)
