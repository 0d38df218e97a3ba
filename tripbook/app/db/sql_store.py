"""SQL implementation of the storage protocol."""

from datetime import UTC, datetime

from sqlalchemy.orm import Session, sessionmaker

from tripbook.app.db.models import KeyValueRecord


class SqlStateStore:
    """SQL implementation of StateStore (one row per key)."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        """Get stored value."""
        with self._session_factory() as session:
            record = session.get(KeyValueRecord, key)
            return record.value if record is not None else None

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite stored value."""
        with self._session_factory() as session:
            session.merge(KeyValueRecord(key=key, value=value, updated_at=datetime.now(UTC)))
            session.commit()

    def delete(self, key: str) -> None:
        """Remove stored value."""
        with self._session_factory() as session:
            record = session.get(KeyValueRecord, key)
            if record is None:
                return
            session.delete(record)
            session.commit()
