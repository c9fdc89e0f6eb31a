"""
URL store strategies using Strategy Pattern.

Allows switching between persistence backends without touching the services:
- SQLAlchemy: the authoritative store (SQLite, PostgreSQL, ...)
- In-memory: development and tests

Every backend must give the same two guarantees, because the services rely
on them instead of coordinating in-process:
- short_id uniqueness is enforced by the store itself, not by a pre-check
- click_count is incremented and read back in one atomic operation
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, Optional

from sqlalchemy import func, select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from shortlink_app.exceptions import DatabaseError, DuplicateKeyError, InvalidRecordError
from shortlink_app.models.records import ShortUrlRecord
from shortlink_app.models.short_url import ShortUrl
from shortlink_app.validators import validate_record_fields

logger = logging.getLogger(__name__)


class UrlStore(ABC):
    """
    Abstract base class for URL stores.

    Implementations must be safe to share between request threads.
    """

    @abstractmethod
    def find_by_short_id(self, short_id: str) -> Optional[ShortUrlRecord]:
        """
        Look up a record by short id. No side effects.

        Returns:
            The record, or None if the short id is unknown
        """
        pass

    @abstractmethod
    def insert_unique(self, record: ShortUrlRecord) -> ShortUrlRecord:
        """
        Persist a new record.

        Returns:
            The stored record with id populated

        Raises:
            DuplicateKeyError: short_id already taken (enforced by the store)
            InvalidRecordError: record violates field constraints
            DatabaseError: storage failure; nothing is written
        """
        pass

    @abstractmethod
    def increment_and_fetch(self, short_id: str) -> Optional[ShortUrlRecord]:
        """
        Atomically add 1 to click_count and return the post-increment record.

        Returns:
            The updated record, or None if the short id is unknown
        """
        pass

    @abstractmethod
    def find_analytics(self, short_id: str) -> Optional[ShortUrlRecord]:
        """Look up a record for analytics display. Never touches click_count."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored records"""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """True if the backend is reachable"""
        pass


# SQLSTATE unique_violation (PostgreSQL and most ANSI drivers)
UNIQUE_VIOLATION_SQLSTATE = "23505"
# SQLITE_CONSTRAINT_PRIMARYKEY, SQLITE_CONSTRAINT_UNIQUE
SQLITE_UNIQUE_ERRORCODES = frozenset({1555, 2067})


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    # psycopg2 exposes pgcode, psycopg 3 sqlstate
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE

    # sqlite3 on Python 3.11+
    sqlite_code = getattr(orig, "sqlite_errorcode", None)
    if sqlite_code is not None:
        return sqlite_code in SQLITE_UNIQUE_ERRORCODES

    # Drivers without codes: SQLite "UNIQUE constraint failed",
    # PostgreSQL "duplicate key value violates unique constraint"
    return "unique" in str(orig).lower()


class SQLAlchemyUrlStore(UrlStore):
    """
    SQLAlchemy implementation.

    A fresh Session is opened for each operation from the injected factory,
    so one store instance can serve every request thread.

    Increments are a single `UPDATE ... SET click_count = click_count + 1`
    statement. Where the dialect supports RETURNING the new row comes back
    from that same statement; otherwise it is re-read inside the same
    transaction while the row lock is still held.
    """

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize SQL store.

        Args:
            session_factory: sessionmaker bound to the application engine
        """
        self.session_factory = session_factory

    def _columns(self):
        return (
            ShortUrl.id,
            ShortUrl.original_url,
            ShortUrl.short_id,
            ShortUrl.click_count,
            ShortUrl.created_at,
        )

    def _select_by_short_id(self, session, short_id: str) -> Optional[ShortUrlRecord]:
        row = session.execute(
            select(*self._columns()).where(ShortUrl.short_id == short_id)
        ).one_or_none()
        return ShortUrlRecord.from_row(row) if row is not None else None

    def find_by_short_id(self, short_id: str) -> Optional[ShortUrlRecord]:
        try:
            with self.session_factory() as session:
                return self._select_by_short_id(session, short_id)
        except SQLAlchemyError as e:
            logger.error("Lookup failed for %s: %s", short_id, e)
            raise DatabaseError("Failed to retrieve URL from database") from e

    def insert_unique(self, record: ShortUrlRecord) -> ShortUrlRecord:
        validate_record_fields(record.original_url, record.short_id, record.click_count)

        row = ShortUrl(
            original_url=record.original_url,
            short_id=record.short_id,
            click_count=record.click_count,
            created_at=record.created_at,
        )

        with self.session_factory() as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if _is_unique_violation(e):
                    raise DuplicateKeyError(f"Short ID '{record.short_id}' already exists") from e
                raise InvalidRecordError("Record violates storage constraints") from e
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Insert failed for %s: %s", record.short_id, e)
                raise DatabaseError("Failed to save URL to database") from e

            return ShortUrlRecord.from_row(row)

    def increment_and_fetch(self, short_id: str) -> Optional[ShortUrlRecord]:
        stmt = (
            update(ShortUrl)
            .where(ShortUrl.short_id == short_id)
            .values(click_count=ShortUrl.click_count + 1)
            .execution_options(synchronize_session=False)
        )

        try:
            with self.session_factory() as session:
                if session.get_bind().dialect.update_returning:
                    row = session.execute(stmt.returning(*self._columns())).one_or_none()
                    session.commit()
                    return ShortUrlRecord.from_row(row) if row is not None else None

                result = session.execute(stmt)
                if result.rowcount == 0:
                    session.rollback()
                    return None
                record = self._select_by_short_id(session, short_id)
                session.commit()
                return record
        except SQLAlchemyError as e:
            logger.error("Increment failed for %s: %s", short_id, e)
            raise DatabaseError("Failed to retrieve URL from database") from e

    def find_analytics(self, short_id: str) -> Optional[ShortUrlRecord]:
        try:
            with self.session_factory() as session:
                return self._select_by_short_id(session, short_id)
        except SQLAlchemyError as e:
            logger.error("Analytics lookup failed for %s: %s", short_id, e)
            raise DatabaseError("Failed to retrieve analytics from database") from e

    def count(self) -> int:
        try:
            with self.session_factory() as session:
                return session.execute(select(func.count()).select_from(ShortUrl)).scalar_one()
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to count URLs") from e

    def health_check(self) -> bool:
        try:
            with self.session_factory() as session:
                session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database health check failed: %s", e)
            return False


class InMemoryUrlStore(UrlStore):
    """
    In-memory store implementation using a Python dict.

    Pros:
    - No external dependencies
    - Good for development and testing

    Cons:
    - Not persistent (lost on restart)
    - Not shared between processes

    A single lock guards the dict, which gives both the uniqueness check on
    insert and the read-modify-write on increment the same atomicity a
    database constraint and UPDATE statement provide.
    """

    def __init__(self):
        """Initialize in-memory store"""
        self._records: Dict[str, ShortUrlRecord] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    def find_by_short_id(self, short_id: str) -> Optional[ShortUrlRecord]:
        with self._lock:
            return self._records.get(short_id)

    def insert_unique(self, record: ShortUrlRecord) -> ShortUrlRecord:
        validate_record_fields(record.original_url, record.short_id, record.click_count)

        with self._lock:
            if record.short_id in self._records:
                raise DuplicateKeyError(f"Short ID '{record.short_id}' already exists")
            stored = replace(record, id=next(self._ids))
            self._records[stored.short_id] = stored
            return stored

    def increment_and_fetch(self, short_id: str) -> Optional[ShortUrlRecord]:
        with self._lock:
            current = self._records.get(short_id)
            if current is None:
                return None
            updated = replace(current, click_count=current.click_count + 1)
            self._records[short_id] = updated
            return updated

    def find_analytics(self, short_id: str) -> Optional[ShortUrlRecord]:
        return self.find_by_short_id(short_id)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def health_check(self) -> bool:
        return True
