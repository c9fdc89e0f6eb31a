"""
Factory for creating URL store instances.
"""

import logging
from enum import Enum
from typing import Optional

from sqlalchemy.orm import sessionmaker

from .strategies import UrlStore, SQLAlchemyUrlStore, InMemoryUrlStore

logger = logging.getLogger(__name__)


class StoreBackend(Enum):
    """Available store backends"""
    SQL = "sql"
    MEMORY = "memory"


class UrlStoreFactory:
    """
    Simple factory for creating URL store instances.

    Builds a new store on every call; the app factory calls it once at
    startup and injects the result into the services.
    """

    @classmethod
    def create(
        cls,
        backend: StoreBackend,
        session_factory: Optional[sessionmaker] = None
    ) -> UrlStore:
        """
        Create a store for the given backend.

        Args:
            backend: Type of store backend (from enum)
            session_factory: Required for the SQL backend

        Returns:
            UrlStore instance
        """
        if backend == StoreBackend.SQL:
            if session_factory is None:
                raise ValueError("SQL store backend requires a session factory")
            store = SQLAlchemyUrlStore(session_factory)

        elif backend == StoreBackend.MEMORY:
            store = InMemoryUrlStore()

        else:
            raise ValueError(f"Unknown store backend: {backend}")

        logger.info("URL store initialized: %s", backend.value)
        return store
