"""
URL store module.

Implements the Strategy Pattern for pluggable persistence of short URL records.
"""

from .strategies import UrlStore, SQLAlchemyUrlStore, InMemoryUrlStore
from .factory import UrlStoreFactory, StoreBackend

__all__ = [
    "UrlStore",
    "SQLAlchemyUrlStore",
    "InMemoryUrlStore",
    "UrlStoreFactory",
    "StoreBackend",
]
