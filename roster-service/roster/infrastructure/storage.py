from typing import Callable, Optional

import redis
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..domain.errors import StorageError
from .models import KeyValueORM


class KeyValueStore:
    def get(self, key: str) -> bytes | None: ...
    def set(self, key: str, value: bytes) -> None: ...
    def clear(self) -> None: ...


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self): self._data: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def clear(self) -> None:
        self._data.clear()


class SqlKeyValueStore(KeyValueStore):
    """One row per key in ``kv_entries``; every call uses its own session."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> bytes | None:
        try:
            with self.session_factory() as db:
                row = db.get(KeyValueORM, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"read {key!r} failed: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        try:
            with self.session_factory() as db:
                db.merge(KeyValueORM(key=key, value=value))
                db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"write {key!r} failed: {e}") from e

    def clear(self) -> None:
        try:
            with self.session_factory() as db:
                db.query(KeyValueORM).delete()
                db.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"clear failed: {e}") from e


class RedisKeyValueStore(KeyValueStore):
    """Keys live under ``prefix`` so that ``clear`` only touches this service's data."""

    def __init__(self, client: redis.Redis, prefix: str = ""):
        self.client = client
        self.prefix = prefix

    def _k(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> bytes | None:
        try:
            return self.client.get(self._k(key))
        except RedisError as e:
            raise StorageError(f"read {key!r} failed: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        try:
            self.client.set(self._k(key), value)
        except RedisError as e:
            raise StorageError(f"write {key!r} failed: {e}") from e

    def clear(self) -> None:
        try:
            keys = self.client.keys(f"{self.prefix}*")
            if keys:
                self.client.delete(*keys)
        except RedisError as e:
            raise StorageError(f"clear failed: {e}") from e


_redis_client: Optional[redis.Redis] = None

def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True
        )
    return _redis_client


def build_store(backend: str | None = None) -> KeyValueStore:
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "redis":
        return RedisKeyValueStore(get_redis(), prefix=settings.REDIS_KEY_PREFIX)
    if backend == "sql":
        from .db import SessionLocal
        return SqlKeyValueStore(SessionLocal)
    raise ValueError(f"unknown storage backend {backend!r}")
