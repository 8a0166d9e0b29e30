"""
Anonymous View Sessions with Redis (with in-memory fallback)

Anonymous viewers have no durable identity, so "already counted" is a
session-scoped marker keyed on video and client address. Markers expire
after ``settings.anonymous_view_ttl_seconds``; once expired, the same
client is counted again.

Falls back to in-memory storage if Redis is not configured or reachable.
"""

import logging
import time
from typing import Protocol

import redis.asyncio as redis

from vidshare.config import settings

logger = logging.getLogger(__name__)


def anonymous_view_key(video_id: str, client: str) -> str:
    return f"video:{video_id}:viewer:{client}"


class ViewSessionStore(Protocol):
    """Marker store for anonymous views."""

    async def get(self, key: str) -> bool:
        """Return True if ``key`` is currently recorded."""
        ...

    async def set(self, key: str) -> bool:
        """Record ``key`` if absent. Return True only if this call recorded it."""
        ...


class InMemoryViewSessionStore:
    """
    In-memory marker store.
    Note: Markers are lost on server restart and won't scale across instances.
    """

    def __init__(self, ttl_seconds: int | None = None, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.anonymous_view_ttl_seconds
        self._clock = clock
        self._expirations: dict[str, float] = {}

    def _cleanup_expired(self) -> None:
        now = self._clock()
        expired = [key for key, exp in self._expirations.items() if exp <= now]
        for key in expired:
            del self._expirations[key]

    async def connect(self) -> None:
        logger.info("Using in-memory view session storage (Redis not available)")

    async def disconnect(self) -> None:
        self._expirations.clear()

    async def get(self, key: str) -> bool:
        self._cleanup_expired()
        return key in self._expirations

    async def set(self, key: str) -> bool:
        # No await between check and write: atomic within the event loop
        self._cleanup_expired()
        if key in self._expirations:
            return False
        self._expirations[key] = self._clock() + self.ttl_seconds
        return True


class RedisViewSessionStore:
    """
    Marker store backed by Redis.

    ``set`` is a single ``SET key 1 NX EX ttl`` so two concurrent first
    views from the same client record exactly one marker.
    """

    def __init__(self, url: str, ttl_seconds: int | None = None):
        self.url = url
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.anonymous_view_ttl_seconds
        self._redis: redis.Redis | None = None

    async def connect(self) -> None:
        """Establish connection to Redis."""
        if self._redis is not None:
            return
        try:
            self._redis = redis.Redis.from_url(self.url, decode_responses=True)
            await self._redis.ping()
            logger.info("Successfully connected to Redis for view sessions")
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self._redis = None
            raise

    async def disconnect(self) -> None:
        if self._redis:
            await self._redis.aclose()
            self._redis = None
        logger.info("Disconnected from Redis")

    async def get(self, key: str) -> bool:
        if not self._redis:
            await self.connect()
        return bool(await self._redis.exists(key))

    async def set(self, key: str) -> bool:
        if not self._redis:
            await self.connect()
        created = await self._redis.set(key, "1", nx=True, ex=self.ttl_seconds)
        return bool(created)


# Global store instance (will be set on first access)
_view_session_store: RedisViewSessionStore | InMemoryViewSessionStore | None = None


async def get_view_session_store() -> ViewSessionStore:
    """
    Dependency to get the anonymous view session store.
    Uses Redis if configured and reachable, falls back to in-memory storage.
    """
    global _view_session_store

    if _view_session_store is not None:
        return _view_session_store

    if settings.redis_url:
        try:
            store = RedisViewSessionStore(settings.redis_url)
            await store.connect()
            _view_session_store = store
            logger.info("View session store using Redis")
            return _view_session_store
        except Exception as e:
            logger.warning(f"Redis not available, using in-memory view sessions: {e}")

    _view_session_store = InMemoryViewSessionStore()
    await _view_session_store.connect()
    return _view_session_store


async def close_view_session_store() -> None:
    global _view_session_store
    if _view_session_store is not None:
        await _view_session_store.disconnect()
        _view_session_store = None
