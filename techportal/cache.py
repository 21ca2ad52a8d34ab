"""
Snapshot caching for list views
Keeps the last successfully fetched list of each screen so it can be shown
when the upstream API is unavailable
"""
import json
import logging
import time
from threading import Lock
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urlencode

import redis

from . import config

logger = logging.getLogger(__name__)

# Well-known snapshot names, one per list screen
JOB_LIST = "joblist"
PARTS_REQUESTS = "partsrequests"
CAP_FAN_PRICING = "capfanpricing"

_redis_client: Optional[redis.Redis] = None


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client
    Supports both a REDIS_URL and individual host/port settings
    """
    global _redis_client

    if _redis_client is None:
        logger.info("🔄 Initializing Redis connection for snapshot cache...")

        if config.REDIS_URL:
            # Mask password in URL for logging
            if "@" in config.REDIS_URL:
                url_parts = config.REDIS_URL.split("@")
                protocol = url_parts[0].split(":")[0]
                masked_url = f"{protocol}:****@{url_parts[1]}"
            else:
                masked_url = "****"
            logger.info(f"📡 Using Redis URL connection: {masked_url}")

            client = redis.from_url(
                config.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=15,
                socket_timeout=30,
                retry_on_timeout=True,
                health_check_interval=30,
            )
        else:
            client = redis.Redis(
                host=config.REDIS_HOST,
                port=config.REDIS_PORT,
                password=config.REDIS_PASSWORD,
                db=config.REDIS_DB,
                ssl=config.REDIS_SSL,
                decode_responses=True,
                socket_connect_timeout=15,
                socket_timeout=30,
            )

        client.ping()
        logger.info("Redis connected successfully")
        _redis_client = client

    return _redis_client


def build_snapshot_key(screen: str, criteria: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build cache key for a screen's last-seen list.

    The upstream criteria are part of the key so that a list fetched for one
    user or filter is never served as the fallback for another.
    """
    params = sorted((k, str(v)) for k, v in (criteria or {}).items() if v is not None)
    if params:
        return f"snapshot:{screen}:{urlencode(params)}"
    return f"snapshot:{screen}"


class MemoryCache:
    """In-process snapshot cache with per-key TTL"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, tuple[float, str]] = {}
        self._lock = Lock()
        self._clock = clock

    def get(self, key: str) -> Optional[list[dict[str, Any]]]:
        """Get snapshot from cache"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug(f"❌ Cache MISS: {key}")
                return None
            expires_at, payload = entry
            if expires_at <= self._clock():
                del self._entries[key]
                logger.debug(f"⌛ Cache EXPIRED: {key}")
                return None
        logger.debug(f"✅ Cache HIT: {key}")
        return json.loads(payload)

    def set(self, key: str, rows: list[dict[str, Any]], ttl: int = config.SNAPSHOT_TTL) -> bool:
        """Store snapshot with TTL in seconds"""
        try:
            payload = json.dumps(rows, default=str)
        except (TypeError, ValueError) as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False
        with self._lock:
            self._prune()
            self._entries[key] = (self._clock() + ttl, payload)
        logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
        return True

    def delete(self, key: str) -> bool:
        """Delete snapshot from cache"""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def _prune(self) -> None:
        now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]
        if expired:
            logger.debug(f"⌛ Pruned {len(expired)} expired snapshot(s)")


class RedisCache:
    """Redis snapshot cache with JSON serialization"""

    def __init__(self, client: Optional[redis.Redis] = None):
        self.redis_client = client

    def _get_client(self) -> Optional[redis.Redis]:
        """Lazy load Redis client"""
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis cache unavailable: {e}")
                return None
        return self.redis_client

    def get(self, key: str) -> Optional[list[dict[str, Any]]]:
        """Get snapshot from cache"""
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"❌ Cache MISS: {key}")
            return None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, rows: list[dict[str, Any]], ttl: int = config.SNAPSHOT_TTL) -> bool:
        """Store snapshot with TTL in seconds"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(rows, default=str))
            logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
            return True
        except (redis.RedisError, TypeError, ValueError) as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete snapshot from cache"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(key)
            logger.debug(f"✅ Cache DELETE: {key}")
            return True
        except redis.RedisError as e:
            logger.error(f"❌ Cache delete error for {key}: {e}")
            return False


_cache: Optional[Any] = None


def get_cache():
    """Return the process-wide snapshot cache for the configured backend"""
    global _cache
    if _cache is None:
        if config.CACHE_BACKEND == "redis":
            _cache = RedisCache()
        else:
            _cache = MemoryCache()
        logger.info(f"📦 Snapshot cache backend: {type(_cache).__name__}")
    return _cache
