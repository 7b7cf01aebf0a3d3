"""
Redis caching for resolved schedule grids.

A grid is rebuilt from storage on every miss, so the cache fails open: an
unreachable or misbehaving Redis only costs a rebuild, never a request.
Keys are ``grid:{weekday}:{base_only}:{include_inactive}``.

Each weekday also has a version counter (``gridver:{weekday}``) that every
invalidation bumps. A read notes the version before loading storage and only
stores its grid if the version is unchanged, so a write that lands during the
read cannot leave a stale grid cached until the TTL runs out.
"""
import json
import logging
from typing import Optional

import redis

from .config import (
    CACHE_ENABLED,
    GRID_CACHE_TTL,
    REDIS_DB,
    REDIS_HOST,
    REDIS_PASSWORD,
    REDIS_PORT,
    REDIS_SSL,
    REDIS_URL,
)
from .shared.weekdays import WEEKDAYS

logger = logging.getLogger(__name__)

GRID_KEY_PREFIX = "grid"
VERSION_KEY_PREFIX = "gridver"


def _masked(url: str) -> str:
    if "@" not in url:
        return "****"
    credentials, host = url.split("@", 1)
    return f"{credentials.split(':')[0]}:****@{host}"


def get_redis_client() -> redis.Redis:
    """
    Connect to Redis and ping it.
    REDIS_URL (managed Redis) takes precedence over the host/port settings.
    """
    options = {
        "decode_responses": True,
        "socket_connect_timeout": 5,
        "socket_timeout": 5,
        "retry_on_timeout": True,
        "health_check_interval": 30,
    }
    if REDIS_URL:
        logger.info(f"📡 Using Redis URL connection: {_masked(REDIS_URL)}")
        client = redis.from_url(REDIS_URL, **options)
    else:
        logger.info(f"📡 Using Redis at {REDIS_HOST}:{REDIS_PORT} (db {REDIS_DB}, ssl={REDIS_SSL})")
        client = redis.Redis(
            host=REDIS_HOST, port=REDIS_PORT, password=REDIS_PASSWORD, db=REDIS_DB, ssl=REDIS_SSL, **options
        )
    client.ping()
    logger.info("Redis connected successfully")
    return client


class GridCache:
    """Resolved grids stored as JSON, one entry per weekday and query flags"""

    def __init__(self, enabled: bool = CACHE_ENABLED, ttl: int = GRID_CACHE_TTL):
        self.enabled = enabled
        self.ttl = ttl
        self.redis_client = None

    def _client(self):
        if not self.enabled:
            return None
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except (redis.RedisError, OSError) as e:
                logger.warning(f"⚠️ Grid cache unavailable, serving from storage: {e}")
                return None
        return self.redis_client

    @staticmethod
    def key(weekday: str, base_only: bool = False, include_inactive: bool = False) -> str:
        return f"{GRID_KEY_PREFIX}:{weekday}:{int(base_only)}:{int(include_inactive)}"

    def load(self, weekday: str, base_only: bool = False, include_inactive: bool = False) -> Optional[dict]:
        client = self._client()
        if client is None:
            return None

        key = self.key(weekday, base_only, include_inactive)
        try:
            payload = client.get(key)
            grid = json.loads(payload) if payload else None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"❌ Grid cache read failed for {key}: {e}")
            return None

        logger.debug(f"{'✅ Grid cache hit' if grid is not None else '❌ Grid cache miss'}: {key}")
        return grid

    def version(self, weekday: str) -> Optional[str]:
        """Current invalidation counter of a weekday; None when Redis is not in use"""
        client = self._client()
        if client is None:
            return None
        try:
            return str(client.get(f"{VERSION_KEY_PREFIX}:{weekday}") or 0)
        except redis.RedisError as e:
            logger.error(f"❌ Grid cache version read failed for {weekday}: {e}")
            return None

    def bump(self, weekday: str) -> None:
        client = self._client()
        if client is None:
            return
        try:
            client.incr(f"{VERSION_KEY_PREFIX}:{weekday}")
        except redis.RedisError as e:
            logger.error(f"❌ Grid cache version bump failed for {weekday}: {e}")

    def store(
        self,
        weekday: str,
        grid: dict,
        base_only: bool = False,
        include_inactive: bool = False,
        version: Optional[str] = None,
    ) -> bool:
        """Cache a grid; skipped when version is given and a write has bumped it since"""
        client = self._client()
        if client is None:
            return False

        key = self.key(weekday, base_only, include_inactive)
        if version is not None and self.version(weekday) != version:
            logger.debug(f"⏭️ Grid for {weekday} changed while resolving, not caching {key}")
            return False
        try:
            client.setex(key, self.ttl, json.dumps(grid))
        except (redis.RedisError, TypeError) as e:
            logger.error(f"❌ Grid cache write failed for {key}: {e}")
            return False
        logger.debug(f"✅ Grid cached: {key} (TTL: {self.ttl}s)")
        return True

    def purge(self, pattern: str) -> int:
        """Drop every key matching pattern; returns how many were removed"""
        client = self._client()
        if client is None:
            return 0

        try:
            keys = client.keys(pattern)
            removed = client.delete(*keys) if keys else 0
        except redis.RedisError as e:
            logger.error(f"❌ Grid cache purge failed for {pattern}: {e}")
            return 0
        if removed:
            logger.debug(f"🧹 Grid cache purged {pattern} ({removed} keys)")
        return removed


# Global cache instance
grid_cache = GridCache()


def build_grid_key(weekday: str, base_only: bool = False, include_inactive: bool = False) -> str:
    return GridCache.key(weekday, base_only, include_inactive)


def get_grid_cached(weekday: str, base_only: bool = False, include_inactive: bool = False) -> Optional[dict]:
    return grid_cache.load(weekday, base_only, include_inactive)


def get_grid_version(weekday: str) -> Optional[str]:
    return grid_cache.version(weekday)


def set_grid_cached(
    weekday: str,
    grid: dict,
    base_only: bool = False,
    include_inactive: bool = False,
    version: Optional[str] = None,
) -> bool:
    return grid_cache.store(weekday, grid, base_only, include_inactive, version)


def invalidate_grid_cache(weekday: str) -> int:
    """Invalidate every cached variant of one weekday's grid (an assignment changed)"""
    grid_cache.bump(weekday)
    return grid_cache.purge(f"{GRID_KEY_PREFIX}:{weekday}:*")


def invalidate_all_grids() -> int:
    """Invalidate all cached grids (catalog, roster or time grid changed)"""
    for weekday in WEEKDAYS:
        grid_cache.bump(weekday)
    return grid_cache.purge(f"{GRID_KEY_PREFIX}:*")
