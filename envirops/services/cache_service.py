"""
Redis cache for dashboard aggregates.

Any write to clients, equipment, quotations or orders makes the cached
dashboard stale. Instead of scanning and deleting keys on every write, each
module keeps a generation counter that is part of every key; invalidating a
module bumps the counter and older entries are never read again (they
expire through their TTL).

When Redis is disabled or unreachable every lookup is a miss and writes are
no-ops, so callers always fall back to computing the value.
"""

import logging
import json
from typing import Any, Optional, Callable, Dict
from datetime import datetime, date
from decimal import Decimal

import redis
from redis.exceptions import RedisError, ConnectionError, TimeoutError
from flask import Flask, current_app

logger = logging.getLogger(__name__)

DASHBOARD_MODULE = 'dashboard'


class CacheService:
    """
    Redis-based caching service.

    Keys pattern: {prefix}:{module}:g{generation}:{key}
    Generation counter: {prefix}:{module}:generation
    """

    def __init__(self, app: Optional[Flask] = None):
        self.client: Optional[redis.Redis] = None
        self._enabled: bool = False
        self._prefix: str = ""

        if app:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize Redis client from Flask app config."""
        self._enabled = app.config.get('CACHE_ENABLED', True)
        self._prefix = app.config.get('CACHE_KEY_PREFIX', 'envirops')
        redis_url = app.config.get('REDIS_URL', 'redis://redis:6379/0')

        if not self._enabled:
            logger.info("[CACHE] Cache is DISABLED via config")
            return

        try:
            self.client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=3,
                socket_timeout=3,
                retry_on_timeout=True,
                health_check_interval=30
            )
            self.client.ping()
            logger.info(f"[CACHE] Redis connected: {redis_url}")
        except (ConnectionError, TimeoutError, RedisError) as e:
            logger.warning(f"[CACHE] Redis connection failed: {e}. Cache DISABLED.")
            self._enabled = False
            self.client = None

    def is_available(self) -> bool:
        if not self._enabled or not self.client:
            return False
        try:
            self.client.ping()
            return True
        except (ConnectionError, RedisError):
            return False

    def _generation_key(self, module: str) -> str:
        return f"{self._prefix}:{module}:generation"

    def _build_key(self, module: str, key: str, generation: int) -> str:
        return f"{self._prefix}:{module}:g{generation}:{key}"

    def generation(self, module: str) -> int:
        """Current generation of ``module`` (0 before the first invalidation)."""
        if not self.is_available():
            return 0
        try:
            return int(self.client.get(self._generation_key(module)) or 0)
        except (RedisError, ValueError) as e:
            logger.warning(f"[CACHE] Generation read error: {e}")
            return 0

    def _serialize(self, value: Any) -> str:
        """Serialize to JSON keeping Decimal precision."""
        def default_handler(obj: Any) -> Any:
            if isinstance(obj, (datetime, date)):
                return obj.isoformat()
            if isinstance(obj, Decimal):
                return {"__decimal__": str(obj)}
            raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
        return json.dumps(value, default=default_handler)

    def _deserialize(self, value: str) -> Any:
        def object_hook(dct: Dict[str, Any]) -> Any:
            if "__decimal__" in dct:
                return Decimal(dct["__decimal__"])
            return dct
        return json.loads(value, object_hook=object_hook)

    def get(self, module: str, key: str, generation: Optional[int] = None) -> Optional[Any]:
        if not self.is_available():
            return None
        if generation is None:
            generation = self.generation(module)
        try:
            value = self.client.get(self._build_key(module, key, generation))
            if value is None:
                return None
            return self._deserialize(value)
        except (RedisError, json.JSONDecodeError) as e:
            logger.warning(f"[CACHE] Get error: {e}")
            return None

    def set(self, module: str, key: str, value: Any, ttl: Optional[int] = None,
            generation: Optional[int] = None) -> bool:
        if not self.is_available():
            return False
        if generation is None:
            generation = self.generation(module)
        try:
            if ttl is None:
                ttl = current_app.config.get('CACHE_DEFAULT_TTL', 60)
            self.client.setex(self._build_key(module, key, generation), ttl, self._serialize(value))
            return True
        except (RedisError, TypeError) as e:
            logger.warning(f"[CACHE] Set error: {e}")
            return False

    def memoize(self, module: str, key: str, loader_fn: Callable[[], Any], ttl: Optional[int] = None) -> Any:
        """
        Cache-aside lookup.

        The generation is read once before loading: a value computed while a
        write invalidated the module is stored under the old generation and
        never served.
        """
        generation = self.generation(module)
        cached = self.get(module, key, generation)
        if cached is not None:
            return cached
        value = loader_fn()
        self.set(module, key, value, ttl, generation)
        return value

    def invalidate_module(self, module: str) -> int:
        """Bump the module generation; returns the new generation (0 without Redis)."""
        if not self.is_available():
            return 0
        try:
            generation = self.client.incr(self._generation_key(module))
            logger.debug(f"[CACHE] INVALIDATE: {module} -> generation {generation}")
            return generation
        except RedisError as e:
            logger.warning(f"[CACHE] Invalidate error: {e}")
            return 0


_cache_service: Optional[CacheService] = None


def init_cache(app: Flask) -> None:
    """Initialize cache service singleton."""
    global _cache_service
    _cache_service = CacheService(app)
    app.extensions['cache'] = _cache_service


def get_cache() -> CacheService:
    if _cache_service is None:
        raise RuntimeError("Cache not initialized.")
    return _cache_service


def dashboard_stats_key(start: Optional[date], end: Optional[date], today: date) -> str:
    """Key of the dashboard stats for a period; ``today`` moves the active-client window."""
    return f"stats:{start or '-'}:{end or '-'}:{today.isoformat()}"


def invalidate_dashboard() -> None:
    """Drop cached dashboard aggregates after a write; no-op without a cache."""
    if _cache_service is not None:
        _cache_service.invalidate_module(DASHBOARD_MODULE)
