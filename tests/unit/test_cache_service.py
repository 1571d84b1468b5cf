"""
Unit tests for the dashboard cache service.
"""
from datetime import date
from decimal import Decimal

from flask import Flask

from envirops.services.cache_service import CacheService, dashboard_stats_key


class InMemoryRedis:
    """Minimal stand-in for the redis commands the cache issues."""

    def __init__(self):
        self.data = {}

    def ping(self):
        return True

    def get(self, key):
        return self.data.get(key)

    def setex(self, key, ttl, value):
        self.data[key] = value

    def incr(self, key):
        self.data[key] = str(int(self.data.get(key, 0)) + 1)
        return int(self.data[key])


def _app(**config):
    app = Flask(__name__)
    app.config.update(CACHE_ENABLED=False, CACHE_KEY_PREFIX='test', CACHE_DEFAULT_TTL=60, **config)
    return app


def _connected_cache(app):
    cache = CacheService(app)
    cache._enabled = True
    cache.client = InMemoryRedis()
    return cache


class TestDisabledCache:

    def test_always_misses(self):
        cache = CacheService(_app())

        assert cache.is_available() is False
        assert cache.set('dashboard', 'k', {'a': 1}) is False
        assert cache.get('dashboard', 'k') is None
        assert cache.invalidate_module('dashboard') == 0

    def test_memoize_calls_loader_every_time(self):
        cache = CacheService(_app())
        calls = []

        def loader():
            calls.append(1)
            return {'total': 1}

        assert cache.memoize('dashboard', 'stats', loader) == {'total': 1}
        assert cache.memoize('dashboard', 'stats', loader) == {'total': 1}
        assert len(calls) == 2


class TestGenerations:

    def test_memoize_serves_cached_value(self):
        app = _app()
        cache = _connected_cache(app)
        calls = []

        def loader():
            calls.append(1)
            return {'total_revenue': Decimal('708.00')}

        with app.app_context():
            cache.memoize('dashboard', 'stats', loader)
            value = cache.memoize('dashboard', 'stats', loader)

        assert value == {'total_revenue': Decimal('708.00')}
        assert len(calls) == 1
        assert 'test:dashboard:g0:stats' in cache.client.data

    def test_invalidation_bumps_generation(self):
        app = _app()
        cache = _connected_cache(app)
        results = iter([{'n': 1}, {'n': 2}])

        with app.app_context():
            assert cache.memoize('dashboard', 'stats', lambda: next(results)) == {'n': 1}
            assert cache.invalidate_module('dashboard') == 1
            assert cache.memoize('dashboard', 'stats', lambda: next(results)) == {'n': 2}

        assert cache.generation('dashboard') == 1

    def test_value_loaded_during_invalidation_is_not_served(self):
        app = _app()
        cache = _connected_cache(app)

        def loader():
            cache.invalidate_module('dashboard')
            return {'stale': True}

        with app.app_context():
            cache.memoize('dashboard', 'stats', loader)

        assert cache.get('dashboard', 'stats') is None


def test_dashboard_key_includes_period_and_day():
    assert dashboard_stats_key(None, None, date(2024, 5, 2)) == 'stats:-:-:2024-05-02'
    assert dashboard_stats_key(date(2024, 1, 1), date(2024, 1, 31), date(2024, 5, 2)) == \
        'stats:2024-01-01:2024-01-31:2024-05-02'


def test_serialization_keeps_decimals():
    cache = CacheService(_app())

    raw = cache._serialize({'total': Decimal('708.00')})

    assert cache._deserialize(raw) == {'total': Decimal('708.00')}
