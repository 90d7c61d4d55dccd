from __future__ import annotations

import logging

import pytest

from cacheaside import (
    BackendUnavailableError,
    CacheBackend,
    CacheClient,
    CacheSettings,
    LocalAdapter,
    MemoryStore,
    RemoteAdapter,
    create_cache_client_from_env,
)


def test_client_hands_out_requests(fake_redis):
    client = CacheClient(fake_redis, MemoryStore(cleanup_interval_s=0))

    assert client.local().backend is CacheBackend.LOCAL
    assert client.remote().backend is CacheBackend.REMOTE
    assert client.request("memory").backend is CacheBackend.LOCAL
    assert client.request(" Redis ").backend is CacheBackend.REMOTE
    with pytest.raises(ValueError):
        client.request("memcached")


def test_enable_debug_sets_package_logger_level():
    client = CacheClient().enable_debug()
    assert isinstance(client, CacheClient)
    assert client.logger.level == logging.DEBUG
    assert logging.getLogger("cacheaside.request").getEffectiveLevel() == logging.DEBUG


def test_adapter_resolution(fake_redis):
    client = CacheClient(settings=CacheSettings(cleanup_interval_s=0))
    assert isinstance(client.adapter(CacheBackend.LOCAL), LocalAdapter)
    with pytest.raises(BackendUnavailableError):
        client.adapter(CacheBackend.REMOTE)

    client = CacheClient(fake_redis, settings=CacheSettings(key_prefix="svc"))
    adapter = client.adapter(CacheBackend.REMOTE)
    assert isinstance(adapter, RemoteAdapter)
    adapter.set("k", 1, 0)
    assert "svc:k" in fake_redis.rows


def test_close_only_releases_owned_resources(fake_redis):
    store = MemoryStore(cleanup_interval_s=0)
    CacheClient(fake_redis, store).close()
    assert fake_redis.closed is False
    assert store.closed is False

    CacheClient(fake_redis, owns_remote=True).close()
    assert fake_redis.closed is True


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("CACHEASIDE_DEFAULT_TTL_S", "120")
    monkeypatch.setenv("CACHEASIDE_CLEANUP_INTERVAL_S", "30")
    monkeypatch.setenv("CACHEASIDE_KEY_PREFIX", "app")
    monkeypatch.setenv("CACHEASIDE_SINGLE_FLIGHT", "true")
    monkeypatch.setenv("CACHEASIDE_LOG_LEVEL", "debug")

    settings = CacheSettings.from_env()
    assert settings == CacheSettings(
        default_ttl_s=120.0,
        cleanup_interval_s=30.0,
        key_prefix="app",
        single_flight=True,
        log_level="debug",
    )


def test_settings_defaults(monkeypatch):
    for name in (
        "CACHEASIDE_DEFAULT_TTL_S",
        "CACHEASIDE_CLEANUP_INTERVAL_S",
        "CACHEASIDE_KEY_PREFIX",
        "CACHEASIDE_SINGLE_FLIGHT",
        "CACHEASIDE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    assert CacheSettings.from_env() == CacheSettings()


def test_factory_without_redis_settings(monkeypatch):
    for name in ("CACHEASIDE_REDIS_URL", "CACHEASIDE_REDIS_HOST", "CACHEASIDE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CACHEASIDE_SINGLE_FLIGHT", "1")

    client = create_cache_client_from_env()
    assert client.has_remote is False
    assert client.coalescer is not None


def test_factory_uses_given_redis_client(monkeypatch, fake_redis):
    monkeypatch.setenv("CACHEASIDE_LOG_LEVEL", "warning")
    store = MemoryStore(cleanup_interval_s=0)

    client = create_cache_client_from_env(redis_client=fake_redis, local_store=store)
    assert client.has_remote is True
    assert client.local_store is store
    assert logging.getLogger("cacheaside").level == logging.WARNING

    client.close()
    assert fake_redis.closed is False


def test_factory_builds_redis_client_from_host(monkeypatch):
    redis = pytest.importorskip("redis")
    built = []

    def fake_from_url(url, **kwargs):
        built.append(url)
        return object()

    monkeypatch.delenv("CACHEASIDE_REDIS_URL", raising=False)
    monkeypatch.setenv("CACHEASIDE_REDIS_HOST", "cache.internal")
    monkeypatch.setenv("CACHEASIDE_REDIS_PORT", "6380")
    monkeypatch.setenv("CACHEASIDE_REDIS_PASSWORD", "s3cret")
    monkeypatch.setattr(redis.Redis, "from_url", staticmethod(fake_from_url))

    client = create_cache_client_from_env()
    assert built == ["redis://:s3cret@cache.internal:6380/0"]
    assert client.has_remote is True
