"""Tests for settings loading and client construction."""

import logging

import httpx
import pytest

from weedclient.caching.map_cache import MapLookupCache
from weedclient.caching.time_based_cache import TimeBasedLookupCache
from weedclient.client.factory import create_client, create_lookup_cache
from weedclient.common.config import Settings, load_yaml_config
from weedclient.common.logging_config import setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "WEEDFS_MASTER_URL",
        "WEEDFS_LOOKUP_CACHE",
        "WEEDFS_LOOKUP_CACHE_TTL",
        "WEEDFS_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.MASTER_URL == "http://localhost:9333"
    assert settings.LOOKUP_CACHE == "ttl"
    assert settings.LOOKUP_CACHE_TTL == 60


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WEEDFS_MASTER_URL", "http://weed-master:9333")
    monkeypatch.setenv("WEEDFS_LOOKUP_CACHE", "map")
    monkeypatch.setenv("WEEDFS_HTTP_TIMEOUT", "5")

    settings = Settings(_env_file=None)

    assert settings.MASTER_URL == "http://weed-master:9333"
    assert settings.LOOKUP_CACHE == "map"
    assert settings.HTTP_TIMEOUT == 5.0


def test_yaml_config(tmp_path):
    config_file = tmp_path / "weedfs.yaml"
    config_file.write_text(
        "master_url: http://yaml-master:9333\nlookup_cache: none\nlookup_cache_ttl: 15\n"
    )

    assert load_yaml_config(str(config_file))["lookup_cache_ttl"] == 15

    settings = Settings.from_yaml(str(config_file))
    assert settings.MASTER_URL == "http://yaml-master:9333"
    assert settings.LOOKUP_CACHE == "none"
    assert settings.LOOKUP_CACHE_TTL == 15


def test_unknown_cache_kind_in_settings():
    with pytest.raises(ValueError):
        Settings(_env_file=None, LOOKUP_CACHE="redis")


def test_create_lookup_cache():
    assert create_lookup_cache("none") is None
    assert isinstance(create_lookup_cache("map"), MapLookupCache)

    ttl_cache = create_lookup_cache("ttl", ttl_seconds=15)
    assert isinstance(ttl_cache, TimeBasedLookupCache)
    assert ttl_cache.ttl_seconds == 15

    with pytest.raises(ValueError):
        create_lookup_cache("redis")


def test_create_client_owns_its_transport():
    settings = Settings(_env_file=None, LOOKUP_CACHE="map", HTTP_TIMEOUT=3.0)

    with create_client(settings) as client:
        assert client.master_url == "http://localhost:9333"
        assert isinstance(client.lookup_cache, MapLookupCache)
        assert client.http_client.timeout.read == 3.0

    assert client.http_client.is_closed


def test_create_client_with_shared_transport():
    settings = Settings(_env_file=None, LOOKUP_CACHE="none")
    with httpx.Client() as http_client:
        client = create_client(settings, http_client)
        client.close()

        assert client.lookup_cache is None
        assert client.http_client is http_client
        assert not http_client.is_closed


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "weedclient.log"
    root = logging.getLogger()
    handlers = list(root.handlers)
    try:
        setup_logging(logging.DEBUG, log_file=str(log_file))
        logging.getLogger("weedclient.test").warning("hello from the test")
    finally:
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
                root.removeHandler(handler)

    assert "hello from the test" in log_file.read_text()


def test_sub_second_cache_window(monkeypatch):
    monkeypatch.setenv("WEEDFS_LOOKUP_CACHE_TTL", "0.5")
    settings = Settings(_env_file=None)

    assert settings.LOOKUP_CACHE_TTL == 0.5
    with create_client(settings) as client:
        assert client.lookup_cache.ttl_seconds == 0.5
