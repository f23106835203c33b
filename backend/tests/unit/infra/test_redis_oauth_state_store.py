# tests/unit/infra/test_redis_oauth_state_store.py
"""
Unit tests for RedisOAuthStateStore using fakeredis.

The store backs the ``state`` round trip of the OAuth redirect; a state must
be redeemable exactly once and only until its TTL runs out.
"""

from __future__ import annotations

import fakeredis
import pytest
from pawpong.infra.redis.redis_oauth_state_store import RedisOAuthStateStore
from pawpong.services._shared.ports import InMemoryOAuthStateStore


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def store(fake_redis):
    return RedisOAuthStateStore(r=fake_redis)


def test_save_then_consume_returns_payload(store):
    store.save("abc", {"provider": "naver"}, ttl_seconds=600)
    assert store.consume("abc") == {"provider": "naver"}


def test_consume_is_one_shot(store):
    """A replayed callback finds nothing."""
    store.save("abc", {"provider": "google"})
    assert store.consume("abc") is not None
    assert store.consume("abc") is None


def test_unknown_state_is_none(store):
    assert store.consume("never-saved") is None


def test_state_key_carries_ttl(store, fake_redis):
    store.save("ttl", {"provider": "kakao"}, ttl_seconds=600)
    ttl = fake_redis.ttl("oauth:state:ttl")
    assert 0 < ttl <= 600


def test_custom_prefix(fake_redis):
    store = RedisOAuthStateStore(r=fake_redis, prefix="test:")
    store.save("s1", {"provider": "google"})
    assert fake_redis.exists("test:s1") == 1


def test_in_memory_store_expires():
    """The process-local fallback honors the TTL as well."""
    store = InMemoryOAuthStateStore()
    store.save("s", {"provider": "naver"}, ttl_seconds=0)
    assert store.consume("s") is None
