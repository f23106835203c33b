from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import redis  # type: ignore[import-untyped]

from pawpong.services._shared.ports import OAuthStateStore


@dataclass(slots=True)
class RedisOAuthStateStore(OAuthStateStore):
    """
    Redis-backed one-time OAuth ``state`` storage.

    Each state is a JSON string under ``oauth:state:{state}`` with a TTL.
    ``consume`` reads and deletes it in one ``MULTI`` block, so two callbacks
    racing on the same state cannot both redeem it.

    :param r: A Redis client (already connected).
    :param prefix: Key namespace.
    """

    r: redis.Redis
    prefix: str = "oauth:state:"

    def _k(self, state: str) -> str:
        return f"{self.prefix}{state}"

    def save(self, state: str, data: dict[str, Any], ttl_seconds: int = 600) -> None:
        self.r.set(self._k(state), json.dumps(data), ex=max(1, int(ttl_seconds)))

    def consume(self, state: str) -> dict[str, Any] | None:
        key = self._k(state)
        with self.r.pipeline(transaction=True) as p:
            p.get(key)
            p.delete(key)
            raw, _ = p.execute()
        if raw is None:
            return None
        if isinstance(raw, bytes | bytearray):
            raw = raw.decode()
        return json.loads(raw)
