"""Client Pool - Reuse of HTTP Transport Handles.

Creating an ``httpx.Client`` sets up a connection pool; doing that per request
throws the pool away. Handles are cached by (base URL, credential digest) so
that every caller talking to the same endpoint with the same key shares one.

Cache Key:
    (effective base URL, SHA-256 hex digest of the API key)
    The raw key never appears in the key, in logs, or in ``keys()``.

Concurrency:
    Double-checked get-or-create under a lock: racing callers for the same
    pair converge on a single handle.
"""

from __future__ import annotations

import hashlib
import logging
import threading

import httpx
from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..config import Settings

logger = logging.getLogger(__name__)

ClientKey = tuple[str, str]


class TransportConfig(BaseModel):
    """Timeouts and pool limits applied to every handle."""

    timeout: float = 600
    connect_timeout: float = 5
    max_connections: int = 1000
    max_keepalive_connections: int = 100
    override_base_url: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> TransportConfig:
        return cls(
            timeout=settings.http_timeout,
            connect_timeout=settings.http_connect_timeout,
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
            override_base_url=settings.override_base_url,
        )


def hash_credential(api_key: str) -> str:
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()


class ClientPool(BaseModel):
    """HTTP Transport Handle Pool.

    Attributes:
        config: Transport settings for new handles
        _clients: Private infrastructure dict storing live handles
        _lock: Serializes handle creation

    Example:
        >>> pool = ClientPool(config=TransportConfig())
        >>> first = pool.get_or_create("https://api.openai.com/v1", key)
        >>> second = pool.get_or_create("https://api.openai.com/v1", key)
        >>> assert first is second  # Same instance!
    """

    config: TransportConfig = TransportConfig()
    _clients: dict[ClientKey, httpx.Client] = PrivateAttr(default_factory=dict)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    model_config = ConfigDict(frozen=True)

    def make_key(self, base_url: str, api_key: str) -> ClientKey:
        return (self.effective_base_url(base_url), hash_credential(api_key))

    def effective_base_url(self, base_url: str) -> str:
        return self.config.override_base_url or base_url

    def get_or_create(self, base_url: str, api_key: str) -> httpx.Client:
        """Get or Create the Handle for an Endpoint/Credential Pair.

        Lazy initialization: a handle is only built on a cache miss.

        Args:
            base_url: API root the handle's relative requests resolve against
            api_key: Credential; only its digest is kept

        Returns:
            Shared ``httpx.Client`` for the pair
        """
        key = self.make_key(base_url, api_key)
        client = self._clients.get(key)
        if client is not None:
            return client

        with self._lock:
            client = self._clients.get(key)
            if client is None:
                client = self._build(key[0])
                self._clients[key] = client
                logger.debug("Created transport handle for %s", key[0])
        return client

    def keys(self) -> tuple[ClientKey, ...]:
        with self._lock:
            return tuple(self._clients)

    def close(self) -> None:
        """Close every handle and empty the pool."""
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            client.close()

    def __len__(self) -> int:
        return len(self._clients)

    def _build(self, base_url: str) -> httpx.Client:
        return httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(self.config.timeout, connect=self.config.connect_timeout),
            limits=httpx.Limits(
                max_connections=self.config.max_connections,
                max_keepalive_connections=self.config.max_keepalive_connections,
            ),
        )


__all__ = ["ClientKey", "ClientPool", "TransportConfig", "hash_credential"]
