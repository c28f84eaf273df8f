"""Per-color rebalance lock. SET NX EX pattern, TTL, safe release. At most one rebalance per color in flight."""

import asyncio
import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Protocol

from farm.application.exceptions import RebalanceInProgressError


class LockBackend(Protocol):
    """Minimal key-value operations for the lock. Injected; no global state."""

    async def set_nx_ex(self, key: str, value: str, ttl: int) -> bool: ...
    async def get(self, key: str) -> str | None: ...
    async def delete_if_value(self, key: str, value: str) -> bool: ...


LOCK_PREFIX = "lock:"


class InMemoryLockBackend:
    """Single-process backend with the same semantics as Redis SET NX EX."""

    def __init__(self) -> None:
        self._store: dict[str, tuple[str, float]] = {}

    def _live(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if time.monotonic() >= expires_at:
            del self._store[key]
            return None
        return value

    async def set_nx_ex(self, key: str, value: str, ttl: int) -> bool:
        if self._live(key) is not None:
            return False
        self._store[key] = (value, time.monotonic() + ttl)
        return True

    async def get(self, key: str) -> str | None:
        return self._live(key)

    async def delete_if_value(self, key: str, value: str) -> bool:
        if self._live(key) == value:
            del self._store[key]
            return True
        return False


class PartitionLock:
    """
    Lock keyed by partition (color). Each acquire gets a unique token so only
    the holder can release; the TTL frees the key if a holder dies mid-rebalance.
    """

    def __init__(
        self,
        backend: LockBackend,
        ttl: int = 30,
        wait_timeout: float = 10.0,
        poll_interval: float = 0.05,
        key_prefix: str = LOCK_PREFIX,
    ) -> None:
        self._backend = backend
        self._ttl = ttl
        self._wait_timeout = wait_timeout
        self._poll_interval = poll_interval
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def acquire(self, key: str) -> Optional[str]:
        """Try once. Returns the holder token, or None if the key is already held."""
        token = str(uuid.uuid4())
        if await self._backend.set_nx_ex(self._key(key), token, self._ttl):
            return token
        return None

    async def release(self, key: str, token: str) -> None:
        """Release only if token still owns the key (atomic compare-and-delete)."""
        await self._backend.delete_if_value(self._key(key), token)

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """
        Wait up to wait_timeout for the key, hold it for the body, then release.
        Raises RebalanceInProgressError if the key stays held.
        """
        deadline = time.monotonic() + self._wait_timeout
        token = await self.acquire(key)
        while token is None:
            if time.monotonic() >= deadline:
                raise RebalanceInProgressError(f"rebalance already in progress for {key}")
            await asyncio.sleep(self._poll_interval)
            token = await self.acquire(key)
        try:
            yield
        finally:
            await self.release(key, token)
