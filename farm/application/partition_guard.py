"""Partition guard protocol. Serializes mutations of one color; scalability layer implements it."""

from typing import AsyncContextManager, Protocol


class PartitionGuard(Protocol):
    """Holds an exclusive claim on a key for the duration of an `async with` block."""

    def hold(self, key: str) -> AsyncContextManager[None]:
        ...
