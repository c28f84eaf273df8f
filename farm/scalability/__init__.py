"""Scalability layer: per-color rebalance locking. No FastAPI."""

from farm.scalability.partition_lock import InMemoryLockBackend, LockBackend, PartitionLock

__all__ = [
    "InMemoryLockBackend",
    "LockBackend",
    "PartitionLock",
]
