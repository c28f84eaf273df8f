"""FastAPI dependency injection: DB session, partition lock, metrics, FarmService, correlation_id."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from farm.application.barn_pool import BarnPoolAdjuster
from farm.application.farm_service import FarmService
from farm.application.redistribution import RedistributionEngine
from farm.config.settings import get_settings
from farm.infrastructure.cache.redis_client import RedisClient
from farm.infrastructure.database.animal_repository_db import DbAnimalRepository
from farm.infrastructure.database.barn_repository_db import DbBarnRepository
from farm.infrastructure.database.session import get_db
from farm.observability.metrics import MetricsCollector
from farm.scalability.partition_lock import InMemoryLockBackend, PartitionLock

_metrics: MetricsCollector | None = None
_partition_lock: PartitionLock | None = None


def get_metrics() -> MetricsCollector:
    """Return singleton metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_partition_lock() -> PartitionLock:
    """Return singleton rebalance lock. Redis-backed when REDIS_URL is set, in-process otherwise."""
    global _partition_lock
    if _partition_lock is None:
        settings = get_settings()
        if settings.redis_url:
            backend = RedisClient(settings.redis_url)
        else:
            backend = InMemoryLockBackend()
        _partition_lock = PartitionLock(
            backend=backend,
            ttl=settings.rebalance_lock_ttl_seconds,
            wait_timeout=settings.rebalance_lock_wait_seconds,
        )
    return _partition_lock


async def get_farm_service(
    session: Annotated[AsyncSession, Depends(get_db)],
    lock: Annotated[PartitionLock, Depends(get_partition_lock)],
    metrics: Annotated[MetricsCollector, Depends(get_metrics)],
) -> FarmService:
    """Build FarmService over DB repositories with injected lock, metrics and logger."""
    settings = get_settings()
    logger = logging.getLogger("farm.rebalance")
    animals = DbAnimalRepository(session)
    barns = DbBarnRepository(session, default_capacity=settings.default_barn_capacity)
    collector = metrics if settings.enable_metrics else None
    engine = RedistributionEngine(
        adjuster=BarnPoolAdjuster(barns, logger),
        animal_repository=animals,
        logger=logger,
        metrics=collector,
    )
    return FarmService(
        animal_repository=animals,
        barn_repository=barns,
        engine=engine,
        guard=lock,
        logger=logger,
        metrics=collector,
    )


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""
