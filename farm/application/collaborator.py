"""Guarded calls into repository collaborators. Any store failure aborts the rebalance."""

import logging
from typing import Any, Awaitable, TypeVar

from farm.application.exceptions import ApplicationError, CollaboratorFailureError
from farm.domain.exceptions import DomainError

T = TypeVar("T")


async def call_collaborator(
    logger: logging.Logger,
    operation: str,
    awaitable: Awaitable[T],
    **context: Any,
) -> T:
    """
    Await a repository call. Domain and application errors pass through; anything
    else is logged and re-raised as CollaboratorFailureError with the cause chained.
    No rollback is attempted.
    """
    try:
        return await awaitable
    except (DomainError, ApplicationError):
        raise
    except Exception as e:
        logger.error(
            "collaborator_failed",
            extra={"operation": operation, "error": str(e), **context},
        )
        raise CollaboratorFailureError(f"{operation} failed: {e}") from e
