"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CollaboratorFailureError(ApplicationError):
    """Raised when a repository call fails. The rebalance is aborted; re-run from a fresh read to heal."""


class AnimalNotFoundError(ApplicationError):
    """Raised when an animal id does not exist in the store."""


class RebalanceInProgressError(ApplicationError):
    """Raised when another rebalance of the same color holds the lock past the wait timeout."""
