"""Domain-specific exceptions. Pure domain layer. No infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidArgumentError(DomainError):
    """Raised when a caller passes an argument the rebalancing rules reject (e.g. capacity <= 0)."""


class InvalidStateError(DomainError):
    """Raised when stored barn data is inconsistent (non-positive capacity, duplicate ids, wrong color)."""
