"""Ordering errors."""


class OrderingError(Exception):
    """Base class for ordering failures reported to the caller."""


class EmptyOrderError(OrderingError):
    """Raised when there is nothing to order after aggregation."""

    def __init__(self, message: str = "No items in order"):
        super().__init__(message)
