"""
Domain-specific exceptions for orders app.

Service errors represent business rule violations and are caught in views
and converted to HTTP responses. ``OrderNumberUnavailable`` is the API-side
counterpart of an exhausted order number allocation.
"""
from rest_framework.exceptions import APIException


class OrderServiceError(Exception):
    """Base exception for all orders service errors."""
    pass


class OrderNumberAllocationFailed(OrderServiceError):
    """
    Raised when no unique order number could be written within the retry
    and time bounds. Nothing has been persisted; the request may be retried.
    """

    def __init__(self, message, attempts=0):
        self.attempts = attempts
        super().__init__(message)


class PriceMismatch(OrderServiceError):
    """
    Raised when a client-supplied amount differs from the server price.

    ``field`` names the offending amount (``items[0].amount`` or ``total``).
    """

    def __init__(self, field, expected, received):
        self.field = field
        self.expected = expected
        self.received = received
        self.message = f"Expected {expected}, got {received}."
        super().__init__(f"{field}: {self.message}")


class EmptyOrderError(OrderServiceError):
    """Raised when an order is submitted without items."""
    pass


class ServiceUnavailableError(OrderServiceError):
    """Raised when a cart line references an inactive service."""

    def __init__(self, field, message):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class OrderNumberUnavailable(APIException):
    """Order number allocation gave up; safe to retry."""
    status_code = 503
    default_detail = 'Could not allocate an order number. Please retry.'
    default_code = 'order_number_unavailable'
