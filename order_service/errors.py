"""Failures the order aggregator hands back to its caller.

None of these are retried or recovered internally; the API surface maps each
``kind`` to a status code.
"""


class OrderServiceError(Exception):
    kind = "internal"


class OrderValidationError(OrderServiceError):
    kind = "validation"


class OrderNotFound(OrderServiceError):
    kind = "not_found"

    def __init__(self, order_id):
        super().__init__("order not found")
        self.order_id = order_id


class DependencyUnavailable(OrderServiceError):
    """A user or product fetch failed: transport error, non-2xx or bad body."""

    kind = "dependency_unavailable"

    def __init__(self, dependency: str, reason: str, status_code=None):
        super().__init__(f"failed to fetch {dependency}: {reason}")
        self.dependency = dependency
        self.reason = reason
        self.status_code = status_code


class StorageError(OrderServiceError):
    kind = "storage"
