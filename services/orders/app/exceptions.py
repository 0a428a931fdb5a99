"""
Exceptions raised by the order workflow.

The API layer registers handlers that turn these into JSON responses of the
form ``{"message": "..."}``.
"""


class OrdersServiceError(Exception):
    """Base class for errors reported back to the API caller."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderValidationError(OrdersServiceError):
    """The order request was rejected (no products, unknown user or product)."""
    status_code = 400


class UpstreamUnavailableError(OrdersServiceError):
    """The Users or Products service could not be reached."""
    status_code = 503
