"""Order engine error taxonomy."""


class OrderEngineError(Exception):
    """Base class for errors raised by the order engine."""

    retriable = False


class ValidationError(OrderEngineError):
    """Malformed or missing input (items, order type, status, period)."""


class NotFoundError(OrderEngineError):
    """No order exists with the requested id."""


class StoreUnavailableError(OrderEngineError):
    """The persistence layer could not be reached. Safe to retry."""

    retriable = True
