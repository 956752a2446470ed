# torm/core/exceptions.py
"""Exception taxonomy raised by the query layer."""


class TormError(Exception):
    """Base exception for torm."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClassNotFoundError(TormError):
    """Raised when a query is executed without a bound entity."""

    def __init__(self, message: str = "Lack of class property, please pass it in query clause"):
        super().__init__(message)


class ModelNotFoundError(TormError):
    """Raised when no backend handle is registered for an entity name."""

    def __init__(self, model_name: str):
        super().__init__(f"Model '{model_name}' is not found, maybe it's not defined properly yet")
        self.model_name = model_name


class WrongMethodInvokedError(TormError):
    """Raised when a terminal method does not match the projection state."""

    def __init__(self, method: str, instead: str):
        super().__init__(
            f"The method '{method}' can not be invoked in this scenario, please use {instead} method instead"
        )
        self.method = method
        self.instead = instead


class QueryNotImplementedError(TormError, NotImplementedError):
    """Raised by query features that are declared but not available."""

    def __init__(self, feature: str):
        super().__init__(f"Query feature '{feature}' is not implemented")
        self.feature = feature


class QueryConsumedError(TormError):
    """Raised when a query is executed a second time."""

    def __init__(self, method: str):
        super().__init__(f"The query has already been executed, '{method}' needs a new query")
        self.method = method
