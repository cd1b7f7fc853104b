"""
Error taxonomy raised by the service layer.

Services raise these exceptions; endpoints translate them into HTTP
responses.  Each class carries the status code it maps to so the
translation stays in one table instead of being repeated per route.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """A required field is missing or empty."""

    status_code = 400


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""

    status_code = 404


class DuplicateKeyError(ServiceError):
    """An entity with the same identifier already exists."""

    status_code = 409


class StoreError(ServiceError):
    """The database failed while reading or writing."""

    status_code = 500


class QueryError(StoreError):
    """An analytical query could not be completed."""
