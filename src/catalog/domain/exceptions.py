"""Catalog exceptions.

Domain errors describe a request the catalog refuses; infrastructure
errors describe a store that failed to answer. Adapters translate every
driver-specific fault into one of these so nothing above the repository
port ever sees a SQLAlchemy or pymongo exception.
"""


class CatalogError(Exception):
    """Base class for every error raised by the catalog."""


class DomainException(CatalogError):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidIdentifier(ValidationError):
    """Identifier text matches neither the opaque nor the integer encoding."""


class NotFoundError(DomainException):
    """The targeted product does not exist."""


class InfrastructureError(CatalogError):
    """Base class for store failures."""


class StoreConnectionError(InfrastructureError):
    """The store could not be reached while building an adapter."""


class PersistenceError(InfrastructureError):
    """An I/O fault happened while talking to the store."""


class OperationCancelledError(PersistenceError):
    """The caller's deadline expired or the request was cancelled."""
