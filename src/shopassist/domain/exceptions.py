"""Domain-level exceptions.

Business rule violations are expressed as subclasses of DomainException so
the engines can turn them into ``success=False`` results uniformly.  System
failures (catalog or store unreachable) are InfrastructureError subclasses
and are never mistaken for business outcomes.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InfrastructureError(Exception):
    """Base class for failures of a backing system."""


class CatalogUnavailableError(InfrastructureError):
    """The product catalog source could not be read."""


class StoreUnavailableError(InfrastructureError):
    """The working-memory store could not be read or written."""
