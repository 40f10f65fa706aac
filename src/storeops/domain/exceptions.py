"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Failures of the storage layer are PersistenceError and are kept apart: they
are not the caller's fault and are never a business rejection.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(ValidationError):
    """A product does not have enough units to cover a line item."""

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product: {product_name} "
            f"(need {requested}, have {available})"
        )


class AlreadyReturnedError(DomainException):
    """The sale has already been returned and cannot be returned again."""

    def __init__(self, sale_id: int) -> None:
        self.sale_id = sale_id
        super().__init__(f"Sale #{sale_id} is already returned")


class PersistenceError(Exception):
    """The storage layer failed (connectivity, constraint, corrupt file)."""


class DuplicateDocumentNumberError(PersistenceError):
    """Another sale already holds the generated document number."""
