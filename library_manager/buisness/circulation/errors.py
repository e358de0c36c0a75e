"""
Domain exceptions for circulation business logic

These exceptions represent business rule violations and domain-specific errors.
They are raised by the business layer and surface unchanged to the presentation layer.
"""


class CirculationDomainError(Exception):
    """Base exception for all circulation domain errors"""
    pass


class NotFoundError(CirculationDomainError):
    """Raised when a referenced entity does not exist"""

    entity = 'Entity'

    def __init__(self, entity_id, message=None):
        self.entity_id = entity_id
        super().__init__(message or f"{self.entity} {entity_id} not found")


class AssetNotFoundError(NotFoundError):
    entity = 'Library asset'


class LibraryCardNotFoundError(NotFoundError):
    entity = 'Library card'


class PatronNotFoundError(NotFoundError):
    entity = 'Patron for library card'


class HoldNotFoundError(NotFoundError):
    entity = 'Hold'


class CheckoutNotFoundError(NotFoundError):
    entity = 'Checkout'


class InvalidTransitionError(CirculationDomainError):
    """Raised when a status transition or lifecycle operation is not allowed"""
    pass


class ConcurrencyConflictError(CirculationDomainError):
    """Raised when a concurrent write broke a circulation invariant; the transaction was rolled back"""
    pass
