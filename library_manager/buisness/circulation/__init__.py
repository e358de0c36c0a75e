"""
Circulation business layer.

Main entry point: CirculationManager (library_manager.buisness.circulation.manager)

- CirculationManager: Lifecycle operations (checkout, check-in, lost/found, holds) and queries
- HoldManager: Hold queue ordering and resolution
- AssetStatusMachine: Asset status transitions
- Policies: Circulation invariant validation
- CirculationNarrator: Audit log line composition

The manager is not re-exported here because the data layer imports the
errors module from this package.
"""

from library_manager.buisness.circulation.errors import (
    CirculationDomainError,
    NotFoundError,
    AssetNotFoundError,
    LibraryCardNotFoundError,
    PatronNotFoundError,
    HoldNotFoundError,
    CheckoutNotFoundError,
    InvalidTransitionError,
    ConcurrencyConflictError,
)
from library_manager.buisness.circulation.state_machine import AssetStatusMachine

__all__ = [
    'CirculationDomainError',
    'NotFoundError',
    'AssetNotFoundError',
    'LibraryCardNotFoundError',
    'PatronNotFoundError',
    'HoldNotFoundError',
    'CheckoutNotFoundError',
    'InvalidTransitionError',
    'ConcurrencyConflictError',
    'AssetStatusMachine',
]
