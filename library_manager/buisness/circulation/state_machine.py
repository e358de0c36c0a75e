"""
State machine for the library asset circulation status

Encodes valid transitions and provides guard hooks.
Keeps "what is allowed" separate from "how persistence occurs".
"""

from typing import Dict, Set
from library_manager.buisness.circulation.errors import InvalidTransitionError


class AssetStatusMachine:
    """
    State machine for LibraryAsset.status transitions.

    Circulation status is fully reversible: every status can reach every
    other one through some lifecycle operation, so there are no terminal
    states. New assets start as Available.
    """

    AVAILABLE = 'Available'
    CHECKED_OUT = 'Checked Out'
    LOST = 'Lost'

    INITIAL_STATE = AVAILABLE

    STATUSES = (AVAILABLE, CHECKED_OUT, LOST)

    TERMINAL_STATES: Set[str] = set()

    # Valid transitions: from_status -> set of allowed to_status values
    TRANSITIONS: Dict[str, Set[str]] = {
        AVAILABLE: {CHECKED_OUT, LOST},       # checkout / mark lost
        CHECKED_OUT: {AVAILABLE, LOST},       # check in or mark found / mark lost
        LOST: {AVAILABLE, CHECKED_OUT},       # mark found / checkout of a recovered item
    }

    @classmethod
    def is_valid_status(cls, status: str) -> bool:
        return status in cls.STATUSES

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """
        Check if transition is valid.

        Args:
            from_status: Current status
            to_status: Target status

        Returns:
            bool: True if transition is allowed
        """
        if not cls.is_valid_status(to_status):
            return False

        # Allow staying in same state (idempotent operations)
        if from_status == to_status:
            return True

        if from_status in cls.TERMINAL_STATES:
            return False

        return to_status in cls.TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """
        Validate transition and raise exception if invalid.

        Raises:
            InvalidTransitionError: If transition is not allowed
        """
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(
                f"Invalid asset status transition: {from_status} → {to_status}"
            )

    @classmethod
    def get_allowed_transitions(cls, from_status: str) -> Set[str]:
        """Get set of allowed target statuses from current status"""
        if from_status in cls.TERMINAL_STATES:
            return set()
        return cls.TRANSITIONS.get(from_status, set())
