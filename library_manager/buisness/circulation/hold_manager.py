"""
HoldManager - Domain service for the hold queue of an asset

Orders holds by priority and resolves the earliest one.
Does not commit; callers run it inside a CirculationStore transaction.
"""

from datetime import datetime
from typing import List, Optional, TYPE_CHECKING
from library_manager.data.circulation.hold import Hold

if TYPE_CHECKING:
    from library_manager.data.circulation.store import CirculationStore


class HoldManager:
    """
    Domain service for hold queue operations.

    Priority is placement time; holds placed at the same instant are served
    in insertion order (ascending hold id).
    """

    def __init__(self, store: 'CirculationStore'):
        self.store = store

    def holds_for(self, asset_id: int) -> List[Hold]:
        """Holds on the asset, highest priority first"""
        return self.store.holds_for(asset_id)

    def hold_count(self, asset_id: int) -> int:
        return self.store.hold_count_for(asset_id)

    def has_holds(self, asset_id: int) -> bool:
        return self.hold_count(asset_id) > 0

    def earliest_hold(self, asset_id: int) -> Optional[Hold]:
        holds = self.holds_for(asset_id)
        return holds[0] if holds else None

    def place_hold(self, asset_id: int, card_id: int, when: datetime) -> Hold:
        """
        Queue a hold. Holds on available assets and repeated holds by the
        same card are accepted.
        """
        hold = Hold(
            library_asset_id=asset_id,
            library_card_id=card_id,
            hold_placed=when,
        )
        self.store.add(hold)
        self.store.flush()
        return hold

    def resolve_earliest(self, asset_id: int) -> Optional[Hold]:
        """
        Remove the highest-priority hold from the queue.

        Returns:
            The removed Hold, or None when the queue is empty
        """
        hold = self.earliest_hold(asset_id)
        if hold is None:
            return None
        self.store.delete(hold)
        self.store.flush()
        return hold
