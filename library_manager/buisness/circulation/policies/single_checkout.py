"""
Single Active Checkout Policy

An asset is on loan to at most one library card at a time.
"""

from typing import TYPE_CHECKING
from library_manager.buisness.circulation.errors import ConcurrencyConflictError

if TYPE_CHECKING:
    from library_manager.data.circulation.store import CirculationStore


class SingleActiveCheckoutPolicy:
    """
    Specification pattern for the one-active-checkout-per-asset invariant.

    Evaluated inside the operation's transaction, after its writes are flushed,
    so a violation rolls the whole operation back.
    """

    @classmethod
    def check(cls, store: 'CirculationStore', asset_id: int) -> None:
        """
        Raises:
            ConcurrencyConflictError: If more than one active checkout references the asset
        """
        checkouts = store.active_checkouts_for(asset_id)
        if len(checkouts) > 1:
            card_ids = ", ".join(str(c.library_card_id) for c in checkouts)
            raise ConcurrencyConflictError(
                f"Asset {asset_id} has {len(checkouts)} active checkouts (cards: {card_ids})"
            )

    @classmethod
    def is_satisfied(cls, store: 'CirculationStore', asset_id: int) -> bool:
        return len(store.active_checkouts_for(asset_id)) <= 1
