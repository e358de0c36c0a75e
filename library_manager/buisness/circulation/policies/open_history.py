"""
Open History Policy

At most one checkout history record per asset is open (checked_in is null).
"""

from typing import TYPE_CHECKING
from library_manager.buisness.circulation.errors import ConcurrencyConflictError

if TYPE_CHECKING:
    from library_manager.data.circulation.store import CirculationStore


class OpenHistoryPolicy:
    """
    Specification pattern for the single-open-history invariant.
    """

    @classmethod
    def check(cls, store: 'CirculationStore', asset_id: int) -> None:
        """
        Raises:
            ConcurrencyConflictError: If more than one open history record exists for the asset
        """
        open_records = store.open_histories_for(asset_id)
        if len(open_records) > 1:
            raise ConcurrencyConflictError(
                f"Asset {asset_id} has {len(open_records)} open checkout history records"
            )

    @classmethod
    def is_satisfied(cls, store: 'CirculationStore', asset_id: int) -> bool:
        return len(store.open_histories_for(asset_id)) <= 1
