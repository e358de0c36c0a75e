"""
Circulation Service
Presentation service for catalog detail, checkout and hold views.

Handles:
- Assembling the asset detail read model (history, holds, current patron)
- Checkout and hold page models
"""

from typing import Any, Dict, List, Optional
from library_manager.buisness.circulation.manager import CirculationManager


class CirculationService:
    """
    Service for circulation presentation data.

    All reads go through CirculationManager so that missing assets surface
    as AssetNotFoundError.
    """

    def __init__(self, manager: Optional[CirculationManager] = None):
        self.manager = manager or CirculationManager.from_app_config()

    def asset_detail(self, asset_id: int) -> Dict[str, Any]:
        """
        Build the asset detail read model.

        Args:
            asset_id: ID of the asset

        Returns:
            dict: Asset fields plus circulation state
        """
        asset = self.manager.store.get_asset(asset_id)
        latest = self.manager.get_latest_checkout(asset_id)

        return {
            'asset_id': asset.id,
            'title': asset.title,
            'type': asset.type_name,
            'year': asset.year,
            'cost': str(asset.cost) if asset.cost is not None else None,
            'status': asset.status,
            'image_url': asset.image_url,
            'author_or_director': asset.author_or_director,
            'current_location': asset.location.name if asset.location else None,
            'dewey_call_number': asset.classification,
            'isbn': asset.isbn_or_empty,
            'checkout_histories': [
                history.to_dict(include_audit_fields=False)
                for history in self.manager.get_checkout_history(asset_id)
            ],
            'latest_checkout': latest.to_dict(include_audit_fields=False) if latest else None,
            'patron_name': self.manager.get_current_patron(asset_id),
            'current_holds': self.current_holds(asset_id),
        }

    def current_holds(self, asset_id: int) -> List[Dict[str, Any]]:
        """Holds in priority order with patron name and placement date"""
        return [
            {
                'hold_id': hold.id,
                'hold_placed': self.manager.get_current_hold_placed(hold.id).strftime('%Y-%m-%d'),
                'patron_name': self.manager.get_current_hold_patron(hold.id),
            }
            for hold in self.manager.get_current_holds(asset_id)
        ]

    def checkout_model(self, asset_id: int) -> Dict[str, Any]:
        """Page model for the checkout form"""
        asset = self.manager.store.get_asset(asset_id)
        return {
            'asset_id': asset.id,
            'image_url': asset.image_url,
            'title': asset.title,
            'library_card_id': '',
            'is_checked_out': self.manager.is_checked_out(asset_id),
        }

    def hold_model(self, asset_id: int) -> Dict[str, Any]:
        """Page model for the hold form"""
        model = self.checkout_model(asset_id)
        model['hold_count'] = self.manager.hold_manager.hold_count(asset_id)
        return model
