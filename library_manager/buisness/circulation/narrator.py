"""
CirculationNarrator - Message composer for circulation lifecycle events

Ensures every transition produces a consistent audit log line.
Separates audit narrative formatting from transition logic.
"""

from datetime import datetime
from typing import Optional


class CirculationNarrator:
    """
    Composes machine-generated audit messages for circulation lifecycle events.
    """

    @staticmethod
    def _stamp(when: datetime) -> str:
        return when.strftime('%Y-%m-%d %H:%M')

    @staticmethod
    def checked_out(asset_id: int, card_id: int, since: datetime, until: datetime) -> str:
        return (
            f"Asset {asset_id} checked out to card {card_id} | "
            f"{CirculationNarrator._stamp(since)} → due {CirculationNarrator._stamp(until)}"
        )

    @staticmethod
    def already_checked_out(asset_id: int) -> str:
        return f"Asset {asset_id} is already checked out; checkout ignored"

    @staticmethod
    def checked_in(asset_id: int, when: datetime) -> str:
        return f"Asset {asset_id} checked in at {CirculationNarrator._stamp(when)}"

    @staticmethod
    def check_in_without_checkout(asset_id: int, status: str) -> str:
        return f"Asset {asset_id} checked in with no active checkout (status: {status})"

    @staticmethod
    def hold_resolved(asset_id: int, hold_id: int, card_id: int) -> str:
        return f"Hold {hold_id} on asset {asset_id} resolved; checked out to card {card_id}"

    @staticmethod
    def hold_placed(asset_id: int, card_id: int, when: datetime) -> str:
        return f"Hold placed on asset {asset_id} by card {card_id} at {CirculationNarrator._stamp(when)}"

    @staticmethod
    def status_changed(asset_id: int, from_status: str, to_status: str, reason: Optional[str] = None) -> str:
        comment = f"Asset {asset_id} status changed: {from_status} → {to_status}"
        if reason:
            comment += f" | Reason: {reason}"
        return comment

    @staticmethod
    def status_unchanged(asset_id: int, status: str) -> str:
        return f"Asset {asset_id} already {status}; nothing to do"
