"""
CirculationManager - Circulation lifecycle of library assets

Enforces the asset status state machine and keeps Checkout, CheckoutHistory
and Hold records consistent with LibraryAsset.status.

Every mutating operation runs in exactly one CirculationStore transaction:
it commits as a unit or rolls back as a unit.
"""

from datetime import datetime, timedelta
from typing import Callable, List, Optional
from flask import current_app
from library_manager.data.core.asset_info.library_asset import LibraryAsset
from library_manager.data.circulation.checkout import Checkout
from library_manager.data.circulation.checkout_history import CheckoutHistory
from library_manager.data.circulation.hold import Hold
from library_manager.data.circulation.store import CirculationStore
from library_manager.buisness.circulation.errors import InvalidTransitionError
from library_manager.buisness.circulation.hold_manager import HoldManager
from library_manager.buisness.circulation.narrator import CirculationNarrator
from library_manager.buisness.circulation.policies import (
    SingleActiveCheckoutPolicy,
    OpenHistoryPolicy,
)
from library_manager.buisness.circulation.state_machine import AssetStatusMachine
from library_manager.utils.logger import get_logger

logger = get_logger("library_manager.circulation")

DEFAULT_LOAN_PERIOD = timedelta(days=30)
NOT_CHECKED_OUT = "Not checked out"


class CirculationManager:
    """
    Domain service for checkout, check-in, lost/found and hold operations.

    Responsibilities:
    - Transition LibraryAsset.status via AssetStatusMachine
    - Open and close loans (Checkout + CheckoutHistory)
    - Hand a checked-in asset to the earliest hold
    - Validate circulation invariants before every commit
    """

    def __init__(
        self,
        store: Optional[CirculationStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
        loan_period: Optional[timedelta] = None
    ):
        """
        Args:
            store: Storage interface (defaults to one over the Flask-SQLAlchemy session)
            clock: Callable returning "now" (defaults to datetime.utcnow)
            loan_period: Length of a loan (defaults to 30 days)
        """
        self.store = store if store is not None else CirculationStore()
        self.clock = clock or datetime.utcnow
        self.loan_period = loan_period if loan_period is not None else DEFAULT_LOAN_PERIOD
        self.hold_manager = HoldManager(self.store)

    @classmethod
    def from_app_config(cls, store: Optional[CirculationStore] = None,
                        clock: Optional[Callable[[], datetime]] = None) -> 'CirculationManager':
        """Build a manager whose loan period comes from the LOAN_PERIOD_DAYS app setting"""
        days = current_app.config.get('LOAN_PERIOD_DAYS', DEFAULT_LOAN_PERIOD.days)
        return cls(store=store, clock=clock, loan_period=timedelta(days=days))

    # ========== Lifecycle Operations ==========

    def checkout_item(self, asset_id: int, card_id: int) -> None:
        """
        Lend an asset to a library card.

        A checkout of an asset that already has an active checkout is a
        silent no-op.

        Raises:
            AssetNotFoundError: Unknown asset
            LibraryCardNotFoundError: Unknown card
            PatronNotFoundError: The card belongs to no patron
            ConcurrencyConflictError: A concurrent checkout won the race
        """
        with self.store.transaction():
            asset = self.store.get_asset(asset_id, lock=True)

            if self.store.active_checkout_for(asset_id) is not None:
                logger.info(CirculationNarrator.already_checked_out(asset_id))
                return

            self._require_borrower(card_id)
            self._open_loan(asset, card_id, self.clock())
            self._check_invariants(asset_id)

    def check_in_item(self, asset_id: int, strict: bool = False) -> None:
        """
        Return an asset.

        Closes the active loan, then hands the asset to the earliest hold if
        any (a new loan is opened for that card and the status stays
        Checked Out); otherwise the asset becomes Available.

        Args:
            asset_id: ID of the asset
            strict: Raise InvalidTransitionError instead of warning when the
                asset has no active checkout

        Raises:
            AssetNotFoundError: Unknown asset
            InvalidTransitionError: strict=True and nothing is checked out
        """
        with self.store.transaction():
            asset = self.store.get_asset(asset_id, lock=True)
            now = self.clock()

            if self.store.active_checkout_for(asset_id) is None:
                message = CirculationNarrator.check_in_without_checkout(asset_id, asset.status)
                if strict:
                    raise InvalidTransitionError(message)
                logger.warning(message)

            self._close_loan(asset_id, now)
            logger.info(CirculationNarrator.checked_in(asset_id, now))

            hold = self.hold_manager.resolve_earliest(asset_id)
            if hold is not None:
                self._open_loan(asset, hold.library_card_id, now)
                logger.info(CirculationNarrator.hold_resolved(asset_id, hold.id, hold.library_card_id))
            else:
                self._set_status(asset, AssetStatusMachine.AVAILABLE, reason="Checked in")

            self._check_invariants(asset_id)

    def mark_lost(self, asset_id: int) -> None:
        """
        Mark an asset Lost. Loans and holds are left untouched.

        Raises:
            AssetNotFoundError: Unknown asset
        """
        with self.store.transaction():
            asset = self.store.get_asset(asset_id, lock=True)
            self._set_status(asset, AssetStatusMachine.LOST, reason="Marked lost")

    def mark_found(self, asset_id: int) -> None:
        """
        Recover an asset: status Available, active loan closed.

        Holds are not consulted, unlike check_in_item.

        Raises:
            AssetNotFoundError: Unknown asset
        """
        with self.store.transaction():
            asset = self.store.get_asset(asset_id, lock=True)
            self._set_status(asset, AssetStatusMachine.AVAILABLE, reason="Marked found")
            self._close_loan(asset_id, self.clock())
            self._check_invariants(asset_id)

    def place_hold(self, asset_id: int, card_id: int) -> Hold:
        """
        Queue a hold on an asset for a library card.

        Raises:
            AssetNotFoundError: Unknown asset
            LibraryCardNotFoundError: Unknown card
            PatronNotFoundError: The card belongs to no patron
        """
        with self.store.transaction():
            self.store.get_asset(asset_id)
            self._require_borrower(card_id)
            now = self.clock()
            hold = self.hold_manager.place_hold(asset_id, card_id, now)
            logger.info(CirculationNarrator.hold_placed(asset_id, card_id, now))
        return hold

    def add_checkout(self, checkout: Checkout) -> Checkout:
        """
        Persist a pre-built Checkout as-is (no status change, no history).

        Raises:
            AssetNotFoundError / LibraryCardNotFoundError / PatronNotFoundError: Dangling references
            ConcurrencyConflictError: The asset already has an active checkout
        """
        with self.store.transaction():
            self.store.get_asset(checkout.library_asset_id, lock=True)
            self._require_borrower(checkout.library_card_id)
            self.store.add(checkout)
            self.store.flush()
            SingleActiveCheckoutPolicy.check(self.store, checkout.library_asset_id)
        return checkout

    # ========== Queries ==========

    def is_checked_out(self, asset_id: int) -> bool:
        self.store.get_asset(asset_id)
        return self.store.active_checkout_for(asset_id) is not None

    def get_current_holds(self, asset_id: int) -> List[Hold]:
        """Holds on the asset ordered by placement time, then insertion order"""
        self.store.get_asset(asset_id)
        return self.hold_manager.holds_for(asset_id)

    def get_checkout_history(self, asset_id: int) -> List[CheckoutHistory]:
        self.store.get_asset(asset_id)
        return self.store.history_for(asset_id)

    def get_latest_checkout(self, asset_id: int) -> Optional[Checkout]:
        self.store.get_asset(asset_id)
        return self.store.latest_checkout_for(asset_id)

    def get_current_patron(self, asset_id: int) -> str:
        """
        Display name of the patron holding the active checkout, or "Not checked out".

        Raises:
            AssetNotFoundError: Unknown asset
            PatronNotFoundError: The borrowing card has no patron
        """
        self.store.get_asset(asset_id)
        checkout = self.store.active_checkout_for(asset_id)
        if checkout is None:
            return NOT_CHECKED_OUT
        return self.store.get_patron_for_card(checkout.library_card_id).display_name

    def get_current_hold_patron(self, hold_id: int) -> str:
        hold = self.store.get_hold(hold_id)
        return self.store.get_patron_for_card(hold.library_card_id).display_name

    def get_current_hold_placed(self, hold_id: int) -> datetime:
        return self.store.get_hold(hold_id).hold_placed

    def get_checkout(self, checkout_id: int) -> Checkout:
        return self.store.get_checkout(checkout_id)

    def get_all_checkouts(self) -> List[Checkout]:
        return self.store.all_checkouts()

    # ========== Internals ==========

    def _require_borrower(self, card_id: int) -> None:
        """A card can borrow or hold only when it exists and is owned by a patron"""
        self.store.get_card(card_id)
        self.store.get_patron_for_card(card_id)

    def _set_status(self, asset: LibraryAsset, new_status: str, reason: Optional[str] = None) -> None:
        old_status = asset.status
        if old_status == new_status:
            logger.info(CirculationNarrator.status_unchanged(asset.id, new_status))
            return

        AssetStatusMachine.validate_transition(old_status, new_status)
        asset.status = new_status
        logger.info(CirculationNarrator.status_changed(asset.id, old_status, new_status, reason))

    def _open_loan(self, asset: LibraryAsset, card_id: int, now: datetime) -> Checkout:
        if asset.status != AssetStatusMachine.CHECKED_OUT:
            self._set_status(asset, AssetStatusMachine.CHECKED_OUT, reason=f"Checked out to card {card_id}")

        checkout = Checkout(
            library_asset_id=asset.id,
            library_card_id=card_id,
            since=now,
            until=now + self.loan_period,
        )
        history = CheckoutHistory(
            library_asset_id=asset.id,
            library_card_id=card_id,
            checked_out=now,
        )
        self.store.add(checkout)
        self.store.add(history)
        self.store.flush()

        logger.info(CirculationNarrator.checked_out(asset.id, card_id, checkout.since, checkout.until))
        return checkout

    def _close_loan(self, asset_id: int, now: datetime) -> None:
        checkout = self.store.active_checkout_for(asset_id)
        if checkout is not None:
            self.store.delete(checkout)

        history = self.store.open_history_for(asset_id)
        if history is not None:
            history.checked_in = now

        # Deletes must reach the database before a replacement loan is inserted
        self.store.flush()

    def _check_invariants(self, asset_id: int) -> None:
        self.store.flush()
        SingleActiveCheckoutPolicy.check(self.store, asset_id)
        OpenHistoryPolicy.check(self.store, asset_id)
