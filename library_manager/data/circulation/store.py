"""
Circulation Store
Transactional read/write interface over the circulation collections
(LibraryAsset, LibraryCard/Patron, Checkout, CheckoutHistory, Hold).

The business layer never navigates relationships; every lookup goes
through an explicit foreign-key query here.
"""

from contextlib import contextmanager
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from library_manager import db
from library_manager.data.core.asset_info.library_asset import LibraryAsset
from library_manager.data.core.patron_info.library_card import LibraryCard
from library_manager.data.core.patron_info.patron import Patron
from library_manager.data.circulation.checkout import Checkout
from library_manager.data.circulation.checkout_history import CheckoutHistory
from library_manager.data.circulation.hold import Hold
from library_manager.buisness.circulation.errors import (
    AssetNotFoundError,
    LibraryCardNotFoundError,
    PatronNotFoundError,
    HoldNotFoundError,
    CheckoutNotFoundError,
    ConcurrencyConflictError,
)
from library_manager.utils.logger import get_logger

logger = get_logger("library_manager.data.circulation.store")


class CirculationStore:
    """
    Storage interface used by the circulation lifecycle.

    Wraps one SQLAlchemy session (the Flask-SQLAlchemy scoped session by default).
    A store is cheap; build one per operation or per request.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session
        self._depth = 0

    # ========== Transactions ==========

    @contextmanager
    def transaction(self):
        """
        Run the enclosed block as one atomic unit.

        Commits on success. Optimistic-lock failures and uniqueness violations
        are rolled back and re-raised as ConcurrencyConflictError; anything else
        is rolled back and propagated unchanged. Nested calls join the outer
        transaction.
        """
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield self
            self.session.commit()
        except (StaleDataError, IntegrityError) as e:
            self.session.rollback()
            logger.error(f"Circulation transaction rolled back on conflict: {e}")
            raise ConcurrencyConflictError(f"Concurrent update detected: {e}") from e
        except Exception:
            self.session.rollback()
            raise
        finally:
            self._depth = 0

    def add(self, instance) -> None:
        self.session.add(instance)

    def delete(self, instance) -> None:
        self.session.delete(instance)

    def flush(self) -> None:
        self.session.flush()

    # ========== Entity lookups ==========

    def get_asset(self, asset_id: int, lock: bool = False) -> LibraryAsset:
        """
        Load an asset or raise AssetNotFoundError.

        Args:
            asset_id: ID of the asset
            lock: Take a row lock (SELECT ... FOR UPDATE) where the backend supports it
        """
        query = self.session.query(LibraryAsset).filter(LibraryAsset.id == asset_id)
        if lock:
            query = query.with_for_update()
        asset = query.first()
        if asset is None:
            raise AssetNotFoundError(asset_id)
        return asset

    def get_card(self, card_id: int) -> LibraryCard:
        card = self.session.query(LibraryCard).filter(LibraryCard.id == card_id).first()
        if card is None:
            raise LibraryCardNotFoundError(card_id)
        return card

    def get_patron_for_card(self, card_id: int) -> Patron:
        patron = self.session.query(Patron).filter(Patron.library_card_id == card_id).first()
        if patron is None:
            raise PatronNotFoundError(card_id)
        return patron

    def get_hold(self, hold_id: int) -> Hold:
        hold = self.session.query(Hold).filter(Hold.id == hold_id).first()
        if hold is None:
            raise HoldNotFoundError(hold_id)
        return hold

    def get_checkout(self, checkout_id: int) -> Checkout:
        checkout = self.session.query(Checkout).filter(Checkout.id == checkout_id).first()
        if checkout is None:
            raise CheckoutNotFoundError(checkout_id)
        return checkout

    # ========== Checkouts ==========

    def active_checkout_for(self, asset_id: int) -> Optional[Checkout]:
        return self.session.query(Checkout).filter(
            Checkout.library_asset_id == asset_id
        ).order_by(Checkout.id.asc()).first()

    def active_checkouts_for(self, asset_id: int) -> List[Checkout]:
        return self.session.query(Checkout).filter(
            Checkout.library_asset_id == asset_id
        ).all()

    def latest_checkout_for(self, asset_id: int) -> Optional[Checkout]:
        return self.session.query(Checkout).filter(
            Checkout.library_asset_id == asset_id
        ).order_by(Checkout.since.desc(), Checkout.id.desc()).first()

    def all_checkouts(self) -> List[Checkout]:
        return self.session.query(Checkout).order_by(Checkout.id.asc()).all()

    # ========== Checkout history ==========

    def open_history_for(self, asset_id: int) -> Optional[CheckoutHistory]:
        return self.session.query(CheckoutHistory).filter(
            CheckoutHistory.library_asset_id == asset_id,
            CheckoutHistory.checked_in.is_(None)
        ).order_by(CheckoutHistory.id.asc()).first()

    def open_histories_for(self, asset_id: int) -> List[CheckoutHistory]:
        return self.session.query(CheckoutHistory).filter(
            CheckoutHistory.library_asset_id == asset_id,
            CheckoutHistory.checked_in.is_(None)
        ).all()

    def history_for(self, asset_id: int) -> List[CheckoutHistory]:
        return self.session.query(CheckoutHistory).filter(
            CheckoutHistory.library_asset_id == asset_id
        ).order_by(CheckoutHistory.checked_out.asc(), CheckoutHistory.id.asc()).all()

    # ========== Holds ==========

    def holds_for(self, asset_id: int) -> List[Hold]:
        """Holds on an asset in priority order: placement time, then insertion order"""
        return self.session.query(Hold).filter(
            Hold.library_asset_id == asset_id
        ).order_by(Hold.hold_placed.asc(), Hold.id.asc()).all()

    def hold_count_for(self, asset_id: int) -> int:
        return self.session.query(Hold).filter(Hold.library_asset_id == asset_id).count()
