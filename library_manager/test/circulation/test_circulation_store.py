"""
Tests for the circulation store transaction boundary and invariant policies
"""
from datetime import datetime, timedelta

import pytest

from library_manager.buisness.circulation.errors import ConcurrencyConflictError
from library_manager.buisness.circulation.policies import (
    SingleActiveCheckoutPolicy,
    OpenHistoryPolicy,
)
from library_manager.data.circulation.checkout import Checkout
from library_manager.data.circulation.checkout_history import CheckoutHistory
from library_manager.data.circulation.store import CirculationStore
from library_manager.data.core.library_branch import LibraryBranch


def test_transaction_commits():
    store = CirculationStore()

    with store.transaction():
        store.add(LibraryBranch(name='East Branch'))

    store.session.expire_all()
    assert LibraryBranch.query.filter_by(name='East Branch').count() == 1


def test_transaction_rolls_back_on_error():
    store = CirculationStore()

    with pytest.raises(ValueError):
        with store.transaction():
            store.add(LibraryBranch(name='West Branch'))
            store.flush()
            raise ValueError('boom')

    assert LibraryBranch.query.filter_by(name='West Branch').count() == 0


def test_nested_transaction_joins_outer():
    store = CirculationStore()

    with pytest.raises(ValueError):
        with store.transaction():
            with store.transaction():
                store.add(LibraryBranch(name='North Branch'))
            raise ValueError('outer failed after inner block')

    assert LibraryBranch.query.filter_by(name='North Branch').count() == 0


def test_unique_violation_becomes_conflict(book, jane, margaret):
    store = CirculationStore()
    now = datetime(2024, 1, 1)

    with pytest.raises(ConcurrencyConflictError):
        with store.transaction():
            for card_id in (jane, margaret):
                store.add(Checkout(library_asset_id=book.id, library_card_id=card_id,
                                   since=now, until=now + timedelta(days=30)))

    assert Checkout.query.count() == 0


def test_get_asset_with_lock(book):
    assert CirculationStore().get_asset(book.id, lock=True).title == 'Emma'


def test_latest_checkout_and_hold_count(manager, book, jane, margaret, dan):
    store = manager.store
    manager.checkout_item(book.id, jane)
    manager.place_hold(book.id, margaret)
    manager.place_hold(book.id, dan)

    assert store.latest_checkout_for(book.id).library_card_id == jane
    assert store.hold_count_for(book.id) == 2
    assert manager.hold_manager.has_holds(book.id)
    assert manager.hold_manager.earliest_hold(book.id).library_card_id == margaret


def test_policies_satisfied_after_lifecycle(manager, book, jane, margaret):
    manager.checkout_item(book.id, jane)
    manager.place_hold(book.id, margaret)
    manager.check_in_item(book.id)

    assert SingleActiveCheckoutPolicy.is_satisfied(manager.store, book.id)
    assert OpenHistoryPolicy.is_satisfied(manager.store, book.id)


def test_open_history_policy_detects_two_open_records(book, jane, margaret):
    store = CirculationStore()
    now = datetime(2024, 1, 1)
    for card_id in (jane, margaret):
        store.add(CheckoutHistory(library_asset_id=book.id, library_card_id=card_id, checked_out=now))
    store.flush()

    assert not OpenHistoryPolicy.is_satisfied(store, book.id)
    with pytest.raises(ConcurrencyConflictError):
        OpenHistoryPolicy.check(store, book.id)

    store.session.rollback()
