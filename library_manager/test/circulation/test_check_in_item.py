"""
Tests for returning assets, including hand-off to the earliest hold
"""
import logging

import pytest

from library_manager.buisness.circulation.errors import (
    AssetNotFoundError,
    InvalidTransitionError,
)
from library_manager.data.circulation.checkout import Checkout
from library_manager.data.circulation.checkout_history import CheckoutHistory


def test_check_in_without_holds(manager, clock, book, jane):
    manager.checkout_item(book.id, jane)
    returned_at = clock.advance(days=5)

    manager.check_in_item(book.id)

    assert book.status == 'Available'
    assert not manager.is_checked_out(book.id)
    assert manager.get_current_patron(book.id) == 'Not checked out'

    history = manager.get_checkout_history(book.id)
    assert len(history) == 1
    assert history[0].checked_in == returned_at


def test_check_in_hands_asset_to_earliest_hold(manager, clock, book, jane, margaret, dan):
    manager.checkout_item(book.id, jane)
    clock.advance(hours=1)
    manager.place_hold(book.id, margaret)
    clock.advance(hours=1)
    manager.place_hold(book.id, dan)
    returned_at = clock.advance(days=3)

    manager.check_in_item(book.id)

    assert book.status == 'Checked Out'
    assert manager.get_current_patron(book.id) == 'Margaret Smith'

    checkout = manager.get_latest_checkout(book.id)
    assert checkout.library_card_id == margaret
    assert checkout.since == returned_at
    assert Checkout.query.count() == 1

    holds = manager.get_current_holds(book.id)
    assert [hold.library_card_id for hold in holds] == [dan]

    history = manager.get_checkout_history(book.id)
    assert [record.library_card_id for record in history] == [jane, margaret]
    assert history[0].checked_in == returned_at
    assert history[1].checked_out == returned_at
    assert history[1].is_open


def test_holds_placed_at_same_instant_served_in_insertion_order(manager, book, jane, margaret, dan):
    manager.checkout_item(book.id, jane)
    manager.place_hold(book.id, dan)
    manager.place_hold(book.id, margaret)

    manager.check_in_item(book.id)

    assert manager.get_current_patron(book.id) == 'Dan Chen'


def test_hold_queue_drains_one_check_in_at_a_time(manager, clock, book, jane, margaret, dan):
    manager.checkout_item(book.id, jane)
    manager.place_hold(book.id, margaret)
    clock.advance(minutes=1)
    manager.place_hold(book.id, dan)

    manager.check_in_item(book.id)
    clock.advance(days=1)
    manager.check_in_item(book.id)
    assert manager.get_current_patron(book.id) == 'Dan Chen'

    clock.advance(days=1)
    manager.check_in_item(book.id)
    assert book.status == 'Available'
    assert manager.get_current_holds(book.id) == []
    assert len(manager.get_checkout_history(book.id)) == 3
    assert CheckoutHistory.query.filter(CheckoutHistory.checked_in.is_(None)).count() == 0


def test_check_in_without_checkout_warns(manager, book, caplog):
    caplog.set_level(logging.WARNING, logger='library_manager')

    manager.check_in_item(book.id)

    assert book.status == 'Available'
    assert any('no active checkout' in record.getMessage() for record in caplog.records)


def test_check_in_without_checkout_strict(manager, book):
    with pytest.raises(InvalidTransitionError):
        manager.check_in_item(book.id, strict=True)

    assert book.status == 'Available'


def test_check_in_of_lost_asset_with_open_loan(manager, book, jane):
    manager.checkout_item(book.id, jane)
    manager.mark_lost(book.id)

    manager.check_in_item(book.id)

    assert book.status == 'Available'
    assert Checkout.query.count() == 0


def test_check_in_of_available_asset_with_hold(manager, book, margaret):
    manager.place_hold(book.id, margaret)

    manager.check_in_item(book.id)

    assert book.status == 'Checked Out'
    assert manager.get_current_patron(book.id) == 'Margaret Smith'
    assert manager.get_current_holds(book.id) == []


def test_check_in_unknown_asset(manager):
    with pytest.raises(AssetNotFoundError):
        manager.check_in_item(9999)
