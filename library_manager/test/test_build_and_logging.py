"""
Tests for the database build, debug data insertion and application logger
"""
import json
import logging

import pytest

from library_manager.build import build_database
from library_manager.buisness.circulation.manager import CirculationManager
from library_manager.debug.add_circulation_debugging_data import (
    insert_circulation_debug_data,
    load_debug_data,
)
from library_manager.utils.logger import JsonFormatter, get_logger
from library_manager.data.core.library_branch import LibraryBranch
from library_manager.data.core.asset_info.library_asset import LibraryAsset
from library_manager.data.core.patron_info.patron import Patron
from library_manager.data.circulation.checkout import Checkout
from library_manager.data.circulation.hold import Hold
from library_manager.data.circulation.checkout_history import CheckoutHistory


def test_debug_data_file_loads():
    data = load_debug_data()

    assert len(data['Core']['Branches']) == 2
    assert data['Circulation']['Lost'] == ['Blue Velvet']


def test_build_database_with_debug_data(app):
    build_database(enable_debug_data=True, app=app)

    assert LibraryBranch.query.count() == 2
    assert LibraryAsset.query.count() == 4
    assert Patron.query.count() == 3

    emma = LibraryAsset.query.filter_by(title='Emma').one()
    assert emma.status == 'Checked Out'
    assert emma.type_name == 'Book'
    assert Checkout.query.filter_by(library_asset_id=emma.id).count() == 1
    assert CheckoutHistory.query.filter_by(library_asset_id=emma.id).count() == 1
    assert Hold.query.filter_by(library_asset_id=emma.id).count() == 1

    assert LibraryAsset.query.filter_by(title='Blue Velvet').one().status == 'Lost'
    assert LibraryAsset.query.filter_by(title='Ulysses').one().status == 'Available'


def test_debug_data_is_inserted_once(app):
    build_database(enable_debug_data=True, app=app)
    insert_circulation_debug_data()

    assert LibraryBranch.query.count() == 2
    assert Checkout.query.count() == 1


def test_failed_debug_data_leaves_nothing_and_can_be_retried(app, monkeypatch):
    def failing_mark_lost(self, asset_id):
        raise RuntimeError('mark lost failed')

    monkeypatch.setattr(CirculationManager, 'mark_lost', failing_mark_lost)
    with pytest.raises(RuntimeError):
        insert_circulation_debug_data()

    assert LibraryBranch.query.count() == 0
    assert LibraryAsset.query.count() == 0
    assert Checkout.query.count() == 0
    assert Hold.query.count() == 0

    monkeypatch.undo()
    insert_circulation_debug_data()

    assert LibraryBranch.query.count() == 2
    assert Checkout.query.count() == 1
    assert LibraryAsset.query.filter_by(title='Blue Velvet').one().status == 'Lost'


def test_build_only_creates_no_rows(app):
    build_database(enable_debug_data=True, build_only=True, app=app)

    assert LibraryBranch.query.count() == 0


def test_loggers_nest_under_application_root():
    assert get_logger('library_manager.circulation').name == 'library_manager.circulation'
    assert get_logger('reports').name == 'library_manager.reports'
    assert get_logger() is get_logger('library_manager')


def test_json_formatter():
    formatter = JsonFormatter({'level': 'levelname', 'logger': 'name', 'message': 'message'})
    record = logging.LogRecord('library_manager.circulation', logging.INFO, __file__, 1,
                               'Asset %s checked in', (7,), None)

    assert json.loads(formatter.format(record)) == {
        'level': 'INFO',
        'logger': 'library_manager.circulation',
        'message': 'Asset 7 checked in',
    }
