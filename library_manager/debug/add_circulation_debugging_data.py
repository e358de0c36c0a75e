#!/usr/bin/env python3
"""
Circulation Debug Data Insertion
Inserts debug data for the catalog (branches, books, videos, patrons with cards)
and drives a few circulation transitions through CirculationManager.
"""

import json
from datetime import date
from pathlib import Path
from library_manager import db
from library_manager.utils.logger import get_logger

logger = get_logger("library_manager.debug.circulation")

DEBUG_DATA_FILE = Path(__file__).parent / 'data' / 'circulation.json'


def load_debug_data(path=DEBUG_DATA_FILE):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def insert_circulation_debug_data(debug_data=None):
    """
    Insert debug data for catalog and circulation

    Args:
        debug_data (dict): Debug data; loaded from data/circulation.json when omitted

    Raises:
        Exception: If insertion fails (fail-fast)
    """
    if debug_data is None:
        debug_data = load_debug_data()

    if not debug_data:
        logger.info("No circulation debug data to insert")
        return

    from library_manager.data.core.library_branch import LibraryBranch
    if LibraryBranch.query.first() is not None:
        logger.info("Catalog already populated, skipping debug data")
        return

    logger.info("Inserting circulation debug data...")

    from library_manager.buisness.circulation.manager import CirculationManager
    manager = CirculationManager.from_app_config()

    # Catalog rows and circulation share one transaction: the manager's own
    # transactions join this one, so a failure leaves nothing behind
    try:
        with manager.store.transaction():
            core = debug_data.get('Core', {})
            branches = _insert_branches(core.get('Branches', []))
            assets = _insert_assets(core.get('Books', []), core.get('Videos', []), branches)
            patrons = _insert_patrons(core.get('Patrons', []), branches)
            _apply_circulation(manager, debug_data.get('Circulation', {}), assets, patrons)
    except Exception as e:
        logger.error(f"Failed to insert circulation debug data: {e}")
        raise

    logger.info("Successfully inserted circulation debug data")


def _parse_date(value):
    return date.fromisoformat(value) if value else None


def _insert_branches(branch_list):
    from library_manager.data.core.library_branch import LibraryBranch

    rows = [dict(branch_data, open_date=_parse_date(branch_data.get('open_date'))) for branch_data in branch_list]
    branches = {branch.name: branch for branch in LibraryBranch.bulk_create_from_dicts(rows, commit=False)}
    logger.info(f"Inserted {len(branches)} branches")
    return branches


def _insert_assets(book_list, video_list, branches):
    from decimal import Decimal
    from library_manager.data.core.asset_info.library_asset import Book, Video

    assets = {}
    for model, items in ((Book, book_list), (Video, video_list)):
        for item in items:
            branch = branches.get(item.get('branch'))
            data = dict(item, location_id=branch.id if branch else None)
            if data.get('cost') is not None:
                data['cost'] = Decimal(data['cost'])
            asset = model.from_dict(data)
            db.session.add(asset)
            assets[asset.title] = asset
    db.session.flush()
    logger.info(f"Inserted {len(assets)} library assets")
    return assets


def _insert_patrons(patron_list, branches):
    from library_manager.data.core.patron_info.library_card import LibraryCard
    from library_manager.data.core.patron_info.patron import Patron

    patrons = {}
    for patron_data in patron_list:
        card = LibraryCard(fees=0)
        db.session.add(card)
        db.session.flush()

        branch = branches.get(patron_data.get('home_branch'))
        data = dict(
            patron_data,
            date_of_birth=_parse_date(patron_data.get('date_of_birth')),
            library_card_id=card.id,
            home_branch_id=branch.id if branch else None,
        )
        patron = Patron.from_dict(data)
        db.session.add(patron)
        patrons[patron.display_name] = patron
    db.session.flush()
    logger.info(f"Inserted {len(patrons)} patrons with library cards")
    return patrons


def _apply_circulation(manager, circulation, assets, patrons):
    for entry in circulation.get('Checkouts', []):
        asset = assets[entry['title']]
        manager.checkout_item(asset.id, patrons[entry['patron']].library_card_id)

    for entry in circulation.get('Holds', []):
        asset = assets[entry['title']]
        manager.place_hold(asset.id, patrons[entry['patron']].library_card_id)

    for title in circulation.get('Lost', []):
        manager.mark_lost(assets[title].id)
