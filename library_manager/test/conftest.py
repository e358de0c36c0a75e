"""
Pytest configuration and fixtures for circulation and catalog route tests
"""
import os
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

# Must be set before the application (and its logger) is imported
os.environ.setdefault('SECRET_KEY', 'test_secret_key_for_circulation_testing')
os.environ['LOG_TO_FILE'] = 'False'

from library_manager import create_app
from library_manager import db as _db
from library_manager.buisness.circulation.manager import CirculationManager
from library_manager.data.core.library_branch import LibraryBranch
from library_manager.data.core.asset_info.library_asset import Book, Video
from library_manager.data.core.patron_info.library_card import LibraryCard
from library_manager.data.core.patron_info.patron import Patron


class FakeClock:
    """Controllable clock; call it to read "now", advance() to move it forward"""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope='session')
def app():
    """Create Flask application for testing against an in-memory database"""
    app = create_app(test_config={
        'TESTING': True,
        'SECRET_KEY': 'test_secret_key_for_circulation_testing',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'LOAN_PERIOD_DAYS': 30,
        'WTF_CSRF_ENABLED': False,
        'SESSION_COOKIE_SECURE': False,
    })

    return app


@pytest.fixture(scope='function', autouse=True)
def app_context(app):
    """Fresh application context (and flask.g) for every test"""
    with app.app_context():
        yield


@pytest.fixture(scope='function', autouse=True)
def db(app, app_context):
    """Fresh schema for every test"""
    _db.create_all()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def clock():
    return FakeClock()


@pytest.fixture(scope='function')
def manager(clock):
    return CirculationManager(clock=clock, loan_period=timedelta(days=30))


@pytest.fixture(scope='function')
def branch(db):
    branch = LibraryBranch(name='Central Library', address='1 Main Street', telephone='555-0100')
    db.session.add(branch)
    db.session.commit()
    return branch


@pytest.fixture(scope='function')
def book(db, branch):
    book = Book(
        title='Emma',
        author='Jane Austen',
        isbn='9780141439587',
        dewey_index='823.7',
        year=1815,
        cost=Decimal('12.99'),
        location_id=branch.id,
    )
    db.session.add(book)
    db.session.commit()
    return book


@pytest.fixture(scope='function')
def video(db, branch):
    video = Video(title='Blue Velvet', director='David Lynch', year=1986, cost=Decimal('19.99'),
                  location_id=branch.id)
    db.session.add(video)
    db.session.commit()
    return video


@pytest.fixture(scope='function')
def make_patron(db, branch):
    """Factory creating a patron with a fresh library card; returns the card id"""
    def _make_patron(first_name, last_name):
        card = LibraryCard(fees=0)
        db.session.add(card)
        db.session.flush()
        db.session.add(Patron(
            first_name=first_name,
            last_name=last_name,
            library_card_id=card.id,
            home_branch_id=branch.id,
        ))
        db.session.commit()
        return card.id

    return _make_patron


@pytest.fixture(scope='function')
def jane(make_patron):
    return make_patron('Jane', 'Patterson')


@pytest.fixture(scope='function')
def margaret(make_patron):
    return make_patron('Margaret', 'Smith')


@pytest.fixture(scope='function')
def dan(make_patron):
    return make_patron('Dan', 'Chen')
