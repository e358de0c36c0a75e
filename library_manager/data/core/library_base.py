from library_manager import db
from datetime import datetime
from library_manager.buisness.core.data_insertion_mixin import DataInsertionMixin


class LibraryBase(db.Model, DataInsertionMixin):
    """Abstract base class for all library entities with audit timestamps"""

    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
