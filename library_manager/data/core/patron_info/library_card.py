from library_manager.data.core.library_base import LibraryBase
from library_manager import db


class LibraryCard(LibraryBase):
    __tablename__ = 'library_cards'

    fees = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    def __repr__(self):
        return f'<LibraryCard {self.id}>'
