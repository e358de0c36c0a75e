from library_manager.data.core.library_base import LibraryBase
from library_manager import db


class Patron(LibraryBase):
    __tablename__ = 'patrons'

    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.Text, nullable=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    telephone = db.Column(db.String(30), nullable=True)
    library_card_id = db.Column(db.Integer, db.ForeignKey('library_cards.id'), unique=True, nullable=True)
    home_branch_id = db.Column(db.Integer, db.ForeignKey('library_branches.id'), nullable=True)

    # Relationships (no backrefs)
    library_card = db.relationship('LibraryCard')
    home_branch = db.relationship('LibraryBranch')

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f'<Patron {self.display_name}>'
