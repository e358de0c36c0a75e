from library_manager.data.core.library_base import LibraryBase
from library_manager import db
from library_manager.buisness.circulation.state_machine import AssetStatusMachine


class LibraryAsset(LibraryBase):
    __tablename__ = 'library_assets'

    title = db.Column(db.String(255), nullable=False)
    year = db.Column(db.Integer, nullable=True)
    cost = db.Column(db.Numeric(10, 2), nullable=True)
    image_url = db.Column(db.String(255), nullable=True)
    number_of_copies = db.Column(db.Integer, nullable=False, default=1)
    # Only the circulation lifecycle writes this column
    status = db.Column(db.String(50), nullable=False, default=AssetStatusMachine.INITIAL_STATE)
    location_id = db.Column(db.Integer, db.ForeignKey('library_branches.id'), nullable=True)
    asset_type = db.Column(db.String(20), nullable=False)
    version_id = db.Column(db.Integer, nullable=False)

    # Relationships (no backrefs)
    location = db.relationship('LibraryBranch')

    __mapper_args__ = {
        'polymorphic_on': asset_type,
        'polymorphic_identity': 'Asset',
        'version_id_col': version_id,
    }

    @property
    def type_name(self) -> str:
        return self.asset_type

    @property
    def author_or_director(self) -> str:
        return ''

    @property
    def classification(self) -> str:
        """Dewey call number, empty for items that are not shelved by Dewey index"""
        return ''

    @property
    def isbn_or_empty(self) -> str:
        return ''

    def __repr__(self):
        return f'<{self.asset_type} {self.title} ({self.status})>'


class Book(LibraryAsset):
    author = db.Column(db.String(255), nullable=True)
    isbn = db.Column(db.String(20), nullable=True)
    dewey_index = db.Column(db.String(20), nullable=True)

    __mapper_args__ = {
        'polymorphic_identity': 'Book',
    }

    @property
    def author_or_director(self) -> str:
        return self.author or ''

    @property
    def classification(self) -> str:
        return self.dewey_index or ''

    @property
    def isbn_or_empty(self) -> str:
        return self.isbn or ''


class Video(LibraryAsset):
    director = db.Column(db.String(255), nullable=True)

    __mapper_args__ = {
        'polymorphic_identity': 'Video',
    }

    @property
    def author_or_director(self) -> str:
        return self.director or ''
