from library_manager.data.core.library_base import LibraryBase
from library_manager import db


class Checkout(LibraryBase):
    __tablename__ = 'checkouts'

    # One active loan per asset
    library_asset_id = db.Column(db.Integer, db.ForeignKey('library_assets.id'), unique=True, nullable=False)
    library_card_id = db.Column(db.Integer, db.ForeignKey('library_cards.id'), nullable=False)
    since = db.Column(db.DateTime, nullable=False)
    until = db.Column(db.DateTime, nullable=False)

    # Relationships (no backrefs)
    library_asset = db.relationship('LibraryAsset')
    library_card = db.relationship('LibraryCard')

    def __repr__(self):
        return f'<Checkout asset={self.library_asset_id} card={self.library_card_id} until={self.until}>'
