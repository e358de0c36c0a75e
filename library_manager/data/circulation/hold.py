from library_manager.data.core.library_base import LibraryBase
from library_manager import db


class Hold(LibraryBase):
    __tablename__ = 'holds'

    library_asset_id = db.Column(db.Integer, db.ForeignKey('library_assets.id'), nullable=False, index=True)
    library_card_id = db.Column(db.Integer, db.ForeignKey('library_cards.id'), nullable=False)
    hold_placed = db.Column(db.DateTime, nullable=False)

    # Relationships (no backrefs)
    library_asset = db.relationship('LibraryAsset')
    library_card = db.relationship('LibraryCard')

    def __repr__(self):
        return f'<Hold asset={self.library_asset_id} card={self.library_card_id} placed={self.hold_placed}>'
