from library_manager.data.core.library_base import LibraryBase
from library_manager import db


class CheckoutHistory(LibraryBase):
    __tablename__ = 'checkout_histories'

    library_asset_id = db.Column(db.Integer, db.ForeignKey('library_assets.id'), nullable=False, index=True)
    library_card_id = db.Column(db.Integer, db.ForeignKey('library_cards.id'), nullable=False)
    checked_out = db.Column(db.DateTime, nullable=False)
    checked_in = db.Column(db.DateTime, nullable=True)

    # Relationships (no backrefs)
    library_asset = db.relationship('LibraryAsset')
    library_card = db.relationship('LibraryCard')

    @property
    def is_open(self) -> bool:
        return self.checked_in is None

    def __repr__(self):
        return f'<CheckoutHistory asset={self.library_asset_id} {self.checked_out} - {self.checked_in}>'
