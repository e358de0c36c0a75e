from library_manager.data.core.library_base import LibraryBase
from library_manager import db


class LibraryBranch(LibraryBase):
    __tablename__ = 'library_branches'

    name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.Text, nullable=True)
    telephone = db.Column(db.String(30), nullable=True)
    description = db.Column(db.Text, nullable=True)
    open_date = db.Column(db.Date, nullable=True)
    image_url = db.Column(db.String(255), nullable=True)

    def __repr__(self):
        return f'<LibraryBranch {self.name}>'
