"""
Core models package for the Library Manager
"""

from .library_branch import LibraryBranch
from .asset_info.library_asset import LibraryAsset, Book, Video
from .patron_info.library_card import LibraryCard
from .patron_info.patron import Patron

__all__ = [
    'LibraryBranch',
    'LibraryAsset',
    'Book',
    'Video',
    'LibraryCard',
    'Patron',
]
