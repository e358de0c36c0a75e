"""
Circulation models package
Checkout (active loan), CheckoutHistory (loan audit trail) and Hold (reservation queue),
plus the CirculationStore that the business layer reads and writes them through.
"""

from .checkout import Checkout
from .checkout_history import CheckoutHistory
from .hold import Hold

__all__ = [
    'Checkout',
    'CheckoutHistory',
    'Hold',
]
