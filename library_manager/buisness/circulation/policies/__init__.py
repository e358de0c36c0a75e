"""
Policy classes for circulation business rules

Policies are composable validation rules that enforce circulation invariants.
They raise domain exceptions when violations are detected.
"""

from library_manager.buisness.circulation.policies.single_checkout import SingleActiveCheckoutPolicy
from library_manager.buisness.circulation.policies.open_history import OpenHistoryPolicy

__all__ = [
    'SingleActiveCheckoutPolicy',
    'OpenHistoryPolicy',
]
