"""
Built-in payment providers. Importing this package registers them.
"""

from .free import FreeProvider
from .lawpay import LawPayProvider
from .stripe import StripeProvider

__all__ = ['FreeProvider', 'LawPayProvider', 'StripeProvider']
