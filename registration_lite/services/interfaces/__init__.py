"""
Service interfaces for dependency inversion.
Payment back-ends plug in here without the orchestration knowing about them.
"""

from .payment_provider import PaymentProvider, ProviderContext, get_provider_class, register_provider

__all__ = ['PaymentProvider', 'ProviderContext', 'get_provider_class', 'register_provider']
