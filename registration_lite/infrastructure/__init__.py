"""
Infrastructure layer - external system integrations.
Keeps orchestration logic clean from transport details.
"""

from .api_client import ApiClient, ApiFailure, ApiResult, ApiSuccess

__all__ = ['ApiClient', 'ApiFailure', 'ApiResult', 'ApiSuccess']
