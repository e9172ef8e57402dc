"""API client wrappers for third-party nutrition data sources.

Each client handles:
- Authentication (cached OAuth2 token or static key)
- Request timing and logging
- Response contract checks
"""

from .base import BaseAPIClient, RequestMetrics
from .fatsecret import FatSecretClient
from .edamam import EdamamClient
from .spoonacular import SpoonacularClient

__all__ = [
    "BaseAPIClient",
    "RequestMetrics",
    "FatSecretClient",
    "EdamamClient",
    "SpoonacularClient",
]
