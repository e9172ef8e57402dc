"""Authentication for third-party nutrition APIs.

Supports:
- OAuth2 client_credentials with a cached bearer token (FatSecret)
- Static API keys in query parameters or headers (Edamam, Spoonacular)
"""

from .oauth2 import OAuth2Client, TokenInfo
from .api_key import APIKeyAuth, APIKeyLocation

__all__ = ["OAuth2Client", "TokenInfo", "APIKeyAuth", "APIKeyLocation"]
