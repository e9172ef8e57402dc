"""Static API key authentication."""

import logging
from enum import Enum
from typing import Optional

from befithub.errors import ConfigError

logger = logging.getLogger(__name__)


class APIKeyLocation(Enum):
    """Where to place the API key in requests."""
    
    HEADER = "header"
    QUERY = "query"


class APIKeyAuth:
    """API key authentication handler.
    
    Holds one or more static key/value pairs and places them in headers or
    query parameters. Edamam needs two (``app_id`` and ``app_key``),
    Spoonacular one (``apiKey``).
    """
    
    def __init__(
        self,
        credentials: dict[str, Optional[str]],
        location: APIKeyLocation = APIKeyLocation.QUERY,
    ):
        """Initialize API key auth.
        
        Args:
            credentials: Mapping of header/parameter name to key value
            location: Where to place the keys (header or query)
            
        Raises:
            ConfigError: If any key value is missing
        """
        missing = [name for name, value in credentials.items() if not value]
        if missing:
            raise ConfigError(f"Missing API key(s): {', '.join(missing)}")
        
        self.credentials = dict(credentials)
        self.location = location
        
        logger.debug(
            "APIKeyAuth initialized",
            extra={"key_names": list(credentials), "location": location.value}
        )
    
    def get_auth_header(self) -> dict:
        """Get authorization header dict for requests.
        
        Returns empty dict if location is QUERY.
        """
        if self.location == APIKeyLocation.HEADER:
            return dict(self.credentials)
        return {}
    
    def get_auth_params(self) -> dict:
        """Get query parameters dict for requests.
        
        Returns empty dict if location is HEADER.
        """
        if self.location == APIKeyLocation.QUERY:
            return dict(self.credentials)
        return {}
