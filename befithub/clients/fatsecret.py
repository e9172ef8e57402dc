"""FatSecret Platform API client - OAuth2 client credentials."""

import logging
from typing import Any, Optional

import requests

from befithub import config
from befithub.auth.oauth2 import OAuth2Client
from befithub.clients.base import BaseAPIClient
from befithub.errors import DataError, RequestError
from befithub.transform.normalize import require_fields

logger = logging.getLogger(__name__)

FOOD_FIELDS = ["food_id", "food_name"]


class FatSecretClient(BaseAPIClient):
    """Client for the FatSecret REST API (``server.api`` method dispatch).
    
    Every query obtains a bearer token through :class:`OAuth2Client`, which
    reuses its cached token until shortly before expiry.
    """
    
    name = "fatsecret"
    
    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        api_url: Optional[str] = None,
        token_url: Optional[str] = None,
        scope: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
        oauth_client: Optional[OAuth2Client] = None,
    ):
        """Initialize FatSecret client.
        
        Args:
            client_id: OAuth2 client ID (or from env: FATSECRET_CLIENT_ID)
            client_secret: OAuth2 client secret (or from env: FATSECRET_CLIENT_SECRET)
            api_url: REST endpoint (or from env: FATSECRET_API_URL)
            token_url: OAuth2 token URL (or from env: FATSECRET_TOKEN_URL)
            scope: OAuth2 scope (or from env: FATSECRET_SCOPE, default "basic")
            timeout: Request timeout in seconds (or from env: HTTP_TIMEOUT)
            session: Optional requests session
            oauth_client: Optional pre-built token client
            
        Raises:
            ConfigError: If the client ID or secret is missing
        """
        super().__init__(
            base_url=api_url or config.get_env("FATSECRET_API_URL", config.FATSECRET_API_URL),
            timeout=timeout or config.get_int_env("HTTP_TIMEOUT", config.DEFAULT_HTTP_TIMEOUT),
            session=session,
        )
        
        self.oauth_client = oauth_client or OAuth2Client(
            client_id=client_id or config.get_env("FATSECRET_CLIENT_ID"),
            client_secret=client_secret or config.get_env("FATSECRET_CLIENT_SECRET"),
            token_url=token_url or config.get_env("FATSECRET_TOKEN_URL", config.FATSECRET_TOKEN_URL),
            scope=scope or config.get_env("FATSECRET_SCOPE", config.FATSECRET_SCOPE),
            timeout=self.timeout,
            session=self.session,
        )
    
    @staticmethod
    def has_credentials() -> bool:
        """Check whether FatSecret credentials are present in the environment."""
        return bool(config.get_env("FATSECRET_CLIENT_ID") and config.get_env("FATSECRET_CLIENT_SECRET"))
    
    def get_auth_headers(self) -> dict:
        """Get OAuth2 bearer headers."""
        return self.oauth_client.get_auth_header()
    
    def query(self, params: dict) -> dict:
        """Call a FatSecret method and return the parsed JSON.
        
        Args:
            params: Query parameters, including ``method``
            
        Raises:
            AuthError: If a token cannot be obtained
            RequestError: On non-2xx status or an ``error`` object in the body
        """
        response = self.get(params={**params, "format": "json"})
        
        if not isinstance(response, dict):
            raise DataError([f"fatsecret: expected an object, got {type(response).__name__}"])
        
        # Application-level failures come back with HTTP 200
        error = response.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message") if isinstance(error, dict) else error
            raise RequestError(
                f"FatSecret API error ({code}): {message}",
                endpoint=params.get("method"),
            )
        
        return response
    
    def search_foods(
        self,
        query: str,
        region: Optional[str] = "ES",
        language: Optional[str] = "es",
        max_results: Optional[int] = None,
    ) -> list[dict]:
        """Search foods by free-text expression.
        
        Returns:
            List of food records (empty when nothing matched)
        """
        params: dict[str, Any] = {
            "method": "foods.search",
            "search_expression": query,
        }
        if region:
            params["region"] = region
        if language:
            params["language"] = language
        if max_results:
            params["max_results"] = max_results
        
        response = self.query(params)
        
        foods = (response.get("foods") or {}).get("food")
        if not foods:
            logger.info("No foods found", extra={"query": query})
            return []
        
        # A single match is returned as an object rather than a list
        if isinstance(foods, dict):
            foods = [foods]
        
        for food in foods:
            require_fields(food, FOOD_FIELDS, context="fatsecret food")
        
        logger.info(
            f"Found {len(foods)} foods",
            extra={"source": self.name, "query": query, "record_count": len(foods)}
        )
        return foods
    
    def get_food(self, food_id: str) -> dict:
        """Get detailed food information.
        
        Raises:
            DataError: If the response has no ``food`` object
        """
        response = self.query({"method": "food.get.v2", "food_id": food_id})
        food = response.get("food")
        if food is None:
            raise DataError([f"fatsecret: response for food {food_id} has no 'food'"])
        return require_fields(food, FOOD_FIELDS, context="fatsecret food")
