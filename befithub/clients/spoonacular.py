"""Spoonacular ingredients API client - static API key."""

import logging
from typing import Optional

import requests

from befithub import config
from befithub.auth.api_key import APIKeyAuth, APIKeyLocation
from befithub.clients.base import BaseAPIClient
from befithub.transform.normalize import require_fields

logger = logging.getLogger(__name__)


class SpoonacularClient(BaseAPIClient):
    """Client for Spoonacular ingredient search and nutrition lookup."""
    
    name = "spoonacular"
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Spoonacular client.
        
        Args:
            api_key: API key (or from env: SPOONACULAR_API_KEY)
            base_url: API base URL
            timeout: Request timeout in seconds (or from env: HTTP_TIMEOUT)
            session: Optional requests session
            
        Raises:
            ConfigError: If the API key is missing
        """
        super().__init__(
            base_url=base_url or config.SPOONACULAR_BASE_URL,
            timeout=timeout or config.get_int_env("HTTP_TIMEOUT", config.DEFAULT_HTTP_TIMEOUT),
            session=session,
        )
        
        self.api_key_auth = APIKeyAuth(
            {"apiKey": api_key or config.get_env("SPOONACULAR_API_KEY")},
            location=APIKeyLocation.QUERY,
        )
    
    def get_auth_headers(self) -> dict:
        return self.api_key_auth.get_auth_header()
    
    def get_auth_params(self) -> dict:
        return self.api_key_auth.get_auth_params()
    
    def search_ingredients(self, query: str, number: int = 10) -> list[dict]:
        """Search generic ingredients.
        
        Returns:
            List of ``{"id", "name", "image"}`` results (empty if none)
        """
        response = self.get("search", params={"query": query, "number": number})
        results = []
        if isinstance(response, dict):
            results = response.get("results") or []
        
        for result in results:
            require_fields(result, ["id", "name"], context="spoonacular ingredient")
        
        logger.info(
            f"Found {len(results)} ingredients",
            extra={"source": self.name, "query": query, "record_count": len(results)}
        )
        return results
    
    def get_ingredient_nutrition(
        self,
        ingredient_id: int,
        amount: float = 100,
        unit: str = "g",
    ) -> dict:
        """Get nutrition information for an amount of an ingredient."""
        response = self.get(
            f"{ingredient_id}/information",
            params={"amount": amount, "unit": unit},
        )
        return require_fields(response, ["id"], context=f"spoonacular ingredient {ingredient_id}")
