"""Edamam Recipe Search API client - static app ID / key."""

import logging
from typing import Any, Optional

import requests

from befithub import config
from befithub.auth.api_key import APIKeyAuth, APIKeyLocation
from befithub.clients.base import BaseAPIClient
from befithub.errors import DataError
from befithub.transform.normalize import require_fields

logger = logging.getLogger(__name__)

# Fields requested by default to keep the payload small
DEFAULT_FIELDS = [
    "uri",
    "label",
    "image",
    "images",
    "source",
    "url",
    "yield",
    "dietLabels",
    "healthLabels",
    "cautions",
    "ingredientLines",
    "calories",
    "totalWeight",
    "totalTime",
    "cuisineType",
    "mealType",
    "dishType",
    "totalNutrients",
    "totalDaily",
]


class EdamamClient(BaseAPIClient):
    """Client for Edamam recipe search (v2)."""
    
    name = "edamam"
    
    def __init__(
        self,
        app_id: Optional[str] = None,
        app_key: Optional[str] = None,
        account_user: Optional[str] = None,
        base_url: Optional[str] = None,
        fields: Optional[list[str]] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Edamam client.
        
        Args:
            app_id: Application ID (or from env: EDAMAM_APP_ID)
            app_key: Application key (or from env: EDAMAM_APP_KEY)
            account_user: Value of the Edamam-Account-User header
            base_url: API base URL
            fields: Recipe fields to request (default: DEFAULT_FIELDS)
            timeout: Request timeout in seconds (or from env: HTTP_TIMEOUT)
            session: Optional requests session
            
        Raises:
            ConfigError: If the app ID or key is missing
        """
        super().__init__(
            base_url=base_url or config.EDAMAM_BASE_URL,
            timeout=timeout or config.get_int_env("HTTP_TIMEOUT", config.DEFAULT_HTTP_TIMEOUT),
            session=session,
        )
        
        self.api_key_auth = APIKeyAuth(
            {
                "app_id": app_id or config.get_env("EDAMAM_APP_ID"),
                "app_key": app_key or config.get_env("EDAMAM_APP_KEY"),
            },
            location=APIKeyLocation.QUERY,
        )
        self.account_user = account_user or config.get_env(
            "EDAMAM_ACCOUNT_USER", config.EDAMAM_ACCOUNT_USER
        )
        self.fields = fields if fields is not None else list(DEFAULT_FIELDS)
    
    def get_auth_headers(self) -> dict:
        """Edamam identifies the end user by header; the keys go in the query."""
        return {"Edamam-Account-User": self.account_user}
    
    def get_auth_params(self) -> dict:
        """Get app_id / app_key query parameters."""
        return self.api_key_auth.get_auth_params()
    
    def search_recipes(
        self,
        q: Optional[str] = None,
        meal_type: Optional[str] = None,
        health: Optional[list[str]] = None,
        cuisine_type: Optional[list[str]] = None,
        next_page_url: Optional[str] = None,
    ) -> dict:
        """Search public recipes.
        
        Args:
            q: Query string (e.g. "chicken")
            meal_type: Breakfast, Lunch, Dinner, Snack or Teatime
            health: Health labels (e.g. ["vegan", "gluten-free"])
            cuisine_type: Cuisine types (e.g. ["Asian"])
            next_page_url: Link from a previous response; fetched as-is
            
        Returns:
            Response with ``hits`` and pagination ``_links``
            
        Raises:
            RequestError: On non-2xx status
            DataError: If the response has no ``hits`` list
        """
        if next_page_url:
            # The link already carries type, keys and filters
            logger.info("Fetching next page of recipes")
            response = self.get(
                next_page_url,
                headers=self.get_auth_headers(),
                authenticate=False,
            )
        else:
            params: dict[str, Any] = {"type": "public"}
            if q:
                params["q"] = q
            if meal_type:
                params["mealType"] = meal_type
            if health:
                params["health"] = list(health)
            if cuisine_type:
                params["cuisineType"] = list(cuisine_type)
            if self.fields:
                params["field"] = list(self.fields)
            
            logger.info("Searching recipes", extra={"query": q, "meal_type": meal_type})
            response = self.get(params=params)
        
        require_fields(response, ["hits"], context="edamam search")
        if not isinstance(response["hits"], list):
            raise DataError(["edamam search: 'hits' is not a list"])
        
        logger.info(
            f"Found {len(response['hits'])} recipes",
            extra={"source": self.name, "record_count": len(response["hits"])}
        )
        return response
    
    def get_recipe(self, recipe_id: str) -> dict:
        """Get a recipe by ID (the fragment after ``#recipe_`` in its URI).
        
        Raises:
            DataError: If the response has no ``recipe`` object
        """
        response = self.get(recipe_id, params={"type": "public"})
        require_fields(response, ["recipe"], context=f"edamam recipe {recipe_id}")
        return response
    
    @staticmethod
    def next_page_url(response: dict) -> Optional[str]:
        """Extract the next page link from a search response, if any."""
        return ((response.get("_links") or {}).get("next") or {}).get("href")
