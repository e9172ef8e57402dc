"""Base API client with common functionality."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from befithub.errors import RequestError

logger = logging.getLogger(__name__)


@dataclass
class RequestMetrics:
    """Metrics for API requests."""
    
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_duration_ms: float = 0
    request_durations: list[float] = field(default_factory=list)
    
    def record_request(self, duration_ms: float, success: bool) -> None:
        """Record a request."""
        self.total_requests += 1
        self.total_duration_ms += duration_ms
        self.request_durations.append(duration_ms)
        if success:
            self.successful_requests += 1
        else:
            self.failed_requests += 1
    
    @property
    def avg_duration_ms(self) -> float:
        """Average request duration."""
        if not self.request_durations:
            return 0
        return sum(self.request_durations) / len(self.request_durations)
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "total_duration_ms": round(self.total_duration_ms, 2),
            "avg_duration_ms": round(self.avg_duration_ms, 2),
        }


class BaseAPIClient(ABC):
    """Base class for the third-party REST clients.
    
    Requests are made once: there is no retry, backoff or rate limiting.
    Any non-2xx status becomes a :class:`RequestError`.
    """
    
    # Used in error messages and log records
    name = "api"
    
    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """Initialize base API client.
        
        Args:
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            session: Optional requests session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.metrics = RequestMetrics()
        self.session = session or requests.Session()
    
    @abstractmethod
    def get_auth_headers(self) -> dict:
        """Get authentication headers for requests."""
        pass
    
    def get_auth_params(self) -> dict:
        """Get authentication query parameters for requests."""
        return {}
    
    def build_url(self, endpoint: str = "") -> str:
        """Join an endpoint with the base URL.
        
        Absolute URLs (e.g. pagination links) are returned unchanged.
        """
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        if not endpoint:
            return self.base_url
        return f"{self.base_url}/{endpoint.lstrip('/')}"
    
    def _error_message(self, response: requests.Response) -> str:
        """Build an error message, including the remote one when present."""
        message = response.reason or ""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            remote = body.get("message") or body.get("error_description")
            if isinstance(body.get("error"), dict):
                remote = remote or body["error"].get("message")
            message = remote or message
        return f"{self.name} API error: {response.status_code} {message}".strip()
    
    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
        authenticate: bool = True,
    ) -> requests.Response:
        """Make HTTP request with timing and logging.
        
        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (joined with base_url unless absolute)
            params: Query parameters; list values become repeated parameters
            headers: Additional headers
            authenticate: Whether to attach auth headers and params
            
        Returns:
            Response object
            
        Raises:
            RequestError: On transport failure or non-2xx responses
        """
        url = self.build_url(endpoint)
        
        request_headers = self.get_auth_headers() if authenticate else {}
        if headers:
            request_headers.update(headers)
        
        request_params = dict(params or {})
        if authenticate:
            request_params.update(self.get_auth_params())
        
        start_time = time.time()
        
        logger.debug(
            f"Making {method} request",
            extra={"url": url, "endpoint": endpoint, "source": self.name}
        )
        
        try:
            response = self.session.request(
                method=method,
                url=url,
                params=request_params or None,
                headers=request_headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            duration_ms = (time.time() - start_time) * 1000
            self.metrics.record_request(duration_ms, success=False)
            
            logger.error(
                "API request failed",
                extra={
                    "method": method,
                    "endpoint": endpoint,
                    "error": str(e),
                    "duration_ms": round(duration_ms, 2),
                }
            )
            raise RequestError(f"{self.name} request failed: {e}", endpoint=endpoint) from e
        
        duration_ms = (time.time() - start_time) * 1000
        self.metrics.record_request(duration_ms, success=response.ok)
        
        logger.info(
            "API request completed",
            extra={
                "source": self.name,
                "method": method,
                "endpoint": endpoint,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            }
        )
        
        if not response.ok:
            message = self._error_message(response)
            logger.error(message, extra={"endpoint": endpoint, "status_code": response.status_code})
            raise RequestError(message, status_code=response.status_code, endpoint=endpoint)
        
        return response
    
    def get(
        self,
        endpoint: str = "",
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
        authenticate: bool = True,
    ) -> Any:
        """Make GET request and return JSON response.
        
        Raises:
            RequestError: If the request fails or the body is not JSON
        """
        response = self._make_request(
            "GET", endpoint, params=params, headers=headers, authenticate=authenticate
        )
        try:
            return response.json()
        except ValueError as e:
            raise RequestError(
                f"{self.name} returned a non-JSON body",
                status_code=response.status_code,
                endpoint=endpoint,
            ) from e
