"""OAuth2 client-credentials authentication with an in-memory token cache."""

import time
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import requests
from requests.auth import HTTPBasicAuth

from befithub.errors import AuthError, ConfigError

logger = logging.getLogger(__name__)


@dataclass
class TokenInfo:
    """Cached bearer credential.
    
    ``expires_at`` is already reduced by the client's safety margin.
    """
    
    access_token: str
    token_type: str
    expires_at: float
    scope: Optional[str] = None


class OAuth2Client:
    """OAuth2 client_credentials client that caches its bearer token.
    
    A token is reused while ``now < expires_at`` and re-requested once that
    no longer holds. Two calls made while the token is expired trigger two
    independent exchanges; nothing is retried.
    """
    
    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        token_url: str,
        scope: Optional[str] = None,
        token_expiry_buffer: int = 60,
        default_expires_in: int = 3600,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize OAuth2 client.
        
        Args:
            client_id: OAuth2 client ID
            client_secret: OAuth2 client secret
            token_url: Token endpoint URL
            scope: Optional scope(s) to request
            token_expiry_buffer: Seconds subtracted from the token lifetime
            default_expires_in: Lifetime assumed when the response omits it
            timeout: Token request timeout in seconds
            session: Optional requests session (shared with the API client)
            clock: Time source returning epoch seconds
            
        Raises:
            ConfigError: If client ID or secret is missing
        """
        if not client_id or not client_secret:
            raise ConfigError("OAuth2 client ID and client secret are required")
        
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.scope = scope
        self.token_expiry_buffer = token_expiry_buffer
        self.default_expires_in = default_expires_in
        self.timeout = timeout
        self.session = session or requests.Session()
        self._clock = clock
        self._token_info: Optional[TokenInfo] = None
    
    @property
    def token_info(self) -> Optional[TokenInfo]:
        """Currently cached credential, if any."""
        return self._token_info
    
    def get_access_token(self) -> str:
        """Get valid access token, requesting a new one if necessary."""
        if self._is_token_expired():
            self._request_token()
        return self._token_info.access_token
    
    def invalidate(self) -> None:
        """Drop the cached token so the next call re-authenticates."""
        self._token_info = None
    
    def _is_token_expired(self) -> bool:
        """Check if there is no usable cached token."""
        if self._token_info is None:
            return True
        return self._clock() >= self._token_info.expires_at
    
    def _request_token(self) -> None:
        """Exchange client credentials for a bearer token and cache it.
        
        Raises:
            AuthError: On a non-success status or a body without a token
        """
        logger.info("Requesting new access token via client_credentials grant")
        
        # An expired token must never survive a failed exchange
        self._token_info = None
        
        data = {"grant_type": "client_credentials"}
        if self.scope:
            data["scope"] = self.scope
        
        try:
            response = self.session.post(
                self.token_url,
                data=data,
                auth=HTTPBasicAuth(self.client_id, self.client_secret),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("Token request failed", extra={"error": str(e)})
            raise AuthError(str(e)) from e
        
        if not response.ok:
            description = self._error_description(response)
            logger.error(
                "Token request rejected",
                extra={"status_code": response.status_code, "error": description},
            )
            raise AuthError(description, status_code=response.status_code)
        
        try:
            token_data = response.json()
        except ValueError as e:
            raise AuthError("Token response was not valid JSON",
                            status_code=response.status_code) from e
        if not isinstance(token_data, dict) or not token_data.get("access_token"):
            raise AuthError("Token response did not include an access_token",
                            status_code=response.status_code)
        
        expires_in = token_data.get("expires_in")
        if expires_in is None:
            expires_in = self.default_expires_in
        
        self._token_info = TokenInfo(
            access_token=token_data["access_token"],
            token_type=token_data.get("token_type") or "Bearer",
            expires_at=self._clock() + float(expires_in) - self.token_expiry_buffer,
            scope=token_data.get("scope", self.scope),
        )
        
        logger.info(
            "Token obtained successfully",
            extra={
                "token_type": self._token_info.token_type,
                "expires_in": expires_in,
            }
        )
    
    @staticmethod
    def _error_description(response: requests.Response) -> str:
        """Extract the remote error description from a failed token response."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if isinstance(body, dict):
            description = body.get("error_description") or body.get("error")
            if description:
                return str(description)
        return f"Token endpoint returned {response.status_code} {response.reason or ''}".strip()
    
    def get_auth_header(self) -> dict:
        """Get authorization header dict for requests."""
        token = self.get_access_token()
        return {"Authorization": f"{self._token_info.token_type} {token}"}
