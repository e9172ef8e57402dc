"""Exception hierarchy shared by the API clients, loaders and scripts."""

from typing import Optional


class BefitHubError(Exception):
    """Base class for all errors raised by befithub."""


class ConfigError(BefitHubError, ValueError):
    """Raised when a credential, environment variable or input file is missing."""


class AuthError(BefitHubError):
    """Raised when a token exchange is rejected."""
    
    def __init__(
        self,
        description: str,
        status_code: Optional[int] = None,
    ):
        self.description = description
        self.status_code = status_code
        super().__init__(
            f"Authentication failed ({status_code}): {description}"
            if status_code is not None
            else f"Authentication failed: {description}"
        )


class RequestError(BefitHubError):
    """Raised on a non-success response or an API-level error payload."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class DataError(BefitHubError, ValueError):
    """Raised when a record or response is missing expected fields."""
    
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Validation failed: {errors}")
