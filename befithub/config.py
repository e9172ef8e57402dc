"""Environment-backed configuration.

Values come from the process environment (optionally populated from a
``.env`` file by :func:`load_env`). Explicit constructor arguments on the
clients and loaders always take precedence over these lookups.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from befithub.errors import ConfigError

logger = logging.getLogger(__name__)

FATSECRET_TOKEN_URL = "https://oauth.fatsecret.com/connect/token"
FATSECRET_API_URL = "https://platform.fatsecret.com/rest/server.api"
FATSECRET_SCOPE = "basic"

EDAMAM_BASE_URL = "https://api.edamam.com/api/recipes/v2"
EDAMAM_ACCOUNT_USER = "befithub_user"

SPOONACULAR_BASE_URL = "https://api.spoonacular.com/food/ingredients"

DEFAULT_SERVICE_ACCOUNT = "service-account.json"
DEFAULT_HTTP_TIMEOUT = 30

# Firestore rejects write batches above 500 operations
FIRESTORE_MAX_BATCH_SIZE = 500
CATALOG_BATCH_SIZE = 400
EXERCISE_BATCH_SIZE = 100


def load_env(env_file: Optional[Union[str, Path]] = None) -> bool:
    """Load variables from a .env file into the environment.
    
    Existing environment variables are not overridden.
    
    Args:
        env_file: Optional explicit path (defaults to dotenv's lookup)
        
    Returns:
        True if a file was found and loaded
    """
    loaded = load_dotenv(dotenv_path=env_file)
    logger.debug("Environment loaded", extra={"env_file": str(env_file), "loaded": loaded})
    return loaded


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get an environment variable, treating empty strings as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def require_env(name: str, value: Optional[str] = None) -> str:
    """Return ``value`` or the named environment variable.
    
    Raises:
        ConfigError: If neither is set
    """
    value = value or get_env(name)
    if not value:
        raise ConfigError(f"{name} is required")
    return value


def get_int_env(name: str, default: int) -> int:
    """Get an integer environment variable.
    
    Raises:
        ConfigError: If the variable is set but not an integer
    """
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def service_account_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the Firebase service-account key path.
    
    Raises:
        ConfigError: If the file does not exist
    """
    resolved = Path(path or get_env("FIREBASE_SERVICE_ACCOUNT", DEFAULT_SERVICE_ACCOUNT))
    if not resolved.is_file():
        raise ConfigError(f"Service account file missing: {resolved}")
    return resolved
