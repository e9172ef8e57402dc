"""Argument parsing and exit handling shared by the scripts."""

import argparse
import logging
from typing import Callable, Optional

from befithub.config import load_env
from befithub.errors import BefitHubError
from befithub.utils import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser(description: str, firestore: bool = True) -> argparse.ArgumentParser:
    """Create a parser with the options every script accepts."""
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file (default: search from the working directory)",
    )
    if firestore:
        parser.add_argument(
            "--service-account",
            default=None,
            help="Firebase service-account key (default: $FIREBASE_SERVICE_ACCOUNT "
                 "or service-account.json)",
        )
    return parser


def run_script(
    name: str,
    func: Callable[[argparse.Namespace], Optional[dict]],
    args: argparse.Namespace,
) -> int:
    """Set up logging and the environment, run ``func`` and map the outcome to an exit code."""
    setup_logging(level=args.log_level, json_format=args.json_logs)
    load_env(args.env_file)
    
    try:
        result = func(args)
    except BefitHubError as e:
        logger.error(f"{name} failed: {e}", extra={"script": name, "error_type": type(e).__name__})
        return EXIT_FAILURE
    except Exception as e:
        logger.error(f"{name} failed: {e}", exc_info=True, extra={"script": name})
        return EXIT_FAILURE
    
    logger.info(f"{name} complete", extra={"script": name, "result": result or {}})
    return EXIT_OK
