"""Shared plumbing for the erc3 command-line tools."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from erc3.client import ERC3
from erc3.config import (
    API_KEY_ENV,
    BASE_URL_ENV,
    DEFAULT_BASE_URL,
    load_config,
    read_config_file,
)
from erc3.errors import ApiError

logger = logging.getLogger("erc3.cli")

ENV_HELP = f"""environment variables:
  {API_KEY_ENV}          API key for authentication (required)
  {BASE_URL_ENV}         Base URL (default: {DEFAULT_BASE_URL})
  DEBUG                 Print debug logs and API error details
"""


def debug_enabled(args=None) -> bool:
    return bool(getattr(args, "verbose", False) or os.environ.get("DEBUG"))


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", default=None,
        help="YAML file with api_key, base_url and timeout (env vars take precedence)",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")


def configure_logging(args) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug_enabled(args) else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def build_client(args) -> ERC3:
    """Create a client from ``--config`` and the environment."""
    config = load_config(getattr(args, "config", None))
    logger.debug(f"Using ERC3 API at {config.base_url}")
    return ERC3.from_config(config)


def resolve_base_url(args) -> str:
    """Base URL for calls that need no API key."""
    path = getattr(args, "config", None)
    file_cfg = read_config_file(path) if path else {}
    return os.environ.get(BASE_URL_ENV) or file_cfg.get("base_url") or DEFAULT_BASE_URL


def print_json(data) -> None:
    """Print dict as indented JSON."""
    print(json.dumps(data, indent=2, default=str))


def run_command(handler, args) -> int:
    """Run a command handler, reporting errors on stderr.

    Returns the process exit status.
    """
    try:
        handler(args)
    except ApiError as e:
        print(f"API Error: {e.message}", file=sys.stderr)
        print(f"Status: {e.status}", file=sys.stderr)
        print(f"Code: {e.code}", file=sys.stderr)
        if debug_enabled(args):
            print(f"Detail: {e.detail}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if debug_enabled(args):
            logger.exception("Command failed")
        return 1
    return 0
