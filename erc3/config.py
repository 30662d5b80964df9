"""Client configuration.

The library itself never reads the environment. ``ClientConfig`` is passed
explicitly to ``ERC3.from_config``; the CLIs build one with
``load_config``, which is where ``ERC3_API_KEY`` / ``ERC3_BASE_URL`` and the
optional YAML config file are consulted.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

import yaml

DEFAULT_BASE_URL = "https://erc.timetoact-group.at"

API_KEY_ENV = "ERC3_API_KEY"
BASE_URL_ENV = "ERC3_BASE_URL"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the ERC3 API."""
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None

    def __post_init__(self):
        if not self.api_key:
            raise ValueError("API key is required")
        if not self.base_url:
            object.__setattr__(self, "base_url", DEFAULT_BASE_URL)


def read_config_file(path: str) -> dict:
    """Load a YAML config file with ``api_key``, ``base_url`` and ``timeout`` keys."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(path: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a ClientConfig from an optional YAML file and the environment.

    Environment variables win over file values. Raises ValueError when no
    API key is found in either place.
    """
    environ = os.environ if environ is None else environ
    file_cfg = read_config_file(path) if path else {}

    api_key = environ.get(API_KEY_ENV) or file_cfg.get("api_key")
    base_url = environ.get(BASE_URL_ENV) or file_cfg.get("base_url") or DEFAULT_BASE_URL
    timeout = file_cfg.get("timeout")

    if not api_key:
        raise ValueError(f"{API_KEY_ENV} environment variable is required")

    return ClientConfig(
        api_key=api_key,
        base_url=base_url,
        timeout=float(timeout) if timeout is not None else None,
    )
