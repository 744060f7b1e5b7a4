"""Configuration loading for the Trilium connection."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml

from trilium_notes.constants import (
    CONFIG_SEARCH_PATHS,
    DEFAULT_HTTP_PORT,
    DEFAULT_TRANSPORT,
    DEFAULT_TRILIUM_URL,
    TRANSPORT_ALIASES,
)
from trilium_notes.data_models import TriliumConfiguration

logger = logging.getLogger(__name__)


def normalize_server_url(url: str) -> str:
    """Normalize a Trilium server URL to its ETAPI root.

    Trailing slashes are removed and ``/etapi`` is appended unless already
    present, so either ``http://localhost:8080`` or
    ``http://localhost:8080/etapi`` may be configured.

    Examples:
        >>> normalize_server_url("http://localhost:8080/")
        'http://localhost:8080/etapi'
        >>> normalize_server_url("http://localhost:8080/etapi")
        'http://localhost:8080/etapi'
    """
    normalized = url.strip().rstrip("/")
    if not normalized.endswith("/etapi"):
        normalized += "/etapi"
    return normalized


def _read_config_file(search_paths: Sequence[Path]) -> dict[str, Any]:
    """Return the first YAML config mapping found in ``search_paths``.

    Raises:
        ValueError: If a config file exists but is not a YAML mapping.
    """
    for config_path in search_paths:
        if not config_path.is_file():
            continue

        try:
            raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Configuration file {config_path} contains invalid YAML: {exc}") from exc

        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration file {config_path} must contain a YAML mapping")

        logger.debug("Loaded Trilium configuration from %s", config_path)
        return raw_config

    return {}


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"HTTP port must be an integer, got {value!r}") from exc
    if not 0 < port < 65536:
        raise ValueError(f"HTTP port must be between 1 and 65535, got {port}")
    return port


def load_configuration(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> TriliumConfiguration:
    """Load and validate the Trilium connection settings.

    Values are resolved with the following priority (highest first):

    1. Environment variables ``TRILIUM_URL``, ``TRILIUM_TOKEN``,
       ``TRILIUM_TRANSPORT`` and ``TRILIUM_HTTP_PORT``.
    2. A YAML file with the keys ``url``, ``token``, ``transport`` and
       ``http_port``. Defaults to ``./trilium.yaml`` then ``~/.trilium.yaml``.
    3. Built-in defaults.

    Args:
        config_path: Explicit YAML file to read instead of the default search paths.
        environ: Environment mapping to read from. Defaults to ``os.environ``.

    Returns:
        A :class:`TriliumConfiguration` with a normalized ETAPI URL.

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist.
        ValueError: If no token is configured or a value is malformed.
    """
    env = os.environ if environ is None else environ

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Trilium configuration file not found at {config_path}")
        file_config = _read_config_file([config_path])
    else:
        file_config = _read_config_file(CONFIG_SEARCH_PATHS)

    raw_url = env.get("TRILIUM_URL") or file_config.get("url") or DEFAULT_TRILIUM_URL
    token = env.get("TRILIUM_TOKEN") or file_config.get("token") or ""
    if not isinstance(token, str) or not token.strip():
        raise ValueError(
            "Trilium ETAPI token is required. Provide it via the TRILIUM_TOKEN "
            "environment variable or the 'token' key of trilium.yaml."
        )

    raw_transport = str(
        env.get("TRILIUM_TRANSPORT") or file_config.get("transport") or DEFAULT_TRANSPORT
    ).strip().lower()
    transport = TRANSPORT_ALIASES.get(raw_transport)
    if transport is None:
        logger.warning("Unknown transport '%s'; falling back to %s", raw_transport, DEFAULT_TRANSPORT)
        transport = DEFAULT_TRANSPORT

    http_port = _parse_port(
        env.get("TRILIUM_HTTP_PORT") or file_config.get("http_port") or DEFAULT_HTTP_PORT
    )

    return TriliumConfiguration(
        url=normalize_server_url(str(raw_url)),
        token=token.strip(),
        transport=transport,
        http_port=http_port,
    )


@lru_cache(maxsize=1)
def get_configuration() -> TriliumConfiguration:
    """Load the configuration once per process."""
    return load_configuration()
