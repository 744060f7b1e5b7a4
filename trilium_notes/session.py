"""Process-wide ETAPI client shared by all tool calls."""

from __future__ import annotations

import logging
from typing import Optional

from trilium_notes.client import TriliumClient
from trilium_notes.config import get_configuration

logger = logging.getLogger(__name__)

# Built lazily so importing the package never requires a configured token
_CLIENT: Optional[TriliumClient] = None


def get_client() -> TriliumClient:
    """Return the shared :class:`TriliumClient`, creating it on first use.

    Raises:
        ValueError: If the configuration is incomplete (e.g. no token).
    """
    global _CLIENT
    if _CLIENT is None:
        configuration = get_configuration()
        logger.info("Connecting to Trilium ETAPI at %s", configuration.url)
        _CLIENT = TriliumClient(configuration.url, configuration.token)
    return _CLIENT


def set_client(client: Optional[TriliumClient]) -> None:
    """Replace the shared client (``None`` resets to lazy creation)."""
    global _CLIENT
    _CLIENT = client
