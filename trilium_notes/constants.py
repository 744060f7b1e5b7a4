"""Module-level constants for the Trilium MCP server."""

from pathlib import Path

# Configuration
CONFIG_FILENAME = "trilium.yaml"
CONFIG_SEARCH_PATHS = (
    Path.cwd() / CONFIG_FILENAME,
    Path.home() / f".{CONFIG_FILENAME}",
)
DEFAULT_TRILIUM_URL = "http://localhost:37740"
DEFAULT_TRANSPORT = "stdio"
DEFAULT_HTTP_PORT = 3000
REQUEST_TIMEOUT_SECONDS = 30.0

# Transports accepted by FastMCP.run(); "http" is kept as a shorthand
TRANSPORT_ALIASES = {
    "stdio": "stdio",
    "http": "streamable-http",
    "streamable-http": "streamable-http",
    "sse": "sse",
}

# Limits
SEARCH_ECHO_LIMIT = 100  # unmatched search strings echoed back to the caller
READBACK_ECHO_LIMIT = 200  # missing replacements reported after a write
MAX_SEARCH_LIMIT = 10_000

# ETAPI
ENTITY_ID_PATTERN = r"^[a-zA-Z0-9_]{4,32}$"
BACKUP_NAME_PATTERN = r"^[a-zA-Z0-9_-]+$"

# Attachments returned to the agent as images rather than text
IMAGE_MIME_TYPES = frozenset((
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/gif",
    "image/webp",
    "image/svg+xml",
))

# Logging
LOG_LEVEL = "INFO"
