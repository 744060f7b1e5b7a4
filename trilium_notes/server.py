"""FastMCP server initialization and tool registration."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from trilium_notes.config import get_configuration
from trilium_notes.constants import LOG_LEVEL
from trilium_notes.errors import TriliumClientError, format_trilium_error, render_error

# Initialize logger
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("trilium_notes")

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


@asynccontextmanager
async def etapi_errors() -> AsyncIterator[None]:
    """Report ETAPI and transport failures to the agent with guidance."""
    try:
        yield
    except TriliumClientError as exc:
        raise ToolError(render_error(format_trilium_error(exc))) from exc
    except httpx.HTTPError as exc:
        logger.warning("Could not reach Trilium: %s", exc)
        raise ToolError(
            f"Could not reach the Trilium server: {exc}. "
            "Check that Trilium is running and TRILIUM_URL is correct."
        ) from exc


def run_server():
    """Start the MCP server with the configured transport."""
    configuration = get_configuration()
    if configuration.transport != "stdio":
        mcp.settings.port = configuration.http_port
    logger.info(
        "Starting Trilium MCP Server (%s transport, ETAPI at %s)",
        configuration.transport,
        configuration.url,
    )
    mcp.run(transport=configuration.transport)


if __name__ == "__main__":
    # Tools register on the package's server instance, not on this __main__ copy
    import trilium_notes.server

    trilium_notes.server.run_server()
