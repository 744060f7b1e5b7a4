"""Trilium Notes MCP Server

TriliumNext note management via Model Context Protocol.
"""

from trilium_notes.data_models import TriliumConfiguration, ContentMutationRequest
from trilium_notes.config import load_configuration, normalize_server_url
from trilium_notes.client import TriliumClient
from trilium_notes.errors import ContentMutationError, MutationFailure, TriliumClientError
from trilium_notes.core.diff_operations import (
    apply_search_replace,
    apply_unified_diff,
    resolve_content,
    verify_search_replace_results,
)
from trilium_notes.core.query_operations import preprocess_search_query
from trilium_notes.server import mcp, run_server

# Import tools to register them with the MCP server
from trilium_notes import tools  # noqa: F401

__version__ = "1.0.0"
__all__ = [
    "TriliumConfiguration",
    "ContentMutationRequest",
    "load_configuration",
    "normalize_server_url",
    "TriliumClient",
    "ContentMutationError",
    "MutationFailure",
    "TriliumClientError",
    "apply_search_replace",
    "apply_unified_diff",
    "resolve_content",
    "verify_search_replace_results",
    "preprocess_search_query",
    "mcp",
    "run_server",
]
