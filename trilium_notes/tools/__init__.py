"""MCP tool definitions for Trilium note operations.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from trilium_notes.tools import note_tools
from trilium_notes.tools import search_tools
from trilium_notes.tools import attribute_tools
from trilium_notes.tools import attachment_tools
from trilium_notes.tools import organization_tools
from trilium_notes.tools import calendar_tools
from trilium_notes.tools import system_tools

__all__ = [
    "note_tools",
    "search_tools",
    "attribute_tools",
    "attachment_tools",
    "organization_tools",
    "calendar_tools",
    "system_tools",
]
