"""Retrieval tools exposed by the server."""

from .builtin import builtin_tools
from .catalog import Param, Tool, ToolCatalog, ToolError

__all__ = ["Param", "Tool", "ToolCatalog", "ToolError", "builtin_tools"]
