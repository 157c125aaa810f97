"""Calculation stages exposed as named tools."""

from .registry import ToolSpec, TOOLS, get_tool, list_tools, invoke_tool

__all__ = [
    "ToolSpec",
    "TOOLS",
    "get_tool",
    "list_tools",
    "invoke_tool",
]
