"""MCP server exposing Teamwork Projects operations as tools."""

from .registry import discover_tool_modules, register_discovered_tools

__all__ = ["discover_tool_modules", "register_discovered_tools"]
