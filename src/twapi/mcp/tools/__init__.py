"""Tool modules discovered by :mod:`twapi.mcp.registry`."""
