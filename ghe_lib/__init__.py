"""GitHub Enterprise MCP server library."""

__version__ = "0.2.0"
