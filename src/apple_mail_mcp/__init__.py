"""MCP server exposing Apple Mail automation via JXA."""

__version__ = "0.1.0"
