"""Shared helpers (logging, configuration) for the OmniFocus MCP server."""
