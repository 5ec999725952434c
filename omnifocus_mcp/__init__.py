"""
OmniFocus MCP server: OmniFocus task management exposed as Model Context
Protocol tools.

Each tool builds a JavaScript for Automation script, runs it against
OmniFocus with ``osascript`` and returns the JSON it prints.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
