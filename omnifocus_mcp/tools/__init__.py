"""Tool handlers: each builds a script, runs it and formats the result."""
