"""
OmniFocus API layer package.
Implements the JXA-based interactions: script execution, input sanitization,
lookup fragments and the records parsed from script output.
"""

from .jxa_client import (
    AutomationPermissionError,
    OmniFocusError,
    OmniFocusNotRunningError,
    OmniFocusResponseError,
    OmniFocusScriptError,
    execute_and_parse_json,
    execute_omnifocus_script,
)
from .sanitization import SanitizationError, escape_js_string, sanitize_array, sanitize_input

__all__ = [
    'AutomationPermissionError',
    'OmniFocusError',
    'OmniFocusNotRunningError',
    'OmniFocusResponseError',
    'OmniFocusScriptError',
    'SanitizationError',
    'escape_js_string',
    'execute_and_parse_json',
    'execute_omnifocus_script',
    'sanitize_array',
    'sanitize_input',
]
