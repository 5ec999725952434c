"""JXA execution helper for the OmniFocus MCP server.

This module centralises the logic for running JavaScript for Automation
snippets against OmniFocus.  Tool handlers build a script string and call
:pyfunc:`execute_and_parse_json`; the script's last expression must be a
``JSON.stringify(...)`` call.

The snippet is embedded in a small wrapper program that binds ``app`` and
``doc``, written to a temporary ``.js`` file and run with
``osascript -l JavaScript``.  The temporary file is always removed.

Host failures are translated into :class:`OmniFocusError` subclasses with
user-facing messages; nothing here prints or swallows errors.
"""
from __future__ import annotations

import json
import os
import subprocess
import tempfile
import time
from typing import Any, Final, Optional

from ..utils.config import get_config, get_float_config
from ..utils.logger import get_logger

__all__: Final = [
    "OmniFocusError",
    "OmniFocusScriptError",
    "OmniFocusNotRunningError",
    "AutomationPermissionError",
    "OmniFocusResponseError",
    "escape_for_wrapper",
    "build_jxa_program",
    "classify_host_error",
    "execute_omnifocus_script",
    "execute_and_parse_json",
]

log = get_logger(__name__)

MAX_OUTPUT_BYTES: Final = 10 * 1024 * 1024
TEMP_FILE_PREFIX: Final = "omnifocus-script-"

NOT_RUNNING_MESSAGE: Final = "OmniFocus is not running. Please launch OmniFocus first."
PERMISSION_MESSAGE: Final = (
    "Script access to OmniFocus is not allowed. Enable automation permissions in "
    "System Settings > Privacy & Security > Automation."
)

_NOT_RUNNING_PHRASES: Final = ("is not running", "isn't running")
# English and Dutch spellings of the automation-denied error.
_PERMISSION_PHRASES: Final = ("not allowed", "niet toegestaan")

_WRAPPER: Final = """const app = Application("OmniFocus");
const doc = app.defaultDocument();
eval(`{script}`);
"""


class OmniFocusError(RuntimeError):
    """Base class for failures talking to OmniFocus."""


class OmniFocusScriptError(OmniFocusError):
    """Raised when osascript fails or the script throws."""


class OmniFocusNotRunningError(OmniFocusScriptError):
    """Raised when OmniFocus is not running."""

    def __init__(self, message: str = NOT_RUNNING_MESSAGE):
        super().__init__(message)


class AutomationPermissionError(OmniFocusScriptError):
    """Raised when the automation permission for OmniFocus is missing."""

    def __init__(self, message: str = PERMISSION_MESSAGE):
        super().__init__(message)


class OmniFocusResponseError(OmniFocusError):
    """Raised when script output cannot be parsed."""


def escape_for_wrapper(script: str) -> str:
    """Escape *script* so it survives inside a JavaScript template literal."""
    return script.replace("\\", "\\\\").replace("`", "\\`").replace("$", "\\$")


def build_jxa_program(script: str) -> str:
    """Return the full program text written to disk for *script*."""
    return _WRAPPER.replace("{script}", escape_for_wrapper(script))


def classify_host_error(message: str) -> OmniFocusScriptError:
    """Map raw osascript error text to the matching exception."""
    if any(phrase in message for phrase in _NOT_RUNNING_PHRASES):
        return OmniFocusNotRunningError()
    if any(phrase in message for phrase in _PERMISSION_PHRASES):
        return AutomationPermissionError()
    return OmniFocusScriptError(f"OmniFocus script error: {message}")


def _write_temp_script(program: str) -> str:
    """Write *program* to a temporary *.js* file and return its path."""
    tmp_file = tempfile.NamedTemporaryFile(
        mode="w", delete=False, prefix=TEMP_FILE_PREFIX, suffix=".js", encoding="utf-8"
    )
    try:
        tmp_file.write(program)
        tmp_file.flush()
    finally:
        tmp_file.close()
    return tmp_file.name


def _script_timeout() -> Optional[float]:
    return get_float_config("OMNIFOCUS_MCP_SCRIPT_TIMEOUT")


def execute_omnifocus_script(script: str) -> str:
    """Run a JXA snippet against OmniFocus and return its *stdout*.

    Leading/trailing whitespace is stripped from the output.  Any failure is
    raised as an :class:`OmniFocusScriptError` (or subclass).
    """
    program = build_jxa_program(script)
    script_path = _write_temp_script(program)
    osascript = get_config("OMNIFOCUS_MCP_OSASCRIPT", "osascript")
    cmd = [osascript, "-l", "JavaScript", script_path]
    timeout = _script_timeout()

    log.debug("Running JXA script (%d chars) via %s", len(program), script_path)
    started = time.monotonic()
    try:
        try:
            process = subprocess.run(
                cmd, capture_output=True, text=True, check=False, timeout=timeout
            )
        except FileNotFoundError as exc:
            raise OmniFocusScriptError(
                f"OmniFocus script error: automation host '{osascript}' not found "
                "(macOS with osascript is required)"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise OmniFocusScriptError(
                f"OmniFocus script error: script timed out after {timeout} seconds"
            ) from exc

        stdout = process.stdout or ""
        stderr = (process.stderr or "").strip()

        if len(stdout.encode("utf-8")) > MAX_OUTPUT_BYTES:
            raise OmniFocusScriptError(
                f"OmniFocus script error: output exceeded {MAX_OUTPUT_BYTES} bytes"
            )

        if process.returncode != 0:
            error = classify_host_error(stderr or stdout.strip() or f"exit code {process.returncode}")
            log.warning("osascript failed (code %s): %s", process.returncode, stderr)
            raise error

        if stderr and not stdout.strip():
            log.warning("osascript reported an error: %s", stderr)
            raise classify_host_error(stderr)

        return stdout.strip()
    finally:
        log.debug("JXA script finished in %.2fs", time.monotonic() - started)
        # Ensure the temporary file is always removed.
        try:
            os.remove(script_path)
        except FileNotFoundError:
            pass


def execute_and_parse_json(script: str) -> Any:
    """Run *script* and parse its output as JSON."""
    result = execute_omnifocus_script(script)
    try:
        return json.loads(result)
    except json.JSONDecodeError as exc:
        raise OmniFocusResponseError(f"Failed to parse OmniFocus response: {result}") from exc
