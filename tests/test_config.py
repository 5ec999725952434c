import logging

import pytest
from rich.logging import RichHandler

from omnifocus_mcp.utils import config
from omnifocus_mcp.utils.logger import configure_logging


def test_blank_values_fall_back_to_default(monkeypatch):
    monkeypatch.setenv("OMNIFOCUS_MCP_TRANSPORT", "   ")
    assert config.get_config("OMNIFOCUS_MCP_TRANSPORT", "stdio") == "stdio"


def test_values_are_stripped(monkeypatch):
    monkeypatch.setenv("OMNIFOCUS_MCP_TRANSPORT", " sse ")
    assert config.get_config("OMNIFOCUS_MCP_TRANSPORT") == "sse"


def test_int_config(monkeypatch):
    monkeypatch.setenv("SOME_INT", "12")
    assert config.get_int_config("SOME_INT") == 12
    monkeypatch.setenv("SOME_INT", "twelve")
    with pytest.raises(ValueError, match="SOME_INT must be an integer"):
        config.get_int_config("SOME_INT")


def test_float_config_ignores_non_positive(monkeypatch):
    monkeypatch.setenv("OMNIFOCUS_MCP_SCRIPT_TIMEOUT", "0")
    assert config.get_float_config("OMNIFOCUS_MCP_SCRIPT_TIMEOUT", 30.0) == 30.0
    monkeypatch.setenv("OMNIFOCUS_MCP_SCRIPT_TIMEOUT", "2.5")
    assert config.get_float_config("OMNIFOCUS_MCP_SCRIPT_TIMEOUT") == 2.5


def test_load_env_vars_reads_local_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    # registered with monkeypatch so the value loaded below is undone afterwards
    monkeypatch.setenv("OMNIFOCUS_MCP_LOG_LEVEL", "unset")
    monkeypatch.delenv("OMNIFOCUS_MCP_LOG_LEVEL")
    (tmp_path / config.ENV_FILE_NAME).write_text("OMNIFOCUS_MCP_LOG_LEVEL=DEBUG\n")

    config.load_env_vars()

    assert config.get_config("OMNIFOCUS_MCP_LOG_LEVEL") == "DEBUG"


def test_load_env_vars_does_not_override(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("OMNIFOCUS_MCP_LOG_LEVEL", "WARNING")
    (tmp_path / config.ENV_FILE_NAME).write_text("OMNIFOCUS_MCP_LOG_LEVEL=DEBUG\n")

    config.load_env_vars()

    assert config.get_config("OMNIFOCUS_MCP_LOG_LEVEL") == "WARNING"


def test_configure_logging_installs_single_rich_handler():
    configure_logging("DEBUG", force=True)
    configure_logging("INFO")

    root = logging.getLogger()
    handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
    assert len(handlers) == 1
    assert root.level == logging.DEBUG
    assert handlers[0].console.stderr is True

    configure_logging("INFO", force=True)
    assert logging.getLogger().level == logging.INFO
