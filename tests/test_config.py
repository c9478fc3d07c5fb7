# tests/test_config.py
import pytest
from pydantic import ValidationError
from openshiftmcp.config import MAX_OUTPUT_BYTES, Settings


def test_defaults(monkeypatch):
    for var in ("OPENSHIFTMCP_OC_BINARY", "OPENSHIFTMCP_COMMAND_TIMEOUT", "OPENSHIFTMCP_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.oc_binary == "oc"
    assert settings.command_timeout == 30000
    assert settings.max_output_bytes == MAX_OUTPUT_BYTES
    assert settings.max_log_requests == 5


def test_environment_override(monkeypatch):
    monkeypatch.setenv("OPENSHIFTMCP_OC_BINARY", "/usr/local/bin/oc")
    monkeypatch.setenv("OPENSHIFTMCP_COMMAND_TIMEOUT", "60000")
    monkeypatch.setenv("OPENSHIFTMCP_LOG_LEVEL", "debug")
    settings = Settings(_env_file=None)
    assert settings.oc_binary == "/usr/local/bin/oc"
    assert settings.command_timeout == 60000
    assert settings.log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_buffer_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_output_bytes=0)
