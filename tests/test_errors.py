"""Tests for custom exception hierarchy."""

from portscore.errors import (
    ConfigError,
    OutputFormatError,
    PortscoreError,
    RepositoryNotFoundError,
    UnsupportedPlatformError,
)


class TestPortscoreErrorBase:
    def test_message(self):
        assert str(PortscoreError("test error")) == "test error"

    def test_empty_context_by_default(self):
        assert PortscoreError("test error").context == {}

    def test_context_passed_through(self):
        e = PortscoreError("test error", context={"path": "/repo"})
        assert e.context == {"path": "/repo"}

    def test_exit_code_default(self):
        assert PortscoreError("test error").exit_code == 1


class TestSubclasses:
    def test_repository_not_found(self):
        e = RepositoryNotFoundError("/missing")
        assert "/missing" in str(e)
        assert e.context["path"] == "/missing"
        assert isinstance(e, PortscoreError)

    def test_unsupported_platform_lists_available(self):
        e = UnsupportedPlatformError("aws", available=["azure"])
        assert str(e) == "Unsupported platform: aws. Available: azure"
        assert e.context["platform"] == "aws"

    def test_config_error_exit_code(self):
        assert ConfigError("bad").exit_code == 2

    def test_output_format_error(self):
        e = OutputFormatError("xml", available=["table", "json"])
        assert "xml" in str(e)
        assert "table, json" in str(e)
        assert isinstance(e, ConfigError)
        assert e.exit_code == 2
