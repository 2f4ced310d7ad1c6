"""Tests for the command-line interface."""
from typer.testing import CliRunner

from relaychat.cli.app import app

runner = CliRunner()


class TestModelsCommand:
    """Tests for `relaychat models`."""

    def test_lists_aliases(self):
        result = runner.invoke(app, ["models"])

        assert result.exit_code == 0
        assert "mistral" in result.output
        assert "base-free" in result.output


class TestAskCommand:
    """Tests for `relaychat ask`."""

    def test_blank_prompt_is_rejected(self):
        """Test that a blank prompt exits without contacting the proxy."""
        result = runner.invoke(app, ["ask", "   ", "--url", "http://127.0.0.1:9"])

        assert result.exit_code == 1
        assert "message is empty" in result.output

    def test_unreachable_proxy_reports_error(self):
        """Test that a connection failure is printed and exits non-zero."""
        result = runner.invoke(app, ["ask", "hello", "--url", "http://127.0.0.1:9", "--timeout", "5"])

        assert result.exit_code == 1
        assert "Error:" in result.output
