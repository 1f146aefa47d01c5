"""Unit tests for the CLI — Typer command registration and basic behavior."""

from __future__ import annotations

from typer.testing import CliRunner

from keymarket.cli.app import app

runner = CliRunner()


class TestCliApp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "demo" in result.output
        assert "quote" in result.output

    def test_demo_command_exists(self):
        result = runner.invoke(app, ["demo", "--help"])
        assert result.exit_code == 0

    def test_quote_command_exists(self):
        result = runner.invoke(app, ["quote", "--help"])
        assert result.exit_code == 0


class TestQuote:
    def test_quote_with_fee(self):
        result = runner.invoke(app, ["quote", "1000000", "--fee", "2"])
        assert result.exit_code == 0
        assert "20,000" in result.output
        assert "980,000" in result.output

    def test_quote_rejects_fee_over_100(self):
        result = runner.invoke(app, ["quote", "100", "--fee", "101"])
        assert result.exit_code != 0

    def test_quote_rejects_zero_price(self):
        result = runner.invoke(app, ["quote", "0"])
        assert result.exit_code != 0


class TestDemo:
    def test_demo_runs(self):
        result = runner.invoke(app, ["--log-level", "WARNING", "demo"])
        assert result.exit_code == 0, result.output
        assert "Key for buyer:" in result.output
        assert "ABC" in result.output
        assert "UNAUTHORIZED_ACCESS" in result.output
        assert "Journal chain valid: True" in result.output

    def test_demo_underfunded_buyer(self):
        result = runner.invoke(
            app, ["--log-level", "WARNING", "demo", "--balance", "10"]
        )
        assert result.exit_code == 1
        assert "INSUFFICIENT_BALANCE" in result.output
