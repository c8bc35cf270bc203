"""Tests for the investigator CLI."""

import json

import pytest
from typer.testing import CliRunner

from investigator.cli import app

TARGET = "tests.fixtures.sample_types"


@pytest.fixture
def runner():
    return CliRunner()


class TestInspectCommand:
    """Test the inspect command."""

    def test_json_report(self, runner):
        """Test --json prints a parseable TypeReport."""
        result = runner.invoke(app, ["inspect", f"{TARGET}:Circle", "3", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["simple_name"] == "Circle"
        assert data["parent_class"] == "Shape"
        assert data["interfaces"] == ["Drawable"]

    def test_table_report(self, runner):
        """Test the default rendering mentions the chain and counts."""
        result = runner.invoke(app, ["inspect", f"{TARGET}:C"])
        assert result.exit_code == 0, result.output
        assert "object->A->B->C" in result.output
        assert "Declared members" in result.output

    def test_bad_target(self, runner):
        """Test an unresolvable target exits with an error."""
        result = runner.invoke(app, ["inspect", "no_such_module_xyz:Thing"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestChainCommand:
    """Test the chain command."""

    def test_delimiter(self, runner):
        """Test the chain uses the given delimiter."""
        result = runner.invoke(app, ["chain", f"{TARGET}:Ring", "--delimiter", "/"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "object/Shape/Circle/Ring"

    def test_default_delimiter_from_environment(self, runner, monkeypatch):
        """Test INVESTIGATOR_CHAIN_DELIMITER sets the default."""
        monkeypatch.setenv("INVESTIGATOR_CHAIN_DELIMITER", " > ")
        result = runner.invoke(app, ["chain", f"{TARGET}:C"])
        assert result.output.strip() == "object > A > B > C"


class TestInvokeCommand:
    """Test the invoke command."""

    def test_int_method(self, runner):
        """Test a public int method is invoked on a new instance."""
        result = runner.invoke(app, [
            "invoke", f"{TARGET}:Account", "balance_due", "-i", "alice", "-i", "40"
        ])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "40"

    def test_private_needs_elevate(self, runner):
        """Test private methods fail without --elevate."""
        result = runner.invoke(app, [
            "invoke", f"{TARGET}:Account", "__checksum", "-i", "alice", "-i", "40"
        ])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_elevated(self, runner):
        """Test --elevate with parameter types reaches a private method."""
        result = runner.invoke(app, [
            "invoke", f"{TARGET}:Account", "__pin", "2", "#",
            "--elevate", "-t", "int", "-t", "str",
            "-i", "alice", "-i", "40",
        ])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "'#42'"


def test_version(runner):
    """Test the version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "Investigator" in result.output
