"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from soupdecode.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["decode", "--examples"], ["soupdecode decode page.html", "--schema"]),
    (["select", "--examples"], ["soupdecode select page.html", "-q select"]),
]


@pytest.mark.usefixtures("_isolated_config")
class TestExamplesFlag:
    @pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
    def test_examples(self, cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "Examples for" in result.output
        for keyword in keywords:
            assert keyword in result.output

    def test_examples_not_in_help_body(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["decode", "--help"])
        assert result.exit_code == 0
        assert "--examples" in result.output
        assert "myapp.models:Page" not in result.output
