"""Tests for the select CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from soupdecode.cli import cli
from tests.schemas import NAMES


@pytest.mark.usefixtures("_isolated_config")
class TestSelectCommand:
    def test_json_output(self, cli_runner: CliRunner, page_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "select", str(page_file), "nav a"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["count"] == 2
        assert [item["attrs"]["href"] for item in data["data"]["items"]] == ["/one", "/two"]

    def test_quiet_prints_texts(self, cli_runner: CliRunner, page_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "select", str(page_file), ".name"])
        assert result.exit_code == 0
        assert result.output.splitlines() == NAMES

    def test_rich_table(self, cli_runner: CliRunner, page_file: Path) -> None:
        result = cli_runner.invoke(cli, ["select", str(page_file), ".foobar thing"])
        assert result.exit_code == 0
        assert "count: 1" in result.output
        assert "thing" in result.output

    def test_invalid_selector_exits_1(self, cli_runner: CliRunner, page_file: Path) -> None:
        result = cli_runner.invoke(cli, ["select", str(page_file), "div[["])
        assert result.exit_code == 1
        assert "INVALID_SELECTOR" in result.output

    def test_no_match_warns(self, cli_runner: CliRunner, page_file: Path) -> None:
        result = cli_runner.invoke(cli, ["select", str(page_file), ".missing"])
        assert result.exit_code == 0
        assert "count: 0" in result.output
        assert "WARNING: selector '.missing' matched no nodes" in result.output
