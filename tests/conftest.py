"""Shared pytest fixtures for soupdecode tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from soupdecode.infrastructure.document import parse_document
from soupdecode.infrastructure.selection import Selection
from soupdecode.services.telemetry import disable_telemetry
from tests.schemas import TEST_PAGE


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo logging and telemetry changes made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("soupdecode")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def page_html() -> str:
    return TEST_PAGE


@pytest.fixture
def document_selection() -> Selection:
    """The sample page parsed and wrapped as the root scope."""
    return Selection.from_document(parse_document(TEST_PAGE))


@pytest.fixture
def page_file(tmp_path: Path) -> Path:
    """The sample page written to a temp file."""
    path = tmp_path / "page.html"
    path.write_text(TEST_PAGE, encoding="utf-8")
    return path


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp dir with no config env var set.

    Use via ``@pytest.mark.usefixtures("_isolated_config")`` so a stray
    soupdecode.toml above the test tree never leaks into settings.
    """
    monkeypatch.delenv("SOUPDECODE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
