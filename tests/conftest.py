"""Test setup for project_context."""

from __future__ import annotations

import itertools
import sys
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from project_context.persistence import FileSystemHelper  # noqa: E402

MENTAL_MODEL_TEMPLATE = """# Mental Model
## Overview
## Risks
"""

SESSION_SUMMARY_TEMPLATE = """# Session {{DATE}}
## Changes
"""

FEATURES_TEMPLATE = """# Features
## Implemented
"""


@pytest.fixture
def templates_path(tmp_path: Path) -> Path:
    """Directory of default templates used instead of the packaged ones."""
    path = tmp_path / "default_templates"
    path.mkdir()
    (path / "mental_model.md").write_text(MENTAL_MODEL_TEMPLATE, encoding="utf-8")
    (path / "session_summary.md").write_text(SESSION_SUMMARY_TEMPLATE, encoding="utf-8")
    (path / "features.md").write_text(FEATURES_TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def helper(tmp_path: Path, templates_path: Path) -> FileSystemHelper:
    """Filesystem helper rooted in a temporary directory."""
    return FileSystemHelper(tmp_path / "context_root", templates_path=templates_path)


@pytest.fixture
def fake_clock() -> Iterator[None]:
    """Make storage timestamps strictly increasing and predictable."""
    ticks = itertools.count()
    with patch(
        "project_context.persistence.utc_timestamp",
        side_effect=lambda: f"2024-01-15T10-30-{next(ticks):02d}-000Z",
    ):
        yield


@pytest.fixture
def frozen_clock() -> Iterator[None]:
    """Give every storage timestamp the same value."""
    with patch("project_context.persistence.utc_timestamp", return_value="2024-01-15T10-30-00-000Z"):
        yield
