"""Local configuration for project_context."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_CONTEXT_ROOT = "~/.shared-project-context"
DEFAULT_TEMPLATES_PATH = Path(__file__).resolve().parent / "templates"
DEFAULT_LOG_LEVEL = "INFO"

CONFIG_FILE_NAME = "context-config.json"
PROJECTS_DIR_NAME = "projects"
TEMPLATES_DIR_NAME = "templates"
ARCHIVE_DIR_NAME = "archive"
CONTEXT_FILE_SUFFIX = ".md"

# Root directory holding every project's stored documents.
PROJECT_CONTEXT_ROOT = Path(os.getenv("PROJECT_CONTEXT_ROOT", DEFAULT_CONTEXT_ROOT)).expanduser().resolve()
# Repository default templates, copied into a project on first use.
PROJECT_CONTEXT_TEMPLATES_PATH = Path(
    os.getenv("PROJECT_CONTEXT_TEMPLATES_PATH", str(DEFAULT_TEMPLATES_PATH))
).expanduser().resolve()
PROJECT_CONTEXT_LOG_LEVEL = os.getenv("PROJECT_CONTEXT_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
