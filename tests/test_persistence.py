"""Tests for filesystem persistence."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from project_context.file_utils import utc_timestamp
from project_context.persistence import FileSystemHelper
from project_context.schemas import BaseType, FileNaming, ProjectConfig, TypeConfig


async def _project(helper: FileSystemHelper, name: str = "demo") -> Path:
    response = await helper.init_project(name)
    assert response.success
    return helper.project_path(name)


class TestUtcTimestamp:
    """Tests for utc_timestamp."""

    def test_format_is_filesystem_safe(self) -> None:
        moment = datetime(2024, 1, 15, 10, 30, 5, 123456, tzinfo=timezone.utc)

        assert utc_timestamp(moment) == "2024-01-15T10-30-05-123Z"


class TestProjects:
    """Tests for project creation and listing."""

    @pytest.mark.asyncio
    async def test_list_projects_empty(self, helper: FileSystemHelper) -> None:
        response = await helper.list_projects()

        assert response.success
        assert response.data == []

    @pytest.mark.asyncio
    async def test_init_and_list(self, helper: FileSystemHelper) -> None:
        await _project(helper, "beta")
        await _project(helper, "alpha")

        response = await helper.list_projects()

        assert response.data == ["alpha", "beta"]

    @pytest.mark.asyncio
    async def test_init_is_idempotent(self, helper: FileSystemHelper) -> None:
        await _project(helper)

        assert (await helper.init_project("demo")).success

    @pytest.mark.asyncio
    async def test_rejects_path_traversal(self, helper: FileSystemHelper) -> None:
        response = await helper.init_project("..")

        assert not response.success
        assert "Invalid name" in response.first_error()


class TestProjectConfig:
    """Tests for project configuration loading."""

    @pytest.mark.asyncio
    async def test_default_config(self, helper: FileSystemHelper) -> None:
        await _project(helper)

        response = await helper.get_project_config("demo")

        assert response.success
        assert [ct.name for ct in response.config.context_types] == [
            "session_summary",
            "mental_model",
            "features",
            "other",
        ]

    @pytest.mark.asyncio
    async def test_reads_camel_case_config(self, tmp_path: Path, templates_path: Path) -> None:
        helper = FileSystemHelper(tmp_path / "root", templates_path=templates_path)
        project = await _project(helper)
        (project / "context-config.json").write_text(
            json.dumps(
                {
                    "contextTypes": [
                        {
                            "name": "design_log",
                            "baseType": "templated-log",
                            "template": "mental_model",
                            "fileNaming": "timestamped",
                            "validation": True,
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )

        response = await helper.get_project_config("demo")

        type_config = response.config.find_type("design_log")
        assert type_config is not None
        assert type_config.base_type == BaseType.TEMPLATED_LOG
        assert type_config.file_naming == FileNaming.TIMESTAMPED

    @pytest.mark.asyncio
    async def test_invalid_config_falls_back_to_default(self, helper: FileSystemHelper) -> None:
        project = await _project(helper)
        (project / "context-config.json").write_text("{not json", encoding="utf-8")

        response = await helper.get_project_config("demo")

        assert response.success
        assert response.config.find_type("mental_model") is not None

    @pytest.mark.asyncio
    async def test_config_is_cached(self, helper: FileSystemHelper) -> None:
        project = await _project(helper)
        first = await helper.get_project_config("demo")
        (project / "context-config.json").write_text('{"contextTypes": []}', encoding="utf-8")

        second = await helper.get_project_config("demo")

        assert second.config == first.config

    @pytest.mark.asyncio
    async def test_save_round_trips_through_disk(self, tmp_path: Path, templates_path: Path) -> None:
        helper = FileSystemHelper(tmp_path / "root", templates_path=templates_path)
        await _project(helper)
        config = ProjectConfig(
            context_types=[
                TypeConfig(
                    name="notes",
                    base_type=BaseType.FREEFORM_DOCUMENT,
                    file_naming=FileNaming.NAMED,
                )
            ]
        )

        assert (await helper.save_project_config("demo", config)).success
        fresh = FileSystemHelper(tmp_path / "root", templates_path=templates_path)

        response = await fresh.get_project_config("demo")

        assert response.config == config


class TestContexts:
    """Tests for reading and writing contexts."""

    @pytest.mark.asyncio
    async def test_write_and_read_single_document(self, helper: FileSystemHelper) -> None:
        project = await _project(helper)

        write = await helper.write_context("demo", "mental_model", "mental_model", "# Model\n")
        read = await helper.get_context("demo", "mental_model", ["mental_model"])

        assert write.success
        assert (project / "mental_model" / "mental_model.md").read_text(encoding="utf-8") == "# Model\n"
        assert read.data == ["# Model\n"]

    @pytest.mark.asyncio
    async def test_missing_templated_context_reads_empty(self, helper: FileSystemHelper) -> None:
        await _project(helper)

        response = await helper.get_context("demo", "features", ["features"])

        assert response.success
        assert response.data == [""]

    @pytest.mark.asyncio
    async def test_missing_freeform_context_is_an_error(self, helper: FileSystemHelper) -> None:
        await _project(helper)

        response = await helper.get_context("demo", "other", ["notes"])

        assert not response.success
        assert response.first_error().startswith("notes: Context not found")

    @pytest.mark.asyncio
    async def test_named_documents(self, helper: FileSystemHelper) -> None:
        project = await _project(helper)

        await helper.write_context("demo", "other", "api-notes", "notes")

        assert (project / "other" / "api-notes.md").is_file()
        assert (await helper.get_context("demo", "other", ["api-notes"])).data == ["notes"]

    @pytest.mark.asyncio
    async def test_unknown_project(self, helper: FileSystemHelper) -> None:
        response = await helper.get_context("missing", "mental_model", ["mental_model"])

        assert not response.success
        assert "does not exist" in response.first_error()

    @pytest.mark.asyncio
    async def test_unknown_context_type(self, helper: FileSystemHelper) -> None:
        await _project(helper)

        response = await helper.write_context("demo", "bugs", "bugs", "content")

        assert not response.success
        assert "Context type 'bugs' not found" in response.first_error()

    @pytest.mark.asyncio
    async def test_timestamped_write_creates_new_entries(
        self, helper: FileSystemHelper, fake_clock: None
    ) -> None:
        await _project(helper)

        first = await helper.write_context("demo", "session_summary", "session_summary", "one")
        second = await helper.write_context("demo", "session_summary", "session_summary", "two")
        names = await helper.list_context_names("demo", "session_summary")

        assert first.data == ["session_summary-2024-01-15T10-30-00-000Z"]
        assert second.data == ["session_summary-2024-01-15T10-30-01-000Z"]
        assert names.data == first.data + second.data

    @pytest.mark.asyncio
    async def test_list_all_context_for_project(self, helper: FileSystemHelper, fake_clock: None) -> None:
        await _project(helper)
        await helper.write_context("demo", "mental_model", "mental_model", "# Model")
        await helper.write_context("demo", "other", "glossary", "terms")
        await helper.write_context("demo", "session_summary", "session_summary", "entry")

        response = await helper.list_all_context_for_project("demo")

        assert sorted(response.data) == [
            "glossary",
            "mental_model",
            "session_summary-2024-01-15T10-30-00-000Z",
        ]

    @pytest.mark.asyncio
    async def test_same_timestamp_writes_keep_every_entry(
        self, helper: FileSystemHelper, frozen_clock: None
    ) -> None:
        await _project(helper)

        first = await helper.write_context("demo", "session_summary", "session_summary", "one")
        second = await helper.write_context("demo", "session_summary", "session_summary", "two")
        names = await helper.list_context_names("demo", "session_summary")
        contents = await helper.get_context("demo", "session_summary", names.data)

        assert first.data == ["session_summary-2024-01-15T10-30-00-000Z"]
        assert second.data == ["session_summary-2024-01-15T10-30-00-000Z-1"]
        assert names.data == first.data + second.data
        assert contents.data == ["one", "two"]

    @pytest.mark.asyncio
    async def test_dotted_name_round_trips(self, helper: FileSystemHelper) -> None:
        await _project(helper)

        written = await helper.write_context("demo", "other", "notes.v2", "second draft")
        listed = await helper.list_all_context_for_project("demo")
        read = await helper.get_context("demo", "other", listed.data)

        assert written.data == ["notes.v2"]
        assert listed.data == ["notes.v2"]
        assert read.data == ["second draft"]


class TestTemplates:
    """Tests for template lookup."""

    @pytest.mark.asyncio
    async def test_default_template_is_copied_into_project(
        self, helper: FileSystemHelper, templates_path: Path
    ) -> None:
        project = await _project(helper)
        default = (templates_path / "mental_model.md").read_text(encoding="utf-8")

        response = await helper.get_template("demo", "mental_model")

        assert response.data == [default]
        copied = project / "templates" / "mental_model.md"
        assert copied.read_text(encoding="utf-8") == default

    @pytest.mark.asyncio
    async def test_project_template_wins(self, helper: FileSystemHelper) -> None:
        project = await _project(helper)
        custom = project / "templates" / "mental_model.md"
        custom.parent.mkdir(parents=True)
        custom.write_text("# Custom\n", encoding="utf-8")

        response = await helper.get_template("demo", "mental_model")

        assert response.data == ["# Custom\n"]

    @pytest.mark.asyncio
    async def test_template_name_from_config(self, helper: FileSystemHelper, templates_path: Path) -> None:
        await _project(helper)
        (templates_path / "design.md").write_text("# Design\n", encoding="utf-8")
        config = ProjectConfig(
            context_types=[
                TypeConfig(
                    name="architecture",
                    base_type=BaseType.TEMPLATED_DOCUMENT,
                    template="design",
                    file_naming=FileNaming.SINGLE,
                    validation=True,
                )
            ]
        )
        await helper.save_project_config("demo", config)

        response = await helper.get_template("demo", "architecture")

        assert response.data == ["# Design\n"]

    @pytest.mark.asyncio
    async def test_missing_template(self, helper: FileSystemHelper, templates_path: Path) -> None:
        await _project(helper)
        (templates_path / "features.md").unlink()

        response = await helper.get_template("demo", "features")

        assert not response.success
        assert response.first_error().startswith("Failed to load or initialize template for features")

    @pytest.mark.asyncio
    async def test_untemplated_type_without_file(self, helper: FileSystemHelper) -> None:
        await _project(helper)

        response = await helper.get_template("demo", "other")

        assert not response.success

    @pytest.mark.asyncio
    async def test_packaged_templates_exist(self, tmp_path: Path) -> None:
        helper = FileSystemHelper(tmp_path / "root")
        await _project(helper)

        for context_type in ("mental_model", "session_summary", "features"):
            response = await helper.get_template("demo", context_type)
            assert response.success, response.errors
            assert response.data[0].startswith("# ")


class TestArchive:
    """Tests for archive_context."""

    @pytest.mark.asyncio
    async def test_archives_into_timestamped_directory(
        self, helper: FileSystemHelper, fake_clock: None
    ) -> None:
        project = await _project(helper)
        await helper.write_context("demo", "mental_model", "mental_model", "# Old")

        response = await helper.archive_context("demo", "mental_model", ["mental_model"])

        assert response.success
        assert response.data == ["mental_model"]
        assert not (project / "mental_model" / "mental_model.md").exists()
        archived = project / "archive" / "mental_model" / "2024-01-15T10-30-00-000Z" / "mental_model.md"
        assert archived.read_text(encoding="utf-8") == "# Old"

    @pytest.mark.asyncio
    async def test_missing_files_are_skipped(self, helper: FileSystemHelper) -> None:
        project = await _project(helper)

        response = await helper.archive_context("demo", "other", ["never-written"])

        assert response.success
        assert response.data == []
        assert not (project / "archive").exists()

    @pytest.mark.asyncio
    async def test_same_timestamp_archives_keep_every_copy(
        self, helper: FileSystemHelper, frozen_clock: None
    ) -> None:
        project = await _project(helper)

        for content in ("# First", "# Second"):
            await helper.write_context("demo", "mental_model", "mental_model", content)
            response = await helper.archive_context("demo", "mental_model", ["mental_model"])
            assert response.success

        archive = project / "archive" / "mental_model"
        assert sorted(path.name for path in archive.iterdir()) == [
            "2024-01-15T10-30-00-000Z",
            "2024-01-15T10-30-00-000Z-1",
        ]
        assert [
            (archive / name / "mental_model.md").read_text(encoding="utf-8")
            for name in ("2024-01-15T10-30-00-000Z", "2024-01-15T10-30-00-000Z-1")
        ] == ["# First", "# Second"]
