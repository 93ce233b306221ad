"""CLI smoke tests for Portfolio Migrator."""

import asyncio
from pathlib import Path

import pytest
from typer.testing import CliRunner

from portfolio_migrator import cli
from portfolio_migrator.cli import app
from portfolio_migrator.errors import NetworkError
from portfolio_migrator.images.organizer import ProfileImageConfig, ProjectImageConfig
from portfolio_migrator.models import ExtractedContent, PersonalInfo, Project, Skill

runner = CliRunner()


class FakeMigrationUtils:
    """Replaces MigrationUtils in the migrate command."""

    error: Exception | None = None

    def __init__(self, config) -> None:
        self.config = config

    async def run_migration(self) -> ExtractedContent:
        if self.error is not None:
            raise self.error
        return ExtractedContent(
            projects=[Project(id=1, image="/projects/image-1.jpg", title="HYPD", description="d")],
            personal_info=PersonalInfo(
                name="Jane Doe",
                title="Your Professional Title",
                bio="Bio",
                email="jane@example.com",
                fallback_fields=frozenset({"title"}),
            ),
            skills=[Skill("Figma", "design", 80)],
            images=[],
        )

    def save_content(self, content: ExtractedContent) -> dict[str, Path]:
        return {"backup": self.config.output_dir / "backups" / "now"}


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_app_shows_help(self) -> None:
        """Test app shows help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Migrate content and images" in result.output

    def test_version_flag(self) -> None:
        """Test --version flag shows version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "Portfolio Migrator" in result.output

    def test_migrate_help(self) -> None:
        """Test migrate subcommand shows help."""
        result = runner.invoke(app, ["migrate", "--help"])
        assert result.exit_code == 0
        assert "validate it and save it as JSON" in result.output

    def test_images_help(self) -> None:
        """Test images subcommand shows help."""
        result = runner.invoke(app, ["images", "--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.output


class TestMigrateCommand:
    """Test the migrate command."""

    @pytest.fixture(autouse=True)
    def fake_utils(self, monkeypatch: pytest.MonkeyPatch) -> type[FakeMigrationUtils]:
        monkeypatch.setattr(cli, "MigrationUtils", FakeMigrationUtils)
        monkeypatch.setattr(FakeMigrationUtils, "error", None)
        return FakeMigrationUtils

    def test_requires_source(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a missing source URL is reported."""
        monkeypatch.setattr(cli.settings, "source_url", "")
        result = runner.invoke(app, ["migrate"])
        assert result.exit_code == 1
        assert "No source URL" in result.output

    def test_rejects_invalid_source(self) -> None:
        """Test a non-http source URL is a validation error."""
        result = runner.invoke(app, ["migrate", "--source", "ftp://portfolio.example.com/"])
        assert result.exit_code == 1
        assert "Validation error" in result.output

    def test_successful_migration(self, tmp_path: Path) -> None:
        """Test counts and placeholder fields are reported."""
        result = runner.invoke(
            app,
            ["migrate", "--source", "https://portfolio.example.com/", "-o", str(tmp_path)],
        )
        assert result.exit_code == 0
        assert "Projects: 1" in result.output
        assert "Skills: 1" in result.output
        assert "using placeholders: title" in result.output
        assert "Migration complete!" in result.output

    def test_migration_error_exits(self, fake_utils: type[FakeMigrationUtils]) -> None:
        """Test a migration error shows the friendly message and exits 1."""
        fake_utils.error = NetworkError("HTTP 503", url="https://portfolio.example.com/")
        result = runner.invoke(app, ["migrate", "--source", "https://portfolio.example.com/"])
        assert result.exit_code == 1
        assert "Failed to connect to the old portfolio" in result.output


class TestImagesCommand:
    """Test the images command."""

    def test_dry_run_lists_jobs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a dry run lists planned downloads without fetching."""

        async def plan(extractor):
            return (
                [ProjectImageConfig("1", "HYPD", main="https://cdn.example.com/hypd.png")],
                ProfileImageConfig(avatar="https://cdn.example.com/me.jpg"),
            )

        monkeypatch.setattr(cli, "_plan_images", plan)
        result = runner.invoke(
            app,
            [
                "images",
                "--source",
                "https://portfolio.example.com/",
                "--public-dir",
                str(tmp_path),
                "--dry-run",
            ],
        )
        assert result.exit_code == 0
        assert "https://cdn.example.com/hypd.png" in result.output
        assert "2 images planned" in result.output
        assert not (tmp_path / "images" / "projects" / "1").exists()

    def test_extraction_error_exits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a failed page fetch exits 1."""

        async def plan(extractor):
            raise NetworkError("HTTP 500", url="https://portfolio.example.com/", status_code=500)

        monkeypatch.setattr(cli, "_plan_images", plan)
        result = runner.invoke(app, ["images", "--source", "https://portfolio.example.com/"])
        assert result.exit_code == 1
        assert "Failed to connect" in result.output

    def test_plan_images_reraises_first_failure(self) -> None:
        """Test a classified extraction failure is raised as-is from the planning step."""
        error = NetworkError("HTTP 500", url="https://portfolio.example.com/", status_code=500)

        class FailingExtractor:
            async def extract_projects(self) -> list:
                raise error

            async def extract_images(self) -> list:
                await asyncio.sleep(5)
                return []

        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(cli._plan_images(FailingExtractor()))

        assert exc_info.value is error
