"""Migration service - end-to-end content migration.

Single responsibility: Run extraction, validate the result and persist it,
logging every step into one run log.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..config import MigrationConfig
from ..errors import ErrorHandler
from ..extractors import ContentExtractor
from ..models import ExtractedContent
from ..utils.logging import LogLevel, MigrationLogger
from ..validation import (
    ValidationResult,
    assert_valid,
    validate_personal_info,
    validate_projects,
    validate_skills,
)
from .content_writer import ContentWriter


def _as_payload(record: Any) -> Any:
    """Serialized form of a record; raw mappings and other values pass through."""
    if isinstance(record, Mapping):
        return record
    to_dict = getattr(record, "to_dict", None)
    return to_dict() if callable(to_dict) else record


def _as_payloads(records: Any) -> Any:
    if not isinstance(records, list):
        return records
    return [_as_payload(record) for record in records]


class MigrationUtils:
    """Orchestrate one content migration run.

    Supports dependency injection for testing:
        utils = MigrationUtils(config, extractor=fake_extractor)
    """

    def __init__(
        self,
        config: MigrationConfig,
        logger: MigrationLogger | None = None,
        extractor: ContentExtractor | None = None,
    ) -> None:
        self.config = config
        self._logger = logger or MigrationLogger(config.log_level)
        self._extractor = extractor or ContentExtractor(
            config.to_scraping_options(), logger=self._logger
        )

    @property
    def logger(self) -> MigrationLogger:
        return self._logger

    async def run_migration(self) -> ExtractedContent:
        """Extract and (optionally) validate the portfolio content.

        Returns:
            The extracted content

        Raises:
            MigrationError: Classified failure of extraction or validation
        """
        try:
            self._logger.info(
                "Starting portfolio content migration",
                {"source_url": self.config.source_url, "output_dir": str(self.config.output_dir)},
            )

            content = await self._extractor.extract_all_content()
            self._logger.info(
                "Content extraction completed",
                {
                    "projects_count": len(content.projects),
                    "skills_count": len(content.skills),
                    "images_count": len(content.images),
                },
            )

            if self.config.validate_data:
                self.validate_extracted_data(content)

            self._logger.info("Migration completed successfully")
            return content
        except Exception as e:
            error = ErrorHandler.handle_error(e, "migration")
            self._logger.error("Migration failed", error)
            if error is e:
                raise
            raise error from e

    def validate_extracted_data(self, content: ExtractedContent | Mapping[str, Any]) -> None:
        """Validate every collection, logging each outcome, then assert all three.

        Accepts extracted records or their serialized form.

        Raises:
            ValidationError: For the first collection (projects, personal
                info, skills) that has errors
        """
        self._logger.info("Validating extracted data...")

        if isinstance(content, Mapping):
            projects = content.get("projects")
            personal_info = content.get("personalInfo")
            skills = content.get("skills")
        else:
            projects, personal_info, skills = (
                content.projects,
                content.personal_info,
                content.skills,
            )

        try:
            projects_result = validate_projects(_as_payloads(projects))
            self._report("Project", projects_result)
            personal_result = validate_personal_info(_as_payload(personal_info))
            self._report("Personal info", personal_result)
            skills_result = validate_skills(_as_payloads(skills))
            self._report("Skills", skills_result)

            assert_valid(projects_result, "projects")
            assert_valid(personal_result, "personal info")
            assert_valid(skills_result, "skills")

            self._logger.info("Data validation completed successfully")
        except Exception as e:
            error = ErrorHandler.handle_error(e, "validation")
            self._logger.error("Data validation failed", error)
            if error is e:
                raise
            raise error from e

    def _report(self, label: str, result: ValidationResult) -> None:
        if not result.is_valid:
            self._logger.error(
                f"{label} validation failed", context={"errors": list(result.errors)}
            )
        if result.warnings:
            self._logger.warn(
                f"{label} validation warnings", {"warnings": list(result.warnings)}
            )

    def save_content(self, content: ExtractedContent) -> dict[str, Path]:
        """Write the review dump and data files under ``config.output_dir``.

        Raises:
            FileSystemError: If writing fails
        """
        written = ContentWriter(self.config.output_dir).write(content)
        self._logger.info(
            "Saved migrated content",
            {name: str(path) for name, path in written.items()},
        )
        return written

    def get_logs(self) -> str:
        """Get the run log as exported text."""
        return self._logger.export_logs()

    def clear_logs(self) -> None:
        self._logger.clear_logs()

    @classmethod
    def create_default(cls, source_url: str) -> "MigrationUtils":
        """Create a migration with default settings for ``source_url``."""
        return cls(MigrationConfig(source_url=source_url, log_level=LogLevel.INFO))
