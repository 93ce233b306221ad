"""JSON output for migrated content.

Single responsibility: Persist extracted content as the site's data files,
keeping a timestamped copy of the raw extraction for review.
"""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..errors import FileSystemError
from ..models import ExtractedContent
from ..utils.logging import get_logger

logger = get_logger(__name__)

SKILL_CATEGORY_NAMES: dict[str, str] = {
    "frontend": "Frontend",
    "backend": "Backend",
    "design": "Design",
    "tools": "Tools",
}


class ContentWriter:
    """Write extracted content under ``output_dir``.

    Layout::

        backups/<timestamp>/extracted-content.json
        projects.json
        personal.json
        skills.json
    """

    def __init__(self, output_dir: Path | str) -> None:
        self.output_dir = Path(output_dir)

    def write(
        self, content: ExtractedContent, timestamp: datetime | None = None
    ) -> dict[str, Path]:
        """Write the review dump and the three data files.

        Args:
            content: Extracted content
            timestamp: Backup timestamp (defaults to now, UTC)

        Returns:
            Written paths keyed by ``backup``, ``projects``, ``personal``, ``skills``

        Raises:
            FileSystemError: If a directory or file cannot be written
        """
        payload = content.to_dict()
        backup_dir = self.output_dir / "backups" / _backup_name(timestamp or datetime.now(UTC))

        written = {
            "backup": self._write_json(backup_dir / "extracted-content.json", payload),
            "projects": self._write_json(self.output_dir / "projects.json", payload["projects"]),
            "personal": self._write_json(
                self.output_dir / "personal.json", payload["personalInfo"]
            ),
            "skills": self._write_json(
                self.output_dir / "skills.json", skills_document(payload["skills"])
            ),
        }
        logger.info("Wrote migrated content to %s", self.output_dir)
        return written

    def _write_json(self, path: Path, data: Any) -> Path:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n")
        except OSError as e:
            raise FileSystemError(
                f"Failed to write file {path}: {e}", path=str(path), operation="write"
            ) from e
        logger.debug("Wrote %s", path)
        return path


def skills_document(skills: list[dict[str, Any]]) -> dict[str, Any]:
    """Skills plus their per-category grouping, in fixed category order."""
    return {
        "skills": skills,
        "skillCategories": [
            {
                "name": display_name,
                "skills": [skill for skill in skills if skill.get("category") == category],
            }
            for category, display_name in SKILL_CATEGORY_NAMES.items()
        ],
    }


def _backup_name(timestamp: datetime) -> str:
    """Filesystem-safe ISO timestamp, e.g. ``2024-05-01T12-30-00-000Z``."""
    iso = timestamp.astimezone(UTC).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z").replace(":", "-").replace(".", "-")
