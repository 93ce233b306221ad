"""Image migration orchestration."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from ..utils.logging import MigrationLogger
from .downloader import RETRY_BASE_DELAY, download_images
from .organizer import ImageOrganizer, ProfileImageConfig, ProjectImageConfig


@dataclass
class ImagePaths:
    """Site-relative image paths keyed by project id and by profile kind."""

    projects: dict[str, str] = field(default_factory=dict)
    profile: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"projects": dict(self.projects), "profile": dict(self.profile)}


@dataclass
class ImageMigrationResult:
    success: bool
    downloaded_images: int
    failed_images: int
    errors: list[str] = field(default_factory=list)
    image_paths: ImagePaths = field(default_factory=ImagePaths)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "downloadedImages": self.downloaded_images,
            "failedImages": self.failed_images,
            "errors": list(self.errors),
            "imagePaths": self.image_paths.to_dict(),
        }


class ImageMigration:
    """Download a portfolio's images into the organized layout.

    Image paths in the result are derived from the naming convention, so
    they are returned even for images whose download failed; use
    ``validate_migration`` to check what actually landed on disk.
    """

    def __init__(
        self,
        public_dir: Path | str = "public",
        logger: MigrationLogger | None = None,
        organizer: ImageOrganizer | None = None,
        max_retries: int = 3,
        retry_delay: float = RETRY_BASE_DELAY,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.public_dir = Path(public_dir)
        self.organizer = organizer or ImageOrganizer(self.public_dir)
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._client = client
        self._logger = logger or MigrationLogger()

    async def migrate_images(
        self,
        project_configs: list[ProjectImageConfig],
        profile_config: ProfileImageConfig,
    ) -> ImageMigrationResult:
        """Create the layout, download every planned image and report.

        Args:
            project_configs: Per-project source URLs
            profile_config: Profile source URLs

        Returns:
            ImageMigrationResult; ``success`` is true only when no download failed
        """
        self._logger.info("Starting image migration...")
        self.organizer.create_directory_structure()

        jobs = [
            *self.organizer.generate_project_image_configs(project_configs),
            *self.organizer.generate_profile_image_configs(profile_config),
        ]
        if not jobs:
            self._logger.info("No images to download")
            return ImageMigrationResult(success=True, downloaded_images=0, failed_images=0)

        self._logger.info(f"Downloading {len(jobs)} images...")
        results = await download_images(
            jobs, self.max_retries, base_delay=self.retry_delay, client=self._client
        )

        errors = [
            f"{job.url}: {result.error}"
            for job, result in zip(jobs, results, strict=True)
            if not result.success
        ]
        downloaded = len(results) - len(errors)
        for error in errors:
            self._logger.warn("Image download failed", {"error": error})

        self._logger.info(
            "Image migration finished",
            {"downloaded": downloaded, "failed": len(errors)},
        )
        return ImageMigrationResult(
            success=not errors,
            downloaded_images=downloaded,
            failed_images=len(errors),
            errors=errors,
            image_paths=self.generate_image_paths(project_configs, profile_config),
        )

    def generate_image_paths(
        self,
        project_configs: list[ProjectImageConfig],
        profile_config: ProfileImageConfig,
    ) -> ImagePaths:
        paths = ImagePaths()
        for project in project_configs:
            paths.projects[project.project_id] = self.organizer.get_project_image_path(
                project.project_id, "main"
            )
        for kind in ("avatar", "hero", "background"):
            if getattr(profile_config, kind):
                paths.profile[kind] = self.organizer.get_profile_image_path(kind)
        return paths

    def validate_migration(self, image_paths: ImagePaths) -> bool:
        """Check that every mapped image exists under ``public_dir``."""
        all_valid = True

        for project_id, image_path in image_paths.projects.items():
            full_path = self.public_dir / image_path.lstrip("/")
            if not full_path.exists():
                self._logger.error(
                    f"Missing project image: {full_path}", context={"project_id": project_id}
                )
                all_valid = False

        for kind, image_path in image_paths.profile.items():
            full_path = self.public_dir / image_path.lstrip("/")
            if not full_path.exists():
                self._logger.error(f"Missing profile image: {full_path}", context={"type": kind})
                all_valid = False

        return all_valid

    def cleanup_old_images(self) -> list[Path]:
        """List files in the legacy ``<public_dir>/projects`` directory.

        Nothing is deleted; each file is logged as a cleanup candidate.

        Returns:
            The candidate files, sorted
        """
        legacy_dir = self.public_dir / "projects"
        if not legacy_dir.is_dir():
            return []

        self._logger.info("Cleaning up old project images...")
        candidates = sorted(legacy_dir.iterdir())
        for path in candidates:
            self._logger.info(f"Would clean up: {path}")
        return candidates
