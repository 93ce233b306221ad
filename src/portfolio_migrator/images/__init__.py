"""Image planning, downloading and migration."""

from .downloader import (
    DownloadResult,
    ImageDownloadConfig,
    download_image,
    download_images,
    ensure_directory_exists,
)
from .migration import ImageMigration, ImageMigrationResult, ImagePaths
from .organizer import ImageOrganizer, ProfileImageConfig, ProjectImageConfig, plan_from_extracted

__all__ = [
    "DownloadResult",
    "ImageDownloadConfig",
    "ImageMigration",
    "ImageMigrationResult",
    "ImageOrganizer",
    "ImagePaths",
    "ProfileImageConfig",
    "ProjectImageConfig",
    "download_image",
    "download_images",
    "ensure_directory_exists",
    "plan_from_extracted",
]
