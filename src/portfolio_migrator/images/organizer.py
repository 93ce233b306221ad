"""On-disk layout for migrated images.

Every path is a pure function of the project id, the image kind and the
position in its list, so re-running a migration lands each image on the same
file and the downloader can skip it.

Layout under ``public_dir``::

    images/profile/{avatar,hero,hero-bg}.jpg
    images/projects/<id>/main.jpg
    images/projects/<id>/thumbnails/thumb-<n>.<ext>
    images/projects/<id>/gallery/gallery-<n>.<ext>
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Literal
from urllib.parse import urlparse

from ..models import ExtractedImage, Project
from ..utils.logging import get_logger
from .downloader import ImageDownloadConfig

logger = get_logger(__name__)

ProjectImageKind = Literal["main", "thumbnail", "gallery"]
ProfileImageKind = Literal["avatar", "hero", "background"]

PROFILE_FILENAMES: dict[ProfileImageKind, str] = {
    "avatar": "avatar.jpg",
    "hero": "hero.jpg",
    "background": "hero-bg.jpg",
}
DEFAULT_EXTENSION = "jpg"


@dataclass
class ProjectImageConfig:
    """Source URLs of one project's images."""

    project_id: str
    project_name: str
    main: str | None = None
    thumbnails: list[str] = field(default_factory=list)
    gallery: list[str] = field(default_factory=list)


@dataclass
class ProfileImageConfig:
    avatar: str | None = None
    hero: str | None = None
    background: str | None = None


def file_extension(url: str) -> str:
    """Extension of the URL path without the dot, as written; ``jpg`` when absent."""
    suffix = PurePosixPath(urlparse(url).path).suffix
    return suffix.lstrip(".") or DEFAULT_EXTENSION


class ImageOrganizer:
    """Plan where each image goes under ``public_dir``."""

    def __init__(self, public_dir: Path | str = "public") -> None:
        self.public_dir = Path(public_dir)

    @property
    def images_dir(self) -> Path:
        return self.public_dir / "images"

    @property
    def profile_dir(self) -> Path:
        return self.images_dir / "profile"

    @property
    def projects_dir(self) -> Path:
        return self.images_dir / "projects"

    def create_directory_structure(self) -> list[Path]:
        """Create the image directories that do not exist yet.

        Returns:
            The directories that were created by this call
        """
        directories = [
            self.images_dir,
            self.profile_dir,
            self.projects_dir,
            self.images_dir / "gallery",
            self.public_dir / "icons",
        ]
        created = []
        for directory in directories:
            if directory.exists():
                continue
            directory.mkdir(parents=True, exist_ok=True)
            logger.info("Created directory: %s", directory)
            created.append(directory)
        return created

    def generate_project_image_configs(
        self, projects: Iterable[ProjectImageConfig]
    ) -> list[ImageDownloadConfig]:
        configs: list[ImageDownloadConfig] = []
        for project in projects:
            project_dir = self.projects_dir / project.project_id

            if project.main:
                configs.append(ImageDownloadConfig(project.main, "main.jpg", project_dir))

            for index, url in enumerate(project.thumbnails, start=1):
                configs.append(
                    ImageDownloadConfig(
                        url, f"thumb-{index}.{file_extension(url)}", project_dir / "thumbnails"
                    )
                )

            for index, url in enumerate(project.gallery, start=1):
                configs.append(
                    ImageDownloadConfig(
                        url, f"gallery-{index}.{file_extension(url)}", project_dir / "gallery"
                    )
                )
        return configs

    def generate_profile_image_configs(
        self, profile: ProfileImageConfig
    ) -> list[ImageDownloadConfig]:
        configs = []
        for kind, filename in PROFILE_FILENAMES.items():
            url = getattr(profile, kind)
            if url:
                configs.append(ImageDownloadConfig(url, filename, self.profile_dir))
        return configs

    @staticmethod
    def get_project_image_path(
        project_id: str, image_type: ProjectImageKind, index: int | None = None
    ) -> str:
        """Site-relative path of a project image.

        Thumbnails and gallery images are addressed as ``.jpg`` here whatever
        their downloaded extension.
        """
        base_path = f"/images/projects/{project_id}"
        position = index or 1
        if image_type == "thumbnail":
            return f"{base_path}/thumbnails/thumb-{position}.jpg"
        if image_type == "gallery":
            return f"{base_path}/gallery/gallery-{position}.jpg"
        return f"{base_path}/main.jpg"

    @staticmethod
    def get_profile_image_path(image_type: ProfileImageKind) -> str:
        filename = PROFILE_FILENAMES.get(image_type, PROFILE_FILENAMES["avatar"])
        return f"/images/profile/{filename}"


def plan_from_extracted(
    images: Iterable[ExtractedImage],
    projects: Sequence[Project] = (),
) -> tuple[list[ProjectImageConfig], ProfileImageConfig]:
    """Group an extracted image inventory into download plans.

    Project images are grouped by ``project_id``: the first image of a group
    becomes the main image, the rest go to its gallery. A project image with
    no id forms its own group keyed by its position in ``images``. The first
    profile image becomes the avatar, the first hero image the hero and the
    second hero image the background. Gallery images are not planned.

    Args:
        images: Extracted image inventory
        projects: Extracted projects, used to name the groups

    Returns:
        (project configs in first-seen order, profile config)
    """
    titles = {str(project.id): project.title for project in projects}
    groups: dict[str, ProjectImageConfig] = {}
    profile = ProfileImageConfig()

    for position, image in enumerate(images, start=1):
        if image.type == "project":
            key = str(image.project_id) if image.project_id is not None else f"image-{position}"
            group = groups.get(key)
            if group is None:
                groups[key] = ProjectImageConfig(
                    project_id=key,
                    project_name=titles.get(key, f"Project {key}"),
                    main=image.url,
                )
            else:
                group.gallery.append(image.url)
        elif image.type == "profile":
            if profile.avatar is None:
                profile.avatar = image.url
        elif image.type == "hero":
            if profile.hero is None:
                profile.hero = image.url
            elif profile.background is None:
                profile.background = image.url

    return list(groups.values()), profile
