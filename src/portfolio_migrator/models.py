"""Structured records produced by content extraction.

``to_dict`` on each record emits the camelCase keys read by the site's data
layer and leaves out optional fields that were not found.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

SkillCategory = Literal["frontend", "backend", "design", "tools"]
ImageType = Literal["project", "profile", "hero", "gallery"]

SKILL_CATEGORIES: tuple[str, ...] = ("frontend", "backend", "design", "tools")
SOCIAL_PLATFORMS: tuple[str, ...] = ("linkedin", "twitter", "github", "instagram")

# Sentinel values substituted when extraction finds nothing.
DEFAULT_NAME = "Your Name"
DEFAULT_TITLE = "Your Professional Title"
DEFAULT_BIO = "Your professional bio will be migrated here."
DEFAULT_EMAIL = "your.email@example.com"

PERSONAL_INFO_SENTINELS: dict[str, str] = {
    "name": DEFAULT_NAME,
    "title": DEFAULT_TITLE,
    "bio": DEFAULT_BIO,
    "email": DEFAULT_EMAIL,
}


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class Project:
    """A portfolio project."""

    id: int
    image: str
    title: str
    description: str
    technologies: list[str] = field(default_factory=list)
    live_url: str | None = None
    github_url: str | None = None
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "id": self.id,
                "image": self.image,
                "title": self.title,
                "description": self.description,
                "technologies": list(self.technologies),
                "liveUrl": self.live_url,
                "githubUrl": self.github_url,
                "category": self.category,
            }
        )


@dataclass(frozen=True)
class PersonalInfo:
    """Owner details of the portfolio.

    ``fallback_fields`` names the fields holding a sentinel value because no
    strategy found them. It is not serialized.
    """

    name: str
    title: str
    bio: str
    email: str
    phone: str | None = None
    location: str | None = None
    social_links: dict[str, str] = field(default_factory=dict)
    fallback_fields: frozenset[str] = frozenset()

    def used_fallback(self, field_name: str) -> bool:
        """Check whether ``field_name`` holds a sentinel."""
        return field_name in self.fallback_fields

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "name": self.name,
                "title": self.title,
                "bio": self.bio,
                "email": self.email,
                "phone": self.phone,
                "location": self.location,
                "socialLinks": dict(self.social_links),
            }
        )


@dataclass(frozen=True)
class Skill:
    """A named skill with a coarse category."""

    name: str
    category: SkillCategory
    proficiency: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {"name": self.name, "category": self.category, "proficiency": self.proficiency}
        )


@dataclass(frozen=True)
class ExtractedImage:
    """An image referenced by the source page, with its planned local path."""

    url: str
    local_path: str
    type: ImageType
    project_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "url": self.url,
                "localPath": self.local_path,
                "type": self.type,
                "projectId": self.project_id,
            }
        )


@dataclass
class ExtractedContent:
    """Everything recovered from one extraction run."""

    projects: list[Project]
    personal_info: PersonalInfo
    skills: list[Skill]
    images: list[ExtractedImage]

    def to_dict(self) -> dict[str, Any]:
        return {
            "projects": [project.to_dict() for project in self.projects],
            "personalInfo": self.personal_info.to_dict(),
            "skills": [skill.to_dict() for skill in self.skills],
            "images": [image.to_dict() for image in self.images],
        }
