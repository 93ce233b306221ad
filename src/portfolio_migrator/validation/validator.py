"""Validation of extracted records.

Extracted data never passed a typed boundary, so every validator accepts
``Any`` and checks shapes at runtime. Validators never raise; they return a
``ValidationResult`` splitting structural ``errors`` from soft ``warnings``.
Only ``assert_valid`` turns a failed result into an exception.
"""

import re
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from ..errors import ValidationError
from ..models import PERSONAL_INFO_SENTINELS, SKILL_CATEGORIES, SOCIAL_PLATFORMS

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one record or collection."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


def is_valid_url(url: str) -> bool:
    """Check that ``url`` parses with a scheme and a location."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def is_valid_email(email: str) -> bool:
    """Structural ``local@domain.tld`` check (not full RFC 5322)."""
    return EMAIL_PATTERN.match(email) is not None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _bad_url(value: Any) -> bool:
    return not isinstance(value, str) or not is_valid_url(value)


def validate_project(project: Any) -> ValidationResult:
    if not isinstance(project, Mapping):
        return ValidationResult(errors=("Project must be an object",))

    errors: list[str] = []
    warnings: list[str] = []

    if not project.get("id") or not _is_int(project.get("id")):
        errors.append("Project ID is required and must be a number")
    if not _is_non_empty_str(project.get("title")):
        errors.append("Project title is required and must be a non-empty string")
    if not _is_non_empty_str(project.get("description")):
        errors.append("Project description is required and must be a non-empty string")
    if not _is_non_empty_str(project.get("image")):
        errors.append("Project image is required and must be a non-empty string")

    technologies = project.get("technologies")
    if technologies and not isinstance(technologies, list):
        errors.append("Project technologies must be an array")
    elif technologies and not all(isinstance(tech, str) for tech in technologies):
        warnings.append("Project technologies should all be strings")

    if project.get("liveUrl") and _bad_url(project["liveUrl"]):
        warnings.append("Project live URL should be a valid URL")
    if project.get("githubUrl") and _bad_url(project["githubUrl"]):
        warnings.append("Project GitHub URL should be a valid URL")
    if project.get("category") and not isinstance(project["category"], str):
        warnings.append("Project category should be a string")

    return ValidationResult(tuple(errors), tuple(warnings))


def validate_personal_info(personal_info: Any) -> ValidationResult:
    if not isinstance(personal_info, Mapping):
        return ValidationResult(errors=("Personal info must be an object",))

    errors: list[str] = []
    warnings: list[str] = []

    if not _is_non_empty_str(personal_info.get("name")):
        errors.append("Name is required and must be a non-empty string")
    if not _is_non_empty_str(personal_info.get("title")):
        errors.append("Title is required and must be a non-empty string")
    if not _is_non_empty_str(personal_info.get("bio")):
        errors.append("Bio is required and must be a non-empty string")

    email = personal_info.get("email")
    if not isinstance(email, str) or not is_valid_email(email):
        errors.append("Valid email is required")

    if personal_info.get("phone") and not isinstance(personal_info["phone"], str):
        warnings.append("Phone should be a string")
    if personal_info.get("location") and not isinstance(personal_info["location"], str):
        warnings.append("Location should be a string")

    social_links = personal_info.get("socialLinks")
    if social_links:
        if not isinstance(social_links, Mapping):
            errors.append("Social links must be an object")
        else:
            for platform in SOCIAL_PLATFORMS:
                url = social_links.get(platform)
                if url and _bad_url(url):
                    warnings.append(f"{platform} URL should be a valid URL")

    return ValidationResult(tuple(errors), tuple(warnings))


def validate_skill(skill: Any) -> ValidationResult:
    if not isinstance(skill, Mapping):
        return ValidationResult(errors=("Skill must be an object",))

    errors: list[str] = []
    warnings: list[str] = []

    if not _is_non_empty_str(skill.get("name")):
        errors.append("Skill name is required and must be a non-empty string")
    if skill.get("category") not in SKILL_CATEGORIES:
        errors.append(f"Skill category must be one of: {', '.join(SKILL_CATEGORIES)}")

    proficiency = skill.get("proficiency")
    if proficiency is not None and (not _is_number(proficiency) or not 0 <= proficiency <= 100):
        warnings.append("Skill proficiency should be a number between 0 and 100")

    return ValidationResult(tuple(errors), tuple(warnings))


def validate_projects(projects: Any) -> ValidationResult:
    """Validate every project and detect duplicate ids across the collection."""
    if not isinstance(projects, list):
        return ValidationResult(errors=("Projects must be an array",))

    errors: list[str] = []
    warnings: list[str] = []
    first_seen: dict[Hashable, int] = {}

    for position, project in enumerate(projects, start=1):
        result = validate_project(project)
        errors.extend(f"Project {position}: {error}" for error in result.errors)
        warnings.extend(f"Project {position}: {warning}" for warning in result.warnings)

        project_id = project.get("id") if isinstance(project, Mapping) else None
        if not project_id or not isinstance(project_id, Hashable):
            continue
        if project_id in first_seen:
            errors.append(
                f"Project {position}: Duplicate project ID {project_id} "
                f"(already used by project {first_seen[project_id]})"
            )
        else:
            first_seen[project_id] = position

    return ValidationResult(tuple(errors), tuple(warnings))


def validate_skills(skills: Any) -> ValidationResult:
    if not isinstance(skills, list):
        return ValidationResult(errors=("Skills must be an array",))

    errors: list[str] = []
    warnings: list[str] = []
    for position, skill in enumerate(skills, start=1):
        result = validate_skill(skill)
        errors.extend(f"Skill {position}: {error}" for error in result.errors)
        warnings.extend(f"Skill {position}: {warning}" for warning in result.warnings)

    return ValidationResult(tuple(errors), tuple(warnings))


def assert_valid(result: ValidationResult, context: str) -> None:
    """Raise when ``result`` holds errors.

    Raises:
        ValidationError: Carrying every error and warning of ``result``
    """
    if result.is_valid:
        return
    raise ValidationError(
        f"Validation failed for {context}: {', '.join(result.errors)}",
        field=context,
        value={"errors": list(result.errors), "warnings": list(result.warnings)},
    )


def find_unextracted_fields(personal_info: Any) -> list[str]:
    """List personal-info fields that still hold their sentinel value."""
    if not isinstance(personal_info, Mapping):
        return list(PERSONAL_INFO_SENTINELS)
    return [
        field_name
        for field_name, sentinel in PERSONAL_INFO_SENTINELS.items()
        if not personal_info.get(field_name) or personal_info.get(field_name) == sentinel
    ]
