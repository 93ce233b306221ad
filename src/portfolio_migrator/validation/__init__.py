"""Runtime validation of extracted content."""

from .validator import (
    ValidationResult,
    assert_valid,
    find_unextracted_fields,
    is_valid_email,
    is_valid_url,
    validate_personal_info,
    validate_project,
    validate_projects,
    validate_skill,
    validate_skills,
)

__all__ = [
    "ValidationResult",
    "assert_valid",
    "find_unextracted_fields",
    "is_valid_email",
    "is_valid_url",
    "validate_personal_info",
    "validate_project",
    "validate_projects",
    "validate_skill",
    "validate_skills",
]
