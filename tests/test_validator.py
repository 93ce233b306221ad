"""Tests for extracted data validation."""

from typing import Any

import pytest

from portfolio_migrator.errors import ErrorCode, ValidationError
from portfolio_migrator.validation import (
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


def make_project(**overrides: Any) -> dict[str, Any]:
    project = {
        "id": 1,
        "image": "https://portfolio.example.com/home/hypd.png",
        "title": "HYPD",
        "description": "A mobile app for fashion creators",
        "technologies": ["Figma"],
    }
    return project | overrides


def make_personal_info(**overrides: Any) -> dict[str, Any]:
    info = {
        "name": "Jane Doe",
        "title": "UI/UX Designer",
        "bio": "Designer of mobile apps",
        "email": "jane@example.com",
        "socialLinks": {},
    }
    return info | overrides


class TestValidateProject:
    """Test single project validation."""

    def test_valid_project(self) -> None:
        """Test a complete project has no errors or warnings."""
        result = validate_project(make_project())
        assert result.is_valid
        assert result.warnings == ()

    def test_missing_required_fields(self) -> None:
        """Test every missing required field is reported."""
        result = validate_project({})
        assert result.errors == (
            "Project ID is required and must be a number",
            "Project title is required and must be a non-empty string",
            "Project description is required and must be a non-empty string",
            "Project image is required and must be a non-empty string",
        )

    @pytest.mark.parametrize("bad_id", ["1", True, 0, None, 1.5], ids=repr)
    def test_id_must_be_integer(self, bad_id: Any) -> None:
        """Test ids that are not positive integers are errors."""
        result = validate_project(make_project(id=bad_id))
        assert "Project ID is required and must be a number" in result.errors

    def test_whitespace_title_is_empty(self) -> None:
        """Test a whitespace-only title counts as missing."""
        result = validate_project(make_project(title="   "))
        assert result.errors == ("Project title is required and must be a non-empty string",)

    def test_technologies_must_be_list(self) -> None:
        """Test non-list technologies are an error."""
        result = validate_project(make_project(technologies="Figma"))
        assert result.errors == ("Project technologies must be an array",)

    def test_malformed_optional_fields_are_warnings(self) -> None:
        """Test bad optional fields produce warnings, not errors."""
        result = validate_project(
            make_project(liveUrl="not a url", githubUrl="also bad", category=3)
        )
        assert result.is_valid
        assert result.warnings == (
            "Project live URL should be a valid URL",
            "Project GitHub URL should be a valid URL",
            "Project category should be a string",
        )

    @pytest.mark.parametrize("value", [None, "project", 42, ["id"]], ids=repr)
    def test_non_mapping_input(self, value: Any) -> None:
        """Test non-object input yields an error instead of raising."""
        result = validate_project(value)
        assert not result.is_valid


class TestValidatePersonalInfo:
    """Test personal info validation."""

    def test_valid_personal_info(self) -> None:
        """Test complete personal info is valid."""
        assert validate_personal_info(make_personal_info()).is_valid

    def test_invalid_email_is_error(self) -> None:
        """Test a malformed email is an error."""
        result = validate_personal_info(make_personal_info(email="jane@"))
        assert result.errors == ("Valid email is required",)

    def test_missing_required_fields(self) -> None:
        """Test missing name, title, bio and email are all errors."""
        result = validate_personal_info({})
        assert result.errors == (
            "Name is required and must be a non-empty string",
            "Title is required and must be a non-empty string",
            "Bio is required and must be a non-empty string",
            "Valid email is required",
        )

    def test_optional_field_types_are_warnings(self) -> None:
        """Test non-string phone and location only warn."""
        result = validate_personal_info(make_personal_info(phone=5551234, location=["x"]))
        assert result.is_valid
        assert result.warnings == ("Phone should be a string", "Location should be a string")

    def test_social_links_must_be_object(self) -> None:
        """Test non-object social links are an error."""
        result = validate_personal_info(make_personal_info(socialLinks=["github"]))
        assert result.errors == ("Social links must be an object",)

    def test_bad_social_url_is_warning(self) -> None:
        """Test a malformed social URL warns with the platform name."""
        result = validate_personal_info(
            make_personal_info(socialLinks={"github": "nope", "linkedin": "https://linkedin.com"})
        )
        assert result.is_valid
        assert result.warnings == ("github URL should be a valid URL",)


class TestValidateSkill:
    """Test skill validation."""

    def test_valid_skill(self) -> None:
        """Test a categorized skill with proficiency is valid."""
        result = validate_skill({"name": "Figma", "category": "design", "proficiency": 80})
        assert result.is_valid
        assert result.warnings == ()

    def test_unknown_category_is_error(self) -> None:
        """Test a category outside the enum is an error."""
        result = validate_skill({"name": "Figma", "category": "art"})
        assert result.errors == ("Skill category must be one of: frontend, backend, design, tools",)

    @pytest.mark.parametrize("proficiency", [-1, 101, "high", True], ids=repr)
    def test_out_of_range_proficiency_is_warning(self, proficiency: Any) -> None:
        """Test proficiency outside 0..100 only warns."""
        result = validate_skill({"name": "Figma", "category": "design", "proficiency": proficiency})
        assert result.is_valid
        assert result.warnings == ("Skill proficiency should be a number between 0 and 100",)


class TestCollections:
    """Test collection validation."""

    def test_projects_must_be_list(self) -> None:
        """Test non-list projects are a single error."""
        assert validate_projects({"id": 1}).errors == ("Projects must be an array",)

    def test_skills_must_be_list(self) -> None:
        """Test non-list skills are a single error."""
        assert validate_skills(None).errors == ("Skills must be an array",)

    def test_messages_are_prefixed_with_position(self) -> None:
        """Test item messages carry their 1-based position."""
        result = validate_skills(
            [{"name": "Figma", "category": "design"}, {"name": "", "category": "design"}]
        )
        assert result.errors == ("Skill 2: Skill name is required and must be a non-empty string",)

    def test_duplicate_project_ids(self) -> None:
        """Test a repeated id is an error naming both positions."""
        result = validate_projects(
            [make_project(id=1), make_project(id=2), make_project(id=1, title="Copy")]
        )
        assert result.errors == (
            "Project 3: Duplicate project ID 1 (already used by project 1)",
        )

    def test_empty_collections_are_valid(self) -> None:
        """Test empty lists validate cleanly."""
        assert validate_projects([]).is_valid
        assert validate_skills([]).is_valid


class TestAssertValid:
    """Test assert_valid."""

    def test_valid_result_passes(self) -> None:
        """Test a result without errors does not raise."""
        assert_valid(ValidationResult(warnings=("soft",)), "projects")

    def test_invalid_result_raises(self) -> None:
        """Test errors raise ValidationError carrying errors and warnings."""
        result = ValidationResult(errors=("a", "b"), warnings=("w",))

        with pytest.raises(ValidationError) as exc_info:
            assert_valid(result, "skills")

        error = exc_info.value
        assert error.message == "Validation failed for skills: a, b"
        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.context == {
            "field": "skills",
            "value": {"errors": ["a", "b"], "warnings": ["w"]},
        }


class TestHelpers:
    """Test URL, email and sentinel helpers."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://example.com", True),
            ("mailto:jane@example.com", True),
            ("example.com", False),
            ("not a url", False),
            ("", False),
        ],
    )
    def test_is_valid_url(self, url: str, expected: bool) -> None:
        """Test URLs need a scheme and a location."""
        assert is_valid_url(url) is expected

    @pytest.mark.parametrize(
        ("email", "expected"),
        [("jane@example.com", True), ("jane@example", False), ("jane example@x.io", False)],
    )
    def test_is_valid_email(self, email: str, expected: bool) -> None:
        """Test the structural email check."""
        assert is_valid_email(email) is expected

    def test_find_unextracted_fields(self) -> None:
        """Test fields still holding sentinels are listed."""
        info = make_personal_info(name="Your Name", email="your.email@example.com")
        assert find_unextracted_fields(info) == ["name", "email"]
