"""
Tests for opening validation.
"""

import pytest
from resumescore.schema import validate_opening


@pytest.fixture
def valid_opening():
    return {
        "id": "opening-1",
        "tenant_id": "tenant-a",
        "title": "Backend Engineer",
        "department": "Engineering",
        "location": "Bangalore",
        "required_skills": ["Python", "Django"],
        "required_experience": 5,
    }


class TestValidateOpening:
    """Test opening validation."""

    def test_valid_opening(self, valid_opening):
        """Valid opening should have no errors."""
        assert validate_opening(valid_opening) == []

    def test_minimal_opening(self):
        """Skills, experience and optional strings can be omitted."""
        assert validate_opening({"id": "o", "tenant_id": "t", "title": "Engineer"}) == []

    @pytest.mark.parametrize("field", ["id", "tenant_id", "title"])
    def test_missing_required_field(self, valid_opening, field):
        """Missing required field should error."""
        del valid_opening[field]
        errors = validate_opening(valid_opening)
        assert errors == [f"Missing required field: {field}"]

    def test_empty_string_field(self, valid_opening):
        """Empty required field should error."""
        valid_opening["title"] = "   "
        errors = validate_opening(valid_opening)
        assert any("title" in err for err in errors)

    def test_optional_field_type(self, valid_opening):
        valid_opening["location"] = 42
        errors = validate_opening(valid_opening)
        assert errors == ["Field 'location' must be a string if provided"]

    def test_null_optional_field_is_allowed(self, valid_opening):
        valid_opening["description"] = None
        assert validate_opening(valid_opening) == []

    def test_skills_must_be_list(self, valid_opening):
        valid_opening["required_skills"] = "Python, Django"
        errors = validate_opening(valid_opening)
        assert any("required_skills" in err for err in errors)

    def test_skills_must_be_non_empty_strings(self, valid_opening):
        valid_opening["required_skills"] = ["Python", ""]
        errors = validate_opening(valid_opening)
        assert any("required_skills" in err for err in errors)

    @pytest.mark.parametrize("value", ["5", True, None])
    def test_experience_must_be_number(self, valid_opening, value):
        valid_opening["required_experience"] = value
        errors = validate_opening(valid_opening)
        assert errors == ["Field 'required_experience' must be a number"]

    def test_negative_experience(self, valid_opening):
        valid_opening["required_experience"] = -1
        errors = validate_opening(valid_opening)
        assert errors == ["Field 'required_experience' must not be negative"]
