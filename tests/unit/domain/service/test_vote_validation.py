"""Unit tests for vote input validation."""

from uuid import uuid4

import pytest

from persona.domain.error import ValidationError
from persona.domain.service.vote_validation import (
    MAX_VOTER_IDENTIFIER_LENGTH,
    validate_comment_id,
    validate_page,
    validate_personality_system,
    validate_personality_value,
    validate_profile_id,
    validate_voter_identifier,
)
from persona.domain.value import PersonalitySystem


class TestValidateCommentId:
    """Tests for validate_comment_id."""

    def test_accepts_uuid_string(self):
        """A UUID string should parse."""
        raw = uuid4()
        assert validate_comment_id(str(raw)) == raw

    def test_rejects_non_uuid(self):
        """Anything else should fail with a comment_id detail."""
        with pytest.raises(ValidationError) as exc_info:
            validate_comment_id("not-a-uuid")

        assert "comment_id" in exc_info.value.details


class TestValidatePersonalitySystem:
    """Tests for validate_personality_system."""

    def test_accepts_any_case(self):
        """Names should be case-insensitive."""
        assert validate_personality_system("ZODIAC") == PersonalitySystem.ZODIAC

    def test_rejects_unknown_system(self):
        """Unknown systems should list the legal ones."""
        with pytest.raises(ValidationError) as exc_info:
            validate_personality_system("tarot")

        assert "mbti, enneagram, zodiac" in exc_info.value.details["personality_system"]


class TestValidatePersonalityValue:
    """Tests for validate_personality_value."""

    def test_returns_canonical_value(self):
        """Values should be normalized to catalog casing."""
        assert validate_personality_value(PersonalitySystem.MBTI, "enfp") == "ENFP"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_rejects_missing_value(self, raw):
        """A value is required."""
        with pytest.raises(ValidationError) as exc_info:
            validate_personality_value(PersonalitySystem.MBTI, raw)

        assert exc_info.value.details["personality_value"] == (
            "Personality value is required"
        )

    def test_rejects_out_of_catalog_value(self):
        """The message should list the legal values."""
        with pytest.raises(ValidationError) as exc_info:
            validate_personality_value(PersonalitySystem.MBTI, "XXXX")

        detail = exc_info.value.details["personality_value"]
        assert "Invalid mbti value: XXXX" in detail
        assert "INTJ" in detail


class TestValidateVoterIdentifier:
    """Tests for validate_voter_identifier."""

    def test_strips_whitespace(self):
        """Surrounding spaces should be dropped."""
        assert validate_voter_identifier("  voter-1 ") == "voter-1"

    def test_rejects_empty(self):
        """Empty identifiers should fail."""
        with pytest.raises(ValidationError):
            validate_voter_identifier("   ")

    def test_rejects_too_long(self):
        """Identifiers over the maximum length should fail."""
        with pytest.raises(ValidationError):
            validate_voter_identifier("v" * (MAX_VOTER_IDENTIFIER_LENGTH + 1))


class TestValidateProfileAndPage:
    """Tests for validate_profile_id and validate_page."""

    @pytest.mark.parametrize("raw", [0, 100000])
    def test_profile_id_out_of_range(self, raw):
        """Profile IDs must be between 1 and 99999."""
        with pytest.raises(ValidationError):
            validate_profile_id(raw)

    def test_profile_id_in_range(self):
        """Boundary values are accepted."""
        assert validate_profile_id(1) == 1
        assert validate_profile_id(99999) == 99999

    def test_page_reports_every_bad_field(self):
        """Both page and limit problems should be reported together."""
        with pytest.raises(ValidationError) as exc_info:
            validate_page(0, 500, max_limit=100)

        assert set(exc_info.value.details) == {"page", "limit"}

    def test_page_accepts_max_limit(self):
        """The maximum limit itself is allowed."""
        validate_page(1, 100, max_limit=100)
