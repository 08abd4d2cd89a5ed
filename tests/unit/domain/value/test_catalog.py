"""Unit tests for the personality value catalog."""

import pytest

from persona.domain.value import (
    PERSONALITY_VALUES,
    PersonalitySystem,
    normalize_personality_value,
    parse_personality_system,
    personality_values,
)


class TestCatalogContents:
    """Tests for the catalog sizes and ordering."""

    def test_catalog_sizes(self):
        """Each system should have its fixed number of values."""
        assert len(PERSONALITY_VALUES[PersonalitySystem.MBTI]) == 16
        assert len(PERSONALITY_VALUES[PersonalitySystem.ENNEAGRAM]) == 18
        assert len(PERSONALITY_VALUES[PersonalitySystem.ZODIAC]) == 12

    def test_catalog_values_are_unique(self):
        """No value should appear twice within a system."""
        for values in PERSONALITY_VALUES.values():
            assert len(set(values)) == len(values)

    def test_personality_values_keeps_catalog_order(self):
        """Listing should be keyed by system name in catalog order."""
        listing = personality_values()

        assert list(listing) == ["mbti", "enneagram", "zodiac"]
        assert listing["mbti"][0] == "INTJ"
        assert listing["enneagram"][:2] == ["1w9", "1w2"]
        assert listing["zodiac"][-1] == "Pisces"


class TestParsePersonalitySystem:
    """Tests for parse_personality_system."""

    @pytest.mark.parametrize("raw", ["mbti", "MBTI", " Mbti "])
    def test_parse_ignores_case_and_spaces(self, raw):
        """System names should match regardless of case."""
        assert parse_personality_system(raw) == PersonalitySystem.MBTI

    @pytest.mark.parametrize("raw", ["astrology", "", None])
    def test_parse_unknown_returns_none(self, raw):
        """Unknown names should not match any system."""
        assert parse_personality_system(raw) is None


class TestNormalizePersonalityValue:
    """Tests for normalize_personality_value."""

    def test_mbti_value_is_uppercased(self):
        """MBTI values should come back in canonical upper case."""
        assert normalize_personality_value(PersonalitySystem.MBTI, "intj") == "INTJ"

    def test_enneagram_value_keeps_lowercase_w(self):
        """Enneagram wings should use a lowercase w."""
        assert (
            normalize_personality_value(PersonalitySystem.ENNEAGRAM, "4W5") == "4w5"
        )

    def test_zodiac_value_is_capitalized(self):
        """Zodiac signs should be capitalized."""
        assert (
            normalize_personality_value(PersonalitySystem.ZODIAC, "sAGITTARIUS")
            == "Sagittarius"
        )

    def test_value_from_other_system_is_rejected(self):
        """A value legal in one system should not pass in another."""
        assert normalize_personality_value(PersonalitySystem.ZODIAC, "INTJ") is None

    def test_enneagram_non_adjacent_wing_is_rejected(self):
        """Only the two adjacent wings are legal."""
        assert normalize_personality_value(PersonalitySystem.ENNEAGRAM, "1w5") is None
