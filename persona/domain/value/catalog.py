"""Catalog of legal personality values.

Each personality system has a closed, ordered set of values. Matching is
case-insensitive; stored values always use the catalog's canonical casing.
"""

from persona.domain.value.types import PersonalitySystem

PERSONALITY_VALUES: dict[PersonalitySystem, tuple[str, ...]] = {
    PersonalitySystem.MBTI: (
        "INTJ",
        "INTP",
        "ENTJ",
        "ENTP",
        "INFJ",
        "INFP",
        "ENFJ",
        "ENFP",
        "ISTJ",
        "ISFJ",
        "ESTJ",
        "ESFJ",
        "ISTP",
        "ISFP",
        "ESTP",
        "ESFP",
    ),
    PersonalitySystem.ENNEAGRAM: (
        "1w9",
        "1w2",
        "2w1",
        "2w3",
        "3w2",
        "3w4",
        "4w3",
        "4w5",
        "5w4",
        "5w6",
        "6w5",
        "6w7",
        "7w6",
        "7w8",
        "8w7",
        "8w9",
        "9w8",
        "9w1",
    ),
    PersonalitySystem.ZODIAC: (
        "Aries",
        "Taurus",
        "Gemini",
        "Cancer",
        "Leo",
        "Virgo",
        "Libra",
        "Scorpio",
        "Sagittarius",
        "Capricorn",
        "Aquarius",
        "Pisces",
    ),
}

# Lowercased lookup built once at import
_CANONICAL: dict[PersonalitySystem, dict[str, str]] = {
    system: {value.lower(): value for value in values}
    for system, values in PERSONALITY_VALUES.items()
}


def parse_personality_system(raw: str | None) -> PersonalitySystem | None:
    """Parse a personality system name, ignoring case and surrounding spaces.

    Args:
        raw: System name as supplied by the caller

    Returns:
        The matching system, or None if unknown
    """
    if raw is None:
        return None
    try:
        return PersonalitySystem(raw.strip().lower())
    except ValueError:
        return None


def normalize_personality_value(
    system: PersonalitySystem, raw: str | None
) -> str | None:
    """Map a raw value to its canonical form for the given system.

    Args:
        system: Personality system the value belongs to
        raw: Value as supplied by the caller (any case)

    Returns:
        Canonical value, or None if it is not in the system's catalog
    """
    if raw is None:
        return None
    return _CANONICAL[system].get(raw.strip().lower())


def personality_values() -> dict[str, list[str]]:
    """Full catalog keyed by system name, for client-side form population."""
    return {
        system.value: list(values) for system, values in PERSONALITY_VALUES.items()
    }
