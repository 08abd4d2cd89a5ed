"""Input validation for vote operations.

Each validator either returns the parsed, normalized value or raises
ValidationError with a field -> message mapping.
"""

from uuid import UUID

from persona.domain.error import ValidationError
from persona.domain.value import (
    PERSONALITY_VALUES,
    CommentId,
    PersonalitySystem,
    ProfileId,
    normalize_personality_value,
    parse_personality_system,
)

MAX_VOTER_IDENTIFIER_LENGTH = 100
MAX_PROFILE_ID = 99999

_SYSTEM_NAMES = ", ".join(system.value for system in PersonalitySystem)


def validate_comment_id(raw: str | CommentId) -> CommentId:
    """Parse a comment reference."""
    if isinstance(raw, UUID):
        return CommentId(raw)
    try:
        return CommentId(UUID(str(raw).strip()))
    except ValueError:
        raise ValidationError(
            "Invalid comment ID",
            {"comment_id": "Comment ID must be a valid UUID"},
        )


def validate_personality_system(
    raw: str | PersonalitySystem | None,
) -> PersonalitySystem:
    """Parse a personality system name (case-insensitive)."""
    if isinstance(raw, PersonalitySystem):
        return raw
    system = parse_personality_system(raw)
    if system is None:
        raise ValidationError(
            "Invalid personality system",
            {
                "personality_system": (
                    f"Personality system must be one of: {_SYSTEM_NAMES}"
                )
            },
        )
    return system


def validate_personality_value(system: PersonalitySystem, raw: str | None) -> str:
    """Normalize a value against the system's catalog."""
    if raw is None or not raw.strip():
        raise ValidationError(
            "Invalid personality value",
            {"personality_value": "Personality value is required"},
        )
    value = normalize_personality_value(system, raw)
    if value is None:
        valid = ", ".join(PERSONALITY_VALUES[system])
        raise ValidationError(
            "Invalid personality value",
            {
                "personality_value": (
                    f"Invalid {system.value} value: {raw.strip()}. "
                    f"Valid values are: {valid}"
                )
            },
        )
    return value


def validate_voter_identifier(raw: str | None) -> str:
    """Check the voter identifier is present and not too long."""
    value = (raw or "").strip()
    if not value:
        raise ValidationError(
            "Invalid voter identifier",
            {"voter_identifier": "Voter identifier cannot be empty"},
        )
    if len(value) > MAX_VOTER_IDENTIFIER_LENGTH:
        raise ValidationError(
            "Invalid voter identifier",
            {
                "voter_identifier": (
                    f"Voter identifier must not exceed "
                    f"{MAX_VOTER_IDENTIFIER_LENGTH} characters"
                )
            },
        )
    return value


def validate_profile_id(raw: int) -> ProfileId:
    """Check the profile ID is within the numbered profile range."""
    if raw < 1 or raw > MAX_PROFILE_ID:
        raise ValidationError(
            "Invalid profile ID",
            {"profile_id": f"Profile ID must be between 1 and {MAX_PROFILE_ID}"},
        )
    return ProfileId(raw)


def validate_page(page: int, limit: int, max_limit: int) -> None:
    """Check pagination parameters."""
    details: dict[str, str] = {}
    if page < 1:
        details["page"] = "Page must be greater than 0"
    if limit < 1 or limit > max_limit:
        details["limit"] = f"Limit must be between 1 and {max_limit}"
    if details:
        raise ValidationError("Invalid pagination parameters", details)
