"""Domain value objects for persona votes."""

from persona.domain.value.catalog import (
    PERSONALITY_VALUES,
    normalize_personality_value,
    parse_personality_system,
    personality_values,
)
from persona.domain.value.identifiers import CommentId, ProfileId, VoteId
from persona.domain.value.types import PersonalitySystem, VoteOutcome, VoteStats

__all__ = [
    # Identifiers
    "CommentId",
    "ProfileId",
    "VoteId",
    # Types
    "PersonalitySystem",
    "VoteOutcome",
    "VoteStats",
    # Catalog
    "PERSONALITY_VALUES",
    "normalize_personality_value",
    "parse_personality_system",
    "personality_values",
]
