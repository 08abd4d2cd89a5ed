"""Domain value objects for persona votes.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import Field, field_validator

from persona.domain.value.common import ValueObject


class PersonalitySystem(str, Enum):
    """Personality classification scheme a vote belongs to."""

    MBTI = "mbti"
    ENNEAGRAM = "enneagram"
    ZODIAC = "zodiac"


class VoteOutcome(str, Enum):
    """What a vote submission did to the stored vote."""

    SUBMITTED = "submitted"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class VoteStats(ValueObject):
    """Per-comment vote tally.

    One value -> count mapping per personality system. Values that were
    never voted for are implicitly zero. Counts are never negative.
    """

    mbti: dict[str, int] = Field(default_factory=dict)
    enneagram: dict[str, int] = Field(default_factory=dict)
    zodiac: dict[str, int] = Field(default_factory=dict)

    @field_validator("mbti", "enneagram", "zodiac")
    @classmethod
    def validate_counts(cls, v: dict[str, int]) -> dict[str, int]:
        """Validate counts are non-negative."""
        for value, count in v.items():
            if count < 0:
                raise ValueError(f"Vote count for {value} must not be negative")
        return v

    @classmethod
    def from_counts(
        cls, counts: list[tuple[PersonalitySystem, str, int]]
    ) -> "VoteStats":
        """Build a tally from (system, value, count) rows."""
        by_system: dict[str, dict[str, int]] = {s.value: {} for s in PersonalitySystem}
        for system, value, count in counts:
            by_system[PersonalitySystem(system).value][value] = count
        return cls(**by_system)

    def for_system(self, system: PersonalitySystem) -> dict[str, int]:
        """Return a copy of the value counts for one system."""
        return dict(getattr(self, system.value))

    def count(self, system: PersonalitySystem, value: str) -> int:
        """Return the count for a single value (zero if absent)."""
        return getattr(self, system.value).get(value, 0)

    def total(self) -> int:
        """Sum of all counts across all systems."""
        return sum(
            count
            for system in PersonalitySystem
            for count in self.for_system(system).values()
        )

    def incremented(self, system: PersonalitySystem, value: str) -> "VoteStats":
        """Return a new tally with one more vote for value."""
        counts = self.for_system(system)
        counts[value] = counts.get(value, 0) + 1
        return self.model_copy(update={system.value: counts})

    def decremented(self, system: PersonalitySystem, value: str) -> "VoteStats":
        """Return a new tally with one less vote for value (floored at zero)."""
        counts = self.for_system(system)
        counts[value] = max(counts.get(value, 0) - 1, 0)
        return self.model_copy(update={system.value: counts})

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Plain nested dict with every system present."""
        return {system.value: self.for_system(system) for system in PersonalitySystem}
