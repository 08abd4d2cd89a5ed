"""List personality values use case."""

from datetime import datetime

from pydantic import BaseModel

from persona.domain.value import personality_values

DESCRIPTION = {
    "mbti": "Myers-Briggs Type Indicator: 16 four-letter types",
    "enneagram": "Enneagram types with wing: 18 codes from 1w9 to 9w1",
    "zodiac": "Western zodiac: 12 sun signs",
}


class ListPersonalityValuesResponse(BaseModel):
    """List personality values response."""

    personality_values: dict[str, list[str]]
    description: dict[str, str]
    last_updated: datetime


class ListPersonalityValuesUseCase:
    """Use case for listing the values each personality system accepts."""

    async def execute(self) -> ListPersonalityValuesResponse:
        """Return the personality value catalog."""
        return ListPersonalityValuesResponse(
            personality_values=personality_values(),
            description=DESCRIPTION,
            last_updated=datetime.now(),
        )
