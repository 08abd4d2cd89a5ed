"""Base model for persona domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for votes, comments and aggregation read models.

    Entities are immutable; state changes go through repositories, which
    return fresh copies.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )
