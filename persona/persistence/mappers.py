"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from persona.domain.model import Comment, PersonalityValueCount, Vote
from persona.domain.value import (
    CommentId,
    PersonalitySystem,
    ProfileId,
    VoteId,
    VoteStats,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_vote_stats(rows: Iterable[Dict[str, Any]]) -> VoteStats:
    """Convert tally counter rows to VoteStats.

    Args:
        rows: comment_vote_tallies rows for a single comment

    Returns:
        VoteStats value object
    """
    return VoteStats.from_counts(
        [
            (
                PersonalitySystem(row["personality_system"]),
                row["personality_value"],
                row["count"],
            )
            for row in rows
        ]
    )


def row_to_comment(
    row: Dict[str, Any], tally_rows: Iterable[Dict[str, Any]] = ()
) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: comments row as dict
        tally_rows: The comment's tally counter rows

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        profile_id=ProfileId(row["profile_id"]),
        author=row["author"],
        title=row.get("title"),
        content=row["content"],
        is_visible=row["is_visible"],
        vote_stats=row_to_vote_stats(tally_rows),
        total_votes=row["total_votes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to a comments row dict.

    The tally lives in its own table and is not part of the row.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return comment.model_dump(exclude={"vote_stats"})


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        profile_id=ProfileId(row["profile_id"]),
        voter_identifier=row["voter_identifier"],
        personality_system=PersonalitySystem(row["personality_system"]),
        personality_value=row["personality_value"],
        active=row["active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion
    """
    vote_dict = vote.model_dump()
    vote_dict["personality_system"] = vote.personality_system.value
    return vote_dict


def row_to_value_count(row: Dict[str, Any]) -> PersonalityValueCount:
    return PersonalityValueCount(
        personality_system=PersonalitySystem(row["personality_system"]),
        personality_value=row["personality_value"],
        count=row["count"],
    )
