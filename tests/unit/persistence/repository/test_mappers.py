"""Unit tests for row <-> domain mappers."""

from datetime import datetime
from uuid import uuid4

from persona.domain.value import PersonalitySystem
from persona.persistence.mappers import (
    comment_to_dict,
    row_to_comment,
    row_to_vote,
    vote_to_dict,
)
from tests.conftest import make_comment


class TestCommentMapping:
    """Tests for comment row mapping."""

    def test_row_with_tally_rows(self):
        """Tally counter rows should be folded into vote_stats."""
        # Arrange
        now = datetime.now()
        row = {
            "id": str(uuid4()),
            "profile_id": 5,
            "author": "Ada",
            "title": None,
            "content": "Reads like an INFJ",
            "is_visible": True,
            "total_votes": 3,
            "created_at": now,
            "updated_at": now,
        }
        tally_rows = [
            {"personality_system": "mbti", "personality_value": "INFJ", "count": 2},
            {"personality_system": "zodiac", "personality_value": "Leo", "count": 1},
        ]

        # Act
        comment = row_to_comment(row, tally_rows)

        # Assert
        assert comment.vote_stats.mbti == {"INFJ": 2}
        assert comment.vote_stats.zodiac == {"Leo": 1}
        assert comment.total_votes == comment.vote_stats.total()

    def test_comment_dict_excludes_tally(self):
        """The tally is stored separately from the comment row."""
        assert "vote_stats" not in comment_to_dict(make_comment())


class TestVoteMapping:
    """Tests for vote row mapping."""

    def test_vote_round_trip_through_row(self):
        """A vote written as a row should read back unchanged."""
        # Arrange
        now = datetime.now()
        row = {
            "id": uuid4(),
            "comment_id": uuid4(),
            "profile_id": 9,
            "voter_identifier": "1111_curl",
            "personality_system": "enneagram",
            "personality_value": "6w7",
            "active": True,
            "created_at": now,
            "updated_at": now,
        }

        # Act
        vote = row_to_vote(row)
        written = vote_to_dict(vote)

        # Assert
        assert vote.personality_system == PersonalitySystem.ENNEAGRAM
        assert written["personality_system"] == "enneagram"
        assert written == row
