"""Unit tests for the in-memory vote repository."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from persona.domain.error import DuplicateVoteError
from persona.domain.model import Vote
from persona.domain.value import CommentId, PersonalitySystem, ProfileId, VoteId
from persona.persistence.repository.inmemory import InMemoryVoteRepository


def _vote(
    comment_id: CommentId,
    voter: str = "voter-1",
    system: PersonalitySystem = PersonalitySystem.MBTI,
    value: str = "INTJ",
    age_minutes: int = 0,
) -> Vote:
    created = datetime.now() - timedelta(minutes=age_minutes)
    return Vote(
        id=VoteId(uuid4()),
        comment_id=comment_id,
        profile_id=ProfileId(1),
        voter_identifier=voter,
        personality_system=system,
        personality_value=value,
        created_at=created,
        updated_at=created,
    )


class TestActiveVoteUniqueness:
    """Tests for the one-active-vote rule."""

    @pytest.mark.asyncio
    async def test_second_active_vote_is_rejected(self):
        """Saving a second active vote for the same slot should fail."""
        # Arrange
        repo = InMemoryVoteRepository()
        comment_id = CommentId(uuid4())
        await repo.save(_vote(comment_id))

        # Act & Assert
        with pytest.raises(DuplicateVoteError):
            await repo.save(_vote(comment_id, value="ENFP"))

    @pytest.mark.asyncio
    async def test_deactivated_vote_frees_the_slot(self):
        """After deactivation a new active vote can be saved."""
        # Arrange
        repo = InMemoryVoteRepository()
        comment_id = CommentId(uuid4())
        await repo.save(_vote(comment_id))

        # Act
        prior = await repo.deactivate(comment_id, "voter-1", PersonalitySystem.MBTI)
        await repo.save(_vote(comment_id, value="ENFP"))

        # Assert
        assert prior is not None
        assert prior.active is True
        active = await repo.find_active_vote(
            comment_id, "voter-1", PersonalitySystem.MBTI
        )
        assert active.personality_value == "ENFP"
        assert await repo.count_active(comment_id=comment_id) == 1

    @pytest.mark.asyncio
    async def test_update_value_without_active_vote(self):
        """Updating a missing vote should return None."""
        # Arrange
        repo = InMemoryVoteRepository()

        # Act
        result = await repo.update_value(
            CommentId(uuid4()), "voter-1", PersonalitySystem.MBTI, "INTJ"
        )

        # Assert
        assert result is None

    @pytest.mark.asyncio
    async def test_update_value_reports_replaced_value(self):
        """Each update should report the value it actually replaced."""
        # Arrange
        repo = InMemoryVoteRepository()
        comment_id = CommentId(uuid4())
        saved = await repo.save(_vote(comment_id))

        # Act
        first = await repo.update_value(
            comment_id, "voter-1", PersonalitySystem.MBTI, "ENFP"
        )
        second = await repo.update_value(
            comment_id, "voter-1", PersonalitySystem.MBTI, "ISTP"
        )

        # Assert
        assert first.previous_value == "INTJ"
        assert first.vote.personality_value == "ENFP"
        assert second.previous_value == "ENFP"
        assert second.vote.personality_value == "ISTP"
        assert second.vote.id == saved.id


class TestQueries:
    """Tests for listing and aggregation."""

    @pytest.mark.asyncio
    async def test_find_by_voter_newest_first_with_offset(self):
        """Voter listings should be newest first and paged."""
        # Arrange
        repo = InMemoryVoteRepository()
        old = await repo.save(_vote(CommentId(uuid4()), age_minutes=30))
        new = await repo.save(_vote(CommentId(uuid4()), age_minutes=1))
        await repo.save(_vote(CommentId(uuid4()), voter="someone-else"))

        # Act
        first_page = await repo.find_by_voter("voter-1", limit=1)
        second_page = await repo.find_by_voter("voter-1", limit=1, offset=1)

        # Assert
        assert [v.id for v in first_page] == [new.id]
        assert [v.id for v in second_page] == [old.id]

    @pytest.mark.asyncio
    async def test_top_voted_ties_broken_by_comment_id(self):
        """Equal counts should be ordered by comment ID."""
        # Arrange
        repo = InMemoryVoteRepository()
        ids = sorted((CommentId(uuid4()) for _ in range(3)), key=str)
        for comment_id in reversed(ids):
            await repo.save(_vote(comment_id))

        # Act
        counts = await repo.top_voted_comments(limit=10)

        # Assert
        assert [c.comment_id for c in counts] == ids

    @pytest.mark.asyncio
    async def test_value_counts_ignore_inactive_votes(self):
        """Only active votes should be counted."""
        # Arrange
        repo = InMemoryVoteRepository()
        comment_id = CommentId(uuid4())
        await repo.save(_vote(comment_id, voter="v1"))
        await repo.save(_vote(comment_id, voter="v2"))
        await repo.deactivate(comment_id, "v2", PersonalitySystem.MBTI)

        # Act
        counts = await repo.value_counts(comment_id)

        # Assert
        assert [(c.personality_value, c.count) for c in counts] == [("INTJ", 1)]
