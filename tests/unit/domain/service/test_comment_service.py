"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from persona.domain.repository import CommentRepository
from persona.domain.service import CommentService
from persona.domain.value import CommentId, PersonalitySystem, ProfileId, VoteStats
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything in memory
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_comment_starts_with_empty_tally(self, unit_env):
        """New comments should have no votes."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act
        result = await comment_service.create_comment(
            profile_id=ProfileId(12),
            author="  Ada  ",
            content="  Classic INTP energy.  ",
            title="Thoughts",
        )

        # Assert
        assert result.author == "Ada"
        assert result.content == "Classic INTP energy."
        assert result.total_votes == 0
        assert result.vote_stats.total() == 0

        saved = await comment_repo.find_by_id(result.id)
        assert saved is not None
        assert saved.profile_id == 12


class TestTallyAdjustments:
    """Tests for increment_vote and decrement_vote methods."""

    @pytest.mark.asyncio
    async def test_increment_then_decrement(self, unit_env):
        """Counter and total should move together."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())

        # Act
        await comment_service.increment_vote(
            comment.id, PersonalitySystem.ENNEAGRAM, "3w4"
        )
        await comment_service.increment_vote(
            comment.id, PersonalitySystem.ENNEAGRAM, "3w4"
        )
        decremented = await comment_service.decrement_vote(
            comment.id, PersonalitySystem.ENNEAGRAM, "3w4"
        )

        # Assert
        assert decremented is True
        updated = await comment_repo.find_by_id(comment.id)
        assert updated.vote_stats.enneagram == {"3w4": 1}
        assert updated.total_votes == 1

    @pytest.mark.asyncio
    async def test_decrement_at_zero_is_clamped(self, unit_env):
        """Decrementing a zero counter should leave counter and total alone."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        await comment_service.increment_vote(comment.id, PersonalitySystem.MBTI, "INTJ")

        # Act
        decremented = await comment_service.decrement_vote(
            comment.id, PersonalitySystem.MBTI, "ENFP"
        )

        # Assert
        assert decremented is False
        updated = await comment_repo.find_by_id(comment.id)
        assert updated.total_votes == 1
        assert updated.total_votes == updated.vote_stats.total()

    @pytest.mark.asyncio
    async def test_replace_tally_sets_total_from_counts(self, unit_env):
        """Replacing the tally should recompute the total."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())

        # Act
        await comment_service.replace_tally(
            comment.id, VoteStats(mbti={"INTJ": 2}, zodiac={"Leo": 1})
        )

        # Assert
        updated = await comment_repo.find_by_id(comment.id)
        assert updated.total_votes == 3


class TestLookups:
    """Tests for get_comment_by_id and get_comments_by_ids."""

    @pytest.mark.asyncio
    async def test_get_comments_by_ids_skips_missing(self, unit_env):
        """Missing IDs should simply be absent from the result."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        missing = CommentId(uuid4())

        # Act
        found = await comment_service.get_comments_by_ids([comment.id, missing])

        # Assert
        assert list(found) == [comment.id]
        assert await comment_service.comment_exists(comment.id) is True
        assert await comment_service.comment_exists(missing) is False
        assert await comment_service.get_comment_by_id(missing) is None
