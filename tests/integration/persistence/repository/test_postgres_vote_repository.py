"""Integration tests for the PostgreSQL vote and comment repositories.

Needs a migrated database at DATABASE__URL; skipped otherwise. Each test
runs in one request scope, so its writes commit when the scope closes.
"""

import os
from uuid import uuid4

import pytest

from persona.domain.error import DuplicateVoteError, NotFoundError
from persona.domain.repository import (
    CommentRepository,
    TransactionManager,
    VoteRepository,
)
from persona.domain.service import VoteService
from persona.domain.value import PersonalitySystem, VoteId, VoteOutcome, VoteStats
from tests.conftest import make_comment
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.getenv("DATABASE__URL"), reason="needs a PostgreSQL database"
)

integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresVoteFlow:
    """Vote flows against the real schema."""

    @pytest.mark.asyncio
    async def test_submit_change_remove(self, integration_env):
        """The tally should follow each step of a vote's life."""
        # Arrange
        vote_service = await integration_env.get(VoteService)
        comment_repo = await integration_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())

        # Act
        created = await vote_service.submit_vote(comment.id, "mbti", "INTJ", "v1")
        changed = await vote_service.submit_vote(comment.id, "mbti", "ENFP", "v1")
        after_change = await comment_repo.find_by_id(comment.id)
        await vote_service.remove_vote(comment.id, "v1", "mbti")
        after_remove = await comment_repo.find_by_id(comment.id)

        # Assert
        assert created.outcome == VoteOutcome.SUBMITTED
        assert changed.outcome == VoteOutcome.UPDATED
        assert after_change.vote_stats.count(PersonalitySystem.MBTI, "ENFP") == 1
        assert after_change.vote_stats.count(PersonalitySystem.MBTI, "INTJ") == 0
        assert after_change.total_votes == 1
        assert after_remove.total_votes == 0

    @pytest.mark.asyncio
    async def test_clamped_decrement_leaves_total(self, integration_env):
        """Decrementing a zero counter should not touch total_votes."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        await comment_repo.increment_vote(comment.id, PersonalitySystem.ZODIAC, "Leo")

        # Act
        decremented = await comment_repo.decrement_vote(
            comment.id, PersonalitySystem.ZODIAC, "Aries"
        )

        # Assert
        assert decremented is False
        updated = await comment_repo.find_by_id(comment.id)
        assert updated.total_votes == 1

    @pytest.mark.asyncio
    async def test_replace_tally(self, integration_env):
        """Replacing the tally should drop zero counters and reset the total."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        await comment_repo.increment_vote(comment.id, PersonalitySystem.MBTI, "INTJ")

        # Act
        await comment_repo.replace_tally(
            comment.id, VoteStats(mbti={"ENFP": 2, "INTJ": 0})
        )

        # Assert
        updated = await comment_repo.find_by_id(comment.id)
        assert updated.vote_stats.mbti == {"ENFP": 2}
        assert updated.total_votes == 2

    @pytest.mark.asyncio
    async def test_partial_index_rejects_second_active_vote(self, integration_env):
        """The database should refuse two active votes for one slot."""
        # Arrange
        vote_service = await integration_env.get(VoteService)
        comment_repo = await integration_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        first = await vote_service.submit_vote(comment.id, "zodiac", "Leo", "v1")

        # Act & Assert
        with pytest.raises(DuplicateVoteError):
            await vote_service.vote_repository.save(
                first.vote.model_copy(update={"id": VoteId(uuid4())})
            )

    @pytest.mark.asyncio
    async def test_update_value_returns_replaced_value(self, integration_env):
        """The update statement should report the value it overwrote."""
        # Arrange
        vote_service = await integration_env.get(VoteService)
        vote_repo = await integration_env.get(VoteRepository)
        comment_repo = await integration_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        await vote_service.submit_vote(comment.id, "mbti", "INTJ", "v1")

        # Act
        change = await vote_repo.update_value(
            comment.id, "v1", PersonalitySystem.MBTI, "ENFP"
        )

        # Assert
        assert change.previous_value == "INTJ"
        assert change.vote.personality_value == "ENFP"
        assert change.vote.active is True

    @pytest.mark.asyncio
    async def test_savepoint_undoes_only_its_block(self, integration_env):
        """A failed savepoint block should roll back its writes and no others."""
        # Arrange
        vote_service = await integration_env.get(VoteService)
        vote_repo = await integration_env.get(VoteRepository)
        transaction_manager = await integration_env.get(TransactionManager)
        comment_repo = await integration_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment())
        await vote_service.submit_vote(comment.id, "mbti", "INTJ", "v1")

        # Act
        with pytest.raises(NotFoundError):
            async with transaction_manager.savepoint():
                await vote_service.submit_vote(comment.id, "zodiac", "Leo", "v1")
                raise NotFoundError("Comment", "abandoned")

        # Assert
        assert await vote_repo.count_active(comment_id=comment.id) == 1
        updated = await comment_repo.find_by_id(comment.id)
        assert updated.total_votes == 1
        assert updated.vote_stats.zodiac == {}
