"""Unit tests for VoteStatsService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from persona.domain.error import NotFoundError, ValidationError, VoteOperationError
from persona.domain.model import Pagination, Vote
from persona.domain.repository import CommentRepository, VoteRepository
from persona.domain.service import CommentService, VoteService, VoteStatsService
from persona.domain.value import CommentId, PersonalitySystem, ProfileId, VoteId
from persona.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryVoteRepository,
)
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything in memory
unit_env = create_env_fixture()


async def _services(unit_env):
    return (
        await unit_env.get(VoteService),
        await unit_env.get(VoteStatsService),
        await unit_env.get(CommentRepository),
    )


class TestGetCommentStats:
    """Tests for get_comment_stats method."""

    @pytest.mark.asyncio
    async def test_returns_tally_from_comment(self, unit_env):
        """Stats should come straight from the comment tally."""
        # Arrange
        vote_service, stats_service, comment_repo = await _services(unit_env)
        comment = await comment_repo.save(make_comment())
        await vote_service.submit_vote(comment.id, "mbti", "INTJ", "v1")
        await vote_service.submit_vote(comment.id, "mbti", "INTJ", "v2")

        # Act
        found, stats = await stats_service.get_comment_stats(str(comment.id))

        # Assert
        assert found.id == comment.id
        assert found.total_votes == 2
        assert stats.to_dict() == {"mbti": {"INTJ": 2}, "enneagram": {}, "zodiac": {}}

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        """Unknown comments should raise NotFoundError."""
        # Arrange
        _, stats_service, _ = await _services(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await stats_service.get_comment_stats(str(uuid4()))


class TestGetTopVotedComments:
    """Tests for get_top_voted_comments method."""

    @pytest.mark.asyncio
    async def test_ranked_by_active_votes(self, unit_env):
        """Comments with more active votes should rank first."""
        # Arrange
        vote_service, stats_service, comment_repo = await _services(unit_env)
        popular = await comment_repo.save(make_comment(content="popular"))
        quiet = await comment_repo.save(make_comment(content="quiet"))
        await vote_service.submit_vote(popular.id, "mbti", "INTJ", "v1")
        await vote_service.submit_vote(popular.id, "zodiac", "Leo", "v1")
        await vote_service.submit_vote(popular.id, "mbti", "ENFP", "v2")
        await vote_service.submit_vote(quiet.id, "mbti", "INTJ", "v1")

        # Act
        ranked = await stats_service.get_top_voted_comments()

        # Assert
        assert [entry.comment.id for entry in ranked] == [popular.id, quiet.id]
        assert ranked[0].vote_count == 3
        assert ranked[0].personality_systems == [
            PersonalitySystem.MBTI,
            PersonalitySystem.ZODIAC,
        ]

    @pytest.mark.asyncio
    async def test_system_filter_and_limit(self, unit_env):
        """Only votes for the requested system should count."""
        # Arrange
        vote_service, stats_service, comment_repo = await _services(unit_env)
        first = await comment_repo.save(make_comment())
        second = await comment_repo.save(make_comment())
        await vote_service.submit_vote(first.id, "mbti", "INTJ", "v1")
        await vote_service.submit_vote(second.id, "zodiac", "Leo", "v1")
        await vote_service.submit_vote(second.id, "zodiac", "Leo", "v2")

        # Act
        ranked = await stats_service.get_top_voted_comments("MBTI", limit=1)

        # Assert
        assert len(ranked) == 1
        assert ranked[0].comment.id == first.id
        assert ranked[0].vote_count == 1

    @pytest.mark.asyncio
    async def test_removed_votes_are_not_counted(self, unit_env):
        """Inactive votes should not count toward the ranking."""
        # Arrange
        vote_service, stats_service, comment_repo = await _services(unit_env)
        comment = await comment_repo.save(make_comment())
        await vote_service.submit_vote(comment.id, "mbti", "INTJ", "v1")
        await vote_service.remove_vote(comment.id, "v1", "mbti")

        # Act
        ranked = await stats_service.get_top_voted_comments()

        # Assert
        assert ranked == []

    @pytest.mark.asyncio
    async def test_votes_on_missing_comment_are_dropped(self, unit_env):
        """Groups whose comment no longer exists should be skipped."""
        # Arrange
        _, stats_service, _ = await _services(unit_env)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_repo.save(
            Vote(
                id=VoteId(uuid4()),
                comment_id=CommentId(uuid4()),
                profile_id=ProfileId(1),
                voter_identifier="v1",
                personality_system=PersonalitySystem.MBTI,
                personality_value="INTJ",
            )
        )

        # Act
        ranked = await stats_service.get_top_voted_comments()

        # Assert
        assert ranked == []

    @pytest.mark.asyncio
    async def test_limit_above_maximum_is_rejected(self, unit_env):
        """Limits above the configured maximum should fail validation."""
        # Arrange
        _, stats_service, _ = await _services(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError):
            await stats_service.get_top_voted_comments(limit=101)


class TestGetPersonalitySystemStats:
    """Tests for get_personality_system_stats method."""

    @pytest.mark.asyncio
    async def test_values_sorted_by_count(self, unit_env):
        """Values should be ordered by count descending."""
        # Arrange
        vote_service, stats_service, comment_repo = await _services(unit_env)
        comment = await comment_repo.save(make_comment())
        await vote_service.submit_vote(comment.id, "mbti", "ENFP", "v1")
        await vote_service.submit_vote(comment.id, "mbti", "INTJ", "v2")
        await vote_service.submit_vote(comment.id, "mbti", "INTJ", "v3")
        await vote_service.submit_vote(comment.id, "zodiac", "Leo", "v1")

        # Act
        stats = await stats_service.get_personality_system_stats()

        # Assert
        assert [s.personality_system for s in stats] == [
            PersonalitySystem.MBTI,
            PersonalitySystem.ZODIAC,
        ]
        mbti = stats[0]
        assert [(v.value, v.count) for v in mbti.values] == [("INTJ", 2), ("ENFP", 1)]
        assert mbti.total_votes == 3

    @pytest.mark.asyncio
    async def test_comment_filter(self, unit_env):
        """Only votes on the given comment should count."""
        # Arrange
        vote_service, stats_service, comment_repo = await _services(unit_env)
        first = await comment_repo.save(make_comment())
        second = await comment_repo.save(make_comment())
        await vote_service.submit_vote(first.id, "enneagram", "5w6", "v1")
        await vote_service.submit_vote(second.id, "enneagram", "2w1", "v1")

        # Act
        stats = await stats_service.get_personality_system_stats(str(first.id))

        # Assert
        assert len(stats) == 1
        assert [v.value for v in stats[0].values] == ["5w6"]


class TestGetVoteHistory:
    """Tests for get_vote_history method."""

    @pytest.mark.asyncio
    async def test_history_pages_newest_first(self, unit_env):
        """History should be paged with accurate metadata."""
        # Arrange
        vote_service, stats_service, comment_repo = await _services(unit_env)
        comments = [await comment_repo.save(make_comment()) for _ in range(3)]
        for comment in comments:
            await vote_service.submit_vote(comment.id, "zodiac", "Leo", "voter-1")
        await vote_service.submit_vote(comments[0].id, "zodiac", "Leo", "voter-2")

        # Act
        page_one = await stats_service.get_vote_history("voter-1", page=1, limit=2)
        page_two = await stats_service.get_vote_history("voter-1", page=2, limit=2)

        # Assert
        assert len(page_one.entries) == 2
        assert len(page_two.entries) == 1
        assert page_one.pagination == Pagination(
            page=1,
            limit=2,
            total_count=3,
            total_pages=2,
            has_next_page=True,
            has_prev_page=False,
        )
        assert page_two.pagination.has_next_page is False
        assert page_two.pagination.has_prev_page is True
        assert all(entry.comment is not None for entry in page_one.entries)

    @pytest.mark.asyncio
    async def test_history_without_comment(self, unit_env):
        """Votes whose comment is gone should have no comment summary."""
        # Arrange
        _, stats_service, _ = await _services(unit_env)
        vote_repo = await unit_env.get(VoteRepository)
        await vote_repo.save(
            Vote(
                id=VoteId(uuid4()),
                comment_id=CommentId(uuid4()),
                profile_id=ProfileId(3),
                voter_identifier="voter-1",
                personality_system=PersonalitySystem.MBTI,
                personality_value="ISTJ",
                created_at=datetime.now() - timedelta(days=1),
            )
        )

        # Act
        history = await stats_service.get_vote_history("voter-1")

        # Assert
        assert len(history.entries) == 1
        assert history.entries[0].comment is None

    @pytest.mark.asyncio
    async def test_invalid_page_is_rejected(self, unit_env):
        """Page numbers below one should fail validation."""
        # Arrange
        _, stats_service, _ = await _services(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError):
            await stats_service.get_vote_history("voter-1", page=0)


class TestGetVoteCount:
    """Tests for get_vote_count method."""

    @pytest.mark.asyncio
    async def test_counts_with_filters(self, unit_env):
        """Counts should respect comment and system filters."""
        # Arrange
        vote_service, stats_service, comment_repo = await _services(unit_env)
        first = await comment_repo.save(make_comment())
        second = await comment_repo.save(make_comment())
        await vote_service.submit_vote(first.id, "mbti", "INTJ", "v1")
        await vote_service.submit_vote(first.id, "zodiac", "Leo", "v1")
        await vote_service.submit_vote(second.id, "mbti", "INTJ", "v1")

        # Act & Assert
        assert await stats_service.get_vote_count() == 3
        assert await stats_service.get_vote_count(comment_id=str(first.id)) == 2
        assert await stats_service.get_vote_count(personality_system="mbti") == 2
        assert (
            await stats_service.get_vote_count(
                comment_id=str(second.id), personality_system="zodiac"
            )
            == 0
        )


class _UnreachableCommentRepository(InMemoryCommentRepository):
    async def find_by_id(self, comment_id):
        raise OperationalError("SELECT comments", {}, Exception("connection lost"))

    async def find_by_ids(self, comment_ids):
        raise OperationalError("SELECT comments", {}, Exception("connection lost"))


class TestStorageFailures:
    """Tests for storage failures on read paths."""

    @pytest.mark.asyncio
    async def test_comment_stats_lookup_failure_is_wrapped(self):
        """A failed comment lookup should become VoteOperationError."""
        # Arrange
        stats_service = VoteStatsService(
            InMemoryVoteRepository(), CommentService(_UnreachableCommentRepository())
        )

        # Act & Assert
        with pytest.raises(VoteOperationError) as exc_info:
            await stats_service.get_comment_stats(str(uuid4()))

        assert exc_info.value.operation == "get comment"
        assert isinstance(exc_info.value.cause, OperationalError)

    @pytest.mark.asyncio
    async def test_top_voted_comment_lookup_failure_is_wrapped(self):
        """Failing to load ranked comments should become VoteOperationError."""
        # Arrange
        vote_repo = InMemoryVoteRepository()
        comment_id = CommentId(uuid4())
        await vote_repo.save(
            Vote(
                id=VoteId(uuid4()),
                comment_id=comment_id,
                profile_id=ProfileId(1),
                voter_identifier="v1",
                personality_system=PersonalitySystem.MBTI,
                personality_value="INTJ",
            )
        )
        stats_service = VoteStatsService(
            vote_repo, CommentService(_UnreachableCommentRepository())
        )

        # Act & Assert
        with pytest.raises(VoteOperationError) as exc_info:
            await stats_service.get_top_voted_comments()

        assert exc_info.value.operation == "get comments"

    @pytest.mark.asyncio
    async def test_history_comment_lookup_failure_is_wrapped(self):
        """Failing to load history comments should become VoteOperationError."""
        # Arrange
        vote_repo = InMemoryVoteRepository()
        await vote_repo.save(
            Vote(
                id=VoteId(uuid4()),
                comment_id=CommentId(uuid4()),
                profile_id=ProfileId(1),
                voter_identifier="v1",
                personality_system=PersonalitySystem.ZODIAC,
                personality_value="Leo",
            )
        )
        stats_service = VoteStatsService(
            vote_repo, CommentService(_UnreachableCommentRepository())
        )

        # Act & Assert
        with pytest.raises(VoteOperationError):
            await stats_service.get_vote_history("v1")
