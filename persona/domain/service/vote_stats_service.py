"""Read-only vote aggregation service.

Per-comment stats come from the comment tally. Everything else is computed
from active vote records. Nothing here writes.
"""

import logfire
from sqlalchemy.exc import SQLAlchemyError

from persona.domain.error import NotFoundError, VoteOperationError
from persona.domain.model import (
    Comment,
    CommentSummary,
    Pagination,
    PersonalitySystemStats,
    TopVotedComment,
    ValueCount,
    VoteHistoryEntry,
    VoteHistoryPage,
)
from persona.domain.repository import VoteRepository
from persona.domain.value import CommentId, PersonalitySystem, VoteStats

from .base import Service
from .comment_service import CommentService
from .vote_validation import (
    validate_comment_id,
    validate_page,
    validate_personality_system,
    validate_voter_identifier,
)


def summarize_comment(comment: Comment) -> CommentSummary:
    return CommentSummary(
        id=comment.id,
        profile_id=comment.profile_id,
        author=comment.author,
        content=comment.content,
    )


class VoteStatsService(Service):
    """Domain service for vote statistics."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        comment_service: CommentService,
        max_top_limit: int = 100,
        max_history_limit: int = 100,
    ) -> None:
        """Initialize vote stats service.

        Args:
            vote_repository: Vote repository
            comment_service: Comment domain service
            max_top_limit: Largest ranking size accepted
            max_history_limit: Largest history page size accepted
        """
        self.vote_repository = vote_repository
        self.comment_service = comment_service
        self.max_top_limit = max_top_limit
        self.max_history_limit = max_history_limit

    async def get_comment_stats(
        self, comment_id: str | CommentId
    ) -> tuple[Comment, VoteStats]:
        """Read a comment's tally.

        Returns:
            The comment and its vote stats

        Raises:
            NotFoundError: If the comment does not exist
        """
        cid = validate_comment_id(comment_id)
        with logfire.span("vote_stats_service.get_comment_stats", comment_id=str(cid)):
            comment = await self.comment_service.get_comment_by_id(cid)
            if not comment:
                raise NotFoundError("Comment", str(cid))
            return comment, comment.vote_stats

    async def get_top_voted_comments(
        self,
        personality_system: str | PersonalitySystem | None = None,
        limit: int = 10,
    ) -> list[TopVotedComment]:
        """Rank comments by number of active votes.

        Ties are ordered by comment ID. Groups whose comment no longer
        exists are dropped, so fewer than limit entries may be returned.

        Args:
            personality_system: Only count votes for this system
            limit: Maximum number of comments

        Returns:
            Ranked comments, most voted first
        """
        system = (
            validate_personality_system(personality_system)
            if personality_system
            else None
        )
        validate_page(1, limit, self.max_top_limit)

        with logfire.span(
            "vote_stats_service.get_top_voted_comments",
            personality_system=system.value if system else None,
            limit=limit,
        ):
            try:
                counts = await self.vote_repository.top_voted_comments(system, limit)
            except SQLAlchemyError as e:
                raise VoteOperationError("rank comments", "votes", e) from e

            comments = await self.comment_service.get_comments_by_ids(
                [c.comment_id for c in counts]
            )

            ranked = []
            for count in counts:
                comment = comments.get(count.comment_id)
                if not comment:
                    logfire.warn(
                        "Votes reference missing comment",
                        comment_id=str(count.comment_id),
                    )
                    continue
                ranked.append(
                    TopVotedComment(
                        comment=summarize_comment(comment),
                        vote_count=count.total_votes,
                        personality_systems=count.personality_systems,
                    )
                )

            logfire.info("Top voted comments retrieved", count=len(ranked))
            return ranked

    async def get_personality_system_stats(
        self, comment_id: str | CommentId | None = None
    ) -> list[PersonalitySystemStats]:
        """Count active votes per value for each system.

        Only systems with at least one vote are included; values are ordered
        by count descending, then by value.

        Args:
            comment_id: Only count votes on this comment

        Returns:
            Stats per personality system
        """
        cid = validate_comment_id(comment_id) if comment_id else None

        with logfire.span(
            "vote_stats_service.get_personality_system_stats",
            comment_id=str(cid) if cid else None,
        ):
            try:
                counts = await self.vote_repository.value_counts(cid)
            except SQLAlchemyError as e:
                raise VoteOperationError("count values", "votes", e) from e

            grouped: dict[PersonalitySystem, list[ValueCount]] = {}
            for row in counts:
                grouped.setdefault(row.personality_system, []).append(
                    ValueCount(value=row.personality_value, count=row.count)
                )

            return [
                PersonalitySystemStats(
                    personality_system=system,
                    values=sorted(values, key=lambda v: (-v.count, v.value)),
                    total_votes=sum(v.count for v in values),
                )
                for system, values in sorted(grouped.items(), key=lambda i: i[0].value)
            ]

    async def get_vote_history(
        self,
        voter_identifier: str,
        personality_system: str | PersonalitySystem | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> VoteHistoryPage:
        """Page through a voter's active votes, newest first.

        Args:
            voter_identifier: Anonymous voter token
            personality_system: Optional system filter
            page: 1-based page number
            limit: Page size

        Returns:
            Votes with comment summaries and pagination metadata
        """
        voter = validate_voter_identifier(voter_identifier)
        system = (
            validate_personality_system(personality_system)
            if personality_system
            else None
        )
        validate_page(page, limit, self.max_history_limit)

        with logfire.span(
            "vote_stats_service.get_vote_history",
            personality_system=system.value if system else None,
            page=page,
            limit=limit,
        ):
            try:
                votes = await self.vote_repository.find_by_voter(
                    voter, system, limit=limit, offset=(page - 1) * limit
                )
                total = await self.vote_repository.count_active(
                    personality_system=system, voter_identifier=voter
                )
            except SQLAlchemyError as e:
                raise VoteOperationError("get vote history", "voter", e) from e

            comments = await self.comment_service.get_comments_by_ids(
                list({vote.comment_id for vote in votes})
            )

            entries = []
            for vote in votes:
                comment = comments.get(vote.comment_id)
                entries.append(
                    VoteHistoryEntry(
                        vote=vote,
                        comment=summarize_comment(comment) if comment else None,
                    )
                )

            return VoteHistoryPage(
                entries=entries,
                pagination=Pagination.build(page, limit, total),
            )

    async def get_vote_count(
        self,
        comment_id: str | CommentId | None = None,
        personality_system: str | PersonalitySystem | None = None,
    ) -> int:
        """Count active votes, optionally by comment and/or system."""
        cid = validate_comment_id(comment_id) if comment_id else None
        system = (
            validate_personality_system(personality_system)
            if personality_system
            else None
        )

        try:
            return await self.vote_repository.count_active(
                comment_id=cid, personality_system=system
            )
        except SQLAlchemyError as e:
            raise VoteOperationError("count votes", "votes", e) from e
