"""Comment domain service.

Reads and comment creation raise VoteOperationError on storage failure.
Tally writes let SQLAlchemyError through so VoteService can tell whether
the failure split a vote write from its tally adjustment.
"""

import logfire
from datetime import datetime
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError

from persona.domain.error import VoteOperationError
from persona.domain.model.comment import Comment
from persona.domain.repository import CommentRepository
from persona.domain.value import CommentId, PersonalitySystem, ProfileId, VoteStats

from .base import Service


class CommentService(Service):
    """Domain service for comments and their vote tallies."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        profile_id: ProfileId,
        author: str,
        content: str,
        title: str | None = None,
    ) -> Comment:
        """Create a comment on a personality profile.

        The comment starts with an all-zero tally.

        Args:
            profile_id: Profile the comment is written on
            author: Author display name
            content: Comment text
            title: Optional title

        Returns:
            Created comment
        """
        with logfire.span(
            "comment_service.create_comment",
            profile_id=profile_id,
            author=author,
        ):
            now = datetime.now()
            comment = Comment(
                id=CommentId(uuid4()),
                profile_id=profile_id,
                author=author.strip(),
                title=title.strip() if title else None,
                content=content.strip(),
                is_visible=True,
                vote_stats=VoteStats(),
                total_votes=0,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.comment_repository.save(comment)
            except SQLAlchemyError as e:
                raise VoteOperationError(
                    "create comment", f"profile {profile_id}", e
                ) from e
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                profile_id=profile_id,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            try:
                comment = await self.comment_repository.find_by_id(comment_id)
            except SQLAlchemyError as e:
                raise VoteOperationError(
                    "get comment", f"comment {comment_id}", e
                ) from e
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_comments_by_ids(
        self, comment_ids: list[CommentId]
    ) -> dict[CommentId, Comment]:
        """Get several comments keyed by ID (batch query, avoids N+1).

        Args:
            comment_ids: Comment IDs

        Returns:
            Mapping of found comment IDs to comments
        """
        if not comment_ids:
            return {}
        try:
            comments = await self.comment_repository.find_by_ids(comment_ids)
        except SQLAlchemyError as e:
            raise VoteOperationError("get comments", "comments", e) from e
        return {comment.id: comment for comment in comments}

    async def comment_exists(self, comment_id: CommentId) -> bool:
        """Check whether a comment exists."""
        try:
            return await self.comment_repository.exists(comment_id)
        except SQLAlchemyError as e:
            raise VoteOperationError(
                "check comment", f"comment {comment_id}", e
            ) from e

    async def increment_vote(
        self,
        comment_id: CommentId,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> None:
        """Atomically count one more vote in the comment's tally.

        Uses a store-level increment to avoid lost updates between
        concurrent voters.

        Args:
            comment_id: Comment ID
            personality_system: System of the vote
            personality_value: Canonical value
        """
        with logfire.span(
            "comment_service.increment_vote",
            comment_id=str(comment_id),
            personality_system=personality_system.value,
            personality_value=personality_value,
        ):
            await self.comment_repository.increment_vote(
                comment_id, personality_system, personality_value
            )
            logfire.info(
                "Comment tally incremented",
                comment_id=str(comment_id),
                personality_system=personality_system.value,
                personality_value=personality_value,
            )

    async def decrement_vote(
        self,
        comment_id: CommentId,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> bool:
        """Atomically count one less vote in the comment's tally (minimum 0).

        A clamped decrement means the tally and the vote records disagree,
        so it is logged as a warning.

        Args:
            comment_id: Comment ID
            personality_system: System of the vote
            personality_value: Canonical value

        Returns:
            True if decremented, False if the counter was already zero
        """
        with logfire.span(
            "comment_service.decrement_vote",
            comment_id=str(comment_id),
            personality_system=personality_system.value,
            personality_value=personality_value,
        ):
            decremented = await self.comment_repository.decrement_vote(
                comment_id, personality_system, personality_value
            )
            if decremented:
                logfire.info(
                    "Comment tally decremented",
                    comment_id=str(comment_id),
                    personality_system=personality_system.value,
                    personality_value=personality_value,
                )
            else:
                logfire.warn(
                    "Comment tally decrement clamped at zero",
                    comment_id=str(comment_id),
                    personality_system=personality_system.value,
                    personality_value=personality_value,
                )
            return decremented

    async def replace_tally(self, comment_id: CommentId, stats: VoteStats) -> None:
        """Overwrite a comment's tally with recomputed counts.

        Args:
            comment_id: Comment ID
            stats: Recomputed tally
        """
        with logfire.span(
            "comment_service.replace_tally",
            comment_id=str(comment_id),
            total_votes=stats.total(),
        ):
            await self.comment_repository.replace_tally(comment_id, stats)
            logfire.info(
                "Comment tally replaced",
                comment_id=str(comment_id),
                total_votes=stats.total(),
            )
