"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from persona.domain.model.comment import Comment
from persona.domain.repository.comment import CommentRepository
from persona.domain.value import CommentId, PersonalitySystem, VoteStats


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Tally changes replace the stored comment without awaiting in between,
    so they are atomic on the event loop.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def snapshot(self) -> dict[CommentId, Comment]:
        return dict(self._comments)

    def restore(self, state: dict[CommentId, Comment]) -> None:
        self._comments = dict(state)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        """Find several comments."""
        return [self._comments[cid] for cid in comment_ids if cid in self._comments]

    async def exists(self, comment_id: CommentId) -> bool:
        """Check whether a comment exists."""
        return comment_id in self._comments

    async def save(self, comment: Comment) -> Comment:
        """Create a comment with an all-zero tally."""
        saved = comment.model_copy(update={"vote_stats": VoteStats(), "total_votes": 0})
        self._comments[comment.id] = saved
        return saved

    async def increment_vote(
        self,
        comment_id: CommentId,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> None:
        """Add one vote to a value counter and the total."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.model_copy(
                update={
                    "vote_stats": comment.vote_stats.incremented(
                        personality_system, personality_value
                    ),
                    "total_votes": comment.total_votes + 1,
                    "updated_at": datetime.now(),
                }
            )

    async def decrement_vote(
        self,
        comment_id: CommentId,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> bool:
        """Remove one vote from a value counter and the total (minimum 0)."""
        comment = self._comments.get(comment_id)
        if not comment or comment.vote_stats.count(personality_system, personality_value) < 1:
            return False

        self._comments[comment_id] = comment.model_copy(
            update={
                "vote_stats": comment.vote_stats.decremented(
                    personality_system, personality_value
                ),
                "total_votes": max(comment.total_votes - 1, 0),
                "updated_at": datetime.now(),
            }
        )
        return True

    async def replace_tally(self, comment_id: CommentId, stats: VoteStats) -> None:
        """Overwrite the tally for a comment."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.model_copy(
                update={
                    "vote_stats": stats,
                    "total_votes": stats.total(),
                    "updated_at": datetime.now(),
                }
            )

    def set_tally(self, comment_id: CommentId, stats: VoteStats, total: int) -> None:
        """Force a tally (tests use this to simulate drift)."""
        comment = self._comments[comment_id]
        self._comments[comment_id] = comment.model_copy(
            update={"vote_stats": stats, "total_votes": total}
        )
