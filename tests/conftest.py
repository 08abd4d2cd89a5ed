"""Test configuration and fixtures."""

from datetime import datetime
from uuid import uuid4

from persona.domain.model.comment import Comment
from persona.domain.value import CommentId, ProfileId, VoteStats


def make_comment(
    profile_id: int = 1,
    author: str = "Test Author",
    content: str = "Definitely an INTJ, look at that planning.",
    comment_id: CommentId | None = None,
) -> Comment:
    """Helper to build a comment with an empty tally for tests.

    Args:
        profile_id: Profile the comment is written on
        author: Author display name
        content: Comment text
        comment_id: Fixed ID, random if omitted

    Returns:
        Comment ready to be saved to a repository
    """
    now = datetime.now()
    return Comment(
        id=comment_id or CommentId(uuid4()),
        profile_id=ProfileId(profile_id),
        author=author,
        title=None,
        content=content,
        is_visible=True,
        vote_stats=VoteStats(),
        total_votes=0,
        created_at=now,
        updated_at=now,
    )
