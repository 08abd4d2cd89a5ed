"""PostgreSQL implementation of Comment repository."""

from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from persona.domain.model import Comment
from persona.domain.repository import CommentRepository
from persona.domain.value import CommentId, PersonalitySystem, VoteStats
from persona.persistence.mappers import comment_to_dict, row_to_comment
from persona.persistence.tables import comment_vote_tallies_table, comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    The tally is split between comments.total_votes and one counter row per
    (comment, system, value) in comment_vote_tallies. Both are only changed
    with relative UPDATE/upsert statements.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _tally_rows(
        self, comment_ids: Sequence[CommentId]
    ) -> Dict[CommentId, List[Dict[str, Any]]]:
        stmt = select(comment_vote_tallies_table).where(
            comment_vote_tallies_table.c.comment_id.in_(comment_ids)
        )
        result = await self.session.execute(stmt)
        rows: Dict[CommentId, List[Dict[str, Any]]] = defaultdict(list)
        for row in result.fetchall():
            data = row._asdict()
            rows[data["comment_id"]].append(data)
        return rows

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, including its tally."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            return None
        tallies = await self._tally_rows([comment_id])
        return row_to_comment(row._asdict(), tallies.get(comment_id, []))

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments (batch query)."""
        if not comment_ids:
            return []

        stmt = select(comments_table).where(comments_table.c.id.in_(comment_ids))
        result = await self.session.execute(stmt)
        rows = [row._asdict() for row in result.fetchall()]
        tallies = await self._tally_rows([row["id"] for row in rows])
        return [row_to_comment(row, tallies.get(row["id"], [])) for row in rows]

    async def exists(self, comment_id: CommentId) -> bool:
        """Check whether a comment exists."""
        stmt = select(func.count()).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def save(self, comment: Comment) -> Comment:
        """Create a comment with an all-zero tally."""
        comment_dict = comment_to_dict(comment)
        comment_dict["total_votes"] = 0
        stmt = insert(comments_table).values(**comment_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return comment.model_copy(update={"vote_stats": VoteStats(), "total_votes": 0})

    async def increment_vote(
        self,
        comment_id: CommentId,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> None:
        """Atomically add one vote to a value counter and the total."""
        tally = comment_vote_tallies_table
        upsert = (
            pg_insert(tally)
            .values(
                comment_id=comment_id,
                personality_system=personality_system.value,
                personality_value=personality_value,
                count=1,
            )
            .on_conflict_do_update(
                index_elements=[
                    tally.c.comment_id,
                    tally.c.personality_system,
                    tally.c.personality_value,
                ],
                set_={"count": tally.c.count + 1},
            )
        )
        await self.session.execute(upsert)

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                total_votes=comments_table.c.total_votes + 1,
                updated_at=datetime.now(),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_vote(
        self,
        comment_id: CommentId,
        personality_system: PersonalitySystem,
        personality_value: str,
    ) -> bool:
        """Atomically remove one vote from a value counter and the total.

        Counters never go below zero. The total is only touched when the
        value counter was decremented.
        """
        tally = comment_vote_tallies_table
        stmt = (
            update(tally)
            .where(tally.c.comment_id == comment_id)
            .where(tally.c.personality_system == personality_system.value)
            .where(tally.c.personality_value == personality_value)
            .where(tally.c.count > 0)  # Don't go below 0
            .values(count=tally.c.count - 1)
            .returning(tally.c.count)
        )
        result = await self.session.execute(stmt)
        if result.fetchone() is None:
            return False

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                total_votes=func.greatest(comments_table.c.total_votes - 1, 0),
                updated_at=datetime.now(),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return True

    async def replace_tally(self, comment_id: CommentId, stats: VoteStats) -> None:
        """Overwrite all counters and the total for a comment."""
        await self.session.execute(
            delete(comment_vote_tallies_table).where(
                comment_vote_tallies_table.c.comment_id == comment_id
            )
        )

        rows = [
            {
                "comment_id": comment_id,
                "personality_system": system.value,
                "personality_value": value,
                "count": count,
            }
            for system in PersonalitySystem
            for value, count in stats.for_system(system).items()
            if count > 0
        ]
        if rows:
            await self.session.execute(insert(comment_vote_tallies_table), rows)

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(total_votes=stats.total(), updated_at=datetime.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()
