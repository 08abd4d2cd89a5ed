#!/usr/bin/env python3
"""Recompute comment vote tallies from active vote records.

Usage:
    python scripts/reconcile_tallies.py <comment_id> [<comment_id> ...]

Each comment is repaired in its own transaction. Running it again on a
consistent comment changes nothing.
"""

import asyncio
import sys

import logfire

from persona.config import Settings
from persona.domain.error import DomainError
from persona.domain.service import VoteService
from persona.util.di.container import create_container
from persona.util.observability import configure_logfire


async def reconcile(comment_ids: list[str]) -> int:
    """Reconcile each comment, returning the number that failed."""
    container = create_container()
    failed = 0
    try:
        for comment_id in comment_ids:
            try:
                async with container() as request_container:
                    vote_service = await request_container.get(VoteService)
                    repaired = await vote_service.reconcile_tally(comment_id)
            except DomainError as e:
                failed += 1
                logfire.error(
                    "Tally reconciliation failed",
                    comment_id=comment_id,
                    error=str(e),
                )
                continue

            logfire.info(
                "Tally reconciled",
                comment_id=comment_id,
                repaired=repaired,
            )
    finally:
        await container.close()

    return failed


def main() -> int:
    comment_ids = sys.argv[1:]
    if not comment_ids:
        print(__doc__)
        return 2

    configure_logfire(Settings())

    with logfire.span("reconcile_tallies", count=len(comment_ids)):
        failed = asyncio.run(reconcile(comment_ids))

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
