"""Voter identity for incoming requests."""

from fastapi import Request

from persona.domain.service import resolve_voter_identifier


def voter_identifier_from_request(request: Request, agent_prefix_length: int) -> str:
    """Derive the anonymous voter identifier for a request.

    Uses X-Forwarded-For when present (the service normally runs behind a
    proxy), otherwise the connection address.
    """
    return resolve_voter_identifier(
        forwarded_for=request.headers.get("x-forwarded-for"),
        remote_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        agent_prefix_length=agent_prefix_length,
    )
