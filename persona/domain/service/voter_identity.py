"""Voter identity resolution.

There are no user accounts. A voter is identified by an anonymous token
derived from connection metadata: the client address and the start of the
client's user-agent string. Two clients with the same address and agent
are the same voter.

This is deliberately weak: the token can be spoofed by changing the
forwarded-for header or the user agent, and clients behind the same NAT
with the same browser share one identity. It only serves to enforce
"one vote per system per comment" for casual use.
"""

import re

ANONYMOUS_ADDRESS = "anonymous"
DEFAULT_AGENT_PREFIX_LENGTH = 50

_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def resolve_voter_identifier(
    forwarded_for: str | None,
    remote_address: str | None,
    user_agent: str | None,
    agent_prefix_length: int = DEFAULT_AGENT_PREFIX_LENGTH,
) -> str:
    """Derive a stable voter identifier from connection metadata.

    Args:
        forwarded_for: Value of the X-Forwarded-For header, if any
        remote_address: Address of the direct peer, if known
        user_agent: Value of the User-Agent header, if any
        agent_prefix_length: How much of the user agent to keep

    Returns:
        Identifier made only of letters, digits, underscores and hyphens
    """
    address = None
    if forwarded_for:
        # First entry is the originating client
        address = forwarded_for.split(",")[0].strip()
    if not address:
        address = remote_address or ANONYMOUS_ADDRESS

    agent = (user_agent or "")[:agent_prefix_length]

    return _DISALLOWED_CHARS.sub("", f"{address}_{agent}")
