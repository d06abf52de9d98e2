"""UTC datetime helpers.

Every timestamp the service writes is timezone-aware UTC. Use utc_now()
instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)
