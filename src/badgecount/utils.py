import secrets
from datetime import UTC, datetime
from uuid import UUID


def now() -> datetime:
    return datetime.now(UTC)


def new_badge_id() -> UUID:
    """Generate an unguessable badge id with all 128 bits drawn from the OS CSPRNG."""
    return UUID(bytes=secrets.token_bytes(16))
