from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current instant in UTC. Injected into services so tests can pin time."""
    return datetime.now(timezone.utc)
