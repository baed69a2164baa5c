from typing import Optional


def normalize(raw: Optional[str]) -> str:
    """Lowercase and trim a free-text topic into a catalog lookup key."""
    return (raw or "").strip().lower()
