"""Settings read from the environment (optionally seeded from backend/.env)."""

import os

DEFAULT_MAX_SESSIONS = 10


def get_max_sessions() -> int:
    """Session capacity from SCRUM_POKER_MAX_SESSIONS or the default of 10."""
    raw = os.environ.get("SCRUM_POKER_MAX_SESSIONS", "").strip()
    if not raw:
        return DEFAULT_MAX_SESSIONS
    value = int(raw)
    if value < 0:
        raise ValueError(f"SCRUM_POKER_MAX_SESSIONS must be >= 0, got {value}")
    return value


def get_allowed_origins() -> list[str]:
    """CORS origins from SCRUM_POKER_ALLOWED_ORIGINS (comma-separated), default "*"."""
    raw = os.environ.get("SCRUM_POKER_ALLOWED_ORIGINS", "").strip() or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
