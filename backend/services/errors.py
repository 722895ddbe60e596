"""Errors raised by the session store."""


class ScrumPokerError(Exception):
    """Base class for session store failures."""


class CapacityExceededError(ScrumPokerError):
    def __init__(self, max_sessions: int) -> None:
        super().__init__(f"too many sessions (max {max_sessions})")
        self.max_sessions = max_sessions


class DuplicateSessionError(ScrumPokerError):
    def __init__(self, session_name: str) -> None:
        super().__init__(f"session with that name already exists: {session_name!r}")
        self.session_name = session_name


class SessionNotFoundError(ScrumPokerError):
    def __init__(self, session_name: str) -> None:
        super().__init__(f"session does not exist: {session_name!r}")
        self.session_name = session_name


class LockAcquisitionError(ScrumPokerError):
    """The registry lock was poisoned by a failure inside a write section. Fatal."""
