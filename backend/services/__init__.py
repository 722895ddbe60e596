from .errors import (
    CapacityExceededError,
    DuplicateSessionError,
    LockAcquisitionError,
    ScrumPokerError,
    SessionNotFoundError,
)
from .store import SessionStore

__all__ = [
    "SessionStore",
    "ScrumPokerError",
    "CapacityExceededError",
    "DuplicateSessionError",
    "SessionNotFoundError",
    "LockAcquisitionError",
]
