from .session import DEFAULT_TOPIC, Session

__all__ = ["DEFAULT_TOPIC", "Session"]
