"""App — сессия интегрирования и command line."""

from .session import IntegrationSession, SessionOutcome

__all__ = [
    "IntegrationSession",
    "SessionOutcome",
]
