"""Per-session second-factor state machine.

``UNVERIFIED`` after primary login for enrolled accounts, ``VERIFIED`` once a
code has been accepted, gone when the session ends. A failed attempt leaves
the state untouched.
"""

import logging
from enum import StrEnum

from .stores import SessionStore

logger = logging.getLogger(__name__)


class GateState(StrEnum):
    UNVERIFIED = "unverified"
    VERIFIED = "verified"


class VerificationSessionGate:
    def __init__(self, store: SessionStore) -> None:
        self.store = store

    def begin(self, session_id: str) -> None:
        """Start a session in the unverified state."""
        self.store.set(session_id, False)
        logger.info("Second factor pending for session")

    def state(self, session_id: str) -> GateState:
        return GateState.VERIFIED if self.is_satisfied(session_id) else GateState.UNVERIFIED

    def is_satisfied(self, session_id: str) -> bool:
        return bool(self.store.get(session_id))

    def mark_satisfied(self, session_id: str) -> None:
        self.store.set(session_id, True)
        logger.info("Second factor satisfied for session")

    def reset(self, session_id: str) -> None:
        """Discard the flag on logout or session expiry."""
        self.store.delete(session_id)

    def allows(self, session_id: str, enrolled: bool) -> bool:
        """Route decision: accounts without a secret bypass the gate."""
        if not enrolled:
            return True
        return self.is_satisfied(session_id)
