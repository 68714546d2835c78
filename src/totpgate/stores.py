"""Capabilities the core needs from the surrounding application.

The account database, the session store and the clock belong to the host
application. The in-memory implementations here suit tests and
single-process deployments.
"""

import threading
import time
from typing import Dict, Optional, Protocol


class SecretStore(Protocol):
    """Persists one base32 secret per account."""

    def get(self, account_id: str) -> Optional[str]: ...

    def set(self, account_id: str, secret: str) -> None: ...

    def delete(self, account_id: str) -> None: ...


class SessionStore(Protocol):
    """Holds the second-factor flag per authentication session."""

    def get(self, session_id: str) -> Optional[bool]: ...

    def set(self, session_id: str, value: bool) -> None: ...

    def delete(self, session_id: str) -> None: ...


class Clock(Protocol):
    def now(self) -> float: ...


class SystemClock:
    def now(self) -> float:
        return time.time()


class InMemorySecretStore:
    def __init__(self) -> None:
        self._secrets: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, account_id: str) -> Optional[str]:
        with self._lock:
            return self._secrets.get(account_id)

    def set(self, account_id: str, secret: str) -> None:
        with self._lock:
            self._secrets[account_id] = secret

    def delete(self, account_id: str) -> None:
        with self._lock:
            self._secrets.pop(account_id, None)


class InMemorySessionStore:
    def __init__(self) -> None:
        self._flags: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Optional[bool]:
        with self._lock:
            return self._flags.get(session_id)

    def set(self, session_id: str, value: bool) -> None:
        with self._lock:
            self._flags[session_id] = value

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._flags.pop(session_id, None)
