"""Boundary between the host application's auth flow and the TOTP core.

Controllers call ``enroll``/``activate`` on the settings page, ``challenge``
on the second login step, and middleware calls ``requires_second_factor`` on
every protected request. Callers should rate-limit ``challenge``; nothing
here counts attempts.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .exceptions import InvalidCodeFormatError
from .gate import VerificationSessionGate
from .generator import SecretGenerator
from .stores import Clock, SecretStore, SessionStore, SystemClock
from .totp import TOTPEngine
from .utils import check_identity

logger = logging.getLogger(__name__)

OK = "ok"
MISMATCH = "mismatch"
INVALID_FORMAT = "invalid_format"
NOT_ENROLLED = "not_enrolled"


@dataclass(frozen=True)
class Enrollment:
    account_id: str
    secret: str
    uri: str


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    reason: str


class TwoFactorService:
    def __init__(
        self,
        secret_store: SecretStore,
        session_store: SessionStore,
        clock: Optional[Clock] = None,
        settings: Optional[Settings] = None,
        engine: Optional[TOTPEngine] = None,
        generator: Optional[SecretGenerator] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.secret_store = secret_store
        self.clock = clock or SystemClock()
        self.engine = engine or TOTPEngine.from_settings(self.settings)
        self.generator = generator or SecretGenerator(self.settings.secret_bytes)
        self.gate = VerificationSessionGate(session_store)

    # --- enrollment ---

    def enroll(self, account_id: str, label: Optional[str] = None) -> Enrollment:
        """Issue a fresh secret and its provisioning URI.

        The secret is not stored; pass it back to ``activate`` with the first
        code the user's app shows. ``label`` defaults to the account id.
        """
        label = label if label is not None else account_id
        check_identity(label, self.settings.issuer)
        secret = self.generator.generate()
        uri = self.engine.provisioning_uri(secret, label, self.settings.issuer)
        logger.info("Issued TOTP enrollment for account %s", account_id)
        return Enrollment(account_id=account_id, secret=secret, uri=uri)

    def activate(self, account_id: str, secret: str, code: str) -> VerificationResult:
        """Persist a pending secret once the user proves their app has it."""
        result = self._verify(secret, code)
        if result.ok:
            self.secret_store.set(account_id, secret)
            logger.info("Enabled TOTP for account %s", account_id)
        else:
            logger.warning("TOTP activation failed for account %s: %s", account_id, result.reason)
        return result

    def disable(self, account_id: str) -> None:
        self.secret_store.delete(account_id)
        logger.info("Disabled TOTP for account %s", account_id)

    def is_enrolled(self, account_id: str) -> bool:
        return bool(self.secret_store.get(account_id))

    # --- login ---

    def challenge(
        self, account_id: str, submitted_code: str, session_id: Optional[str] = None
    ) -> VerificationResult:
        """Check a code against the account's stored secret.

        On success the session, if given, is marked verified. A corrupt stored
        secret raises ``InvalidSecretError``.
        """
        secret = self.secret_store.get(account_id)
        if not secret:
            return VerificationResult(ok=False, reason=NOT_ENROLLED)
        result = self._verify(secret, submitted_code)
        if result.ok:
            if session_id is not None:
                self.gate.mark_satisfied(session_id)
        else:
            logger.warning("TOTP challenge failed for account %s: %s", account_id, result.reason)
        return result

    def _verify(self, secret: str, code: str) -> VerificationResult:
        try:
            ok = self.engine.verify(secret, code, self.clock.now())
        except InvalidCodeFormatError as e:
            logger.debug("Rejected code: %s", e)
            return VerificationResult(ok=False, reason=INVALID_FORMAT)
        return VerificationResult(ok=ok, reason=OK if ok else MISMATCH)

    # --- sessions ---

    def start_session(self, session_id: str, account_id: str) -> bool:
        """Call after primary login. Returns whether a code must be asked for."""
        if not self.is_enrolled(account_id):
            return False
        self.gate.begin(session_id)
        return True

    def is_session_verified(self, session_id: str) -> bool:
        return self.gate.is_satisfied(session_id)

    def mark_session_verified(self, session_id: str) -> None:
        self.gate.mark_satisfied(session_id)

    def end_session(self, session_id: str) -> None:
        self.gate.reset(session_id)

    def requires_second_factor(self, session_id: str, account_id: str) -> bool:
        return not self.gate.allows(session_id, self.is_enrolled(account_id))
