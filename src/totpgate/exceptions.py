"""Errors raised by totpgate.

A wrong code is never an error: verification mismatches come back as ``False``
(or a negative ``VerificationResult``) so callers can count attempts.
"""


class TwoFactorError(Exception):
    """Base class for every totpgate error."""


class EntropySourceError(TwoFactorError):
    """The operating system's random source could not produce bytes."""


class InvalidSecretError(TwoFactorError, ValueError):
    """A stored or supplied secret is not valid base32."""


class InvalidCodeFormatError(TwoFactorError, ValueError):
    """A submitted code has the wrong length or contains non-digits."""


class InvalidLabelError(TwoFactorError, ValueError):
    """The account label or issuer is missing and no URI can be built."""
