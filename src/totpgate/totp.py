import calendar
import datetime
import logging
import math
import time
from typing import TYPE_CHECKING, Optional, Union

from . import utils
from .config import Algorithm, Settings
from .otp import OTP

if TYPE_CHECKING:
    from .stores import Clock

logger = logging.getLogger(__name__)

Timestamp = Union[int, float, datetime.datetime]


class TOTPEngine(OTP):
    """
    Handler for time-based OTP codes (RFC 6238).

    The engine keeps no per-account state, so a single instance can be shared
    across threads and requests.
    """

    def __init__(
        self,
        digits: int = 6,
        step_seconds: int = 30,
        algorithm: Union[Algorithm, str] = Algorithm.SHA1,
        window: int = 1,
        epoch_start: int = 0,
    ) -> None:
        """
        :param digits: number of integers in the OTP, 6, 7 or 8. Some apps expect this to be 6 digits, others support more.
        :param step_seconds: the time interval in seconds for OTP. This defaults to 30.
        :param algorithm: HMAC hash, one of SHA1, SHA256 or SHA512
        :param window: adjacent time steps accepted on each side of the current one
        :param epoch_start: Unix time at which counting of steps starts
        """
        try:
            self.algorithm = Algorithm(str(algorithm).replace("-", "").upper())
        except ValueError:
            raise ValueError("Invalid value for algorithm, must be SHA1, SHA256 or SHA512") from None
        # Authenticator apps only provision 6, 7 or 8 digit codes.
        if digits not in [6, 7, 8]:
            raise ValueError("Digits may only be 6, 7, or 8")
        if step_seconds <= 0:
            raise ValueError("step_seconds must be a positive integer")
        if window < 0:
            raise ValueError("window must not be negative")
        self.step_seconds = step_seconds
        self.window = window
        self.epoch_start = epoch_start
        super().__init__(digits=digits, digest=self.algorithm.digest)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TOTPEngine":
        return cls(
            digits=settings.digits,
            step_seconds=settings.step_seconds,
            algorithm=settings.algorithm,
            window=settings.window,
            epoch_start=settings.epoch_start,
        )

    def timecode(self, for_time: Timestamp) -> int:
        """
        Accepts either a timezone naive (local time) or aware datetime, or a
        Unix timestamp, and returns the number of whole steps since ``epoch_start``.
        """
        if isinstance(for_time, datetime.datetime):
            if for_time.tzinfo:
                seconds: float = calendar.timegm(for_time.utctimetuple())
            else:
                seconds = time.mktime(for_time.timetuple())
        else:
            seconds = for_time
        return int(math.floor((seconds - self.epoch_start) / self.step_seconds))

    def at(self, secret: str, for_time: Timestamp, counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param secret: base32 shared secret
        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(secret, self.timecode(for_time) + counter_offset)

    def now(self, secret: str, clock: Optional["Clock"] = None) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(secret, clock.now() if clock is not None else time.time())

    def verify(self, secret: str, submitted_code: str, at: Timestamp) -> bool:
        """
        Verifies the OTP passed in against the code for ``at``, accepting any
        step up to ``window`` steps before or after it.

        :param secret: base32 shared secret
        :param submitted_code: the OTP to check against
        :param at: time to check the code at
        :raises InvalidSecretError: if the secret is not valid base32
        :raises InvalidCodeFormatError: if the code is not ``digits`` digits
        :returns: True if verification succeeded, False otherwise
        """
        key = self.byte_secret(secret)
        code = utils.normalize_code(submitted_code, self.digits)
        counter = self.timecode(at)

        matched = False
        for i in range(-self.window, self.window + 1):
            if counter + i < 0:
                continue
            # No early exit, every step in the window costs one HMAC.
            if utils.strings_equal(code, self.generate_from_key(key, counter + i)):
                matched = True
        logger.debug("TOTP verification at step %d (window %d): %s", counter, self.window, matched)
        return matched

    def provisioning_uri(self, secret: str, name: str, issuer: str) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        :param secret: base32 shared secret
        :param name: name of the user account
        :param issuer: the name of the OTP issuer
        :returns: provisioning URI
        """
        return utils.build_uri(
            secret,
            name,
            issuer,
            digits=self.digits,
            period=self.step_seconds,
            algorithm=self.algorithm.value,
        )
