import base64
import logging
import secrets

from .exceptions import EntropySourceError

logger = logging.getLogger(__name__)

# 128 bits is the RFC 4226 floor; 160 bits is the recommended size.
MIN_SECRET_BYTES = 16
DEFAULT_SECRET_BYTES = 20


class SecretGenerator(object):
    """
    Produces new base32 shared secrets from the operating system's CSPRNG.
    """

    def __init__(self, num_bytes: int = DEFAULT_SECRET_BYTES) -> None:
        if num_bytes < MIN_SECRET_BYTES:
            raise ValueError("Secrets should be at least 128 bits")
        self.num_bytes = num_bytes

    def generate(self) -> str:
        """
        :raises EntropySourceError: if the random source is unavailable
        :returns: unpadded, upper case base32 secret
        """
        try:
            raw = secrets.token_bytes(self.num_bytes)
        except (OSError, NotImplementedError) as e:
            logger.error("Random source unavailable: %s", e)
            raise EntropySourceError("cannot read from the system random source") from e
        # The otpauth scheme does not use base32 padding.
        return base64.b32encode(raw).decode("ascii").rstrip("=")
