import base64
import binascii
import hashlib
import hmac
from typing import Any

from .exceptions import InvalidSecretError


class OTP(object):
    """
    Base class for OTP engines. Holds the code parameters only; secrets are
    passed to every call so one engine can serve every account.
    """

    def __init__(self, digits: int = 6, digest: Any = hashlib.sha1) -> None:
        if digits < 1:
            raise ValueError("digits must be a positive integer")
        if digits > 10:
            raise ValueError("digits must be no greater than 10")
        if digest in [hashlib.md5, hashlib.shake_128]:
            raise ValueError("selected digest function must generate digest size greater than or equals to 18 bytes")
        self.digits = digits
        self.digest = digest

    def generate_otp(self, secret: str, input: int) -> str:
        """
        :param secret: base32 shared secret
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        # Implements RFC 4226
        return self.generate_from_key(self.byte_secret(secret), input)

    def generate_from_key(self, key: bytes, input: int) -> str:
        """
        Same as :meth:`generate_otp` for an already decoded key.
        """
        if input < 0:
            raise ValueError("input must be positive integer")
        hasher = hmac.new(key, self.int_to_bytestring(input), self.digest)
        if hasher.digest_size < 18:
            raise ValueError("digest size is lower than 18 bytes, which will trigger error on otp generation")
        hmac_hash = bytearray(hasher.digest())
        # Dynamic truncation: the low nibble of the last byte picks a 4 byte
        # slice, the top bit is masked off to leave a 31-bit unsigned integer.
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        # Adding 10**10 keeps the leading zeros once sliced.
        str_code = str(10_000_000_000 + (code % 10**self.digits))
        return str_code[-self.digits :]

    @staticmethod
    def byte_secret(secret: str) -> bytes:
        """
        Decodes a base32 secret, tolerating lower case and missing padding.

        :raises InvalidSecretError: when the secret is empty or not base32
        """
        if not isinstance(secret, str) or not secret:
            raise InvalidSecretError("secret must be a non-empty base32 string")
        missing_padding = len(secret) % 8
        if missing_padding != 0:
            secret += "=" * (8 - missing_padding)
        try:
            key = base64.b32decode(secret, casefold=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidSecretError("secret is not valid base32: {}".format(e)) from e
        if not key:
            raise InvalidSecretError("secret decodes to an empty key")
        return key

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret
        """
        result = bytearray()
        while i != 0:
            result.append(i & 0xFF)
            i >>= 8
        # Bytes were collected least significant first; HMAC wants big-endian.
        return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))
