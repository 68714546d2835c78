import unicodedata
from hmac import compare_digest
from typing import Dict, Optional, Union
from urllib.parse import quote, urlencode

from .exceptions import InvalidCodeFormatError, InvalidLabelError


def build_uri(
    secret: str,
    name: Optional[str],
    issuer: Optional[str],
    digits: int = 6,
    period: int = 30,
    algorithm: str = "SHA1",
) -> str:
    """
    Returns the provisioning URI for a TOTP secret.

    This can then be encoded in a QR Code and used to provision the Google
    Authenticator app. Every parameter is always written out, e.g.::

        otpauth://totp/ACME%20Co:alice%40example.com?secret=JBSWY3DPEHPK3PXP
            &issuer=ACME%20Co&algorithm=SHA1&digits=6&period=30

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the base32 totp secret used to generate the URI
    :param name: name of the account, usually an email address
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param digits: the length of the OTP generated code.
    :param period: the number of seconds the OTP generator is set to
        expire every code.
    :param algorithm: the algorithm used in the OTP generation.
    :raises InvalidLabelError: if name or issuer is missing or blank
    :returns: provisioning uri
    """
    check_identity(name, issuer)

    # The colon separates issuer and account in the label, so it is escaped
    # inside either part along with everything else outside the unreserved set.
    label = quote(issuer, safe="") + ":" + quote(name, safe="")

    url_args: Dict[str, Union[int, str]] = {
        "secret": secret,
        "issuer": issuer,
        "algorithm": algorithm.upper(),
        "digits": digits,
        "period": period,
    }
    return "otpauth://totp/{0}?{1}".format(label, urlencode(url_args, quote_via=quote))


def check_identity(name: Optional[str], issuer: Optional[str]) -> None:
    """
    :raises InvalidLabelError: if name or issuer is missing or blank
    """
    if name is None or not str(name).strip():
        raise InvalidLabelError("account label must not be empty")
    if issuer is None or not str(issuer).strip():
        raise InvalidLabelError("issuer must not be empty")


def normalize_code(code: str, digits: int) -> str:
    """
    Canonical form of a user-typed code: NFKC folded (so full-width digits
    count) with surrounding whitespace removed.

    :raises InvalidCodeFormatError: unless exactly ``digits`` ASCII digits remain
    """
    if not isinstance(code, str):
        raise InvalidCodeFormatError("code must be a string")
    normalized = unicodedata.normalize("NFKC", code).strip()
    if len(normalized) != digits or not normalized.isascii() or not normalized.isdigit():
        raise InvalidCodeFormatError("code must be exactly {} digits".format(digits))
    return normalized


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
