from re import split
from typing import Any, Dict
from urllib.parse import parse_qsl, unquote, urlparse

from .config import Algorithm as Algorithm
from .config import Settings as Settings
from .exceptions import EntropySourceError as EntropySourceError
from .exceptions import InvalidCodeFormatError as InvalidCodeFormatError
from .exceptions import InvalidLabelError as InvalidLabelError
from .exceptions import InvalidSecretError as InvalidSecretError
from .exceptions import TwoFactorError as TwoFactorError
from .gate import GateState as GateState
from .gate import VerificationSessionGate as VerificationSessionGate
from .generator import SecretGenerator as SecretGenerator
from .otp import OTP as OTP
from .service import Enrollment as Enrollment
from .service import TwoFactorService as TwoFactorService
from .service import VerificationResult as VerificationResult
from .stores import InMemorySecretStore as InMemorySecretStore
from .stores import InMemorySessionStore as InMemorySessionStore
from .stores import SystemClock as SystemClock
from .totp import TOTPEngine as TOTPEngine
from .utils import build_uri as build_uri


def random_base32(length: int = 32) -> str:
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 8.
    # Only whole multiples of 8 characters (5 bytes) decode to the same bytes they came from.
    if length < 32:
        raise ValueError("Secrets should be at least 160 bits")
    if length % 8 != 0:
        raise ValueError("Secret length must be a multiple of 8 characters")
    return SecretGenerator(length * 5 // 8).generate()


def parse_uri(uri: str) -> Dict[str, Any]:
    """
    Parses a TOTP provisioning URI back into its parts.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the totp URI to parse
    :returns: dict with secret, name, issuer, algorithm, digits and period
    """
    otp_data: Dict[str, Any] = {
        "secret": None,
        "name": None,
        "issuer": None,
        "algorithm": Algorithm.SHA1,
        "digits": 6,
        "period": 30,
    }

    parsed_uri = urlparse(uri)

    if parsed_uri.scheme != "otpauth":
        raise ValueError("Not an otpauth URI")
    if parsed_uri.netloc != "totp":
        raise ValueError("Not a supported OTP type")

    # Split before unquoting so an escaped colon stays inside its part; a
    # literal colon is the separator, otherwise fall back to an encoded one.
    label = parsed_uri.path[1:]
    if ":" in label:
        accountinfo_parts = label.split(":", 1)
    else:
        accountinfo_parts = split("%3A|%3a", label, maxsplit=1)
    if len(accountinfo_parts) == 1:
        otp_data["name"] = unquote(accountinfo_parts[0])
    else:
        otp_data["issuer"] = unquote(accountinfo_parts[0])
        otp_data["name"] = unquote(accountinfo_parts[1])

    for key, value in parse_qsl(parsed_uri.query):
        if key == "secret":
            otp_data["secret"] = value
        elif key == "issuer":
            if otp_data["issuer"] is not None and otp_data["issuer"] != value:
                raise ValueError("If issuer is specified in both label and parameters, it should be equal.")
            otp_data["issuer"] = value
        elif key == "algorithm":
            try:
                otp_data["algorithm"] = Algorithm(value.upper())
            except ValueError:
                raise ValueError("Invalid value for algorithm, must be SHA1, SHA256 or SHA512") from None
        elif key == "digits":
            otp_data["digits"] = int(value)
        elif key == "period":
            otp_data["period"] = int(value)

    if otp_data["digits"] not in [6, 7, 8]:
        raise ValueError("Digits may only be 6, 7, or 8")
    if not otp_data["secret"]:
        raise ValueError("No secret found in URI")

    return otp_data
