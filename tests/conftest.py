from __future__ import annotations

import pytest

from totpgate import InMemorySecretStore, InMemorySessionStore, Settings, TwoFactorService

# RFC 6238 Appendix B seeds, base32 encoded
RFC_SECRET_SHA1 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
RFC_SECRET_SHA256 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZA"
RFC_SECRET_SHA512 = (
    "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
    "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZDGNA"
)


class FixedClock:
    def __init__(self, t: float) -> None:
        self.t = t

    def now(self) -> float:
        return self.t


@pytest.fixture
def clock():
    return FixedClock(1_700_000_000)


@pytest.fixture
def settings():
    return Settings(_env_file=None, issuer="ACME Co")


@pytest.fixture
def service(clock, settings):
    return TwoFactorService(
        InMemorySecretStore(),
        InMemorySessionStore(),
        clock=clock,
        settings=settings,
    )
