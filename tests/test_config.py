"""Tests for configuration loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from totpgate.config import Algorithm, Settings


def test_settings_defaults(monkeypatch):
    for name in ["ISSUER", "DIGITS", "STEP_SECONDS", "ALGORITHM", "WINDOW", "SECRET_BYTES", "EPOCH_START"]:
        monkeypatch.delenv(f"TOTPGATE_{name}", raising=False)
    s = Settings(_env_file=None)
    assert s.issuer == "totpgate"
    assert s.digits == 6
    assert s.step_seconds == 30
    assert s.algorithm == Algorithm.SHA1
    assert s.window == 1
    assert s.secret_bytes == 20
    assert s.epoch_start == 0


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("TOTPGATE_ISSUER", "ACME")
    monkeypatch.setenv("TOTPGATE_DIGITS", "8")
    monkeypatch.setenv("TOTPGATE_ALGORITHM", "sha-256")
    monkeypatch.setenv("TOTPGATE_WINDOW", "2")
    s = Settings(_env_file=None)
    assert s.issuer == "ACME"
    assert s.digits == 8
    assert s.algorithm == Algorithm.SHA256
    assert s.window == 2


@pytest.mark.parametrize(
    "kwargs",
    [{"digits": 5}, {"digits": 9}, {"step_seconds": 0}, {"window": -1}, {"secret_bytes": 8}, {"algorithm": "MD5"}],
)
def test_settings_validation(kwargs):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **kwargs)


def test_algorithm_enum():
    assert Algorithm.SHA1 == "SHA1"
    assert len(Algorithm) == 3
    assert Algorithm.SHA256.digest().name == "sha256"
