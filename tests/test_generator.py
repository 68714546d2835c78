"""Tests for secret generation."""

from __future__ import annotations

import base64

import pytest

from totpgate import EntropySourceError, SecretGenerator, random_base32
from totpgate.otp import OTP

BASE32_ALPHABET = set("ABCDEFGHIJKLMNOPQRSTUVWXYZ234567")


def test_default_secret_is_160_bits():
    secret = SecretGenerator().generate()
    assert len(secret) == 32
    assert set(secret) <= BASE32_ALPHABET
    assert len(OTP.byte_secret(secret)) == 20


@pytest.mark.parametrize("num_bytes", [16, 20, 32, 64])
def test_round_trip(num_bytes):
    secret = SecretGenerator(num_bytes).generate()
    raw = OTP.byte_secret(secret)
    assert len(raw) == num_bytes
    assert base64.b32encode(raw).decode().rstrip("=") == secret


def test_secrets_differ():
    gen = SecretGenerator()
    assert len({gen.generate() for _ in range(20)}) == 20


def test_too_short_rejected():
    with pytest.raises(ValueError):
        SecretGenerator(10)


def test_entropy_failure(monkeypatch):
    def broken(n):
        raise OSError("no randomness")

    monkeypatch.setattr("totpgate.generator.secrets.token_bytes", broken)
    with pytest.raises(EntropySourceError) as excinfo:
        SecretGenerator().generate()
    assert isinstance(excinfo.value.__cause__, OSError)


def test_random_base32():
    assert len(random_base32()) == 32
    assert len(random_base32(40)) == 40
    with pytest.raises(ValueError):
        random_base32(16)


@pytest.mark.parametrize("length", [32, 40, 48, 56, 64, 104])
def test_random_base32_round_trips(length):
    secret = random_base32(length)
    raw = OTP.byte_secret(secret)
    assert len(raw) == length * 5 // 8
    assert base64.b32encode(raw).decode().rstrip("=") == secret


@pytest.mark.parametrize("length", [33, 34, 35, 38, 39])
def test_random_base32_rejects_partial_blocks(length):
    with pytest.raises(ValueError):
        random_base32(length)
