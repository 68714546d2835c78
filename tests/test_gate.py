"""Tests for the session gate state machine."""

from __future__ import annotations

from totpgate import GateState, InMemorySessionStore, VerificationSessionGate


def test_fresh_session_is_unverified():
    gate = VerificationSessionGate(InMemorySessionStore())
    assert gate.is_satisfied("s1") is False
    assert gate.state("s1") == GateState.UNVERIFIED


def test_begin_mark_reset():
    gate = VerificationSessionGate(InMemorySessionStore())
    gate.begin("s1")
    assert gate.state("s1") == GateState.UNVERIFIED
    gate.mark_satisfied("s1")
    assert gate.is_satisfied("s1") is True
    assert gate.state("s1") == GateState.VERIFIED
    gate.reset("s1")
    assert gate.is_satisfied("s1") is False


def test_sessions_are_independent():
    gate = VerificationSessionGate(InMemorySessionStore())
    gate.mark_satisfied("s1")
    assert gate.is_satisfied("s2") is False


def test_reset_unknown_session_is_noop():
    gate = VerificationSessionGate(InMemorySessionStore())
    gate.reset("missing")
    assert gate.is_satisfied("missing") is False


def test_allows_bypasses_unenrolled_accounts():
    gate = VerificationSessionGate(InMemorySessionStore())
    assert gate.allows("s1", enrolled=False) is True
    assert gate.allows("s1", enrolled=True) is False
    gate.mark_satisfied("s1")
    assert gate.allows("s1", enrolled=True) is True


def test_truthy_flags_from_other_backends_count_as_verified():
    store = InMemorySessionStore()
    gate = VerificationSessionGate(store)
    store.set("s1", 1)
    assert gate.is_satisfied("s1") is True
    store.set("s2", 0)
    assert gate.is_satisfied("s2") is False
