"""Tests for the per-run classification store."""

from es_compat.models import ClassificationState, Diagnostic
from es_compat.store import ClassificationStore

C = ClassificationState


def test_record_and_get():
    store = ClassificationStore()
    assert store.get("a") is None
    assert store.record("a", C.COMPATIBLE) is C.COMPATIBLE
    assert store.get("a") is C.COMPATIBLE
    assert "a" in store
    assert len(store) == 1


def test_state_never_overwritten():
    store = ClassificationStore()
    store.record("a", C.UNREADABLE)
    assert store.record("a", C.INCOMPATIBLE, Diagnostic(message="boom")) is C.UNREADABLE
    assert store.get("a") is C.UNREADABLE
    assert store.diagnostic_for("a") is None


def test_diagnostic_kept_only_for_incompatible():
    store = ClassificationStore()
    store.record("bad", C.INCOMPATIBLE, Diagnostic(message="Unexpected token", line=3))
    store.record("ok", C.COMPATIBLE, Diagnostic(message="ignored"))
    assert store.diagnostic_for("bad").line == 3
    assert store.diagnostic_for("ok") is None


def test_names_in_keeps_insertion_order():
    store = ClassificationStore()
    for name in ("zeta", "alpha", "mid"):
        store.record(name, C.COMPATIBLE)
    store.record("skip", C.NON_SOURCE)
    assert store.names_in(C.COMPATIBLE) == ["zeta", "alpha", "mid"]
    assert store.names_in(C.NON_SOURCE) == ["skip"]
    assert store.names_in(C.INCOMPATIBLE) == []


def test_stores_are_independent():
    first = ClassificationStore()
    first.record("a", C.COMPATIBLE)
    assert "a" not in ClassificationStore()


def test_state_dispatch_flags():
    assert C.UNREADABLE.needs_descent
    assert not any(s.needs_descent for s in (C.COMPATIBLE, C.INCOMPATIBLE, C.NON_SOURCE))
    assert not C.INCOMPATIBLE.acceptable
    assert all(s.acceptable for s in (C.COMPATIBLE, C.NON_SOURCE, C.UNREADABLE))
