"""
Tests for the per-user session cap.
"""
from datetime import timedelta

import pytest

from authsession.services.session_limiter import SessionLimiter
from tests.conftest import make_record


@pytest.fixture
def limiter(store):
    return SessionLimiter(store, max_sessions_per_user=3)


class TestEnforceLimit:
    """Tests for SessionLimiter.enforce_limit."""

    def test_below_cap_evicts_nothing(self, limiter, store, clock):
        """Should leave sessions alone while a slot is free."""
        store.insert(make_record("s1", now=clock.now()))
        store.insert(make_record("s2", now=clock.now()))
        assert limiter.enforce_limit("user-1", clock.now()) == []
        assert len(store) == 2

    def test_at_cap_frees_one_slot(self, limiter, store, clock):
        """Should evict the least recently active session."""
        base = clock.now()
        for i, sid in enumerate(["s1", "s2", "s3"]):
            store.insert(make_record(sid, now=base, last_activity=base + timedelta(minutes=i)))
        assert limiter.enforce_limit("user-1", clock.now()) == ["s1"]
        assert sorted(store.session_ids_for_user("user-1")) == ["s2", "s3"]

    def test_orders_by_last_activity_not_creation(self, limiter, store, clock):
        """A session created first but used recently should survive."""
        base = clock.now()
        store.insert(make_record("first", now=base, last_activity=base + timedelta(hours=1)))
        store.insert(make_record("second", now=base, last_activity=base + timedelta(minutes=1)))
        store.insert(make_record("third", now=base, last_activity=base + timedelta(minutes=2)))
        assert limiter.enforce_limit("user-1", clock.now()) == ["second"]

    def test_ties_broken_by_session_id(self, limiter, store, clock):
        """Equal activity should evict in session id order."""
        for sid in ["c", "a", "b"]:
            store.insert(make_record(sid, now=clock.now()))
        assert limiter.enforce_limit("user-1", clock.now()) == ["a"]

    def test_over_cap_evicts_down_to_one_free_slot(self, store, clock):
        """Should evict several sessions when the cap was lowered."""
        base = clock.now()
        for i in range(5):
            store.insert(make_record(f"s{i}", now=base, last_activity=base + timedelta(minutes=i)))
        limiter = SessionLimiter(store, max_sessions_per_user=2)
        assert limiter.enforce_limit("user-1", clock.now()) == ["s0", "s1", "s2", "s3"]
        assert store.session_ids_for_user("user-1") == ["s4"]

    def test_expired_sessions_do_not_count(self, limiter, store, clock):
        """Stale sessions neither use a slot nor get evicted."""
        store.insert(make_record("stale", now=clock.now(), lifetime=timedelta(minutes=1)))
        store.insert(make_record("s1", now=clock.now()))
        store.insert(make_record("s2", now=clock.now()))
        assert limiter.enforce_limit("user-1", clock.advance(minutes=5)) == []
        assert "stale" in store

    def test_other_users_untouched(self, limiter, store, clock):
        """Should only evict the named user's sessions."""
        for sid in ["a1", "a2", "a3"]:
            store.insert(make_record(sid, user_id="alice", now=clock.now()))
        store.insert(make_record("b1", user_id="bob", now=clock.now()))
        limiter.enforce_limit("alice", clock.now())
        assert "b1" in store

    def test_rejects_non_positive_cap(self, store):
        """Should refuse a cap below one."""
        with pytest.raises(ValueError):
            SessionLimiter(store, max_sessions_per_user=0)
