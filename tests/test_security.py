from datetime import datetime, timedelta, timezone

from asistencia.security.audit import AuditLog
from asistencia.security.password import hash_pin, verify_pin
from asistencia.security.rate_limit import InMemoryRateLimiter
from asistencia.security.sessions import InMemorySessionStore

NOW = datetime(2024, 1, 15, 13, 0, tzinfo=timezone.utc)


def test_pin_hash_roundtrip():
    pin_hash = hash_pin("1234")
    assert pin_hash != "1234"
    assert verify_pin("1234", pin_hash)
    assert not verify_pin("4321", pin_hash)


def test_verify_rejects_garbage_hashes():
    assert not verify_pin("1234", "1234")
    assert not verify_pin("1234", "")


def test_session_expires_after_ttl():
    store = InMemorySessionStore(ttl_hours=8)
    session = store.create("w1", "worker", "Juan", now=NOW)

    assert session.expires_at - session.login_time == timedelta(hours=8)
    assert store.get(session.session_id, now=NOW + timedelta(hours=7)) is session
    assert store.get(session.session_id, now=NOW + timedelta(hours=8)) is None
    # Expired sessions are gone for good
    assert store.get(session.session_id, now=NOW) is None


def test_delete_for_user():
    store = InMemorySessionStore()
    a = store.create("w1", "worker", "Juan", now=NOW)
    b = store.create("w1", "worker", "Juan", now=NOW)
    c = store.create("w2", "worker", "Ana", now=NOW)

    assert store.delete_for_user("w1") == 2
    assert store.get(a.session_id, now=NOW) is None
    assert store.get(b.session_id, now=NOW) is None
    assert store.get(c.session_id, now=NOW) is c


def test_lockout_after_max_attempts():
    limiter = InMemoryRateLimiter(max_attempts=5, lockout_minutes=15)
    for remaining in (4, 3, 2, 1):
        assert limiter.record_failure("w1", now=NOW) == remaining
    assert not limiter.is_locked("w1", now=NOW)

    assert limiter.record_failure("w1", now=NOW) == 0
    assert limiter.is_locked("w1", now=NOW + timedelta(minutes=14))
    assert limiter.retry_after("w1", now=NOW + timedelta(minutes=10)) == 300
    assert not limiter.is_locked("w1", now=NOW + timedelta(minutes=15))


def test_success_clears_counter():
    limiter = InMemoryRateLimiter(max_attempts=2)
    limiter.record_failure("admin", now=NOW)
    limiter.reset("admin")
    assert limiter.record_failure("admin", now=NOW) == 1


def test_keys_are_independent():
    limiter = InMemoryRateLimiter(max_attempts=1)
    limiter.record_failure("w1", now=NOW)
    assert limiter.is_locked("w1", now=NOW)
    assert not limiter.is_locked("w2", now=NOW)


def test_audit_log_is_bounded_and_newest_first():
    audit = AuditLog(max_entries=3)
    for i in range(5):
        audit.log("ACTION", f"event {i}")

    assert len(audit) == 3
    assert [e.details for e in audit.entries()] == ["event 4", "event 3", "event 2"]
    assert len(audit.entries(limit=1)) == 1


def test_old_failures_stop_counting():
    limiter = InMemoryRateLimiter(max_attempts=5, lockout_minutes=15)
    for _ in range(4):
        limiter.record_failure("w1", now=NOW)

    # A typo a week later starts a fresh count
    assert limiter.record_failure("w1", now=NOW + timedelta(days=7)) == 4
    assert not limiter.is_locked("w1", now=NOW + timedelta(days=7))


def test_failures_inside_the_window_accumulate():
    limiter = InMemoryRateLimiter(max_attempts=3, lockout_minutes=15)
    limiter.record_failure("w1", now=NOW)
    limiter.record_failure("w1", now=NOW + timedelta(minutes=10))
    assert limiter.record_failure("w1", now=NOW + timedelta(minutes=20)) == 0


def test_create_prunes_expired_sessions():
    store = InMemorySessionStore(ttl_hours=8)
    store.create("w1", "worker", "Juan", now=NOW)
    store.create("w2", "worker", "Ana", now=NOW + timedelta(hours=1))

    store.create("w3", "worker", "Luis", now=NOW + timedelta(hours=8, minutes=30))
    assert len(store) == 2
