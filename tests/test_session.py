from datetime import datetime, timedelta, timezone

from prayerboard.core.session import SessionStore


class Clock:
    def __init__(self):
        self.now = datetime(2026, 3, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


def test_create_and_get():
    store = SessionStore(ttl=timedelta(hours=1))
    session = store.create()
    assert store.get(session.token) is session
    assert session.is_authenticated
    assert not session.is_admin


def test_unknown_or_empty_token():
    store = SessionStore()
    assert store.get("nope") is None
    assert store.get(None) is None


def test_expiry():
    clock = Clock()
    store = SessionStore(ttl=timedelta(hours=1), clock=clock)
    session = store.create()
    clock.now += timedelta(minutes=59)
    assert store.get(session.token) is session
    clock.now += timedelta(minutes=1)
    assert store.get(session.token) is None


def test_clear_resets_flags():
    store = SessionStore()
    session = store.create()
    session.is_admin = True
    assert store.clear(session.token)
    assert not session.is_authenticated
    assert not session.is_admin
    assert store.get(session.token) is None
    assert not store.clear(session.token)


def test_purge_expired():
    clock = Clock()
    store = SessionStore(ttl=timedelta(hours=1), clock=clock)
    store.create()
    clock.now += timedelta(minutes=30)
    live = store.create()
    clock.now += timedelta(minutes=45)
    assert store.purge_expired() == 1
    assert len(store) == 1
    assert store.get(live.token) is live


def test_sessions_are_independent():
    store = SessionStore()
    a = store.create()
    b = store.create()
    a.is_admin = True
    assert a.token != b.token
    assert not b.is_admin
