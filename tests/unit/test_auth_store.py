"""Tests for AuthStore."""

import pytest

from tasklist.client.auth_store import AuthStore


@pytest.mark.unit
class TestAuthStore:
    """Tests for AuthStore."""

    def test_initial_state(self):
        store = AuthStore()

        assert store.is_authenticated is False
        assert store.user is None

    def test_setters_notify(self):
        store = AuthStore()
        seen = []
        store.subscribe(lambda s: seen.append((s.is_authenticated, s.user)))

        store.set_authenticated(True)
        store.set_user({"sub": "auth0|1", "name": "Alice"})
        store.set_user(None)

        assert seen == [
            (True, None),
            (True, {"sub": "auth0|1", "name": "Alice"}),
            (True, None),
        ]
