"""Tests for TokenStore."""

import threading

from core.oauth2.models import TokenState
from core.oauth2.store import TokenStore


class TestTokenStore:
    def test_starts_empty(self):
        assert TokenStore().get().is_empty

    def test_set_replaces_state(self):
        store = TokenStore("o365")
        store.set(TokenState(access_token="a", refresh_token="r"))
        store.set(TokenState(access_token="b"))
        state = store.get()
        assert state.access_token == "b"
        assert state.refresh_token == ""

    def test_clear(self):
        store = TokenStore()
        store.set(TokenState(access_token="a"))
        store.clear()
        assert store.get().is_empty

    def test_stores_are_independent(self):
        msa, o365 = TokenStore("microsoft-account"), TokenStore("o365")
        msa.set(TokenState(access_token="a"))
        assert o365.get().is_empty

    def test_concurrent_writers(self):
        store = TokenStore()

        def writer(i):
            for _ in range(100):
                store.set(TokenState(access_token=f"tok-{i}"))

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.get().access_token.startswith("tok-")
