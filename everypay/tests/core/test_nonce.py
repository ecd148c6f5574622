"""Unit tests for everypay.core.nonce module."""

import threading

import pytest
from everypay.core.nonce import (
    NonceStore,
    AcceptAllNonceStore,
    InMemoryNonceStore,
    generate_nonce
)


class TestGenerateNonce:
    """Test generate_nonce function."""

    def test_hex_string(self):
        nonce = generate_nonce()
        assert len(nonce) == 32
        int(nonce, 16)

    def test_unique(self):
        assert len({generate_nonce() for _ in range(100)}) == 100


class TestAcceptAllNonceStore:
    """Test the store that disables replay protection."""

    def test_never_seen(self):
        store = AcceptAllNonceStore()
        assert store.mark("n1") is True
        assert store.mark("n1") is True
        assert store.has_seen("n1") is False

    def test_satisfies_protocol(self):
        assert isinstance(AcceptAllNonceStore(), NonceStore)


class TestInMemoryNonceStore:
    """Test InMemoryNonceStore."""

    def test_mark_reports_new_nonce(self, nonce_store):
        """Test that mark is an insert-if-absent."""
        assert nonce_store.mark("n1") is True
        assert nonce_store.mark("n1") is False
        assert nonce_store.mark("n2") is True

    def test_mark_after_expiry_is_new(self, clock, nonce_store):
        nonce_store.mark("n1")
        clock.advance(600)
        assert nonce_store.mark("n1") is True

    def test_mark_then_seen(self, nonce_store):
        """Test that a marked nonce is reported as seen."""
        assert not nonce_store.has_seen("n1")
        nonce_store.mark("n1")
        assert nonce_store.has_seen("n1")
        assert not nonce_store.has_seen("n2")

    def test_entries_expire(self, clock, nonce_store):
        """Test that nonces are forgotten after the ttl."""
        nonce_store.mark("n1")
        clock.advance(599)
        assert nonce_store.has_seen("n1")
        clock.advance(1)
        assert not nonce_store.has_seen("n1")
        assert len(nonce_store) == 0

    def test_mark_keeps_first_expiry(self, clock, nonce_store):
        """Test that marking again does not extend the entry."""
        nonce_store.mark("n1")
        clock.advance(300)
        nonce_store.mark("n1")
        clock.advance(300)
        assert not nonce_store.has_seen("n1")

    def test_invalid_ttl(self):
        with pytest.raises(ValueError):
            InMemoryNonceStore(ttl=0)

    def test_concurrent_marks(self):
        """Test marking from several threads."""
        store = InMemoryNonceStore(ttl=600)

        def mark_range(start):
            for i in range(start, start + 200):
                store.mark(f"n{i}")

        threads = [threading.Thread(target=mark_range, args=(i * 200,)) for i in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 1000

    def test_satisfies_protocol(self, nonce_store):
        assert isinstance(nonce_store, NonceStore)
