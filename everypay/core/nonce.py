"""Nonce generation and seen-nonce stores for replay protection."""

import secrets
import threading
import time
from typing import Callable, Dict, Protocol, runtime_checkable


def generate_nonce() -> str:
    """Generate a random nonce for an outbound request."""
    return secrets.token_hex(16)


@runtime_checkable
class NonceStore(Protocol):
    """Seen-set consulted before a response nonce is accepted.

    ``mark`` is an atomic insert-if-absent: it returns False when the nonce
    was already present, so concurrent deliveries of one response cannot
    both be accepted. Stores shared between threads or processes must keep
    that guarantee.
    """

    def has_seen(self, nonce: str) -> bool:
        ...

    def mark(self, nonce: str) -> bool:
        ...


class AcceptAllNonceStore:
    """Store that never reports a nonce as seen.

    Using it disables replay protection. Deployments should supply a real
    store such as ``InMemoryNonceStore`` or one backed by shared storage.
    """

    def has_seen(self, nonce: str) -> bool:
        return False

    def mark(self, nonce: str) -> bool:
        return True


class InMemoryNonceStore:
    """Process-local seen-set whose entries expire after ``ttl`` seconds.

    ``ttl`` must be at least the exchange's freshness window, otherwise a
    nonce could expire here while its response is still fresh.
    """

    def __init__(self, ttl: int = 600, clock: Callable[[], float] = time.time):
        if ttl <= 0:
            raise ValueError(f"Nonce ttl must be positive, got {ttl}")
        self.ttl = ttl
        self._clock = clock
        self._seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def has_seen(self, nonce: str) -> bool:
        with self._lock:
            self._purge(self._clock())
            return nonce in self._seen

    def mark(self, nonce: str) -> bool:
        """Record a nonce, returning False if it was already recorded."""
        with self._lock:
            now = self._clock()
            self._purge(now)
            if nonce in self._seen:
                return False
            self._seen[nonce] = now + self.ttl
            return True

    def __len__(self) -> int:
        with self._lock:
            self._purge(self._clock())
            return len(self._seen)

    def _purge(self, now: float) -> None:
        expired = [nonce for nonce, expires_at in self._seen.items() if expires_at <= now]
        for nonce in expired:
            del self._seen[nonce]
