"""Shared pytest fixtures for everypay tests."""

import hashlib
import hmac

import pytest
from everypay.core import SignedExchange, InMemoryNonceStore
from everypay.types import ProtocolVersion


NOW = 1_700_000_000
IDENTIFIER = "shop1"
SECRET = "s3cr3t"


class FakeClock:
    """Settable clock returning seconds since the epoch."""

    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def sign_response(fields, protocol_version=ProtocolVersion.FIXED_SUBSET, secret=SECRET):
    """Return a copy of ``fields`` carrying the hmac the gateway would send.

    The signed field list is written out here rather than taken from
    everypay.core.protocol, so the selection under test is checked against
    the gateway's own rules.
    """
    if protocol_version is ProtocolVersion.FIXED_SUBSET:
        names = ["api_username", "nonce", "order_reference", "payment_state", "timestamp", "transaction_result"]
        if fields.get("transaction_result") in ("completed", "failed"):
            names += ["account_id", "amount", "payment_reference"]
            if "processing_errors" in fields:
                names.append("processing_errors")
            elif "processing_warnings" in fields:
                names.append("processing_warnings")
    else:
        names = [name for name in fields["hmac_fields"].split(",") if name]

    message = "&".join(f"{name}={fields.get(name, '')}" for name in sorted(names))
    signed = dict(fields)
    signed["hmac"] = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha1).hexdigest()
    return signed


@pytest.fixture
def gateway_sign():
    """Provide the gateway-side signer for response payloads."""
    return sign_response


@pytest.fixture
def clock():
    """Create a clock frozen at NOW."""
    return FakeClock()


@pytest.fixture
def nonce_store(clock):
    """Create an in-memory nonce store sharing the test clock."""
    return InMemoryNonceStore(ttl=600, clock=clock)


@pytest.fixture
def fixed_exchange(clock, nonce_store):
    """Create an exchange speaking the fixed-subset protocol."""
    return SignedExchange(
        IDENTIFIER,
        SECRET,
        protocol_version=ProtocolVersion.FIXED_SUBSET,
        nonce_store=nonce_store,
        clock=clock,
        nonce_factory=lambda: "request-nonce"
    )


@pytest.fixture
def manifest_exchange(clock, nonce_store):
    """Create an exchange speaking the sorted field manifest protocol."""
    return SignedExchange(
        IDENTIFIER,
        SECRET,
        protocol_version=ProtocolVersion.SORTED_FIELD_MANIFEST,
        nonce_store=nonce_store,
        clock=clock,
        nonce_factory=lambda: "request-nonce"
    )


@pytest.fixture
def sample_order():
    """Create order data as a shop would pass to build_request."""
    return {
        "account_id": "EUR3D1",
        "amount": "10.00",
        "billing_address": "Narva mnt 7",
        "billing_city": "Tallinn",
        "billing_country": "EE",
        "billing_postcode": "10117",
        "callback_url": "https://shop.example/callback",
        "customer_url": "https://shop.example/return",
        "delivery_address": "Narva mnt 7",
        "delivery_city": "Tallinn",
        "delivery_country": "EE",
        "delivery_postcode": "10117",
        "email": "buyer@example.com",
        "order_reference": "ORD1",
        "user_ip": "192.0.2.10"
    }


@pytest.fixture
def completed_response():
    """Create an unsigned completed-payment callback payload."""
    return {
        "api_username": IDENTIFIER,
        "account_id": "42",
        "amount": "10.00",
        "nonce": "n1",
        "order_reference": "ORD1",
        "payment_reference": "P1",
        "payment_state": "settled",
        "timestamp": str(NOW),
        "transaction_result": "completed"
    }


@pytest.fixture
def cancelled_response():
    """Create an unsigned cancelled-payment return payload."""
    return {
        "api_username": IDENTIFIER,
        "nonce": "n2",
        "order_reference": "ORD1",
        "payment_state": "cancelled",
        "timestamp": str(NOW),
        "transaction_result": "cancelled"
    }
