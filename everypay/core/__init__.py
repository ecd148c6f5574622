"""Core package exports for everypay."""

from .signing import canonicalize, sign, sign_fields, signatures_match
from .nonce import (
    NonceStore,
    AcceptAllNonceStore,
    InMemoryNonceStore,
    generate_nonce
)
from .protocol import (
    build_field_manifest,
    parse_field_manifest,
    select_signed_fields
)
from .exchange import SignedExchange
from .frame import FrameMessage, parse_frame_message

__all__ = [
    # Canonical form and signing
    "canonicalize",
    "sign",
    "sign_fields",
    "signatures_match",

    # Replay protection
    "NonceStore",
    "AcceptAllNonceStore",
    "InMemoryNonceStore",
    "generate_nonce",

    # Protocol versions
    "build_field_manifest",
    "parse_field_manifest",
    "select_signed_fields",

    # Exchange
    "SignedExchange",

    # Embedded frame
    "FrameMessage",
    "parse_frame_message"
]
