"""Canonical form and HMAC signing of gateway field sets."""

import hashlib
import hmac
from typing import Iterable, Mapping, Tuple, Union

FieldSource = Union[Mapping[str, object], Iterable[Tuple[str, object]]]

# Digest shared with the gateway; changing it breaks wire compatibility.
HMAC_DIGEST = hashlib.sha1


def canonicalize(fields: FieldSource) -> str:
    """Render fields as ``key=value`` pairs sorted by key and joined by ``&``.

    Values are not escaped, so a value containing ``=`` or ``&`` makes the
    canonical form ambiguous. The gateway signs the same unescaped form.

    Args:
        fields: Mapping or iterable of (key, value) pairs, one value per key

    Returns:
        Canonical string used as the exact signing input

    Raises:
        ValueError: If a pair sequence repeats a key
    """
    if isinstance(fields, Mapping):
        pairs = list(fields.items())
    else:
        pairs = list(fields)
        keys = [key for key, _ in pairs]
        if len(set(keys)) != len(keys):
            raise ValueError("Field set must have exactly one value per key")

    return "&".join(f"{key}={value}" for key, value in sorted(pairs, key=lambda pair: pair[0]))


def sign(canonical: str, secret: bytes) -> str:
    """Compute the lowercase hex HMAC-SHA1 of a canonical string."""
    return hmac.new(secret, canonical.encode("utf-8"), HMAC_DIGEST).hexdigest()


def sign_fields(fields: FieldSource, secret: bytes) -> str:
    """Canonicalize and sign in one step."""
    return sign(canonicalize(fields), secret)


def signatures_match(expected: str, received: str) -> bool:
    """Constant-time comparison of two hex digests."""
    return hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8"))
