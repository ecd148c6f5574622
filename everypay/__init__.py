"""everypay - signed request/response exchange for the EveryPay card gateway."""

from .types import (
    # Outcomes
    StatusCode,
    TransactionResult,

    # Configuration
    ProtocolVersion,
    Credential,
    EveryPaySettings,
    DEMO_GATEWAY_ORIGIN,
    PRODUCTION_GATEWAY_ORIGIN,

    # Fields
    FieldName,
    OutboundFields,
    InboundFields,
    VerificationResult,

    # Error Types
    EveryPayError,
    ConfigurationError,
    AuthenticationError,
    StalenessError,
    ReplayError,
    SignatureMismatchError,
    UnknownResultError,
    FrameMessageError,
    EveryPayErrorCode,
    map_error_to_code
)

from .core import (
    SignedExchange,
    canonicalize,
    sign,
    NonceStore,
    AcceptAllNonceStore,
    InMemoryNonceStore,
    generate_nonce,
    FrameMessage,
    parse_frame_message
)

__version__ = "1.0.0"

__all__ = [
    # Outcomes
    "StatusCode",
    "TransactionResult",

    # Configuration
    "ProtocolVersion",
    "Credential",
    "EveryPaySettings",
    "DEMO_GATEWAY_ORIGIN",
    "PRODUCTION_GATEWAY_ORIGIN",

    # Fields
    "FieldName",
    "OutboundFields",
    "InboundFields",
    "VerificationResult",

    # Error Types
    "EveryPayError",
    "ConfigurationError",
    "AuthenticationError",
    "StalenessError",
    "ReplayError",
    "SignatureMismatchError",
    "UnknownResultError",
    "FrameMessageError",
    "EveryPayErrorCode",
    "map_error_to_code",

    # Exchange
    "SignedExchange",
    "canonicalize",
    "sign",

    # Replay protection
    "NonceStore",
    "AcceptAllNonceStore",
    "InMemoryNonceStore",
    "generate_nonce",

    # Embedded frame
    "FrameMessage",
    "parse_frame_message"
]
