"""Types package for everypay - statuses, field names, configuration and errors."""

from .state import (
    StatusCode,
    TransactionResult,
    STATUS_BY_RESULT
)

from .errors import (
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

from .config import (
    DEMO_GATEWAY_ORIGIN,
    PRODUCTION_GATEWAY_ORIGIN,
    TRANSACTION_TYPE_AUTHORISATION,
    DEFAULT_LOCALE,
    ProtocolVersion,
    Credential,
    EveryPaySettings
)

from .fields import (
    OutboundFields,
    InboundFields,
    FieldName,
    REQUEST_ORDER_FIELDS,
    SYSTEM_REQUEST_FIELDS,
    COMMON_RESPONSE_FIELDS,
    MONETARY_RESPONSE_FIELDS,
    VerificationResult
)

__all__ = [

    "StatusCode",
    "TransactionResult",
    "STATUS_BY_RESULT",

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

    "DEMO_GATEWAY_ORIGIN",
    "PRODUCTION_GATEWAY_ORIGIN",
    "TRANSACTION_TYPE_AUTHORISATION",
    "DEFAULT_LOCALE",
    "ProtocolVersion",
    "Credential",
    "EveryPaySettings",

    "OutboundFields",
    "InboundFields",
    "FieldName",
    "REQUEST_ORDER_FIELDS",
    "SYSTEM_REQUEST_FIELDS",
    "COMMON_RESPONSE_FIELDS",
    "MONETARY_RESPONSE_FIELDS",
    "VerificationResult"
]
