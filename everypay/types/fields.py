"""Field names exchanged with the gateway and the typed verification result."""

from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .state import StatusCode


OutboundFields = Dict[str, str]
InboundFields = Mapping[str, str]


class FieldName:
    """Field name constants shared by requests and responses"""
    API_USERNAME = "api_username"
    NONCE = "nonce"
    TIMESTAMP = "timestamp"
    TRANSACTION_TYPE = "transaction_type"
    HMAC = "hmac"
    HMAC_FIELDS = "hmac_fields"
    LOCALE = "locale"

    ACCOUNT_ID = "account_id"
    AMOUNT = "amount"
    ORDER_REFERENCE = "order_reference"
    PAYMENT_REFERENCE = "payment_reference"
    PAYMENT_STATE = "payment_state"
    TRANSACTION_RESULT = "transaction_result"
    PROCESSING_ERRORS = "processing_errors"
    PROCESSING_WARNINGS = "processing_warnings"


# Order data the caller supplies to build_request. Not validated here.
REQUEST_ORDER_FIELDS = (
    "account_id",
    "amount",
    "billing_address",
    "billing_city",
    "billing_country",
    "billing_postcode",
    "callback_url",
    "customer_url",
    "delivery_address",
    "delivery_city",
    "delivery_country",
    "delivery_postcode",
    "email",
    "order_reference",
    "user_ip",
)

# Fields build_request sets itself; caller values for these are replaced.
SYSTEM_REQUEST_FIELDS = (
    FieldName.API_USERNAME,
    FieldName.NONCE,
    FieldName.TIMESTAMP,
    FieldName.TRANSACTION_TYPE,
    FieldName.HMAC_FIELDS,
    FieldName.HMAC,
    FieldName.LOCALE,
)

# Signed in every response of the fixed-subset protocol
COMMON_RESPONSE_FIELDS = (
    FieldName.API_USERNAME,
    FieldName.NONCE,
    FieldName.ORDER_REFERENCE,
    FieldName.PAYMENT_STATE,
    FieldName.TIMESTAMP,
    FieldName.TRANSACTION_RESULT,
)

# Additionally signed for completed and failed payments
MONETARY_RESPONSE_FIELDS = (
    FieldName.ACCOUNT_ID,
    FieldName.AMOUNT,
    FieldName.PAYMENT_REFERENCE,
)


class VerificationResult(BaseModel):
    """Outcome of a response check that never raises.

    Exactly one of ``status`` and ``error_code`` is set.
    """
    model_config = ConfigDict(frozen=True)

    status: Optional[StatusCode] = None
    error_code: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is not None
