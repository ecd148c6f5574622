"""Signed request building and response verification against the gateway."""

import hmac
import logging
import time
from typing import Callable, Mapping, Optional, Union

from .nonce import AcceptAllNonceStore, InMemoryNonceStore, NonceStore, generate_nonce
from .protocol import build_field_manifest, select_signed_fields
from .signing import sign_fields, signatures_match
from ..types import (
    Credential,
    EveryPaySettings,
    ProtocolVersion,
    FieldName,
    InboundFields,
    OutboundFields,
    StatusCode,
    STATUS_BY_RESULT,
    SYSTEM_REQUEST_FIELDS,
    TRANSACTION_TYPE_AUTHORISATION,
    DEFAULT_LOCALE,
    VerificationResult,
    EveryPayError,
    ConfigurationError,
    AuthenticationError,
    StalenessError,
    ReplayError,
    SignatureMismatchError,
    UnknownResultError
)


logger = logging.getLogger(__name__)


class SignedExchange:
    """Builds signed payment requests and verifies gateway responses.

    One instance holds one credential and speaks one protocol version.
    Instances share no mutable state, so separate credentials (e.g. one per
    tenant) can be used side by side from different threads.

    Example:
        exchange = SignedExchange("shop1", "s3cr3t")

        fields = exchange.build_request({
            "account_id": "EUR3D1",
            "amount": "10.00",
            "order_reference": "ORD1",
            ...
        })
        # submit ``fields`` to the gateway as a form POST

        # later, in the callback handler:
        status = exchange.verify_response(request.form)
    """

    def __init__(
        self,
        identifier: str,
        secret: Union[str, bytes],
        *,
        protocol_version: ProtocolVersion = ProtocolVersion.SORTED_FIELD_MANIFEST,
        freshness_window: Optional[int] = None,
        nonce_store: Optional[NonceStore] = None,
        clock: Optional[Callable[[], float]] = None,
        nonce_factory: Callable[[], str] = generate_nonce
    ):
        """Initialize the exchange.

        Args:
            identifier: API username issued by the gateway
            secret: Shared API secret; ``str`` secrets are UTF-8 encoded
            protocol_version: Wire contract to speak
            freshness_window: Accepted response age in seconds; defaults to
                the protocol version's window
            nonce_store: Seen-nonce store; defaults to a store that accepts
                every nonce, which disables replay protection
            clock: Returns the current time in seconds since the epoch;
                defaults to ``time.time``
            nonce_factory: Returns a fresh nonce for each request

        Raises:
            ConfigurationError: If identifier or secret is empty, or the
                freshness window is not positive
        """
        if not identifier:
            raise ConfigurationError("API username must not be empty")
        if not secret:
            raise ConfigurationError(
                "API secret must not be empty",
                details={"api_username": identifier}
            )

        secret_bytes = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
        self.credential = Credential(identifier=identifier, secret=secret_bytes)
        self.protocol_version = ProtocolVersion(protocol_version)

        if freshness_window is None:
            freshness_window = self.protocol_version.default_freshness_window
        if freshness_window <= 0:
            raise ConfigurationError(
                "Freshness window must be positive",
                details={"freshness_window": freshness_window}
            )
        self.freshness_window = freshness_window

        if nonce_store is None:
            logger.warning(
                f"No nonce store configured for '{identifier}'; replayed responses will not be detected."
            )
            nonce_store = AcceptAllNonceStore()
        elif isinstance(nonce_store, InMemoryNonceStore) and nonce_store.ttl < freshness_window:
            logger.warning(
                f"Nonce store ttl {nonce_store.ttl}s is shorter than the freshness window "
                f"{freshness_window}s; replays inside the window may go undetected."
            )
        self.nonce_store = nonce_store

        self._clock = clock
        self._nonce_factory = nonce_factory

    @classmethod
    def from_settings(
        cls,
        settings: Optional[EveryPaySettings] = None,
        **kwargs
    ) -> "SignedExchange":
        """Create an exchange from environment settings.

        Args:
            settings: Loaded settings; read from the environment when omitted
            **kwargs: Extra constructor arguments (nonce_store, clock, ...)
        """
        if settings is None:
            settings = EveryPaySettings()
        return cls(
            settings.api_username,
            settings.api_secret.get_secret_value(),
            protocol_version=settings.protocol_version,
            freshness_window=settings.freshness_window,
            **kwargs
        )

    @property
    def identifier(self) -> str:
        return self.credential.identifier

    def _now(self) -> float:
        if self._clock is None:
            return time.time()
        return self._clock()

    def _sign(self, fields: Mapping[str, str]) -> str:
        return sign_fields(fields, self.credential.secret.get_secret_value())

    def build_request(
        self,
        fields: Mapping[str, object],
        locale: str = DEFAULT_LOCALE,
        include_field_manifest: bool = False
    ) -> OutboundFields:
        """Populate and sign the fields to submit for payment.

        Expects the order data the gateway requires (account_id, amount,
        billing and delivery address parts, callback_url, customer_url,
        email, order_reference, user_ip). Their completeness is not checked.

        Args:
            fields: Order data; values are rendered with ``str()``
            locale: Payment page language, added after signing
            include_field_manifest: Add an ``hmac_fields`` entry naming the
                signed fields

        Returns:
            Fields including ``hmac`` and ``locale``, ready for submission
        """
        data: OutboundFields = {}
        for key, value in fields.items():
            if key in SYSTEM_REQUEST_FIELDS:
                logger.debug(f"Replacing caller-supplied system field '{key}'")
                continue
            data[key] = str(value)

        data[FieldName.API_USERNAME] = self.identifier
        data[FieldName.NONCE] = self._nonce_factory()
        data[FieldName.TIMESTAMP] = str(int(self._now()))
        data[FieldName.TRANSACTION_TYPE] = TRANSACTION_TYPE_AUTHORISATION

        if include_field_manifest:
            data[FieldName.HMAC_FIELDS] = build_field_manifest(data.keys(), self.protocol_version)

        data[FieldName.HMAC] = self._sign(data)
        data[FieldName.LOCALE] = locale

        logger.debug(
            f"Built request for order '{data.get(FieldName.ORDER_REFERENCE, '')}' "
            f"with nonce {data[FieldName.NONCE]}"
        )
        return data

    def verify_response(self, fields: InboundFields) -> StatusCode:
        """Verify a callback or return payload and decode its outcome.

        Checks run in order and the first failure is raised: identity,
        freshness, nonce replay, signature, then the result lookup.

        Args:
            fields: Payload exactly as received from the gateway

        Returns:
            StatusCode of the verified payment

        Raises:
            AuthenticationError: api_username does not match
            StalenessError: timestamp missing, malformed, in the future or
                older than the freshness window
            ReplayError: nonce already accepted
            SignatureMismatchError: hmac missing or wrong
            UnknownResultError: transaction_result not recognized
        """
        order_reference = fields.get(FieldName.ORDER_REFERENCE, "")
        try:
            self._check_identity(fields)
            self._check_freshness(fields)
            nonce = self._check_nonce(fields)
            self._check_signature(fields)
            self._claim_nonce(nonce)
        except EveryPayError as e:
            logger.warning(f"Rejected response for order '{order_reference}': {e.error_code} {e.details}")
            raise

        result = fields.get(FieldName.TRANSACTION_RESULT)
        status = STATUS_BY_RESULT.get(result) if isinstance(result, str) else None
        if status is None:
            logger.warning(f"Unknown transaction_result '{result}' for order '{order_reference}'")
            raise UnknownResultError(
                "Unknown transaction result",
                details={"transaction_result": result}
            )

        logger.info(f"Verified response for order '{order_reference}': {status.name}")
        return status

    def check_response(self, fields: InboundFields) -> VerificationResult:
        """Verify a payload without raising.

        Returns:
            VerificationResult holding either the status or the error code
            and message of the first failed check
        """
        try:
            status = self.verify_response(fields)
        except EveryPayError as e:
            return VerificationResult(error_code=e.error_code, message=e.message)
        return VerificationResult(status=status)

    def _check_identity(self, fields: InboundFields) -> None:
        received = fields.get(FieldName.API_USERNAME)
        if not isinstance(received, str) or not hmac.compare_digest(
            self.identifier.encode("utf-8"), received.encode("utf-8")
        ):
            raise AuthenticationError(
                "Invalid identity",
                details={"api_username": received}
            )

    def _check_freshness(self, fields: InboundFields) -> None:
        raw = fields.get(FieldName.TIMESTAMP)
        if not isinstance(raw, str) or not (raw.isascii() and raw.isdigit()):
            raise StalenessError(
                "Response outdated",
                details={"timestamp": raw, "reason": "timestamp is not an integer"}
            )

        timestamp = int(raw)
        now = int(self._now())
        if timestamp > now or timestamp < now - self.freshness_window:
            raise StalenessError(
                "Response outdated",
                details={"timestamp": timestamp, "now": now, "window": self.freshness_window}
            )

    def _check_nonce(self, fields: InboundFields) -> str:
        nonce = str(fields.get(FieldName.NONCE) or "")
        if self.nonce_store.has_seen(nonce):
            raise ReplayError("Nonce is already used", details={"nonce": nonce})
        return nonce

    def _claim_nonce(self, nonce: str) -> None:
        # A concurrent delivery of the same response may have passed has_seen too
        if not self.nonce_store.mark(nonce):
            raise ReplayError("Nonce is already used", details={"nonce": nonce})

    def _check_signature(self, fields: InboundFields) -> None:
        received = fields.get(FieldName.HMAC)
        if not received:
            raise SignatureMismatchError("Invalid signature", details={"reason": "hmac missing"})

        signed = select_signed_fields(fields, self.protocol_version)
        if not signatures_match(self._sign(signed), str(received)):
            raise SignatureMismatchError(
                "Invalid signature",
                details={"signed_fields": sorted(signed)}
            )
