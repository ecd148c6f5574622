"""Signed field selection for each gateway protocol version."""

from typing import Dict, Iterable, List

from ..types import (
    ProtocolVersion,
    FieldName,
    InboundFields,
    TransactionResult,
    COMMON_RESPONSE_FIELDS,
    MONETARY_RESPONSE_FIELDS,
    SignatureMismatchError
)


def _value(fields: InboundFields, name: str) -> str:
    value = fields.get(name)
    if value is None:
        return ""
    return str(value)


def build_field_manifest(keys: Iterable[str], protocol_version: ProtocolVersion) -> str:
    """Build the ``hmac_fields`` value for an outbound request.

    Args:
        keys: Field names present in the request before the manifest is added
        protocol_version: Wire contract of the exchange

    Returns:
        Comma-joined field names. The sorted revision also lists
        ``hmac_fields`` itself.
    """
    names: List[str] = [key for key in keys if key != FieldName.HMAC_FIELDS]
    if protocol_version is ProtocolVersion.SORTED_FIELD_MANIFEST:
        names = sorted(names + [FieldName.HMAC_FIELDS])
    return ",".join(names)


def parse_field_manifest(manifest: str) -> List[str]:
    """Split an ``hmac_fields`` value into field names, skipping empty entries."""
    return [name for name in manifest.split(",") if name]


def select_fixed_subset(fields: InboundFields) -> Dict[str, str]:
    """Pick the hard-coded signed subset for a response.

    Completed and failed payments add the monetary fields and either
    ``processing_errors`` or, failing that, ``processing_warnings``. A
    processing field counts whenever it is present, even when empty.
    Cancelled payments (and unrecognized results) sign only the common fields.
    """
    signed = {name: _value(fields, name) for name in COMMON_RESPONSE_FIELDS}

    result = fields.get(FieldName.TRANSACTION_RESULT)
    if result in (TransactionResult.COMPLETED.value, TransactionResult.FAILED.value):
        # Present only in the automatic callback message
        if fields.get(FieldName.PROCESSING_ERRORS) is not None:
            signed[FieldName.PROCESSING_ERRORS] = _value(fields, FieldName.PROCESSING_ERRORS)
        elif fields.get(FieldName.PROCESSING_WARNINGS) is not None:
            signed[FieldName.PROCESSING_WARNINGS] = _value(fields, FieldName.PROCESSING_WARNINGS)

        for name in MONETARY_RESPONSE_FIELDS:
            signed[name] = _value(fields, name)

    return signed


def select_manifest_subset(fields: InboundFields) -> Dict[str, str]:
    """Pick exactly the fields named in the response's ``hmac_fields``.

    Raises:
        SignatureMismatchError: If the response carries no manifest
    """
    manifest = fields.get(FieldName.HMAC_FIELDS)
    if not manifest:
        raise SignatureMismatchError(
            "Invalid signature",
            details={"reason": "hmac_fields missing from response"}
        )
    return {name: _value(fields, name) for name in parse_field_manifest(str(manifest))}


def select_signed_fields(fields: InboundFields, protocol_version: ProtocolVersion) -> Dict[str, str]:
    """Select the subset of a response that its HMAC covers."""
    if protocol_version.uses_manifest:
        return select_manifest_subset(fields)
    return select_fixed_subset(fields)
