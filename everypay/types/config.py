"""Configuration types for everypay."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretBytes, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


DEMO_GATEWAY_ORIGIN = "https://igw-demo.every-pay.com"
PRODUCTION_GATEWAY_ORIGIN = "https://pay.every-pay.eu"

TRANSACTION_TYPE_AUTHORISATION = "authorisation"
DEFAULT_LOCALE = "en"


class ProtocolVersion(str, Enum):
    """Wire contract revisions of the gateway signing protocol.

    The revisions are mutually exclusive: an exchange speaks exactly one.
    """
    FIXED_SUBSET = "fixed_subset"                    # Verifier picks a hard-coded field subset
    FIELD_MANIFEST = "field_manifest"                # Subset named by hmac_fields
    SORTED_FIELD_MANIFEST = "sorted_field_manifest"  # hmac_fields sorted, lists itself

    @property
    def default_freshness_window(self) -> int:
        """Seconds a response timestamp may lag behind the local clock."""
        if self is ProtocolVersion.FIXED_SUBSET:
            return 300
        return 600

    @property
    def uses_manifest(self) -> bool:
        return self is not ProtocolVersion.FIXED_SUBSET


class Credential(BaseModel):
    """API username and shared secret issued by the gateway."""
    model_config = ConfigDict(frozen=True)

    identifier: str
    secret: SecretBytes


class EveryPaySettings(BaseSettings):
    """
    Exchange settings loaded from environment variables.

    Every field maps to an ``EVERYPAY_``-prefixed variable, e.g.
    ``EVERYPAY_API_USERNAME`` and ``EVERYPAY_API_SECRET``. A local ``.env``
    file is read when present.
    """
    model_config = SettingsConfigDict(
        env_prefix="EVERYPAY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    api_username: str = ""
    api_secret: SecretStr = SecretStr("")
    protocol_version: ProtocolVersion = ProtocolVersion.SORTED_FIELD_MANIFEST
    freshness_window: Optional[int] = None
    gateway_origin: str = DEMO_GATEWAY_ORIGIN
