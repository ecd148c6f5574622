# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Gateway exchange error types and error code mapping."""

from typing import Any, Dict, Optional


class EveryPayErrorCode:
    """Stable error codes, one per failure kind."""
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_IDENTITY = "INVALID_IDENTITY"
    RESPONSE_OUTDATED = "RESPONSE_OUTDATED"
    DUPLICATE_NONCE = "DUPLICATE_NONCE"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    UNKNOWN_RESULT = "UNKNOWN_RESULT"
    INVALID_FRAME_MESSAGE = "INVALID_FRAME_MESSAGE"

    @classmethod
    def get_all_codes(cls) -> list[str]:
        """Returns all defined error codes."""
        return [
            cls.CONFIGURATION_ERROR,
            cls.INVALID_IDENTITY,
            cls.RESPONSE_OUTDATED,
            cls.DUPLICATE_NONCE,
            cls.INVALID_SIGNATURE,
            cls.UNKNOWN_RESULT,
            cls.INVALID_FRAME_MESSAGE
        ]


class EveryPayError(Exception):
    """Base error for the gateway exchange.

    Every error carries a stable ``error_code`` and a ``details`` dict that is
    safe to log. Details never contain the shared secret or a computed digest.
    """

    error_code: str = "UNKNOWN_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a loggable / serializable dict."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(EveryPayError):
    """Bad credential or exchange setup."""
    error_code = EveryPayErrorCode.CONFIGURATION_ERROR


class AuthenticationError(EveryPayError):
    """Inbound api_username does not match the configured identifier."""
    error_code = EveryPayErrorCode.INVALID_IDENTITY


class StalenessError(EveryPayError):
    """Inbound timestamp is outside the freshness window."""
    error_code = EveryPayErrorCode.RESPONSE_OUTDATED


class ReplayError(EveryPayError):
    """Inbound nonce was already accepted."""
    error_code = EveryPayErrorCode.DUPLICATE_NONCE


class SignatureMismatchError(EveryPayError):
    """Recomputed HMAC does not match the inbound one."""
    error_code = EveryPayErrorCode.INVALID_SIGNATURE


class UnknownResultError(EveryPayError):
    """transaction_result is not one of completed, cancelled, failed."""
    error_code = EveryPayErrorCode.UNKNOWN_RESULT


class FrameMessageError(EveryPayError):
    """Payment frame posted a message that is not valid JSON of the expected shape."""
    error_code = EveryPayErrorCode.INVALID_FRAME_MESSAGE


def map_error_to_code(error: Exception) -> str:
    """Maps an exception to its error code."""
    if isinstance(error, EveryPayError):
        return error.error_code
    return "UNKNOWN_ERROR"
