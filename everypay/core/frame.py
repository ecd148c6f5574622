"""Messages posted by the embedded payment frame to the hosting page.

The frame sends ``{"resize_iframe": "expand"}`` before showing a 3-D Secure
page, ``{"resize_iframe": "shrink"}`` once the customer has authenticated,
and ``{"transaction_result": "..."}`` when the payment finishes. Messages
are only acted on when their origin is the gateway's.
"""

import logging
from typing import Literal, Optional, Union

from pydantic import BaseModel, ValidationError

from ..types import DEMO_GATEWAY_ORIGIN, FrameMessageError


logger = logging.getLogger(__name__)


class FrameMessage(BaseModel):
    """A cross-document message from the payment frame."""
    resize_iframe: Optional[Literal["expand", "shrink"]] = None
    transaction_result: Optional[str] = None

    @property
    def wants_expand(self) -> bool:
        return self.resize_iframe == "expand"

    @property
    def wants_shrink(self) -> bool:
        return self.resize_iframe == "shrink"


def parse_frame_message(
    origin: str,
    data: Union[str, bytes],
    expected_origin: str = DEMO_GATEWAY_ORIGIN
) -> Optional[FrameMessage]:
    """Parse a frame message after checking where it came from.

    Args:
        origin: Declared origin of the message event
        data: JSON payload of the message event
        expected_origin: Gateway origin (demo or production)

    Returns:
        FrameMessage, or None when the origin is not the gateway's

    Raises:
        FrameMessageError: If the payload is not a JSON object of the expected shape
    """
    if origin != expected_origin:
        logger.debug(f"Ignoring frame message from unexpected origin '{origin}'")
        return None

    try:
        return FrameMessage.model_validate_json(data)
    except ValidationError as e:
        raise FrameMessageError(
            "Invalid frame message",
            details={"origin": origin, "errors": e.errors(include_url=False, include_input=False)}
        ) from e
