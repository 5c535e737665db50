"""Delivery response models.

DeliveryResponse validates the JSON body returned by the Telegram Bot API.
DeliveryResult is the internal outcome of one delivery attempt; the client
turns it into "report and continue" at the send() boundary.
"""

from __future__ import annotations

__all__ = [
    "DeliveryResponse",
    "DeliveryResult",
]

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from telegram_log_handler.exceptions import DeliveryRejected, TelegramHandlerError


class DeliveryResponse(BaseModel):
    """Telegram Bot API response envelope.

    Unknown keys (e.g. "parameters") are kept as extra fields.

    Attributes:
        ok: Whether the API accepted the request.
        description: Human-readable explanation, present when ok is False.
        error_code: HTTP-like error code, present when ok is False.
        result: The sent Message object, present when ok is True.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    ok: bool
    description: str | None = None
    error_code: int | None = None
    result: Any | None = None

    def to_error(self) -> DeliveryRejected | None:
        """Return DeliveryRejected for a negative acknowledgment, else None."""
        if self.ok:
            return None
        return DeliveryRejected(self.description or "no description", self.error_code)


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Outcome of one delivery attempt.

    Attributes:
        response: Parsed API response, None when the transport failed.
        error: DeliveryRejected or TransportFailure, None on success.
    """

    response: DeliveryResponse | None = None
    error: TelegramHandlerError | None = None

    @property
    def delivered(self) -> bool:
        """True when the API acknowledged the message."""
        return self.error is None and self.response is not None and self.response.ok
