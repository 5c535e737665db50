"""Telegram Bot API delivery client.

Sends one text message per call to the sendMessage method and keeps the last
response for inspection. Delivery is fire-and-forget: a negative
acknowledgment or a transport failure is reported on the system logger and
send() returns normally. Nothing is retried or queued.

TLS certificate verification is enabled by default. Pass verify=False only
for endpoints behind an intercepting proxy you control.
"""

from __future__ import annotations

__all__ = [
    "TelegramClient",
    "USER_AGENT",
    "https_transport_available",
]

import json
import logging
import threading
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from telegram_log_handler import __version__
from telegram_log_handler.constants import (
    APP_NAME,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    RESERVED_FIELDS,
    SEND_MESSAGE_METHOD,
    TELEGRAM_API_ENDPOINT,
    TRANSPORT_ERRORS,
)
from telegram_log_handler.exceptions import (
    DeliveryRejected,
    TelegramHandlerError,
    TransportFailure,
    TransportUnavailable,
)
from telegram_log_handler.models import DeliveryResponse, DeliveryResult
from telegram_log_handler.utils.logging.logging_helpers import redact_secret
from telegram_log_handler.utils.logging.system_logger import get_system_logger

logger = logging.getLogger(__name__)


# User-Agent header for Bot API requests (informational)
USER_AGENT = f"{APP_NAME}/{__version__}"


def https_transport_available() -> bool:
    """Check that the runtime can open TLS connections.

    Python builds without OpenSSL ship no usable `ssl` module; httpx cannot
    reach an https:// endpoint there.

    Returns:
        True if an SSL context can be created.
    """
    try:
        import ssl
    except ImportError:
        return False
    return hasattr(ssl, "create_default_context")


class TelegramClient:
    """Deliver messages to one Telegram chat.

    The token and channel are fixed for the lifetime of the client. The last
    DeliveryResponse and the last reported error are stored under a lock so
    one client can be shared by several logging threads.
    """

    def __init__(
        self,
        token: str,
        channel: str,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        verify: bool = True,
        endpoint: str = TELEGRAM_API_ENDPOINT,
        http_client: httpx.Client | None = None,
        reporter: logging.Logger | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: Bot token issued by BotFather. Never logged.
            channel: Chat identifier (numeric id or "@channelusername").
            timeout: Request timeout in seconds.
            verify: Verify the server's TLS certificate. Disabling this
                exposes the token to anyone able to intercept the connection.
            endpoint: Bot API base URL; the token is appended directly.
            http_client: Preconfigured httpx.Client. The caller keeps
                ownership and close() leaves it open.
            reporter: Logger receiving delivery problems (default: system logger).

        Raises:
            TransportUnavailable: If the runtime has no HTTPS support.
        """
        if not https_transport_available():
            raise TransportUnavailable("HTTPS support (the ssl module) is needed to use this library")

        self._token = token
        self._channel = channel
        self._endpoint = endpoint
        self.timeout = timeout
        self.verify = verify
        self._reporter = reporter or get_system_logger()

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=timeout,
            verify=verify,
            headers={"User-Agent": USER_AGENT},
        )

        self._lock = threading.Lock()
        self._response: DeliveryResponse | None = None
        self._last_error: TelegramHandlerError | None = None

    def __repr__(self) -> str:
        return f"TelegramClient(channel={self._channel!r}, endpoint={self._endpoint!r}, verify={self.verify!r})"

    def __enter__(self) -> "TelegramClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def token(self) -> str:
        """Bot token."""
        return self._token

    @property
    def channel(self) -> str:
        """Destination chat identifier."""
        return self._channel

    @property
    def url(self) -> str:
        """Full sendMessage URL. Contains the token: do not log."""
        return f"{self._endpoint}{self._token}/{SEND_MESSAGE_METHOD}"

    @property
    def response(self) -> DeliveryResponse | None:
        """Last API response, or None if nothing was sent or the transport failed."""
        with self._lock:
            return self._response

    @property
    def last_error(self) -> TelegramHandlerError | None:
        """Error reported by the last send(), or None if it was delivered."""
        with self._lock:
            return self._last_error

    def build_form(self, message: str, extra_fields: Mapping[str, Any] | None = None) -> dict[str, str]:
        """Build the form body for sendMessage.

        Extra fields (parse_mode, disable_notification, ...) are added as-is
        but cannot replace text or chat_id.
        """
        form: dict[str, str] = {}
        for key, value in (extra_fields or {}).items():
            if key in RESERVED_FIELDS:
                continue
            form[str(key)] = _form_value(value)
        form["text"] = message
        form["chat_id"] = str(self._channel)
        return form

    def deliver(self, message: str, extra_fields: Mapping[str, Any] | None = None) -> DeliveryResult:
        """Send one message and return the outcome without reporting it.

        Request-building errors (a token that is not URL-safe, a message
        that cannot be UTF-8 encoded) are returned as TransportFailure too.

        Returns:
            DeliveryResult: Parsed response and/or the error describing why
                the message was not delivered.
        """
        form = self.build_form(message, extra_fields)

        try:
            http_response = self._http_client.post(self.url, data=form, timeout=self.timeout)
        except TRANSPORT_ERRORS as e:
            return DeliveryResult(error=TransportFailure(f"Request to Telegram failed: {type(e).__name__}", e))
        except httpx.HTTPError as e:
            return DeliveryResult(error=TransportFailure(f"HTTP error: {type(e).__name__}", e))
        except (httpx.InvalidURL, UnicodeError, ValueError) as e:
            # Raised while building the request: bad characters in the token or an unencodable message
            return DeliveryResult(error=TransportFailure(f"Request could not be built: {type(e).__name__}", e))

        try:
            payload = http_response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return DeliveryResult(
                error=TransportFailure(f"Telegram returned a non-JSON body (HTTP {http_response.status_code})", e)
            )

        try:
            response = DeliveryResponse.model_validate(payload)
        except ValidationError as e:
            return DeliveryResult(
                error=TransportFailure(f"Unexpected response shape (HTTP {http_response.status_code})", e)
            )

        return DeliveryResult(response=response, error=response.to_error())

    def send(self, message: str, extra_fields: Mapping[str, Any] | None = None) -> None:
        """Send one message to the chat.

        Never raises for delivery problems: a rejected message or a failed
        request is reported on the reporter logger and the call returns.

        Args:
            message: Message text.
            extra_fields: Additional sendMessage parameters.
        """
        result = self.deliver(message, extra_fields)

        with self._lock:
            self._response = result.response
            self._last_error = result.error

        if result.error is not None:
            self._report(result.error)
        else:
            logger.debug("Message delivered to %s", self._channel)

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http_client.close()

    def _report(self, error: TelegramHandlerError) -> None:
        """Report an absorbed delivery problem with the token redacted."""
        entry: dict[str, Any] = {
            "channel": self._channel,
            "message": redact_secret(error, self._token),
        }
        if isinstance(error, DeliveryRejected):
            entry["event"] = "delivery_rejected"
            entry["description"] = redact_secret(error.description, self._token)
            entry["error_code"] = error.error_code
        else:
            entry["event"] = "delivery_failed"
            original = getattr(error, "original_error", None)
            if original is not None:
                entry["error_type"] = type(original).__name__
        self._reporter.error(entry)


def _form_value(value: Any) -> str:
    """Render a form value the way the Bot API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)
