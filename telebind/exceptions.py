"""Exception hierarchy for the telebind Telegram SDK.

Every failed remote call surfaces as a :class:`TelegramError`.  The two
concrete causes are disjoint subclasses so call sites can tell them apart:

* :class:`RemoteRejection` -- the API answered with ``ok: false``.
* :class:`NetworkFault` -- the call itself failed (connectivity, timeout,
  malformed body).

:class:`PollingExhausted` is raised by the poller once its retry budget is
spent.
"""

from typing import Any, Dict, Optional


class TelegramError(Exception):
    """Base fault for every failed Telegram Bot API call.

    Attributes:
        message: Human-readable description of the failure.
        code: Numeric error code, when the remote side supplied one.
        parameters: Echo of the request payload that triggered the failure.
        method: Name of the remote method that was invoked.
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        parameters: Optional[Dict[str, Any]] = None,
        method: Optional[str] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.parameters = parameters
        self.method = method
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, method={self.method!r})"


class RemoteRejection(TelegramError):
    """The API returned an envelope with ``ok: false``.

    ``retry_after`` and ``migrate_to_chat_id`` are copied from the envelope's
    ``parameters`` block when present.
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        parameters: Optional[Dict[str, Any]] = None,
        method: Optional[str] = None,
        retry_after: Optional[int] = None,
        migrate_to_chat_id: Optional[int] = None,
    ) -> None:
        super().__init__(message, code=code, parameters=parameters, method=method)
        self.retry_after = retry_after
        self.migrate_to_chat_id = migrate_to_chat_id

    @property
    def description(self) -> str:
        """The API's ``description`` field."""
        return self.message


class NetworkFault(TelegramError):
    """The request could not be completed or its body could not be parsed."""

    def __init__(
        self,
        message: str,
        parameters: Optional[Dict[str, Any]] = None,
        method: Optional[str] = None,
    ) -> None:
        super().__init__(message, code=None, parameters=parameters, method=method)


class PollingExhausted(TelegramError):
    """Consecutive ``getUpdates`` failures reached the configured maximum."""

    def __init__(self, attempts: int, last_error: TelegramError) -> None:
        super().__init__(
            f"Polling stopped after {attempts} consecutive failures: {last_error.message}",
            code=last_error.code,
            parameters=last_error.parameters,
            method=last_error.method,
        )
        self.attempts = attempts
        self.last_error = last_error
