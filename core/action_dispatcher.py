"""
Turns a button activation into an optional webhook call followed by a
request to terminate the process with the button's exit code.

Webhook delivery never blocks the exit: every webhook failure is logged and
swallowed at this boundary, and termination is requested from a ``finally``
block regardless of how the call settled.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from popup_app.popup_app import logger as app_logger
from shared.window_definition import WebhookConfig

from .content_router import FatalIntegrationError

_LOGGER = app_logger.get_logger()

EXIT_PRIMARY_BUTTON = 0
EXIT_SECONDARY_BUTTON = 2
WEBHOOK_TIMEOUT_SECONDS = 10.0


class RuntimeActionError(RuntimeError):
    """A recoverable failure while performing a button action."""


class WebhookTimeout(RuntimeActionError):
    pass


class WebhookFailed(RuntimeActionError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"Webhook failed with status: {status_code}")
        self.status_code = status_code


class WebhookError(RuntimeActionError):
    pass


class ProcessTerminationError(FatalIntegrationError):
    """The process-control collaborator rejected the exit request."""


@dataclass(frozen=True, slots=True)
class ButtonActivation:
    exit_code: int
    webhook: Optional[WebhookConfig] = None


@dataclass(frozen=True, slots=True)
class DispatchResult:
    exit_code: int
    error: Optional[RuntimeActionError] = None
    terminated: bool = True


class ActionDispatcher:
    """Handles exactly one button activation per process."""

    def __init__(
        self,
        terminate: Callable[[int], None],
        *,
        timeout: float = WEBHOOK_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._terminate = terminate
        self._timeout = timeout
        self._transport = transport

    async def dispatch(self, activation: ButtonActivation) -> DispatchResult:
        _LOGGER.info("Button clicked, exit code: {}", activation.exit_code)
        error: Optional[RuntimeActionError] = None
        terminated = False
        try:
            if activation.webhook is not None:
                _LOGGER.info("Sending webhook to {}", activation.webhook.url)
                try:
                    await self.send_webhook(activation.webhook)
                except RuntimeActionError as exc:
                    _LOGGER.error("{}: {}", type(exc).__name__, exc)
                    error = exc
        finally:
            terminated = self._request_exit(activation.exit_code)
        return DispatchResult(exit_code=activation.exit_code, error=error, terminated=terminated)

    async def send_webhook(self, webhook: WebhookConfig) -> None:
        """
        POST the pre-serialized payload, bounded by the dispatcher timeout.

        Raises WebhookTimeout, WebhookFailed or WebhookError. On timeout the
        in-flight request is cancelled and its connection closed.
        """
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await asyncio.wait_for(
                    client.post(
                        webhook.url,
                        content=webhook.payload.encode("utf-8"),
                        headers={"Content-Type": "application/json"},
                    ),
                    timeout=self._timeout,
                )
            except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
                raise WebhookTimeout(
                    f"Webhook timeout after {self._timeout:g} seconds"
                ) from exc
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise WebhookError(f"Webhook error: {exc}") from exc

        if not response.is_success:
            raise WebhookFailed(response.status_code)
        _LOGGER.info("Webhook sent successfully")

    def _request_exit(self, exit_code: int) -> bool:
        _LOGGER.debug("Requesting exit with code {}", exit_code)
        try:
            self._terminate(exit_code)
        except Exception as exc:
            failure = ProcessTerminationError(f"Failed to exit with code {exit_code}: {exc}")
            _LOGGER.opt(exception=exc).critical("{}", failure)
            return False
        return True
