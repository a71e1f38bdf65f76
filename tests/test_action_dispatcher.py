import asyncio

import httpx
import pytest

from core.action_dispatcher import (
    EXIT_PRIMARY_BUTTON,
    EXIT_SECONDARY_BUTTON,
    WEBHOOK_TIMEOUT_SECONDS,
    ActionDispatcher,
    ButtonActivation,
    WebhookError,
    WebhookFailed,
    WebhookTimeout,
)
from shared.window_definition import WebhookConfig

WEBHOOK = WebhookConfig(url="https://hooks.example.com/notify", payload='{"answer":"ok"}')


class _Terminator:
    def __init__(self, fail: bool = False):
        self.codes = []
        self.fail = fail

    def __call__(self, code: int) -> None:
        self.codes.append(code)
        if self.fail:
            raise RuntimeError("host unreachable")


def test_exit_code_constants():
    assert EXIT_PRIMARY_BUTTON == 0
    assert EXIT_SECONDARY_BUTTON == 2
    assert WEBHOOK_TIMEOUT_SECONDS == 10.0


@pytest.mark.asyncio
async def test_primary_without_webhook_exits_immediately():
    terminate = _Terminator()
    dispatcher = ActionDispatcher(terminate)

    result = await dispatcher.dispatch(ButtonActivation(exit_code=EXIT_PRIMARY_BUTTON))

    assert terminate.codes == [0]
    assert result.error is None
    assert result.terminated is True


@pytest.mark.asyncio
async def test_secondary_without_webhook_exits_with_two():
    terminate = _Terminator()
    await ActionDispatcher(terminate).dispatch(ButtonActivation(exit_code=EXIT_SECONDARY_BUTTON))
    assert terminate.codes == [2]


@pytest.mark.asyncio
async def test_webhook_posts_payload_verbatim():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    terminate = _Terminator()
    dispatcher = ActionDispatcher(terminate, transport=httpx.MockTransport(handler))

    result = await dispatcher.dispatch(ButtonActivation(exit_code=0, webhook=WEBHOOK))

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == WEBHOOK.url
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == b'{"answer":"ok"}'
    assert result.error is None
    assert terminate.codes == [0]


@pytest.mark.asyncio
async def test_non_success_status_is_logged_not_fatal():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    terminate = _Terminator()

    result = await ActionDispatcher(terminate, transport=transport).dispatch(
        ButtonActivation(exit_code=2, webhook=WEBHOOK)
    )

    assert isinstance(result.error, WebhookFailed)
    assert result.error.status_code == 503
    assert terminate.codes == [2]


@pytest.mark.asyncio
async def test_network_error_is_logged_not_fatal():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    terminate = _Terminator()
    result = await ActionDispatcher(terminate, transport=httpx.MockTransport(handler)).dispatch(
        ButtonActivation(exit_code=0, webhook=WEBHOOK)
    )

    assert isinstance(result.error, WebhookError)
    assert terminate.codes == [0]


@pytest.mark.asyncio
async def test_malformed_webhook_url_is_not_fatal():
    terminate = _Terminator()
    webhook = WebhookConfig(url="not a url", payload="{}")

    result = await ActionDispatcher(terminate).dispatch(ButtonActivation(exit_code=0, webhook=webhook))

    assert isinstance(result.error, WebhookError)
    assert terminate.codes == [0]


@pytest.mark.asyncio
async def test_unresponsive_endpoint_times_out_and_still_exits():
    cancelled = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return httpx.Response(200)

    terminate = _Terminator()
    dispatcher = ActionDispatcher(terminate, timeout=0.05, transport=httpx.MockTransport(handler))

    result = await dispatcher.dispatch(ButtonActivation(exit_code=2, webhook=WEBHOOK))

    assert isinstance(result.error, WebhookTimeout)
    assert cancelled.is_set()
    assert terminate.codes == [2]


@pytest.mark.asyncio
async def test_termination_failure_is_reported_without_retry():
    terminate = _Terminator(fail=True)

    result = await ActionDispatcher(terminate).dispatch(ButtonActivation(exit_code=0))

    assert terminate.codes == [0]
    assert result.terminated is False
