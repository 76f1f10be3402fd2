# tests/services/test_slack.py
"""Tests for the Slack new-post notifier."""

import json
from typing import Any

import httpx
import pytest

from beam_stage.services.errors import NotificationError
from beam_stage.services.slack import NewPostNotice, SlackConfig, SlackNotifier

WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXX"

NOTICE = NewPostNotice(post_id=7, title="Hello", content="Some  **content**\nhere", author_name="Alice")


def _notifier(handler: Any, webhook_url: str | None = WEBHOOK_URL) -> SlackNotifier:
    config = SlackConfig(webhook_url=webhook_url, app_url="http://beam.test", timeout_seconds=1.0)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SlackNotifier(config, client=client)


def test_build_message_links_to_post() -> None:
    notifier = _notifier(lambda request: httpx.Response(200))
    message = notifier.build_message(NOTICE)
    assert message["text"] == "Alice published a new post: Hello"
    section = message["blocks"][0]["text"]["text"]
    assert "<http://beam.test/post/7|Hello>" in section
    assert "Some **content** here" in section


@pytest.mark.asyncio
async def test_post_created_sends_webhook() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text="ok")

    notifier = _notifier(handler)
    await notifier.post_created(NOTICE)
    await notifier.close()

    assert len(requests) == 1
    assert str(requests[0].url) == WEBHOOK_URL
    assert json.loads(requests[0].content)["text"] == "Alice published a new post: Hello"


@pytest.mark.asyncio
async def test_send_raises_on_error_status() -> None:
    notifier = _notifier(lambda request: httpx.Response(500))
    with pytest.raises(NotificationError):
        await notifier.send(NOTICE)


@pytest.mark.asyncio
async def test_send_raises_on_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    notifier = _notifier(handler)
    with pytest.raises(NotificationError):
        await notifier.send(NOTICE)


@pytest.mark.asyncio
async def test_post_created_swallows_failures(caplog: pytest.LogCaptureFixture) -> None:
    notifier = _notifier(lambda request: httpx.Response(404))
    await notifier.post_created(NOTICE)
    assert "Failed to notify Slack about post 7" in caplog.text


@pytest.mark.asyncio
async def test_disabled_notifier_does_nothing() -> None:
    calls: list[httpx.Request] = []
    notifier = _notifier(lambda request: calls.append(request) or httpx.Response(200), webhook_url=None)

    assert notifier.enabled is False
    await notifier.post_created(NOTICE)
    assert calls == []
    with pytest.raises(NotificationError):
        await notifier.send(NOTICE)
