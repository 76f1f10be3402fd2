"""Slack notifications for newly created posts.

Posts are announced through a Slack incoming webhook when ``SLACK_WEBHOOK_URL``
is configured. Delivery is best-effort: the API schedules
``SlackNotifier.post_created`` as a background task after the post is
committed, and failures are logged, never surfaced to the author.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from beam_stage.core.settings import settings
from beam_stage.services.errors import NotificationError

# Configure logger for this module
logger = logging.getLogger(__name__)

SUMMARY_MAX_CHARS = 280


@dataclass(frozen=True)
class SlackConfig:
    """Connection settings for the Slack webhook."""

    webhook_url: str | None
    app_url: str
    timeout_seconds: float

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)


@dataclass(frozen=True)
class NewPostNotice:
    """Snapshot of a created post, detached from the database session."""

    post_id: int
    title: str
    content: str
    author_name: str | None


def load_slack_config() -> SlackConfig:
    """Build configuration object from global settings."""

    return SlackConfig(
        webhook_url=settings.slack_webhook_url,
        app_url=settings.app_url.rstrip("/"),
        timeout_seconds=float(settings.slack_timeout_seconds),
    )


def _summarize(content: str) -> str:
    text = " ".join(content.split())
    if len(text) <= SUMMARY_MAX_CHARS:
        return text
    return text[: SUMMARY_MAX_CHARS - 1].rstrip() + "…"


class SlackNotifier:
    """HTTP client wrapper for the Slack incoming webhook."""

    def __init__(
        self,
        config: SlackConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or load_slack_config()
        self._client = client
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                )
        return self._client

    def build_message(self, notice: NewPostNotice) -> dict[str, Any]:
        """Return the Slack Block Kit payload announcing ``notice``."""
        post_url = f"{self.config.app_url}/post/{notice.post_id}"
        author = notice.author_name or "Someone"
        headline = f"*<{post_url}|{notice.title}>*"
        return {
            "text": f"{author} published a new post: {notice.title}",
            "blocks": [
                {
                    "type": "section",
                    "text": {"type": "mrkdwn", "text": f"{headline}\n{_summarize(notice.content)}"},
                },
                {
                    "type": "context",
                    "elements": [{"type": "plain_text", "text": author}],
                },
            ],
        }

    async def send(self, notice: NewPostNotice) -> None:
        """Deliver the announcement.

        Raises:
            NotificationError: If the webhook is not configured, unreachable,
                or answers with a non-success status.
        """
        if not self.enabled:
            raise NotificationError("Slack notifications are not enabled")

        client = await self._ensure_client()
        try:
            response = await client.post(
                self.config.webhook_url or "",
                json=self.build_message(notice),
            )
        except httpx.HTTPError as exc:
            raise NotificationError(f"Slack request failed: {exc}") from exc

        if response.is_error:
            raise NotificationError(f"Slack responded with {response.status_code}")

    async def post_created(self, notice: NewPostNotice) -> None:
        """Announce a new post, logging instead of raising on failure."""
        if not self.enabled:
            return
        try:
            await self.send(notice)
        except NotificationError as exc:
            logger.warning("Failed to notify Slack about post %s: %s", notice.post_id, exc)
        else:
            logger.debug("Announced post %s on Slack", notice.post_id)

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""

        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


class _SlackNotifierSingleton:
    """Singleton wrapper for SlackNotifier."""

    _instance: SlackNotifier | None = None

    @classmethod
    def get_instance(cls) -> SlackNotifier:
        """Get or create the singleton SlackNotifier instance."""
        if cls._instance is None:
            cls._instance = SlackNotifier()
        return cls._instance


def get_slack_notifier() -> SlackNotifier:
    """Return a singleton Slack notifier instance."""
    return _SlackNotifierSingleton.get_instance()
