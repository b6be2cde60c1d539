"""Channel publishing for finished reports.

Reports are posted to a Telegram channel through the Bot API
``sendMessage`` method. One report becomes one message; nothing splits
long reports, so a report above Telegram's message size limit fails with
the API's own error.

Payload:
    {"chat_id": ..., "text": ..., "parse_mode": "HTML",
     "disable_web_page_preview": false}
"""

import logging

import aiohttp

from config import Config
from errors import MalformedResponseError, UpstreamError
from tools.utils import create_ssl_context

logger = logging.getLogger(__name__)

SERVICE_NAME = "Telegram"
PARSE_MODE = "HTML"


class TelegramPublisher:
    """Posts report text to a configured Telegram channel.

    Example:
        >>> publisher = TelegramPublisher(config)
        >>> message_id = await publisher.publish(report)
    """

    def __init__(self, config: Config):
        self.api_base = config.telegram_api_base.rstrip("/")
        self.bot_token = config.telegram_bot_token
        self.channel_id = config.telegram_channel_id
        self.disable_preview = config.telegram_disable_preview

    @property
    def send_url(self) -> str:
        return f"{self.api_base}/bot{self.bot_token}/sendMessage"

    def build_payload(self, text: str) -> dict:
        """Build the sendMessage request body."""
        return {
            "chat_id": self.channel_id,
            "text": text,
            "parse_mode": PARSE_MODE,
            "disable_web_page_preview": self.disable_preview,
        }

    async def publish(self, text: str) -> int:
        """Send the report as a single channel message.

        Args:
            text: Final report text (HTML parse mode)

        Returns:
            Telegram message id of the post

        Raises:
            UpstreamError: On a non-success status, carrying the response body
            MalformedResponseError: If a successful reply is not ``ok``
        """
        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.send_url,
                json=self.build_payload(text),
                ssl=create_ssl_context(),
            ) as resp:
                if resp.status >= 300:
                    body = await resp.text()
                    logger.warning(
                        "Telegram send failed | status=%d chat=%s", resp.status, self.channel_id
                    )
                    raise UpstreamError(SERVICE_NAME, resp.status, detail=body)
                try:
                    data = await resp.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponseError(SERVICE_NAME, "response body is not JSON") from e

        if not isinstance(data, dict) or not data.get("ok"):
            raise MalformedResponseError(SERVICE_NAME, "response is not marked ok")
        message_id = (data.get("result") or {}).get("message_id")
        logger.info(
            "Report sent | chat=%s message_id=%s chars=%d", self.channel_id, message_id, len(text)
        )
        return message_id
