import asyncio

import pytest

from errors import MalformedResponseError, UpstreamError
from notifications import TelegramPublisher


def test_publish_posts_html_message_to_channel(config, fake_http) -> None:
    fake_http.respond(200, {"ok": True, "result": {"message_id": 42}})

    message_id = asyncio.run(TelegramPublisher(config).publish("<b>report</b>"))

    assert message_id == 42
    call = fake_http.calls[0]
    assert call["url"] == "https://api.telegram.org/bot123:abc/sendMessage"
    assert call["json"] == {
        "chat_id": "@netpulse",
        "text": "<b>report</b>",
        "parse_mode": "HTML",
        "disable_web_page_preview": False,
    }


def test_link_preview_suppression_is_configurable(config, fake_http) -> None:
    config.telegram_disable_preview = True
    fake_http.respond(200, {"ok": True, "result": {"message_id": 1}})

    asyncio.run(TelegramPublisher(config).publish("text"))

    assert fake_http.calls[0]["json"]["disable_web_page_preview"] is True


def test_error_status_carries_response_body(config, fake_http) -> None:
    body = '{"ok":false,"error_code":400,"description":"Bad Request: message is too long"}'
    fake_http.respond(400, body)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(TelegramPublisher(config).publish("x" * 5000))

    assert exc_info.value.status == 400
    assert str(exc_info.value) == f"Telegram API Error: {body}"


def test_reply_without_ok_flag_is_malformed(config, fake_http) -> None:
    fake_http.respond(200, {"result": {}})

    with pytest.raises(MalformedResponseError):
        asyncio.run(TelegramPublisher(config).publish("text"))
