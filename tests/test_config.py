import pytest

from config import DEFAULT_APPWRITE_ENDPOINT, Config


def test_load_reads_credentials_from_environment(env) -> None:
    config = Config.load()

    assert config.perplexity_api_key == "pplx-test"
    assert config.appwrite_collection_id == "reports"
    assert config.telegram_channel_id == "@netpulse"
    assert config.validate() is None


def test_endpoint_defaults_when_unset_or_blank(env) -> None:
    assert Config.load().appwrite_endpoint == DEFAULT_APPWRITE_ENDPOINT

    env.setenv("APPWRITE_ENDPOINT", "")
    assert Config.load().appwrite_endpoint == DEFAULT_APPWRITE_ENDPOINT

    env.setenv("APPWRITE_ENDPOINT", "https://appwrite.example.com/v1")
    assert Config.load().appwrite_endpoint == "https://appwrite.example.com/v1"


def test_missing_credentials_are_reported(env) -> None:
    env.delenv("OPENAI_API_KEY")
    env.delenv("TELEGRAM_BOT_TOKEN")

    error = Config.load().validate()

    assert error == "Missing required environment variables: OPENAI_API_KEY, TELEGRAM_BOT_TOKEN"


def test_invalid_language_and_timezone(env) -> None:
    env.setenv("LANGUAGE", "de")
    assert "Invalid LANGUAGE" in Config.load().validate()

    env.setenv("LANGUAGE", "EN")
    env.setenv("REPORT_TIMEZONE", "Mars/Olympus")
    config = Config.load()
    assert config.language == "en"
    assert "Invalid REPORT_TIMEZONE" in config.validate()


def test_bad_integer_raises(env) -> None:
    env.setenv("POLL_INTERVAL_SECONDS", "soon")

    with pytest.raises(ValueError, match="POLL_INTERVAL_SECONDS"):
        Config.load()


def test_preview_flag_parsing(env) -> None:
    env.setenv("TELEGRAM_DISABLE_PREVIEW", "yes")

    assert Config.load().telegram_disable_preview is True


def test_redacted_masks_secrets(config) -> None:
    view = config.redacted()

    assert view["collector"]["api_key"] == "pplx***"
    assert view["publisher"]["bot_token"] == "***"
    assert view["store"]["collection_id"] == "reports"
