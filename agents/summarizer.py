"""Summarizer agent that condenses raw findings into a channel-ready report."""

import logging
from dataclasses import dataclass

import httpx

from openai import AsyncOpenAI
from pydantic_ai import Agent, RunContext
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from config import Config
from errors import MalformedResponseError, UpstreamError

logger = logging.getLogger(__name__)

SERVICE_NAME = "OpenAI"

SUMMARY_TEMPERATURE = 0.3
SUMMARY_MAX_TOKENS = 1500
KEY_TAKEAWAYS = 5


SUMMARIZER_PROMPTS = {
    "fa": (
        "You are a professional data analyst. Create concise, actionable reports "
        "in Persian suitable for Telegram channels."
    ),
    "en": (
        "You are a professional data analyst. Create concise, actionable reports "
        "in English suitable for Telegram channels."
    ),
}

USER_TEMPLATES = {
    "fa": """
تحلیل داده‌های زیر و تولید:
1️⃣ {takeaways} نکته کلیدی (به فارسی)
2️⃣ گزارش خلاصه برای تلگرام
3️⃣ آمار و ارقام مهم

داده‌ها:
{raw}

خروجی باید کاملاً فارسی و مناسب کانال تلگرام باشد.
""",
    "en": """
Analyze the data below and produce:
1️⃣ {takeaways} key takeaways (in English)
2️⃣ A condensed report for Telegram
3️⃣ Key statistics and figures

Data:
{raw}

The output must be entirely in English and suitable for a Telegram channel.
""",
}


@dataclass
class SummarizerContext:
    """Runtime context passed to the summarizer agent.

    Attributes:
        language: Output language ('fa' or 'en')
    """

    language: str = "fa"


def build_user_message(raw_findings: str, language: str = "fa") -> str:
    """Embed the raw findings verbatim into the summary request."""
    template = USER_TEMPLATES.get(language, USER_TEMPLATES["en"])
    return template.format(takeaways=KEY_TAKEAWAYS, raw=raw_findings)


def _create_model(config: Config, http_client: httpx.AsyncClient | None = None) -> Model:
    """Create the OpenAI chat model with client-side retries disabled."""
    client = AsyncOpenAI(
        api_key=config.openai_api_key,
        base_url=config.openai_base_url,
        max_retries=0,
        http_client=http_client,
    )
    return OpenAIChatModel(
        config.summary_model,
        provider=OpenAIProvider(openai_client=client),
    )


def _create_agent(model: Model | str) -> Agent[SummarizerContext, str]:
    """Create the underlying PydanticAI agent for summarization.

    The system prompt is chosen per run from the language in the context,
    so each request carries exactly one system and one user message.
    """
    agent = Agent(
        model,
        deps_type=SummarizerContext,
        output_type=str,
        retries=0,
        model_settings={
            "temperature": SUMMARY_TEMPERATURE,
            "max_tokens": SUMMARY_MAX_TOKENS,
        },
    )

    @agent.system_prompt
    def dynamic_prompt(ctx: RunContext[SummarizerContext]) -> str:
        """Select system prompt based on language setting."""
        return SUMMARIZER_PROMPTS.get(ctx.deps.language, SUMMARIZER_PROMPTS["en"])

    return agent


class SummarizerAgent:
    """Turns raw findings into a structured multi-part summary.

    Example:
        >>> summarizer = SummarizerAgent(config)
        >>> summary = await summarizer.summarize(raw_findings)
    """

    def __init__(
        self,
        config: Config,
        model: Model | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the summarizer agent.

        Args:
            config: Application configuration with model and language settings
            model: Optional model override (tests pass a FunctionModel)
            http_client: Optional transport for the default OpenAI model
        """
        self.config = config
        self._agent = _create_agent(model or _create_model(config, http_client))
        self._context = SummarizerContext(language=config.language)

    async def summarize(self, raw_findings: str) -> str:
        """Summarize raw findings.

        Args:
            raw_findings: Collector output, embedded verbatim in the prompt

        Returns:
            Summary text in the configured language

        Raises:
            UpstreamError: On a non-success HTTP status
            MalformedResponseError: If the completion has no usable text
        """
        message = build_user_message(raw_findings, language=self._context.language)
        try:
            result = await self._agent.run(message, deps=self._context)
        except ModelHTTPError as e:
            raise UpstreamError(SERVICE_NAME, e.status_code) from e
        except UnexpectedModelBehavior as e:
            raise MalformedResponseError(SERVICE_NAME, e.message) from e
        except IndexError as e:
            # The OpenAI model reads choices[0] without checking the list first.
            raise MalformedResponseError(SERVICE_NAME, "response contains no choices") from e

        summary = result.output
        if not summary or not summary.strip():
            raise MalformedResponseError(SERVICE_NAME, "completion contains no text")

        logger.info(
            "Analysis completed | model=%s chars=%d",
            self.config.summary_model,
            len(summary),
        )
        return summary
