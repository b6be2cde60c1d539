"""Collector agent that gathers raw findings from Perplexity.

Perplexity exposes an OpenAI-compatible chat completions endpoint with live
web search, so the collector talks to it through ``openai.AsyncOpenAI``
pointed at the Perplexity base URL.

One request per run:
    - Fixed system persona (data collector)
    - Fixed user query about the report topic
    - temperature=0.2, max_tokens=2000
    - No client-side retries
"""

import logging

import openai
from openai import AsyncOpenAI

from config import Config
from errors import MalformedResponseError, UpstreamError

logger = logging.getLogger(__name__)

SERVICE_NAME = "Perplexity"

COLLECTOR_SYSTEM_PROMPT = (
    "You are a data collector specializing in internet infrastructure and statistics."
)
COLLECTOR_QUERY = (
    "Collect the latest factual data about internet situation in Iran "
    "with statistics, sources, and recent developments."
)

COLLECTOR_TEMPERATURE = 0.2
COLLECTOR_MAX_TOKENS = 2000


def first_choice_content(response: object, service: str) -> str:
    """Extract the first choice's message text from a chat completion.

    Args:
        response: Parsed chat completion object
        service: API name used in the error message

    Returns:
        The message content

    Raises:
        MalformedResponseError: If there is no choice or no text content
    """
    choices = getattr(response, "choices", None)
    if not choices:
        raise MalformedResponseError(service, "response contains no choices")
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not content:
        raise MalformedResponseError(service, "first choice has no message content")
    return content


class CollectorAgent:
    """Collects current factual text about the report topic.

    Example:
        >>> collector = CollectorAgent(config)
        >>> raw = await collector.collect()
    """

    def __init__(self, config: Config, client: AsyncOpenAI | None = None):
        """Initialize the collector.

        Args:
            config: Application configuration with Perplexity settings
            client: Optional pre-built client (tests inject a mock transport)
        """
        self.config = config
        self.model = config.collector_model
        self._client = client or AsyncOpenAI(
            api_key=config.perplexity_api_key,
            base_url=config.perplexity_base_url,
            max_retries=0,
        )

    async def collect(self) -> str:
        """Run the collection query.

        Returns:
            Raw findings text

        Raises:
            UpstreamError: On a non-success HTTP status
            MalformedResponseError: If the reply carries no text
        """
        try:
            resp = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": COLLECTOR_SYSTEM_PROMPT},
                    {"role": "user", "content": COLLECTOR_QUERY},
                ],
                temperature=COLLECTOR_TEMPERATURE,
                max_tokens=COLLECTOR_MAX_TOKENS,
            )
        except openai.APIStatusError as e:
            raise UpstreamError(SERVICE_NAME, e.status_code) from e

        content = first_choice_content(resp, SERVICE_NAME)
        usage = getattr(resp, "usage", None)
        logger.info(
            "Data collected | model=%s chars=%d tokens=%s",
            self.model,
            len(content),
            getattr(usage, "total_tokens", "-"),
        )
        return content
