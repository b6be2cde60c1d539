"""LLM-backed pipeline stages.

CollectorAgent:
    Queries Perplexity (OpenAI-compatible API) for raw findings on the topic.

SummarizerAgent:
    PydanticAI agent over OpenAI that condenses findings into a
    channel-ready report in the configured language.

Example:
    >>> from agents import CollectorAgent, SummarizerAgent
    >>> raw = await CollectorAgent(config).collect()
    >>> summary = await SummarizerAgent(config).summarize(raw)
"""

from agents.collector import CollectorAgent
from agents.summarizer import SummarizerAgent

__all__ = [
    "CollectorAgent",
    "SummarizerAgent",
]
