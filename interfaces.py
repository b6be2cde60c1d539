"""Capability interfaces for the four outbound calls of a pipeline run.

ReportPipeline only talks to these protocols, so tests can hand it fakes
and never touch the network.
"""

from typing import Any, Protocol


class SearchProvider(Protocol):
    """Collects raw factual text about the report topic."""

    async def collect(self) -> str: ...


class CompletionProvider(Protocol):
    """Condenses raw findings into a channel-ready summary."""

    async def summarize(self, raw_findings: str) -> str: ...


class DocumentStore(Protocol):
    """Creates one document and returns its store-assigned id."""

    async def create_document(self, data: dict[str, Any]) -> str: ...


class MessagePublisher(Protocol):
    """Posts a finished report to the messaging channel."""

    async def publish(self, text: str) -> int: ...
