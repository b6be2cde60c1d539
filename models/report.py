"""Report record model persisted once per pipeline run.

The record bundles the raw collector output, the summary, and the final
formatted report. Long text fields are cut to fixed limits at build time,
which happens immediately before the document store call.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

REPORT_TOPIC = "Internet in Iran"
PUBLISHED_STATUS = "published"

MAX_RAW_DATA_CHARS = 10000
MAX_ANALYSIS_CHARS = 5000


class ReportRecord(BaseModel):
    """Document stored in the report collection.

    Attributes:
        topic: Fixed topic label for every record
        raw_data: Collector output, at most MAX_RAW_DATA_CHARS characters
        analysis: Summarizer output, at most MAX_ANALYSIS_CHARS characters
        final_report: The exact text published to the channel
        created_at: ISO-8601 UTC creation timestamp
        status: Always 'published'

    Example:
        >>> record = ReportRecord.build(raw, summary, report)
        >>> doc_id = await store.create_document(record.to_document())
    """

    topic: str = Field(default=REPORT_TOPIC, description="Report topic")
    raw_data: str = Field(description="Raw collected findings (truncated)")
    analysis: str = Field(description="Model summary (truncated)")
    final_report: str = Field(description="Formatted report as published")
    created_at: str = Field(description="ISO-8601 creation timestamp")
    status: str = Field(default=PUBLISHED_STATUS, description="Record status")

    @classmethod
    def build(
        cls,
        raw_data: str,
        analysis: str,
        final_report: str,
        created_at: datetime | None = None,
    ) -> "ReportRecord":
        """Create a record, applying the storage length limits.

        Args:
            raw_data: Full collector output
            analysis: Full summarizer output
            final_report: Formatted report text (stored as-is)
            created_at: Creation time (defaults to now, UTC)

        Returns:
            ReportRecord ready for persistence
        """
        created_at = created_at or datetime.now(timezone.utc)
        return cls(
            raw_data=raw_data[:MAX_RAW_DATA_CHARS],
            analysis=analysis[:MAX_ANALYSIS_CHARS],
            final_report=final_report,
            created_at=created_at.isoformat(),
        )

    def to_document(self) -> dict[str, Any]:
        """Field map sent to the document store."""
        return self.model_dump()
