"""Pydantic models for the Netpulse report pipeline.

ReportRecord:
    Persisted document: raw findings, summary, final report, timestamps.
    ReportRecord.build() applies the storage length limits.

RunState:
    Enum of pipeline states (idle → … → succeeded | failed).

RunResult:
    Outcome of one run; to_response() yields the caller-facing JSON body.

Example:
    >>> from models import ReportRecord, RunResult
    >>> record = ReportRecord.build(raw_data="...", analysis="...", final_report="...")
    >>> RunResult.succeeded(document_id="doc123").to_response()["success"]
    True
"""

from models.report import (
    MAX_ANALYSIS_CHARS,
    MAX_RAW_DATA_CHARS,
    REPORT_TOPIC,
    ReportRecord,
)
from models.run import RunResult, RunState

__all__ = [
    "ReportRecord",
    "RunResult",
    "RunState",
    "REPORT_TOPIC",
    "MAX_RAW_DATA_CHARS",
    "MAX_ANALYSIS_CHARS",
]
