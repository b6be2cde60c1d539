"""Run state machine and result models.

A run moves through the stages in a fixed order and ends in exactly one
terminal state:

    idle → collecting → summarizing → formatting → persisting → publishing → succeeded
      └──────────────────────────────── any ───────────────────────────────→ failed

RunResult is what callers see. ``to_response()`` gives the JSON body
returned by the function entry point.
"""

import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class RunState(str, Enum):
    """Pipeline states, in execution order."""

    IDLE = "idle"
    COLLECTING = "collecting"
    SUMMARIZING = "summarizing"
    FORMATTING = "formatting"
    PERSISTING = "persisting"
    PUBLISHING = "publishing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.SUCCEEDED, RunState.FAILED)


SUCCESS_MESSAGES = {
    "fa": "✅ گزارش با موفقیت تولید و ارسال شد",
    "en": "✅ Report generated and published successfully",
}


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RunResult(BaseModel):
    """Outcome of a single pipeline run.

    Attributes:
        success: True only when the run reached SUCCEEDED
        state: Terminal state of the run
        failed_stage: Stage that raised, for failed runs
        message: Localized confirmation text (success only)
        document_id: Store-assigned id of the persisted record (success only)
        error: Error message (failure only)
        trace: Formatted traceback of the error (failure only, diagnostics)
        timestamp: ISO-8601 completion timestamp
        run_id: Short id correlating log lines of this run
        duration: Run time in seconds
    """

    success: bool
    state: RunState
    failed_stage: RunState | None = None
    message: str = ""
    document_id: str | None = None
    error: str | None = None
    trace: str | None = None
    timestamp: str = Field(default_factory=_utc_now_iso)
    run_id: str = ""
    duration: float = 0.0

    @classmethod
    def succeeded(
        cls,
        document_id: str,
        language: str = "fa",
        run_id: str = "",
        duration: float = 0.0,
    ) -> "RunResult":
        """Create a success result carrying the persisted document id."""
        return cls(
            success=True,
            state=RunState.SUCCEEDED,
            message=SUCCESS_MESSAGES.get(language, SUCCESS_MESSAGES["en"]),
            document_id=document_id,
            run_id=run_id,
            duration=round(duration, 2),
        )

    @classmethod
    def failed(
        cls,
        error: BaseException,
        stage: RunState,
        run_id: str = "",
        duration: float = 0.0,
    ) -> "RunResult":
        """Create a failure result from the exception that aborted the run."""
        return cls(
            success=False,
            state=RunState.FAILED,
            failed_stage=stage,
            error=str(error) or type(error).__name__,
            trace="".join(traceback.format_exception(type(error), error, error.__traceback__)),
            run_id=run_id,
            duration=round(duration, 2),
        )

    @property
    def status_code(self) -> int:
        """HTTP status for the function response."""
        return 200 if self.success else 500

    def to_response(self) -> dict[str, Any]:
        """Build the JSON body returned to the caller."""
        if self.success:
            return {
                "success": True,
                "message": self.message,
                "document_id": self.document_id,
                "timestamp": self.timestamp,
            }
        return {
            "success": False,
            "error": self.error,
            "timestamp": self.timestamp,
        }
