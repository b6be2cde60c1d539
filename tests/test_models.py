from datetime import datetime, timezone

from models.report import MAX_ANALYSIS_CHARS, MAX_RAW_DATA_CHARS, ReportRecord
from models.run import SUCCESS_MESSAGES, RunResult, RunState


def test_record_truncates_long_fields_only() -> None:
    record = ReportRecord.build(
        "r" * 12000,
        "a" * 6000,
        "f" * 7000,
        created_at=datetime(2024, 4, 1, 5, 35, tzinfo=timezone.utc),
    )

    document = record.to_document()
    assert len(document["raw_data"]) == MAX_RAW_DATA_CHARS
    assert len(document["analysis"]) == MAX_ANALYSIS_CHARS
    assert len(document["final_report"]) == 7000
    assert document["topic"] == "Internet in Iran"
    assert document["status"] == "published"
    assert document["created_at"] == "2024-04-01T05:35:00+00:00"


def test_short_fields_are_stored_unchanged() -> None:
    document = ReportRecord.build("X", "Y", "report").to_document()

    assert (document["raw_data"], document["analysis"]) == ("X", "Y")


def test_success_response_shape() -> None:
    result = RunResult.succeeded("doc123", language="fa")

    assert result.state.is_terminal
    assert result.status_code == 200
    body = result.to_response()
    assert set(body) == {"success", "message", "document_id", "timestamp"}
    assert body["message"] == SUCCESS_MESSAGES["fa"]
    assert body["document_id"] == "doc123"


def test_failure_response_hides_traceback() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        result = RunResult.failed(e, RunState.PUBLISHING)

    assert result.status_code == 500
    assert result.failed_stage is RunState.PUBLISHING
    assert "Traceback" in result.trace
    assert result.to_response() == {
        "success": False,
        "error": "boom",
        "timestamp": result.timestamp,
    }


def test_failure_without_message_uses_exception_name() -> None:
    assert RunResult.failed(TimeoutError(), RunState.COLLECTING).error == "TimeoutError"


def test_only_outcomes_are_terminal() -> None:
    terminal = {state for state in RunState if state.is_terminal}

    assert terminal == {RunState.SUCCEEDED, RunState.FAILED}
