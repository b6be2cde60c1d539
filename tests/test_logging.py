import json
import logging

from observability.logging import (
    JsonFormatter,
    attach_callbacks,
    clear_context,
    set_run_context,
    setup_logging,
)


def test_callbacks_split_by_level() -> None:
    logs: list[str] = []
    errors: list[str] = []
    logger = logging.getLogger("netpulse.test")
    logger.setLevel(logging.INFO)

    with attach_callbacks(logs.append, errors.append):
        logger.info("saving")
        logger.error("failed")
    logger.info("after detach")

    assert logs == ["saving"]
    assert errors == ["failed"]


def test_error_callback_receives_traceback() -> None:
    errors: list[str] = []
    logger = logging.getLogger("netpulse.test")
    logger.setLevel(logging.INFO)

    with attach_callbacks(lambda message: None, errors.append):
        try:
            raise ValueError("bad payload")
        except ValueError:
            logger.error("❌ Error: bad payload", exc_info=True)

    assert errors[0].startswith("❌ Error: bad payload")
    assert "Traceback" in errors[0]
    assert "ValueError: bad payload" in errors[0]


def test_json_formatter_includes_run_id_and_extras() -> None:
    record = logging.LogRecord("pipeline", logging.INFO, __file__, 1, "stored %s", ("doc1",), None)
    record.run_id = "abc12345"
    record.document_id = "doc1"

    data = json.loads(JsonFormatter().format(record))

    assert data["message"] == "stored doc1"
    assert data["run_id"] == "abc12345"
    assert data["document_id"] == "doc1"
    assert "source" not in data


def test_setup_logging_writes_file_with_run_id(config) -> None:
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        assert setup_logging(config) is True
        set_run_context("run42")
        logging.getLogger("pipeline").info("hello")
        clear_context()
        for handler in root.handlers:
            handler.flush()

        content = (config.log_dir / "netpulse.log").read_text(encoding="utf-8")
        assert "[run42] pipeline: hello" in content
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved[0]:
            root.addHandler(handler)
        root.setLevel(saved[1])
