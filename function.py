"""Serverless function entry point for scheduled executions.

The hosting runtime (e.g. an Appwrite Function on a cron schedule) calls
``main(context)`` where ``context`` exposes:

    context.log(msg)              informational log callback
    context.error(msg)            error log callback
    context.res.json(body, code)  JSON response builder

Pipeline log records are forwarded to those callbacks for the duration of
the call; a failed run's traceback reaches ``context.error`` with its
error record. The caller always receives a JSON object with a ``success`` flag;
failures additionally carry HTTP status 500.
"""

import asyncio
import logging
from typing import Any

from config import Config
from models.run import RunResult, RunState
from observability.logging import attach_callbacks
from pipeline import ReportPipeline

logger = logging.getLogger(__name__)


async def execute(config: Config) -> RunResult:
    """Validate configuration and run the pipeline once."""
    error = config.validate()
    if error:
        logger.error("❌ Configuration error: %s", error)
        return RunResult.failed(ValueError(error), RunState.IDLE)
    return await ReportPipeline.from_config(config).run_once()


def main(context: Any) -> Any:
    """Handle one scheduled invocation.

    Args:
        context: Runtime context with log/error callbacks and a response builder

    Returns:
        Whatever ``context.res.json`` returns for the result body
    """
    try:
        config = Config.load()
    except ValueError as e:
        with attach_callbacks(context.log, context.error):
            logger.error("❌ Configuration error: %s", e)
        result = RunResult.failed(e, RunState.IDLE)
        return context.res.json(result.to_response(), result.status_code)

    logging.getLogger().setLevel(getattr(logging, config.log_level, logging.INFO))

    with attach_callbacks(context.log, context.error):
        result = asyncio.run(execute(config))

    if result.success:
        return context.res.json(result.to_response())
    return context.res.json(result.to_response(), result.status_code)
