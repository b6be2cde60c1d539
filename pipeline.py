"""Report pipeline orchestration.

One run executes five stages strictly in order, each awaiting the previous:

    1. COLLECT:   Search provider returns raw findings on the fixed topic
    2. SUMMARIZE: Completion provider condenses them into a channel report
    3. FORMAT:    Header + summary + localized timestamp footer
    4. PERSIST:   One new document in the store (raw/summary truncated here)
    5. PUBLISH:   One message to the channel

The first exception in any stage aborts the run: later stages never start,
the error is logged once with its traceback, and the caller receives a
failed RunResult. Persistence always precedes publication, so a report is
never posted without a stored record. Runs are independent and not
idempotent; two runs produce two documents and two messages.
"""

import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone

from config import Config
from formatting import format_report
from interfaces import CompletionProvider, DocumentStore, MessagePublisher, SearchProvider
from models.report import REPORT_TOPIC, ReportRecord
from models.run import RunResult, RunState
from observability.logging import clear_context, set_run_context
from observability.tracing import PipelineTracer, setup_tracing

logger = logging.getLogger(__name__)


class ReportPipeline:
    """Sequential collect → summarize → format → persist → publish pipeline.

    The four outbound capabilities are injected so tests can substitute
    fakes. Use ``ReportPipeline.from_config`` for the production wiring.

    Example:
        >>> pipeline = ReportPipeline.from_config(config)
        >>> result = await pipeline.run_once()
        >>> result.to_response()
        {'success': True, 'message': '...', 'document_id': '...', 'timestamp': '...'}
    """

    def __init__(
        self,
        config: Config,
        collector: SearchProvider,
        summarizer: CompletionProvider,
        store: DocumentStore,
        publisher: MessagePublisher,
    ):
        self.config = config
        self.collector = collector
        self.summarizer = summarizer
        self.store = store
        self.publisher = publisher
        self.state = RunState.IDLE

    @classmethod
    def from_config(cls, config: Config) -> "ReportPipeline":
        """Build a pipeline wired to Perplexity, OpenAI, Appwrite and Telegram."""
        from agents.collector import CollectorAgent
        from agents.summarizer import SummarizerAgent
        from database import AppwriteStore
        from notifications import TelegramPublisher

        if config.enable_logfire:
            setup_tracing(enabled=True, service_name="netpulse", token=config.logfire_token)

        return cls(
            config,
            collector=CollectorAgent(config),
            summarizer=SummarizerAgent(config),
            store=AppwriteStore(config),
            publisher=TelegramPublisher(config),
        )

    def _enter(self, state: RunState) -> None:
        logger.debug("State transition | %s -> %s", self.state.value, state.value)
        self.state = state

    async def run_once(self) -> RunResult:
        """Execute one complete pipeline run.

        Returns:
            RunResult: succeeded with the stored document id, or failed with
            the first error's message and traceback
        """
        run_id = uuid.uuid4().hex[:8]
        set_run_context(run_id)
        tracer = PipelineTracer()
        start = time.monotonic()
        self.state = RunState.IDLE

        logger.info("🚀 Starting report generation | topic=%s lang=%s", REPORT_TOPIC, self.config.language)

        try:
            with tracer.trace_run(run_id):
                self._enter(RunState.COLLECTING)
                logger.info("📊 Fetching data from search provider...")
                with tracer.trace_stage(RunState.COLLECTING.value):
                    raw_findings = await self.collector.collect()

                self._enter(RunState.SUMMARIZING)
                logger.info("🤖 Analyzing data with language model...")
                with tracer.trace_stage(RunState.SUMMARIZING.value):
                    summary = await self.summarizer.summarize(raw_findings)

                self._enter(RunState.FORMATTING)
                with tracer.trace_stage(RunState.FORMATTING.value):
                    now = datetime.now(timezone.utc)
                    report = format_report(
                        summary,
                        now,
                        language=self.config.language,
                        tz=self.config.timezone,
                    )

                self._enter(RunState.PERSISTING)
                logger.info("💾 Saving to database...")
                with tracer.trace_stage(RunState.PERSISTING.value):
                    record = ReportRecord.build(raw_findings, summary, report, created_at=now)
                    document_id = await self.store.create_document(record.to_document())

                self._enter(RunState.PUBLISHING)
                logger.info("📤 Sending to channel...")
                with tracer.trace_stage(RunState.PUBLISHING.value):
                    await self.publisher.publish(report)

        except asyncio.CancelledError:
            logger.info("Pipeline run cancelled | state=%s", self.state.value)
            clear_context()
            raise
        except Exception as e:
            failed_stage = self.state
            self._enter(RunState.FAILED)
            logger.error("❌ Error: %s | stage=%s", e, failed_stage.value, exc_info=True)
            result = RunResult.failed(
                e, failed_stage, run_id=run_id, duration=time.monotonic() - start
            )
            clear_context()
            return result

        self._enter(RunState.SUCCEEDED)
        result = RunResult.succeeded(
            document_id,
            language=self.config.language,
            run_id=run_id,
            duration=time.monotonic() - start,
        )
        logger.info(
            "✅ Report published | document_id=%s duration=%.1fs stages=%s",
            document_id, result.duration, tracer.get_summary()["stages"],
        )
        clear_context()
        return result

    async def run_continuous(self, interval: int | None = None) -> None:
        """Run the pipeline repeatedly for hosts without an external scheduler.

        Each iteration is an independent run; failures are reported in the
        result and never stop the loop.

        Args:
            interval: Seconds between runs (defaults to POLL_INTERVAL_SECONDS)
        """
        interval = interval or self.config.poll_interval_seconds
        run_count = 0
        failures = 0

        logger.info("Starting continuous mode | interval=%ds", interval)

        try:
            while True:
                run_count += 1
                result = await self.run_once()
                if not result.success:
                    failures += 1
                logger.info(
                    "Run complete | run=%d success=%s total_failures=%d",
                    run_count, result.success, failures,
                )
                await asyncio.sleep(interval)
        except asyncio.CancelledError:
            logger.info("Pipeline stopped | runs=%d failures=%d", run_count, failures)
            raise


async def run_once(config: Config) -> RunResult:
    """Convenience wrapper: build the production pipeline and run it once."""
    return await ReportPipeline.from_config(config).run_once()


async def run_continuous(config: Config, interval: int | None = None) -> None:
    """Convenience wrapper: build the production pipeline and loop forever."""
    await ReportPipeline.from_config(config).run_continuous(interval)
