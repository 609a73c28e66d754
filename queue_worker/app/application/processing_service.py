from __future__ import annotations

from loguru import logger

from queue_worker.app.core.prefixed_logger import MessageIdPrefixedLogger
from queue_worker.app.domain.errors import ProcessingError
from queue_worker.app.domain.models import ProcessingResult, QueueMessage
from queue_worker.app.domain.processing_context import ProcessingContext
from queue_worker.app.domain.processor_config import QueueProcessorConfig
from queue_worker.app.ports.cleanup import Cleanup
from queue_worker.app.ports.error_reporter import ErrorReporter
from queue_worker.app.ports.message_handler import MessageHandler
from queue_worker.app.ports.message_source import MessageSource
from queue_worker.app.ports.message_status_store import MessageStatusStore


class ProcessingService:
    """
    Drives one message through the idempotent processing lifecycle.

    Order of checks: processed (delete, skip) -> in-progress marker (skip, leave
    in queue) -> handler. A success marks the message processed and deletes it,
    keeping the in-progress marker so a late redelivery cannot be reprocessed;
    failure/delayed results leave the message for redelivery, optionally with a
    new visibility timeout, and release the marker.

    Store and delete failures are reported and contained. An exception raised by
    the handler is reported, treated as a failure result, the cleanup hook runs
    and the marker is released, and then the exception is re-raised so the
    worker stops. Any other exception runs the cleanup hook and propagates.
    """

    def __init__(
        self,
        config: QueueProcessorConfig,
        status_store: MessageStatusStore,
        message_source: MessageSource,
        handler: MessageHandler,
        error_reporter: ErrorReporter,
        cleanup: Cleanup,
        *,
        logger: MessageIdPrefixedLogger | None = None,
    ) -> None:
        self._config = config
        self._status_store = status_store
        self._message_source = message_source
        self._handler = handler
        self._error_reporter = error_reporter
        self._cleanup = cleanup
        self._logger = logger or MessageIdPrefixedLogger()

    async def process_message(self, message: QueueMessage) -> None:
        ctx = ProcessingContext(message=message, logger=self._logger.for_message(message.message_id))
        handler_exc: BaseException | None = None
        try:
            if self._config.log_message_start:
                ctx.logger.info("Started processing message.")

            if await self._status_store.is_processed(ctx.message_id):
                ctx.logger.info("Message already processed.")
                self._report(ProcessingError.ALREADY_COMPLETED, ctx)
                await self._delete(ctx)
                return

            if not await self._status_store.mark_in_progress(ctx.message_id):
                ctx.logger.info("Message already being processed.")
                self._report(ProcessingError.ALREADY_IN_PROGRESS, ctx)
                return
            ctx.release_in_progress_lock = True

            try:
                result = await self._handler.process(message)
            except BaseException as exc:
                handler_exc = exc
                ctx.logger.exception("Exception thrown handling message.", exc)
                self._report(ProcessingError.HANDLER_EXCEPTION, ctx, exc)
                result = ProcessingResult.failure()
                await self._cleanup.clean_up_after_exception()

            await self._apply_result(ctx, result)
        except BaseException:
            # The handler branch has already run the cleanup hook.
            if handler_exc is None:
                await self._cleanup.clean_up_after_exception()
            raise
        finally:
            await self._finalize(ctx)

        if handler_exc is not None:
            raise handler_exc

    async def _apply_result(self, ctx: ProcessingContext, result: ProcessingResult) -> None:
        if result.was_successful:
            # Completed: keep the marker, the processed flag now guards the message.
            ctx.release_in_progress_lock = False
            if not await self._status_store.mark_processed(ctx.message_id):
                ctx.logger.error("Failed to mark message as processed.")
                self._report(ProcessingError.FAILED_TO_MARK_PROCESSED, ctx)
            await self._delete(ctx)
            return

        receipt_handle_msg = f"Receipt handle: {ctx.message.receipt_handle}"
        if result.was_unsuccessful_due_to_error:
            ctx.logger.error(receipt_handle_msg)
        else:
            ctx.logger.info(receipt_handle_msg)

        if result.new_visibility_timeout is not None:
            await self._message_source.extend_visibility(ctx.message, result.new_visibility_timeout)

    async def _delete(self, ctx: ProcessingContext) -> None:
        try:
            await self._message_source.delete(ctx.message)
        except Exception as exc:
            ctx.logger.error("Failed to delete processed SQS message.")
            self._report(ProcessingError.FAILED_TO_DELETE, ctx, exc)

    async def _finalize(self, ctx: ProcessingContext) -> None:
        if ctx.release_in_progress_lock:
            exc: Exception | None = None
            try:
                cleared = await self._status_store.clear_in_progress(ctx.message_id)
            except Exception as e:
                cleared, exc = False, e
            if not cleared:
                ctx.logger.error("Failed to clear message in-progress flag.")
                self._report(ProcessingError.FAILED_TO_CLEAR_IN_PROGRESS, ctx, exc)
            ctx.release_in_progress_lock = False

        if self._config.log_message_end:
            ctx.logger.info("Done processing message.")

    def _report(
        self,
        error: ProcessingError,
        ctx: ProcessingContext,
        exc: BaseException | None = None,
    ) -> None:
        try:
            self._error_reporter.report(error, ctx.message, exc, ctx.logger)
        except Exception as report_exc:
            logger.exception("error reporter failed for {}: {}", error.name, report_exc)
