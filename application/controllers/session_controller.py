"""Controller owning the conversation state for one front-end session."""

import asyncio
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Set

from domain.entities import (
    BotMessage,
    DatasetFile,
    ErrorMessage,
    Message,
    Session,
    SessionSnapshot,
    SystemMessage,
    UserMessage,
    preview_rows,
)
from domain.services import (
    AnalysisResult,
    AnalyticsService,
    AnalyticsServiceError,
    ExportSink,
    ServiceError,
)
from infrastructure.logging import get_logger

logger = get_logger(__name__)

UPLOAD_FAILED = "Failed to upload file"
QUERY_FAILED = "Failed to process query"
LOCATION_PREVIEW_LIMIT = 5

SessionListener = Callable[[SessionSnapshot], None]


def error_text(error: AnalyticsServiceError, fallback: str) -> str:
    """Build the timeline text for a failed operation."""
    if isinstance(error, ServiceError) and error.message:
        return f"Error: {error.message}"
    return f"Error: {fallback}"


def upload_confirmation(message: str, locations: Sequence[str]) -> str:
    preview = ", ".join(locations[:LOCATION_PREVIEW_LIMIT])
    return f"{message}. Available locations: {preview}..."


def bot_message_from(result: AnalysisResult) -> BotMessage:
    """Shape an analysis response into the message appended to the timeline."""
    table_full = tuple(result.table_data) if result.table_data is not None else None
    return BotMessage(
        summary=result.summary,
        chart_series=tuple(result.chart_data) if result.chart_data is not None else None,
        table_preview=preview_rows(table_full),
        table_full=table_full,
        locations_for_export=(
            tuple(result.locations) if result.locations is not None else None
        ),
    )


class SessionController:
    """Single owner of :class:`Session` state.

    Upload and query share one in-flight slot guarded by ``session.busy``; the
    flag is checked before the first ``await`` so a second request issued
    while one is pending is dropped. Exports bypass the slot and never touch
    the session.
    """

    def __init__(
        self,
        service: AnalyticsService,
        export_sink: ExportSink,
        session: Optional[Session] = None,
    ) -> None:
        self.session = session or Session()
        self._service = service
        self._export_sink = export_sink
        self._listeners: List[SessionListener] = []
        self._export_tasks: Set["asyncio.Task[Optional[Path]]"] = set()

    # Observation -----------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        return self.session.snapshot()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.session.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _append(self, message: Message) -> None:
        self.session.append(message)
        self._notify()

    def _set_busy(self, busy: bool) -> None:
        self.session.busy = busy
        self._notify()

    # Operations ------------------------------------------------------------

    def set_pending_input(self, text: str) -> None:
        self.session.pending_input = text
        self._notify()

    def can_submit(self) -> bool:
        session = self.session
        return bool(session.pending_input.strip()) and session.dataset_loaded and not session.busy

    async def ingest_dataset(self, dataset: DatasetFile) -> bool:
        """Upload ``dataset``. Returns False when dropped because of a pending operation."""
        if self.session.busy:
            logger.debug("Upload ignored: another operation is in flight")
            return False

        self._set_busy(True)
        logger.info(f"Uploading dataset {dataset.filename} ({len(dataset.content)} bytes)")
        try:
            try:
                result = await self._service.ingest(dataset)
            except AnalyticsServiceError as e:
                logger.warning(f"Upload of {dataset.filename} failed: {e}")
                self._append(ErrorMessage(error_text(e, UPLOAD_FAILED)))
                return True

            locations = tuple(result.locations or ())
            self.session.dataset_loaded = True
            self.session.known_locations = locations
            logger.info(f"Dataset loaded with {len(locations)} locations")
            self._append(SystemMessage(upload_confirmation(result.message, locations)))
            return True
        finally:
            self._set_busy(False)

    async def submit_query(self, text: Optional[str] = None) -> bool:
        """Submit the pending input, or ``text`` when given.

        Returns False without side effects when the input is blank, no
        dataset is loaded, or another operation is in flight.
        """
        if text is not None:
            self.set_pending_input(text)
        if not self.can_submit():
            logger.debug("Query submission ignored: session not ready")
            return False

        query = self.session.pending_input
        self.session.append(UserMessage(query))
        self.session.busy = True
        self.session.pending_input = ""
        self._notify()

        logger.info(f"Submitting query: {query!r}")
        try:
            try:
                result = await self._service.analyze(query)
            except AnalyticsServiceError as e:
                logger.warning(f"Query {query!r} failed: {e}")
                self._append(ErrorMessage(error_text(e, QUERY_FAILED)))
                return True

            message = bot_message_from(result)
            logger.info(
                f"Query answered with {message.record_count} rows "
                f"and {len(message.chart_series or ())} chart points"
            )
            self._append(message)
            return True
        finally:
            self._set_busy(False)

    async def request_export(self, locations: Optional[Sequence[str]]) -> Optional[Path]:
        """Export CSV for ``locations`` and save it through the export sink.

        Failures are logged and reported as ``None``; the conversation is
        never affected.
        """
        filter_locations = list(locations or [])
        try:
            result = await self._service.export(filter_locations)
            path = self._export_sink.save(result.filename, result.csv_data)
        except (AnalyticsServiceError, OSError, ValueError) as e:
            logger.warning(
                f"Export failed: {e}",
                extra={"event": "export_failed", "locations": filter_locations},
            )
            return None

        logger.info(f"Exported {len(filter_locations)} locations to {path}")
        return path

    def start_export(self, locations: Optional[Sequence[str]]) -> "asyncio.Task[Optional[Path]]":
        """Run :meth:`request_export` in the background and return its task."""
        task = asyncio.get_running_loop().create_task(self.request_export(locations))
        self._export_tasks.add(task)
        task.add_done_callback(self._export_tasks.discard)
        return task

    async def wait_for_exports(self) -> None:
        if self._export_tasks:
            await asyncio.gather(*self._export_tasks, return_exceptions=True)

    async def aclose(self) -> None:
        await self.wait_for_exports()
        await self._service.aclose()
