"""Helpers running controller operations behind a loading indicator."""

from domain.entities import DatasetFile
from application.controllers import SessionController

UPLOAD_STATUS = "📤 Uploading and indexing your spreadsheet..."
QUERY_STATUS = "🔍 Analyzing your question..."


async def upload_with_status(
    console, controller: SessionController, dataset: DatasetFile
) -> bool:
    """Upload ``dataset`` while showing a spinner."""
    with console.status(UPLOAD_STATUS, spinner="dots"):
        return await controller.ingest_dataset(dataset)


async def query_with_status(console, controller: SessionController, text: str) -> bool:
    """Submit ``text`` as a query while showing a spinner."""
    controller.set_pending_input(text)
    if not controller.can_submit():
        return await controller.submit_query()
    with console.status(QUERY_STATUS, spinner="dots"):
        return await controller.submit_query()
