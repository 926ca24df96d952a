"""HTTP implementation of :class:`AnalyticsService` built on ``httpx``."""

from typing import Any, Dict, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from domain.entities import DatasetFile
from domain.services import (
    AnalysisResult,
    AnalyticsService,
    ExportResult,
    IngestResult,
    ServiceError,
    TransportFailure,
)
from infrastructure.config import ServiceConfig
from infrastructure.logging import get_logger

T = TypeVar("T", bound=BaseModel)

logger = get_logger(__name__)


def _error_text(body: Any) -> Optional[str]:
    """Pull the service-provided error string out of a response body."""
    if not isinstance(body, dict):
        return None
    # The Django backend reports validation problems under ``detail``
    error = body.get("error") or body.get("detail")
    if error is None:
        return None
    return str(error)


class HttpAnalyticsService(AnalyticsService):
    """Client for the real-estate analytics REST API."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config or ServiceConfig()
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.request_timeout,
            transport=transport,
        )
        logger.info(f"Analytics client targeting {self.config.base_url}")

    async def ingest(self, dataset: DatasetFile) -> IngestResult:
        files = {"file": (dataset.filename, dataset.content, dataset.content_type)}
        body = await self._post(
            "ingest",
            self.config.upload_path,
            files=files,
            timeout=self.config.upload_timeout,
        )
        return self._parse(IngestResult, body, "ingest")

    async def analyze(self, query: str) -> AnalysisResult:
        body = await self._post("analyze", self.config.analyze_path, json={"query": query})
        return self._parse(AnalysisResult, body, "analyze")

    async def export(self, locations: Sequence[str]) -> ExportResult:
        body = await self._post(
            "export", self.config.export_path, json={"locations": list(locations)}
        )
        return self._parse(ExportResult, body, "export")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, operation: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = await self._client.post(path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"{operation} request timed out")
            raise TransportFailure(f"{operation} request timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"{operation} request failed: {e}")
            raise TransportFailure(f"{operation} request failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        error = _error_text(body)
        if error is not None:
            logger.info(f"{operation} rejected by service ({response.status_code}): {error}")
            raise ServiceError(error, status_code=response.status_code)

        if not response.is_success:
            raise TransportFailure(
                f"{operation} failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if not isinstance(body, dict):
            raise TransportFailure(
                f"{operation} returned a non-JSON body", status_code=response.status_code
            )
        return body

    @staticmethod
    def _parse(model: Type[T], body: Dict[str, Any], operation: str) -> T:
        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise TransportFailure(f"{operation} returned an unexpected body: {e}") from e
