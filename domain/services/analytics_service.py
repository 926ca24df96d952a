from abc import ABC, abstractmethod
from typing import Optional, Sequence

from domain.entities import DatasetFile

from .analytics_models import AnalysisResult, ExportResult, IngestResult


class AnalyticsServiceError(Exception):
    """Base class for failures talking to the analytics service."""


class TransportFailure(AnalyticsServiceError):
    """The service was unreachable, timed out, or answered without a usable body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServiceError(AnalyticsServiceError):
    """The service rejected the request with a structured error body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AnalyticsService(ABC):
    """Interface for the remote service that owns the uploaded dataset."""

    @abstractmethod
    async def ingest(self, dataset: DatasetFile) -> IngestResult:
        """Upload a spreadsheet, replacing any dataset held server-side."""
        raise NotImplementedError

    @abstractmethod
    async def analyze(self, query: str) -> AnalysisResult:
        """Run a natural-language query against the current dataset."""
        raise NotImplementedError

    @abstractmethod
    async def export(self, locations: Sequence[str]) -> ExportResult:
        """Produce CSV data filtered to ``locations``."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release any network resources held by the client."""
