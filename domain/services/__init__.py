"""Domain service interface definitions."""

from .analytics_models import AnalysisResult, ExportResult, IngestResult
from .analytics_service import (
    AnalyticsService,
    AnalyticsServiceError,
    ServiceError,
    TransportFailure,
)
from .export_sink import ExportSink

__all__ = [
    "AnalyticsService",
    "AnalyticsServiceError",
    "ServiceError",
    "TransportFailure",
    "IngestResult",
    "AnalysisResult",
    "ExportResult",
    "ExportSink",
]
