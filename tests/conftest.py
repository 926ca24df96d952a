"""Shared fakes for controller and CLI tests."""
import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from application.controllers import SessionController
from domain.entities import DatasetFile
from domain.services import (
    AnalysisResult,
    AnalyticsService,
    AnalyticsServiceError,
    ExportResult,
    ExportSink,
    IngestResult,
)

LOCATIONS = ["Wakad", "Aundh", "Akurdi", "Baner", "Hinjewadi", "Kothrud"]


def table_rows(count: int) -> List[dict]:
    return [
        {
            "final location": "Wakad",
            "year": 2000 + i,
            "flat - weighted average rate": 7000 + i,
            "total_sales - igr": 120_000_000 + i,
            "total units": 300 + i,
        }
        for i in range(count)
    ]


class FakeAnalyticsService(AnalyticsService):
    """In-memory stand-in recording every call.

    Set ``gate`` to an :class:`asyncio.Event` to hold ingest and analyze calls
    in flight until the test releases it.
    """

    def __init__(self) -> None:
        self.ingest_calls: List[DatasetFile] = []
        self.analyze_calls: List[str] = []
        self.export_calls: List[List[str]] = []
        self.ingest_result = IngestResult(message="Loaded", locations=LOCATIONS)
        self.analyze_result = AnalysisResult(
            summary="Wakad prices rose steadily.",
            chart_data=[{"year": 2020, "Wakad": 7000}, {"year": 2021, "Wakad": 7400}],
            table_data=table_rows(3),
            locations=["Wakad"],
        )
        self.export_result = ExportResult(csv_data="a,b\n1,2\n", filename="wakad.csv")
        self.ingest_error: Optional[AnalyticsServiceError] = None
        self.analyze_error: Optional[AnalyticsServiceError] = None
        self.export_error: Optional[AnalyticsServiceError] = None
        self.gate: Optional[asyncio.Event] = None
        self.closed = False

    async def ingest(self, dataset: DatasetFile) -> IngestResult:
        self.ingest_calls.append(dataset)
        if self.gate is not None:
            await self.gate.wait()
        if self.ingest_error is not None:
            raise self.ingest_error
        return self.ingest_result

    async def analyze(self, query: str) -> AnalysisResult:
        self.analyze_calls.append(query)
        if self.gate is not None:
            await self.gate.wait()
        if self.analyze_error is not None:
            raise self.analyze_error
        return self.analyze_result

    async def export(self, locations: Sequence[str]) -> ExportResult:
        self.export_calls.append(list(locations))
        if self.export_error is not None:
            raise self.export_error
        return self.export_result

    async def aclose(self) -> None:
        self.closed = True


class RecordingExportSink(ExportSink):
    def __init__(self) -> None:
        self.saved: List[tuple] = []

    def save(self, filename: Optional[str], csv_data: str) -> Path:
        self.saved.append((filename, csv_data))
        return Path("downloads") / (filename or "data.csv")


@pytest.fixture
def service():
    return FakeAnalyticsService()


@pytest.fixture
def sink():
    return RecordingExportSink()


@pytest.fixture
def controller(service, sink):
    return SessionController(service=service, export_sink=sink)


@pytest.fixture
def dataset():
    return DatasetFile(filename="pune.xlsx", content=b"PK\x03\x04")
