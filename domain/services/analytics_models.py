"""Pydantic models for Remote Analytics Service responses."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class IngestResult(BaseModel):
    """Body returned after a spreadsheet upload."""

    message: str = Field(default="", description="Confirmation text from the service")
    locations: Optional[List[str]] = Field(
        default=None, description="Location names present in the uploaded dataset"
    )


class AnalysisResult(BaseModel):
    """Body returned for a natural-language query."""

    summary: str = Field(default="", description="Textual answer to the query")
    chart_data: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Time series records keyed by year plus metric names"
    )
    table_data: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Complete result rows for the query"
    )
    locations: Optional[List[str]] = Field(
        default=None, description="Location filter to reuse when exporting"
    )


class ExportResult(BaseModel):
    """Body returned for a CSV export."""

    csv_data: str = Field(description="CSV payload for the requested locations")
    filename: Optional[str] = Field(default=None, description="Suggested download name")
