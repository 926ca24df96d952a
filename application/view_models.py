"""Render-ready shapes derived from bot messages.

Everything here is a pure function of a :class:`BotMessage`; nothing touches
session state, and display-time defaults (missing numbers shown as zero) are
never written back to the stored rows.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from domain.entities import BotMessage, Row

TIME_AXIS_KEY = "year"
SERIES_PALETTE = ("#8884d8", "#82ca9d", "#ffc658")
CHART_TITLE = "Price Trends"

LOCATION_FIELD = "final location"
YEAR_FIELD = "year"
PRICE_FIELD = "flat - weighted average rate"
SALES_FIELD = "total_sales - igr"
UNITS_FIELD = "total units"

TABLE_COLUMNS = ("Location", "Year", "Avg Price", "Total Sales", "Units")
CRORE = 10_000_000


@dataclass(frozen=True)
class SeriesView:
    key: str
    color: str


@dataclass(frozen=True)
class ChartView:
    title: str
    x_key: str
    series: Tuple[SeriesView, ...]
    points: Tuple[Row, ...]


@dataclass(frozen=True)
class TableRowView:
    location: str
    year: str
    avg_price: str
    total_sales: str
    units: str


@dataclass(frozen=True)
class TableView:
    title: str
    record_count: int
    columns: Tuple[str, ...]
    rows: Tuple[TableRowView, ...]
    export_locations: Tuple[str, ...]


def series_keys(chart_series: Sequence[Row], x_key: str = TIME_AXIS_KEY) -> Tuple[str, ...]:
    """Metric keys of the first chart record, in order, without the time axis."""
    if not chart_series:
        return ()
    return tuple(key for key in chart_series[0] if key != x_key)


def build_chart_view(chart_series: Optional[Sequence[Row]]) -> Optional[ChartView]:
    if not chart_series:
        return None
    series = tuple(
        SeriesView(key=key, color=SERIES_PALETTE[index % len(SERIES_PALETTE)])
        for index, key in enumerate(series_keys(chart_series))
    )
    return ChartView(
        title=CHART_TITLE,
        x_key=TIME_AXIS_KEY,
        series=series,
        points=tuple(chart_series),
    )


def numeric_or_zero(value: Any) -> float:
    """Coerce a cell to a number for display; absent or unusable values become 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_rupees(value: Any) -> str:
    return f"₹{round_half_up(numeric_or_zero(value))}"


def format_crores(value: Any) -> str:
    return f"₹{numeric_or_zero(value) / CRORE:.2f}Cr"


def format_units(value: Any) -> str:
    return str(round_half_up(numeric_or_zero(value)))


def format_label(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_table_row(row: Row) -> TableRowView:
    return TableRowView(
        location=format_label(row.get(LOCATION_FIELD)),
        year=format_label(row.get(YEAR_FIELD)),
        avg_price=format_rupees(row.get(PRICE_FIELD)),
        total_sales=format_crores(row.get(SALES_FIELD)),
        units=format_units(row.get(UNITS_FIELD)),
    )


def build_table_view(message: BotMessage) -> Optional[TableView]:
    """Table for the on-screen preview; ``None`` when there is nothing to show."""
    if not message.has_table:
        return None
    return TableView(
        title=f"Data Table ({message.record_count} records)",
        record_count=message.record_count,
        columns=TABLE_COLUMNS,
        rows=tuple(build_table_row(row) for row in message.table_preview or ()),
        export_locations=tuple(message.locations_for_export or ()),
    )
