"""Console output and formatting helpers for the chat CLI."""

from typing import Any, Optional, Sequence

from rich.align import Align
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from application.view_models import (
    ChartView,
    TableView,
    build_chart_view,
    build_table_view,
    format_label,
)
from domain.entities import (
    BotMessage,
    ErrorMessage,
    Message,
    SessionSnapshot,
    SystemMessage,
    UserMessage,
)

EXAMPLE_QUERIES = (
    "Analyze Wakad",
    "Compare Aundh and Akurdi",
    "Show price growth for Ambegaon",
)
DEFAULT_PLACEHOLDER = "Ask about Wakad, Aundh, Ambegaon, etc..."


def render_message(console, message: Message, result_number: Optional[int] = None) -> None:
    """Print one timeline entry according to its kind."""
    if isinstance(message, UserMessage):
        console.print(Align.right(Panel(message.text, style="white on dark_blue", expand=False)))
    elif isinstance(message, SystemMessage):
        console.print(Text(message.text, style="green"))
    elif isinstance(message, ErrorMessage):
        console.print(Text(message.text, style="bold red"))
    elif isinstance(message, BotMessage):
        render_bot_message(console, message, result_number)
    else:
        raise TypeError(f"Unknown message type: {type(message).__name__}")


def render_bot_message(console, message: BotMessage, result_number: Optional[int] = None) -> None:
    console.print()
    console.print(message.summary)

    chart = build_chart_view(message.chart_series)
    if chart is not None:
        render_chart(console, chart)

    table = build_table_view(message)
    if table is not None:
        render_table(console, table, result_number)
    console.print()


def _chart_cell(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:,.2f}"
    return format_label(value)


def render_chart(console, chart: ChartView) -> None:
    """Show the chart series as a year-by-series grid, one color per series."""
    grid = Table(title=chart.title, show_header=True, header_style="bold")
    grid.add_column(chart.x_key.title(), style="dim")
    for series in chart.series:
        grid.add_column(series.key, style=series.color, justify="right")

    for point in chart.points:
        cells = [format_label(point.get(chart.x_key))]
        cells.extend(_chart_cell(point.get(series.key)) for series in chart.series)
        grid.add_row(*cells)

    console.print(grid)


def render_table(console, table: TableView, result_number: Optional[int] = None) -> None:
    grid = Table(title=table.title, show_header=True, header_style="bold magenta")
    for index, column in enumerate(table.columns):
        grid.add_column(column, justify="left" if index < 2 else "right")

    for row in table.rows:
        grid.add_row(row.location, row.year, row.avg_price, row.total_sales, row.units)

    console.print(grid)
    if result_number is not None:
        console.print(
            f"[dim]Type 'export {result_number}' to download all "
            f"{table.record_count} records as CSV.[/dim]"
        )


def prompt_placeholder(snapshot: SessionSnapshot) -> str:
    if not snapshot.known_locations:
        return DEFAULT_PLACEHOLDER
    return f"Ask about {', '.join(snapshot.known_locations[:3])}, etc..."


def show_empty_state(console, snapshot: SessionSnapshot) -> None:
    if snapshot.timeline:
        return
    if snapshot.dataset_loaded:
        console.print("Data loaded! Ask a question below.")
    else:
        console.print("📂 Upload your Excel file to get started: upload <path/to/file.xlsx>")


def show_session_history(console, timeline: Sequence[Message]) -> None:
    """Display conversation history."""
    if not timeline:
        console.print("Nothing here yet. Upload a spreadsheet to get started.")
        return

    table = Table(title="Conversation History", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Kind", width=8)
    table.add_column("Message", width=70)

    start = max(len(timeline) - 10, 0)
    for position, message in enumerate(timeline[start:], start=start + 1):
        content = message.summary if isinstance(message, BotMessage) else message.text
        if len(content) > 100:
            content = content[:100] + "..."
        table.add_row(str(position), message.kind.value, content)

    console.print(table)


def show_help(console) -> None:
    """Show help information."""
    console.print()
    console.print("🚀 Getting Started")
    console.print("Upload a real-estate spreadsheet, then ask questions in plain English.")
    console.print()

    console.print("📝 Try:")
    for query in EXAMPLE_QUERIES:
        console.print(f'• "{query}"')
    console.print()

    console.print("💡 Commands you can use:")
    console.print("• upload <path> - Upload an .xlsx or .xls file")
    console.print("• export [n] - Download the latest (or n-th) result table as CSV")
    console.print("• history - Show our conversation")
    console.print("• help - Show this message")
    console.print("• clear - Clear the screen")
    console.print("• exit or quit - Leave the chat")
    console.print()
