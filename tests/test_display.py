import io
import os
import sys

import pytest
from rich.console import Console

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from domain.entities import BotMessage, ErrorMessage, Session, SystemMessage, UserMessage
from interface.cli import display


def render(message, result_number=None) -> str:
    output = io.StringIO()
    display.render_message(Console(file=output, width=160), message, result_number)
    return output.getvalue()


@pytest.mark.parametrize(
    "message",
    [UserMessage("Analyze Wakad"), SystemMessage("Loaded."), ErrorMessage("Error: no data")],
)
def test_text_messages_render_their_text(message):
    assert message.text in render(message)


def test_bot_message_renders_chart_and_table():
    message = BotMessage(
        summary="Prices are rising.",
        chart_series=({"year": 2020, "Wakad": 7000.0}, {"year": 2021, "Wakad": 7450.5}),
        table_preview=({"final location": "Wakad", "year": 2021, "total_sales - igr": 25_000_000},),
        table_full=({"final location": "Wakad", "year": 2021, "total_sales - igr": 25_000_000},),
        locations_for_export=("Wakad",),
    )

    text = render(message, result_number=2)

    assert "Prices are rising." in text
    assert "Price Trends" in text
    assert "7,450.50" in text
    assert "Data Table (1 records)" in text
    assert "₹2.50Cr" in text
    assert "export 2" in text


def test_unknown_message_type_is_rejected():
    with pytest.raises(TypeError):
        render(object())


def test_empty_state_before_and_after_upload():
    output = io.StringIO()
    console = Console(file=output, width=160)
    session = Session()

    display.show_empty_state(console, session.snapshot())
    session.dataset_loaded = True
    display.show_empty_state(console, session.snapshot())

    text = output.getvalue()
    assert "Upload your Excel file to get started" in text
    assert "Data loaded! Ask a question below." in text


def test_history_lists_recent_messages():
    output = io.StringIO()
    timeline = [UserMessage(f"question {i}") for i in range(12)]

    display.show_session_history(Console(file=output, width=160), timeline)

    text = output.getvalue()
    assert "question 11" in text
    assert "question 1 " not in text
