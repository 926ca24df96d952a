import io

import pytest
from rich.console import Console

from conftest import table_rows
from domain.services import AnalysisResult
from interface.cli import commands
from interface.cli.interface import RealEstateChatCLI


class FakePromptSession:
    """Feeds scripted lines to the CLI instead of reading the terminal."""

    inputs: list = []

    def __init__(self, *args, **kwargs):
        self.placeholders = []

    async def prompt_async(self, message, **kwargs):
        self.placeholders.append(kwargs.get("placeholder"))
        if not FakePromptSession.inputs:
            raise EOFError
        return FakePromptSession.inputs.pop(0)


def make_cli(monkeypatch, controller, inputs):
    FakePromptSession.inputs = list(inputs)
    monkeypatch.setattr("interface.cli.interface.PromptSession", FakePromptSession)
    output = io.StringIO()
    cli = RealEstateChatCLI(controller, console=Console(file=output, width=160))
    return cli, output


@pytest.mark.asyncio
async def test_cli_typical_session(monkeypatch, tmp_path, controller, service, sink):
    spreadsheet = tmp_path / "pune.xlsx"
    spreadsheet.write_bytes(b"PK\x03\x04")
    service.analyze_result = AnalysisResult(
        summary="Wakad prices climbed 12%.",
        chart_data=[],
        table_data=table_rows(25),
        locations=["Wakad"],
    )

    cli, output = make_cli(
        monkeypatch,
        controller,
        ["Analyze Wakad", f"upload {spreadsheet}", "Analyze Wakad", "export", "exit"],
    )
    await cli.start_interactive_session()

    text = output.getvalue()
    assert "Upload a spreadsheet first" in text
    assert "Available locations: Wakad, Aundh, Akurdi, Baner, Hinjewadi..." in text
    assert "Wakad prices climbed 12%." in text
    assert "Data Table (25 records)" in text
    assert "export 1" in text
    assert "Price Trends" not in text
    assert "Thanks for using the Real Estate Analysis Bot" in text

    assert service.analyze_calls == ["Analyze Wakad"]
    assert service.export_calls == [["Wakad"]]
    assert len(sink.saved) == 1
    assert service.closed is True


@pytest.mark.asyncio
async def test_cli_reports_errors_in_timeline(monkeypatch, tmp_path, controller, service):
    from domain.services import ServiceError

    spreadsheet = tmp_path / "pune.xls"
    spreadsheet.write_bytes(b"\xd0\xcf")
    service.ingest_error = ServiceError("Sheet is empty")

    cli, output = make_cli(monkeypatch, controller, [f"upload {spreadsheet}", "quit"])
    await cli.start_interactive_session()

    assert "Error: Sheet is empty" in output.getvalue()
    assert controller.session.dataset_loaded is False


@pytest.mark.asyncio
async def test_cli_rejects_non_spreadsheet_upload(monkeypatch, tmp_path, controller, service):
    notes = tmp_path / "notes.csv"
    notes.write_text("a,b")

    cli, output = make_cli(monkeypatch, controller, [f"upload {notes}"])
    await cli.start_interactive_session()

    assert "Please choose an existing .xlsx or .xls file" in output.getvalue()
    assert service.ingest_calls == []


@pytest.mark.asyncio
async def test_export_without_table(monkeypatch, controller, service):
    cli, output = make_cli(monkeypatch, controller, ["export", "export 3"])
    await cli.start_interactive_session()

    assert "There is no result table to export yet." in output.getvalue()
    assert service.export_calls == []


@pytest.mark.asyncio
async def test_placeholder_uses_known_locations(monkeypatch, tmp_path, controller):
    spreadsheet = tmp_path / "pune.xlsx"
    spreadsheet.write_bytes(b"PK")

    cli, _ = make_cli(monkeypatch, controller, [f"upload {spreadsheet}", "help"])
    await cli.start_interactive_session()

    placeholders = cli.prompt_session.placeholders
    assert placeholders[0] == "Ask about Wakad, Aundh, Ambegaon, etc..."
    assert placeholders[1] == "Ask about Wakad, Aundh, Akurdi, etc..."


def test_select_upload_filters_extensions(tmp_path):
    good = tmp_path / "data.XLSX"
    good.write_bytes(b"PK")
    bad = tmp_path / "data.csv"
    bad.write_text("x")

    assert commands.select_upload(str(good)) == good
    assert commands.select_upload(str(bad)) is None
    assert commands.select_upload(str(tmp_path / "missing.xls")) is None
    assert commands.select_upload("") is None
