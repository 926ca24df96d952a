"""Command handling for the chat CLI."""
from pathlib import Path
from typing import List, Optional

from domain.entities import BotMessage, DatasetFile

from . import display, session

COMMANDS: List[str] = ['help', 'exit', 'quit', 'clear', 'history', 'upload', 'export']

# Extension filter applied when picking a file to upload
SPREADSHEET_EXTENSIONS = ('.xlsx', '.xls')


async def handle_command(cli, user_input: str) -> bool:
    """Handle a user command. Returns False to exit."""
    command, _, argument = user_input.partition(' ')
    command = command.lower()
    argument = argument.strip()

    if command in ('exit', 'quit') and not argument:
        return False
    if command == 'help' and not argument:
        display.show_help(cli.console)
        return True
    if command == 'clear' and not argument:
        cli.console.clear()
        return True
    if command == 'history' and not argument:
        display.show_session_history(cli.console, cli.controller.snapshot().timeline)
        return True
    if command == 'upload':
        await upload_file(cli, argument)
        return True
    if command == 'export' and (not argument or argument.isdigit()):
        export_result(cli, int(argument) if argument else None)
        return True

    await process_query(cli, user_input)
    return True


def select_upload(argument: str) -> Optional[Path]:
    """Resolve the file named by ``argument`` if it passes the spreadsheet filter."""
    if not argument:
        return None
    path = Path(argument.strip('"\'')).expanduser()
    if path.suffix.lower() not in SPREADSHEET_EXTENSIONS or not path.is_file():
        return None
    return path


async def upload_file(cli, argument: str) -> None:
    path = select_upload(argument)
    if path is None:
        cli.console.print("Please choose an existing .xlsx or .xls file: upload <path>")
        return
    dataset = DatasetFile.from_path(path)
    if not await session.upload_with_status(cli.console, cli.controller, dataset):
        cli.console.print("Please wait for the current request to finish.")


def tabled_results(cli) -> List[BotMessage]:
    return [
        message
        for message in cli.controller.snapshot().timeline
        if isinstance(message, BotMessage) and message.has_table
    ]


def export_result(cli, number: Optional[int]) -> None:
    """Start a background CSV export for a result table."""
    results = tabled_results(cli)
    if not results:
        cli.console.print("There is no result table to export yet.")
        return
    if number is None:
        number = len(results)
    if not 1 <= number <= len(results):
        cli.console.print(f"Choose a result between 1 and {len(results)}.")
        return

    task = cli.controller.start_export(results[number - 1].locations_for_export)
    cli.console.print("⬇️  Preparing your download...")

    def report(finished) -> None:
        if finished.cancelled() or finished.exception() is not None:
            return
        if finished.result() is not None:
            cli.console.print(f"[green]Saved {finished.result()}[/green]")

    task.add_done_callback(report)


async def process_query(cli, user_query: str) -> None:
    """Process a natural-language question."""
    snapshot = cli.controller.snapshot()
    if not snapshot.dataset_loaded:
        cli.console.print("Upload a spreadsheet first: upload <path/to/file.xlsx>")
        return
    if not await session.query_with_status(cli.console, cli.controller, user_query):
        cli.console.print("Please wait for the current request to finish.")
