"""Interactive CLI interface for the real-estate analysis chat."""

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from application.controllers import SessionController
from domain.entities import BotMessage, SessionSnapshot
from infrastructure.logging import get_logger

from . import commands, display

logger = get_logger(__name__)


class RealEstateChatCLI:
    """Terminal front-end rendering the session timeline as it grows."""

    def __init__(self, controller: SessionController, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.controller = controller
        self.prompt_session = PromptSession(
            history=InMemoryHistory(),
            completer=WordCompleter(commands.COMMANDS),
        )
        self._rendered = 0
        self._table_results = 0
        self._unsubscribe = controller.subscribe(self.on_session_change)

        self.console.print("🏠 Real Estate Analysis Bot")
        self.console.print("Upload a spreadsheet and ask about prices, sales and supply by location.")
        self.console.print()

    def on_session_change(self, snapshot: SessionSnapshot) -> None:
        """Render messages appended since the last notification."""
        for message in snapshot.timeline[self._rendered:]:
            result_number = None
            if isinstance(message, BotMessage) and message.has_table:
                self._table_results += 1
                result_number = self._table_results
            display.render_message(self.console, message, result_number)
        self._rendered = len(snapshot.timeline)

    async def start_interactive_session(self) -> None:
        """Run the prompt loop until the user exits."""
        display.show_empty_state(self.console, self.controller.snapshot())
        display.show_help(self.console)

        try:
            while True:
                try:
                    user_input = await self.prompt_session.prompt_async(
                        "💬 ",
                        placeholder=display.prompt_placeholder(self.controller.snapshot()),
                    )
                    user_input = user_input.strip()
                    if not user_input:
                        continue
                    if not await commands.handle_command(self, user_input):
                        break
                except KeyboardInterrupt:
                    if Confirm.ask("\nDo you want to exit?", console=self.console):
                        break
                except EOFError:
                    break
                except Exception as e:
                    self.console.print(f"I encountered an issue: {str(e)}")
                    self.console.print("Let's try that again, or type 'help' for assistance.")
                    logger.exception(f"CLI error: {str(e)}")
        finally:
            self._unsubscribe()
            await self.controller.aclose()

        self.console.print("\n👋 Thanks for using the Real Estate Analysis Bot!")
