"""Voca-Flash voice client for the terminal.

Type what you would say; each line is one recognized utterance. Spoken
replies are printed. An empty line counts as silence.
"""

import asyncio
import logging

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from vocaflash.composition import (
    create_console_dispatcher,
    create_flashcard_store,
    create_navigator,
)
from vocaflash.config import get_api_base_url, get_log_level
from vocaflash.views.base import HOME_ROUTE

logger = logging.getLogger(__name__)

console = Console()


def show_welcome() -> None:
    console.print(Panel(
        "[bold]Voca-Flash[/bold]\n[dim]Voice-controlled flashcards[/dim]\n\n"
        'Type a command such as [cyan]"create new flashcard"[/cyan], '
        '[cyan]"view cards"[/cyan] or [cyan]"help"[/cyan]. '
        "Press Ctrl-D to quit.",
        title="Welcome", border_style="blue",
    ))


async def run_voice_client(console: Console) -> int:
    """Run the voice client until input ends.

    Returns:
        Process exit code (1 if the REST service never became available)
    """
    store = create_flashcard_store()
    dispatcher, recognizer = create_console_dispatcher(console)
    navigator = create_navigator(dispatcher, store)

    try:
        if not await store.wait_for_service():
            console.print(f"[red]Cannot reach the Voca-Flash API at {get_api_base_url()}[/red]")
            return 1

        await dispatcher.start_listening()
        await navigator.navigate(HOME_ROUTE)
        await recognizer.closed.wait()
        return 0
    finally:
        await navigator.close()
        await dispatcher.close()
        await recognizer.close()
        await store.close()


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=get_log_level())
    show_welcome()
    try:
        exit_code = asyncio.run(run_voice_client(console))
    except KeyboardInterrupt:
        exit_code = 0
    console.print("[dim]Goodbye![/dim]")
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
