"""Main CLI application using Typer."""
import asyncio
import contextlib
import os
import signal
from collections.abc import Iterator

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..chat import ChatSession
from ..config import ENV_LOG_LEVEL, MAX_ANSWER_PREVIEW
from ..exceptions import CodeaskError, EmptyResourceSetError
from ..logging_setup import configure_logging
from ..memory import QuestionStatus
from .printer import StreamPrinter
from .providers import get_client, get_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="codeask",
    help="Ask questions about your configured resources",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()
error_console = Console(stderr=True)


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, or error"
    ),
):
    """Configure logging for every command."""
    configure_logging(log_level or os.getenv(ENV_LOG_LEVEL), console=error_console)


@contextlib.contextmanager
def _cancel_on_interrupt(session: ChatSession) -> Iterator[None]:
    """Turn Ctrl+C into a cooperative cancel request while a turn streams."""
    loop = asyncio.get_running_loop()
    installed = True
    try:
        loop.add_signal_handler(signal.SIGINT, session.request_cancel)
    except (NotImplementedError, RuntimeError):
        # No signal handlers on this platform; Ctrl+C interrupts the process
        installed = False
    try:
        yield
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


def _report_error(e: Exception) -> None:
    if isinstance(e, EmptyResourceSetError):
        error_console.print("[red]Error: No resources configured.[/red]")
        error_console.print("[dim]Add resources to your answer server config.[/dim]")
    else:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")


@app.command()
def ask(
    question: str = typer.Option(
        ...,
        "--question",
        "-q",
        help="Question to ask (@name mentions select resources)"
    ),
    resource: list[str] | None = typer.Option(
        None,
        "--resource",
        "-r",
        help="Resource to search (can be repeated)"
    ),
    tech: str | None = typer.Option(
        None,
        "--tech",
        "-t",
        help="Single resource alias (same as -r)"
    ),
    server: str | None = typer.Option(
        None,
        "--server",
        help="Answer server URL"
    ),
):
    """Ask a single question and stream the answer."""
    async def _ask():
        client = get_client(server)
        store = get_store()

        try:
            await store.connect()
            session = ChatSession(client, store)
            printer = StreamPrinter(console, error_console)

            console.print("[dim]loading resources...[/dim]")
            with _cancel_on_interrupt(session):
                result = await session.ask(
                    question,
                    explicit=resource or [],
                    single=tech,
                    handlers=printer.handlers(),
                )
            printer.finish()

            if result.status == QuestionStatus.CANCELED:
                console.print("[yellow]Canceled.[/yellow]")

        except CodeaskError as e:
            _report_error(e)
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()
            await client.close()

    asyncio.run(_ask())


@app.command()
def chat(
    server: str | None = typer.Option(
        None,
        "--server",
        help="Answer server URL"
    ),
    memory_backend: str | None = typer.Option(
        None,
        "--memory",
        "-m",
        help="Thread store: 'memory' (session-only) or 'sqlite' (persistent)"
    ),
    memory_path: str | None = typer.Option(
        None,
        "--memory-path",
        help="Path for SQLite thread database (only with --memory sqlite)"
    ),
):
    """Interactive chat mode. Ctrl+C marks the answer being streamed as canceled."""
    async def _chat():
        client = get_client(server)
        store = get_store(memory_backend, memory_path)

        try:
            await store.connect()
            session = ChatSession(client, store)
            await session.start()

            console.print("[bold cyan]codeask chat[/bold cyan]")
            console.print(f"[dim]Model: {escape(str(session.model))}[/dim]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input.strip():
                    continue

                if user_input.strip().lower() in ('exit', 'quit', 'q'):
                    console.print("[dim]Goodbye![/dim]")
                    break

                printer = StreamPrinter(console, error_console)
                try:
                    with _cancel_on_interrupt(session):
                        result = await session.ask(user_input, handlers=printer.handlers())
                except EmptyResourceSetError as e:
                    _report_error(e)
                    raise typer.Exit(code=1)
                except CodeaskError as e:
                    _report_error(e)
                    continue
                printer.finish()

                if result.status == QuestionStatus.CANCELED:
                    console.print("[yellow]Canceled.[/yellow]\n")

        except CodeaskError as e:
            _report_error(e)
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()
            await client.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    server: str | None = typer.Option(
        None,
        "--server",
        help="Answer server URL"
    ),
    memory_backend: str | None = typer.Option(
        None,
        "--memory",
        "-m",
        help="Thread store: 'memory' (session-only) or 'sqlite' (persistent)"
    ),
    memory_path: str | None = typer.Option(
        None,
        "--memory-path",
        help="Path for SQLite thread database (only with --memory sqlite)"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        client = get_client(server)
        store = get_store(memory_backend, memory_path)

        try:
            await store.connect()
            await run_textual_tui(ChatSession(client, store))
        finally:
            await store.disconnect()
            await client.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def resources(
    server: str | None = typer.Option(
        None,
        "--server",
        help="Answer server URL"
    ),
):
    """List the resources configured on the answer server."""
    async def _resources():
        client = get_client(server)

        try:
            items = await client.list_resources()
            if not items:
                console.print("[yellow]No resources configured[/yellow]")
                return

            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("Resource", style="cyan")
            for item in items:
                table.add_row(item.name)
            console.print(table)

        except CodeaskError as e:
            _report_error(e)
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_resources())


@app.command()
def threads(
    limit: int = typer.Option(
        10,
        "--limit",
        "-n",
        help="Maximum number of threads"
    ),
    memory_path: str | None = typer.Option(
        None,
        "--memory-path",
        help="Path for SQLite thread database"
    ),
):
    """Show persisted threads and their questions."""
    async def _threads():
        store = get_store("sqlite", memory_path)

        try:
            await store.connect()
            records = await store.list_threads(limit=limit)
            if not records:
                console.print("[yellow]No threads found[/yellow]")
                return

            for record in records:
                console.print(
                    f"[bold cyan]{record.id}[/bold cyan] "
                    f"[dim]{record.created_at:%Y-%m-%d %H:%M} - {record.question_count} question(s)[/dim]"
                )

                table = Table(show_header=True, header_style="bold", box=None)
                table.add_column("Status", width=9)
                table.add_column("Resources", style="cyan")
                table.add_column("Question")
                table.add_column("Answer", style="dim")

                for question in await store.get_questions(record.id):
                    answer = question.answer.replace("\n", " ")
                    if len(answer) > MAX_ANSWER_PREVIEW:
                        answer = answer[:MAX_ANSWER_PREVIEW] + "..."
                    table.add_row(
                        question.status.value,
                        ", ".join(question.resources),
                        escape(question.prompt),
                        escape(answer),
                    )
                console.print(table)
                console.print()

        except Exception as e:
            error_console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_threads())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
