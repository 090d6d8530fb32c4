"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from ..chat import ConversationController
from ..sessions import SessionRepository
from .providers import console_debug_callback, console_notice_callback, get_client, get_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="mentorai",
    help="MentorAI tutor chat: persistent chat sessions with an AI tutor",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

STORE_HELP = "Session store: file, sqlite or memory (default: $MENTORAI_STORE or file)"
DATA_DIR_HELP = "Directory for the file/sqlite stores (default: $MENTORAI_DATA_DIR or ~/.mentorai)"


def _build_repository(store, log_level: str | None) -> SessionRepository:
    repository = SessionRepository(store, on_notice=console_notice_callback(console))
    if log_level:
        repository.set_debug_callback(console_debug_callback(log_level, console))
    return repository


def _print_message(role: str, content: str) -> None:
    if role == "user":
        console.print(f"[bold green]You:[/bold green] {content}", highlight=False)
    else:
        console.print("[bold magenta]Tutor:[/bold magenta]")
        console.print(Markdown(content))
    console.print()


@app.command()
def tui(
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    data_dir: str | None = typer.Option(None, "--data-dir", help=DATA_DIR_HELP),
    offline: bool = typer.Option(
        False,
        "--offline",
        help="Reply with the offline echo client instead of the endpoint"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        client = get_client(console, offline=offline)
        store = get_store(store_backend, data_dir)
        try:
            await run_textual_tui(store=store, client=client, log_level=log_level)
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def chat(
    session_id: str | None = typer.Option(
        None,
        "--session",
        help="Continue this session instead of the most recent one"
    ),
    new: bool = typer.Option(False, "--new", "-n", help="Start a new session"),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    data_dir: str | None = typer.Option(None, "--data-dir", help=DATA_DIR_HELP),
    offline: bool = typer.Option(False, "--offline", help="Use the offline echo client"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Print diagnostics at this level"),
):
    """Interactive chat in the terminal, without the TUI."""
    async def _chat():
        client = get_client(console, offline=offline)
        store = get_store(store_backend, data_dir)

        try:
            repository = _build_repository(store, log_level)
            await repository.connect()
            await repository.load()
            controller = ConversationController(
                repository, client, on_notice=console_notice_callback(console)
            )
            if log_level:
                controller.set_debug_callback(console_debug_callback(log_level, console))

            if new:
                repository.set_active(None)
            elif session_id is not None:
                if session_id not in repository:
                    console.print(f"[red]Error: No session with id {session_id}[/red]")
                    raise typer.Exit(code=1)
                repository.set_active(session_id)

            console.print("[bold cyan]MentorAI Tutor Chat[/bold cyan]")
            console.print("[dim]Type '/new' for a new chat; 'exit', 'quit', or 'q' to leave[/dim]\n")

            active = repository.get_active()
            if active is not None:
                console.print(f"[dim]Continuing '{active.title}' ({len(active.messages)} messages)[/dim]\n")
                for message in active.messages:
                    _print_message(message.role, message.content)

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if not command:
                    continue
                if command in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "/new":
                    await controller.new_chat()
                    console.print("[dim]Started a new chat.[/dim]\n")
                    continue

                with console.status("[dim]AI is thinking...[/dim]"):
                    result = await controller.send_message(user_input)
                if result is not None and result.reply is not None:
                    _print_message(result.reply.role, result.reply.content)

        except typer.Exit:
            raise
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await client.close()
            await store.disconnect()

    asyncio.run(_chat())


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message for the tutor"),
    session_id: str | None = typer.Option(
        None,
        "--session",
        help="Append to this session (default: start a new one)"
    ),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    data_dir: str | None = typer.Option(None, "--data-dir", help=DATA_DIR_HELP),
    offline: bool = typer.Option(False, "--offline", help="Use the offline echo client"),
):
    """Send one message and print the tutor's reply."""
    async def _ask():
        if not message.strip():
            console.print("[red]Error: Message must not be empty[/red]")
            raise typer.Exit(code=1)

        client = get_client(console, offline=offline)
        store = get_store(store_backend, data_dir)

        try:
            repository = _build_repository(store, None)
            await repository.connect()
            await repository.load()
            controller = ConversationController(
                repository, client, on_notice=console_notice_callback(console)
            )

            if session_id is not None:
                if session_id not in repository:
                    console.print(f"[red]Error: No session with id {session_id}[/red]")
                    raise typer.Exit(code=1)
                controller.select_session(session_id)
            else:
                repository.set_active(None)

            result = await controller.send_message(message)
            if result is None or result.reply is None:
                console.print("[red]Error: Message was not sent[/red]")
                raise typer.Exit(code=1)

            _print_message(result.reply.role, result.reply.content)
            console.print(f"[dim]Session: {result.session_id}[/dim]")
            if not result.ok:
                raise typer.Exit(code=1)

        except typer.Exit:
            raise
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await client.close()
            await store.disconnect()

    asyncio.run(_ask())


@app.command()
def sessions(
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    data_dir: str | None = typer.Option(None, "--data-dir", help=DATA_DIR_HELP),
):
    """List saved chat sessions, newest first."""
    async def _sessions():
        store = get_store(store_backend, data_dir)

        try:
            repository = _build_repository(store, None)
            await repository.connect()
            await repository.load()

            if not len(repository):
                console.print("[yellow]No chat sessions yet[/yellow]")
                return

            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("ID", style="dim")
            table.add_column("Title", style="cyan")
            table.add_column("Created", style="yellow")
            table.add_column("Messages", style="green", justify="right")

            for session in repository.sessions:
                table.add_row(
                    session.id,
                    session.title,
                    session.created_at,
                    str(len(session.messages)),
                )

            console.print(table)

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_sessions())


@app.command()
def show(
    session_id: str = typer.Argument(..., help="Session id (see 'mentorai sessions')"),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    data_dir: str | None = typer.Option(None, "--data-dir", help=DATA_DIR_HELP),
):
    """Print the transcript of a session."""
    async def _show():
        store = get_store(store_backend, data_dir)

        try:
            repository = _build_repository(store, None)
            await repository.connect()
            await repository.load()

            session = repository.get(session_id)
            if session is None:
                console.print(f"[red]Error: No session with id {session_id}[/red]")
                raise typer.Exit(code=1)

            console.print(f"[bold cyan]{session.title}[/bold cyan] [dim]({session.created_at})[/dim]\n")
            if not session.messages:
                console.print("[dim]No messages yet.[/dim]")
            for message in session.messages:
                _print_message(message.role, message.content)

        except typer.Exit:
            raise
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_show())


@app.command()
def rename(
    session_id: str = typer.Argument(..., help="Session id"),
    title: str = typer.Argument(..., help="New title"),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    data_dir: str | None = typer.Option(None, "--data-dir", help=DATA_DIR_HELP),
):
    """Rename a session."""
    async def _rename():
        store = get_store(store_backend, data_dir)

        try:
            repository = _build_repository(store, None)
            await repository.connect()
            await repository.load()

            if not await repository.rename_session(session_id, title):
                console.print(f"[red]Error: No session with id {session_id}[/red]")
                raise typer.Exit(code=1)
            console.print(f"[green]Renamed to '{repository.get(session_id).title}'[/green]")

        except typer.Exit:
            raise
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_rename())


@app.command()
def delete(
    session_id: str = typer.Argument(..., help="Session id"),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    data_dir: str | None = typer.Option(None, "--data-dir", help=DATA_DIR_HELP),
):
    """Delete one session."""
    async def _delete():
        store = get_store(store_backend, data_dir)

        try:
            repository = _build_repository(store, None)
            await repository.connect()
            await repository.load()

            if not await repository.delete_session(session_id):
                console.print(f"[yellow]No session with id {session_id}[/yellow]")
                return
            console.print("[green]Chat deleted.[/green]")

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_delete())


@app.command()
def clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    data_dir: str | None = typer.Option(None, "--data-dir", help=DATA_DIR_HELP),
):
    """Delete all chat sessions."""
    async def _clear():
        if not yes:
            console.print("[yellow]This will permanently delete all your chat sessions.[/yellow]")
            confirm = typer.confirm("Are you sure?")
            if not confirm:
                console.print("[dim]Aborted.[/dim]")
                return

        store = get_store(store_backend, data_dir)

        try:
            repository = _build_repository(store, None)
            await repository.connect()
            await repository.load()

            count = len(repository)
            await repository.clear_all()
            console.print(f"[green]All chats cleared ({count} deleted).[/green]")

        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await store.disconnect()

    asyncio.run(_clear())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
