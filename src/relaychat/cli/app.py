"""Main CLI application using Typer."""
import asyncio

import httpx
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..client import ConversationController, ConversationState, Role
from ..client.config import DEFAULT_MODEL, REQUEST_TIMEOUT_SECONDS
from ..proxy import MODEL_MAP, ChatProxy, create_app, fallback_models
from .environment import configure_logging, get_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="relaychat",
    help="Chat with hosted language models through a small completion proxy",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

DEFAULT_URL = "http://127.0.0.1:8000"


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    log_level: str = typer.Option("info", "--log-level", "-l", help="debug, info, warning or error"),
):
    """Run the completion proxy (POST /api/chat)."""
    import uvicorn

    configure_logging(log_level)
    settings = get_settings(console)
    console.print(f"[dim]Serving /api/chat on http://{host}:{port}[/dim]")
    uvicorn.run(create_app(ChatProxy(settings)), host=host, port=port, log_level=log_level.lower())


@app.command()
def chat(
    url: str = typer.Option(DEFAULT_URL, "--url", "-u", help="Base URL of the proxy"),
    model: str = typer.Option(DEFAULT_MODEL, "--model", "-m", help="Logical model name"),
    timeout: float = typer.Option(REQUEST_TIMEOUT_SECONDS, "--timeout", "-t", help="Per-message deadline in seconds"),
    log_level: str | None = typer.Option(
        None, "--log-level", "-l", help="Show the log panel at this level (debug, info, warning, error)"
    ),
):
    """Open the interactive chat interface."""
    from ..ui import run_chat_tui

    asyncio.run(run_chat_tui(url, model=model, timeout=timeout, log_level=log_level))


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    url: str = typer.Option(DEFAULT_URL, "--url", "-u", help="Base URL of the proxy"),
    model: str = typer.Option(DEFAULT_MODEL, "--model", "-m", help="Logical model name"),
    timeout: float = typer.Option(REQUEST_TIMEOUT_SECONDS, "--timeout", "-t", help="Deadline in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log request details"),
):
    """Send a single message and print the reply as it arrives."""
    if verbose:
        configure_logging("debug")

    async def _ask() -> tuple[bool, ConversationState]:
        shown = ""

        def on_update(state: ConversationState) -> None:
            nonlocal shown
            if state.last_error is not None or not state.messages:
                return
            reply = state.messages[-1]
            if reply.role is Role.ASSISTANT and reply.content.startswith(shown):
                console.print(reply.content[len(shown):], end="", markup=False, highlight=False)
                shown = reply.content

        async with httpx.AsyncClient(base_url=url) as client:
            controller = ConversationController(client, model=model, timeout=timeout)
            controller.set_update_callback(on_update)
            sent = await controller.send(prompt)
            return sent, controller.state

    sent, state = asyncio.run(_ask())
    if not sent:
        console.print("[red]Error: message is empty[/red]")
        raise typer.Exit(code=1)
    console.print()
    if state.last_error is not None:
        console.print(f"[red]Error: {escape(state.last_error)}[/red]")
        console.print(state.last_assistant_content() or "", style="dim", markup=False)
        raise typer.Exit(code=1)


@app.command()
def models():
    """List logical model names and the upstream models behind them."""
    table = Table(title="Models")
    table.add_column("Alias", style="cyan")
    table.add_column("Upstream model", style="green")
    table.add_column("Fallbacks (not used)", style="dim")

    for alias, model_id in MODEL_MAP.items():
        table.add_row(alias, model_id, ", ".join(fallback_models(alias)))

    console.print(table)


if __name__ == "__main__":
    app()
