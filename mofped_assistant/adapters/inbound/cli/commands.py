"""CLI interface for the MoFPED Help Assistant."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from ....common.exception_handler import describe_exception
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain import GuardrailStatus, Response
from ....core.domain.utils import normalize_text

app = typer.Typer(
    name="mofped",
    help="MoFPED Help Assistant - answers questions about finance.go.ug",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

STATUS_STYLES = {
    GuardrailStatus.OK: "green",
    GuardrailStatus.NOT_FOUND: "yellow",
    GuardrailStatus.ERROR: "red",
}


def handle_cli_error(exc: Exception) -> None:
    """Handle and display errors in CLI with structured format.

    In debug mode, shows full JSON error details.
    In normal mode, shows a user-friendly message with error code.

    Args:
        exc: The exception to handle.
    """
    error_data = describe_exception(exc, include_trace=settings.debug)

    if settings.debug:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
    else:
        error_msg = error_data["error"]["message"]
        error_code = error_data["error"].get("code", "UNKNOWN")
        location = error_data.get("location", {})

        console.print(f"\n[red]Error [{error_code}]:[/] {error_msg}")
        console.print(f"[dim]Type: {error_data['error']['type']}[/]")

        if location:
            loc_str = f"{location.get('file', '?')}:{location.get('line', '?')} in {location.get('method', '?')}"
            console.print(f"[dim]Location: {loc_str}[/]")

        console.print("[dim]Set DEBUG=true for full details[/]")


def render_response(response: Response) -> None:
    """Print a response with its sources and follow-up options."""
    style = STATUS_STYLES.get(response.guardrail_status, "white")
    intent = response.intent.value if response.intent else "unknown"
    confidence = f"{response.confidence:.2f}" if response.confidence is not None else "-"

    console.print(
        Panel(
            Markdown(response.summary),
            title=f"[bold {style}]MoFPED Assistant[/]",
            subtitle=f"[dim]{intent} ({confidence}) - {response.guardrail_status.value}[/]",
            border_style=style,
        )
    )

    if response.sources:
        console.print("[dim]Sources:[/]")
        for source in response.sources:
            category = f" ({source.category})" if source.category else ""
            console.print(f"  [dim]{escape(source.title)}{escape(category)} - {source.url}[/]")

    if response.options:
        console.print("[dim]You can also:[/]")
        for i, option in enumerate(response.options, 1):
            console.print(f"  [cyan]{i}.[/] {escape(option.label)} [dim]({escape(option.payload)})[/]")


def _answer(query: str) -> Response:
    from ....composition.container import get_query_router

    return asyncio.run(get_query_router().handle(normalize_text(query)))


@app.command()
def ask(
    query: str = typer.Argument(..., help="Question about the Ministry of Finance"),
) -> None:
    """Ask a single question and get an answer."""
    setup_logging(settings.log_level, json_format=settings.log_json)

    try:
        with console.status("[bold green]Searching...[/]"):
            response = _answer(query)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    render_response(response)


@app.command()
def chat() -> None:
    """Start an interactive session."""
    setup_logging("WARNING")

    console.print(
        Panel.fit(
            "[bold]MoFPED Help Assistant[/]\n"
            "[dim]Questions about the Ministry of Finance, Planning and Economic Development[/]\n\n"
            "Examples:\n"
            "• Where is the ministry located?\n"
            "• Download the budget framework paper\n"
            "• IFMS contact\n\n"
            "[dim]Type 'quit' or 'exit' to leave[/]",
            title="Welcome",
            border_style="blue",
        )
    )

    while True:
        try:
            query = Prompt.ask("\n[bold cyan]You[/]")

            if query.lower() in ("quit", "exit", "q"):
                console.print("[dim]Goodbye![/]")
                break

            if not query.strip():
                continue

            with console.status("[bold green]Searching...[/]"):
                response = _answer(query)

            console.print()
            render_response(response)

        except KeyboardInterrupt:
            console.print("\n[dim]Goodbye![/]")
            break
        except Exception as exc:
            handle_cli_error(exc)


@app.command()
def seed(
    path: Path | None = typer.Argument(None, help="Seed JSON file (defaults to the bundled sample set)"),
) -> None:
    """Load documents and excerpts into the content store."""
    from ....adapters.outbound.seed_loader import DEFAULT_SEED_PATH, seed_store
    from ....composition.container import get_content_store

    seed_path = path or DEFAULT_SEED_PATH
    console.print(f"[bold]Seeding content store[/] from [dim]{seed_path}[/]\n")

    try:
        stats = seed_store(get_content_store(), seed_path)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    table = Table(title="Seed results")
    table.add_column("Status")
    table.add_column("Count", justify="right")
    for key in ("inserted", "updated", "unchanged", "excerpts"):
        table.add_row(key, str(stats.get(key, 0)))
    console.print(table)


@app.command()
def status() -> None:
    """Show content store counts and configuration."""
    from ....composition.container import get_content_store

    console.print("[bold]MoFPED Help Assistant Status[/]\n")
    console.print(f"Database: [dim]{settings.database_path}[/]")
    console.print(f"Official site: [dim]{settings.site_url}[/]")
    console.print(f"Request timeout: [dim]{settings.request_timeout}s[/]")
    rate = settings.rate_limit_per_minute
    console.print(f"Rate limit: [dim]{f'{rate}/min' if rate > 0 else 'disabled'}[/]")

    console.print("\n[bold]Content store:[/]")
    try:
        stats = get_content_store().get_stats()
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print(f"  documents: {stats['documents']} ({stats['active_documents']} active)")
    console.print(f"  excerpts: {stats['excerpts']}")

    if stats["documents"] == 0:
        console.print("\n[yellow]Content store is empty. Run 'mofped seed' to load sample data.[/]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "mofped_assistant.adapters.inbound.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
