"""chatmark CLI: Typer + Rich terminal interface.

Commands: render, stream, replay, config show.
HTML goes to stdout untouched; status and errors are Rich-formatted.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from chatmark import __version__
from chatmark.errors import ConfigError, TransportError
from chatmark.loader import DEFAULT_CONFIG_PATH, load_render_config
from chatmark.render.pipeline import render_markdown
from chatmark.schemas.config import RenderConfig
from chatmark.stream.controller import StreamRenderController
from chatmark.transport.sse import replay as replay_sse

console = Console()
err_console = Console(stderr=True)

# ── App and sub-apps ─────────────────────────────────────────────

app = typer.Typer(
    name="chatmark",
    help="Render streamed assistant markdown to sanitized HTML.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    name="config",
    help="Show render configuration.",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")


# ── Version callback ───────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"chatmark {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log debug output to stderr.",
    ),
) -> None:
    """chatmark: streaming-safe markdown rendering for chat transcripts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ── Helpers ──────────────────────────────────────────────────────


def _load_config(config_path: str) -> RenderConfig:
    """Load render config, exit on error."""
    try:
        return load_render_config(Path(config_path) if config_path else None)
    except (FileNotFoundError, ConfigError) as e:
        err_console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(1) from None


def _read_source(path: str) -> str:
    """Read markdown from a file, or stdin when no path is given."""
    if not path:
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Cannot read {path}:[/red] {e}")
        raise typer.Exit(1) from None


def _chunks(text: str, size: int) -> list[str]:
    return [text[i:i + size] for i in range(0, len(text), size)]


# ── Commands ─────────────────────────────────────────────────────


@app.command()
def render(
    path: str = typer.Argument("", help="Markdown file (default: stdin)."),
    streaming: bool = typer.Option(
        False, "--streaming",
        help="Render as a partial, still-streaming message.",
    ),
    config_path: str = typer.Option(
        "", "--config", "-c",
        help="TOML file with a render table.",
    ),
) -> None:
    """Render a markdown document to HTML."""
    config = _load_config(config_path)
    text = _read_source(path)
    sys.stdout.write(render_markdown(text, streaming=streaming, config=config) + "\n")


@app.command()
def stream(
    path: str = typer.Argument("", help="Markdown file (default: stdin)."),
    chunk_size: int = typer.Option(
        8, "--chunk-size", "-n", min=1,
        help="Characters per simulated fragment.",
    ),
    frames: bool = typer.Option(
        False, "--frames",
        help="Print the HTML of every intermediate frame.",
    ),
    config_path: str = typer.Option(
        "", "--config", "-c",
        help="TOML file with a render table.",
    ),
) -> None:
    """Simulate fragment-by-fragment delivery of a document."""
    config = _load_config(config_path)
    text = _read_source(path)
    controller = StreamRenderController(config)
    controller.start()

    for fragment in _chunks(text, chunk_size):
        frame = controller.feed(fragment)
        if frames:
            console.rule(f"frame {frame.fragment_count}", style="dim")
            console.print(frame.html, markup=False, highlight=False, soft_wrap=True)

    final = controller.complete()
    if frames:
        console.rule("complete", style="bold green")
    sys.stdout.write(final.html + "\n")


@app.command()
def replay(
    path: str = typer.Argument(..., help="Recorded text/event-stream transcript."),
    config_path: str = typer.Option(
        "", "--config", "-c",
        help="TOML file with a render table.",
    ),
) -> None:
    """Decode an SSE transcript and render the message it carries."""
    config = _load_config(config_path)
    text = _read_source(path)
    controller = StreamRenderController(config)

    try:
        frame = replay_sse(text.splitlines(), controller)
    except TransportError as e:
        err_console.print(
            Panel(
                f"{e}\n\nLast rendered output kept "
                f"({controller.frame.fragment_count} fragments).",
                title="[red]Transport error[/red]",
                border_style="red",
            )
        )
        if controller.html:
            sys.stdout.write(controller.html + "\n")
        raise typer.Exit(1) from None

    sys.stdout.write(frame.html + "\n")


@config_app.command("show")
def config_show(
    config_path: str = typer.Option(
        "", "--config", "-c",
        help="TOML file with a render table.",
    ),
) -> None:
    """Show the effective render settings."""
    config = _load_config(config_path)

    table = Table(title=f"Render config ({config_path or DEFAULT_CONFIG_PATH})")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in config.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)


if __name__ == "__main__":
    app()
