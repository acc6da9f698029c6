"""
hookguide - Command Line Interface

Inspect the installed guidance, check which entries a piece of context
activates, and validate guidance documents before publishing them.
Built with Typer for the command surface and Rich for output.

Usage:
    $ hookguide --help
    $ hookguide list
    $ hookguide show uniswap-v4-hooks
    $ hookguide match "Create a basic afterSwap hook"
    $ hookguide match --file src/MyHook.sol --show-body
    $ hookguide validate ./guidance

For detailed help on any command:
    $ hookguide <command> --help
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from hookguide.config import settings
from hookguide.guidance import (
    ActivationMatcher,
    GuidanceLoadError,
    GuidanceRegistry,
    MatcherConfig,
    compose_context,
    discover,
    load_guidance_file,
    load_registry,
)

# Version info
__version__ = "0.1.0"

logger = logging.getLogger(__name__)

console = Console()


class ListFormat(str, Enum):
    """Output formats for the list command."""
    TABLE = "table"
    JSON = "json"


class MatchFormat(str, Enum):
    """Output formats for the match command."""
    TEXT = "text"
    JSON = "json"


app = typer.Typer(
    name="hookguide",
    help="hookguide - security guidance activation for Uniswap V4 hooks",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"hookguide version {__version__}")
        raise typer.Exit()


def verbose_callback(value: bool) -> None:
    """Set verbose mode."""
    if value:
        logging.basicConfig(level=logging.DEBUG)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        callback=verbose_callback,
        help="Enable debug logging.",
    ),
    guidance_dirs: Optional[List[Path]] = typer.Option(
        None,
        "--guidance-dir",
        "-g",
        help="Extra directory of guidance documents (repeatable).",
    ),
    no_builtin: bool = typer.Option(
        False,
        "--no-builtin",
        help="Do not load the guidance shipped with hookguide.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on malformed or duplicate guidance instead of skipping it.",
    ),
) -> None:
    """
    hookguide - security guidance for Uniswap V4 hooks

    Decides when the bundled guidance applies to a piece of context
    and hands its text to an AI coding assistant.
    """
    logging.basicConfig(level=settings.LOG_LEVEL)
    ctx.obj = {
        "dirs": [*settings.GUIDANCE_DIRS, *(guidance_dirs or [])],
        "include_builtin": settings.INCLUDE_BUILTIN and not no_builtin,
        "strict": settings.STRICT_LOADING or strict,
    }


def _registry(ctx: typer.Context) -> GuidanceRegistry:
    """Load the registry described by the global options."""
    from hookguide.cli.output import print_error

    opts = ctx.obj or {}
    try:
        return load_registry(
            extra_dirs=opts.get("dirs", []),
            include_builtin=opts.get("include_builtin", True),
            strict=opts.get("strict", False),
        )
    except (GuidanceLoadError, FileNotFoundError, ValueError) as exc:
        print_error(str(exc), hint="Run 'hookguide validate' on the directory for details")
        raise typer.Exit(1)


def _matcher() -> ActivationMatcher:
    return ActivationMatcher(MatcherConfig(command_prefix=settings.COMMAND_PREFIX))


@app.command("list")
def list_entries(
    ctx: typer.Context,
    format: ListFormat = typer.Option(
        ListFormat.TABLE,
        "--format",
        "-f",
        help="Output format.",
    ),
) -> None:
    """
    List installed guidance entries.
    """
    from hookguide.cli.output import print_json, print_table, print_warning

    registry = _registry(ctx)
    matcher = _matcher()

    if format == ListFormat.JSON:
        print_json(registry.list_all(matcher.command_prefix))
        return

    if not len(registry):
        print_warning("No guidance entries installed")
        return

    rows = [
        [entry.id, entry.version or "-", str(len(entry.triggers)), matcher.command_for(entry)]
        for entry in registry
    ]
    print_table(
        "Installed Guidance",
        ["ID", "Version", "Triggers", "Command"],
        rows,
        styles=["cyan", None, None, "green"],
    )


@app.command()
def show(
    ctx: typer.Context,
    entry_id: str = typer.Argument(..., help="Guidance entry id."),
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Print the Markdown source instead of rendering it.",
    ),
    triggers: bool = typer.Option(
        False,
        "--triggers",
        "-t",
        help="Also list the entry's triggers.",
    ),
) -> None:
    """
    Show the body of a guidance entry.
    """
    from hookguide.cli.output import print_error, print_markdown

    registry = _registry(ctx)
    entry = registry.get(entry_id)
    if entry is None:
        known = ", ".join(registry.list_ids()) or "none"
        print_error(f"Unknown guidance entry: {entry_id}", hint=f"Installed: {known}")
        raise typer.Exit(1)

    if triggers:
        console.print(Panel.fit(
            escape(", ".join(entry.triggers)),
            title=f"Triggers for {escape(entry.id)}",
        ))

    if raw:
        console.print(entry.body, markup=False, highlight=False, soft_wrap=True)
    else:
        print_markdown(entry.body)


@app.command()
def match(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(
        None,
        help="Context to match. Use '-' to read from stdin.",
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-i",
        help="Read context from a file (e.g. a Solidity source).",
    ),
    format: MatchFormat = typer.Option(
        MatchFormat.TEXT,
        "--format",
        "-f",
        help="Output format.",
    ),
    show_body: bool = typer.Option(
        False,
        "--show-body",
        "-b",
        help="Print the guidance text that would be injected.",
    ),
) -> None:
    """
    Show which guidance entries a context activates.

    No match is a normal result and exits 0.
    """
    from hookguide.cli.output import print_error, print_json

    parts: list[str] = []
    if text == "-":
        parts.append(sys.stdin.read())
    elif text is not None:
        parts.append(text)
    if file is not None:
        if not file.is_file():
            print_error(f"File not found: {file}")
            raise typer.Exit(1)
        parts.append(file.read_text(encoding="utf-8", errors="replace"))

    if not parts:
        print_error("No context given", hint="Pass TEXT, '-' for stdin, or --file PATH")
        raise typer.Exit(2)

    context = "\n".join(parts)
    registry = _registry(ctx)
    matcher = _matcher()
    matches = registry.activate(context, matcher)

    if format == MatchFormat.JSON:
        data = {
            "activated": [
                {**m.to_dict(), "command": matcher.command_for(m.entry)} for m in matches
            ],
        }
        if show_body:
            data["context"] = compose_context(matches)
        print_json(data)
        return

    if not matches:
        console.print("[dim]No guidance activated[/dim]")
        return

    for m in matches:
        reasons = []
        if m.via_command:
            reasons.append(f"command {matcher.command_for(m.entry)}")
        if m.matched_triggers:
            reasons.append("triggers: " + ", ".join(m.matched_triggers))
        console.print(
            f"[green]Activated[/green] [cyan]{escape(m.entry.id)}[/cyan] "
            f"({escape('; '.join(reasons))})",
            soft_wrap=True,
        )

    if show_body:
        console.print()
        console.print(compose_context(matches), markup=False, highlight=False, soft_wrap=True)


@app.command()
def validate(
    paths: List[Path] = typer.Argument(
        ...,
        help="Guidance documents or directories to validate.",
    ),
) -> None:
    """
    Validate guidance documents.

    Checks the metadata header of each document, that triggers resolve,
    and that ids are unique across everything validated.
    """
    from hookguide.cli.output import print_error, print_status, print_success

    checks: list[tuple[str, bool, str]] = []
    seen: dict[str, Path] = {}

    for path in paths:
        if path.is_dir():
            documents = discover(path)
            if not documents:
                checks.append((str(path), False, "no guidance documents found"))
                continue
        else:
            documents = [path]

        for doc in documents:
            try:
                entry = load_guidance_file(doc)
            except (GuidanceLoadError, FileNotFoundError, ValueError) as exc:
                checks.append((str(doc), False, getattr(exc, "reason", str(exc))))
                continue

            if entry.id in seen:
                checks.append((str(doc), False, f"duplicate id '{entry.id}' (also in {seen[entry.id]})"))
                continue

            seen[entry.id] = doc
            checks.append((str(doc), True, f"{entry.id}: {len(entry.triggers)} triggers"))

    print_status(checks, title="Guidance validation")
    console.print()

    failed = sum(1 for _, ok, _ in checks if not ok)
    if failed:
        print_error(f"{failed} of {len(checks)} checks failed")
        raise typer.Exit(1)
    print_success(f"{len(checks)} guidance documents valid")


__all__ = [
    "app",
    "console",
    "__version__",
]


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
