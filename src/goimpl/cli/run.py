"""goimpl run command - pick an interface and insert its stubs."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import click
import questionary
import structlog
from rich.console import Console

from goimpl.cli.utils import find_module_root
from goimpl.config.loader import load_config
from goimpl.config.models import GoImplConfig
from goimpl.core.errors import ConfigError, LspError, PreconditionError, ResourceError
from goimpl.core.logging import (
    clear_invocation_id,
    configure_logging,
    get_log_file_path,
    set_invocation_id,
)
from goimpl.editor.buffer import SourceBuffer
from goimpl.impl.models import ImplOutcome
from goimpl.impl.ops import ImplOps
from goimpl.impl.stubgen import StubGenerator
from goimpl.lsp.client import LspClient
from goimpl.symbols.resolver import SymbolResolver

logger = structlog.get_logger()

_PICKER_STYLE = questionary.Style(
    [
        ("question", "bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:cyan"),
    ]
)


def _entry_label(entry: dict[str, Any], module_root: Path) -> str:
    filename = Path(entry["filename"])
    try:
        shown = filename.relative_to(module_root)
    except ValueError:
        shown = filename
    container = entry["value"].get("containerName")
    label = f"{container}.{entry['symbol_name']}" if container else entry["text"]
    return f"{label}  ({shown}:{entry['lnum']})"


async def _choose_entry(
    entries: list[dict[str, Any]],
    module_root: Path,
    pick: int | None,
    console: Console,
) -> dict[str, Any] | None:
    if pick is not None:
        if pick > len(entries):
            console.print(f"[yellow]Only {len(entries)} interface(s) matched[/yellow]")
            return None
        return entries[pick - 1]

    index = await questionary.select(
        "Interface to implement",
        choices=[
            questionary.Choice(_entry_label(entry, module_root), value=i)
            for i, entry in enumerate(entries)
        ],
        style=_PICKER_STYLE,
    ).ask_async()
    if index is None:
        return None
    return entries[index]


async def run_impl(
    ops: ImplOps,
    client: LspClient,
    module_root: Path,
    *,
    config: GoImplConfig,
    query: str | None,
    pick: int | None,
    console: Console,
) -> ImplOutcome | None:
    """Start the language server, let the user pick, run the pipeline, stop the server."""
    try:
        await client.start(timeout_sec=config.lsp.startup_timeout_sec)
    except (LspError, OSError, asyncio.TimeoutError) as e:
        logger.warning("lsp_start_failed", command=config.lsp.command, error=str(e))
        await client.close()
        return None

    try:
        if query is None:
            query = await questionary.text(
                f"Interface for {ops.receiver_name}:", style=_PICKER_STYLE
            ).ask_async()
            if query is None:
                return None

        entries = await ops.entries(query)
        if not entries:
            console.print(f"[dim]No interfaces match {query!r}[/dim]")
            return None

        entry = await _choose_entry(entries, module_root, pick, console)
        if entry is None:
            ops.cancel_search()
            return None
        return await ops.select(entry)
    finally:
        await client.close()


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("line", type=click.IntRange(min=1))
@click.argument("col", type=click.IntRange(min=1))
@click.option("--query", "-q", default=None, help="Symbol query (skips the query prompt)")
@click.option(
    "--pick",
    "-p",
    type=click.IntRange(min=1),
    default=None,
    help="Take the Nth match (skips the picker)",
)
@click.option("--dry-run", is_flag=True, help="Print the stubs instead of saving the file")
@click.pass_context
def run_command(
    ctx: click.Context,
    file: Path,
    line: int,
    col: int,
    query: str | None,
    pick: int | None,
    dry_run: bool,
) -> None:
    """Implement an interface on the type named at FILE:LINE:COL.

    LINE and COL are 1-based, as editors report them. The cursor must be
    on the name in a type declaration.
    """
    console = Console(stderr=True)
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    file = file.resolve()
    module_root = find_module_root(file)

    try:
        config = load_config(module_root)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    if not verbose:
        configure_logging(config=config.logging)

    set_invocation_id()
    try:
        try:
            buffer = SourceBuffer.from_path(file)
        except ResourceError as e:
            logger.error("source_unreadable", **e.to_dict())
            console.print(f"[red]{e.message}[/red]")
            ctx.exit(1)
        client = LspClient(config.lsp.command, module_root)
        resolver = SymbolResolver(
            client,
            file,
            timeout_sec=config.search.timeout_sec,
            debounce_sec=config.search.debounce_sec,
        )
        generator = StubGenerator(config.impl.executable, timeout_sec=config.impl.timeout_sec)
        try:
            ops = ImplOps.at_cursor(buffer, line - 1, col - 1, resolver, generator=generator)
        except PreconditionError as e:
            console.print(f"[red]{e.message}[/red]")
            ctx.exit(1)

        outcome = asyncio.run(
            run_impl(
                ops,
                client,
                module_root,
                config=config,
                query=query,
                pick=pick,
                console=console,
            )
        )
    finally:
        clear_invocation_id()

    if outcome is None or not outcome.inserted:
        log_file = get_log_file_path()
        suffix = f" (details in {log_file})" if log_file is not None else ""
        console.print(f"[dim]Nothing inserted{suffix}[/dim]")
        return

    if dry_run:
        click.echo("\n".join(outcome.lines))
        return

    buffer.save()
    console.print(
        f"[green]✓[/green] {ops.receiver_name} implements "
        f"{outcome.interface_name}{outcome.type_parameters}: "
        f"{len(outcome.lines)} lines inserted after line {outcome.insert_row}"
    )
