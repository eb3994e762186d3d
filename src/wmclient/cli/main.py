"""CLI commands."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import click

from wmclient.commands import connect, query, watch, watch_del, watch_list
from wmclient.config import configure_logging, load_config
from wmclient.errors import WatchmanError
from wmclient.fields import DEFAULT_FIELDS, FIELD_NAMES, QueryField, fields_from_names
from wmclient.models.expression import (
    AllOf,
    AnyOf,
    Expression,
    Name,
    Since,
    Suffix,
    TrueExpr,
    Type,
)


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except WatchmanError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


def build_expression(
    suffixes: tuple[str, ...],
    names: tuple[str, ...],
    file_type: str | None,
    since: str | None,
) -> Expression:
    """Combine command line filters into one expression."""
    terms: list[Expression] = []

    if len(suffixes) == 1:
        terms.append(Suffix(suffix=suffixes[0]))
    elif suffixes:
        terms.append(AnyOf(clauses=[Suffix(suffix=s) for s in suffixes]))

    if names:
        terms.append(Name(names=names))
    if file_type:
        terms.append(Type(file_type=file_type))
    if since:
        terms.append(Since.from_clock(since))

    if not terms:
        return TrueExpr()
    if len(terms) == 1:
        return terms[0]
    return AllOf(clauses=terms)


@click.group()
@click.option("--config", "-c", type=Path, help="Config file path")
@click.option("--sockname", type=Path, help="Watchman socket path")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Seconds to wait for a response",
)
@click.option("--verbose", "-v", is_flag=True, help="Log protocol traffic")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    sockname: Path | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """wmclient - Talk to the watchman file watching daemon."""
    ctx.ensure_object(dict)
    with _reporting_errors():
        cfg = load_config(config)

    if sockname is not None:
        cfg.connection.socket_path = sockname
    if timeout is not None:
        cfg.connection.timeout = timeout
    if verbose:
        cfg.logging.level = "debug"

    configure_logging(cfg)
    ctx.obj["config"] = cfg


@cli.command("watch")
@click.argument("path", type=click.Path(file_okay=False, path_type=Path))
@click.pass_context
def watch_cmd(ctx: click.Context, path: Path) -> None:
    """Start watching a directory."""
    with _reporting_errors(), connect(ctx.obj["config"]) as conn:
        watch(conn, str(path.resolve()))
    click.echo(f"Watching: {path}")


@cli.command("watch-del")
@click.argument("path", type=click.Path(file_okay=False, path_type=Path))
@click.pass_context
def watch_del_cmd(ctx: click.Context, path: Path) -> None:
    """Stop watching a directory."""
    with _reporting_errors(), connect(ctx.obj["config"]) as conn:
        watch_del(conn, str(path.resolve()))
    click.echo(f"No longer watching: {path}")


@cli.command("watch-list")
@click.pass_context
def watch_list_cmd(ctx: click.Context) -> None:
    """List watched directories."""
    with _reporting_errors(), connect(ctx.obj["config"]) as conn:
        result = watch_list(conn)

    for root in result.roots:
        click.echo(root)


@cli.command("query")
@click.argument("root", type=click.Path(file_okay=False, path_type=Path))
@click.option("--suffix", "-s", "suffixes", multiple=True, help="File suffix")
@click.option("--name", "-n", "names", multiple=True, help="Exact file name")
@click.option("--type", "-t", "file_type", type=click.Choice(list("bcdfplsD")))
@click.option("--since", help="Only files changed since this clock")
@click.option(
    "--field",
    "-f",
    "fields",
    multiple=True,
    type=click.Choice(FIELD_NAMES),
    help="Field to report (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw result as JSON")
@click.pass_context
def query_cmd(
    ctx: click.Context,
    root: Path,
    suffixes: tuple[str, ...],
    names: tuple[str, ...],
    file_type: str | None,
    since: str | None,
    fields: tuple[str, ...],
    as_json: bool,
) -> None:
    """Find files under a watched directory."""
    expression = build_expression(suffixes, names, file_type, since)
    mask = fields_from_names(fields) if fields else DEFAULT_FIELDS

    with _reporting_errors(), connect(ctx.obj["config"]) as conn:
        result = query(conn, str(root.resolve()), expression, mask)

    if as_json:
        click.echo(result.model_dump_json())
        return

    # Without the exists field every Stat reports exists=False
    show_exists = bool(mask & QueryField.EXISTS)
    for stat in result.files:
        if show_exists:
            status_icon = "+" if stat.exists else "-"
            click.echo(f"{status_icon} {stat.name}")
        else:
            click.echo(stat.name)
    click.echo(f"clock: {result.clock}", err=True)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
