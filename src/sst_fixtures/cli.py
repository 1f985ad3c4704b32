"""CLI interface for the SST fixture generator."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from sst_fixtures.catalog import catalog_tokens
from sst_fixtures.config import LOG_FORMATS, Config
from sst_fixtures.driver import run
from sst_fixtures.errors import DirectoryCreateFailed, UnknownToken
from sst_fixtures.logging import setup_logging
from sst_fixtures.models import FixtureOutcome
from sst_fixtures.output import write_manifest
from sst_fixtures.selection import Directive, resolve_selection
from sst_fixtures.writer import rocksdict_writer

logger = logging.getLogger(__name__)

_DIRECTIVES_KEY = "sst_fixtures.directives"


def _record_directive(ctx: click.Context, param: click.Parameter, value):
    """Collect selection flags in the order click processes them.

    Click processes options in command-line order, so the directive list
    reflects where each flag first appeared.
    """
    if value is None or value is False:
        return value
    directives = ctx.meta.setdefault(_DIRECTIVES_KEY, [])
    directives.append(Directive(param.name, None if value is True else value))
    return value


@click.command(context_settings={"help_option_names": ["--help", "-h"]})
@click.option(
    "--minimal",
    is_flag=True,
    callback=_record_directive,
    help="Generate the minimal checksum/compression subset.",
)
@click.option(
    "--version",
    metavar="V",
    callback=_record_directive,
    help="Generate a single format version.",
)
@click.option(
    "--checksum",
    metavar="TOKEN",
    callback=_record_directive,
    help="Generate a single checksum algorithm (see --list).",
)
@click.option(
    "--compression",
    metavar="TOKEN",
    callback=_record_directive,
    help="Generate a single compression codec (see --list).",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory. [default: $SST_FIXTURES_ROOT or sst_files]",
)
@click.option(
    "--manifest",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a JSON manifest of the batch to this file.",
)
@click.option("--list", "list_axes", is_flag=True, help="List axis tokens and exit.")
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    help="Log format. [default: $SST_FIXTURES_LOG_FORMAT or text]",
)
@click.pass_context
def main(
    ctx: click.Context,
    minimal: bool,
    version: str | None,
    checksum: str | None,
    compression: str | None,
    root: Path | None,
    manifest: Path | None,
    list_axes: bool,
    log_format: str | None,
):
    """Generate SST fixtures for every version × checksum × compression combination."""
    try:
        config = Config.from_env()
    except RuntimeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    setup_logging(log_format or config.log_format)

    if list_axes:
        for axis, tokens in catalog_tokens().items():
            click.echo(f"{axis}: {', '.join(tokens)}")
        return

    if version is not None and not version.strip().lstrip("+-").isdigit():
        logger.warning("--version %r is not an integer; using 0", version)

    try:
        selection = resolve_selection(ctx.meta.get(_DIRECTIVES_KEY, []))
    except UnknownToken as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    output_root = root if root is not None else Path(config.root)
    writer_factory = (ctx.obj or {}).get("writer_factory", rocksdict_writer)

    click.echo(f"Generating {selection.total} SST fixtures under {output_root}/ ...")

    outcomes: list[FixtureOutcome] = []

    def report_outcome(outcome: FixtureOutcome) -> None:
        outcomes.append(outcome)
        if outcome.ok:
            click.echo(f"  [ok]   {outcome.path}")
        else:
            click.echo(f"  [FAIL] {outcome.path}: {outcome.error}")

    try:
        report = run(
            selection.versions,
            selection.checksums,
            selection.compressions,
            output_root,
            writer_factory,
            report_outcome,
            bloom_bits_per_key=config.bloom_bits_per_key,
        )
    except DirectoryCreateFailed as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"Generated {report.succeeded}/{report.total} fixtures ({report.failed} failed)."
    )
    if report.failed:
        click.echo("Failed fixtures:", err=True)
        for path in report.failed_paths:
            click.echo(f"  {path}", err=True)

    if manifest is not None:
        n = write_manifest(report, outcomes, manifest, root=output_root)
        click.echo(f"Wrote manifest with {n} entries to {manifest}")

    sys.exit(report.exit_code)


if __name__ == "__main__":
    main()
