"""Dereplicator adapter CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from dereplicator_adapter import __version__
from dereplicator_adapter.errors import AdapterError
from dereplicator_adapter.invoker import invoke
from dereplicator_adapter.settings import (
    DEBUG_ENV,
    EXECUTABLE_ENV,
    FORMAT_CHECK_ENV,
    configure_logging,
)
from dereplicator_adapter.types import (
    DEFAULT_EXECUTABLE,
    OUTPUT_FORMATS,
    SPECTRA_FORMATS,
    AdapterSettings,
    ExitCode,
    InvocationRequest,
)

cli = typer.Typer(
    name="dereplicator-adapter",
    help="Dereplication of peptidic natural products through database search of mass spectra.",
    add_completion=False,
)
console = Console(stderr=True, soft_wrap=True)


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.command()
def main(
    in_: str = typer.Option(
        "",
        "--in",
        help=f"Input spectra file ({', '.join(SPECTRA_FORMATS)}).",
        show_default=False,
    ),
    database: str = typer.Option(
        "",
        "--database",
        help="Molecular database directory with MOL structures and a library.info description file.",
        show_default=False,
    ),
    out: str = typer.Option(
        "",
        "--out",
        help=f"Output file for identification results ({', '.join(OUTPUT_FORMATS)}).",
        show_default=False,
    ),
    executable: str = typer.Option(
        DEFAULT_EXECUTABLE,
        "--executable",
        envvar=EXECUTABLE_ENV,
        help="Python wrapper for Dereplicator. May be skipped if it is on PATH and executable.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        envvar=DEBUG_ENV,
        help="Log the full command line and show the tool's own output.",
    ),
    format_check: bool = typer.Option(
        True,
        "--format-check/--no-format-check",
        envvar=FORMAT_CHECK_ENV,
        help="Require known spectra and result file extensions.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Run Dereplicator (NPDtools) on a spectra file and save its significant matches."""
    settings = AdapterSettings(debug=debug, check_formats=format_check)
    configure_logging(settings.debug)

    request = InvocationRequest(
        spectra_path=in_,
        database_path=database,
        output_path=out,
        executable=executable,
    )

    try:
        report = invoke(request, settings)
    except AdapterError as exc:
        console.print(f"[bold red]Fatal error:[/bold red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(int(exc.exit_code)) from exc

    typer.echo(f"Everything is fine! Results are in {report.output_path}")
    raise typer.Exit(int(ExitCode.EXECUTION_OK))


if __name__ == "__main__":
    cli()
