"""
code-control CLI

Record the code that follows `control` annotations and detect drift.

Usage:
    control code src/ --lang js --ext js               # write .control-log
    control code src/ --lang js --ext js --diff        # compare with .control-log
    control log                                        # dump .control-log as JSON
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from code_control.config import config_file_path, load_settings, store_setting
from code_control.errors import ControlError, NoRegionsFoundError
from code_control.extraction import extract_regions
from code_control.observability import get_logger, setup_logging
from code_control.parsing import get_registry
from code_control.report import format_diff, format_written, regions_to_json
from code_control.snapshot import diff_regions, read_snapshot, write_snapshot

app = typer.Typer(
    name="control",
    help="A CLI for code controls",
    add_completion=False,
    no_args_is_help=True,
)
parser_app = typer.Typer(help="Manage control parsers", no_args_is_help=True)
config_app = typer.Typer(help="Set configuration variables", no_args_is_help=True)
app.add_typer(parser_app, name="parser")
app.add_typer(config_app, name="config")

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

logger = get_logger(__name__)


def _fail(error: ControlError) -> None:
    logger.debug("command_failed", code=error.code, **error.context)
    err_console.print(f"[bold red]error:[/bold red] {escape(error.message)}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(None, "--log-level", help="Diagnostic log level (overrides config)"),
    log_format: str | None = typer.Option(None, "--log-format", help="Diagnostic log format: console or json"),
):
    """
    A CLI for code controls.
    """
    try:
        settings = load_settings(log_level=log_level, log_format=log_format)
    except ControlError as e:
        _fail(e)

    setup_logging(level=settings.log_level, format=settings.log_format)
    ctx.obj = settings


@app.command()
def code(
    ctx: typer.Context,
    directory: Path = typer.Argument(..., help="Source code directory"),
    lang: str = typer.Option(..., "--lang", help="Supported programming language"),
    ext: list[str] = typer.Option(..., "--ext", help="File extension(s)"),
    output_file: Path | None = typer.Option(None, "--output-file", "-o", help="Output file path for control log"),
    diff: bool = typer.Option(False, "--diff", help="Diff the extracted regions with the ones in the output file"),
):
    """
    Operate on control code.

    Writes the annotated regions to the control log, or with --diff compares
    them against it (exit status 1 when changes are detected).
    """
    settings = ctx.obj
    output_file = output_file or Path(settings.log_path)

    try:
        if diff:
            old_regions = read_snapshot(output_file)
            new_regions = extract_regions(directory, lang, ext)
            result = diff_regions(old_regions, new_regions)

            for line in format_diff(result):
                typer.echo(line)

            if result.has_changes:
                raise typer.Exit(code=1)
            return

        regions = extract_regions(directory, lang, ext)
        if not regions:
            raise NoRegionsFoundError(str(directory))

        write_snapshot(output_file, regions, level=settings.compression_level)
        console.print(escape(format_written(str(output_file), len(regions))))

    except ControlError as e:
        _fail(e)


@app.command()
def log(
    ctx: typer.Context,
    log_path: Path | None = typer.Option(None, "--log-path", "-l", help="File path for control log"),
):
    """
    Print the control log.
    """
    log_path = log_path or Path(ctx.obj.log_path)
    try:
        regions = read_snapshot(log_path)
    except ControlError as e:
        _fail(e)

    typer.echo(regions_to_json(regions))


# ============================================================
# Parser commands
# ============================================================


@parser_app.command("list")
def parser_list():
    """
    List supported languages.
    """
    registry = get_registry()

    table = Table(title="Supported languages")
    table.add_column("Language", style="cyan")
    table.add_column("Aliases")

    for name, aliases in registry.aliases.items():
        table.add_row(name, ", ".join(aliases))

    console.print(table)


@parser_app.command("check")
def parser_check(lang: str = typer.Argument(..., help="Supported programming language")):
    """
    Verify that a language's parser can be loaded.
    """
    try:
        name = get_registry().check(lang)
    except ControlError as e:
        _fail(e)

    console.print(f"Parser for {name} is available.")


# ============================================================
# Config commands
# ============================================================


@config_app.command("set")
def config_set(
    field: str = typer.Argument(..., help="Field to set"),
    value: str = typer.Argument(..., help="Value to set"),
):
    """
    Set a configuration variable.
    """
    try:
        stored = store_setting(field, value)
    except ControlError as e:
        _fail(e)

    console.print(escape(f"{field} = {stored}"))


@config_app.command("show")
def config_show(ctx: typer.Context):
    """
    Print the effective configuration.
    """
    typer.echo(json.dumps(ctx.obj.model_dump(), indent=2))


@config_app.command("path")
def config_path():
    """
    Print the configuration path.
    """
    typer.echo(str(config_file_path()))


if __name__ == "__main__":
    app()
