"""
codegraph-proptypes CLI

Generate prop-types declarations for React components in place.

    proptypes generate src/Button.jsx [Button]
    proptypes project src/
    proptypes config my-settings.json
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from codegraph_proptypes.common.observability import configure_logging
from codegraph_proptypes.config.settings import (
    AutoImport,
    CodeStyle,
    GeneratorSettings,
    QuoteStyle,
    load_settings,
    parse_config_json,
    write_config_file,
)
from codegraph_proptypes.errors import PropTypesError
from codegraph_proptypes.generator import FileReport, generate_file, generate_project

app = typer.Typer(
    name="proptypes",
    help="Infer and write React prop-types declarations",
    add_completion=False,
)

console = Console()


def _settings(
    config_file: str | None,
    component_name: str | None = None,
    code_style: CodeStyle | None = None,
    no_auto_import: bool = False,
    with_defaults: bool = False,
    quote: QuoteStyle | None = None,
) -> GeneratorSettings:
    return load_settings(
        config_file,
        name=component_name,
        code_style=code_style,
        auto_import=AutoImport.DISABLE if no_auto_import else None,
        with_defaults=with_defaults or None,
        quote=quote,
    )


def _print_report(report: FileReport) -> None:
    for result in report.generated:
        console.print(f"[green]{escape(result.file_path)} Generated Success![/green] [dim]({result.component})[/dim]")
    for name, message in report.failures.items():
        console.print(f"[red]{escape(report.file_path)}: {escape(name)}: {escape(message)}[/red]")


@app.command()
def generate(
    file_path: str = typer.Argument(..., help="Component source file"),
    component_name: str | None = typer.Argument(None, help="Component name (all components when omitted)"),
    code_style: CodeStyle | None = typer.Option(None, "--code-style", help="Declaration style for class components"),
    no_auto_import: bool = typer.Option(False, "--no-auto-import", help="Do not insert the prop-types import"),
    with_defaults: bool = typer.Option(False, "--with-defaults", help="Also write a defaultProps declaration"),
    quote: QuoteStyle | None = typer.Option(None, "--quote", help="Quote style of generated strings"),
    config_file: str | None = typer.Option(None, "--config-file", help="Persisted settings JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Log events as JSON lines"),
):
    """
    Generate prop-types for the components of one file.
    """
    configure_logging("DEBUG" if verbose else None, json_format=json_logs)

    try:
        settings = _settings(config_file, component_name, code_style, no_auto_import, with_defaults, quote)
        path = Path(file_path)
        report = generate_file(path, settings)
    except PropTypesError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    _print_report(report)
    if not report.generated:
        raise typer.Exit(code=1)


@app.command()
def project(
    dir_path: str = typer.Argument(".", help="Project directory"),
    code_style: CodeStyle | None = typer.Option(None, "--code-style", help="Declaration style for class components"),
    no_auto_import: bool = typer.Option(False, "--no-auto-import", help="Do not insert the prop-types import"),
    with_defaults: bool = typer.Option(False, "--with-defaults", help="Also write defaultProps declarations"),
    quote: QuoteStyle | None = typer.Option(None, "--quote", help="Quote style of generated strings"),
    config_file: str | None = typer.Option(None, "--config-file", help="Persisted settings JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Log events as JSON lines"),
):
    """
    Generate prop-types for every .js/.jsx/.ts/.tsx file under a directory.
    """
    configure_logging("DEBUG" if verbose else None, json_format=json_logs)

    try:
        settings = _settings(config_file, None, code_style, no_auto_import, with_defaults, quote)
    except PropTypesError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    reports = generate_project(dir_path, settings)

    table = Table(title="prop-types")
    table.add_column("File")
    table.add_column("Generated", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Status")
    for report in reports:
        status = "[green]ok[/green]" if report.ok else "[red]failed[/red]"
        table.add_row(escape(report.file_path), str(len(report.generated)), str(len(report.failures)), status)
    console.print(table)

    total = sum(len(report.generated) for report in reports)
    console.print(f"\n[bold]{total}[/bold] component(s) generated in {len(reports)} file(s)")


@app.command()
def config(
    file_path: str = typer.Argument(..., help="JSON file with settings to persist"),
    config_file: str | None = typer.Option(None, "--config-file", help="Persisted settings JSON"),
):
    """
    Merge settings from a JSON file into the persisted configuration.
    """
    try:
        raw = Path(file_path).read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] cannot read {escape(file_path)}: {escape(str(e))}")
        raise typer.Exit(code=1) from e

    try:
        written = write_config_file(parse_config_json(raw, source=file_path), config_file)
    except PropTypesError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Write Config Success[/green] [dim]{escape(str(written))}[/dim]")
    console.print_json(written.read_text(encoding="utf-8"))


def main():
    app()


if __name__ == "__main__":
    main()
