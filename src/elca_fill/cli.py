from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn

import httpx
import typer
from rich.console import Console
from rich.table import Table

from elca_fill.config import settings
from elca_fill.errors import AuthenticationFailed, ElcaFillError
from elca_fill.models import PlaceholderMap

app = typer.Typer(add_completion=False)
console = Console()


def _fail(e: Exception, *, wait: bool = False) -> NoReturn:
    console.print(f"[red]ERROR[/red] {type(e).__name__}: {e}")
    if wait:
        # Keep a double-clicked console window open until the operator has read the error.
        typer.prompt("Press Enter to exit", default="", show_default=False)
    raise typer.Exit(code=1)


def _resolver(templates_dir: Path | None):
    from elca_fill.services.xlsx.templates import DirectoryTemplateResolver, version_reader_for

    reader = version_reader_for(
        settings.version_strategy,
        version=settings.template_version,
        column=settings.version_column,
    )
    return DirectoryTemplateResolver(templates_dir=templates_dir or settings.templates_dir, version_reader=reader)


def _print_placeholders(placeholders: PlaceholderMap) -> None:
    table = Table(title=f"placeholders ({len(placeholders)})")
    table.add_column("key")
    table.add_column("value", justify="right")
    for k, v in placeholders.items():
        table.add_row(k, f"{v:g}")
    console.print(table)


@app.command()
def fill(
    xlsx: Path = typer.Argument(..., exists=True, file_okay=True, dir_okay=False),
    project_id: str | None = typer.Option(None, help="Override the project id taken from `<name>.<id>.xlsx`."),
    html: Path | None = typer.Option(None, exists=True, dir_okay=False, help="Use a saved report fragment instead of fetching."),
    templates_dir: Path | None = typer.Option(None, help="Template directory (default: ELCA_TEMPLATES_DIR)."),
    show_placeholders: bool = typer.Option(False, help="Print the generated placeholder map."),
    wait: bool = typer.Option(False, help="Wait for Enter after an error."),
) -> None:
    """Fetch the LCA summary report of a project and fill XLSX from the matching template."""
    from elca_fill.services.elca.client import ElcaClient, mask_secret
    from elca_fill.services.pipeline import fill_workbook, project_id_from_path

    try:
        console.print(f"Using file path: {xlsx}")
        pid = project_id or project_id_from_path(xlsx)
        console.print(f"Using project ID: {pid}")

        if html is not None:
            report_html = html.read_text(encoding="utf-8")
        else:
            client = ElcaClient(base_url=settings.base_url, timeout_sec=settings.timeout_sec)
            sid = settings.sid
            if not sid:
                if not settings.username or not settings.password:
                    raise AuthenticationFailed("ELCA_USERNAME and ELCA_PASSWORD must be set in environment variables")
                console.print("Authenticating...")
                sid = client.login(settings.username, settings.password)
                console.print(f"[green]OK[/green] authenticated (sid={mask_secret(sid)})")
            console.print("Fetching ELCA data...")
            report_html = client.fetch_report_html(sid, pid)

        resolver = _resolver(templates_dir)
        result = fill_workbook(
            xlsx,
            report_html,
            resolver=resolver,
            version_reader=resolver.version_reader,
            strict_duplicates=settings.strict_duplicates,
            stamp=settings.stamp,
        )
    except (ValueError, httpx.HTTPError) as e:
        _fail(e, wait=wait)

    if show_placeholders:
        _print_placeholders(result.placeholders)
    console.print(f"Using template version: {result.version}")
    console.print(
        f"[green]OK[/green] wrote {result.target} "
        f"(placeholders={len(result.placeholders)} applied={len(result.bind.applied)} skipped={len(result.bind.skipped)})"
    )
    if result.bind.skipped:
        console.print(f"[yellow]WARN[/yellow] {len(result.bind.skipped)} template placeholders had no report value")


@app.command()
def parse(
    html: Path = typer.Argument(..., exists=True, file_okay=True, dir_okay=False),
    as_json: bool = typer.Option(False, "--json", help="Print the placeholder map as JSON."),
) -> None:
    """Parse a saved report fragment and print its placeholders."""
    from elca_fill.services.placeholders import flatten_report
    from elca_fill.services.report_parser import parse_report_html

    try:
        report = parse_report_html(html.read_text(encoding="utf-8"), strict_duplicates=settings.strict_duplicates)
        placeholders = flatten_report(report)
    except ElcaFillError as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps(dict(placeholders), ensure_ascii=False, indent=2))
        return
    _print_placeholders(placeholders)


@app.command()
def templates(
    templates_dir: Path | None = typer.Option(None, help="Template directory (default: ELCA_TEMPLATES_DIR)."),
) -> None:
    """List candidate templates with the version each one reports."""
    try:
        resolver = _resolver(templates_dir)
        infos = resolver.describe()
    except ValueError as e:
        _fail(e)
    if not infos:
        console.print(f"[yellow]WARN[/yellow] no templates in {resolver.templates_dir}")
        return
    for info in infos:
        if info.version is None:
            console.print(f"- {info.path.name}: [yellow]{info.error}[/yellow]")
        else:
            console.print(f"- {info.path.name}: {info.version}")


@app.command()
def scan(
    template: Path = typer.Argument(..., exists=True, file_okay=True, dir_okay=False),
) -> None:
    """Print the placeholder sites of a template."""
    from elca_fill.services.xlsx.templates import scan_placements
    from elca_fill.services.xlsx.workbook_io import load_workbook

    try:
        placements = scan_placements(load_workbook(template))
    except ElcaFillError as e:
        _fail(e)

    table = Table(title=f"{template.name} ({len(placements)} placeholders)")
    table.add_column("row", justify="right")
    table.add_column("column", justify="right")
    table.add_column("placeholder")
    for p in placements:
        table.add_row(str(p.row), str(p.column), p.placeholder)
    console.print(table)


@app.command("template-skeleton")
def template_skeleton(
    out: Path = typer.Option(..., help="Output .xlsx path."),
    version: str = typer.Option(..., help="Version written as `V<version>` into the last row."),
    category: list[str] = typer.Option(["TOTAL"], help="Category code (repeatable), e.g. TOTAL, KG3.2."),
    plain_brackets: bool = typer.Option(False, help="Write `[key]` instead of `#[key]`."),
) -> None:
    """Create a template with a placeholder row per category and indicator."""
    from elca_fill.services.xlsx.skeleton import write_template_skeleton

    out_path = write_template_skeleton(
        out,
        version=version,
        categories=category,
        version_column=settings.version_column,
        hash_prefix=not plain_brackets,
    )
    console.print(f"[green]OK[/green] wrote {out_path}")


if __name__ == "__main__":
    app()
