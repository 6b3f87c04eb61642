"""react-no-manual-memo CLI - find (and remove) manual React memoization."""
import json
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape
from rich.table import Table

from .analyzer.parser import LanguageParser
from .config import __version__, get_config
from .engine.linter import LintResult, Linter, lint_file
from .plugin import NAMESPACE, PRESET_NAMES, RULES, get_preset, resolve_rule_settings
from .utils.logger import sanitize_for_terminal, severity_icon
from .utils.safe_console import SafeConsole

app = typer.Typer(
    name="no-manual-memo",
    help="Flag useMemo, useCallback and React.memo that the React Compiler makes redundant",
    add_completion=False,
)
console = SafeConsole()

EXCLUDED_DIRS = {
    'node_modules', 'bower_components', 'vendor', 'third_party',
    'dist', 'build', 'out', 'coverage',
    '.git', '.next', '.nuxt', '.turbo', '.cache',
}


def discover_files(paths: List[Path], include_vendored: bool = False) -> List[Path]:
    """Expand directories into the JavaScript/TypeScript files beneath them.

    Explicitly named files are kept even if their extension is unknown, so
    the caller can report them.
    """
    files: List[Path] = []
    for path in paths:
        if path.is_file():
            files.append(path)
            continue
        for candidate in sorted(path.rglob('*')):
            if not candidate.is_file() or not LanguageParser.is_supported(candidate):
                continue
            relative_parts = candidate.relative_to(path).parts
            if not include_vendored and any(part in EXCLUDED_DIRS for part in relative_parts):
                continue
            files.append(candidate)
    return files


def _print_result(result: LintResult) -> None:
    if result.has_syntax_error:
        console.print(f"[yellow]⚠ {escape(result.filename)}: syntax errors, results may be incomplete[/yellow]")
    if not result.diagnostics:
        return

    table = Table(title=escape(result.filename), title_justify="left", show_header=False, box=None)
    table.add_column("Location", style="dim", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Message")
    table.add_column("Rule", style="dim")

    for diagnostic in result.diagnostics:
        style = "red" if diagnostic.is_error else "yellow"
        table.add_row(
            f"{diagnostic.line}:{diagnostic.column}",
            f"[{style}]{severity_icon(diagnostic.severity)} {'error' if diagnostic.is_error else 'warning'}[/{style}]",
            escape(diagnostic.message.splitlines()[0]),
            diagnostic.rule_id,
        )
    console.print(table)
    console.print()


def _print_summary(results: List[LintResult], fixed: int) -> None:
    errors = sum(r.error_count for r in results)
    warnings = sum(r.warning_count for r in results)
    fixable = sum(r.fixable_count for r in results)
    problems = errors + warnings

    if fixed:
        console.print(f"[green]Fixed {fixed} file(s).[/green]")
    if not problems:
        console.print("[bold green]✔ No manual memoization found.[/bold green]")
        return

    color = "red" if errors else "yellow"
    console.print(
        f"[bold {color}]✖ {problems} problem{'s' if problems != 1 else ''} "
        f"({errors} error{'s' if errors != 1 else ''}, "
        f"{warnings} warning{'s' if warnings != 1 else ''})[/bold {color}]"
    )
    if fixable:
        console.print(f"[dim]  {fixable} potentially fixable with the --fix option.[/dim]")


@app.command()
def lint(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories to lint (default: current directory)"),
    preset: Optional[str] = typer.Option(
        None, "--preset", "-p", click_type=click.Choice(PRESET_NAMES), help="Rule preset (default: recommended)"
    ),
    fix: bool = typer.Option(False, "--fix", help="Write automatic fixes back to the files"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", click_type=click.Choice(["text", "json"], case_sensitive=False), help="Report format"
    ),
    include_vendored: bool = typer.Option(False, "--include-vendored", help="Also lint node_modules, dist, build, ..."),
):
    """Lint JavaScript/TypeScript files for manual memoization."""
    try:
        config = get_config()
        preset = preset or config.preset
        output_format = (output_format or config.output_format).lower()
        if output_format not in ("text", "json"):
            raise ValueError(f"Invalid format '{output_format}'. Use 'text' or 'json'.")
        settings = resolve_rule_settings(get_preset(preset))
        linter = Linter(RULES, settings, rule_prefix=NAMESPACE, max_fix_passes=config.max_fix_passes)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(2)

    targets = paths or [Path(".")]
    for target in targets:
        if not target.exists():
            console.print(f"[bold red]Error:[/bold red] Path does not exist: {escape(str(target))}")
            raise typer.Exit(2)

    results: List[LintResult] = []
    fixed_files = 0
    for file_path in discover_files(targets, include_vendored):
        if not LanguageParser.is_supported(file_path):
            console.print(f"[yellow]⚠ Skipping {escape(str(file_path))}: unsupported file type[/yellow]")
            continue
        try:
            result = lint_file(linter, file_path, fix=fix)
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[yellow]⚠ Skipping {escape(str(file_path))}: {escape(str(e))}[/yellow]")
            continue

        if fix and result.output is not None:
            fixed_source = result.output.encode("utf-8")
            if fixed_source != file_path.read_bytes():
                file_path.write_bytes(fixed_source)
                fixed_files += 1
        results.append(result)

    if output_format == "json":
        payload = [
            {
                "filePath": r.filename,
                "messages": [d.to_dict() for d in r.diagnostics],
                "errorCount": r.error_count,
                "warningCount": r.warning_count,
                "hasSyntaxError": r.has_syntax_error,
            }
            for r in results
        ]
        typer.echo(json.dumps(payload, indent=2))
    else:
        for result in results:
            _print_result(result)
        _print_summary(results, fixed_files)

    if any(r.error_count for r in results):
        raise typer.Exit(1)


@app.command()
def rules():
    """List the available rules, their preset severities and documentation."""
    recommended = resolve_rule_settings(get_preset("recommended"))
    strict = resolve_rule_settings(get_preset("all"))

    table = Table(title=f"{NAMESPACE} rules")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Fixable", justify="center")
    table.add_column("Default", justify="center")
    table.add_column("recommended", justify="center")
    table.add_column("all", justify="center")

    for name, rule in RULES.items():
        table.add_row(
            name,
            rule.meta.description,
            sanitize_for_terminal("🔧") if rule.meta.fixable else "",
            rule.meta.recommended,
            recommended.get(name, "off"),
            strict.get(name, "off"),
        )
    console.print(table)

    console.print("[bold]Docs[/bold]")
    for name, rule in RULES.items():
        # One unwrapped line per rule
        console.print(f"  [cyan]{name}[/cyan] {rule.meta.docs_url}", soft_wrap=True)


@app.command()
def version():
    """Show the installed version."""
    typer.echo(f"{NAMESPACE} {__version__}")

