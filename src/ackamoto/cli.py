"""Command-line interface for ackamoto."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ackamoto import __version__
from ackamoto.config import OUTPUT_FORMATS, Config, load_config, validate_config
from ackamoto.engine.classifier import strip_quoted_text
from ackamoto.github.client import FetchError, GitHubClient
from ackamoto.models.comment import RawComment
from ackamoto.models.report import VerdictReport
from ackamoto.models.verdict import Mode
from ackamoto.render.page import render_error_page, render_page
from ackamoto.render.serialize import report_to_dict
from ackamoto.tracker import build_classifier, fetch_and_track

console = Console()

FETCH_ERROR_MESSAGE = "Unable to fetch data from GitHub API. This may be due to rate limiting."


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_valid_config(config_path: str | None) -> Config:
    """Load configuration, exiting with status 1 if it is invalid."""
    config = load_config(Path(config_path) if config_path else None)
    errors = validate_config(config)
    if errors:
        for error in errors:
            console.print(f"[red]Config error:[/red] {error}")
        sys.exit(1)
    return config


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """ackamoto - track ACKs and NACKs on pull requests."""
    setup_logging(verbose)


@cli.command("build")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in Mode]),
    default=Mode.ACK.value,
    show_default=True,
    help="Which verdicts to report on",
)
@click.option("--output", "output_path", type=click.Path(), help="Output file (default from config)")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), help="Output format")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def build(
    mode: str,
    output_path: str | None,
    output_format: str | None,
    config_path: str | None,
) -> None:
    """Fetch PR comments and build the ACK or NACK report."""
    config = _load_valid_config(config_path)
    run_mode = Mode(mode)
    path = Path(output_path or config.output.path)
    fmt = output_format or config.output.format

    console.print(f"🔍 Fetching pull requests from [bold]{config.github.repo}[/bold]...")
    client = GitHubClient(
        token=config.github.token,
        base_url=config.github.base_url,
        per_page=config.fetch.per_page,
    )

    try:
        report = fetch_and_track(client, config, run_mode)
    except FetchError as e:
        console.print(f"[red]Error:[/red] {e}")
        if fmt != "html":
            sys.exit(1)
        # Publish an error page so the site says why it is stale
        path.write_text(
            render_error_page(
                FETCH_ERROR_MESSAGE,
                run_mode,
                config.output.project_name,
                config.output.logo_dir,
            ),
            encoding="utf-8",
        )
        console.print(f"📝 Wrote error page to {path}")
        return

    if fmt == "json":
        path.write_text(json.dumps(report_to_dict(report), indent=2) + "\n", encoding="utf-8")
    else:
        page = render_page(report, config.output.project_name, config.output.logo_dir)
        path.write_text(page, encoding="utf-8")

    _print_summary(report)
    console.print(f"📝 Generated {path}")


def _print_summary(report: VerdictReport) -> None:
    """Print the PRs that carry verdicts and any warnings."""
    verdict = report.mode.value.upper()
    console.print(
        f"✅ Found {report.primary_count} {verdict}s across {len(report.pull_requests)} PRs"
    )

    reviewed = [pr for pr in report.pull_requests if pr.total]
    if reviewed:
        table = Table(title=f"Reviewed PRs ({verdict} mode)")
        table.add_column("PR", justify="right")
        table.add_column("Title")
        table.add_column("Disposition")
        table.add_column(f"{verdict}s", justify="right")
        table.add_column("Total", justify="right")
        for pr in reviewed:
            table.add_row(
                f"#{pr.number}",
                pr.pr.title,
                pr.disposition.value,
                str(pr.primary_count),
                str(pr.total),
            )
        console.print(table)

    if report.warnings:
        console.print(f"[yellow]⚠️  {len(report.warnings)} warnings:[/yellow]")
        for warning in report.warnings:
            console.print(f"  • {warning}")


@cli.command("classify")
@click.argument("text")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def classify(text: str, config_path: str | None) -> None:
    """Show the verdict ackamoto reads from a comment TEXT."""
    config = _load_valid_config(config_path)
    classifier = build_classifier(config)
    result = classifier.classify(
        RawComment(pr_number=None, author=None, body=text, created_at=None)
    )

    console.print(f"[bold]Verdict:[/bold] {result.category.label}")
    console.print(f"[bold]Family:[/bold] {result.category.family.value}")
    console.print(f"[bold]Commit:[/bold] {result.commit or '-'}")
    if strip_quoted_text(text).strip() != text.strip():
        console.print("[dim]Quoted text and code blocks were ignored.[/dim]")


@cli.group("config")
def config_group() -> None:
    """Configuration commands."""
    pass


@config_group.command("validate")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def config_validate(config_path: str | None) -> None:
    """Validate configuration file."""
    try:
        config = load_config(Path(config_path) if config_path else None)
        errors = validate_config(config)

        if errors:
            console.print("[red]Configuration is invalid:[/red]")
            for error in errors:
                console.print(f"  • {error}")
            sys.exit(1)
        else:
            console.print("[green]✓ Configuration is valid[/green]")
    except Exception as e:
        console.print(f"[red]Error loading config:[/red] {e}")
        sys.exit(1)


@config_group.command("show")
@click.option("--config", "config_path", type=click.Path(exists=True), help="Config file path")
def config_show(config_path: str | None) -> None:
    """Show current configuration."""
    config = load_config(Path(config_path) if config_path else None)

    console.print("\n[bold]Current Configuration[/bold]\n")

    table = Table(title="Settings")
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("github.repo", config.github.repo)
    table.add_row("github.token", "set" if config.github.token else "[yellow]not set[/yellow]")
    table.add_row("PRs scanned", str(config.pr_limit))
    table.add_row("fetch.request_delay_seconds", str(config.fetch.request_delay_seconds))
    table.add_row("classifier.modifier_window", str(config.classifier.modifier_window))
    table.add_row("aggregator.exclude_bots", str(config.aggregator.exclude_bots))
    table.add_row("aggregator.ignored_authors", ", ".join(config.aggregator.ignored_authors))
    table.add_row("report.sort_by", config.report.sort_by)
    table.add_row("report.primary_only", str(config.report.primary_only))
    table.add_row("output.path", config.output.path)
    table.add_row("output.format", config.output.format)
    table.add_row("output.logo_dir", config.output.logo_dir or "-")

    console.print(table)


if __name__ == "__main__":
    cli()
