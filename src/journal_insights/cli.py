"""CLI entry point for the insight engine.

Reads a JSON array of journal entries exported by the surrounding
application and prints the insights each generator produces.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

import click

from .core.config import Settings, load_settings
from .core.errors import ConfigError, ValidationError
from .core.models import Insight, JournalEntry, parse_entries
from .observability.logger import get_logger, new_run_id, setup_logging

logger = get_logger(__name__)


def _load_entries(path: str) -> list[JournalEntry]:
    """Parse the export file, oldest trade first."""
    with open(path, encoding="utf-8") as f:
        try:
            records: Any = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError(f"{path} is not valid UTF-8 JSON: {exc}") from exc
    if not isinstance(records, list):
        raise ValidationError(f"{path} must contain a JSON array of entries")
    entries = parse_entries(records)
    return sorted(entries, key=lambda e: e.trade_date)


def _entries_or_exit(ctx: click.Context, path: str) -> list[JournalEntry]:
    try:
        entries = _load_entries(path)
    except ValidationError as exc:
        click.echo(f"Invalid input: {exc}", err=True)
        ctx.exit(2)
    logger.debug("entries_loaded", path=path, count=len(entries))
    return entries


def _print_insight(insight: Insight) -> None:
    stat = f"  [{insight.stat}]" if insight.stat else ""
    click.echo(f"{insight.severity.value.upper():8s} {insight.title}{stat}")
    click.echo(f"         {insight.message}")


@click.group()
@click.option("--config", default=None, help="TOML config file path")
@click.option("--log-level", default=None, help="Override log level")
@click.pass_context
def main(ctx: click.Context, config: str | None, log_level: str | None) -> None:
    """Behavioral insights for trading journals."""
    try:
        settings = load_settings(config)
    except ConfigError as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc

    obs = settings.observability
    setup_logging(level=log_level or obs.log_level, format=obs.log_format)
    new_run_id()
    ctx.obj = settings


@main.command()
@click.argument("entries_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format", "fmt",
    type=click.Choice(["text", "json", "csv"]),
    default="text",
    help="Output format",
)
@click.pass_context
def insights(ctx: click.Context, entries_file: str, fmt: str) -> None:
    """Every qualifying insight across the full history."""
    from .export import InsightExporter
    from .insights.registry import create_generator

    settings: Settings = ctx.obj
    entries = _entries_or_exit(ctx, entries_file)
    results = create_generator("global", settings).generate(entries)

    if fmt == "json":
        click.echo(InsightExporter().to_json(results))
    elif fmt == "csv":
        click.echo(InsightExporter().to_csv(results), nl=False)
    elif not results:
        click.echo("Not enough data for insights yet.")
    else:
        for insight in results:
            _print_insight(insight)


@main.command()
@click.argument("entries_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--date", "on_date", default=None, help="Treat this date as today (YYYY-MM-DD)")
@click.pass_context
def today(ctx: click.Context, entries_file: str, on_date: str | None) -> None:
    """The single most relevant insight for today."""
    from .core.clock import FixedClock, LocalClock
    from .insights.registry import create_generator

    settings: Settings = ctx.obj
    try:
        clock = FixedClock(date.fromisoformat(on_date)) if on_date else LocalClock()
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--date") from exc

    entries = _entries_or_exit(ctx, entries_file)
    results = create_generator("today", settings, clock=clock).generate(entries)
    if not results:
        click.echo("Nothing notable for today.")
        return
    _print_insight(results[0])


@main.command()
@click.argument("entries_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--month", "month_str", required=True, help="Calendar month (YYYY-MM)")
@click.pass_context
def month(ctx: click.Context, entries_file: str, month_str: str) -> None:
    """Headline insight for one calendar month."""
    from .insights.month import entries_in_month
    from .insights.registry import create_generator

    settings: Settings = ctx.obj
    try:
        parsed = datetime.strptime(month_str, "%Y-%m")
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--month") from exc

    entries = _entries_or_exit(ctx, entries_file)
    in_month = entries_in_month(entries, parsed.year, parsed.month)
    results = create_generator("month", settings).generate(in_month)
    if not results:
        click.echo("Nothing notable this month.")
        return
    _print_insight(results[0])


@main.command()
@click.argument("entries_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--out", default=None, help="Write the JSON report to this path")
@click.pass_context
def psychology(ctx: click.Context, entries_file: str, out: str | None) -> None:
    """Readiness and mindset-tag correlation report (JSON)."""
    from .export import InsightExporter
    from .insights.psychology import PsychologyAnalyser

    settings: Settings = ctx.obj
    entries = _entries_or_exit(ctx, entries_file)
    report = PsychologyAnalyser(config=settings.psychology).analyse(entries)
    text = InsightExporter().report_to_json(report)

    if out:
        Path(out).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Report written to {out}")
    else:
        click.echo(text)


@main.command("generators")
def generators() -> None:
    """List registered insight generators."""
    from .insights.registry import list_generators

    for generator_id in list_generators():
        click.echo(generator_id)


if __name__ == "__main__":
    main()
