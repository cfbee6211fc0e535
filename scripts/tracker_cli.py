# ABOUTME: Provides a CLI over exported tracker records: dashboards, review queue and weak-area checks.
# ABOUTME: Thin calling layer; every number comes from the src.analytics / src.review / src.weak_areas core.

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from src.analytics.aggregator import AnalyticsAggregator
from src.analytics.export import summary_to_dict, write_summary
from src.common.config import TrackerConfig, load_tracker_config
from src.common.errors import InvalidArgument, RecordLoadError
from src.common.log_setup import setup_logging
from src.common.records import load_snapshot
from src.common.repository import InMemoryTrackerRepository
from src.common.schemas import as_utc, unresolved
from src.review.scheduler import items_due_for_review, next_review_date, review_interval_days
from src.weak_areas.detector import detect_weak_areas

console = Console()
app = typer.Typer(help="Derive review dates, analytics and weak areas from interview-prep records.")

RECORDS_HELP = "Directory holding problems/topics/interviews/weak_areas/sessions as .parquet or .json."


def _parse_now(now: Optional[str]) -> datetime:
    if not now:
        return datetime.now(timezone.utc)
    try:
        parsed = datetime.fromisoformat(now)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--now") from exc
    return as_utc(parsed)


def _load(records_dir: Path, config_path: Optional[Path], verbose: bool):
    setup_logging(verbose, console=console)
    try:
        config = load_tracker_config(config_path)
        snapshot = load_snapshot(records_dir)
    except (RecordLoadError, InvalidArgument) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    return InMemoryTrackerRepository.from_snapshot(snapshot), config


def _emit(summary, output: Optional[Path]) -> None:
    if output is None:
        return
    write_summary(summary, output)
    console.print(f"[bold]Saved to {output}[/bold]")


def _kv_table(title: str, values: dict) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Metric")
    table.add_column("Value")
    for key, value in values.items():
        shown = f"{value:.2f}" if isinstance(value, float) else str(value)
        table.add_row(key.replace("_", " "), shown)
    return table


@app.command()
def dashboard(
    records_dir: Path = typer.Option(..., "--records-dir", exists=True, file_okay=False, help=RECORDS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Tracker config YAML."),
    output: Optional[Path] = typer.Option(None, "--output", help="Optional JSON output path."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Show the composite dashboard summary."""
    repository, cfg = _load(records_dir, config, verbose)
    stats = AnalyticsAggregator(repository, cfg).dashboard()
    console.print(_kv_table("Dashboard", summary_to_dict(stats)))
    _emit(stats, output)


@app.command()
def dsa(
    records_dir: Path = typer.Option(..., "--records-dir", exists=True, file_okay=False, help=RECORDS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Tracker config YAML."),
    now: Optional[str] = typer.Option(None, "--now", help="ISO timestamp to evaluate against (default: current UTC time)."),
    output: Optional[Path] = typer.Option(None, "--output", help="Optional JSON output path."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Rank DSA categories weakest first."""
    repository, cfg = _load(records_dir, config, verbose)
    analytics = AnalyticsAggregator(repository, cfg).dsa(_parse_now(now))

    table = Table(title="Category performance", show_header=True, header_style="bold magenta")
    for column in ("Category", "Solved", "Total", "Success %", "Avg min", "Strength"):
        table.add_column(column)
    for perf in analytics.category_performance:
        color = {"Strong": "green", "Average": "yellow", "Weak": "red"}[perf.strength_level.value]
        table.add_row(
            perf.category,
            str(perf.solved_count),
            str(perf.total_problems),
            f"{perf.success_rate:.1f}",
            f"{perf.average_time:.1f}",
            f"[{color}]{perf.strength_level.value}[/{color}]",
        )
    console.print(table)
    console.print(f"Optimal solution rate: {analytics.optimal_solution_rate:.1f}%")
    console.print(f"Due for review: {len(analytics.needs_review)}")
    _emit(analytics, output)


@app.command("system-design")
def system_design(
    records_dir: Path = typer.Option(..., "--records-dir", exists=True, file_okay=False, help=RECORDS_HELP),
    output: Optional[Path] = typer.Option(None, "--output", help="Optional JSON output path."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Show system-design topic progress per category."""
    repository, cfg = _load(records_dir, None, verbose)
    analytics = AnalyticsAggregator(repository, cfg).system_design()

    table = Table(title="Topic progress", show_header=True, header_style="bold magenta")
    for column in ("Category", "Mastered", "Total", "Progress %"):
        table.add_column(column)
    for row in analytics.topic_progress:
        table.add_row(row.category, str(row.mastered), str(row.total), f"{row.progress:.1f}")
    console.print(table)
    console.print(f"Average confidence: {analytics.average_confidence:.2f}")
    _emit(analytics, output)


@app.command()
def interviews(
    records_dir: Path = typer.Option(..., "--records-dir", exists=True, file_okay=False, help=RECORDS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Tracker config YAML."),
    output: Optional[Path] = typer.Option(None, "--output", help="Optional JSON output path."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Summarize mock-interview scores and common weaknesses."""
    repository, cfg = _load(records_dir, config, verbose)
    analytics = AnalyticsAggregator(repository, cfg).interviews()

    summary = summary_to_dict(analytics)
    for key in ("average_scores_by_type", "score_trends", "common_weaknesses"):
        summary.pop(key)
    console.print(_kv_table("Interviews", summary))
    for track, score in analytics.average_scores_by_type.items():
        console.print(f"  {track}: {score:.2f}")
    if analytics.common_weaknesses:
        console.print(f"[yellow]Common weaknesses: {', '.join(analytics.common_weaknesses)}[/yellow]")
    _emit(analytics, output)


@app.command("weak-areas")
def weak_areas(
    records_dir: Path = typer.Option(..., "--records-dir", exists=True, file_okay=False, help=RECORDS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Tracker config YAML."),
    now: Optional[str] = typer.Option(None, "--now", help="ISO timestamp to evaluate against (default: current UTC time)."),
    output: Optional[Path] = typer.Option(None, "--output", help="Optional JSON output path."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """List active weak areas and recommended focus categories."""
    repository, cfg = _load(records_dir, config, verbose)
    analytics = AnalyticsAggregator(repository, cfg).weak_areas(_parse_now(now))

    table = Table(title="Active weak areas", show_header=True, header_style="bold magenta")
    for column in ("Area", "Category", "Severity", "Days open"):
        table.add_column(column)
    for summary in analytics.active_weak_areas:
        table.add_row(summary.area, summary.category, summary.severity.value, str(summary.days_identified))
    console.print(table)
    console.print(f"Resolved in the last month: {analytics.resolved_this_month}")
    if analytics.recommended_focus_areas:
        console.print(f"[bold]Focus next:[/bold] {', '.join(analytics.recommended_focus_areas)}")
    _emit(analytics, output)


@app.command()
def study(
    records_dir: Path = typer.Option(..., "--records-dir", exists=True, file_okay=False, help=RECORDS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Tracker config YAML."),
    now: Optional[str] = typer.Option(None, "--now", help="ISO timestamp to evaluate against (default: current UTC time)."),
    output: Optional[Path] = typer.Option(None, "--output", help="Optional JSON output path."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Summarize study time (whole hours, partial hours dropped)."""
    repository, cfg = _load(records_dir, config, verbose)
    analytics = AnalyticsAggregator(repository, cfg).study(_parse_now(now))

    console.print(f"[bold]This week:[/bold] {analytics.total_hours_this_week}h")
    console.print(f"[bold]This month:[/bold] {analytics.total_hours_this_month}h")
    for kind, hours in analytics.hours_by_type.items():
        console.print(f"  {kind}: {hours}h")
    console.print(f"Average productivity: {analytics.average_productivity:.2f}")
    _emit(analytics, output)


@app.command("review-queue")
def review_queue(
    records_dir: Path = typer.Option(..., "--records-dir", exists=True, file_okay=False, help=RECORDS_HELP),
    now: Optional[str] = typer.Option(None, "--now", help="ISO timestamp to evaluate against (default: current UTC time)."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """List problems whose review date has passed, earliest first."""
    repository, _ = _load(records_dir, None, verbose)
    due = items_due_for_review(repository.practice_items(), _parse_now(now))
    if not due:
        console.print("[green]Nothing due for review[/green]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    for column in ("ID", "Title", "Category", "Review date"):
        table.add_column(column)
    for item in due:
        table.add_row(item.id, item.title, item.category, item.next_review_date.isoformat())
    console.print(table)


@app.command("next-review")
def next_review(
    attempt_count: int = typer.Option(..., "--attempt-count", help="Attempt count after recording the attempt (>= 1)."),
    optimal: bool = typer.Option(True, "--optimal/--suboptimal", help="Whether the attempt was solved optimally."),
    now: Optional[str] = typer.Option(None, "--now", help="ISO timestamp of the attempt (default: current UTC time)."),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Tracker config YAML."),
) -> None:
    """Print the next review date for one attempt."""
    cfg: TrackerConfig = load_tracker_config(config)
    intervals = cfg.review.intervals_days
    try:
        days = review_interval_days(attempt_count, optimal, intervals)
        due = next_review_date(attempt_count, optimal, _parse_now(now), intervals)
    except InvalidArgument as exc:
        raise typer.BadParameter(str(exc), param_hint="--attempt-count") from exc
    typer.echo(f"{due.isoformat()} (+{days}d)")


@app.command("analyze-interview")
def analyze_interview(
    interview_id: str = typer.Option(..., "--interview-id", help="Interview to analyze."),
    records_dir: Path = typer.Option(..., "--records-dir", exists=True, file_okay=False, help=RECORDS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Tracker config YAML."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Show which weak areas an interview would create (dry run, nothing is persisted)."""
    repository, cfg = _load(records_dir, config, verbose)
    matches = [i for i in repository.interviews() if i.id == interview_id]
    if not matches:
        console.print(f"[red]No interview with id {interview_id}[/red]")
        raise typer.Exit(code=1)

    candidates = detect_weak_areas(matches[0], unresolved(repository.weak_areas()), cfg.detector)
    if not candidates:
        console.print(f"[green]No new weak areas for interview {interview_id}[/green]")
        return
    for candidate in candidates:
        color = "red" if candidate.severity.value == "High" else "yellow"
        console.print(
            f"[{color}]{candidate.area} ({candidate.category}) - {candidate.severity.value}[/{color}]"
            f" score={candidate.score}"
        )


if __name__ == "__main__":
    app()
