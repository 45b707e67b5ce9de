"""Command-line interface for PeriodHub."""

import json
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .exceptions import PeriodHubError
from .models.assessment import AssessmentKind
from .models.journal import Flow, Mood, ProgressEntry, SymptomEntry, Technique
from .models.pain import MenstrualStatus
from .services import phq9
from .services.analysis import AnalysisService
from .services.export import export_csv
from .services.seo import SeoService
from .services.storage import JournalStorage, Namespace
from .services.validation import build_pain_record
from .utils.config import get_settings
from .utils.i18n import Locale
from .utils.logging import setup_logging

app = typer.Typer(
    name="periodhub",
    help="PeriodHub - menstrual pain journal, self-assessments and site tooling",
    no_args_is_help=True,
)
console = Console()


def parse_date(date_str: Optional[str]) -> date:
    """Parse a date string or return today.

    Supports:
    - None or empty: today
    - "today": today
    - "yesterday": yesterday
    - "-N": N days ago (e.g., "-1" = yesterday, "-7" = a week ago)
    - "YYYY-MM-DD": specific date
    """
    if date_str is None or date_str.lower() == "today":
        return date.today()

    if date_str.lower() == "yesterday":
        return date.today() - timedelta(days=1)

    if date_str.startswith("-") and date_str[1:].isdigit():
        days_ago = int(date_str[1:])
        return date.today() - timedelta(days=days_ago)

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        console.print(f"[red]Invalid date format: {date_str}[/red]")
        console.print("[dim]Use: YYYY-MM-DD, 'yesterday', or -N (days ago)[/dim]")
        raise typer.Exit(1)


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _validation_messages(error: ValueError) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(err["msg"] for err in error.errors())
    return str(error)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for every command."""
    setup_logging("DEBUG" if verbose else get_settings().log_level, console=console)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Start the web interface."""
    from .web import run

    console.print(f"[green]Starting web interface at http://{host}:{port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")
    run(host=host, port=port, reload=reload)


@app.command()
def status():
    """Show configuration and journal storage status."""
    settings = get_settings()

    with JournalStorage() as storage:
        table = Table(title="Journal Storage")
        table.add_column("Namespace", style="cyan")
        table.add_column("Entries", justify="right")
        table.add_column("Capacity", justify="right")
        table.add_column("Usage", justify="right")

        for ns in Namespace:
            info = storage.storage_info(ns)
            color = "red" if info.is_full else "yellow" if info.is_near_full else "green"
            table.add_row(
                ns.value,
                str(info.total),
                str(info.capacity),
                f"[{color}]{info.usage_percent}%[/{color}]",
            )
        schema_version = storage.schema_version

    console.print(table)
    email = "[green]✓ Configured[/green]" if settings.has_email_service else "[yellow]Not configured[/yellow]"
    console.print(f"\nData directory: {settings.data_dir.absolute()}")
    console.print(f"Schema version: {schema_version}")
    console.print(f"Site: {settings.base_url} (default locale {settings.default_locale})")
    console.print(f"E-mail guide service: {email}")


# Symptom journal

@app.command()
def log_symptom(
    pain: int = typer.Option(..., "--pain", "-p", min=0, max=10, help="Pain level 0-10"),
    date_str: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD). Defaults to today."),
    symptom: Optional[list[str]] = typer.Option(None, "--symptom", "-s", help="Symptom (repeatable)"),
    mood: Mood = typer.Option(Mood.NEUTRAL, "--mood", "-m"),
    flow: Flow = typer.Option(Flow.NONE, "--flow", "-f"),
    medication: Optional[list[str]] = typer.Option(None, "--medication", help="Medication (repeatable)"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n"),
):
    """Add a symptom journal entry."""
    entry_date = parse_date(date_str)
    try:
        entry = SymptomEntry(
            entry_date=entry_date,
            pain_level=pain,
            symptoms=symptom or [],
            mood=mood,
            flow=flow,
            medications=medication or [],
            notes=notes,
        )
    except ValueError as e:
        _fail(_validation_messages(e))

    with JournalStorage() as storage:
        storage.add_symptom_entry(entry)
        info = storage.storage_info(Namespace.SYMPTOMS)

    console.print(f"[green]✓ Saved symptom entry for {entry_date}[/green] [dim]({entry.id})[/dim]")
    if info.is_near_full:
        console.print(f"[yellow]Journal is {info.usage_percent}% full, consider 'periodhub prune'[/yellow]")


@app.command()
def symptoms(
    limit: int = typer.Option(20, "--limit", "-l", help="Number of entries to show"),
):
    """List recent symptom journal entries."""
    with JournalStorage() as storage:
        entries = storage.list_symptom_entries()

    if not entries:
        console.print("[yellow]No symptom entries yet[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Symptom Journal (latest {min(limit, len(entries))} of {len(entries)})")
    table.add_column("Date", style="cyan")
    table.add_column("Pain", justify="right")
    table.add_column("Mood")
    table.add_column("Flow")
    table.add_column("Symptoms")
    table.add_column("ID", style="dim")

    for entry in reversed(entries[-limit:]):
        table.add_row(
            entry.entry_date.isoformat(),
            f"{entry.pain_level}/10",
            entry.mood.display,
            entry.flow.value,
            ", ".join(entry.symptoms) or "-",
            entry.id,
        )
    console.print(table)

    summary = AnalysisService().symptom_summary(entries)
    console.print(f"\nAverage pain {summary['average_pain']}/10, trend: {summary['trend']}")


# Pain tracker

@app.command()
def log_pain(
    pain: int = typer.Option(..., "--pain", "-p", help="Pain level 0-10"),
    date_str: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD). Defaults to today."),
    time_str: Optional[str] = typer.Option(None, "--time", "-t", help="Time (HH:MM). Defaults to now."),
    pain_type: Optional[list[str]] = typer.Option(None, "--type", help="Pain type (repeatable)"),
    location: Optional[list[str]] = typer.Option(None, "--location", help="Location (repeatable)"),
    status: MenstrualStatus = typer.Option(MenstrualStatus.DAY_1, "--status", help="Cycle phase"),
    medication: Optional[str] = typer.Option(None, "--medication", "-m", help="Remedy taken"),
    effectiveness: Optional[int] = typer.Option(None, "--effectiveness", "-e", help="Remedy effectiveness 0-10"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing record for the date"),
):
    """Record a pain tracker entry (one per day)."""
    entry_date = parse_date(date_str)
    data = {
        "entry_date": entry_date.isoformat(),
        "entry_time": time_str or datetime.now().strftime("%H:%M"),
        "pain_level": pain,
        "pain_types": pain_type or [],
        "locations": location or [],
        "menstrual_status": status.value,
        "medications": [medication] if medication else [],
        "effectiveness": effectiveness,
        "notes": notes,
    }

    try:
        record, warnings = build_pain_record(data)
        with JournalStorage() as storage:
            saved = storage.add_pain_record(record, overwrite=overwrite)
    except PeriodHubError as e:
        for error in getattr(e, "errors", None) or [e.message]:
            console.print(f"[red]✗ {error}[/red]")
        raise typer.Exit(1)

    for warning in warnings:
        console.print(f"[yellow]! {warning}[/yellow]")
    console.print(f"[green]✓ Saved pain record for {entry_date}[/green] [dim]({saved.id})[/dim]")


@app.command()
def pain(
    limit: int = typer.Option(20, "--limit", "-l", help="Number of records to show"),
    csv: Optional[Path] = typer.Option(None, "--csv", help="Also write all records to this CSV file"),
):
    """List pain tracker records."""
    with JournalStorage() as storage:
        records = sorted(storage.list_pain_records(), key=lambda r: r.recorded_at, reverse=True)

    if not records:
        console.print("[yellow]No pain records yet[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Pain Records")
    table.add_column("Date", style="cyan")
    table.add_column("Time")
    table.add_column("Pain", justify="right")
    table.add_column("Phase")
    table.add_column("Remedies")
    table.add_column("Effect", justify="right")

    for record in records[:limit]:
        table.add_row(
            record.entry_date.isoformat(),
            record.entry_time.strftime("%H:%M"),
            f"{record.pain_level}/10",
            record.menstrual_status.display,
            ", ".join(m.name for m in record.medications) or "-",
            "-" if record.effectiveness is None else str(record.effectiveness),
        )
    console.print(table)

    if csv:
        csv.write_text(export_csv(records), encoding="utf-8")
        console.print(f"[green]✓ Wrote {len(records)} records to {csv}[/green]")


# Shared journal maintenance

@app.command()
def delete(
    namespace: Namespace = typer.Argument(..., help="Journal namespace"),
    entry_id: str = typer.Argument(..., help="Entry ID"),
):
    """Delete one journal entry."""
    with JournalStorage() as storage:
        removed = {
            Namespace.SYMPTOMS: storage.delete_symptom_entry,
            Namespace.PAIN: storage.delete_pain_record,
            Namespace.PROGRESS: storage.delete_progress_entry,
        }[namespace](entry_id)

    if not removed:
        _fail(f"Entry not found: {entry_id}")
    console.print(f"[green]✓ Deleted {entry_id}[/green]")


@app.command()
def prune(
    namespace: Namespace = typer.Argument(..., help="Journal namespace"),
    count: int = typer.Argument(..., min=1, help="Number of oldest entries to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete the oldest entries of a namespace."""
    if not yes:
        typer.confirm(f"Delete the {count} oldest entries from {namespace.value}?", abort=True)

    with JournalStorage() as storage:
        removed = storage.delete_oldest(namespace, count)
        remaining = storage.storage_info(namespace).total

    console.print(f"[green]✓ Deleted {removed} entries[/green] [dim]({remaining} remaining)[/dim]")


# Stress management

@app.command()
def log_stress(
    stress_level: int = typer.Option(..., "--stress", "-s", help="Stress level 1-10"),
    mood: int = typer.Option(..., "--mood", "-m", help="Mood rating 1-10"),
    date_str: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD). Defaults to today."),
    technique: Optional[list[Technique]] = typer.Option(None, "--technique", "-t", help="Technique used (repeatable)"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n"),
):
    """Add a stress-management progress entry."""
    try:
        entry = ProgressEntry(
            entry_date=parse_date(date_str),
            stress_level=stress_level,
            mood_rating=mood,
            techniques=technique or [],
            notes=notes,
        )
    except ValueError as e:
        _fail(_validation_messages(e))

    with JournalStorage() as storage:
        storage.add_progress_entry(entry)
    console.print(f"[green]✓ Logged stress {stress_level}/10, mood {mood}/10[/green]")


@app.command()
def stress(
    limit: int = typer.Option(10, "--limit", "-l", help="Number of entries to show"),
):
    """Show recent stress progress and statistics."""
    with JournalStorage() as storage:
        entries = storage.list_progress()
        recent = storage.recent_progress(limit)

    if not entries:
        console.print("[yellow]No progress entries yet[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Stress Progress")
    table.add_column("Date", style="cyan")
    table.add_column("Stress", justify="right")
    table.add_column("Mood", justify="right")
    table.add_column("Techniques")

    for entry in recent:
        table.add_row(
            entry.entry_date.isoformat(),
            f"[{entry.stress_color}]{entry.stress_level}[/{entry.stress_color}]",
            f"[{entry.mood_color}]{entry.mood_rating}[/{entry.mood_color}]",
            ", ".join(t.label() for t in entry.techniques) or "-",
        )
    console.print(table)

    stats = AnalysisService().progress_statistics(entries)
    console.print(Panel(
        f"Entries: {stats.total_entries}\n"
        f"Average stress: {stats.average_stress_level}\n"
        f"Average mood: {stats.average_mood_rating}\n"
        f"Used techniques: {stats.techniques_used_rate}%\n"
        f"Improvement: {stats.improvement_trend}%",
        title="Statistics",
    ))


# Questionnaires

@app.command(name="phq9")
def phq9_command(
    locale: Locale = typer.Option(Locale.EN, "--locale", "-l", help="Question language"),
    save: bool = typer.Option(True, "--save/--no-save", help="Keep the result in the history"),
):
    """Take the PHQ-9 screening interactively."""
    lang = 0 if locale is Locale.EN else 1
    console.print(Panel(
        "\n".join(f"{value} = {labels[lang]}" for value, *labels in phq9.OPTIONS),
        title="PHQ-9",
    ))

    raw = {}
    for question in phq9.QUESTIONS:
        while True:
            value = typer.prompt(f"{question.id}. {question.label(locale)}", type=int)
            if 0 <= value <= 3:
                break
            console.print("[red]Answer with a number from 0 to 3[/red]")
        raw[f"q{question.id}"] = value

    try:
        result = phq9.evaluate(phq9.parse_answers(raw), locale)
    except PeriodHubError as e:
        _fail(e.message)

    color = {"low": "green", "moderate": "yellow"}.get(result.risk_level, "red")
    console.print(f"\n[{color}]Score {result.total_score}/27: {result.severity_label}[/{color}]")
    for recommendation in result.recommendations:
        console.print(f"  • {recommendation}")

    if save:
        with JournalStorage() as storage:
            storage.save_assessment(AssessmentKind.PHQ9, result)


# Analytics and data

@app.command()
def analytics():
    """Summarize pain records: averages, treatments, patterns and insights."""
    with JournalStorage() as storage:
        records = storage.list_pain_records()

    service = AnalysisService()
    result = service.pain_analytics(records)
    if result.is_empty:
        console.print("[yellow]No pain records to analyze[/yellow]")
        raise typer.Exit(0)

    console.print(Panel(
        f"Records: {result.total_records}\n"
        f"Average pain: {result.average_pain_level}/10\n"
        f"Trend: {result.trend} (slope {result.trend_slope:+.2f})",
        title="Pain Analytics",
    ))

    if result.effective_treatments:
        table = Table(title="Treatments")
        table.add_column("Treatment", style="cyan")
        table.add_column("Uses", justify="right")
        table.add_column("Average", justify="right")
        table.add_column("Success", justify="right")
        for treatment in result.effective_treatments:
            table.add_row(
                treatment.treatment,
                str(treatment.usage_count),
                f"{treatment.average_effectiveness}",
                f"{treatment.success_rate}%",
            )
        console.print(table)

    for insight in result.insights:
        console.print(f"  • {insight}")
    for pattern in service.find_patterns(records):
        console.print(f"  [cyan]{pattern.pattern_type}[/cyan] {pattern.description}")


@app.command()
def export(
    output: Path = typer.Argument(..., help="Output JSON file"),
):
    """Export the whole journal as JSON."""
    with JournalStorage() as storage:
        data = storage.export_data()

    output.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    counts = ", ".join(f"{len(data[ns.value])} {ns.value}" for ns in Namespace)
    console.print(f"[green]✓ Exported {counts} to {output}[/green]")


@app.command()
def import_data(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file from 'export'"),
    replace: bool = typer.Option(False, "--replace", help="Clear existing entries first"),
):
    """Import a journal export."""
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        _fail(f"Not valid JSON: {e}")

    try:
        with JournalStorage() as storage:
            counts = storage.import_data(payload, replace=replace)
    except PeriodHubError as e:
        _fail(e.message)

    for namespace, count in counts.items():
        console.print(f"[green]✓ {namespace}: {count} imported[/green]")


@app.command()
def sitemap():
    """List every URL in the sitemap with its hreflang alternates."""
    entries = SeoService().sitemap_entries()

    table = Table(title=f"Sitemap ({len(entries)} URLs)")
    table.add_column("URL", style="cyan")
    table.add_column("Priority", justify="right")
    table.add_column("Changes")

    for entry in entries:
        table.add_row(entry.loc, f"{entry.priority:.1f}", entry.changefreq)
    console.print(table)


if __name__ == "__main__":
    app()
