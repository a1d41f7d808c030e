"""
Command-line interface for the outfit planner.

Provides commands for:
- Outfit recommendation from weather and ride parameters
- Rule table consistency checking
- Feedback file validation
- Personalization status
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from outfit_planner.assembler import OutfitAssembler
from outfit_planner.config import configure_logging, get_settings
from outfit_planner.consistency import TableConsistencyChecker
from outfit_planner.feedback import FeedbackValidator
from outfit_planner.personalization import personalization_status
from outfit_planner.schemas import (
    ActivityContext,
    ActivityType,
    RecommendationResult,
    RiderThermalProfile,
    Severity,
    WeatherConditions,
)
from outfit_planner.trace import save_trace_from_result

app = typer.Typer(
    help="Cycling Outfit Planner - zone-by-zone clothing recommendations for your ride"
)
console = Console()


@app.callback()
def main():
    """Configure logging before any command runs."""
    configure_logging(get_settings().log_level)


# ===== DISPLAY HELPER FUNCTIONS =====


def _display_recommendation(result: RecommendationResult, detailed: bool = False):
    """
    Display the outfit zone by zone.

    Args:
        result: RecommendationResult from the assembler
        detailed: If True, also shows how each slot was decided
    """
    trace = result.trace
    console.print(
        f"\n[bold]Effective temperature: [cyan]{trace.effective_temperature:.1f}°C[/cyan][/bold] "
        f"(raw {trace.raw_temperature:.1f}, offset {trace.personalization_offset:+.1f}, "
        f"{trace.activity_type or 'no activity'} {trace.activity_adjustment:+.1f})"
    )
    if result.personalized:
        console.print("[green]✓ Personalized for this rider[/green]")

    table = Table(title="Recommended Outfit", box=box.ROUNDED)
    table.add_column("Slot", style="cyan")
    table.add_column("Wear", style="yellow")
    if detailed:
        table.add_column("Decided by", style="dim")

    for decision in trace.decisions:
        value = decision.value.replace("_", " ")
        if decision.source == "fallback":
            value = f"[red]{value}[/red]"
        row = [decision.slot.value.replace("_", " ").title(), value]
        if detailed:
            row.append(decision.reasoning)
        table.add_row(*row)

    console.print(table)

    if trace.fallback_slots:
        console.print(
            "[red]✗ Some slots fell back to 'none' because of a rule table defect. "
            "Run `check-tables` for details.[/red]"
        )


def _load_profile(path: Path) -> RiderThermalProfile:
    with open(path, "r") as f:
        return RiderThermalProfile(**json.load(f))


# ===== CLI COMMANDS =====


@app.command()
def recommend(
    temperature: float = typer.Option(..., "--temperature", "-t", help="Air temperature in °C"),
    feels_like: Optional[float] = typer.Option(
        None, "--feels-like", help="Apparent temperature in °C (defaults to --temperature)"
    ),
    wind: float = typer.Option(0.0, "--wind", "-w", min=0.0, help="Wind speed in km/h"),
    humidity: float = typer.Option(50.0, "--humidity", min=0.0, max=100.0, help="Humidity in %"),
    rain: float = typer.Option(0.0, "--rain", "-r", min=0.0, help="Precipitation in mm"),
    activity: Optional[ActivityType] = typer.Option(
        None, "--activity", "-a", help="Ride intensity"
    ),
    duration: Optional[int] = typer.Option(
        None, "--duration", "-d", min=1, help="Ride duration in minutes"
    ),
    offset: Optional[float] = typer.Option(
        None, "--offset", help="Personalization offset (overrides the profile file)"
    ),
    cold_hands: Optional[bool] = typer.Option(
        None, "--cold-hands/--no-cold-hands", help="Rider's hands get cold easily"
    ),
    cold_feet: Optional[bool] = typer.Option(
        None, "--cold-feet/--no-cold-feet", help="Rider's feet get cold easily"
    ),
    profile: Optional[Path] = typer.Option(
        None,
        "--profile",
        "-p",
        help="Path to rider thermal profile JSON file",
        exists=True,
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the outfit as JSON"),
    detailed: bool = typer.Option(False, "--detailed", help="Show how each slot was decided"),
    save_trace: bool = typer.Option(
        False,
        "--save-trace/--no-trace",
        help="Save recommendation trace to file",
    ),
    trace_format: str = typer.Option(
        "json",
        "--trace-format",
        "-f",
        help="Trace output format (json or markdown)",
    ),
):
    """
    Recommend what to wear for a ride.
    """
    settings = get_settings()

    rider = None
    if profile:
        try:
            rider = _load_profile(profile)
        except (OSError, ValueError) as e:
            console.print(f"[red]✗ Failed to load profile: {e}[/red]")
            raise typer.Exit(1)

    overrides = {
        key: value
        for key, value in (
            ("personalization_offset", offset),
            ("cold_hands", cold_hands),
            ("cold_feet", cold_feet),
        )
        if value is not None
    }
    if overrides:
        base = rider.model_dump() if rider else {}
        rider = RiderThermalProfile(**{**base, **overrides})

    weather = WeatherConditions(
        temperature=temperature,
        feels_like=feels_like if feels_like is not None else temperature,
        wind_speed=wind,
        humidity=humidity,
        precipitation=rain,
    )
    ride = ActivityContext(
        activity_type=activity or settings.default_activity,
        duration_minutes=duration or settings.default_duration_minutes,
    )

    result = OutfitAssembler().recommend(weather, ride, rider)

    if as_json:
        typer.echo(json.dumps(result.outfit.model_dump(mode="json"), indent=2))
    else:
        _display_recommendation(result, detailed=detailed)

    if save_trace:
        try:
            trace_path = save_trace_from_result(result, settings.trace_dir, format=trace_format)
        except ValueError as e:
            console.print(f"[red]✗ {e}[/red]")
            raise typer.Exit(1)
        console.print(f"\n✓ Recommendation trace saved: [cyan]{trace_path}[/cyan]")


@app.command()
def check_tables():
    """
    Check every rule table for ordering, catch-all rows and accepted values.
    """
    checker = TableConsistencyChecker()
    report = checker.check()

    if not report.issues:
        console.print(f"[green]✓ All {report.slots_checked} rule tables are consistent[/green]")
        return

    table = Table(title="Rule Table Issues", box=box.ROUNDED)
    table.add_column("Slot", style="cyan")
    table.add_column("Row", justify="right")
    table.add_column("Issue")
    table.add_column("Detail")

    for issue in report.issues:
        color = "red" if issue.severity == Severity.BLOCKING else "yellow"
        row = "-" if issue.row_index is None else str(issue.row_index)
        table.add_row(issue.slot.value, row, f"[{color}]{issue.code}[/{color}]", issue.message)

    console.print(table)

    if not report.ok:
        console.print(f"[red]✗ {len(report.blocking)} blocking issue(s)[/red]")
        raise typer.Exit(1)


@app.command()
def validate_feedback(
    feedback_file: Path = typer.Argument(..., help="Feedback JSON file", exists=True),
):
    """
    Validate a "what I actually wore" feedback file.
    """
    try:
        with open(feedback_file, "r") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[red]✗ Not valid JSON: {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(payload, dict):
        console.print("[red]✗ Feedback must be a JSON object[/red]")
        raise typer.Exit(1)

    result = FeedbackValidator.validate(payload)
    if result.valid:
        console.print("[green]✓ Feedback is valid[/green]")
        return

    console.print("[red]✗ Feedback is invalid:[/red]")
    for field, message in result.errors.items():
        console.print(f"  • {field}: {message}")
    raise typer.Exit(1)


@app.command()
def status(
    feedback_count: int = typer.Option(..., "--feedback-count", "-n", min=0, help="Feedbacks submitted"),
    offset: float = typer.Option(0.0, "--offset", help="Current personalization offset"),
):
    """
    Show personalization status for a rider.
    """
    current = personalization_status(feedback_count, offset)

    if current.personalization_active:
        console.print(
            f"[green]✓ Personalization active[/green] (offset {current.thermal_adjustment:+.1f})"
        )
    else:
        remaining = current.next_personalization_at - current.feedback_count
        console.print(f"[yellow]Personalization starts after {remaining} more feedback(s)[/yellow]")

    console.print(f"  Next offset refresh at {current.next_personalization_at} feedbacks")


if __name__ == "__main__":
    app()
