#!/usr/bin/env python3
"""
Quick start script to demonstrate the Cycling Outfit Planner.

This script shows the complete workflow:
1. Check the rule tables
2. Recommend an outfit for a cold morning ride
3. Personalize the recommendation for a rider who runs cold
4. Let rain override the outer layer and shoe covers
5. Compare the recommendation with what the rider actually wore
"""

from rich.console import Console
from rich.table import Table
from rich import box

from outfit_planner.assembler import OutfitAssembler
from outfit_planner.consistency import TableConsistencyChecker
from outfit_planner.feedback import FeedbackValidator, compare_outfits
from outfit_planner.personalization import personalization_status
from outfit_planner.schemas import (
    ActivityContext,
    ActivityType,
    RiderThermalProfile,
    WeatherConditions,
)

console = Console()


def print_header(title: str):
    """Print a formatted header."""
    console.print(f"\n[bold cyan]{title}[/bold cyan]")
    console.print("=" * len(title))


def print_outfit(result):
    """Print outfit slots as a table."""
    table = Table(box=box.SIMPLE)
    table.add_column("Slot", style="cyan")
    table.add_column("Wear", style="yellow")
    for slot, value in result.outfit.slot_values().items():
        table.add_row(slot.value, value)
    console.print(f"Effective temperature: {result.trace.effective_temperature:.1f}°C")
    console.print(table)


def main():
    """Run the complete demonstration workflow."""
    console.print("\n[bold magenta]🚴 Cycling Outfit Planner[/bold magenta]")
    console.print("[dim]Demonstration of complete workflow[/dim]\n")

    assembler = OutfitAssembler()

    # ===== STEP 1: Check Rule Tables =====
    print_header("Step 1: Check Rule Tables")

    checker = TableConsistencyChecker()
    report = checker.check()
    console.print(checker.display_summary(report))

    # ===== STEP 2: Cold Morning Ride =====
    print_header("Step 2: Cold Morning Ride (2°C, easy)")

    morning = WeatherConditions(
        temperature=2.0, feels_like=-1.0, wind_speed=5.0, humidity=80.0, precipitation=0.0
    )
    easy_ride = ActivityContext(activity_type=ActivityType.EASY, duration_minutes=90)
    baseline = assembler.recommend(morning, easy_ride)
    print_outfit(baseline)

    # ===== STEP 3: Personalized =====
    print_header("Step 3: Rider Who Runs Cold")

    status = personalization_status(feedback_count=10, thermal_adjustment=-2.0)
    console.print(
        f"Personalization active: {status.personalization_active} "
        f"(next refresh at {status.next_personalization_at} feedbacks)"
    )
    rider = RiderThermalProfile(
        personalization_offset=status.thermal_adjustment,
        offset_version=status.feedback_count,
        cold_hands=True,
        cold_feet=True,
    )
    personalized = assembler.recommend(morning, easy_ride, rider)
    print_outfit(personalized)

    # ===== STEP 4: Rain Override =====
    print_header("Step 4: Warm Rain (18°C, 6 mm, tempo)")

    rainy = WeatherConditions(
        temperature=18.0, feels_like=18.0, wind_speed=10.0, humidity=95.0, precipitation=6.0
    )
    tempo_ride = ActivityContext(activity_type=ActivityType.TEMPO, duration_minutes=60)
    print_outfit(assembler.recommend(rainy, tempo_ride))

    # ===== STEP 5: Compare with Feedback =====
    print_header("Step 5: Compare with What Was Worn")

    worn = personalized.outfit.model_dump(mode="json")
    worn["neck"] = "buff"
    validation = FeedbackValidator.validate(
        {
            "temperature": 2.0,
            "feels_like": -1.0,
            "wind_speed": 5.0,
            "humidity": 80.0,
            "activity_type": "easy",
            "duration_minutes": 90,
            "actual_outfit": worn,
            "overall_rating": 4,
            "zone_ratings": {"neck": 5, "hands": 4},
        }
    )
    console.print(f"Feedback valid: {validation.valid}")

    comparison = compare_outfits(personalized.outfit, validation.feedback.actual_outfit)
    console.print(f"Slots matching recommendation: {comparison.match_ratio:.0%}")
    for diff in comparison.differing:
        console.print(f"  • {diff.slot.value}: recommended {diff.recommended}, wore {diff.actual}")


if __name__ == "__main__":
    main()
