"""
Tests for rider feedback validation.

Test scenarios:
1. A complete, in-domain feedback file is accepted
2. Out-of-domain garments and ratings are reported per field
3. Recommended and worn outfits are compared slot by slot
"""

import json
from pathlib import Path

import pytest

from outfit_planner.assembler import recommend_outfit
from outfit_planner.feedback import FeedbackValidator, compare_outfits
from outfit_planner.schemas import (
    ActivityContext,
    OutfitRecommendation,
    Slot,
    WeatherConditions,
)


FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name):
    with open(FIXTURES / name) as f:
        return json.load(f)


# Fixtures

@pytest.fixture
def valid_payload():
    """Load valid feedback payload."""
    return load_fixture("feedback_valid.json")


@pytest.fixture
def invalid_payload():
    """Load feedback with out-of-domain values."""
    return load_fixture("feedback_invalid.json")


# Payload Validation

def test_valid_feedback_is_accepted(valid_payload):
    """Test that a well-formed feedback file parses."""
    result = FeedbackValidator.validate(valid_payload)

    assert result.valid
    assert result.errors == {}
    assert result.feedback.actual_outfit.torso.outer.value == "windbreaker"
    assert result.feedback.zone_ratings.hands == 2
    assert result.feedback.zone_ratings.head is None


def test_invalid_feedback_reports_each_field(invalid_payload):
    """Test that errors are keyed by the offending field path."""
    result = FeedbackValidator.validate(invalid_payload)

    assert not result.valid
    assert result.feedback is None
    assert "actual_outfit.head" in result.errors
    assert "overall_rating" in result.errors


def test_garment_from_another_zone_is_rejected(valid_payload):
    """Test that worn values are checked against their own zone's domain."""
    valid_payload["actual_outfit"]["feet"]["socks"] = "shoe_covers"
    result = FeedbackValidator.validate(valid_payload)

    assert not result.valid
    assert "actual_outfit.feet.socks" in result.errors


def test_missing_zone_is_rejected(valid_payload):
    """Test that every zone must be reported."""
    del valid_payload["actual_outfit"]["neck"]
    result = FeedbackValidator.validate(valid_payload)

    assert "actual_outfit.neck" in result.errors


@pytest.mark.parametrize(
    "field, value",
    [
        ("temperature", 51.0),
        ("feels_like", -50.5),
        ("wind_speed", -1.0),
        ("humidity", 120.0),
        ("rain_mm", -0.1),
        ("duration_minutes", 0),
        ("activity_type", "sprint"),
        ("notes", "x" * 501),
    ],
)
def test_out_of_range_fields_are_rejected(valid_payload, field, value):
    """Test numeric ranges and enum fields on the submission."""
    valid_payload[field] = value
    result = FeedbackValidator.validate(valid_payload)

    assert not result.valid
    assert field in result.errors


def test_unknown_zone_rating_is_rejected(valid_payload):
    """Test that zone ratings only accept the seven zones."""
    valid_payload["zone_ratings"]["eyes"] = 3
    result = FeedbackValidator.validate(valid_payload)

    assert "zone_ratings.eyes" in result.errors


def test_zone_rating_out_of_range_is_rejected(valid_payload):
    """Test that zone ratings are 1-5."""
    valid_payload["zone_ratings"]["hands"] = 0
    result = FeedbackValidator.validate(valid_payload)

    assert "zone_ratings.hands" in result.errors


# Outfit Structure

def test_validate_outfit_structure(valid_payload, invalid_payload):
    """Test the structural outfit check on its own."""
    assert FeedbackValidator.validate_outfit_structure(valid_payload["actual_outfit"])
    assert not FeedbackValidator.validate_outfit_structure(invalid_payload["actual_outfit"])
    assert not FeedbackValidator.validate_outfit_structure(["cap", "thermal"])
    assert not FeedbackValidator.validate_outfit_structure(None)


def test_engine_output_passes_structure_check():
    """Test that recommendations can be resubmitted as feedback."""
    weather = WeatherConditions(temperature=6.0, feels_like=3.5, wind_speed=12.0, humidity=75.0)
    outfit = recommend_outfit(weather, ActivityContext(activity_type="tempo"))

    assert FeedbackValidator.validate_outfit_structure(outfit.model_dump(mode="json"))


# Comparison

def test_compare_identical_outfits(valid_payload):
    """Test that an outfit matches itself on every slot."""
    outfit = OutfitRecommendation(**valid_payload["actual_outfit"])
    comparison = compare_outfits(outfit, outfit)

    assert len(comparison.slots) == 10
    assert comparison.differing == []
    assert comparison.match_ratio == 1.0


def test_compare_reports_differing_slots(valid_payload):
    """Test slot-by-slot differences between recommended and worn."""
    worn = OutfitRecommendation(**valid_payload["actual_outfit"])
    recommended_data = dict(valid_payload["actual_outfit"])
    recommended_data["hands"] = "winter_gloves"
    recommended_data["torso"] = {"base": "thermal", "mid": "none", "outer": "none"}
    recommended = OutfitRecommendation(**recommended_data)

    comparison = compare_outfits(recommended, worn)

    assert [s.slot for s in comparison.differing] == [Slot.TORSO_OUTER, Slot.HANDS]
    hands = comparison.differing[1]
    assert hands.recommended == "winter_gloves"
    assert hands.actual == "transitional_gloves"
    assert comparison.match_ratio == pytest.approx(0.8)
