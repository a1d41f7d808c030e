"""
Tests for recommendation trace export.

Ensures that traces record every slot decision and can be exported to JSON
and Markdown.
"""

import json
from pathlib import Path
import tempfile

import pytest

from outfit_planner.assembler import OutfitAssembler
from outfit_planner.rules import SLOT_CONFIGS
from outfit_planner.schemas import (
    ActivityContext,
    ActivityType,
    RiderThermalProfile,
    Rule,
    Slot,
    SlotConfig,
    WeatherConditions,
)
from outfit_planner.trace import (
    RecommendationTraceBuilder,
    load_trace_from_file,
    save_trace_from_result,
)


# Fixtures

@pytest.fixture
def rainy_result():
    """Recommendation for a wet tempo ride by a personalized rider."""
    weather = WeatherConditions(
        temperature=18.0, feels_like=17.0, wind_speed=10.0, humidity=90.0, precipitation=6.0
    )
    profile = RiderThermalProfile(personalization_offset=-2.0, offset_version=10)
    return OutfitAssembler().recommend(
        weather, ActivityContext(activity_type=ActivityType.TEMPO), profile
    )


@pytest.fixture
def trace_builder(rainy_result):
    """Create a trace builder over the rainy recommendation."""
    return RecommendationTraceBuilder(rainy_result.trace)


@pytest.fixture
def fallback_result():
    """Recommendation where the legs table is missing its catch-all."""
    configs = dict(SLOT_CONFIGS)
    configs[Slot.LEGS] = SlotConfig(slot=Slot.LEGS, rules=[Rule(max_temp=5, value="long_insulated")])
    weather = WeatherConditions(temperature=20.0, feels_like=20.0, wind_speed=0.0, humidity=50.0)
    return OutfitAssembler(configs).recommend(weather, ActivityContext(activity_type="easy"))


# Trace Contents

def test_trace_records_temperature_derivation(rainy_result):
    """Test that the trace explains the effective temperature."""
    trace = rainy_result.trace

    assert trace.raw_temperature == 18.0
    assert trace.personalization_offset == -2.0
    assert trace.offset_version == 10
    assert trace.activity_type == "tempo"
    assert trace.activity_adjustment == 3.0
    assert trace.effective_temperature == 19.0


def test_trace_has_one_decision_per_slot(rainy_result):
    """Test that every slot is decided exactly once, in order."""
    decisions = rainy_result.trace.decisions

    assert [d.slot for d in decisions] == list(Slot)
    overrides = {d.slot for d in decisions if d.source == "override"}
    assert overrides == {Slot.TORSO_OUTER, Slot.FEET_COVERS}


def test_trace_decisions_match_outfit(rainy_result):
    """Test that traced values are exactly the outfit's values."""
    values = rainy_result.outfit.slot_values()
    for decision in rainy_result.trace.decisions:
        assert values[decision.slot] == decision.value


# Export

def test_export_to_json(trace_builder):
    """Test JSON export."""
    data = trace_builder.export_to_json()

    assert data["effective_temperature"] == 19.0
    assert len(data["decisions"]) == 10
    assert data["decisions"][3]["value"] == "rain_jacket"
    json.dumps(data)


def test_export_to_markdown(trace_builder):
    """Test Markdown export."""
    markdown = trace_builder.export_to_markdown()

    assert "# Outfit Recommendation Trace" in markdown
    assert "Personalization offset (v10)" in markdown
    assert "**19.0°C**" in markdown
    assert "`rain_jacket`" in markdown
    assert "Configuration Fallbacks" not in markdown


def test_markdown_lists_fallback_slots(fallback_result):
    """Test that table defects are called out in the Markdown report."""
    markdown = RecommendationTraceBuilder(fallback_result.trace).export_to_markdown()

    assert "Configuration Fallbacks" in markdown
    assert "`legs` defaulted to `none`" in markdown


# Files

def test_save_to_file_json(trace_builder):
    """Test saving trace to JSON file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = trace_builder.save_to_file(Path(tmpdir), format="json")

        assert filepath.exists()
        assert filepath.suffix == ".json"

        with open(filepath) as f:
            data = json.load(f)

        assert data["activity_type"] == "tempo"


def test_save_to_file_markdown(trace_builder):
    """Test saving trace to Markdown file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = trace_builder.save_to_file(Path(tmpdir) / "nested", format="markdown")

        assert filepath.exists()
        assert filepath.suffix == ".md"
        assert "# Outfit Recommendation Trace" in filepath.read_text()


def test_save_to_file_invalid_format(trace_builder):
    """Test that invalid format raises error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(ValueError):
            trace_builder.save_to_file(Path(tmpdir), format="xml")


def test_load_trace_from_file(rainy_result):
    """Test loading trace from saved JSON file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = save_trace_from_result(rainy_result, Path(tmpdir))
        loaded = load_trace_from_file(filepath)

    assert loaded.effective_temperature == rainy_result.trace.effective_temperature
    assert loaded.decisions == rainy_result.trace.decisions
    assert loaded.timestamp == rainy_result.trace.timestamp


def test_load_trace_from_nonexistent_file():
    """Test that loading from nonexistent file raises error."""
    with pytest.raises(FileNotFoundError):
        load_trace_from_file(Path("nonexistent_trace.json"))


def test_load_trace_from_invalid_file():
    """Test that a JSON file that is not a trace raises ValueError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = Path(tmpdir) / "bogus.json"
        filepath.write_text(json.dumps({"decisions": "nope"}))

        with pytest.raises(ValueError):
            load_trace_from_file(filepath)
