"""
Tests for the static rule tables.

These checks run over the configuration itself, independent of any request.
"""

import pytest

from outfit_planner.rules import ACTIVITY_TEMPERATURE_ADJUSTMENTS, SLOT_CONFIGS
from outfit_planner.schemas import ActivityType, Slot, domain_values


@pytest.mark.parametrize("slot", list(Slot))
def test_thresholds_are_non_decreasing(slot):
    """Test that rows are ordered by non-decreasing max_temp."""
    limits = [
        float("inf") if rule.max_temp is None else rule.max_temp
        for rule in SLOT_CONFIGS[slot].rules
    ]
    assert limits == sorted(limits)


@pytest.mark.parametrize("slot", list(Slot))
def test_last_row_is_unconstrained_catch_all(slot):
    """Test that every table ends in a row with no limit and no constraints."""
    last = SLOT_CONFIGS[slot].rules[-1]
    assert last.max_temp is None
    assert not last.is_constrained


@pytest.mark.parametrize("slot", list(Slot))
def test_table_values_are_in_slot_domain(slot):
    """Test that every table value is accepted by the feedback domain."""
    accepted = set(domain_values(slot))
    config = SLOT_CONFIGS[slot]
    for rule in config.rules:
        assert rule.value in accepted
    if config.precipitation_override:
        assert config.precipitation_override.value in accepted


def test_every_slot_is_configured():
    """Test that all 10 slots have a table registered under their own key."""
    assert set(SLOT_CONFIGS) == set(Slot)
    for slot, config in SLOT_CONFIGS.items():
        assert config.slot == slot


def test_only_torso_outer_and_feet_covers_have_rain_overrides():
    """Test which slots precipitation can override."""
    overridden = {s for s, c in SLOT_CONFIGS.items() if c.precipitation_override}
    assert overridden == {Slot.TORSO_OUTER, Slot.FEET_COVERS}
    assert SLOT_CONFIGS[Slot.TORSO_OUTER].precipitation_override.threshold_mm == 5.0
    assert SLOT_CONFIGS[Slot.TORSO_OUTER].precipitation_override.value == "rain_jacket"
    assert SLOT_CONFIGS[Slot.FEET_COVERS].precipitation_override.threshold_mm == 3.0
    assert SLOT_CONFIGS[Slot.FEET_COVERS].precipitation_override.value == "waterproof_covers"


def test_activity_adjustments():
    """Test the fixed activity intensity adjustments."""
    assert ACTIVITY_TEMPERATURE_ADJUSTMENTS == {
        ActivityType.RECOVERY: -2.0,
        ActivityType.EASY: 0.0,
        ActivityType.TEMPO: 3.0,
        ActivityType.INTERVALS: 5.0,
    }


def test_head_and_neck_carry_wind_rows():
    """Test that head and neck tables use wind-minimum constraints."""
    assert any(r.wind_min for r in SLOT_CONFIGS[Slot.HEAD].rules)
    assert any(r.wind_min for r in SLOT_CONFIGS[Slot.NECK].rules)


def test_torso_mid_is_gated_by_activity():
    """Test that every insulating mid-layer row has an activity allow-list."""
    for rule in SLOT_CONFIGS[Slot.TORSO_MID].rules[:-1]:
        assert rule.activities
