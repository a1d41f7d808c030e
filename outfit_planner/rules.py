"""
Outfit rule tables for every garment slot.

Each table is an ordered list of rows keyed on effective temperature
("row matches when effective temperature <= max_temp"). Rows are sorted by
non-decreasing threshold and every table ends in an unconstrained catch-all.
Changing a threshold or adding a garment is a data change here; the matching
itself lives in the engine.
"""

from typing import Dict, List

from outfit_planner.schemas import (
    ActivityType,
    ArmsGear,
    HandsGear,
    HeadGear,
    LegsGear,
    NeckGear,
    PrecipitationOverride,
    Rule,
    ShoeCovers,
    Slot,
    SlotConfig,
    Socks,
    TorsoBaseLayer,
    TorsoMidLayer,
    TorsoOuterLayer,
)


# Higher intensity feels warmer, so the effective temperature goes up
ACTIVITY_TEMPERATURE_ADJUSTMENTS: Dict[ActivityType, float] = {
    ActivityType.RECOVERY: -2.0,
    ActivityType.EASY: 0.0,
    ActivityType.TEMPO: 3.0,
    ActivityType.INTERVALS: 5.0,
}

RAIN_JACKET_THRESHOLD_MM = 5.0
WATERPROOF_COVERS_THRESHOLD_MM = 3.0


HEAD_RULES: List[Rule] = [
    Rule(max_temp=0, value=HeadGear.WINTER_CAP),
    Rule(max_temp=5, value=HeadGear.CAP),
    Rule(max_temp=10, value=HeadGear.CAP, wind_min=15),
    Rule(max_temp=15, value=HeadGear.HEADBAND),
    Rule(max_temp=None, value=HeadGear.NONE),
]

TORSO_BASE_RULES: List[Rule] = [
    Rule(max_temp=5, value=TorsoBaseLayer.THERMAL_WINTER),
    Rule(max_temp=10, value=TorsoBaseLayer.THERMAL),
    Rule(max_temp=15, value=TorsoBaseLayer.LONG_SLEEVE_JERSEY),
    Rule(max_temp=None, value=TorsoBaseLayer.SHORT_SLEEVE_JERSEY),
]

# Insulating mid-layer is only offered to low-intensity rides
TORSO_MID_RULES: List[Rule] = [
    Rule(
        max_temp=0,
        value=TorsoMidLayer.SOFTSHELL,
        activities=[ActivityType.RECOVERY, ActivityType.EASY],
    ),
    Rule(max_temp=5, value=TorsoMidLayer.SOFTSHELL, activities=[ActivityType.RECOVERY]),
    Rule(max_temp=10, value=TorsoMidLayer.VEST, activities=[ActivityType.RECOVERY]),
    Rule(max_temp=None, value=TorsoMidLayer.NONE),
]

TORSO_OUTER_RULES: List[Rule] = [
    Rule(max_temp=-5, value=TorsoOuterLayer.WINTER_JACKET),
    Rule(max_temp=None, value=TorsoOuterLayer.NONE),
]

ARMS_RULES: List[Rule] = [
    Rule(max_temp=10, value=ArmsGear.LONG_SLEEVES),
    Rule(max_temp=15, value=ArmsGear.ARM_WARMERS),
    Rule(max_temp=None, value=ArmsGear.NONE),
]

# Cold-hands rows sit ahead of the generic row sharing their threshold
HANDS_RULES: List[Rule] = [
    Rule(max_temp=0, value=HandsGear.WINTER_GLOVES),
    Rule(max_temp=5, value=HandsGear.WINTER_GLOVES, cold_hands=True),
    Rule(max_temp=5, value=HandsGear.TRANSITIONAL_GLOVES),
    Rule(max_temp=10, value=HandsGear.THIN_GLOVES, cold_hands=True),
    Rule(max_temp=None, value=HandsGear.NONE),
]

LEGS_RULES: List[Rule] = [
    Rule(max_temp=10, value=LegsGear.LONG_INSULATED),
    Rule(max_temp=15, value=LegsGear.LONG),
    Rule(
        max_temp=20,
        value=LegsGear.THREE_QUARTER,
        activities=[ActivityType.RECOVERY, ActivityType.EASY],
    ),
    Rule(max_temp=None, value=LegsGear.SHORTS),
]

FEET_SOCKS_RULES: List[Rule] = [
    Rule(max_temp=5, value=Socks.WINTER),
    Rule(max_temp=15, value=Socks.TRANSITIONAL),
    Rule(max_temp=None, value=Socks.SUMMER),
]

FEET_COVERS_RULES: List[Rule] = [
    Rule(max_temp=5, value=ShoeCovers.SHOE_COVERS),
    Rule(max_temp=10, value=ShoeCovers.SHOE_COVERS, cold_feet=True),
    Rule(max_temp=None, value=ShoeCovers.NONE),
]

NECK_RULES: List[Rule] = [
    Rule(max_temp=0, value=NeckGear.NECK_GAITER),
    Rule(max_temp=10, value=NeckGear.BUFF),
    Rule(max_temp=15, value=NeckGear.BUFF, wind_min=20),
    Rule(max_temp=None, value=NeckGear.NONE),
]


SLOT_CONFIGS: Dict[Slot, SlotConfig] = {
    Slot.HEAD: SlotConfig(slot=Slot.HEAD, rules=HEAD_RULES),
    Slot.TORSO_BASE: SlotConfig(slot=Slot.TORSO_BASE, rules=TORSO_BASE_RULES),
    Slot.TORSO_MID: SlotConfig(slot=Slot.TORSO_MID, rules=TORSO_MID_RULES),
    Slot.TORSO_OUTER: SlotConfig(
        slot=Slot.TORSO_OUTER,
        rules=TORSO_OUTER_RULES,
        precipitation_override=PrecipitationOverride(
            threshold_mm=RAIN_JACKET_THRESHOLD_MM,
            value=TorsoOuterLayer.RAIN_JACKET,
        ),
    ),
    Slot.ARMS: SlotConfig(slot=Slot.ARMS, rules=ARMS_RULES),
    Slot.HANDS: SlotConfig(slot=Slot.HANDS, rules=HANDS_RULES),
    Slot.LEGS: SlotConfig(slot=Slot.LEGS, rules=LEGS_RULES),
    Slot.FEET_SOCKS: SlotConfig(slot=Slot.FEET_SOCKS, rules=FEET_SOCKS_RULES),
    Slot.FEET_COVERS: SlotConfig(
        slot=Slot.FEET_COVERS,
        rules=FEET_COVERS_RULES,
        precipitation_override=PrecipitationOverride(
            threshold_mm=WATERPROOF_COVERS_THRESHOLD_MM,
            value=ShoeCovers.WATERPROOF_COVERS,
        ),
    ),
    Slot.NECK: SlotConfig(slot=Slot.NECK, rules=NECK_RULES),
}
