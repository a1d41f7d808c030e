"""
Pydantic models for cycling outfit recommendation.

This module defines the core data structures for:
- Zone Value Domains: Closed sets of garment values accepted for each slot
- Inputs: Weather conditions, planned activity, rider thermal profile
- Rule Tables: Ordered decision rows and per-slot configuration
- Outputs: The 7-zone outfit and the per-slot decision trace
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Literal, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


# ============================================================================
# Enumerations
# ============================================================================

NONE_VALUE = "none"


class ActivityType(str, Enum):
    """Planned ride intensity."""
    RECOVERY = "recovery"
    EASY = "easy"
    TEMPO = "tempo"
    INTERVALS = "intervals"


class ThermalFeeling(str, Enum):
    """Rider's general cold/heat sensitivity."""
    RUNS_COLD = "runs_cold"
    NEUTRAL = "neutral"
    RUNS_HOT = "runs_hot"


class Slot(str, Enum):
    """Independently decided garment positions, in assembly order."""
    HEAD = "head"
    TORSO_BASE = "torso_base"
    TORSO_MID = "torso_mid"
    TORSO_OUTER = "torso_outer"
    ARMS = "arms"
    HANDS = "hands"
    LEGS = "legs"
    FEET_SOCKS = "feet_socks"
    FEET_COVERS = "feet_covers"
    NECK = "neck"


class Severity(str, Enum):
    """Whether a table issue makes the configuration unusable."""
    WARNING = "warning"
    BLOCKING = "blocking"


# ============================================================================
# Zone Value Domains
# ============================================================================

class HeadGear(str, Enum):
    WINTER_CAP = "winter_cap"
    CAP = "cap"
    HEADBAND = "headband"
    BUFF = "buff"
    NONE = NONE_VALUE


class TorsoBaseLayer(str, Enum):
    THERMAL_WINTER = "thermal_winter"
    THERMAL = "thermal"
    LONG_SLEEVE_JERSEY = "long_sleeve_jersey"
    SHORT_SLEEVE_JERSEY = "short_sleeve_jersey"
    NONE = NONE_VALUE


class TorsoMidLayer(str, Enum):
    SOFTSHELL = "softshell"
    VEST = "vest"
    LIGHT_JACKET = "light_jacket"
    NONE = NONE_VALUE


class TorsoOuterLayer(str, Enum):
    WINTER_JACKET = "winter_jacket"
    WINDBREAKER = "windbreaker"
    RAIN_JACKET = "rain_jacket"
    NONE = NONE_VALUE


class ArmsGear(str, Enum):
    LONG_SLEEVES = "long_sleeves"
    ARM_WARMERS = "arm_warmers"
    NONE = NONE_VALUE


class HandsGear(str, Enum):
    WINTER_GLOVES = "winter_gloves"
    TRANSITIONAL_GLOVES = "transitional_gloves"
    THIN_GLOVES = "thin_gloves"
    SUMMER_GLOVES = "summer_gloves"
    NONE = NONE_VALUE


class LegsGear(str, Enum):
    LONG_INSULATED = "long_insulated"
    LONG = "long"
    THREE_QUARTER = "three_quarter"
    SHORTS = "shorts"
    LEG_WARMERS = "leg_warmers"
    NONE = NONE_VALUE


class Socks(str, Enum):
    WINTER = "winter"
    TRANSITIONAL = "transitional"
    SUMMER = "summer"
    NONE = NONE_VALUE


class ShoeCovers(str, Enum):
    SHOE_COVERS = "shoe_covers"
    WATERPROOF_COVERS = "waterproof_covers"
    NONE = NONE_VALUE


class NeckGear(str, Enum):
    NECK_GAITER = "neck_gaiter"
    BUFF = "buff"
    NONE = NONE_VALUE


# Single source of accepted values per slot, shared by the rule tables
# and the feedback validator.
SLOT_DOMAINS: Dict[Slot, Type[Enum]] = {
    Slot.HEAD: HeadGear,
    Slot.TORSO_BASE: TorsoBaseLayer,
    Slot.TORSO_MID: TorsoMidLayer,
    Slot.TORSO_OUTER: TorsoOuterLayer,
    Slot.ARMS: ArmsGear,
    Slot.HANDS: HandsGear,
    Slot.LEGS: LegsGear,
    Slot.FEET_SOCKS: Socks,
    Slot.FEET_COVERS: ShoeCovers,
    Slot.NECK: NeckGear,
}


def domain_values(slot: Slot) -> List[str]:
    """Accepted garment strings for a slot."""
    return [member.value for member in SLOT_DOMAINS[slot]]


def _plain_value(value):
    if isinstance(value, Enum):
        return value.value
    return value


# ============================================================================
# Request Inputs
# ============================================================================

class WeatherConditions(BaseModel):
    """Weather snapshot a recommendation is computed for."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    temperature: float = Field(
        ...,
        description="Air temperature in °C"
    )

    feels_like: float = Field(
        ...,
        description="Apparent temperature in °C (informational)"
    )

    wind_speed: float = Field(
        ...,
        ge=0.0,
        description="Wind speed in km/h"
    )

    humidity: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Relative humidity in percent"
    )

    precipitation: float = Field(
        default=0.0,
        ge=0.0,
        description="Precipitation in mm, used raw by the rain overrides"
    )


class ActivityContext(BaseModel):
    """
    The planned ride.

    An unrecognized activity type is stored as None rather than rejected,
    so the request still gets an outfit with the easy-ride adjustment.
    """

    model_config = ConfigDict(frozen=True)

    activity_type: Optional[ActivityType] = Field(
        default=None,
        description="Ride intensity; None when absent or unrecognized"
    )

    duration_minutes: int = Field(
        default=90,
        gt=0,
        description="Planned ride duration (informational only)"
    )

    @field_validator("activity_type", mode="before")
    @classmethod
    def drop_unknown_activity(cls, value):
        if value is None or isinstance(value, ActivityType):
            return value
        try:
            return ActivityType(value)
        except ValueError:
            logger.warning("Unknown activity type %r, using the easy-ride adjustment", value)
            return None


class RiderThermalProfile(BaseModel):
    """
    Rider's personal thermal characteristics.

    The personalization offset is computed elsewhere from historical
    feedback and handed in as a snapshot value.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    personalization_offset: float = Field(
        default=0.0,
        description="Signed degrees-equivalent shift applied to the raw temperature"
    )

    offset_version: Optional[int] = Field(
        default=None,
        ge=0,
        description="Identifier of the offset snapshot (e.g. feedback count it was computed at)"
    )

    general_feeling: ThermalFeeling = Field(
        default=ThermalFeeling.NEUTRAL,
        description="General cold/heat sensitivity (reserved)"
    )

    cold_hands: bool = Field(
        default=False,
        description="Rider's hands get cold easily"
    )

    cold_feet: bool = Field(
        default=False,
        description="Rider's feet get cold easily"
    )

    cap_threshold_temp: Optional[float] = Field(
        default=None,
        description="Temperature below which the rider wants a cap (informational)"
    )


# ============================================================================
# Rule Tables
# ============================================================================

class Rule(BaseModel):
    """
    One row of a slot's decision table.

    The row is eligible when the effective temperature is at or below
    ``max_temp`` and every optional constraint holds.
    """

    model_config = ConfigDict(frozen=True)

    max_temp: Optional[float] = Field(
        ...,
        description="Upper effective-temperature bound; None means no limit"
    )

    value: str = Field(
        ...,
        description="Garment value returned when this row wins"
    )

    wind_min: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Minimum wind speed (km/h) required"
    )

    activities: Optional[List[ActivityType]] = Field(
        default=None,
        description="Activity types this row is offered for"
    )

    cold_hands: Optional[bool] = Field(
        default=None,
        description="Required cold-hands flag"
    )

    cold_feet: Optional[bool] = Field(
        default=None,
        description="Required cold-feet flag"
    )

    @field_validator("value", mode="before")
    @classmethod
    def unwrap_enum_value(cls, value):
        """Store garment enum members as their plain string value."""
        return _plain_value(value)

    @property
    def is_constrained(self) -> bool:
        return (
            self.wind_min is not None
            or self.activities is not None
            or self.cold_hands is not None
            or self.cold_feet is not None
        )


class PrecipitationOverride(BaseModel):
    """Fixed value returned when raw precipitation exceeds a threshold."""

    model_config = ConfigDict(frozen=True)

    threshold_mm: float = Field(
        ...,
        ge=0.0,
        description="Override fires when precipitation is strictly above this"
    )

    value: str = Field(
        ...,
        description="Garment value returned by the override"
    )

    @field_validator("value", mode="before")
    @classmethod
    def unwrap_enum_value(cls, value):
        return _plain_value(value)


class SlotConfig(BaseModel):
    """Rule table and optional precipitation override for one slot."""

    model_config = ConfigDict(frozen=True)

    slot: Slot = Field(..., description="Slot this configuration decides")

    rules: List[Rule] = Field(
        ...,
        description="Ordered rows, first eligible row wins"
    )

    precipitation_override: Optional[PrecipitationOverride] = Field(
        default=None,
        description="Takes precedence over the table when it fires"
    )


class RuleContext(BaseModel):
    """Non-temperature constraints a row may test against."""

    model_config = ConfigDict(frozen=True)

    wind_speed: float = Field(default=0.0, ge=0.0)
    activity_type: Optional[ActivityType] = Field(default=None)
    cold_hands: bool = Field(default=False)
    cold_feet: bool = Field(default=False)
    precipitation: float = Field(default=0.0, ge=0.0)


# ============================================================================
# Outfit Output
# ============================================================================

class TorsoLayers(BaseModel):
    """Torso layering, inside out."""

    model_config = ConfigDict(frozen=True)

    base: TorsoBaseLayer = Field(..., description="Layer next to skin")
    mid: TorsoMidLayer = Field(..., description="Insulating layer")
    outer: TorsoOuterLayer = Field(..., description="Wind/rain shell")


class FeetGear(BaseModel):
    """Socks and over-shoe covers."""

    model_config = ConfigDict(frozen=True)

    socks: Socks = Field(..., description="Sock weight")
    covers: ShoeCovers = Field(..., description="Shoe covers")


class OutfitRecommendation(BaseModel):
    """
    Complete 7-zone outfit.

    Every field always carries a value from its zone domain; "none" is an
    explicit choice, not a missing value. The same model validates
    rider-submitted outfits.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    head: HeadGear
    torso: TorsoLayers
    arms: ArmsGear
    hands: HandsGear
    legs: LegsGear
    feet: FeetGear
    neck: NeckGear

    def slot_values(self) -> Dict[Slot, str]:
        """Flatten back into the 10 slots."""
        return {
            Slot.HEAD: self.head.value,
            Slot.TORSO_BASE: self.torso.base.value,
            Slot.TORSO_MID: self.torso.mid.value,
            Slot.TORSO_OUTER: self.torso.outer.value,
            Slot.ARMS: self.arms.value,
            Slot.HANDS: self.hands.value,
            Slot.LEGS: self.legs.value,
            Slot.FEET_SOCKS: self.feet.socks.value,
            Slot.FEET_COVERS: self.feet.covers.value,
            Slot.NECK: self.neck.value,
        }


# ============================================================================
# Decision Trace
# ============================================================================

class SlotDecision(BaseModel):
    """How a single slot's value was reached."""

    slot: Slot = Field(..., description="Slot decided")

    value: str = Field(..., description="Selected garment value")

    source: Literal["rule", "override", "fallback"] = Field(
        ...,
        description="rule = table row matched, override = precipitation override, "
                    "fallback = no row matched (configuration defect)"
    )

    rule_index: Optional[int] = Field(
        default=None,
        ge=0,
        description="Index of the winning row when source is 'rule'"
    )

    max_temp: Optional[float] = Field(
        default=None,
        description="Threshold of the winning row (None when unbounded or not a rule)"
    )

    reasoning: str = Field(..., description="Explanation of the decision")


class RecommendationTrace(BaseModel):
    """
    Complete decision trace from inputs to outfit.

    Documents the temperature adjustment and every slot decision for
    full traceability.
    """

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When this trace was generated"
    )

    raw_temperature: float = Field(..., description="Temperature from weather input")

    personalization_offset: float = Field(..., description="Rider offset used")

    offset_version: Optional[int] = Field(
        default=None,
        description="Snapshot identifier of the offset used"
    )

    activity_type: Optional[str] = Field(
        default=None,
        description="Activity type the adjustment was looked up for"
    )

    activity_adjustment: float = Field(..., description="Activity intensity adjustment")

    effective_temperature: float = Field(..., description="Temperature all tables key on")

    decisions: List[SlotDecision] = Field(
        default_factory=list,
        description="Slot decisions in assembly order"
    )

    @property
    def fallback_slots(self) -> List[Slot]:
        return [d.slot for d in self.decisions if d.source == "fallback"]


class RecommendationResult(BaseModel):
    """
    Result of a recommendation request.

    Returned by the OutfitAssembler.
    """

    outfit: OutfitRecommendation = Field(..., description="Recommended outfit")

    trace: RecommendationTrace = Field(..., description="Complete decision trace")

    personalized: bool = Field(
        ...,
        description="Whether a non-zero personalization offset was applied"
    )

    thermal_adjustment: float = Field(
        ...,
        description="Personalization offset applied"
    )
