"""
Rider feedback validation.

Riders report what they actually wore and how comfortable they were. The
submitted outfit is checked against the same per-zone value domains the
rule tables draw from, so recommendations and feedback can be compared
slot by slot.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from outfit_planner.schemas import ActivityType, OutfitRecommendation, Slot


class ZoneRatings(BaseModel):
    """Per-zone comfort ratings (1-5); unknown zones are rejected."""

    model_config = ConfigDict(extra="forbid")

    head: Optional[int] = Field(default=None, ge=1, le=5)
    torso: Optional[int] = Field(default=None, ge=1, le=5)
    arms: Optional[int] = Field(default=None, ge=1, le=5)
    hands: Optional[int] = Field(default=None, ge=1, le=5)
    legs: Optional[int] = Field(default=None, ge=1, le=5)
    feet: Optional[int] = Field(default=None, ge=1, le=5)
    neck: Optional[int] = Field(default=None, ge=1, le=5)


class FeedbackSubmission(BaseModel):
    """
    A rider's "what I actually wore" report.

    Weather fields describe the conditions the outfit was worn in.
    """

    temperature: float = Field(
        ...,
        ge=-50.0,
        le=50.0,
        description="Air temperature in °C"
    )

    feels_like: float = Field(
        ...,
        ge=-50.0,
        le=50.0,
        description="Apparent temperature in °C"
    )

    wind_speed: float = Field(..., ge=0.0, description="Wind speed in km/h")

    humidity: float = Field(..., ge=0.0, le=100.0, description="Relative humidity in percent")

    rain_mm: float = Field(default=0.0, ge=0.0, description="Precipitation in mm")

    activity_type: ActivityType = Field(..., description="Ride intensity")

    duration_minutes: int = Field(..., gt=0, description="Ride duration")

    actual_outfit: OutfitRecommendation = Field(
        ...,
        description="Outfit worn, in the same 7-zone structure the engine produces"
    )

    overall_rating: int = Field(..., ge=1, le=5, description="Overall comfort rating")

    zone_ratings: Optional[ZoneRatings] = Field(
        default=None,
        description="Optional per-zone comfort ratings"
    )

    notes: Optional[str] = Field(default=None, max_length=500)

    shared_with_community: bool = Field(default=False)


class FeedbackValidationResult(BaseModel):
    """Outcome of validating a feedback payload."""

    valid: bool = Field(..., description="Whether the payload is acceptable")
    errors: Dict[str, str] = Field(
        default_factory=dict,
        description="Field path -> error message"
    )
    feedback: Optional[FeedbackSubmission] = Field(
        default=None,
        description="Parsed submission when valid"
    )


class SlotComparison(BaseModel):
    """Recommended vs. worn value for one slot."""

    slot: Slot
    recommended: str
    actual: str

    @property
    def matches(self) -> bool:
        return self.recommended == self.actual


class OutfitComparison(BaseModel):
    """Slot-by-slot comparison of a recommendation with what was worn."""

    slots: List[SlotComparison] = Field(default_factory=list)

    @property
    def differing(self) -> List[SlotComparison]:
        return [s for s in self.slots if not s.matches]

    @property
    def match_ratio(self) -> float:
        if not self.slots:
            return 0.0
        return (len(self.slots) - len(self.differing)) / len(self.slots)


class FeedbackValidator:
    """Validates feedback payloads without raising for bad input."""

    @staticmethod
    def validate(payload: Dict[str, Any]) -> FeedbackValidationResult:
        """
        Validate a raw feedback payload.

        Args:
            payload: Decoded JSON body of a feedback submission

        Returns:
            FeedbackValidationResult with per-field errors when invalid
        """
        try:
            feedback = FeedbackSubmission(**payload)
        except ValidationError as e:
            errors: Dict[str, str] = {}
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "__root__"
                errors.setdefault(field, error["msg"])
            return FeedbackValidationResult(valid=False, errors=errors)

        return FeedbackValidationResult(valid=True, feedback=feedback)

    @staticmethod
    def validate_outfit_structure(outfit: Any) -> bool:
        """
        Check that an outfit has all 7 zones with accepted values.

        Args:
            outfit: Decoded outfit object

        Returns:
            True if every zone is present and in its domain
        """
        if not isinstance(outfit, dict):
            return False
        try:
            OutfitRecommendation(**outfit)
        except ValidationError:
            return False
        return True


def compare_outfits(
    recommended: OutfitRecommendation, actual: OutfitRecommendation
) -> OutfitComparison:
    """
    Compare a recommendation with the outfit a rider reported wearing.

    Args:
        recommended: Outfit the engine recommended
        actual: Outfit the rider wore

    Returns:
        OutfitComparison over all 10 slots
    """
    recommended_values = recommended.slot_values()
    actual_values = actual.slot_values()

    return OutfitComparison(
        slots=[
            SlotComparison(
                slot=slot,
                recommended=recommended_values[slot],
                actual=actual_values[slot],
            )
            for slot in Slot
        ]
    )
