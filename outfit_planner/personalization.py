"""
Personalization status and offset refresh policy.

The personalization offset itself is aggregated from feedback history by the
surrounding system. This module only decides when that aggregation is due
and how far a rider is from the next refresh; the engine always uses
whatever offset the caller hands in.
"""

from pydantic import BaseModel, Field

PERSONALIZATION_THRESHOLD = 5


class PersonalizationStatus(BaseModel):
    """Where a rider stands on the way to (re)personalization."""

    feedback_count: int = Field(..., ge=0, description="Feedbacks submitted so far")
    personalization_active: bool = Field(
        ...,
        description="Whether enough feedback exists for the offset to apply"
    )
    thermal_adjustment: float = Field(
        ...,
        description="Most recently computed personalization offset"
    )
    next_personalization_at: int = Field(
        ...,
        ge=PERSONALIZATION_THRESHOLD,
        description="Feedback count at which the offset is next recomputed"
    )


def should_recompute_offset(feedback_count: int) -> bool:
    """
    Check whether a new feedback count triggers offset recomputation.

    Recomputation happens at every multiple of the threshold.
    """
    return feedback_count > 0 and feedback_count % PERSONALIZATION_THRESHOLD == 0


def next_personalization_at(feedback_count: int) -> int:
    """Feedback count at which the next recomputation happens."""
    if feedback_count < PERSONALIZATION_THRESHOLD:
        return PERSONALIZATION_THRESHOLD
    return feedback_count + (PERSONALIZATION_THRESHOLD - feedback_count % PERSONALIZATION_THRESHOLD)


def personalization_status(
    feedback_count: int, thermal_adjustment: float = 0.0
) -> PersonalizationStatus:
    """
    Build the personalization status for a rider.

    Args:
        feedback_count: Number of feedbacks the rider has submitted
        thermal_adjustment: Current offset (0 when never computed)

    Returns:
        PersonalizationStatus
    """
    if feedback_count < 0:
        raise ValueError(f"Feedback count cannot be negative, got {feedback_count}")

    return PersonalizationStatus(
        feedback_count=feedback_count,
        personalization_active=feedback_count >= PERSONALIZATION_THRESHOLD,
        thermal_adjustment=thermal_adjustment,
        next_personalization_at=next_personalization_at(feedback_count),
    )
