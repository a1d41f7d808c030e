"""
Effective temperature calculation.

Combines the raw reading, the rider's personalization offset, and the
activity intensity adjustment into the single number every rule table keys on.
"""

from typing import Optional, Union

from outfit_planner.rules import ACTIVITY_TEMPERATURE_ADJUSTMENTS
from outfit_planner.schemas import ActivityType


def activity_adjustment(activity_type: Optional[Union[ActivityType, str]]) -> float:
    """
    Look up the intensity adjustment for an activity.

    Unknown or missing activity types get the easy-ride adjustment (0).
    """
    if activity_type is None:
        return 0.0
    try:
        activity = ActivityType(activity_type)
    except ValueError:
        return 0.0
    return ACTIVITY_TEMPERATURE_ADJUSTMENTS.get(activity, 0.0)


def effective_temperature(
    raw_temperature: float,
    personalization_offset: float = 0.0,
    activity_type: Optional[Union[ActivityType, str]] = None,
) -> float:
    """
    Calculate the temperature the rider effectively experiences.

    effective = raw + personalization_offset + activity_adjustment

    No rounding is applied; rule matching compares the real value.

    Args:
        raw_temperature: Air temperature in °C
        personalization_offset: Rider's externally computed offset
        activity_type: Planned ride intensity

    Returns:
        Effective temperature in °C
    """
    return raw_temperature + personalization_offset + activity_adjustment(activity_type)
