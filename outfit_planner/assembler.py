"""
Outfit assembly.

This module turns weather, activity and rider profile into the full 7-zone
outfit. It computes the effective temperature once, resolves all ten slots
(precipitation overrides first, then the slot's rule table), and records
every decision in a trace.
"""

import logging
from typing import Dict, Optional

from outfit_planner.engine import match
from outfit_planner.rules import SLOT_CONFIGS
from outfit_planner.schemas import (
    NONE_VALUE,
    ActivityContext,
    FeetGear,
    OutfitRecommendation,
    RecommendationResult,
    RecommendationTrace,
    RiderThermalProfile,
    RuleContext,
    Slot,
    SlotConfig,
    SlotDecision,
    TorsoLayers,
    WeatherConditions,
    domain_values,
)
from outfit_planner.temperature import activity_adjustment, effective_temperature

logger = logging.getLogger(__name__)


class OutfitAssembler:
    """
    Builds outfit recommendations from the slot rule tables.

    The assembler is stateless apart from the read-only slot configuration,
    so one instance can serve concurrent requests. It never raises for a
    misconfigured table: a slot with no matching row degrades to "none"
    and is logged as a configuration error.
    """

    def __init__(self, slot_configs: Optional[Dict[Slot, SlotConfig]] = None):
        """
        Initialize assembler with slot configuration.

        Args:
            slot_configs: Rule tables per slot; defaults to the built-in tables
        """
        self.slot_configs = slot_configs if slot_configs is not None else SLOT_CONFIGS

    def recommend(
        self,
        weather: WeatherConditions,
        activity: ActivityContext,
        profile: Optional[RiderThermalProfile] = None,
    ) -> RecommendationResult:
        """
        Recommend an outfit.

        Args:
            weather: Weather snapshot for the ride
            activity: Planned activity
            profile: Rider thermal profile, or None when the rider has none yet

        Returns:
            RecommendationResult with outfit and decision trace
        """
        profile = profile or RiderThermalProfile()
        activity_name = activity.activity_type.value if activity.activity_type else None

        adjustment = activity_adjustment(activity.activity_type)
        effective = effective_temperature(
            weather.temperature,
            profile.personalization_offset,
            activity.activity_type,
        )

        context = RuleContext(
            wind_speed=weather.wind_speed,
            activity_type=activity.activity_type,
            cold_hands=profile.cold_hands,
            cold_feet=profile.cold_feet,
            precipitation=weather.precipitation,
        )

        trace = RecommendationTrace(
            raw_temperature=weather.temperature,
            personalization_offset=profile.personalization_offset,
            offset_version=profile.offset_version,
            activity_type=activity_name,
            activity_adjustment=adjustment,
            effective_temperature=effective,
        )

        values: Dict[Slot, str] = {}
        for slot in Slot:
            decision = self._decide_slot(slot, effective, context)
            if decision.value not in domain_values(slot):
                logger.error(
                    "Slot %s produced '%s', which is outside its value domain, using '%s'",
                    slot.value,
                    decision.value,
                    NONE_VALUE,
                )
                decision = SlotDecision(
                    slot=slot,
                    value=NONE_VALUE,
                    source="fallback",
                    reasoning=f"Configured value '{decision.value}' is not an accepted {slot.value} value",
                )
            trace.decisions.append(decision)
            values[slot] = decision.value

        outfit = OutfitRecommendation(
            head=values[Slot.HEAD],
            torso=TorsoLayers(
                base=values[Slot.TORSO_BASE],
                mid=values[Slot.TORSO_MID],
                outer=values[Slot.TORSO_OUTER],
            ),
            arms=values[Slot.ARMS],
            hands=values[Slot.HANDS],
            legs=values[Slot.LEGS],
            feet=FeetGear(
                socks=values[Slot.FEET_SOCKS],
                covers=values[Slot.FEET_COVERS],
            ),
            neck=values[Slot.NECK],
        )

        logger.debug(
            "Recommended outfit at %.1f°C effective (raw %.1f, offset %+.1f, %s %+.1f)",
            effective,
            weather.temperature,
            profile.personalization_offset,
            activity_name or "no activity",
            adjustment,
        )

        return RecommendationResult(
            outfit=outfit,
            trace=trace,
            personalized=profile.personalization_offset != 0,
            thermal_adjustment=profile.personalization_offset,
        )

    def _decide_slot(
        self, slot: Slot, effective: float, context: RuleContext
    ) -> SlotDecision:
        """
        Resolve one slot.

        Precipitation overrides compare raw precipitation and bypass the
        temperature table entirely.

        Args:
            slot: Slot to resolve
            effective: Effective temperature
            context: Rule constraints for this request

        Returns:
            SlotDecision describing the chosen value
        """
        config = self.slot_configs.get(slot)
        if config is None:
            logger.error("No rule table configured for slot %s, using '%s'", slot.value, NONE_VALUE)
            return SlotDecision(
                slot=slot,
                value=NONE_VALUE,
                source="fallback",
                reasoning="No rule table configured",
            )

        override = config.precipitation_override
        if override is not None and context.precipitation > override.threshold_mm:
            return SlotDecision(
                slot=slot,
                value=override.value,
                source="override",
                reasoning=(
                    f"Precipitation {context.precipitation:g} mm exceeds "
                    f"{override.threshold_mm:g} mm"
                ),
            )

        found = match(config.rules, effective, context)
        if found is None:
            logger.error(
                "Rule table for slot %s has no row matching %.2f°C, using '%s'",
                slot.value,
                effective,
                NONE_VALUE,
            )
            return SlotDecision(
                slot=slot,
                value=NONE_VALUE,
                source="fallback",
                reasoning=f"No row matched effective temperature {effective:.1f}°C",
            )

        index, rule = found
        bound = "no limit" if rule.max_temp is None else f"<= {rule.max_temp:g}°C"
        return SlotDecision(
            slot=slot,
            value=rule.value,
            source="rule",
            rule_index=index,
            max_temp=rule.max_temp,
            reasoning=f"Row {index} ({bound}) matched {effective:.1f}°C",
        )


_default_assembler = OutfitAssembler()


def recommend_outfit(
    weather: WeatherConditions,
    activity: ActivityContext,
    profile: Optional[RiderThermalProfile] = None,
) -> OutfitRecommendation:
    """
    Convenience function returning just the outfit from the built-in tables.

    Args:
        weather: Weather snapshot for the ride
        activity: Planned activity
        profile: Rider thermal profile, or None

    Returns:
        OutfitRecommendation
    """
    return _default_assembler.recommend(weather, activity, profile).outfit
