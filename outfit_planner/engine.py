"""
Zone rule engine.

Generic first-match-wins matcher shared by every slot. A row is eligible
only when the effective temperature is within its bound and all of its
optional constraints hold; the first eligible row in table order wins.
"""

from typing import List, Optional, Sequence, Tuple

from outfit_planner.schemas import NONE_VALUE, Rule, RuleContext


def rule_matches(rule: Rule, effective_temperature: float, context: RuleContext) -> bool:
    """Check whether a single row is eligible."""
    if rule.max_temp is not None and effective_temperature > rule.max_temp:
        return False

    if rule.wind_min is not None and context.wind_speed < rule.wind_min:
        return False

    if rule.activities is not None and context.activity_type not in rule.activities:
        return False

    if rule.cold_hands is not None and rule.cold_hands != context.cold_hands:
        return False

    if rule.cold_feet is not None and rule.cold_feet != context.cold_feet:
        return False

    return True


def match(
    rules: Sequence[Rule],
    effective_temperature: float,
    context: Optional[RuleContext] = None,
) -> Optional[Tuple[int, Rule]]:
    """
    Find the first eligible row.

    Args:
        rules: Ordered rule table
        effective_temperature: Adjusted temperature in °C
        context: Wind, activity and cold-extremity constraints

    Returns:
        (row index, rule) of the winning row, or None if nothing matched
    """
    context = context or RuleContext()

    for index, rule in enumerate(rules):
        if rule_matches(rule, effective_temperature, context):
            return index, rule

    return None


def select(
    rules: Sequence[Rule],
    effective_temperature: float,
    context: Optional[RuleContext] = None,
) -> str:
    """
    Select the garment value for one slot.

    Never raises: a table without a reachable row yields "none". Callers
    that need to report that configuration defect should use match().
    """
    found = match(rules, effective_temperature, context)
    if found is None:
        return NONE_VALUE
    return found[1].value


def candidate_values(rules: List[Rule]) -> List[str]:
    """Distinct values a table can produce, in row order."""
    values: List[str] = []
    for rule in rules:
        value = rule.value
        if value not in values:
            values.append(value)
    return values
