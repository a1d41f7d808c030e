"""
Rule table consistency checks.

Verifies the static slot configuration offline: thresholds in order, a
catch-all row at the end of every table, and every garment value drawn from
the slot's accepted domain. A failing check is a configuration defect, not a
per-request error.
"""

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from outfit_planner.engine import candidate_values
from outfit_planner.rules import SLOT_CONFIGS
from outfit_planner.schemas import Severity, Slot, SlotConfig, domain_values

logger = logging.getLogger(__name__)


class TableIssue(BaseModel):
    """A single defect found in a slot's configuration."""

    slot: Slot = Field(..., description="Slot the issue belongs to")
    code: str = Field(..., description="Machine-readable issue kind")
    message: str = Field(..., description="Human-readable description")
    severity: Severity = Field(..., description="Blocking defects make the table unusable")
    row_index: Optional[int] = Field(
        default=None, description="Offending row, when the issue is row-specific"
    )


class ConsistencyReport(BaseModel):
    """Result of checking every slot configuration."""

    issues: List[TableIssue] = Field(
        default_factory=list,
        description="All issues found (sorted by severity: blocking first)"
    )
    slots_checked: int = Field(default=0, ge=0)

    @property
    def ok(self) -> bool:
        return not self.blocking

    @property
    def blocking(self) -> List[TableIssue]:
        return [i for i in self.issues if i.severity == Severity.BLOCKING]

    @property
    def warnings(self) -> List[TableIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]


class TableConsistencyChecker:
    """
    Checks slot rule tables for well-formedness and domain containment.

    Every check runs even after one fails, so the report shows the complete
    picture of what needs fixing.
    """

    def __init__(self, slot_configs: Optional[Dict[Slot, SlotConfig]] = None):
        """
        Initialize checker.

        Args:
            slot_configs: Configuration to check; defaults to the built-in tables
        """
        self.slot_configs = slot_configs if slot_configs is not None else SLOT_CONFIGS

    def check(self) -> ConsistencyReport:
        """
        Check every slot.

        Returns:
            ConsistencyReport with all issues found
        """
        issues: List[TableIssue] = []

        for slot in Slot:
            config = self.slot_configs.get(slot)
            if config is None:
                issues.append(
                    TableIssue(
                        slot=slot,
                        code="missing_slot",
                        message=f"No rule table configured for {slot.value}",
                        severity=Severity.BLOCKING,
                    )
                )
                continue
            issues.extend(self.check_slot(slot, config))

        issues.sort(key=lambda i: 0 if i.severity == Severity.BLOCKING else 1)

        for issue in issues:
            log = logger.error if issue.severity == Severity.BLOCKING else logger.warning
            log("Rule table %s: %s", issue.slot.value, issue.message)

        return ConsistencyReport(issues=issues, slots_checked=len(self.slot_configs))

    def check_slot(self, slot: Slot, config: SlotConfig) -> List[TableIssue]:
        """
        Check one slot's table and override.

        Args:
            slot: Slot the configuration is registered under
            config: The slot's configuration

        Returns:
            Issues found for this slot
        """
        issues: List[TableIssue] = []
        accepted = domain_values(slot)
        rules = config.rules

        if config.slot != slot:
            issues.append(
                TableIssue(
                    slot=slot,
                    code="slot_mismatch",
                    message=f"Configuration registered for {slot.value} declares {config.slot.value}",
                    severity=Severity.BLOCKING,
                )
            )

        if not rules:
            issues.append(
                TableIssue(
                    slot=slot,
                    code="empty_table",
                    message="Rule table has no rows",
                    severity=Severity.BLOCKING,
                )
            )

        previous_limit = float("-inf")
        unconstrained_limit: Optional[float] = None

        for index, rule in enumerate(rules):
            limit = float("inf") if rule.max_temp is None else rule.max_temp

            if limit < previous_limit:
                issues.append(
                    TableIssue(
                        slot=slot,
                        code="non_monotonic",
                        message=(
                            f"Row {index} threshold {limit:g} is below the previous "
                            f"threshold {previous_limit:g}"
                        ),
                        severity=Severity.BLOCKING,
                        row_index=index,
                    )
                )
            previous_limit = max(previous_limit, limit)

            # An earlier unconstrained row already covers everything up to its limit
            if unconstrained_limit is not None and limit <= unconstrained_limit:
                issues.append(
                    TableIssue(
                        slot=slot,
                        code="unreachable_row",
                        message=(
                            f"Row {index} can never match: an earlier unconstrained row "
                            f"already covers temperatures up to {unconstrained_limit:g}"
                        ),
                        severity=Severity.WARNING,
                        row_index=index,
                    )
                )
            if not rule.is_constrained:
                if unconstrained_limit is None or limit > unconstrained_limit:
                    unconstrained_limit = limit

        produced = candidate_values(rules)
        for value in produced:
            if value in accepted:
                continue
            rows = [i for i, rule in enumerate(rules) if rule.value == value]
            issues.append(
                TableIssue(
                    slot=slot,
                    code="value_out_of_domain",
                    message=(
                        f"Row(s) {', '.join(str(i) for i in rows)} value '{value}' is not one of "
                        f"{accepted} (table produces {produced})"
                    ),
                    severity=Severity.BLOCKING,
                    row_index=rows[0],
                )
            )

        if rules:
            last_index = len(rules) - 1
            last = rules[-1]
            if last.max_temp is not None:
                issues.append(
                    TableIssue(
                        slot=slot,
                        code="missing_catch_all",
                        message=f"Last row is bounded at {last.max_temp:g} instead of having no limit",
                        severity=Severity.BLOCKING,
                        row_index=last_index,
                    )
                )
            if last.is_constrained:
                issues.append(
                    TableIssue(
                        slot=slot,
                        code="constrained_catch_all",
                        message="Last row carries wind, activity or cold-extremity constraints",
                        severity=Severity.BLOCKING,
                        row_index=last_index,
                    )
                )

        override = config.precipitation_override
        if override is not None and override.value not in accepted:
            issues.append(
                TableIssue(
                    slot=slot,
                    code="value_out_of_domain",
                    message=f"Precipitation override value '{override.value}' is not one of {accepted}",
                    severity=Severity.BLOCKING,
                )
            )

        return issues

    def display_summary(self, report: ConsistencyReport) -> str:
        """
        Generate human-readable report summary.

        Args:
            report: The consistency report

        Returns:
            Formatted summary string
        """
        lines = []
        lines.append("=" * 70)
        lines.append("RULE TABLE CONSISTENCY REPORT")
        lines.append("=" * 70)
        lines.append("")

        if not report.issues:
            lines.append("✅ STATUS: OK")
            lines.append("")
            lines.append(f"All {report.slots_checked} slot tables are well-formed.")
        elif report.ok:
            lines.append("⚠️  STATUS: OK WITH WARNINGS")
            lines.append("")
            for issue in report.warnings:
                lines.append(f"  • [{issue.slot.value}] {issue.message}")
        else:
            lines.append("⛔ STATUS: BROKEN")
            lines.append("")
            for issue in report.issues:
                marker = "BLOCKING" if issue.severity == Severity.BLOCKING else "warning"
                lines.append(f"  • {marker} [{issue.slot.value}] {issue.code}: {issue.message}")

        lines.append("")
        lines.append("=" * 70)

        return "\n".join(lines)


def check_tables() -> ConsistencyReport:
    """Check the built-in rule tables."""
    return TableConsistencyChecker().check()
