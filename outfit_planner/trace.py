"""
Recommendation trace export.

This module documents how each garment was chosen. Traces are exported to
JSON and Markdown so a rider (or a developer tuning the tables) can see
which row or override produced every slot.
"""

import json
from pathlib import Path

from outfit_planner.schemas import RecommendationResult, RecommendationTrace


class RecommendationTraceBuilder:
    """
    Exports recommendation traces.

    The trace is the complete audit trail showing:
    - How the effective temperature was derived
    - Which rule row or precipitation override decided each slot
    - Which slots fell back because of a table defect
    """

    def __init__(self, trace: RecommendationTrace):
        """
        Initialize builder.

        Args:
            trace: Trace produced by the OutfitAssembler
        """
        self.trace = trace

    def export_to_json(self) -> dict:
        """
        Export trace to JSON-serializable dictionary.

        Returns:
            Dictionary representation of the trace
        """
        return self.trace.model_dump(mode="json")

    def export_to_markdown(self) -> str:
        """
        Export trace to human-readable Markdown format.

        Returns:
            Markdown-formatted trace report
        """
        trace = self.trace
        lines = []

        lines.append("# Outfit Recommendation Trace")
        lines.append("")
        lines.append(f"**Timestamp:** {trace.timestamp.strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append(f"**Activity:** `{trace.activity_type or 'none given'}`")
        lines.append("")
        lines.append("---")
        lines.append("")

        lines.append("## Effective Temperature")
        lines.append("")
        lines.append("| Component | Value |")
        lines.append("|-----------|-------|")
        lines.append(f"| Raw temperature | {trace.raw_temperature:.1f}°C |")
        offset_label = "Personalization offset"
        if trace.offset_version is not None:
            offset_label += f" (v{trace.offset_version})"
        lines.append(f"| {offset_label} | {trace.personalization_offset:+.1f} |")
        lines.append(f"| Activity adjustment | {trace.activity_adjustment:+.1f} |")
        lines.append(f"| **Effective** | **{trace.effective_temperature:.1f}°C** |")
        lines.append("")
        lines.append("---")
        lines.append("")

        lines.append("## Slot Decisions")
        lines.append("")
        lines.append("| Slot | Value | Source | Reasoning |")
        lines.append("|------|-------|--------|-----------|")
        for decision in trace.decisions:
            lines.append(
                f"| {decision.slot.value} | `{decision.value}` | {decision.source} | {decision.reasoning} |"
            )
        lines.append("")

        fallbacks = trace.fallback_slots
        if fallbacks:
            lines.append("### ⚠️ Configuration Fallbacks")
            lines.append("")
            for slot in fallbacks:
                lines.append(f"- `{slot.value}` defaulted to `none`; check its rule table")
            lines.append("")

        lines.append("---")
        lines.append("")
        lines.append("*This trace provides full transparency into the outfit decision process.*")

        return "\n".join(lines)

    def save_to_file(self, output_dir: Path, format: str = "json") -> Path:
        """
        Save trace to file in specified format.

        Args:
            output_dir: Directory to save trace file
            format: Output format ("json" or "markdown")

        Returns:
            Path to saved file

        Raises:
            ValueError: If format is not supported
        """
        if format not in ("json", "markdown"):
            raise ValueError(f"Unsupported format: {format}. Use 'json' or 'markdown'")

        output_dir.mkdir(parents=True, exist_ok=True)

        timestamp_str = self.trace.timestamp.strftime("%Y%m%d_%H%M%S_%f")

        if format == "json":
            filepath = output_dir / f"trace_{timestamp_str}.json"
            with open(filepath, "w") as f:
                json.dump(self.export_to_json(), f, indent=2, default=str)
        else:
            filepath = output_dir / f"trace_{timestamp_str}.md"
            with open(filepath, "w") as f:
                f.write(self.export_to_markdown())

        return filepath


def save_trace_from_result(
    result: RecommendationResult, output_dir: Path, format: str = "json"
) -> Path:
    """
    Convenience function to save the trace of a RecommendationResult.

    Args:
        result: RecommendationResult containing the trace
        output_dir: Directory to save trace
        format: Output format ("json" or "markdown")

    Returns:
        Path to saved file
    """
    return RecommendationTraceBuilder(result.trace).save_to_file(output_dir, format)


def load_trace_from_file(filepath: Path) -> RecommendationTrace:
    """
    Load a recommendation trace from JSON file.

    Args:
        filepath: Path to trace JSON file

    Returns:
        RecommendationTrace object

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid
    """
    if not filepath.exists():
        raise FileNotFoundError(f"Trace file not found: {filepath}")

    with open(filepath, "r") as f:
        data = json.load(f)

    try:
        trace = RecommendationTrace(**data)
    except Exception as e:
        raise ValueError(f"Invalid trace file: {e}") from e

    return trace
