"""Output formatting and display for complexity reports."""

from typing import List

from .errors import FormatError
from .models import ChangedFile, Report, Tier


# ANSI color codes
GREEN = '\033[92m'
YELLOW = '\033[93m'
RED = '\033[91m'
CYAN = '\033[96m'
BOLD = '\033[1m'
RESET = '\033[0m'

TIER_COLORS = {
    Tier.LOW: GREEN,
    Tier.MEDIUM: YELLOW,
    Tier.HIGH: RED,
}

OUTPUT_FORMATS = ('text', 'markdown')

UNASSIGNED = 'unassigned'


def _file_stats(changed_file: ChangedFile) -> str:
    if changed_file.is_binary:
        return 'binary'
    return f"+{changed_file.lines_added:,}/-{changed_file.lines_removed:,}"


class ReportFormatter:
    """Renders a Report as console text or as a Markdown PR comment."""

    def __init__(self, output_format: str = 'text', use_color: bool = False):
        """Initialize the report formatter.

        Args:
            output_format: 'text' for the console, 'markdown' for a PR comment body
            use_color: Whether to use ANSI colors in text output
        """
        if output_format not in OUTPUT_FORMATS:
            raise FormatError(f"Unknown output format '{output_format}' "
                              f"(valid: {', '.join(OUTPUT_FORMATS)})")
        self.output_format = output_format
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return f"{color}{text}{RESET}"

    def render(self, report: Report) -> str:
        """Render the report in the configured format.

        Sections always appear in the same order: score, reasons,
        suggested owners, flagged files.
        """
        if not isinstance(report, Report):
            raise FormatError(f"Cannot render {type(report).__name__}, expected Report")
        if self.output_format == 'markdown':
            return self._render_markdown(report)
        return self._render_text(report)

    def print_report(self, report: Report):
        """Print the rendered report to standard output."""
        print(self.render(report))

    def _summary_line(self, report: Report) -> str:
        change_set = report.change_set
        added = sum(changed_file.lines_added for changed_file in change_set)
        removed = sum(changed_file.lines_removed for changed_file in change_set)
        line = f"{len(change_set)} file(s) changed, +{added:,}/-{removed:,} lines"
        if report.excluded_files:
            line += f" ({len(report.excluded_files)} generated file(s) excluded)"
        return line

    def _render_text(self, report: Report) -> str:
        score = report.score
        lines: List[str] = []

        lines.append("=" * 80)
        lines.append(self._color("PR COMPLEXITY REPORT", BOLD))
        lines.append("=" * 80)
        tier_label = self._color(score.tier.value, TIER_COLORS[score.tier])
        lines.append(f"Score: {score.numeric_value:.2f} ({tier_label})")
        lines.append(self._summary_line(report))

        lines.append("")
        lines.append(self._color("Reasons:", CYAN))
        if score.reasons:
            lines.extend(f"  - {reason}" for reason in score.reasons)
        else:
            lines.append("  (none)")

        lines.append("")
        lines.append(self._color("Suggested reviewers:", CYAN))
        if report.suggested_owners:
            lines.extend(f"  - {owner}" for owner in sorted(report.suggested_owners))
        else:
            lines.append(f"  {UNASSIGNED}")

        lines.append("")
        lines.append(self._color("Flagged files:", CYAN))
        if report.flagged_files:
            lines.extend(f"  - {f.path} ({_file_stats(f)})" for f in report.flagged_files)
        else:
            lines.append("  (none)")

        return "\n".join(lines)

    def _render_markdown(self, report: Report) -> str:
        score = report.score
        lines: List[str] = []

        lines.append(f"## PR complexity: {score.tier.value} ({score.numeric_value:.2f})")
        lines.append("")
        lines.append(self._summary_line(report))

        lines.append("")
        lines.append("### Reasons")
        if score.reasons:
            lines.extend(f"- {reason}" for reason in score.reasons)
        else:
            lines.append("_No complexity factors triggered._")

        lines.append("")
        lines.append("### Suggested reviewers")
        if report.suggested_owners:
            lines.extend(f"- {owner}" for owner in sorted(report.suggested_owners))
        else:
            lines.append(f"_{UNASSIGNED}_")

        lines.append("")
        lines.append("### Flagged files")
        if report.flagged_files:
            lines.append("| File | Changes |")
            lines.append("| --- | --- |")
            lines.extend(f"| `{f.path}` | {_file_stats(f)} |" for f in report.flagged_files)
        else:
            lines.append("_None._")

        return "\n".join(lines)
