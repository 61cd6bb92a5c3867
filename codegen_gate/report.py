"""
Report generation for the quality gate.
Console and markdown output.
"""

from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from .config import DEFAULT_CONFIG, GateConfig
from .models import QualityReport, Violation
from .scoring import score_emoji

# (label, report) pairs, usually file paths
Results = Sequence[Tuple[str, QualityReport]]


def average_score(results: Results) -> int:
    if not results:
        return 100
    return round(sum(report.score for _, report in results) / len(results))


def generate_markdown_report(results: Results) -> str:
    """Generate markdown report."""
    errors = sum(len(report.errors) for _, report in results)
    warnings = sum(len(report.warnings) for _, report in results)
    lines = [
        "# Code Quality Gate Report",
        "",
        f"**Files analyzed:** {len(results)}",
        f"**Average score:** {average_score(results)}/100",
        f"**Errors:** {errors}",
        f"**Warnings:** {warnings}",
        "",
    ]

    if not errors and not warnings:
        lines.append("✅ **All checks passed!**")
        return '\n'.join(lines)

    for label, report in results:
        if not report.violations:
            continue

        lines.append(f"## `{label}` {score_emoji(report.score)} {report.score}/100")
        lines.append("")

        # Group by category
        by_category: Dict[str, List[Violation]] = defaultdict(list)
        for v in report.violations:
            by_category[v.category.value].append(v)

        for category, violations in by_category.items():
            lines.append(f"### {category.replace('-', ' ').title()}")
            lines.append("")
            lines.append("| Severity | Line | Rule | Message |")
            lines.append("|----------|------|------|---------|")
            for v in violations:
                line = v.line if v.line is not None else '-'
                lines.append(f"| {v.severity.value} | {line} | `{v.rule_id}` | {v.message} |")
            lines.append("")

        if report.suggestions:
            lines.append("**Suggestions:**")
            lines.append("")
            for suggestion in report.suggestions:
                lines.append(f"- {suggestion}")
            lines.append("")

    return '\n'.join(lines)


def print_summary(label: str, report: QualityReport, config: GateConfig = DEFAULT_CONFIG) -> None:
    """Print one report to the console."""
    print(f"\n📊 Code Quality Report: {label}")
    print("=" * 50)
    print(f"\n{score_emoji(report.score)} Overall Score: {report.score}/100")
    print(f"   Errors: {len(report.errors)}  Warnings: {len(report.warnings)}")

    if report.errors:
        print("\n❌ Critical Issues:")
        for v in report.errors:
            where = f" (line {v.line})" if v.line else ""
            print(f"  🔴 [{v.category.value}] {v.message}{where}")

    long_functions = [f for f in report.functions if f.line_count > config.max_function_lines]
    complex_functions = [f for f in report.functions if f.complexity > config.max_complexity]
    unguarded = [f for f in report.functions
                 if f.line_count > config.early_validation_min_lines and not f.has_early_validation]

    if long_functions or complex_functions or unguarded:
        print("\n⚠️  Function Issues:")
        for f in long_functions:
            print(f"  - {f.name} (line {f.start_line}): {f.line_count} lines (max: {config.max_function_lines})")
        for f in complex_functions:
            print(f"  - {f.name} (line {f.start_line}): complexity {f.complexity} (max: {config.max_complexity})")
        for f in unguarded:
            print(f"  - {f.name} (line {f.start_line}): no early validation")

    if report.suggestions:
        print("\n💡 Suggestions:")
        for suggestion in report.suggestions:
            print(f"  - {suggestion}")

    if report.valid:
        print("\n✅ No blocking issues")
