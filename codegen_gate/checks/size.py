"""
Size checks - function length, function complexity and file length.
"""

from typing import List

from ..config import GateConfig
from ..lexer import SourceText, count_non_blank
from ..models import Category, FunctionRecord, Severity, Violation


def check_long_functions(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for functions with too many non-blank lines."""
    violations = []

    for func in functions:
        if func.line_count > config.max_function_lines:
            violations.append(Violation(
                rule_id='max-lines-per-function',
                category=Category.COMPLEXITY,
                severity=Severity.ERROR,
                message=(f"Function '{func.name}' is too long "
                         f"({func.line_count} lines, max: {config.max_function_lines})"),
                line=func.start_line,
            ))

    return violations


def check_complexity(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for functions with high cyclomatic complexity."""
    violations = []

    for func in functions:
        if func.complexity > config.max_complexity:
            violations.append(Violation(
                rule_id='complexity',
                category=Category.COMPLEXITY,
                severity=Severity.ERROR,
                message=(f"Function '{func.name}' has complexity {func.complexity} "
                         f"(threshold: {config.max_complexity})"),
                line=func.start_line,
            ))

    return violations


def check_file_size(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check the hard file size limit."""
    total = count_non_blank(source.text)
    if total <= config.max_file_lines:
        return []

    return [Violation(
        rule_id='max-lines',
        category=Category.FILE_SIZE,
        severity=Severity.ERROR,
        message=f'File too large ({total} lines, max: {config.max_file_lines})',
    )]


def check_file_size_warning(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Warn when a file is approaching the size limit."""
    total = count_non_blank(source.text)
    if not config.soft_file_lines < total <= config.max_file_lines:
        return []

    return [Violation(
        rule_id='max-lines-warning',
        category=Category.FILE_SIZE,
        severity=Severity.WARNING,
        message=f'File approaching size limit ({total} lines, max: {config.max_file_lines})',
    )]
