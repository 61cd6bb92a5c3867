"""
Console leak detection.
Finds console.log/debug/info/trace calls outside comments and strings.
"""

from typing import List

from ..config import GateConfig
from ..lexer import SourceText, line_number
from ..models import Category, FunctionRecord, Severity, Violation
from ..patterns import CONSOLE_PATTERN


def check_console_leaks(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for debug console statements in generated code."""
    violations = []
    severity = Severity(config.logging_severity)

    for match in CONSOLE_PATTERN.finditer(source.masked):
        method = match.group(1)
        violations.append(Violation(
            rule_id='console-log',
            category=Category.LOGGING,
            severity=severity,
            message=f'Use proper logging instead of console.{method}()',
            line=line_number(source.text, match.start()),
        ))

    return violations
