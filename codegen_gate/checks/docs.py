"""
Documentation check.
Every exported declaration must sit directly under a doc comment.
"""

from typing import List

from ..config import GateConfig
from ..lexer import SourceText, is_doc_line
from ..models import Category, FunctionRecord, Severity, Violation
from ..patterns import exported_declarations


def check_missing_docs(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for exported declarations without a preceding doc comment."""
    violations = []

    # Declarations are matched on masked lines (so nothing inside a string or
    # comment counts); the doc comment itself is read from the raw lines.
    for idx, kind, name in exported_declarations(list(source.masked_lines)):
        previous = source.lines[idx - 1] if idx > 0 else ''
        if is_doc_line(previous):
            continue

        violations.append(Violation(
            rule_id='jsdoc',
            category=Category.JSDOC,
            severity=Severity.ERROR,
            message=f"Exported {kind} '{name}' lacks JSDoc documentation",
            line=idx + 1,
        ))

    return violations
