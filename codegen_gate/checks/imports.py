"""
Duplicate import detection.
"""

from collections import defaultdict
from typing import Dict, List

from ..config import GateConfig
from ..lexer import ImportUnit, SourceText, parse_imports
from ..models import Category, FunctionRecord, Severity, Violation


def check_duplicate_imports(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for one module path imported by more than one statement."""
    violations = []
    by_module: Dict[str, List[ImportUnit]] = defaultdict(list)

    for unit in parse_imports(list(source.lines)):
        if unit.module:
            by_module[unit.module].append(unit)

    # dicts keep first-seen order, so modules are reported top to bottom
    for module, units in by_module.items():
        if len(units) > 1:
            violations.append(Violation(
                rule_id='duplicate-import',
                category=Category.IMPORT,
                severity=Severity.ERROR,
                message=f'Duplicate import from module "{module}" ({len(units)} statements)',
                line=units[0].start + 1,
            ))

    return violations
