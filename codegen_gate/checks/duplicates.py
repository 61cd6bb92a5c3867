"""
Duplicate line detection.
"""

import re
from collections import defaultdict
from typing import Dict, List

from ..config import GateConfig
from ..lexer import SourceText, is_comment_line
from ..models import Category, FunctionRecord, Severity, Violation

# Lines of pure punctuation ("}", "});", "]") repeat naturally
WORD = re.compile(r'\w')


def check_duplicate_lines(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for source lines repeated more often than the limit allows."""
    violations = []
    line_groups: Dict[str, List[int]] = defaultdict(list)

    for idx, line in enumerate(source.lines):
        trimmed = line.strip()
        if not trimmed or is_comment_line(line) or not WORD.search(trimmed):
            continue
        line_groups[trimmed].append(idx)

    for content, indices in line_groups.items():
        if len(indices) > config.duplicate_line_limit:
            preview = content if len(content) <= 50 else content[:50] + '...'
            violations.append(Violation(
                rule_id='duplication',
                category=Category.DUPLICATION,
                severity=Severity.WARNING,
                message=f'Duplicate code found {len(indices)} times: "{preview}"',
                line=indices[0] + 1,
            ))

    return violations
