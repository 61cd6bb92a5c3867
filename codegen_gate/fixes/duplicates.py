"""
Pass 6: remove exact duplicate consecutive lines.
"""

import re

from ..config import GateConfig
from ..lexer import is_comment_line, mask_code
from ..models import FixOutcome

WORD = re.compile(r'\w')


def _removable(line: str, masked: str) -> bool:
    # Brace-only lines and lines inside template literals are structural
    return bool(line.strip()) and not is_comment_line(line) and bool(WORD.search(masked))


def dedupe_lines(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    masked_lines = mask_code(text).split('\n')
    fixed = []

    for idx, line in enumerate(lines):
        if fixed and line == fixed[-1] and _removable(line, masked_lines[idx]):
            continue
        fixed.append(line)

    return FixOutcome('\n'.join(fixed))
