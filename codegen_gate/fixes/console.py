"""
Pass 3: strip standalone debug console calls.
"""

import re

from ..config import GateConfig
from ..lexer import find_matching, mask_code
from ..models import FixNote, FixOutcome
from ..patterns import previous_code_lines

PASS_NAME = 'strip-console'

STANDALONE_CONSOLE = re.compile(r'^\s*console\.(?:log|debug|info|trace)\s*\(')

# if/else/for/while header without a brace: the next statement is its body
BRACELESS_HEADER = re.compile(r'^(?:\}\s*)?(?:if|else|for|while)\b')


def _is_braceless_body(previous: str) -> bool:
    trimmed = previous.strip()
    return bool(BRACELESS_HEADER.match(trimmed)) and not trimmed.endswith(('{', ';', '}'))


def strip_console(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    masked_lines = mask_code(text).split('\n')
    kept = []
    notes = []

    for idx, (line, masked) in enumerate(zip(lines, masked_lines)):
        match = STANDALONE_CONSOLE.match(masked)
        if not match:
            kept.append(line)
            continue

        close = find_matching(masked, match.end() - 1)
        if close == -1:
            notes.append(FixNote(PASS_NAME, 'Multi-line console call left in place', idx + 1))
            kept.append(line)
            continue

        if masked[close + 1:].strip() not in ('', ';'):
            notes.append(FixNote(PASS_NAME, 'Console call shares its line with other code', idx + 1))
            kept.append(line)
            continue

        previous = previous_code_lines(masked_lines, idx, 1)
        if previous and _is_braceless_body(previous[0]):
            notes.append(FixNote(PASS_NAME, 'Console call is the body of a braceless statement', idx + 1))
            kept.append(line)

    return FixOutcome('\n'.join(kept), tuple(notes))
