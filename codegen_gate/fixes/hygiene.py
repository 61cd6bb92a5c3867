"""
Pass 8: type-system hygiene rewrites.

Three steps, applied in order over the whole text:
  (a) result-style access -> guarded ternary / ``success`` flag
  (b) ``: Object`` / ``: Function`` -> structural types
  (c) unguarded chained or subscript access -> optional chaining plus a
      TODO comment naming the receiver

Anything that cannot be rewritten safely, or whose rewrite would equal an
adjacent line, is left alone and noted.
"""

import re
from typing import List, Optional, Tuple

from ..config import GateConfig
from ..lexer import indent_of, mask_code
from ..metrics import extract
from ..models import FixNote, FixOutcome
from ..patterns import (
    LOOSE_TYPE_PATTERN,
    NARROWED_TYPES,
    RESULT_ACCESS_PATTERN,
    SUBSCRIPT_PATTERN,
    followed_by_call,
    is_assignment_target,
    previous_code_lines,
    result_accesses,
    unguarded_accesses,
)

PASS_NAME = 'type-hygiene'

DECLARATION_LINE = re.compile(
    r'^\s*(?:export\s+)?(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?(?:async\s+)?'
    r'(?:const|let|var|function|class|interface|type|enum|import|export)\b'
)
NEW_EXPRESSION = re.compile(r'\bnew\b')

Edit = Tuple[int, int, str]


def _apply_edits(line: str, edits: List[Edit]) -> str:
    for start, end, replacement in sorted(edits, reverse=True):
        line = line[:start] + replacement + line[end:]
    return line


def _repeats_neighbour(rewritten: str, *neighbours: str) -> bool:
    """True when the rewritten line equals one of its neighbours."""
    return rewritten in neighbours


def _following(lines: List[str], idx: int) -> Optional[str]:
    return lines[idx + 1] if idx + 1 < len(lines) else None


def _guarded_form(recv: str, prop: str) -> str:
    if prop == 'isOk':
        return f'{recv}.success'
    if prop == 'isErr':
        return f'!{recv}.success'
    if prop == 'data':
        return f'({recv}.success ? {recv}.data : undefined)'
    return f'({recv}.success ? undefined : {recv}.error)'


def rewrite_result_access(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    masked_lines = mask_code(text).split('\n')
    fixed = []
    notes = []

    for idx, (line, masked) in enumerate(zip(lines, masked_lines)):
        for match in RESULT_ACCESS_PATTERN.finditer(masked):
            if followed_by_call(masked, match.end()):
                notes.append(FixNote(PASS_NAME, f'Call {match.group(0)}() left in place', idx + 1))

        previous = previous_code_lines(masked_lines, idx)
        checked: List[str] = []
        edits: List[Edit] = []

        # checked grows while the generator runs: once a receiver is
        # rewritten, its later accesses on this line count as checked
        for match in result_accesses(masked, previous, checked):
            recv, prop = match.group('recv'), match.group('prop')
            if is_assignment_target(masked, match.end()):
                notes.append(FixNote(PASS_NAME, f'Assignment to {recv}.{prop} left in place', idx + 1))
                continue
            edits.append((match.start(), match.end(), _guarded_form(recv, prop)))
            checked.append(recv)

        if not edits:
            fixed.append(line)
            continue

        rewritten = _apply_edits(line, edits)
        if _repeats_neighbour(rewritten, fixed[-1] if fixed else None, _following(lines, idx)):
            notes.append(FixNote(PASS_NAME, 'Result access rewrite would repeat an adjacent line', idx + 1))
            fixed.append(line)
        else:
            fixed.append(rewritten)

    return FixOutcome('\n'.join(fixed), tuple(notes))


def narrow_loose_types(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    masked_lines = mask_code(text).split('\n')
    fixed = []
    notes = []

    for idx, (line, masked) in enumerate(zip(lines, masked_lines)):
        edits = [
            (m.start('type'), m.end('type'), NARROWED_TYPES[m.group('type')])
            for m in LOOSE_TYPE_PATTERN.finditer(masked)
        ]
        if not edits:
            fixed.append(line)
            continue

        rewritten = _apply_edits(line, edits)
        if _repeats_neighbour(rewritten, fixed[-1] if fixed else None, _following(lines, idx)):
            notes.append(FixNote(PASS_NAME, 'Narrowed type would repeat an adjacent line', idx + 1))
            fixed.append(line)
        else:
            fixed.append(rewritten)

    return FixOutcome('\n'.join(fixed), tuple(notes))


def _protected(masked: str, is_function_start: bool) -> str:
    """Why a line must not be rewritten, or '' if it may be."""
    if is_function_start:
        return 'function header'
    if DECLARATION_LINE.match(masked):
        return 'declaration'
    if NEW_EXPRESSION.search(masked):
        return 'new expression'
    return ''


def add_null_checks(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    masked_lines = mask_code(text).split('\n')
    function_rows = {func.start_line - 1 for func in extract(text, config)}
    fixed = []
    notes = []

    for idx, (line, masked) in enumerate(zip(lines, masked_lines)):
        accesses = unguarded_accesses(masked, previous_code_lines(masked_lines, idx))
        if not accesses:
            fixed.append(line)
            continue

        reason = _protected(masked, idx in function_rows)
        if reason:
            notes.append(FixNote(PASS_NAME, f'Unguarded access in {reason} left in place', idx + 1))
            fixed.append(line)
            continue

        edits: List[Edit] = []
        receivers: List[str] = []
        for match in accesses:
            recv = match.group('recv')
            if is_assignment_target(masked, match.end()):
                notes.append(FixNote(PASS_NAME, f"Assignment to '{match.group(0)}' left in place", idx + 1))
                continue
            if masked[:match.start()].rstrip().endswith(':'):
                notes.append(FixNote(PASS_NAME, f"'{match.group(0)}' after ':' left in place", idx + 1))
                continue

            recv_end = match.end('recv')
            if match.re is SUBSCRIPT_PATTERN:
                edits.append((recv_end, recv_end, '?.'))
            else:
                edits.append((recv_end, recv_end + 1, '?.'))
            if recv not in receivers:
                receivers.append(recv)

        if not edits:
            fixed.append(line)
            continue

        # the TODO line separates the rewrite from the line above
        rewritten = _apply_edits(line, edits)
        if _repeats_neighbour(rewritten, _following(lines, idx)):
            notes.append(FixNote(PASS_NAME, 'Optional chaining would repeat the next line', idx + 1))
            fixed.append(line)
            continue
        fixed.append(f"{indent_of(line)}// TODO: Add null check for {', '.join(receivers)}")
        fixed.append(rewritten)

    return FixOutcome('\n'.join(fixed), tuple(notes))


def type_hygiene(text: str, config: GateConfig) -> FixOutcome:
    notes: List[FixNote] = []
    for step in (rewrite_result_access, narrow_loose_types, add_null_checks):
        outcome = step(text, config)
        text = outcome.text
        notes.extend(outcome.notes)
    return FixOutcome(text, tuple(notes))
