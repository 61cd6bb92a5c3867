"""
Lightweight lexical helpers for TypeScript/JavaScript source text.

There is no syntax tree here. These helpers mask strings and comments,
match brackets and split lists, which is enough structure for the
heuristic checks and fix passes to agree on what they see.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

QUOTES = '\'"`'

OPENERS = {'(': ')', '[': ']', '{': '}'}
CLOSERS = {v: k for k, v in OPENERS.items()}


def _string_end(text: str, start: int) -> int:
    """Index just past the string literal opened at ``start``."""
    quote = text[start]
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == '\n' and quote != '`':
            # Unterminated single-line string
            return i
        i += 1
    return n


def mask_code(text: str, strings: bool = True, comments: bool = True) -> str:
    """Blank out string contents and/or comments.

    Length and newlines are preserved so positions and line numbers in the
    masked text match the original. String quotes are kept.
    """
    out = list(text)
    n = len(text)
    i = 0

    def blank(start: int, end: int) -> None:
        for k in range(start, end):
            if out[k] != '\n':
                out[k] = ' '

    while i < n:
        ch = text[i]
        if ch == '/' and text.startswith('//', i):
            end = text.find('\n', i)
            end = n if end == -1 else end
            if comments:
                blank(i, end)
            i = end
        elif ch == '/' and text.startswith('/*', i):
            end = text.find('*/', i + 2)
            end = n if end == -1 else end + 2
            if comments:
                blank(i, end)
            i = end
        elif ch in QUOTES:
            end = _string_end(text, i)
            if strings:
                blank(i + 1, max(i + 1, end - 1))
            i = end
        else:
            i += 1

    return ''.join(out)


@dataclass(frozen=True)
class SourceText:
    """One unit of source text with its masked views, split into lines once.

    - ``masked``: strings and comments blanked (structure only)
    - ``no_strings``: strings blanked, comments kept (comment markers)
    """
    text: str
    lines: tuple
    masked: str
    masked_lines: tuple
    no_strings: str

    @classmethod
    def of(cls, text: str) -> 'SourceText':
        masked = mask_code(text)
        return cls(
            text=text,
            lines=tuple(text.split('\n')),
            masked=masked,
            masked_lines=tuple(masked.split('\n')),
            no_strings=mask_code(text, comments=False),
        )


def line_number(text: str, pos: int) -> int:
    """1-based line number of a character offset."""
    return text.count('\n', 0, pos) + 1


def is_blank(line: str) -> bool:
    return not line.strip()


def is_comment_line(line: str) -> bool:
    """True for lines that are entirely a comment (or part of a block comment)."""
    trimmed = line.strip()
    return trimmed.startswith(('//', '/*', '*'))


def is_doc_line(line: str) -> bool:
    """True for a doc comment opener or a line inside/closing a doc block."""
    trimmed = line.strip()
    return trimmed.startswith('/**') or trimmed.startswith('*')


def count_non_blank(text: str) -> int:
    """Count non-empty lines."""
    return len([l for l in text.split('\n') if l.strip()])


def count_code_lines(text: str) -> int:
    """Count non-empty lines that are not comment lines."""
    return len([l for l in text.split('\n') if l.strip() and not is_comment_line(l)])


def indent_of(line: str) -> str:
    return line[:len(line) - len(line.lstrip())]


def find_matching(masked: str, open_pos: int) -> int:
    """Index of the bracket closing the one at ``open_pos``, or -1.

    ``masked`` must already have strings and comments blanked.
    """
    opener = masked[open_pos]
    closer = OPENERS.get(opener)
    if closer is None:
        return -1

    depth = 0
    for pos in range(open_pos, len(masked)):
        ch = masked[pos]
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return pos
    return -1


def split_top_level(text: str, sep: str = ',') -> List[str]:
    """Split on ``sep`` outside brackets, generics and string literals.

    The ``>`` of an arrow (``=>``) does not close a generic.
    """
    parts = []
    depth = 0
    current = []
    quote: Optional[str] = None
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if quote:
            current.append(ch)
            if ch == '\\' and i + 1 < n:
                current.append(text[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in QUOTES:
            quote = ch
            current.append(ch)
        elif ch in '([{<':
            depth += 1
            current.append(ch)
        elif ch in ')]}':
            depth = max(0, depth - 1)
            current.append(ch)
        elif ch == '>':
            if i > 0 and text[i - 1] == '=':
                current.append(ch)
            else:
                depth = max(0, depth - 1)
                current.append(ch)
        elif ch == sep and depth == 0:
            parts.append(''.join(current))
            current = []
        else:
            current.append(ch)
        i += 1

    parts.append(''.join(current))
    return parts


def find_top_level(text: str, target: str) -> int:
    """Index of the first ``target`` char outside brackets/strings, or -1."""
    depth = 0
    quote: Optional[str] = None
    for i, ch in enumerate(text):
        if quote:
            if ch == quote and text[i - 1] != '\\':
                quote = None
            continue
        if ch in QUOTES:
            quote = ch
        elif ch in '([{<':
            depth += 1
        elif ch in ')]}':
            depth = max(0, depth - 1)
        elif ch == '>' and not (i > 0 and text[i - 1] == '='):
            depth = max(0, depth - 1)
        elif ch == target and depth == 0:
            # "=>" and "==" are not assignments
            if target == '=' and (text[i + 1:i + 2] in ('>', '=') or text[i - 1:i] in ('=', '!', '<', '>')):
                continue
            return i
    return -1


# =============================================================================
# Import statements
# =============================================================================

IMPORT_START = re.compile(r'^import(?=[\s{*\'"])')
IMPORT_FROM = re.compile(r'\bfrom\s*[\'"]([^\'"]+)[\'"]')
IMPORT_BARE = re.compile(r'^import\s*[\'"]([^\'"]+)[\'"]')
IMPORT_REQUIRE = re.compile(r'\brequire\(\s*[\'"]([^\'"]+)[\'"]\s*\)')

# Longest multi-line import we try to reassemble
MAX_IMPORT_LINES = 50


@dataclass(frozen=True)
class ImportUnit:
    """One import statement, possibly spanning several lines (0-based, inclusive)."""
    start: int
    end: int
    module: str
    lines: tuple

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)


def _import_module(statement: str) -> Optional[str]:
    for pattern in (IMPORT_FROM, IMPORT_BARE, IMPORT_REQUIRE):
        match = pattern.search(statement)
        if match:
            return match.group(1)
    return None


def parse_imports(lines: List[str]) -> List[ImportUnit]:
    """Find top-level import statements in order."""
    units = []
    i = 0
    n = len(lines)

    while i < n:
        if not IMPORT_START.match(lines[i]):
            i += 1
            continue

        end = i
        module = _import_module(lines[i])
        while module is None and end + 1 < n and end - i < MAX_IMPORT_LINES:
            if lines[end].rstrip().endswith(';'):
                break
            end += 1
            module = _import_module('\n'.join(lines[i:end + 1]))

        if module is None:
            # Could not find the module path; keep the statement as one line
            end = i
            module = ''

        units.append(ImportUnit(start=i, end=end, module=module, lines=tuple(lines[i:end + 1])))
        i = end + 1

    return units
