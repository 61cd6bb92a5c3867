"""
Pass 1: widen 'any' annotations to 'unknown'.
"""

from ..config import GateConfig
from ..lexer import mask_code
from ..models import FixOutcome
from ..patterns import ANY_TYPE_PATTERN


def widen_any(text: str, config: GateConfig) -> FixOutcome:
    """Replace ': any', 'as any' and '<any>' with their 'unknown' form.

    Matches are found on masked text, so comments and strings keep 'any'.
    """
    masked = mask_code(text)
    pieces = []
    last = 0

    for match in ANY_TYPE_PATTERN.finditer(masked):
        any_start = match.end('lead')
        pieces.append(text[last:any_start])
        pieces.append('unknown')
        last = match.end()

    if not pieces:
        return FixOutcome(text)

    pieces.append(text[last:])
    return FixOutcome(''.join(pieces))
