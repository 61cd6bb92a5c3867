"""
Quality score calculation.
"""

from typing import Iterable

from .config import DEFAULT_CONFIG, GateConfig
from .models import Violation

MAX_SCORE = 100


def score(violations: Iterable[Violation], config: GateConfig = DEFAULT_CONFIG) -> int:
    """100 minus the per-rule deduction of every violation, clamped to [0, 100]."""
    total = MAX_SCORE
    for v in violations:
        total -= config.deduction(v.rule_id)
    return max(0, min(MAX_SCORE, total))


def score_emoji(value: int) -> str:
    if value >= 90:
        return '🟢'
    if value >= 70:
        return '🟡'
    return '🔴'
