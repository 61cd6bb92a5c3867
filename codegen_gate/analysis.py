"""
Single-unit and batch analysis.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional

from .config import DEFAULT_CONFIG, GateConfig
from .engine import evaluate
from .metrics import extract
from .models import QualityReport, Violation
from .scoring import score
from .suggestions import suggest

DEFAULT_WORKERS = 4


def build_report(violations: List[Violation], functions=(), config: GateConfig = DEFAULT_CONFIG) -> QualityReport:
    """Score and summarize an already evaluated violation list."""
    return QualityReport(
        valid=not any(v.is_error for v in violations),
        violations=tuple(violations),
        suggestions=suggest(violations),
        score=score(violations, config),
        functions=tuple(functions),
    )


def analyze(
    source_text: str,
    config: GateConfig = DEFAULT_CONFIG,
    log: Optional[Callable[[str], None]] = None,
) -> QualityReport:
    """Extract metrics, evaluate every rule and score the result."""
    source_text = source_text or ''
    functions = extract(source_text, config)
    violations = evaluate(source_text, functions, config, log)
    return build_report(violations, functions, config)


def analyze_many(
    texts: Iterable[str],
    config: GateConfig = DEFAULT_CONFIG,
    workers: int = DEFAULT_WORKERS,
) -> List[QualityReport]:
    """Analyze independent units concurrently; reports keep input order."""
    texts = list(texts)
    if not texts:
        return []

    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        return list(executor.map(lambda text: analyze(text, config), texts))
