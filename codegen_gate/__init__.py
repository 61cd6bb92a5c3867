"""
Codegen Gate - quality gate for generated TypeScript/JavaScript.

- Pre-validates generation requests before any text exists
- Extracts function metrics (length, complexity, parameters, guards)
- Evaluates a fixed rule table and scores the result (0-100)
- Suggests one fix per violated category
- Auto-fixes common problems with an ordered, idempotent pipeline

Usage:
    python -m codegen_gate analyze PATH [--report] [--threshold 80]
    python -m codegen_gate fix PATH [--write]
    python -m codegen_gate validate --template NAME [--name N] [--params P]
"""

from pathlib import Path
from typing import Iterable, List, Tuple

from .config import DEFAULT_CONFIG, ConfigError, GateConfig, load_config
from .models import (
    Category,
    FixNote,
    FixResult,
    FunctionRecord,
    GenerationRequest,
    GenerationResult,
    Parameter,
    QualityReport,
    Severity,
    SourceFile,
    ValidationOutcome,
    Violation,
)
from .analysis import analyze, analyze_many
from .fixes import PIPELINE, fix, run_pipeline
from .generation import Renderer, generate
from .metrics import extract
from .engine import RULES, evaluate
from .prevalidate import RequestError, ensure_valid, validate
from .report import average_score, generate_markdown_report, print_summary
from .scanner import scan_files
from .scoring import score
from .suggestions import suggest


def pre_validate(request: GenerationRequest, config: GateConfig = DEFAULT_CONFIG) -> ValidationOutcome:
    """Validate a generation request (soft warnings are not printed)."""
    return validate(request, config)


class QualityGate:
    """Main facade for the quality gate."""

    def __init__(self, config: GateConfig = DEFAULT_CONFIG, verbose: bool = False):
        self.config = config
        self.verbose = verbose

    @classmethod
    def from_file(cls, path: Path, verbose: bool = False) -> 'QualityGate':
        return cls(load_config(path), verbose=verbose)

    def log(self, msg: str) -> None:
        """Print if verbose mode."""
        if self.verbose:
            print(f"   {msg}")

    def pre_validate(self, request: GenerationRequest) -> ValidationOutcome:
        return validate(request, self.config, self.log)

    def analyze(self, source_text: str) -> QualityReport:
        return analyze(source_text, self.config, self.log)

    def analyze_many(self, texts: Iterable[str], workers: int = 4) -> List[QualityReport]:
        return analyze_many(texts, self.config, workers)

    def fix(self, source_text: str) -> FixResult:
        return run_pipeline(source_text, self.config, self.log)

    def generate(self, request: GenerationRequest, render: Renderer) -> GenerationResult:
        return generate(request, render, self.config, warn=print)

    def analyze_path(self, root: Path, workers: int = 4) -> List[Tuple[str, QualityReport]]:
        """Analyze every source file under root; (label, report) pairs."""
        print("🔍 Scanning files...")
        files = scan_files(root, self.log)
        print(f"   Found {len(files)} files to analyze")

        reports = self.analyze_many([f.content for f in files], workers)
        base = root if root.is_dir() else root.parent
        return [(str(f.path.relative_to(base)), r) for f, r in zip(files, reports)]


__all__ = [
    'QualityGate',
    'GateConfig',
    'DEFAULT_CONFIG',
    'ConfigError',
    'load_config',
    'RequestError',
    'Category',
    'Severity',
    'Parameter',
    'FunctionRecord',
    'Violation',
    'QualityReport',
    'GenerationRequest',
    'ValidationOutcome',
    'FixNote',
    'FixResult',
    'GenerationResult',
    'SourceFile',
    'RULES',
    'PIPELINE',
    'pre_validate',
    'validate',
    'ensure_valid',
    'extract',
    'evaluate',
    'score',
    'suggest',
    'analyze',
    'analyze_many',
    'fix',
    'run_pipeline',
    'generate',
    'scan_files',
    'average_score',
    'generate_markdown_report',
    'print_summary',
]
