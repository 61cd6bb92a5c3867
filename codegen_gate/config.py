"""
Configuration for the code generation quality gate.
Thresholds, score deductions and the YAML loader.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml


# Function size threshold (non-blank lines per function)
MAX_FUNCTION_LINES = 15

# Heuristic cyclomatic complexity threshold
MAX_COMPLEXITY = 10

# Parameter count limit (ESLint max-params)
MAX_PARAMS = 4

# File size thresholds (non-blank lines): hard limit and "approaching" limit
MAX_FILE_LINES = 300
SOFT_FILE_LINES = 250

# Guard clauses must appear within the first N body lines
EARLY_VALIDATION_LINES = 5

# Functions shorter than this are exempt from the early validation rule
EARLY_VALIDATION_MIN_LINES = 10

# A line may repeat this many times before it counts as duplication
DUPLICATE_LINE_LIMIT = 2

SEVERITIES = ('error', 'warning')

# Points deducted per violation instance, keyed by rule id
DEDUCTIONS = {
    'any-type': 10,
    'ts-ignore': 10,
    'eslint-disable': 15,
    'console-log': 5,
    'max-lines-per-function': 5,
    'complexity': 5,
    'max-lines': 15,
    'max-lines-warning': 5,
    'max-params': 10,
    'jsdoc': 5,
    'duplicate-import': 8,
    'duplication': 5,
    'early-validation': 3,
    'result-property-access': 3,
    'type-assignment': 4,
    'null-safety': 2,
    'fix-skipped': 0,
}


class ConfigError(ValueError):
    """Invalid gate configuration."""


@dataclass(frozen=True)
class GateConfig:
    """Immutable gate configuration, built once and passed explicitly."""
    max_function_lines: int = MAX_FUNCTION_LINES
    max_complexity: int = MAX_COMPLEXITY
    max_params: int = MAX_PARAMS
    max_file_lines: int = MAX_FILE_LINES
    soft_file_lines: int = SOFT_FILE_LINES
    strict_mode: bool = True
    logging_severity: str = 'error'
    early_validation_lines: int = EARLY_VALIDATION_LINES
    early_validation_min_lines: int = EARLY_VALIDATION_MIN_LINES
    duplicate_line_limit: int = DUPLICATE_LINE_LIMIT
    record_fix_skips: bool = False
    deductions: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(DEDUCTIONS))
    )

    def __post_init__(self) -> None:
        for name in ('max_function_lines', 'max_complexity', 'max_params',
                     'max_file_lines', 'soft_file_lines', 'early_validation_lines',
                     'early_validation_min_lines', 'duplicate_line_limit'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")

        if self.soft_file_lines > self.max_file_lines:
            raise ConfigError(
                f"soft_file_lines ({self.soft_file_lines}) exceeds max_file_lines ({self.max_file_lines})"
            )

        if self.logging_severity not in SEVERITIES:
            raise ConfigError(f"logging_severity must be one of {SEVERITIES}, got {self.logging_severity!r}")

        for rule_id, points in self.deductions.items():
            if isinstance(points, bool) or not isinstance(points, int) or points < 0:
                raise ConfigError(f"deduction for '{rule_id}' must be a non-negative integer, got {points!r}")

        # Freeze whatever mapping the caller handed in
        if not isinstance(self.deductions, MappingProxyType):
            object.__setattr__(self, 'deductions', MappingProxyType(dict(self.deductions)))

    def deduction(self, rule_id: str) -> int:
        """Points deducted for one violation of rule_id (0 if unknown)."""
        return self.deductions.get(rule_id, 0)

    def with_overrides(self, **overrides: Any) -> 'GateConfig':
        """Return a copy with the given fields replaced.

        A ``deductions`` override is merged over the current table.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        if 'deductions' in overrides:
            merged = dict(self.deductions)
            merged.update(overrides['deductions'] or {})
            overrides['deductions'] = merged

        return replace(self, **overrides)


DEFAULT_CONFIG = GateConfig()


def load_config(path: Union[str, Path], base: Optional[GateConfig] = None) -> GateConfig:
    """Load a YAML config file over the defaults (or over ``base``)."""
    path = Path(path)
    try:
        with path.open(encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    return config_from_dict(data, base)


def config_from_dict(data: Dict[str, Any], base: Optional[GateConfig] = None) -> GateConfig:
    """Build a config from a plain mapping (keys may use dashes or underscores)."""
    normalized = {str(k).replace('-', '_'): v for k, v in data.items()}

    deductions = normalized.get('deductions')
    if deductions is not None and not isinstance(deductions, dict):
        raise ConfigError("deductions must be a mapping of rule id to points")

    return (base or DEFAULT_CONFIG).with_overrides(**normalized)
