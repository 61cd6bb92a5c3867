"""
Data models for the quality gate.
Pure dataclasses - no business logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple


class Category(str, Enum):
    """Stable violation categories (keys of the suggestion table)."""
    TYPESCRIPT = 'typescript'
    LOGGING = 'logging'
    ESLINT = 'eslint'
    COMPLEXITY = 'complexity'
    PARAMETERS = 'parameters'
    JSDOC = 'jsdoc'
    IMPORT = 'import'
    FILE_SIZE = 'file-size'
    DUPLICATION = 'duplication'
    NULL_SAFETY = 'null-safety'
    PROPERTY_ACCESS = 'property-access'
    TYPE_ASSIGNMENT = 'type-assignment'
    PATTERN = 'pattern'


class Severity(str, Enum):
    ERROR = 'error'
    WARNING = 'warning'


@dataclass(frozen=True)
class Parameter:
    """A declared function parameter."""
    name: str
    type: str = ''


@dataclass(frozen=True)
class FunctionRecord:
    """Metrics for one function found in source text."""
    name: str
    line_span: Tuple[int, int]
    line_count: int
    complexity: int
    parameters: Tuple[Parameter, ...] = ()
    has_early_validation: bool = False
    uses_any_type: bool = False
    uses_magic_number: bool = False
    return_type: str = ''

    @property
    def start_line(self) -> int:
        return self.line_span[0]


@dataclass(frozen=True)
class Violation:
    """A code quality violation."""
    rule_id: str
    category: Category
    severity: Severity
    message: str
    line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


@dataclass(frozen=True)
class QualityReport:
    """Result of analyzing one unit of source text."""
    valid: bool
    violations: Tuple[Violation, ...] = ()
    suggestions: Tuple[str, ...] = ()
    score: int = 100
    functions: Tuple[FunctionRecord, ...] = ()

    @property
    def errors(self) -> Tuple[Violation, ...]:
        return tuple(v for v in self.violations if v.is_error)

    @property
    def warnings(self) -> Tuple[Violation, ...]:
        return tuple(v for v in self.violations if not v.is_error)


@dataclass(frozen=True)
class GenerationRequest:
    """A structured code generation request, validated before rendering."""
    template_name: str
    name: Optional[str] = None
    params: Optional[str] = None
    returns: Optional[str] = None
    description: Optional[str] = None
    is_async: bool = False
    throws: Optional[str] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def variables(self) -> Dict[str, Any]:
        """Template variables handed to the renderer."""
        variables: Dict[str, Any] = dict(self.extra)
        for key, value in (
            ('name', self.name),
            ('params', self.params),
            ('returns', self.returns),
            ('description', self.description),
            ('throws', self.throws),
        ):
            if value is not None:
                variables[key] = value
        if self.is_async:
            variables['async'] = True
        return variables


@dataclass(frozen=True)
class ValidationOutcome:
    """Pre-validation verdict. ``reason`` is set only when ``ok`` is False."""
    ok: bool
    reason: Optional[str] = None
    field: Optional[str] = None
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FixNote:
    """A fix pass declined to rewrite a construct."""
    pass_name: str
    message: str
    line: Optional[int] = None


@dataclass(frozen=True)
class FixOutcome:
    """Output of a single fix pass."""
    text: str
    notes: Tuple[FixNote, ...] = ()


@dataclass(frozen=True)
class FixPass:
    """A named, pure text rewrite with a fixed pipeline position."""
    name: str
    position: int
    category: Category
    apply: Callable[..., FixOutcome]


@dataclass(frozen=True)
class FixResult:
    """Output of the whole pipeline."""
    text: str
    notes: Tuple[FixNote, ...] = ()


@dataclass(frozen=True)
class GenerationResult:
    """Rendered, fixed and verified code plus its final report."""
    text: str
    report: QualityReport
    notes: Tuple[FixNote, ...] = ()
    warnings: Tuple[str, ...] = ()


@dataclass
class SourceFile:
    """A source file found on disk (CLI only)."""
    path: Path
    content: str = ""
