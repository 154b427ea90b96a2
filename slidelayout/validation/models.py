"""
models.py — Result types shared by the validation checks.

Every check returns plain data; nothing here raises. to_dict() gives the
JSON-friendly form used by API layers and reports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Severity(Enum):
    """Severity levels for validation issues."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Issue:
    """A single problem found by a check."""
    severity: Severity
    category: str       # e.g. "accessibility", "typography", "color", "layout"
    property: str       # What was checked, e.g. "text-contrast", "safe-margin"
    message: str
    expected: Optional[str] = None
    actual: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "category": self.category,
            "property": self.property,
            "expected": self.expected,
            "actual": self.actual,
            "message": self.message,
        }


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check: the penalty it costs and the issues behind it."""
    penalty: int = 0
    issues: Tuple[Issue, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.issues


@dataclass(frozen=True)
class DimensionScore:
    """Score (0-100) for one quality dimension with its issues."""
    score: int
    issues: Tuple[Issue, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "issues": [i.to_dict() for i in self.issues]}


@dataclass(frozen=True)
class ValidationResult:
    """Complete quality assessment for one slide."""
    score: int                              # Weighted 0-100 quality score
    issues: Tuple[Issue, ...]
    recommendations: Tuple[str, ...]
    accessibility: DimensionScore
    typography: DimensionScore
    color_harmony: DimensionScore
    layout: DimensionScore
    contrast_ratio: float
    is_accessible: bool
    passed: bool
    details: Dict[str, Any] = field(default_factory=dict)

    def issues_by_category(self, category: str) -> Tuple[Issue, ...]:
        return tuple(i for i in self.issues if i.category == category)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "passed": self.passed,
            "isAccessible": self.is_accessible,
            "contrastRatio": round(self.contrast_ratio, 2),
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": list(self.recommendations),
            "accessibility": self.accessibility.to_dict(),
            "typography": self.typography.to_dict(),
            "colorHarmony": self.color_harmony.to_dict(),
            "layout": self.layout.to_dict(),
        }
