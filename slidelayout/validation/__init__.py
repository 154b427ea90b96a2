# Layout validation and scoring
from .colors import (
    adjust_color_for_contrast,
    color_distance,
    color_similarity,
    contrast_ratio,
    hex_to_rgb,
    meets_wcag,
    normalize_hex,
    parse_css_color,
    relative_luminance,
    rgb_to_hex,
)
from .contrast import (
    ContrastCheck,
    ThemeAccessibilityReport,
    check_contrast,
    validate_theme_accessibility,
)
from .grading import BuildGrade, GradedIssue, grade_outcome, letter_grade, validate_deck_consistency
from .layout_checks import (
    check_bounds,
    check_hierarchy,
    check_overlaps,
    check_safe_margins,
    check_spacing_consistency,
)
from .live_verifier import (
    ColorVerification,
    ComputedStyleSource,
    ConsistencyReport,
    MappingStyleSource,
    verify_theme_consistency,
)
from .models import CheckResult, DimensionScore, Issue, Severity, ValidationResult
from .scoring import (
    score,
    score_accessibility,
    score_color_harmony,
    score_layout,
    score_typography,
)

__all__ = [
    "adjust_color_for_contrast",
    "color_distance",
    "color_similarity",
    "contrast_ratio",
    "hex_to_rgb",
    "meets_wcag",
    "normalize_hex",
    "parse_css_color",
    "relative_luminance",
    "rgb_to_hex",
    "ContrastCheck",
    "ThemeAccessibilityReport",
    "check_contrast",
    "validate_theme_accessibility",
    "BuildGrade",
    "GradedIssue",
    "grade_outcome",
    "letter_grade",
    "validate_deck_consistency",
    "check_bounds",
    "check_hierarchy",
    "check_overlaps",
    "check_safe_margins",
    "check_spacing_consistency",
    "ColorVerification",
    "ComputedStyleSource",
    "ConsistencyReport",
    "MappingStyleSource",
    "verify_theme_consistency",
    "CheckResult",
    "DimensionScore",
    "Issue",
    "Severity",
    "ValidationResult",
    "score",
    "score_accessibility",
    "score_color_harmony",
    "score_layout",
    "score_typography",
]
