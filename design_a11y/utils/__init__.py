"""Utility modules for the accessibility engine.

Provides:
- Color science (luminance, contrast, dichromacy simulation)
- WCAG success criteria and thresholds
- Fail-soft host call wrappers
- Structured logging configuration
"""

from .color import (
    RGBA,
    DichromacyKind,
    color_distance,
    contrast_ratio,
    find_contrasting_shade,
    parse_color,
    relative_luminance,
    shift_luminance,
    simulate_dichromacy,
)
from .fallible import attempt, read_attr
from .logging import LogContext, ScanLogger, configure_logging, get_logger, log_operation
from .wcag import (
    Platform,
    WCAGGuideline,
    WCAGLevel,
    get_guideline,
    required_contrast_ratio,
    required_touch_target_size,
)

__all__ = [
    # Color
    "RGBA",
    "DichromacyKind",
    "color_distance",
    "contrast_ratio",
    "find_contrasting_shade",
    "parse_color",
    "relative_luminance",
    "shift_luminance",
    "simulate_dichromacy",
    # WCAG
    "Platform",
    "WCAGGuideline",
    "WCAGLevel",
    "get_guideline",
    "required_contrast_ratio",
    "required_touch_target_size",
    # Host calls
    "attempt",
    "read_attr",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    "log_operation",
    "ScanLogger",
]
