"""Accessibility analyzers.

Each analyzer inspects a list of design nodes independently and returns
its own issues:
- ContrastAnalyzer: text and UI component contrast
- TextSizeAnalyzer: legible font sizes and readable text blocks
- TouchTargetAnalyzer: target size and spacing
- ImageAccessibilityAnalyzer: alternative text
- ColorBlindnessAnalyzer: information conveyed by hue alone
- NavigationAnalyzer: headings, focus order and reachability
"""

from .base import BaseAnalyzer, effective_background
from .color_blindness import ColorBlindnessAnalyzer
from .contrast import ContrastAnalyzer
from .images import ImageAccessibilityAnalyzer
from .navigation import NavigationAnalyzer
from .text_size import TextSizeAnalyzer
from .touch_target import TouchTargetAnalyzer

__all__ = [
    "BaseAnalyzer",
    "effective_background",
    "ColorBlindnessAnalyzer",
    "ContrastAnalyzer",
    "ImageAccessibilityAnalyzer",
    "NavigationAnalyzer",
    "TextSizeAnalyzer",
    "TouchTargetAnalyzer",
]
