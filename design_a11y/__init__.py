"""design-a11y - WCAG accessibility analysis for design documents.

Scans a tree of design nodes (frames, text, images, components) for
contrast, text size, touch target, alt text, color blindness and
navigation issues.

Usage:
    from design_a11y import load_tree, run_accessibility_check

    roots = load_tree(design_json)
    issues = await run_accessibility_check(roots)
"""

from .analyzers import (
    BaseAnalyzer,
    ColorBlindnessAnalyzer,
    ContrastAnalyzer,
    ImageAccessibilityAnalyzer,
    NavigationAnalyzer,
    TextSizeAnalyzer,
    TouchTargetAnalyzer,
)
from .config import ScanSettings, get_settings
from .exceptions import DesignA11yError, NodeAccessError, NodeTreeError, ScanTimeoutError
from .models import FixSuggestion, Issue, IssueLocation, IssueType, Severity, severity_rank
from .nodes import DesignNode, MemoryNode, load_tree, load_tree_file
from .scanner import (
    AccessibilityScanner,
    ScanReport,
    compare_scans,
    filter_issues,
    run_accessibility_check,
    scan_with_timeout,
)

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "run_accessibility_check",
    "scan_with_timeout",
    "AccessibilityScanner",
    "ScanReport",
    "filter_issues",
    "compare_scans",
    # Analyzers
    "BaseAnalyzer",
    "ColorBlindnessAnalyzer",
    "ContrastAnalyzer",
    "ImageAccessibilityAnalyzer",
    "NavigationAnalyzer",
    "TextSizeAnalyzer",
    "TouchTargetAnalyzer",
    # Models
    "FixSuggestion",
    "Issue",
    "IssueLocation",
    "IssueType",
    "Severity",
    "severity_rank",
    # Nodes
    "DesignNode",
    "MemoryNode",
    "load_tree",
    "load_tree_file",
    # Config and errors
    "ScanSettings",
    "get_settings",
    "DesignA11yError",
    "NodeAccessError",
    "NodeTreeError",
    "ScanTimeoutError",
]
