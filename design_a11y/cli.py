"""Command-line front end: scan a JSON design tree and print the findings.

Usage:
    design-a11y scan design.json
    design-a11y scan design.json --level AAA --platform ios --json
"""

import argparse
import asyncio
import json
import sys

from .config import get_settings
from .exceptions import NodeTreeError
from .models import Severity
from .nodes.memory import load_tree_file
from .scanner import AccessibilityScanner, ScanReport, filter_issues
from .utils.logging import configure_logging, get_logger, log_operation
from .utils.wcag import Platform, WCAGLevel


def print_report(report: ScanReport) -> None:
    print("=" * 60)
    print("ACCESSIBILITY REPORT")
    print("=" * 60)
    print(f"\n{report.summary}\n")

    if not report.issues:
        return

    for severity in Severity:
        issues = filter_issues(report.issues, severities=[severity])
        if not issues:
            continue

        print("-" * 60)
        print(f"  {severity.value.upper()} ({len(issues)})")
        print("-" * 60)
        for issue in issues:
            print(f"\n  [{issue.type.value}] {issue.title}")
            print(f"    Node:     {issue.location.node_path}")
            if issue.current_value or issue.required_value:
                print(f"    Current:  {issue.current_value}  Required: {issue.required_value}")
            if issue.wcag_guideline:
                print(f"    WCAG:     {issue.wcag_guideline}")
            print(f"    {issue.description}")
            for fix in issue.fix_suggestions:
                print(f"      - {fix.description}")
        print()


async def run_scan(args: argparse.Namespace) -> int:
    overrides = {}
    if args.level:
        overrides["wcag_level"] = WCAGLevel(args.level)
    if args.platform:
        overrides["platform"] = Platform(args.platform)
    if args.no_color_blindness:
        overrides["include_color_blindness"] = False
    if args.aaa:
        overrides["check_aaa"] = True

    settings = get_settings().model_copy(update=overrides)

    try:
        roots = load_tree_file(args.file)
    except NodeTreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    with log_operation("accessibility_scan", logger=get_logger(__name__), file=args.file) as op:
        report = await AccessibilityScanner(settings).scan_report(roots)
        op["issue_count"] = len(report.issues)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report)

    return 1 if report.has_critical_issues else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="design-a11y",
        description="Check a design tree for WCAG accessibility issues",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan a JSON design tree")
    scan.add_argument("file", help="Path to a JSON file with one root node or a list of roots")
    scan.add_argument("--level", "-l", choices=[level.value for level in WCAGLevel],
                      help="WCAG level text contrast is checked against")
    scan.add_argument("--platform", "-p", choices=[platform.value for platform in Platform],
                      help="Platform whose touch target and text size minimums apply")
    scan.add_argument("--aaa", action="store_true", help="Also report text that passes AA but fails AAA")
    scan.add_argument("--no-color-blindness", action="store_true", help="Skip the color blindness checks")
    scan.add_argument("--json", action="store_true", help="Print the report as JSON")
    scan.add_argument("--log-level", default=None, help="Log level (default: DESIGN_A11Y_LOG_LEVEL or INFO)")

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(
        level=args.log_level or settings.log_level,
        json_format=settings.log_json,
    )

    return asyncio.run(run_scan(args))


if __name__ == "__main__":
    sys.exit(main())
