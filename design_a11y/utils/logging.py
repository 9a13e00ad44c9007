"""Structured logging for accessibility scans.

Provides:
- structlog configuration (console or JSON lines on stderr)
- Context-aware logging (a scan id is bound for the duration of a run)
- Operation start/end logging for the command line
- ScanLogger, which tracks analyzer outcomes over one scan
"""

import logging
import sys
from contextlib import contextmanager
from typing import Optional

import structlog


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    include_timestamp: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level name, any case; unknown names fall back to INFO
        json_format: Emit one JSON object per line
        include_timestamp: Add an ISO timestamp to every entry
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors.extend([
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ])

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None, **context) -> structlog.BoundLogger:
    """Get a logger, optionally with context already bound."""
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


class LogContext:
    """Bind context vars for the duration of a ``with`` block.

    Usage:
        with LogContext(scan_id=scan_id):
            await analyzer.analyze(nodes)
            # host-call warnings logged inside carry scan_id
    """

    def __init__(self, **context):
        self.context = context

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())


@contextmanager
def log_operation(
    operation: str,
    logger: Optional[structlog.BoundLogger] = None,
    **context,
):
    """Log the start and the outcome of an operation.

    Yields:
        Dict the caller can add result fields to; ``success`` and
        ``error`` are filled in on exit

    Example:
        with log_operation("accessibility_scan", file="home.json") as op:
            report = await scanner.scan_report(roots)
            op["issue_count"] = len(report.issues)
    """
    log = (logger or get_logger()).bind(operation=operation, **context)

    log.info(f"{operation} started")
    result = {"success": False, "error": None}

    try:
        yield result
        result["success"] = True
        log.info(f"{operation} completed", **result)
    except Exception as e:
        result["error"] = str(e)
        log.error(f"{operation} failed", **result)
        raise


class ScanLogger:
    """Logger specialized for one scan.

    Records which analyzers finished or failed and how many issues each
    reported, so the completion entry can summarize the run.
    """

    def __init__(self, logger: Optional[structlog.BoundLogger] = None, **context):
        log = logger or get_logger()
        self.log = log.bind(**context) if context else log
        self.issue_counts: dict[str, int] = {}
        self.failed: list[str] = []

    def scan_started(self, node_count: int, analyzers: list[str]) -> None:
        self.log.info("Accessibility scan started", nodes=node_count, analyzers=analyzers)

    def analyzer_finished(self, analyzer: str, issue_count: int) -> None:
        self.issue_counts[analyzer] = issue_count
        self.log.debug("Analyzer finished", analyzer=analyzer, issues=issue_count)

    def analyzer_failed(self, analyzer: str, error: BaseException) -> None:
        self.failed.append(analyzer)
        self.log.error("Analyzer failed", analyzer=analyzer, error=str(error), exc_info=error)

    def scan_completed(self, by_severity: dict[str, int], duration_ms: float) -> None:
        self.log.info(
            "Accessibility scan completed",
            issues=sum(self.issue_counts.values()),
            by_severity=by_severity,
            by_analyzer=dict(self.issue_counts),
            failed_analyzers=list(self.failed),
            duration_ms=round(duration_ms, 1),
        )
