"""Exception types raised by design_a11y.

Scans themselves never raise; these cover the edges around them
(loading a design tree, applying a fix, racing a scan against a clock).
"""


class DesignA11yError(Exception):
    """Base class for all design_a11y errors."""


class NodeAccessError(DesignA11yError):
    """A host node could not be read or modified."""

    def __init__(self, node_id: str | None, message: str):
        self.node_id = node_id
        super().__init__(f"{message} (node: {node_id})" if node_id else message)


class NodeTreeError(DesignA11yError):
    """A serialized design tree could not be loaded."""


class ScanTimeoutError(DesignA11yError):
    """A scan did not finish within its time budget."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Accessibility scan exceeded {timeout_seconds:g}s")
