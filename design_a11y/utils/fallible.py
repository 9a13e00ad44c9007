"""Fail-soft wrappers for calls that cross into the host design tool.

Every read of a node attribute and every awaited host call made by the
traversal helpers and analyzers goes through ``attempt`` or
``read_attr``. A failure is logged and replaced by a default, so one
unreadable node shrinks the result instead of aborting the scan.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def attempt(
    operation: Callable[[], Awaitable[T]],
    default: T,
    *,
    action: str,
    node_id: str | None = None,
) -> T:
    """Await a host call, returning ``default`` if it raises.

    Args:
        operation: Zero-argument callable returning an awaitable
        default: Value to return on failure
        action: Short name of the host call, for the log entry
        node_id: Node the call was made on, if any

    Returns:
        The call's result, or ``default``
    """
    try:
        return await operation()
    except Exception as e:
        logger.warning(
            "Host call failed",
            action=action,
            node_id=node_id,
            error=str(e),
        )
        return default


def read_attr(node: Any, name: str, default: Any = None) -> Any:
    """Read an optional attribute from a host node.

    Missing attributes, ``None`` values and properties that raise all
    produce ``default``.
    """
    try:
        value = getattr(node, name, None)
    except Exception as e:
        logger.debug("Attribute read failed", attribute=name, error=str(e))
        return default
    return default if value is None else value
