"""
Validation entry point, recursion helper and error path aggregation.
"""
from typing import Any, NamedTuple, Optional

from utils.logging_config import get_logger
from utils.exceptions import SpecUsageError
from .base import apply_predicate, is_spec
from .types import ErrorMap, PathSegment, Result

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 256


class Depth(NamedTuple):
    """Nesting level of the value being checked and the configured limit."""

    level: int
    limit: int

    def deeper(self) -> 'Depth':
        return Depth(self.level + 1, self.limit)

    @property
    def exceeded(self) -> bool:
        return self.level > self.limit


def validate(value: Any, spec: Any, max_depth: Optional[int] = None) -> Result:
    """
    Validate ``value`` against ``spec``.

    Args:
        value: Decoded payload (scalars, lists, string-keyed maps)
        spec: A built spec
        max_depth: Nesting limit; defaults to ``validation.max_depth`` from config

    Returns:
        None if the value passed, a message for a flat failure, or a map of
        path tuples to messages for failures inside maps and lists.

    Raises:
        SpecUsageError: if ``spec`` is not a prepped spec
    """
    if max_depth is None:
        max_depth = _configured_max_depth()

    result = _validate(value, spec, Depth(0, max_depth))
    if result is not None:
        logger.debug(f"{spec.kind_name()} rejected value: {result}")
    return result


def is_valid(value: Any, spec: Any, max_depth: Optional[int] = None) -> bool:
    """Return True if ``value`` passes ``spec``."""
    return validate(value, spec, max_depth=max_depth) is None


def recurse(key: PathSegment, value: Any, spec: Any, depth: Optional[Depth] = None) -> Optional[ErrorMap]:
    """Validate a child value and key its errors by ``key``."""
    if depth is None:
        depth = Depth(0, DEFAULT_MAX_DEPTH)
    child_depth = depth.deeper()
    if child_depth.exceeded:
        logger.debug(f"Nesting depth limit {depth.limit} reached at {key!r}")
        return {(key,): f"exceeds maximum nesting depth of {depth.limit}"}

    return prefix_errors(key, _validate(value, spec, child_depth))


def prefix_errors(key: PathSegment, result: Result) -> Optional[ErrorMap]:
    """
    Move a child's result under ``key``.

    A flat message becomes a one-entry map; every path of an error map gets
    ``key`` prepended.
    """
    if result is None:
        return None
    if isinstance(result, str):
        return {(key,): result}
    return {(key,) + path: message for path, message in result.items()}


def ensure_prepped(spec: Any):
    if not is_spec(spec):
        raise SpecUsageError(
            f"{type(spec).__name__} object is not a spec",
            details={'type': type(spec).__name__}
        )
    if not getattr(spec, 'prepped', False):
        raise SpecUsageError(
            f"{type(spec).__name__} has not been prepped",
            details={'type': type(spec).__name__}
        )


def _validate(value: Any, spec: Any, depth: Depth) -> Result:
    ensure_prepped(spec)

    if value is None:
        return None if spec.nullable else 'cannot be nil'

    result = spec.check(value, depth)
    if result is not None:
        return result

    # The predicate only runs once the spec's own rules have passed.
    return apply_predicate(spec.also, value)


def _configured_max_depth() -> int:
    from config import get_config
    return get_config('validation.max_depth', DEFAULT_MAX_DEPTH)
