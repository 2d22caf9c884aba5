"""
Bound checking and message composition shared by the integer and decimal specs.
"""
from typing import Any, Callable, List, Mapping, Optional, Tuple

from utils.exceptions import SpecError

LOWER_BOUNDS = ('gt', 'gte')
UPPER_BOUNDS = ('lt', 'lte')
BOUND_FIELDS = LOWER_BOUNDS + UPPER_BOUNDS

BOUND_DESCRIPTIONS = {
    'gt': 'greater than',
    'gte': 'greater than or equal to',
    'lt': 'less than',
    'lte': 'less than or equal to',
}


def _effective_bound(bounds: Mapping[str, Any], names: Tuple[str, str]) -> Optional[Tuple[str, Any]]:
    exclusive, inclusive = names
    if bounds.get(exclusive) is not None and bounds.get(inclusive) is not None:
        raise SpecError(f"cannot use both {exclusive} and {inclusive}")
    for name in names:
        if bounds.get(name) is not None:
            return name, bounds[name]
    return None


def check_bounds_consistent(bounds: Mapping[str, Any]):
    """
    Reject bound combinations that are redundant or can never be satisfied.

    At most one lower (``gt``/``gte``) and one upper (``lt``/``lte``) bound
    may be set, and the lower bound must be strictly below the upper one.
    """
    lower = _effective_bound(bounds, LOWER_BOUNDS)
    upper = _effective_bound(bounds, UPPER_BOUNDS)
    if lower is None or upper is None:
        return

    lower_name, lower_value = lower
    upper_name, upper_value = upper
    if not lower_value < upper_value:
        raise SpecError(
            f"{lower_name} must be less than {upper_name}",
            details={lower_name: str(lower_value), upper_name: str(upper_value)}
        )


def within_bounds(value: Any, bounds: Mapping[str, Any]) -> bool:
    """Return True if ``value`` satisfies every configured bound."""
    gt = bounds.get('gt')
    if gt is not None and not value > gt:
        return False
    gte = bounds.get('gte')
    if gte is not None and not value >= gte:
        return False
    lt = bounds.get('lt')
    if lt is not None and not value < lt:
        return False
    lte = bounds.get('lte')
    if lte is not None and not value <= lte:
        return False
    return True


def describe_bounds(bounds: Mapping[str, Any], render: Callable[[Any], str] = str) -> List[str]:
    """Clauses for the configured bounds, lower bounds first."""
    return [
        f"{BOUND_DESCRIPTIONS[name]} {render(bounds[name])}"
        for name in BOUND_FIELDS
        if bounds.get(name) is not None
    ]


def join_clauses(clauses: List[str]) -> str:
    """
    Join clauses into a phrase: "a", "a and b", "a, b, and c".

    >>> join_clauses(['greater than 1', 'less than 3'])
    'greater than 1 and less than 3'
    """
    if not clauses:
        return ''
    if len(clauses) == 1:
        return clauses[0]
    if len(clauses) == 2:
        return f"{clauses[0]} and {clauses[1]}"
    return f"{', '.join(clauses[:-1])}, and {clauses[-1]}"


def compose_message(start: str, clauses: List[str]) -> str:
    """Append the joined clauses to the start of a message."""
    if not clauses:
        return start
    return f"{start} {join_clauses(clauses)}"
