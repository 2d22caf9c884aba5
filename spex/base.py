"""
Spec base class and the construction pipeline shared by every spec variant.
"""
import inspect
from typing import Any, Callable, Dict, Optional

from utils.logging_config import get_logger
from utils.exceptions import SpecError, FrozenSpecError

logger = get_logger(__name__)


class _Required:
    """Default for options that have to be supplied by the caller."""

    def __repr__(self) -> str:
        return 'REQUIRED'


REQUIRED = _Required()

# Options every spec accepts, with their defaults.
BASE_FIELDS: Dict[str, Any] = {
    'nullable': False,
    'also': None,
}


def accepts_args(func: Any, count: int) -> bool:
    """Return True if ``func`` can be called with ``count`` positional arguments."""
    if not callable(func):
        return False
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins carry no signature; trust them.
        return True
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    return True


def is_unary(func: Any) -> bool:
    """Return True if ``func`` can be called with exactly one positional argument."""
    return accepts_args(func, 1)


def is_spec(value: Any) -> bool:
    """
    Check that ``value`` has the capabilities the dispatcher relies on.

    A spec has ``prepare`` and ``kind_name``, a ``check(value, depth)``
    method, and ``nullable``, ``also`` and ``prepped`` attributes.
    """
    if isinstance(value, type):
        return False
    return (
        callable(getattr(value, 'prepare', None))
        and callable(getattr(value, 'kind_name', None))
        and accepts_args(getattr(value, 'check', None), 2)
        and all(hasattr(value, name) for name in ('nullable', 'also', 'prepped'))
    )


class Spec:
    """
    Base class of every spec variant.

    A spec is built in one pass by its constructor: caller options are
    merged over the declared ``fields`` defaults, mandatory options are
    checked, the universal options (``nullable`` and the ``also``
    predicate) are validated, and the variant's ``prepare`` hook
    normalizes the rest. The spec is then frozen; any later assignment
    raises ``FrozenSpecError``.

    Subclasses declare ``fields`` (option name -> default, ``REQUIRED`` for
    mandatory options), and implement ``prepare`` and ``check``.
    """

    fields: Dict[str, Any] = {}

    def __init__(self, **options):
        object.__setattr__(self, '_prepped', False)
        try:
            self._build(options)
        except SpecError as e:
            logger.debug(f"Rejected {self.kind_name()}: {e.message}")
            raise
        object.__setattr__(self, '_prepped', True)
        logger.debug(f"Built {self.kind_name()}")

    @classmethod
    def kind_name(cls) -> str:
        return cls.__name__

    @classmethod
    def field_names(cls):
        return list(cls.fields) + list(BASE_FIELDS)

    @classmethod
    def defaults(cls) -> Dict[str, Any]:
        return {**cls.fields, **BASE_FIELDS}

    def _build(self, options: Dict[str, Any]):
        values = self._merge_options(options)
        self._check_required(values)
        self._validate_base_fields(values)
        for name, value in values.items():
            object.__setattr__(self, name, value)
        self.prepare()

    def _merge_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        values = self.defaults()
        for key, value in options.items():
            if key not in values:
                raise SpecError(
                    f"{key} is not a field of {self.kind_name()}",
                    details={'field': key, 'allowed': self.field_names()}
                )
            values[key] = value
        return values

    def _check_required(self, values: Dict[str, Any]):
        for field, value in values.items():
            if value is REQUIRED:
                raise SpecError(
                    f"{field} is required in {self.kind_name()}",
                    details={'field': field}
                )

    @staticmethod
    def _validate_base_fields(values: Dict[str, Any]):
        nullable = values['nullable']
        if not isinstance(nullable, bool):
            raise SpecError(f"nullable must be a boolean, got {nullable!r}")

        also = values['also']
        if also is not None and not is_unary(also):
            raise SpecError(f"also must be a 1-arity function, got {also!r}")

    def _set(self, name: str, value: Any):
        """Replace a field value while the spec is being prepared."""
        if self._prepped:
            raise FrozenSpecError(f"{self.kind_name()} is immutable")
        object.__setattr__(self, name, value)

    @property
    def prepped(self) -> bool:
        return self._prepped

    def prepare(self):
        """Validate and normalize variant options. Raise ``SpecError`` to reject."""
        pass

    def check(self, value: Any, depth=None):
        """Check a non-None value against this spec's own rules."""
        raise NotImplementedError

    def nil_prefix(self) -> str:
        return 'if not nil, ' if self.nullable else ''

    def to_dict(self) -> Dict[str, Any]:
        """Return the normalized option values."""
        return {name: getattr(self, name) for name in self.field_names()}

    def __setattr__(self, name: str, value: Any):
        raise FrozenSpecError(
            f"cannot set {name}: {self.kind_name()} is immutable",
            details={'field': name}
        )

    def __delattr__(self, name: str):
        raise FrozenSpecError(
            f"cannot delete {name}: {self.kind_name()} is immutable",
            details={'field': name}
        )

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self) -> str:
        defaults = self.defaults()
        shown = [
            f"{name}={value!r}"
            for name, value in self.to_dict().items()
            if value != defaults[name]
        ]
        return f"{self.kind_name()}({', '.join(shown)})"


def apply_predicate(func: Optional[Callable[[Any], Any]], value: Any) -> Optional[str]:
    """
    Run the ``also`` predicate of a spec.

    ``None`` or ``True`` pass, ``False`` fails with a generic message, and a
    string is returned as the failure message. Any other return passes.
    """
    if func is None:
        return None

    outcome = func(value)
    if outcome is False:
        return 'invalid'
    if isinstance(outcome, str):
        return outcome
    return None
