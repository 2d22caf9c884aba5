"""
Atomic spec variants: boolean, integer, decimal-formatted string and string.
"""
import re
from decimal import Decimal
from typing import Any, Optional

from utils.exceptions import SpecError
from .base import Spec
from .bounds import (
    BOUND_FIELDS,
    check_bounds_consistent,
    compose_message,
    describe_bounds,
    within_bounds,
)
from .decimals import decimal_places, format_decimal, is_decimal_string, parse_decimal
from .factory import register_spec


def is_integer(value: Any) -> bool:
    """True for ints, excluding bools."""
    return isinstance(value, int) and not isinstance(value, bool)


def _check_error_message(spec: Spec):
    if spec.error_message is not None and not isinstance(spec.error_message, str):
        raise SpecError(f"error_message must be a string, got {spec.error_message!r}")


@register_spec('boolean')
class BooleanSpec(Spec):
    """Accepts ``True`` and ``False``."""

    fields = {'error_message': None}

    def prepare(self):
        _check_error_message(self)
        if self.error_message is None:
            self._set('error_message', self.nil_prefix() + 'must be a boolean')

    def check(self, value: Any, depth=None) -> Optional[str]:
        if isinstance(value, bool):
            return None
        return self.error_message


class _BoundedSpec(Spec):
    """Shared handling of the ``gt``/``gte``/``lt``/``lte`` options."""

    def bounds(self):
        return {name: getattr(self, name) for name in BOUND_FIELDS}

    def _parse_bounds(self):
        raise NotImplementedError

    def _prepare_bounds(self):
        self._parse_bounds()
        check_bounds_consistent(self.bounds())
        self._set('_bounds', self.bounds())


@register_spec('integer')
class IntegerSpec(_BoundedSpec):
    """
    Accepts ints (but not bools) within the configured bounds.

    The failure message names the bounds, e.g. "must be an integer greater
    than 5 and less than 10".
    """

    fields = {
        'gt': None,
        'gte': None,
        'lt': None,
        'lte': None,
        'error_message': None,
    }

    def prepare(self):
        _check_error_message(self)
        self._prepare_bounds()
        if self.error_message is None:
            message = compose_message('must be an integer', describe_bounds(self._bounds))
            self._set('error_message', self.nil_prefix() + message)

    def _parse_bounds(self):
        for name in ('lt', 'lte', 'gt', 'gte'):
            bound = getattr(self, name)
            if bound is not None and not is_integer(bound):
                raise SpecError(f"{name} must be an integer", details={name: repr(bound)})

    def check(self, value: Any, depth=None) -> Optional[str]:
        if is_integer(value) and within_bounds(value, self._bounds):
            return None
        return self.error_message


@register_spec('decimal')
class DecimalSpec(_BoundedSpec):
    """
    Accepts decimal-formatted strings such as ``"4"``, ``" -4.00 "`` or ``".47"``.

    Bounds may be given as ints, Decimals or decimal-formatted strings and are
    parsed to ``Decimal`` when the spec is built. Every failure returns the
    same message, composed once at construction from the options, e.g.
    "must be a decimal-formatted string with up to 2 decimal places and
    greater than 0". ``error_message`` replaces it verbatim, and
    ``get_error_message`` is called with the prepared spec to produce it.
    """

    DEFAULT_MESSAGE = 'must be a decimal-formatted string'
    BAD_BOUND_MESSAGE = 'must be a Decimal, a decimal-formatted string, or an integer'

    fields = {
        'gt': None,
        'gte': None,
        'lt': None,
        'lte': None,
        'max_decimal_places': None,
        'error_message': None,
        'get_error_message': None,
    }

    def prepare(self):
        places = self.max_decimal_places
        if places is not None and not (is_integer(places) and places >= 1):
            raise SpecError('max_decimal_places must be a positive integer')

        if self.get_error_message is not None and not callable(self.get_error_message):
            raise SpecError(
                f"get_error_message must be a function, got {self.get_error_message!r}"
            )
        _check_error_message(self)

        self._prepare_bounds()
        self._set('error_message', self._make_error_message())

    def _parse_bounds(self):
        for name in ('lt', 'gt', 'lte', 'gte'):
            bound = getattr(self, name)
            if bound is None:
                continue
            parsed = parse_decimal(bound)
            if parsed is None:
                raise SpecError(f"{name} {self.BAD_BOUND_MESSAGE}", details={name: repr(bound)})
            self._set(name, parsed)

    def _make_error_message(self) -> str:
        if self.get_error_message is not None:
            message = self.get_error_message(self)
            if not isinstance(message, str):
                raise SpecError(f"get_error_message must return a string, got {message!r}")
            return message

        if self.error_message is not None:
            return self.error_message

        clauses = []
        if self.max_decimal_places is not None:
            clauses.append(f"with up to {self.max_decimal_places} decimal places")
        clauses.extend(describe_bounds(self._bounds, render=format_decimal))
        return self.nil_prefix() + compose_message(self.DEFAULT_MESSAGE, clauses)

    def check(self, value: Any, depth=None) -> Optional[str]:
        if not is_decimal_string(value):
            return self.error_message

        if not within_bounds(Decimal(value.strip()), self._bounds):
            return self.error_message

        if self.max_decimal_places is not None and decimal_places(value) > self.max_decimal_places:
            return self.error_message

        return None


@register_spec('string')
class StringSpec(Spec):
    """
    Accepts strings, optionally restricted by one of ``regex``, ``one_of``
    (case-sensitive) or ``one_of_ci`` (case-insensitive).
    """

    NON_EMPTY_LIST_MESSAGE = 'must be a non-empty list of strings'

    fields = {
        'regex': None,
        'one_of': None,
        'one_of_ci': None,
    }

    def prepare(self):
        for first, second in (('regex', 'one_of'), ('regex', 'one_of_ci'), ('one_of', 'one_of_ci')):
            if getattr(self, first) is not None and getattr(self, second) is not None:
                raise SpecError(f"cannot use both {first} and {second}")

        if self.one_of is not None:
            self._set('one_of', self._string_choices('one_of'))

        if self.one_of_ci is not None:
            choices = self._string_choices('one_of_ci')
            self._set('one_of_ci', tuple(choice.lower() for choice in choices))

        if self.regex is not None:
            self._set('regex', self._compile(self.regex))

    def _string_choices(self, name: str) -> tuple:
        choices = getattr(self, name)
        if (
            not isinstance(choices, (list, tuple))
            or not choices
            or not all(isinstance(choice, str) for choice in choices)
        ):
            raise SpecError(f"{name} {self.NON_EMPTY_LIST_MESSAGE}")
        return tuple(choices)

    @staticmethod
    def _compile(regex: Any) -> re.Pattern:
        if isinstance(regex, re.Pattern):
            if not isinstance(regex.pattern, str):
                raise SpecError(
                    'regex must be a compiled pattern or a valid pattern string',
                    details={'regex': repr(regex.pattern)}
                )
            return regex
        if isinstance(regex, str):
            try:
                return re.compile(regex)
            except re.error as e:
                raise SpecError(
                    'regex must be a compiled pattern or a valid pattern string',
                    details={'regex': regex, 'error': str(e)}
                ) from e
        raise SpecError('regex must be a compiled pattern or a valid pattern string')

    def check(self, value: Any, depth=None) -> Optional[str]:
        if not isinstance(value, str):
            return 'must be a string'

        if self.regex is not None:
            if self.regex.search(value) is None:
                return f"must match regex: {self.regex.pattern}"
            return None

        if self.one_of is not None:
            if value not in self.one_of:
                return f"must be a case-sensitive match for one of: {', '.join(self.one_of)}"
            return None

        if self.one_of_ci is not None:
            if value.lower() not in self.one_of_ci:
                return f"must be a case-insensitive match for one of: {', '.join(self.one_of_ci)}"
            return None

        return None
