"""
Composite spec variants: maps of fields and lists of items.

Both recurse into child specs through ``recurse`` and merge the per-location
errors of their children into a single map keyed by path.
"""
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from utils.exceptions import SpecError
from .atomic import is_integer
from .base import REQUIRED, Spec, is_spec
from .dispatch import recurse
from .factory import register_spec
from .types import ErrorMap, Result


@register_spec('map')
class MapSpec(Spec):
    """
    Accepts mappings whose fields match the ``required`` and ``optional`` specs.

    ``required`` and ``optional`` may be given as mappings or as sequences of
    ``(name, spec)`` pairs. When ``exclusive`` is set, fields that are neither
    required nor optional are reported as "is not allowed"; otherwise they
    are ignored.
    """

    BAD_FIELDS_MESSAGE = 'must be a map or list of pairs of field names to specs'

    fields = {
        'required': {},
        'optional': {},
        'exclusive': False,
    }

    def prepare(self):
        if not isinstance(self.exclusive, bool):
            raise SpecError('exclusive must be a boolean')

        required = self._as_map_of_specs('required')
        optional = self._as_map_of_specs('optional')

        overlap = [name for name in required if name in optional]
        if overlap:
            raise SpecError(
                f"{overlap[0]} cannot be both required and optional",
                details={'fields': overlap}
            )

        self._set('required', MappingProxyType(required))
        self._set('optional', MappingProxyType(optional))

    def _as_map_of_specs(self, name: str) -> dict:
        fields = getattr(self, name)
        if isinstance(fields, Mapping):
            pairs = list(fields.items())
        elif isinstance(fields, (list, tuple)) and all(
            isinstance(pair, (list, tuple)) and len(pair) == 2 for pair in fields
        ):
            pairs = [tuple(pair) for pair in fields]
        else:
            raise SpecError(f"{name} {self.BAD_FIELDS_MESSAGE}")

        for field_name, spec in pairs:
            if not isinstance(field_name, str) or not is_spec(spec):
                raise SpecError(
                    f"{name} {self.BAD_FIELDS_MESSAGE}",
                    details={'field': repr(field_name)}
                )
        return dict(pairs)

    def check(self, value: Any, depth=None) -> Result:
        if not isinstance(value, Mapping):
            return 'must be a map'

        errors: ErrorMap = {}

        if self.exclusive:
            for key in value:
                if key not in self.required and key not in self.optional:
                    errors[(key,)] = 'is not allowed'

        for key in self.required:
            if key not in value:
                errors[(key,)] = 'is required'

        for declared in (self.required, self.optional):
            for key, spec in declared.items():
                if key in value:
                    child_errors = recurse(key, value[key], spec, depth)
                    if child_errors:
                        errors.update(child_errors)

        return errors or None


@register_spec('list')
class ListSpec(Spec):
    """
    Accepts lists whose items all match the ``of`` spec.

    Length bounds are checked first; when they fail no item is checked.
    """

    fields = {
        'of': REQUIRED,
        'min_len': None,
        'max_len': None,
    }

    def prepare(self):
        for name in ('min_len', 'max_len'):
            length = getattr(self, name)
            if length is not None and not (is_integer(length) and length >= 0):
                raise SpecError(f"{name} must be a non-negative integer")

        if self.min_len is not None and self.max_len is not None and self.min_len > self.max_len:
            raise SpecError('min_len cannot be greater than max_len')

        if not is_spec(self.of):
            raise SpecError('of must be a spec')

    def check(self, value: Any, depth=None) -> Result:
        if not isinstance(value, (list, tuple)):
            return 'must be a list'

        length_error = self._check_length(value)
        if length_error is not None:
            return length_error

        errors: ErrorMap = {}
        for index, item in enumerate(value):
            child_errors = recurse(index, item, self.of, depth)
            if child_errors:
                errors.update(child_errors)

        return errors or None

    def _check_length(self, items) -> Optional[str]:
        if self.min_len is not None and len(items) < self.min_len:
            return f"length must be at least {self.min_len}"
        if self.max_len is not None and len(items) > self.max_len:
            return f"length cannot exceed {self.max_len}"
        return None
