"""
spex: declarative validation of decoded JSON-like payloads.

Build an immutable spec once, then validate any number of values with it::

    from spex import MapSpec, IntegerSpec, StringSpec, validate

    spec = MapSpec(required={'id': IntegerSpec(gte=1)}, optional={'name': StringSpec()})
    validate({'id': 0}, spec)
    # {('id',): 'must be an integer greater than or equal to 1'}
"""
from .base import REQUIRED, Spec, is_spec
from .atomic import BooleanSpec, IntegerSpec, DecimalSpec, StringSpec
from .composite import MapSpec, ListSpec
from .dispatch import validate, is_valid, recurse, prefix_errors
from .factory import SpecFactory, new, register_spec
from .types import ErrorMap, Path, Result
from utils.exceptions import SpexError, SpecError, SpecUsageError, FrozenSpecError

__all__ = [
    'REQUIRED',
    'Spec',
    'is_spec',
    'BooleanSpec',
    'IntegerSpec',
    'DecimalSpec',
    'StringSpec',
    'MapSpec',
    'ListSpec',
    'validate',
    'is_valid',
    'recurse',
    'prefix_errors',
    'SpecFactory',
    'new',
    'register_spec',
    'ErrorMap',
    'Path',
    'Result',
    'SpexError',
    'SpecError',
    'SpecUsageError',
    'FrozenSpecError',
]
