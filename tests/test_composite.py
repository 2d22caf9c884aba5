"""Tests for map and list specs and error path aggregation."""
import logging

import pytest
from spex import (
    BooleanSpec,
    DecimalSpec,
    IntegerSpec,
    ListSpec,
    MapSpec,
    StringSpec,
    prefix_errors,
    validate,
)
from utils.exceptions import SpecError


class TestMapSpec:
    """Tests for MapSpec."""

    def test_creates_map_spec(self):
        """Test construction defaults and normalization."""
        spec = MapSpec()
        assert spec.required == {}
        assert spec.optional == {}
        assert spec.exclusive is False

        spec = MapSpec(required=[('a', IntegerSpec())], optional=(('b', StringSpec()),))
        assert spec.required == {'a': IntegerSpec()}
        assert spec.optional == {'b': StringSpec()}

    def test_fields_are_read_only(self):
        """Test that the normalized field maps cannot be changed."""
        spec = MapSpec(required={'a': IntegerSpec()})
        with pytest.raises(TypeError):
            spec.required['b'] = IntegerSpec()

    def test_bad_fields(self):
        """Test that field collections must map names to specs."""
        for bad in ["foo", {'a': 'not a spec'}, {1: IntegerSpec()}, [('a',)], [('a', 5)]]:
            with pytest.raises(SpecError) as exc_info:
                MapSpec(required=bad)
            assert str(exc_info.value) == (
                "required must be a map or list of pairs of field names to specs"
            )

        with pytest.raises(SpecError) as exc_info:
            MapSpec(optional="foo")
        assert str(exc_info.value) == (
            "optional must be a map or list of pairs of field names to specs"
        )

    def test_bad_exclusive(self):
        """Test that exclusive must be a boolean."""
        with pytest.raises(SpecError) as exc_info:
            MapSpec(exclusive='yes')
        assert str(exc_info.value) == "exclusive must be a boolean"

    def test_field_both_required_and_optional(self):
        """Test that a field cannot be declared twice."""
        with pytest.raises(SpecError) as exc_info:
            MapSpec(required={'a': IntegerSpec()}, optional={'a': StringSpec()})
        assert str(exc_info.value) == "a cannot be both required and optional"

    def test_type_check(self):
        """Test that only mappings pass."""
        spec = MapSpec()
        assert validate({}, spec) is None
        assert validate([], spec) == "must be a map"
        assert validate("a", spec) == "must be a map"

    def test_exclusive_map(self):
        """Test required, optional and disallowed fields together."""
        spec = MapSpec(
            required={'a': IntegerSpec()},
            optional={'b': StringSpec()},
            exclusive=True
        )
        assert validate({'a': 1, 'b': 'x'}, spec) is None
        assert validate({'a': 1}, spec) is None
        assert validate({'a': 1, 'c': 2}, spec) == {('c',): "is not allowed"}
        assert validate({'c': 2}, spec) == {
            ('a',): "is required",
            ('c',): "is not allowed",
        }

    def test_non_exclusive_map_ignores_extra_fields(self):
        """Test that undeclared fields are ignored by default."""
        spec = MapSpec(required={'a': IntegerSpec()})
        assert validate({'a': 1, 'c': object()}, spec) is None

    def test_child_errors(self):
        """Test that every failing field is reported."""
        spec = MapSpec(
            required={'a': IntegerSpec(), 'b': BooleanSpec()},
            optional={'c': StringSpec(), 'd': DecimalSpec(nullable=True)}
        )
        assert validate({'a': 'x', 'b': None, 'c': 1, 'd': None}, spec) == {
            ('a',): "must be an integer",
            ('b',): "cannot be nil",
            ('c',): "must be a string",
        }

    def test_and_predicate_on_map(self):
        """Test a cross-field predicate."""
        spec = MapSpec(
            required={'low': IntegerSpec(), 'high': IntegerSpec()},
            also=lambda m: m['low'] <= m['high'] or "low cannot exceed high"
        )
        assert validate({'low': 1, 'high': 2}, spec) is None
        assert validate({'low': 3, 'high': 2}, spec) == "low cannot exceed high"
        assert validate({'low': 'x', 'high': 2}, spec) == {('low',): "must be an integer"}


class TestListSpec:
    """Tests for ListSpec."""

    def test_creates_list_spec(self):
        """Test construction defaults and options."""
        spec = ListSpec(of=StringSpec())
        assert spec.of == StringSpec()
        assert spec.min_len is None
        assert spec.max_len is None
        assert spec.nullable is False
        assert spec.also is None

        spec = ListSpec(
            nullable=True,
            of=StringSpec(),
            min_len=1,
            max_len=10,
            also=lambda items: len(items) % 2 == 0
        )
        assert spec.nullable is True
        assert (spec.min_len, spec.max_len) == (1, 10)
        assert callable(spec.also)

        assert ListSpec(of=StringSpec(), min_len=1).max_len is None
        assert ListSpec(of=StringSpec(), max_len=1).min_len is None

    def test_construction_errors(self):
        """Test rejected list options."""
        cases = [
            ({}, "of is required in ListSpec"),
            ({'of': 'foo'}, "of must be a spec"),
            ({'of': StringSpec(), 'also': 'foo'}, "also must be a 1-arity function, got 'foo'"),
            ({'of': StringSpec(), 'min_len': 'foo'}, "min_len must be a non-negative integer"),
            ({'of': StringSpec(), 'max_len': -4}, "max_len must be a non-negative integer"),
            ({'of': StringSpec(), 'max_len': 1, 'min_len': 2}, "min_len cannot be greater than max_len"),
        ]
        for options, message in cases:
            with pytest.raises(SpecError) as exc_info:
                ListSpec(**options)
            assert str(exc_info.value) == message

    def test_validates_list(self):
        """Test item validation."""
        spec = ListSpec(of=StringSpec())
        assert validate([], spec) is None
        assert validate(["a", "b"], spec) is None
        assert validate(("a", "b"), spec) is None
        assert validate(None, spec) == "cannot be nil"
        assert validate("ab", spec) == "must be a list"
        assert validate({'a': 1}, spec) == "must be a list"
        assert validate([1, "a", True], spec) == {
            (0,): "must be a string",
            (2,): "must be a string",
        }

    def test_length_bounds(self):
        """Test that length failures skip item checks."""
        min_len_spec = ListSpec(of=StringSpec(), min_len=1)
        assert validate([], min_len_spec) == "length must be at least 1"
        assert validate(["a"], min_len_spec) is None
        assert validate(["a", "b"], min_len_spec) is None

        max_len_spec = ListSpec(of=StringSpec(), max_len=1)
        assert validate(["a"], max_len_spec) is None
        assert validate(["a", "b"], max_len_spec) == "length cannot exceed 1"
        assert validate([1, 2], max_len_spec) == "length cannot exceed 1"

    def test_and_predicate(self):
        """Test a predicate over the whole list."""
        def sum_at_most_five(ints):
            return "sum is too high" if sum(ints) > 5 else None

        spec = ListSpec(of=IntegerSpec(nullable=False), also=sum_at_most_five)
        assert validate([1, 0, 0, 0, 0, 3], spec) is None
        assert validate([1, 6], spec) == "sum is too high"
        assert validate([1, 'x'], spec) == {(1,): "must be an integer"}


class TestErrorPaths:
    """Tests for nested error aggregation."""

    def test_prefix_errors(self):
        """Test moving child results under a key."""
        assert prefix_errors('a', None) is None
        assert prefix_errors('a', "bad") == {('a',): "bad"}
        assert prefix_errors(0, {('b',): "bad", ('c', 1): "worse"}) == {
            (0, 'b'): "bad",
            (0, 'c', 1): "worse",
        }

    def test_nested_paths(self):
        """Test that each ancestor prefixes a path exactly once."""
        spec = MapSpec(required={
            'order': MapSpec(required={
                'items': ListSpec(of=MapSpec(
                    required={'sku': StringSpec(), 'qty': IntegerSpec(gte=1)},
                    exclusive=True
                ), min_len=1),
            }),
        })
        value = {
            'order': {
                'items': [
                    {'sku': 'a', 'qty': 1},
                    {'sku': 'b', 'qty': 0},
                    {'qty': 2, 'gift': True},
                ]
            }
        }
        assert validate(value, spec) == {
            ('order', 'items', 1, 'qty'): "must be an integer greater than or equal to 1",
            ('order', 'items', 2, 'sku'): "is required",
            ('order', 'items', 2, 'gift'): "is not allowed",
        }

        value['order']['items'] = []
        assert validate(value, spec) == {('order', 'items'): "length must be at least 1"}

    def test_shared_child_spec(self):
        """Test reusing one child spec in several places."""
        name = StringSpec(regex=r'^\w+$')
        spec = MapSpec(required={'first': name, 'last': name, 'aliases': ListSpec(of=name)})
        assert validate({'first': 'a', 'last': 'b c', 'aliases': ['x', '-']}, spec) == {
            ('last',): r"must match regex: ^\w+$",
            ('aliases', 1): r"must match regex: ^\w+$",
        }


class TestDepthLimit:
    """Tests for the nesting depth limit."""

    def test_limit_reached(self):
        """Test that values nested past the limit are reported."""
        spec = ListSpec(of=ListSpec(of=IntegerSpec()))
        assert validate([[1]], spec, max_depth=2) is None
        assert validate([[1]], spec, max_depth=1) == {
            (0, 0): "exceeds maximum nesting depth of 1"
        }
        assert validate([[]], spec, max_depth=1) is None

    def test_deep_spec(self):
        """Test a spec nested many levels deep."""
        spec = IntegerSpec()
        value = 1
        for _ in range(50):
            spec = ListSpec(of=spec)
            value = [value]
        assert validate(value, spec, max_depth=100) is None
        errors = validate(value, spec, max_depth=10)
        assert list(errors.values()) == ["exceeds maximum nesting depth of 10"]
        assert list(errors) == [(0,) * 11]

    def test_building_deep_spec(self, caplog):
        """Test that deeply nested specs build with debug logging on."""
        caplog.set_level(logging.DEBUG, logger='spex')
        spec = IntegerSpec()
        value = 1
        for _ in range(400):
            spec = ListSpec(of=spec)
            value = [value]

        assert "Built ListSpec" in caplog.text
        assert validate([], spec) is None
        errors = validate(value, spec, max_depth=10)
        assert list(errors) == [(0,) * 11]
