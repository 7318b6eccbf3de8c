import pytest

import sieve
from sieve.filtering import compile_rule
from sieve.filtering import compile_rules
from sieve.filtering import DefaultFilter
from sieve.filtering import FilterRegistry
from sieve.filtering import IntFilter
from sieve.filtering import RegexFilter
from sieve.filtering import Rule
from sieve.filtering import RuleFlags
from sieve.filtering import StringFilter


def test_compile_identifier():
    rule = compile_rule('int')

    assert isinstance(rule.filter, IntFilter)
    assert rule.flags == RuleFlags.NONE
    assert not rule.requires_sequence


def test_compile_filter_instance():
    flt = RegexFilter('^[a-z]+$')
    rule = compile_rule(flt)

    assert rule.filter is flt
    assert rule.flags == RuleFlags.NONE


def test_compile_rule_passthrough():
    rule = Rule(DefaultFilter())
    assert compile_rule(rule) is rule


@pytest.mark.parametrize(
    'descriptor,flags',
    [
        ({'filter': 'string'}, RuleFlags.NONE),
        ({'filter': 'string', 'flags': RuleFlags.REQUIRE_SEQUENCE}, RuleFlags.REQUIRE_SEQUENCE),
        ({'filter': 'string', 'flags': 1}, RuleFlags.REQUIRE_SEQUENCE),
        ({'filter': 'string', 'require_sequence': True}, RuleFlags.REQUIRE_SEQUENCE),
        ({'filter': 'string', 'require_sequence': False}, RuleFlags.NONE),
        ({'filter': 'string', 'flags': RuleFlags.FORCE_SEQUENCE}, RuleFlags.FORCE_SEQUENCE),
        ({'filter': 'string', 'flags': None}, RuleFlags.NONE),
    ],
)
def test_compile_mapping(descriptor, flags):
    rule = compile_rule(descriptor)

    assert isinstance(rule.filter, StringFilter)
    assert rule.flags == flags


def test_compile_mapping_with_options():
    rule = compile_rule({'filter': 'int', 'options': {'min': 1, 'max': 10}})

    assert rule.apply('5') == 5
    assert rule.apply('11') is sieve.INVALID


def test_compile_mapping_with_filter_instance():
    flt = IntFilter(min=1)
    rule = compile_rule({'filter': flt, 'require_sequence': True})

    assert rule.filter is flt
    assert rule.requires_sequence


@pytest.mark.parametrize(
    'descriptor',
    [
        'nope',
        42,
        None,
        ['int'],
        {},
        {'flags': RuleFlags.REQUIRE_SEQUENCE},
        {'filter': 'nope'},
        {'filter': 42},
        {'filter': 'int', 'typo': True},
        {'filter': 'int', 'options': ['min', 1]},
        {'filter': 'int', 'options': {'minimum': 1}},
        {'filter': IntFilter(), 'options': {'min': 1}},
        {'filter': 'int', 'flags': 'sequence'},
    ],
)
def test_compile_errors(descriptor):
    with pytest.raises(sieve.UnknownFilterError):
        compile_rule(descriptor)


def test_compile_with_registry():
    class UpperFilter(sieve.BaseFilter):
        def convert(self, value):
            return value.upper()

    registry = FilterRegistry()
    registry.register('upper', UpperFilter)

    assert compile_rule('upper', registry).apply('vostok') == 'VOSTOK'

    with pytest.raises(sieve.UnknownFilterError):
        compile_rule('upper')


def test_compile_rules():
    rules = compile_rules({'id': 'int', 'name': {'filter': 'string', 'require_sequence': True}})

    assert set(rules) == {'id', 'name'}
    assert isinstance(rules['id'].filter, IntFilter)
    assert rules['name'].requires_sequence


def test_compile_rules_fails_as_a_whole():
    with pytest.raises(sieve.UnknownFilterError):
        compile_rules({'id': 'int', 'name': 'nope'})


@pytest.mark.parametrize(
    'value,expected',
    [
        (['A', 'B'], ['A', 'B']),
        (('A', 'B'), ['A', 'B']),
        ([], []),
        ({'0': 'A', 'x': 'B'}, {'0': 'A', 'x': 'B'}),
        ([['a', 'b'], ['c']], [['a', 'b'], ['c']]),
    ],
)
def test_sequence_rule(value, expected):
    rule = compile_rule({'filter': 'default', 'require_sequence': True})
    assert rule.apply(value) == expected


@pytest.mark.parametrize('value', ['x', 'Dome Fuji', 123, None, ''])
def test_sequence_rule_rejects_scalar(value):
    rule = compile_rule({'filter': 'string', 'require_sequence': True})

    # NOTE: Never coerced into a single-element list
    assert rule.apply(value) is sieve.INVALID


def test_sequence_rule_fails_as_a_whole():
    rule = compile_rule({'filter': 'int', 'require_sequence': True})

    assert rule.apply(['1', '2']) == [1, 2]
    assert rule.apply(['1', 'x']) is sieve.INVALID
    assert rule.apply({'a': '1', 'b': 'x'}) is sieve.INVALID
    assert rule.apply([['1'], ['x']]) is sieve.INVALID


def test_force_sequence_wraps_scalar():
    rule = compile_rule({'filter': 'int', 'flags': RuleFlags.FORCE_SEQUENCE})

    assert rule.requires_sequence
    assert rule.apply('7') == [7]
    assert rule.apply(['7', '8']) == [7, 8]
    assert rule.apply('x') is sieve.INVALID


@pytest.mark.parametrize(
    'value',
    [
        ['1', '2'],
        ('1',),
        [],
        {'a': '1'},
    ],
)
def test_scalar_rule_rejects_sequence(value):
    # NOTE: A rule that does not ask for a sequence never hands a list or
    #   mapping to its filter; the field simply fails.
    assert compile_rule('int').apply(value) is sieve.INVALID
    assert compile_rule('string').apply(value) is sieve.INVALID
    assert compile_rule('default').apply(value) is sieve.INVALID


def test_filter_exceptions_become_invalid():
    class BrokenFilter(sieve.BaseFilter):
        def convert(self, value):
            return int(value)

    rule = compile_rule(BrokenFilter())

    assert rule.apply('5') == 5
    assert rule.apply('abc') is sieve.INVALID
    assert rule.apply(None) is sieve.INVALID


def test_rule_is_frozen():
    rule = compile_rule('int')

    with pytest.raises(AttributeError):
        rule.flags = RuleFlags.REQUIRE_SEQUENCE
