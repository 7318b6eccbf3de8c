# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Field rules: a filter plus the flags that control how it is applied.

Rules are declared per field name, using any of the following forms::

    rules = {
        'id': 'int',
        'tags': {'filter': 'string', 'flags': RuleFlags.REQUIRE_SEQUENCE},
        'page': {'filter': 'int', 'options': {'min': 1}},
        'names': {'filter': 'default', 'require_sequence': True},
        'slug': RegexFilter('^[a-z-]+$'),
    }

Descriptors are compiled with :func:`compile_rules` when they are
registered, so a typo in a filter name fails immediately rather than on
the first request that happens to carry the field.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Any, Dict, Mapping, Optional

from sieve._typing import INVALID
from sieve._typing import RuleDescriptor
from sieve._typing import RuleSet
from sieve.errors import UnknownFilterError
from sieve.filtering.filters import BaseFilter
from sieve.filtering.filters import FilterRegistry

__all__ = ('compile_rule', 'compile_rules', 'Rule', 'RuleFlags')

_DESCRIPTOR_KEYS = frozenset(['filter', 'flags', 'options', 'require_sequence'])


class RuleFlags(enum.IntFlag):
    """Flags modifying how a rule's filter is applied."""

    NONE = 0

    REQUIRE_SEQUENCE = 1
    """The value must be a list (or mapping); each element is filtered and
    the whole field fails if any element does, or if the value is a scalar.
    """

    FORCE_SEQUENCE = 2
    """Like :attr:`REQUIRE_SEQUENCE`, except that a scalar value is first
    wrapped in a one-element list.
    """


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, Mapping))


@dataclasses.dataclass(frozen=True)
class Rule:
    """A compiled field rule.

    Attributes:
        filter (BaseFilter): Filter applied to the value (or to each
            element of it).
        flags (RuleFlags): Application flags.
    """

    filter: BaseFilter
    flags: RuleFlags = RuleFlags.NONE

    @property
    def requires_sequence(self) -> bool:
        return bool(self.flags & (RuleFlags.REQUIRE_SEQUENCE | RuleFlags.FORCE_SEQUENCE))

    def apply(self, value: Any) -> Any:
        """Apply the rule to a raw value.

        A scalar rule given a list or mapping does not attempt to filter it;
        the field resolves to :data:`sieve.INVALID`. So does a value that
        is already :data:`sieve.INVALID`.

        Returns:
            object: The validated value, or :data:`sieve.INVALID`.
        """
        if value is INVALID:
            return INVALID

        if self.requires_sequence:
            if self.flags & RuleFlags.FORCE_SEQUENCE and not _is_sequence(value):
                value = [value]

            if not _is_sequence(value):
                return INVALID

            return self._apply_each(value)

        if _is_sequence(value):
            return INVALID

        return self._convert(value)

    def _convert(self, value: Any) -> Any:
        try:
            return self.filter.convert(value)
        except (TypeError, ValueError):
            return INVALID

    def _apply_each(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            result: Dict[str, Any] = {}
            for key, element in value.items():
                converted = self._apply_element(element)
                if converted is INVALID:
                    return INVALID
                result[key] = converted

            return result

        items = []
        for element in value:
            converted = self._apply_element(element)
            if converted is INVALID:
                return INVALID
            items.append(converted)

        return items

    def _apply_element(self, element: Any) -> Any:
        # NOTE: Nested structures such as "name[0][]=a" are filtered all the
        #   way down.
        if _is_sequence(element):
            return self._apply_each(element)

        return self._convert(element)


def compile_rule(
    descriptor: RuleDescriptor, registry: Optional[FilterRegistry] = None
) -> Rule:
    """Compile a single rule descriptor.

    Args:
        descriptor: A filter identifier, a :class:`BaseFilter` instance,
            a :class:`Rule`, or a mapping with a ``'filter'`` key and
            optional ``'flags'``, ``'options'`` and ``'require_sequence'``
            keys.
        registry (FilterRegistry): Registry used to resolve identifiers
            (default: the built-in filters).

    Returns:
        Rule: The compiled rule.

    Raises:
        UnknownFilterError: The descriptor is malformed or references a
            filter that is not registered.
    """

    if isinstance(descriptor, Rule):
        return descriptor

    if registry is None:
        registry = FilterRegistry()

    if isinstance(descriptor, BaseFilter):
        return Rule(descriptor)

    if isinstance(descriptor, str):
        return Rule(registry.create(descriptor))

    if not isinstance(descriptor, Mapping):
        raise UnknownFilterError('invalid rule descriptor: {0!r}'.format(descriptor))

    unknown = set(descriptor) - _DESCRIPTOR_KEYS
    if unknown:
        raise UnknownFilterError(
            'unexpected rule keys: {0}'.format(', '.join(sorted(map(str, unknown))))
        )

    try:
        target = descriptor['filter']
    except KeyError:
        raise UnknownFilterError('rule descriptor is missing a filter') from None

    options = descriptor.get('options')
    if options is not None and not isinstance(options, Mapping):
        raise UnknownFilterError('rule options must be a mapping')

    if isinstance(target, BaseFilter):
        if options:
            raise UnknownFilterError('options require a filter identifier')
        flt = target
    elif isinstance(target, str):
        flt = registry.create(target, options)
    else:
        raise UnknownFilterError('invalid filter: {0!r}'.format(target))

    try:
        flags = RuleFlags(descriptor.get('flags') or 0)
    except (TypeError, ValueError):
        raise UnknownFilterError(
            'invalid rule flags: {0!r}'.format(descriptor.get('flags'))
        ) from None

    if descriptor.get('require_sequence'):
        flags |= RuleFlags.REQUIRE_SEQUENCE

    return Rule(flt, flags)


def compile_rules(
    rules: RuleSet, registry: Optional[FilterRegistry] = None
) -> Dict[str, Rule]:
    """Compile a mapping of field names to rule descriptors.

    Raises:
        UnknownFilterError: Any of the descriptors could not be compiled.
            Nothing is returned in that case.
    """

    if registry is None:
        registry = FilterRegistry()

    return {name: compile_rule(descriptor, registry) for name, descriptor in rules.items()}
