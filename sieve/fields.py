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

"""Filtered field store.

A :class:`FieldStore` holds the request values that have been run through
declared rules, keyed by field name. Each stored entry is one of:

* the validated value,
* :data:`sieve.INVALID` when validation was attempted and failed, or
* :data:`sieve.ABSENT` when the field was declared but no source had it.

Rules can be replaced (:meth:`FieldStore.set_filters`) or extended
(:meth:`FieldStore.add_filters`) after the store has been populated; the
affected values are then re-validated against a freshly merged view of the
request sources.

Warning:
    A store is meant to be used by the single request that owns it. It does
    no locking of its own; hosts that share one instance between concurrent
    handlers must serialize calls to :meth:`~FieldStore.set_filters`,
    :meth:`~FieldStore.add_filters` and item assignment themselves.
"""

from __future__ import annotations

from collections.abc import MutableMapping
import dataclasses
from enum import auto
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

import sieve
from sieve._typing import _Marker
from sieve._typing import ABSENT
from sieve._typing import INVALID
from sieve._typing import RuleSet
from sieve.filtering.filters import FilterRegistry
from sieve.filtering.rules import compile_rules
from sieve.filtering.rules import Rule

__all__ = ('FieldResult', 'FieldStatus', 'FieldStore')

# Given the values currently held by a store, return the mapping that
# rules are validated against.
SourceFunc = Callable[[Mapping[str, Any]], Mapping[str, Any]]


class FieldStatus(Enum):
    """Outcome of validating a single field."""

    VALID = auto()
    INVALID = auto()
    ABSENT = auto()


@dataclasses.dataclass(frozen=True)
class FieldResult:
    """Tagged view of a stored field.

    Attributes:
        status (FieldStatus): Validation outcome.
        value: The validated value; ``None`` unless `status` is
            :attr:`FieldStatus.VALID`.
    """

    status: FieldStatus
    value: Any = None

    @classmethod
    def from_stored(cls, stored: Any) -> FieldResult:
        if stored is INVALID:
            return cls(FieldStatus.INVALID)
        if stored is ABSENT:
            return cls(FieldStatus.ABSENT)

        return cls(FieldStatus.VALID, stored)

    @property
    def is_valid(self) -> bool:
        return self.status is FieldStatus.VALID

    @property
    def is_invalid(self) -> bool:
        return self.status is FieldStatus.INVALID

    @property
    def is_absent(self) -> bool:
        return self.status is FieldStatus.ABSENT


class _Mode(Enum):
    # Discard every stored field and keep only those of the new rule set.
    REPLACE = auto()
    # Keep stored fields; add or overwrite only those named by the new rules.
    MERGE = auto()


def _passthrough(fields: Mapping[str, Any]) -> Mapping[str, Any]:
    return fields


class FieldStore(MutableMapping):
    """Mutable mapping of field names to validated values.

    Args:
        source: Callable that receives the values currently stored (with
            ``ABSENT`` markers left out) and returns the
            merged mapping to validate against. The request model passes
            a function that layers its raw groups on top of those values.
            By default, the store only re-validates its own values.

    Keyword Arguments:
        registry (FilterRegistry): Filters available to rules (default:
            the built-in filters).
        add_empty (bool): Whether declared fields missing from the sources
            are stored as :data:`sieve.ABSENT` (default ``True``).
    """

    def __init__(
        self,
        source: Optional[SourceFunc] = None,
        *,
        registry: Optional[FilterRegistry] = None,
        add_empty: bool = True,
    ) -> None:
        self._source = source or _passthrough
        self._registry = registry if registry is not None else FilterRegistry()
        self._add_empty = add_empty

        self._rules: Dict[str, Rule] = {}
        self._values: Dict[str, Any] = {}

    # ------------------------------------------------------------------------
    # Mapping interface
    # ------------------------------------------------------------------------

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __setitem__(self, name: str, value: Any) -> None:
        """Register an ad hoc value.

        The value is validated through the rule declared for `name`, if
        any; otherwise it is stored verbatim.
        """
        try:
            rule = self._rules[name]
        except KeyError:
            self._values[name] = value
        else:
            self._values[name] = rule.apply(value)

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return '<%s: %r>' % (self.__class__.__name__, self._values)

    # ------------------------------------------------------------------------
    # Named accessors
    # ------------------------------------------------------------------------

    @property
    def rules(self) -> Mapping[str, Rule]:
        """Read-only view of the rules currently in force."""
        return MappingProxyType(self._rules)

    def get_result(self, name: str) -> FieldResult:
        """Return the tagged validation result for a field.

        A field that is not in the store at all is reported as
        :attr:`FieldStatus.ABSENT`.
        """
        return FieldResult.from_stored(self._values.get(name, ABSENT))

    def is_valid(self, name: str) -> bool:
        return self.get_result(name).is_valid

    def is_invalid(self, name: str) -> bool:
        return self.get_result(name).is_invalid

    def is_absent(self, name: str) -> bool:
        return self.get_result(name).is_absent

    def valid_items(self) -> Dict[str, Any]:
        """Return a ``dict`` of the fields that passed validation."""
        return {
            name: value
            for name, value in self._values.items()
            if not isinstance(value, _Marker)
        }

    # ------------------------------------------------------------------------
    # Rule entry points
    # ------------------------------------------------------------------------

    def apply(
        self,
        rules: RuleSet,
        values: Mapping[str, Any],
        add_empty: Optional[bool] = None,
    ) -> FieldStore:
        """Validate `values` against `rules`, replacing all prior state.

        Args:
            rules (dict): Field names mapped to rule descriptors.
            values (dict): Merged source mapping to validate against.
            add_empty (bool): Override the store's `add_empty` setting for
                this call (default ``None``).

        Returns:
            FieldStore: The store itself.

        Raises:
            UnknownFilterError: A rule could not be compiled. The store is
                left unchanged.
        """
        return self._revalidate(rules, values, _Mode.REPLACE, add_empty)

    def set_filters(self, rules: RuleSet, add_empty: Optional[bool] = None) -> FieldStore:
        """Replace the rule set and re-validate.

        Values are drawn from a freshly merged view of the sources, which
        includes the values currently stored, so that ad hoc fields can be
        re-validated under the new rules. Afterwards, the store holds only
        the fields named in `rules`.

        Raises:
            UnknownFilterError: A rule could not be compiled. The store is
                left unchanged.
        """
        return self._revalidate(rules, self._merged(), _Mode.REPLACE, add_empty)

    def add_filters(self, rules: RuleSet) -> FieldStore:
        """Add or replace rules, re-validating only the fields they name.

        Fields not mentioned in `rules` keep both their rule and their
        stored value.

        Raises:
            UnknownFilterError: A rule could not be compiled. The store is
                left unchanged.
        """
        return self._revalidate(rules, self._merged(), _Mode.MERGE, None)

    # ------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------

    def _merged(self) -> Mapping[str, Any]:
        # NOTE: INVALID entries are passed on so that a failed ad hoc value
        #   stays failed when re-validated, instead of becoming ABSENT.
        return self._source(
            {name: value for name, value in self._values.items() if value is not ABSENT}
        )

    def _revalidate(
        self,
        rules: RuleSet,
        values: Mapping[str, Any],
        mode: _Mode,
        add_empty: Optional[bool],
    ) -> FieldStore:
        compiled = compile_rules(rules, self._registry)

        if add_empty is None:
            add_empty = self._add_empty

        # NOTE: Build the new state on the side and swap it in at the end,
        #   so that a failure part-way leaves the store as it was.
        if mode is _Mode.REPLACE:
            new_rules = compiled
            new_values: Dict[str, Any] = {}
        else:
            new_rules = dict(self._rules)
            new_rules.update(compiled)
            new_values = dict(self._values)

        for name, rule in compiled.items():
            if name in values:
                new_values[name] = rule.apply(values[name])
            elif add_empty and name not in new_values:
                new_values[name] = ABSENT

        self._rules = new_rules
        self._values = new_values

        sieve._logger.debug(
            'Validated %d field(s) (%s)', len(compiled), mode.name.lower()
        )

        return self
