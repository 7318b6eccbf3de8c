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
"""Private type aliases and sentinels used internally by sieve."""

from __future__ import annotations

from enum import auto
from enum import Enum
from typing import Any, Mapping


class _Marker(Enum):
    """Markers stored in place of a validated value.

    Both members are falsy, so ``if req.fields['id']:`` skips failed and
    missing fields alike.
    """

    INVALID = auto()
    ABSENT = auto()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'sieve.' + self.name


INVALID = _Marker.INVALID
"""Stored for a field whose value failed validation."""

ABSENT = _Marker.ABSENT
"""Stored for a declared field that none of the request sources supplied."""

# A raw request value: strings for scalars, lists and dicts for
# bracket-style form keys and JSON documents.
RawValue = Any
RawGroup = Mapping[str, RawValue]
Environ = Mapping[str, Any]

RuleDescriptor = Any
RuleSet = Mapping[str, RuleDescriptor]
