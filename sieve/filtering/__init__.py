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

"""Field validation: filter kinds, their registry, and rule compilation."""

from sieve.filtering.filters import BaseFilter
from sieve.filtering.filters import BoolFilter
from sieve.filtering.filters import BUILTIN
from sieve.filtering.filters import DateTimeFilter
from sieve.filtering.filters import DefaultFilter
from sieve.filtering.filters import EmailFilter
from sieve.filtering.filters import FilterRegistry
from sieve.filtering.filters import FloatFilter
from sieve.filtering.filters import IntFilter
from sieve.filtering.filters import RegexFilter
from sieve.filtering.filters import StringFilter
from sieve.filtering.filters import UUIDFilter
from sieve.filtering.rules import compile_rule
from sieve.filtering.rules import compile_rules
from sieve.filtering.rules import Rule
from sieve.filtering.rules import RuleFlags

__all__ = (
    'BaseFilter',
    'BoolFilter',
    'BUILTIN',
    'compile_rule',
    'compile_rules',
    'DateTimeFilter',
    'DefaultFilter',
    'EmailFilter',
    'FilterRegistry',
    'FloatFilter',
    'IntFilter',
    'RegexFilter',
    'Rule',
    'RuleFlags',
    'StringFilter',
    'UUIDFilter',
)
