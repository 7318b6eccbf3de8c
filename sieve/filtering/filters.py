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

"""Single-value filters used to validate and sanitize request fields.

Each filter kind is registered under an identifier (e.g., ``'int'``) in a
:class:`FilterRegistry`. Rules reference filters by that identifier, so
new kinds can be added without touching the code that applies rules::

    class SlugFilter(BaseFilter):
        def convert(self, value):
            ...

    registry = FilterRegistry()
    registry.register('slug', SlugFilter)
"""

from __future__ import annotations

import abc
from datetime import datetime
from math import isfinite
import re
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type, Union
import uuid

from sieve._typing import INVALID
from sieve.errors import UnknownFilterError

__all__ = (
    'BaseFilter',
    'BoolFilter',
    'BUILTIN',
    'DateTimeFilter',
    'DefaultFilter',
    'EmailFilter',
    'FilterRegistry',
    'FloatFilter',
    'IntFilter',
    'RegexFilter',
    'StringFilter',
    'UUIDFilter',
)

# PERF: Avoid an extra namespace lookup when using this function
strptime = datetime.strptime

TRUE_STRINGS = frozenset(['true', 'True', 't', 'yes', 'y', '1', 'on'])
FALSE_STRINGS = frozenset(['false', 'False', 'f', 'no', 'n', '0', 'off'])

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')
_TAG_PATTERN = re.compile(r'<[^>]*(?:>|$)')
_EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r'@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+'
    r'[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?'
)


class BaseFilter(metaclass=abc.ABCMeta):
    """Abstract base class for field filters.

    Filters receive scalar values only; sequences are unpacked by the rule
    that wraps the filter.
    """

    @abc.abstractmethod
    def convert(self, value: Any) -> Any:
        """Validate or sanitize a single raw value.

        Args:
            value: Raw value, normally a ``str``, but values decoded from
                JSON bodies may also be numbers, booleans or ``None``.

        Returns:
            object: The validated value, or :data:`sieve.INVALID` if the
            value does not pass the filter.
        """

    def __repr__(self) -> str:
        return '<{0}>'.format(self.__class__.__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class DefaultFilter(BaseFilter):
    """Passes values through unchanged.

    Identifier: `default`
    """

    def convert(self, value: Any) -> Any:
        return value


class StringFilter(BaseFilter):
    """Sanitizes a value into a string with any HTML tags removed.

    Identifier: `string`

    Non-string scalars are converted with ``str()``; ``None`` becomes the
    empty string. NUL characters are dropped along with the tags.
    """

    def convert(self, value: Any) -> Any:
        if value is None:
            return ''

        if not isinstance(value, str):
            value = str(value)

        return _TAG_PATTERN.sub('', value).replace('\x00', '')


def _validate_min_max_value(
    flt: Union[IntFilter, FloatFilter], value: Union[int, float]
) -> Any:
    if flt._min is not None and value < flt._min:
        return INVALID
    if flt._max is not None and value > flt._max:
        return INVALID

    return value


class IntFilter(BaseFilter):
    """Validates a value as an int.

    Identifier: `int`

    Keyword Args:
        min (int): Reject the value if it is less than this number.
        max (int): Reject the value if it is greater than this number.
    """

    __slots__ = ('_min', '_max')

    def __init__(self, min: Optional[int] = None, max: Optional[int] = None) -> None:
        if min is not None and max is not None and max < min:
            raise ValueError('max must not be less than min')
        self._min = min
        self._max = max

    def convert(self, value: Any) -> Any:
        if _is_number(value):
            if isinstance(value, float):
                if not value.is_integer():
                    return INVALID
                value = int(value)

            return _validate_min_max_value(self, value)

        if not isinstance(value, str):
            return INVALID

        # NOTE: int() will accept numbers with preceding or trailing
        #   whitespace, and digit groups separated by underscores, so we
        #   need to do our own check.
        if not _INT_PATTERN.fullmatch(value):
            return INVALID

        return _validate_min_max_value(self, int(value))


class FloatFilter(BaseFilter):
    """Validates a value as a float.

    Identifier: `float`

    Keyword Args:
        min (float): Reject the value if it is less than this number.
        max (float): Reject the value if it is greater than this number.
        finite (bool) : Determines whether or not to only accept ordinary
            finite numbers (default: ``True``). Set to ``False`` to accept
            ``nan``, ``inf``, and ``-inf`` in addition to finite numbers.
    """

    __slots__ = '_finite', '_min', '_max'

    def __init__(
        self,
        min: Optional[float] = None,
        max: Optional[float] = None,
        finite: bool = True,
    ) -> None:
        self._min = min
        self._max = max
        self._finite = finite

    def convert(self, value: Any) -> Any:
        if _is_number(value):
            converted = float(value)
        elif isinstance(value, str):
            if value.strip() != value:
                return INVALID

            try:
                converted = float(value)
            except ValueError:
                return INVALID
        else:
            return INVALID

        if self._finite and not isfinite(converted):
            return INVALID

        return _validate_min_max_value(self, converted)


class BoolFilter(BaseFilter):
    """Validates a value as a boolean.

    Identifier: `bool`

    The following strings are recognized::

        TRUE_STRINGS = ('true', 'True', 't', 'yes', 'y', '1', 'on')
        FALSE_STRINGS = ('false', 'False', 'f', 'no', 'n', '0', 'off')

    Keyword Args:
        blank_as_true (bool): Treat an empty string as ``True`` rather than
            ``False`` (default ``False``), which is handy for valueless
            flags such as ``?verbose``.
    """

    __slots__ = ('_blank_as_true',)

    def __init__(self, blank_as_true: bool = False) -> None:
        self._blank_as_true = blank_as_true

    def convert(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value

        if _is_number(value):
            if value in (0, 1):
                return bool(value)
            return INVALID

        if not isinstance(value, str):
            return INVALID

        if value in TRUE_STRINGS:
            return True
        if value in FALSE_STRINGS:
            return False
        if not value:
            return self._blank_as_true

        return INVALID


class UUIDFilter(BaseFilter):
    """Validates a value as a :class:`uuid.UUID`.

    Identifier: `uuid`

    In order to be converted, the value must consist of a string of 32
    hexadecimal digits, as defined in RFC 4122, Section 3. Note, however,
    that hyphens and the URN prefix are optional.
    """

    def convert(self, value: Any) -> Any:
        if isinstance(value, uuid.UUID):
            return value

        if not isinstance(value, str) or value.strip() != value:
            return INVALID

        try:
            return uuid.UUID(value)
        except ValueError:
            return INVALID


class DateTimeFilter(BaseFilter):
    """Validates a value as a :class:`~datetime.datetime`.

    Identifier: `dt`

    Keyword Args:
        format_string (str): String used to parse the value into a
            datetime. Any format recognized by strptime() is supported
            (default ``'%Y-%m-%dT%H:%M:%S%z'``).
    """

    __slots__ = ('_format_string',)

    def __init__(self, format_string: str = '%Y-%m-%dT%H:%M:%S%z') -> None:
        self._format_string = format_string

    def convert(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return value

        if not isinstance(value, str):
            return INVALID

        try:
            return strptime(value, self._format_string)
        except ValueError:
            return INVALID


class RegexFilter(BaseFilter):
    """Validates a string value against a regular expression.

    Identifier: `regex`

    The value is accepted when the pattern matches anywhere in it; anchor
    the pattern with ``^`` and ``$`` to require a full match.

    Keyword Args:
        pattern (str): Regular expression to search for.
    """

    __slots__ = ('_pattern',)

    def __init__(self, pattern: str) -> None:
        try:
            self._pattern = re.compile(pattern)
        except re.error as err:
            raise ValueError('invalid pattern: {0}'.format(err)) from err

    def convert(self, value: Any) -> Any:
        if not isinstance(value, str):
            return INVALID

        if self._pattern.search(value) is None:
            return INVALID

        return value


class EmailFilter(BaseFilter):
    """Validates a value as an e-mail address.

    Identifier: `email`
    """

    def convert(self, value: Any) -> Any:
        if not isinstance(value, str) or not _EMAIL_PATTERN.fullmatch(value):
            return INVALID

        return value


BUILTIN: Tuple[Tuple[str, Type[BaseFilter]], ...] = (
    ('default', DefaultFilter),
    ('string', StringFilter),
    ('int', IntFilter),
    ('float', FloatFilter),
    ('bool', BoolFilter),
    ('uuid', UUIDFilter),
    ('dt', DateTimeFilter),
    ('regex', RegexFilter),
    ('email', EmailFilter),
)


class FilterRegistry:
    """Maps filter identifiers to filter classes.

    Args:
        filters: Iterable of (*identifier*, *filter class*) pairs to start
            from (default: :data:`BUILTIN`).
    """

    def __init__(
        self, filters: Optional[Iterable[Tuple[str, Type[BaseFilter]]]] = None
    ) -> None:
        self._registry: Dict[str, Type[BaseFilter]] = {}

        for name, filter_cls in BUILTIN if filters is None else filters:
            self.register(name, filter_cls)

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __getitem__(self, name: str) -> Type[BaseFilter]:
        try:
            return self._registry[name]
        except KeyError:
            raise UnknownFilterError(
                '{0!r} is not a registered filter'.format(name)
            ) from None

    def __iter__(self):
        return iter(self._registry)

    def register(self, name: str, filter_cls: Type[BaseFilter]) -> None:
        """Register a filter class under the given identifier.

        An existing registration for the same identifier is replaced.

        Args:
            name (str): Identifier used by rules to reference the filter.
            filter_cls: A :class:`BaseFilter` subclass.
        """
        if not (isinstance(filter_cls, type) and issubclass(filter_cls, BaseFilter)):
            raise TypeError('filter_cls must be a subclass of BaseFilter')

        self._registry[name] = filter_cls

    def create(
        self, name: str, options: Optional[Mapping[str, Any]] = None
    ) -> BaseFilter:
        """Instantiate the filter registered under `name`.

        Args:
            name (str): Filter identifier.
            options (dict): Keyword arguments for the filter's initializer.

        Returns:
            BaseFilter: The filter instance.

        Raises:
            UnknownFilterError: `name` is not registered, or `options` were
                not accepted by the filter.
        """
        filter_cls = self[name]

        try:
            return filter_cls(**(options or {}))
        except (TypeError, ValueError) as err:
            raise UnknownFilterError(
                'invalid options for filter {0!r}: {1}'.format(name, err)
            ) from err
