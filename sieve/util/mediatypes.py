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

"""Media (aka MIME) type parsing utilities."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

__all__ = ('normalize_media_type', 'parse_header')


def _split_params(line: str) -> List[str]:
    # Split on semicolons, except for those inside a quoted-string.
    parts = []
    start = 0
    quoted = escaped = False

    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif quoted and char == '\\':
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif char == ';' and not quoted:
            parts.append(line[start:index])
            start = index + 1

    parts.append(line[start:])
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1].replace('\\\\', '\\').replace('\\"', '"')

    return value


def parse_header(line: str) -> Tuple[str, Dict[str, str]]:
    """Split a Content-Type style header value into its parts.

    Parameter names are lower-cased; quoted parameter values are unquoted.
    Parameters without an ``=`` are dropped.

    Args:
        line: A header value to parse.

    Returns:
        tuple: The main value and a ``dict`` of its parameters.
    """
    main, *params = _split_params(line)

    options = {}
    for param in params:
        name, equals, value = param.partition('=')
        if equals:
            options[name.strip().lower()] = _unquote(value.strip())

    return main.strip(), options


def normalize_media_type(content_type: Optional[str]) -> str:
    """Reduce a Content-Type header value to its bare media type.

    Parameters such as ``charset`` are dropped and the type is
    lower-cased, so that ``'Application/JSON; charset=utf-8'`` becomes
    ``'application/json'``.

    Args:
        content_type: Header value, or ``None``.

    Returns:
        str: The media type, or an empty string when `content_type` is
        missing or blank.
    """
    if not content_type:
        return ''

    media_type, _ = parse_header(content_type)
    return media_type.lower()
