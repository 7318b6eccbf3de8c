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

"""Utilities for the Request class."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sieve._typing import Environ
from sieve._typing import RawGroup
from sieve.constants import HEADER_PREFIX

# NOTE: CGI and WSGI servers pass these two headers without the HTTP_
#   prefix.
CONTENT_HEADERS = frozenset(['CONTENT_TYPE', 'CONTENT_LENGTH'])


def _header_name(env_key: str) -> str:
    return env_key.replace('_', '-').lower()


def normalize_headers(env: Environ) -> Dict[str, Any]:
    """Collect HTTP headers from a server environment mapping.

    Every ``HTTP_*`` key is stripped of its prefix, lower-cased, and has
    underscores replaced with hyphens, so that ``HTTP_CACHE_CONTROL``
    becomes ``cache-control``. ``CONTENT_TYPE`` and ``CONTENT_LENGTH`` are
    picked up as well, unless the environment also carries their
    ``HTTP_``-prefixed form.

    Args:
        env (dict): Server environment mapping.

    Returns:
        dict: Header names mapped to their raw values.
    """

    headers = {}
    prefix_len = len(HEADER_PREFIX)

    for name, value in env.items():
        if name.startswith(HEADER_PREFIX):
            headers[_header_name(name[prefix_len:])] = value

    for name in CONTENT_HEADERS:
        if name in env:
            headers.setdefault(_header_name(name), env[name])

    return headers


def merge_sources(
    cookies: RawGroup,
    body: RawGroup,
    query: RawGroup,
    headers: RawGroup,
    fields: Optional[RawGroup] = None,
) -> Dict[str, Any]:
    """Flatten the raw request groups into a single lookup mapping.

    The sources are consulted in a fixed order of precedence::

        cookies > body > query > headers > fields

    and the first source to supply a given name wins; later sources never
    override it. `fields` carries values already held by a field store, so
    that ad hoc values remain available when rules are re-applied.

    Args:
        cookies (dict): Cookie values.
        body (dict): Body parameters.
        query (dict): Query string parameters.
        headers (dict): Normalized headers.
        fields (dict): Previously stored field values (default ``None``).

    Returns:
        dict: The merged mapping.
    """

    merged: Dict[str, Any] = {}

    for source in (cookies, body, query, headers, fields or {}):
        for name, value in source.items():
            if name not in merged:
                merged[name] = value

    return merged
