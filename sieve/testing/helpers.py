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

"""Testing utilities.

This module contains various testing utilities that can be accessed
directly from the `testing` package::

    from sieve import testing

    env = testing.create_environ(
        '/users/1', method='PATCH', headers={'Content-Type': 'application/json'}
    )
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import sieve
from sieve.constants import DEFAULT_HTTP_PORT
from sieve.constants import DEFAULT_HTTPS_PORT
from sieve.request import Request
from sieve.request import RequestOptions

__all__ = ('create_environ', 'create_req', 'DEFAULT_HOST', 'DEFAULT_UA')

# NOTE: Per RFC 2606, example.com is reserved for documentation use.
DEFAULT_HOST = 'example.com'

DEFAULT_UA = 'sieve-client/' + sieve.__version__

HeaderArg = Union[Mapping[str, Optional[str]], Iterable[Tuple[str, Optional[str]]]]


def create_environ(
    path: str = '/',
    query_string: str = '',
    scheme: str = 'http',
    host: Optional[str] = DEFAULT_HOST,
    port: Optional[Union[int, str]] = None,
    headers: Optional[HeaderArg] = None,
    method: str = 'GET',
    remote_addr: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a mock server environment ``dict`` for simulating requests.

    Keyword Args:
        path (str): The path for the request (default ``'/'``).
        query_string (str): The query string to simulate, without a
            leading ``'?'`` (default ``''``). The query string is passed
            as-is (it will not be percent-encoded).
        scheme (str): URL scheme, either ``'http'`` or ``'https'``
            (default ``'http'``).
        host (str): Hostname for the request (default ``'example.com'``).
            Pass ``None`` to leave out the Host header altogether.
        port (int): The TCP port to simulate. Defaults to the standard port
            used by the given scheme (i.e., 80 for ``'http'`` and 443 for
            ``'https'``). A string may also be passed, as long as it can be
            parsed as an int.
        headers (dict): Headers as a dict-like (Mapping) object, or an
            iterable yielding a series of two-member (*name*, *value*)
            iterables. Header names are not case-sensitive.

            Note:
                If a User-Agent header is not provided, it will default to::

                    f'sieve-client/{sieve.__version__}'

        method (str): The HTTP method to use (default ``'GET'``).
        remote_addr (str): Remote address for the request to use as the
            ``'REMOTE_ADDR'`` environment variable (default ``None``).
    """

    if query_string and query_string.startswith('?'):
        raise ValueError("query_string should not start with '?'")

    scheme = scheme.lower()
    if port is None:
        port = str(DEFAULT_HTTP_PORT if scheme == 'http' else DEFAULT_HTTPS_PORT)
    else:
        # NOTE: Running it through int() first ensures that if a string
        #   was passed, it is a valid integer.
        port = str(int(port))

    request_uri = path + '?' + query_string if query_string else path

    env = {
        'SERVER_PROTOCOL': 'HTTP/1.1',
        'REQUEST_METHOD': method,
        'REQUEST_SCHEME': scheme,
        'REQUEST_URI': request_uri,
        'QUERY_STRING': query_string,
        'SERVER_PORT': port,
    }

    if scheme == 'https':
        env['HTTPS'] = 'on'

    # NOTE: It has been observed that servers do not always set the
    #   REMOTE_ADDR variable, so we don't always set it either.
    if remote_addr:
        env['REMOTE_ADDR'] = remote_addr

    if host is not None:
        host_header = host
        if port != (str(DEFAULT_HTTPS_PORT) if scheme == 'https' else str(DEFAULT_HTTP_PORT)):
            host_header += ':' + port

        env['HTTP_HOST'] = host_header

    _add_headers_to_environ(env, headers)

    return env


def create_req(
    options: Optional[RequestOptions] = None,
    *,
    query: Optional[Mapping[str, Any]] = None,
    body: Optional[Mapping[str, Any]] = None,
    cookies: Optional[Mapping[str, Any]] = None,
    files: Optional[Mapping[str, Any]] = None,
    raw_body: Optional[Union[bytes, str]] = None,
    rules: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> Request:
    """Create and return a new Request instance.

    This function can be used to conveniently create a server environment
    and use it to instantiate a :py:class:`sieve.Request` object in one go.

    The remaining keyword arguments are passed to
    :py:meth:`sieve.testing.create_environ`; the named ones are passed to
    the request itself.
    """

    env = create_environ(**kwargs)
    return Request(
        env,
        query=query,
        body=body,
        cookies=cookies,
        files=files,
        raw_body=raw_body,
        rules=rules,
        options=options,
    )


def _add_headers_to_environ(env: Dict[str, Any], headers: Optional[HeaderArg]) -> None:
    if headers:
        try:
            items = headers.items()  # type: ignore[union-attr]
        except AttributeError:
            items = headers

        for name, value in items:
            name_env = name.upper().replace('-', '_')
            if name_env not in ('CONTENT_TYPE', 'CONTENT_LENGTH'):
                name_env = 'HTTP_' + name_env

            if value is None:
                value = ''
            else:
                value = value.strip()

            if name_env not in env:
                env[name_env] = value
            else:
                env[name_env] += ',' + value

    env.setdefault('HTTP_USER_AGENT', DEFAULT_UA)
