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

"""Request class."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

import sieve
from sieve import errors
from sieve import request_helpers as helpers
from sieve._typing import Environ
from sieve._typing import RawGroup
from sieve._typing import RuleSet
from sieve.constants import DEFAULT_HTTP_PORT
from sieve.constants import DEFAULT_HTTPS_PORT
from sieve.constants import ENV_HOST
from sieve.constants import ENV_HTTPS
from sieve.constants import ENV_QUERY_STRING
from sieve.constants import ENV_REQUEST_METHOD
from sieve.constants import ENV_REQUEST_SCHEME
from sieve.constants import ENV_REQUEST_URI
from sieve.constants import ENV_SERVER_PORT
from sieve.fields import FieldStore
from sieve.filtering import FilterRegistry
from sieve.media import Handlers
from sieve.uploads import list_uploads
from sieve.uploads import UploadedFile
from sieve.util.uri import parse_host
from sieve.util.uri import parse_port
from sieve.util.uri import parse_query_string
from sieve.util.uri import split_request_target
from sieve.util.uri import unparse_host

__all__ = ('Request', 'RequestOptions')


class Request:
    """Represents a client's HTTP request.

    A request is built from a snapshot of the server environment (a
    CGI/WSGI-style mapping such as ``environ``) and, optionally, from
    parameter groups that the host has already parsed. Metadata and raw
    groups are derived once, here, and never change afterwards; only the
    validated :attr:`fields` can be mutated, through :meth:`set_filters`,
    :meth:`add_filters` and item assignment.

    Args:
        env (dict): Server environment mapping.

    Keyword Arguments:
        query (dict): Pre-parsed query string parameters. When not given
            (or empty), the query string is parsed from `env`.
        body (dict): Pre-parsed body parameters. When empty, and both a
            Content-Type header and `raw_body` are available, the body is
            decoded by the handler registered for its media type.
        cookies (dict): Cookie values (default empty).
        files (dict): Upload descriptors keyed by field name (default
            empty). Each descriptor carries ``name``, ``type``, ``size``,
            ``tmp_name`` and ``error``, either as scalars or as parallel
            lists for multiple files.
        raw_body (bytes): Raw request body, as ``bytes`` or ``str``.
        rules (dict): Field names mapped to rule descriptors. When given,
            the rules are applied to the merged request values right away.
        options (RequestOptions): Set of global options passed from the
            host (default: a fresh :class:`RequestOptions` instance).

    Raises:
        UnsupportedMediaType: The body had to be decoded, but no handler is
            registered for its media type.
        MediaMalformedError: The body could not be decoded, and
            ``options.strict_media`` is set.
        UnknownFilterError: `rules` names a filter that is not registered,
            or contains a malformed descriptor.
    """

    __slots__ = (
        '_body',
        '_cookies',
        '_env',
        '_fields',
        '_files',
        '_headers',
        '_query',
        'host',
        'method',
        'options',
        'path',
        'port',
        'query_string',
        'scheme',
    )

    method: str
    """HTTP method requested, or ``''`` when unknown (e.g., ``'GET'``)."""
    scheme: str
    """URL scheme used for the request: ``'http'``, ``'https'`` or ``''``."""
    host: str
    """Host name taken from the Host header, or ``''`` when unknown."""
    port: int
    """Port used for the request, or ``0`` when it can not be determined.

    An explicit port in the Host header wins, then ``SERVER_PORT``. Lacking
    both, the port is ``443`` for HTTPS requests, ``80`` when a host name
    is known, and ``0`` otherwise.
    """
    path: str
    """Path portion of the request target, not including the query string."""
    query_string: str
    """Raw query string, not including the leading ``'?'``."""
    options: RequestOptions
    """Set of global options passed in from the host."""

    def __init__(
        self,
        env: Environ,
        query: Optional[RawGroup] = None,
        body: Optional[RawGroup] = None,
        cookies: Optional[RawGroup] = None,
        files: Optional[RawGroup] = None,
        raw_body: Optional[Union[bytes, str]] = None,
        rules: Optional[RuleSet] = None,
        options: Optional[RequestOptions] = None,
    ) -> None:
        self.options = options or RequestOptions()
        self._env = dict(env)

        self.method = env.get(ENV_REQUEST_METHOD) or ''

        # NOTE: An explicit scheme always wins; otherwise the HTTPS flag
        #   is honored unless set to the literal 'off' that some servers
        #   pass for plain HTTP.
        if env.get(ENV_REQUEST_SCHEME) is not None:
            self.scheme = env[ENV_REQUEST_SCHEME]
        elif env.get(ENV_HTTPS) is not None and env[ENV_HTTPS] != 'off':
            self.scheme = 'https'
        else:
            self.scheme = ''

        host_header = env.get(ENV_HOST)
        if host_header is not None:
            self.host, self.port = parse_host(str(host_header))
        else:
            self.host, self.port = '', 0

        if not self.port:
            if env.get(ENV_SERVER_PORT) is not None:
                self.port = parse_port(env[ENV_SERVER_PORT])
            elif self.scheme == 'https':
                self.port = DEFAULT_HTTPS_PORT
            elif self.host:
                self.port = DEFAULT_HTTP_PORT

        if env.get(ENV_REQUEST_URI) is not None:
            self.path, self.query_string = split_request_target(env[ENV_REQUEST_URI])
        else:
            self.path, self.query_string = '', ''

        if env.get(ENV_QUERY_STRING) is not None:
            self.query_string = env[ENV_QUERY_STRING]

        if query:
            self._query = dict(query)
        elif self.query_string:
            self._query = parse_query_string(
                self.query_string,
                keep_blank=self.options.keep_blank_qs_values,
            )
        else:
            self._query = {}

        self._body: Dict[str, Any] = dict(body) if body else {}
        self._cookies = dict(cookies) if cookies else {}
        self._files = dict(files) if files else {}
        self._headers = helpers.normalize_headers(env)

        content_type = self._headers.get('content-type')
        if not self._body and content_type is not None and raw_body is not None:
            self._body = self._decode_body(content_type, raw_body)

        self._fields = FieldStore(
            self._merge,
            registry=self.options.filters,
            add_empty=self.options.add_empty_fields,
        )

        if rules:
            self._fields.apply(rules, self._merge())

    def __repr__(self) -> str:
        return '<%s: %s %r>' % (self.__class__.__name__, self.method, self.uri)

    # ------------------------------------------------------------------------
    # Raw groups
    # ------------------------------------------------------------------------

    @property
    def env(self) -> Mapping[str, Any]:
        """Read-only view of the server environment mapping."""
        return MappingProxyType(self._env)

    @property
    def query_params(self) -> Mapping[str, Any]:
        """Read-only view of the query string parameters."""
        return MappingProxyType(self._query)

    @property
    def body_params(self) -> Mapping[str, Any]:
        """Read-only view of the body parameters, supplied or decoded."""
        return MappingProxyType(self._body)

    @property
    def cookies(self) -> Mapping[str, Any]:
        """Read-only view of the cookie values."""
        return MappingProxyType(self._cookies)

    @property
    def headers(self) -> Mapping[str, Any]:
        """Read-only view of the request headers.

        Header names are lower-cased, with hyphens in place of the
        underscores used by the server environment (e.g.,
        ``'content-type'``).
        """
        return MappingProxyType(self._headers)

    @property
    def files(self) -> Mapping[str, Any]:
        """Read-only view of the upload descriptors, exactly as received."""
        return MappingProxyType(self._files)

    @property
    def params(self) -> Dict[str, Any]:
        """All request values merged into a single ``dict``.

        When the same name is supplied by more than one source, the first
        of cookies, body, query string, headers and previously stored
        fields wins. Rules are validated against this mapping.
        """
        return self._merge()

    # ------------------------------------------------------------------------
    # Derived metadata
    # ------------------------------------------------------------------------

    @property
    def netloc(self) -> str:
        """Host name and, unless it is the scheme's default, the port."""
        return unparse_host(self.host, self.port, self.scheme)

    @property
    def relative_uri(self) -> str:
        """The path and query string portion of the request URI."""
        if self.query_string:
            return self.path + '?' + self.query_string

        return self.path

    @property
    def uri(self) -> str:
        """The fully-qualified URI for the request, as far as it is known."""
        if not self.host:
            return self.relative_uri

        scheme = self.scheme or ('https' if self.port == DEFAULT_HTTPS_PORT else 'http')
        return scheme + '://' + self.netloc + self.relative_uri

    @property
    def content_type(self) -> Optional[str]:
        """Value of the Content-Type header, or ``None`` if missing."""
        return self._headers.get('content-type')

    def get_header(self, name: str, default: Optional[Any] = None) -> Optional[Any]:
        """Retrieve the raw value for the given header.

        Args:
            name (str): Header name, case-insensitive (e.g., 'Content-Type').

        Keyword Args:
            default (any): Value to return if the header is not found
                (default ``None``).

        Returns:
            str: The value of the specified header if it exists, or the
            default value otherwise.
        """
        return self._headers.get(name.lower().replace('_', '-'), default)

    def get_uploads(self, field: str) -> List[UploadedFile]:
        """Return the files uploaded under a form field.

        Single-file and parallel-list descriptors are both normalized to a
        list of :class:`~sieve.uploads.UploadedFile`; an unknown field
        yields an empty list.

        Raises:
            MalformedUpload: The descriptor for `field` is inconsistent.
        """
        return list_uploads(self._files, field)

    # ------------------------------------------------------------------------
    # Validated fields
    # ------------------------------------------------------------------------

    @property
    def fields(self) -> FieldStore:
        """The validated field store for this request."""
        return self._fields

    def get_field(self, name: str, default: Optional[Any] = None) -> Any:
        """Return the validated value of a field.

        Fields that are not stored, or that failed validation or were
        absent from every source, yield `default` instead.
        """
        result = self._fields.get_result(name)
        if not result.is_valid:
            return default

        return result.value

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._fields[name] = value

    def __delitem__(self, name: str) -> None:
        del self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def set_filters(self, rules: RuleSet, add_empty: Optional[bool] = None) -> Request:
        """Replace the rule set and re-validate every declared field.

        Values are taken from the raw groups and from the fields currently
        stored, in that order of precedence. Fields not declared in `rules`
        are dropped.

        Args:
            rules (dict): Field names mapped to rule descriptors.
            add_empty (bool): Store :data:`sieve.ABSENT` for declared fields
                that no source supplies (default:
                ``options.add_empty_fields``).

        Returns:
            Request: The request itself.

        Raises:
            UnknownFilterError: A rule could not be compiled; no field was
                changed.
        """
        self._fields.set_filters(rules, add_empty)
        return self

    def add_filters(self, rules: RuleSet) -> Request:
        """Add or replace rules, re-validating only the fields they name.

        Raises:
            UnknownFilterError: A rule could not be compiled; no field was
                changed.
        """
        self._fields.add_filters(rules)
        return self

    # ------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------

    def _merge(self, fields: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        if fields is None:
            fields = self._fields.valid_items()

        return helpers.merge_sources(
            self._cookies, self._body, self._query, self._headers, fields
        )

    def _decode_body(self, content_type: str, raw_body: Union[bytes, str]) -> Dict[str, Any]:
        if isinstance(raw_body, str):
            raw_body = raw_body.encode()

        try:
            media = self.options.media_handlers.decode(content_type, raw_body)
        except errors.MediaMalformedError as err:
            if self.options.strict_media:
                raise

            sieve._logger.warning('Ignoring request body: %s', err.description)
            return {}

        sieve._logger.debug(
            'Decoded %d byte(s) of request body as %s', len(raw_body), content_type
        )

        return dict(media)


class RequestOptions:
    """Defines a set of configurable request options.

    An instance of this class may be passed to :class:`~.Request` in order
    to configure how it parses and validates request values; a default
    instance is created otherwise. A single instance can be shared by any
    number of requests.
    """

    keep_blank_qs_values: bool
    """Set to ``False`` to ignore query string params that have missing or blank
    values (default ``True``).
    """
    media_handlers: Handlers
    """A dict-like object for configuring the media-types to decode.

    By default, handlers are provided for the ``application/json`` and
    ``application/x-www-form-urlencoded`` media types.
    """
    filters: FilterRegistry
    """Registry of the filter kinds that rules may name.

    By default, only the built-in filters are available.
    """
    add_empty_fields: bool
    """Set to ``False`` to leave declared fields that no source supplies out
    of the field store, rather than storing them as :data:`sieve.ABSENT`
    (default ``True``).
    """
    strict_media: bool
    """Set to ``True`` to raise :class:`~sieve.MediaMalformedError` for a
    request body that can not be decoded, instead of treating it as empty
    (default ``False``).
    """

    __slots__ = (
        'keep_blank_qs_values',
        'media_handlers',
        'filters',
        'add_empty_fields',
        'strict_media',
    )

    def __init__(self) -> None:
        self.keep_blank_qs_values = True
        self.media_handlers = Handlers()
        self.filters = FilterRegistry()
        self.add_empty_fields = True
        self.strict_media = False
