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

"""Error classes raised by sieve.

Request-level failures that a host would normally turn into a 4xx response
specialize :class:`sieve.HTTPError`. Configuration mistakes made by the
application itself (such as a rule naming a filter that does not exist)
are plain ``ValueError`` subclasses, since no client can fix them::

    import sieve

    try:
        req = sieve.Request(environ, raw_body=body, rules=rules)
    except sieve.UnsupportedMediaType as ex:
        return 415, ex.to_dict()

Field validation failures are never raised; they are stored as
:data:`sieve.INVALID` in the request's field store.
"""

from __future__ import annotations

from typing import Optional

from sieve.http_error import HTTPError

__all__ = (
    'HTTPError',
    'MalformedUpload',
    'MediaMalformedError',
    'UnknownFilterError',
    'UnsupportedMediaType',
)


class UnknownFilterError(ValueError):
    """A rule references an unregistered filter or is otherwise malformed."""


class MalformedUpload(ValueError):
    """An upload descriptor violates the single/parallel-array contract."""


class UnsupportedMediaType(HTTPError):
    """415 Unsupported Media Type.

    Raised when a request body must be decoded but no handler is
    registered for its Content-Type.

    Args:
        media_type (str): The normalized media type that could not be
            resolved.

    Keyword Args:
        description (str): Human-friendly description of the error
            (default: derived from `media_type`).
        code (int): An internal code for the error (default ``None``).
    """

    def __init__(
        self,
        media_type: str,
        *,
        description: Optional[str] = None,
        code: Optional[int] = None,
    ) -> None:
        super().__init__(
            415,
            description=description
            or '{0} is an unsupported media type.'.format(media_type),
            code=code,
        )
        self.media_type = media_type


class MediaMalformedError(HTTPError):
    """400 Bad Request.

    Raised by a media handler when trying to parse a malformed body.
    The cause of this exception, if any, is stored in the ``__cause__``
    attribute using the "raise ... from" form when raising.

    Args:
        media_type (str): The media type that was expected.
    """

    def __init__(self, media_type: str, *, code: Optional[int] = None) -> None:
        super().__init__(
            400,
            title='Invalid {0}'.format(media_type),
            description=None,
            code=code,
        )
        self._media_type = media_type

    @property
    def description(self) -> Optional[str]:
        msg = 'Could not parse {} body'.format(self._media_type)
        if self.__cause__ is not None:
            msg += ' - {}'.format(self.__cause__)
        return msg

    @description.setter
    def description(self, value: Optional[str]) -> None:
        pass
