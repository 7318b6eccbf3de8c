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

"""Base class for request errors that carry an HTTP status."""

from __future__ import annotations

import http
from typing import MutableMapping, Optional, Type, Union

ErrorDict = MutableMapping[str, Union[str, int, None]]


class HTTPError(Exception):
    """A request error that a host would normally answer with a 4xx status.

    sieve never renders responses. A host that does can translate the
    error using :attr:`status_code` and :meth:`to_dict`.

    Only `status` may be passed positionally.

    Args:
        status (Union[int, http.HTTPStatus]): HTTP status code
            (e.g., ``415``). Unknown codes raise ``ValueError``.

    Keyword Args:
        title (str): Short error title (default: the status line, such as
            ``'415 Unsupported Media Type'``).
        description (str): Longer, human-friendly explanation
            (default ``None``).
        code (int): Application-specific error code (default ``None``).
    """

    __slots__ = ('status', 'title', 'description', 'code')

    status: http.HTTPStatus
    title: str
    description: Optional[str]
    code: Optional[int]

    def __init__(
        self,
        status: Union[int, http.HTTPStatus],
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        code: Optional[int] = None,
    ):
        self.status = http.HTTPStatus(status)
        self.title = title or '{0} {1}'.format(self.status.value, self.status.phrase)
        self.description = description
        self.code = code

    def __repr__(self) -> str:
        return '<%s: %s>' % (self.__class__.__name__, self.title)

    __str__ = __repr__

    @property
    def status_code(self) -> int:
        """Status as a plain ``int``."""
        return self.status.value

    def to_dict(self, obj_type: Type[ErrorDict] = dict) -> ErrorDict:
        """Describe the error as a mapping.

        ``description`` and ``code`` are only included when set.

        Args:
            obj_type: Mapping type to populate (default ``dict``).
        """
        obj = obj_type()
        obj['title'] = self.title

        for name in ('description', 'code'):
            value = getattr(self, name)
            if value is not None:
                obj[name] = value

        return obj
