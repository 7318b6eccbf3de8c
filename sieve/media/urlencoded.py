from __future__ import annotations

from typing import Any, Optional

from sieve import errors
from sieve.media.base import BaseHandler
from sieve.util.uri import parse_query_string


class URLEncodedFormHandler(BaseHandler):
    """URL-encoded form data decoder.

    This handler parses ``application/x-www-form-urlencoded`` HTML forms to a
    ``dict``, exactly the way URL query strings are parsed (including
    bracketed names such as ``name[]``). An empty body will be parsed as an
    empty dict.

    This handler will raise :class:`sieve.MediaMalformedError` if the request
    payload cannot be parsed as ASCII.

    Keyword Arguments:
        keep_blank (bool): Whether to keep empty-string values from the form
            (default ``True``).
    """

    def __init__(self, keep_blank: bool = True) -> None:
        self._keep_blank = keep_blank

    def deserialize(self, data: bytes, content_type: Optional[str] = None) -> Any:
        try:
            # NOTE: According to
            # https://html.spec.whatwg.org/multipage/form-control-infrastructure.html#application%2Fx-www-form-urlencoded-encoding-algorithm
            # the body should be US-ASCII. Enforcing this also helps
            # catch malicious input.
            body = data.decode('ascii')
        except UnicodeDecodeError as err:
            raise errors.MediaMalformedError('URL-encoded') from err

        return parse_query_string(body, keep_blank=self._keep_blank)
