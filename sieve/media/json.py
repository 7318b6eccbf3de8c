from __future__ import annotations

import json
from typing import Any, Callable, Optional

from sieve import errors
from sieve.media.base import BaseHandler
from sieve.util.mediatypes import parse_header


class JSONHandler(BaseHandler):
    """JSON body decoder.

    This handler uses Python's standard :mod:`json` library by default, but
    can be configured to use any of a number of third-party JSON libraries
    by specifying the desired ``loads`` function::

        import orjson

        options.media_handlers['application/json'] = JSONHandler(
            loads=orjson.loads
        )

    The body is decoded using the ``charset`` parameter of the Content-Type
    header, defaulting to UTF-8. An empty body is decoded as an empty
    ``dict``, and so is any document whose top-level value is not a JSON
    object. This handler will raise a :class:`sieve.MediaMalformedError`
    if an error happens while parsing the body.

    Keyword Arguments:
        loads (func): Function to use when deserializing JSON documents.
    """

    def __init__(self, loads: Optional[Callable[[str], Any]] = None) -> None:
        self._loads = loads or json.loads

    def deserialize(self, data: bytes, content_type: Optional[str] = None) -> Any:
        if not data:
            return {}

        charset = 'utf-8'
        if content_type:
            _, params = parse_header(content_type)
            charset = params.get('charset') or charset

        try:
            media = self._loads(data.decode(charset))
        except (LookupError, ValueError) as err:
            # NOTE: UnicodeDecodeError and json.JSONDecodeError are both
            #   subclasses of ValueError.
            raise errors.MediaMalformedError('JSON') from err

        if not isinstance(media, dict):
            return {}

        return media
