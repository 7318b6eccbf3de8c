from __future__ import annotations

from typing import Any, Optional

from sieve import errors
from sieve.media.base import BaseHandler


class MessagePackHandler(BaseHandler):
    """Body decoder built using the :py:mod:`msgpack` module.

    This handler uses ``msgpack.unpackb()``. An empty body is decoded as an
    empty ``dict``, as is any document whose top-level value is not a map;
    it will raise a :class:`sieve.MediaMalformedError` if an error happens
    while parsing the body.

    Note:
        This handler requires the extra ``msgpack`` package, which must be
        installed in addition to ``sieve-request`` from PyPI:

        .. code::

            $ pip install sieve-request[msgpack]
    """

    def __init__(self) -> None:
        import msgpack

        self._unpackb = msgpack.unpackb

    def deserialize(self, data: bytes, content_type: Optional[str] = None) -> Any:
        if not data:
            return {}

        try:
            # NOTE: Using unpackb since we would need to manage a buffer
            #   for Unpacker() which wouldn't gain us much.
            media = self._unpackb(data, raw=False)
        except ValueError as err:
            raise errors.MediaMalformedError('MessagePack') from err

        if not isinstance(media, dict):
            return {}

        return media
