from __future__ import annotations

from collections import UserDict
import functools
from typing import Any, Mapping, Optional

from sieve import errors
from sieve.constants import MEDIA_JSON
from sieve.constants import MEDIA_MSGPACK
from sieve.constants import MEDIA_URLENCODED
from sieve.media.base import BaseHandler
from sieve.media.json import JSONHandler
from sieve.media.urlencoded import URLEncodedFormHandler
from sieve.util.mediatypes import normalize_media_type


class MissingDependencyHandler(BaseHandler):
    """Placeholder handler that always raises an error.

    This handler is registered in place of a decoder that requires an
    external dependency that can not be found.
    """

    def __init__(self, handler: str, library: str) -> None:
        self._msg = ('The {} requires the {} library, which is not installed.').format(
            handler, library
        )

    def deserialize(self, data: bytes, content_type: Optional[str] = None) -> Any:
        raise RuntimeError(self._msg)


class Handlers(UserDict):
    """A :class:`dict`-like object that manages request body decoders.

    Keys are bare media types (e.g., ``'application/json'``); they are
    normalized on assignment, so ``'Application/JSON; charset=utf-8'``
    and ``'application/json'`` refer to the same entry. By default,
    decoders are provided for ``application/json`` and
    ``application/x-www-form-urlencoded``.
    """

    def __init__(self, initial: Optional[Mapping[str, BaseHandler]] = None) -> None:
        self._resolve = self._create_resolver()

        handlers = initial or {
            MEDIA_JSON: JSONHandler(),
            MEDIA_URLENCODED: URLEncodedFormHandler(),
        }

        # NOTE: Directly calling UserDict as it's not inheritable.
        # Also, this results in self.update(...) being called.
        UserDict.__init__(self, handlers)

    def __getitem__(self, key: str) -> BaseHandler:
        return self.data[normalize_media_type(key)]

    def __setitem__(self, key: str, value: BaseHandler) -> None:
        super().__setitem__(normalize_media_type(key), value)

        # NOTE: When the mapping changes, we do not want to use a cached
        #   handler from the previous mapping, in case it was replaced.
        self._resolve.cache_clear()

    def __delitem__(self, key: str) -> None:
        super().__delitem__(normalize_media_type(key))

        # NOTE: Similar to __setitem__(), we need to avoid resolving to a
        #   cached handler that was removed.
        self._resolve.cache_clear()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False

        return normalize_media_type(key) in self.data

    def _create_resolver(self):
        # PERF: Most requests will use one or two media types, so a
        #   small cache spares us from re-parsing the header every time.
        @functools.lru_cache(maxsize=64)
        def resolve(content_type: Optional[str]) -> BaseHandler:
            media_type = normalize_media_type(content_type)

            try:
                return self.data[media_type]
            except KeyError:
                raise errors.UnsupportedMediaType(media_type or '(none)') from None

        return resolve

    def resolve(self, content_type: Optional[str]) -> BaseHandler:
        """Find the handler registered for a Content-Type value.

        Args:
            content_type (str): A Content-Type header value; any parameters
                are ignored for the purpose of the lookup.

        Returns:
            BaseHandler: The registered handler.

        Raises:
            UnsupportedMediaType: No handler is registered for the media type.
        """
        return self._resolve(content_type)

    def decode(self, content_type: Optional[str], data: bytes) -> Mapping[str, Any]:
        """Decode a request body according to its Content-Type.

        Args:
            content_type (str): The Content-Type header value.
            data (bytes): The raw request body.

        Returns:
            dict: The decoded body; non-mapping documents are reduced to an
            empty ``dict``.

        Raises:
            UnsupportedMediaType: No handler is registered for the media type.
            MediaMalformedError: The handler could not decode the body.
        """
        handler = self.resolve(content_type)
        return handler.decode(data, content_type)

    def add_msgpack(self, media_type: str = MEDIA_MSGPACK) -> BaseHandler:
        """Register a MessagePack decoder for `media_type`.

        When the ``msgpack`` package is not installed, a
        :class:`MissingDependencyHandler` is registered instead, so that
        requests carrying that media type fail loudly rather than being
        reported as unsupported.

        Returns:
            BaseHandler: The handler that was registered.
        """
        try:
            import msgpack
        except ImportError:
            msgpack = None

        handler: BaseHandler

        if msgpack:
            from sieve.media.msgpack import MessagePackHandler

            handler = MessagePackHandler()
        else:
            handler = MissingDependencyHandler('MessagePack body decoder', 'msgpack')

        self[media_type] = handler
        return handler
