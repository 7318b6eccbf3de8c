from __future__ import annotations

import abc
from typing import Any, Mapping, Optional


class BaseHandler(metaclass=abc.ABCMeta):
    """Abstract Base Class for a request body decoder.

    A handler turns the raw bytes of a request body into a mapping of
    field names to values. Handlers are registered by media type with
    :class:`~sieve.media.Handlers`::

        class CSVHandler(sieve.media.BaseHandler):
            def deserialize(self, data, content_type=None):
                ...

        options = sieve.RequestOptions()
        options.media_handlers['text/csv'] = CSVHandler()
    """

    @abc.abstractmethod
    def deserialize(self, data: bytes, content_type: Optional[str] = None) -> Any:
        """Deserialize a request body.

        Args:
            data (bytes): The raw request body.
            content_type (str): The full Content-Type header value, including
                any parameters such as ``charset`` (default ``None``).

        Returns:
            object: The decoded body. The request model only keeps mappings;
            anything else is replaced with an empty ``dict``.

        Raises:
            MediaMalformedError: The body could not be decoded.
        """

    def decode(self, data: bytes, content_type: Optional[str] = None) -> Mapping:
        """Deserialize `data`, reducing any non-mapping result to ``{}``."""
        media = self.deserialize(data, content_type)
        if not isinstance(media, Mapping):
            return {}

        return media
