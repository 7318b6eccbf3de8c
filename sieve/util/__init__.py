"""General utilities.

This package includes URI and media type parsing helpers. These functions
are also hoisted into the front-door `sieve` module where noted::

    from sieve.util import uri

    params = uri.parse_query_string('tags[]=a&tags[]=b')
"""

from sieve.util import mediatypes
from sieve.util import misc
from sieve.util import uri
from sieve.util.mediatypes import normalize_media_type
from sieve.util.mediatypes import parse_header
from sieve.util.misc import secure_filename
from sieve.util.uri import parse_query_string

__all__ = (
    'mediatypes',
    'misc',
    'normalize_media_type',
    'parse_header',
    'parse_query_string',
    'secure_filename',
    'uri',
)
