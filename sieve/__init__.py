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

"""Primary package for Sieve, a request normalization and field validation layer.

Sieve turns the loosely-typed state handed over by a web server (the
environment mapping, query string, body, cookies and upload descriptors)
into a single request object with canonical metadata, read-only raw
parameter groups, and a store of fields validated against declared rules.
The `sieve` package can be used to directly access most of the library's
classes, functions, and variables::

    import sieve

    req = sieve.Request(environ, rules={'id': 'int'})
"""

import logging as _logging

__all__ = (
    # Request interface
    'Request',
    'RequestOptions',
    # Fields
    'ABSENT',
    'FieldResult',
    'FieldStatus',
    'FieldStore',
    'INVALID',
    # Filters and rules
    'BaseFilter',
    'FilterRegistry',
    'Rule',
    'RuleFlags',
    'compile_rule',
    'compile_rules',
    # Uploads
    'UploadedFile',
    # Public constants
    'MEDIA_JSON',
    'MEDIA_MSGPACK',
    'MEDIA_URLENCODED',
    # Utilities
    'merge_sources',
    'normalize_headers',
    'parse_header',
    'parse_query_string',
    'secure_filename',
    # Error classes
    'HTTPError',
    'MalformedUpload',
    'MediaMalformedError',
    'UnknownFilterError',
    'UnsupportedMediaType',
    # Package version
    '__version__',
)

from sieve._typing import ABSENT
from sieve._typing import INVALID
from sieve.constants import MEDIA_JSON
from sieve.constants import MEDIA_MSGPACK
from sieve.constants import MEDIA_URLENCODED
from sieve.errors import MalformedUpload
from sieve.errors import MediaMalformedError
from sieve.errors import UnknownFilterError
from sieve.errors import UnsupportedMediaType
from sieve.fields import FieldResult
from sieve.fields import FieldStatus
from sieve.fields import FieldStore
from sieve.filtering import BaseFilter
from sieve.filtering import compile_rule
from sieve.filtering import compile_rules
from sieve.filtering import FilterRegistry
from sieve.filtering import Rule
from sieve.filtering import RuleFlags
from sieve.http_error import HTTPError
from sieve.request import Request
from sieve.request import RequestOptions
from sieve.request_helpers import merge_sources
from sieve.request_helpers import normalize_headers
from sieve.uploads import UploadedFile
from sieve.util import parse_header
from sieve.util import parse_query_string
from sieve.util import secure_filename

# Package version
from sieve.version import __version__  # NOQA: F401

# NOTE: Only to be used internally on the rare occasion that we need to
#   log something that we can't communicate any other way.
_logger = _logging.getLogger('sieve')
_logger.addHandler(_logging.NullHandler())
