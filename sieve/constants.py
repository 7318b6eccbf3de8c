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

__all__ = (
    'DEFAULT_HTTP_PORT',
    'DEFAULT_HTTPS_PORT',
    'ENV_HOST',
    'ENV_HTTPS',
    'ENV_QUERY_STRING',
    'ENV_REQUEST_METHOD',
    'ENV_REQUEST_SCHEME',
    'ENV_REQUEST_URI',
    'ENV_SERVER_PORT',
    'HEADER_PREFIX',
    'MEDIA_JSON',
    'MEDIA_MSGPACK',
    'MEDIA_URLENCODED',
    'UPLOAD_KEYS',
)

# NOTE: According to RFC 7159, most JSON parsers assume UTF-8 and so it is
# the recommended default charset going forward.
MEDIA_JSON = 'application/json'

# NOTE: An internet media type for MessagePack has not yet been registered.
# 'application/x-msgpack' is commonly used, but the use of the 'x-' prefix
# is discouraged by RFC 6838.
MEDIA_MSGPACK = 'application/msgpack'

MEDIA_URLENCODED = 'application/x-www-form-urlencoded'

# Server environment keys (CGI/PEP-3333 naming)
ENV_REQUEST_METHOD = 'REQUEST_METHOD'
ENV_REQUEST_SCHEME = 'REQUEST_SCHEME'
ENV_HTTPS = 'HTTPS'
ENV_HOST = 'HTTP_HOST'
ENV_SERVER_PORT = 'SERVER_PORT'
ENV_REQUEST_URI = 'REQUEST_URI'
ENV_QUERY_STRING = 'QUERY_STRING'

HEADER_PREFIX = 'HTTP_'

DEFAULT_HTTP_PORT = 80
DEFAULT_HTTPS_PORT = 443

# Attributes carried by a single upload descriptor
UPLOAD_KEYS = ('name', 'type', 'size', 'tmp_name', 'error')
