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

"""Testing helpers for sieve-based applications and sieve itself.

The helpers build server environment mappings the way a CGI or WSGI server
would, so that :class:`sieve.Request` objects can be exercised without a
running server::

    from sieve import testing

    req = testing.create_req(
        method='PUT',
        headers={'Content-Type': 'application/x-www-form-urlencoded'},
        raw_body='id=123&name[]=A&name[]=B',
        rules={'id': 'int'},
    )
    assert req.fields['id'] == 123
"""

from sieve.testing.helpers import create_environ
from sieve.testing.helpers import create_req
from sieve.testing.helpers import DEFAULT_HOST
from sieve.testing.helpers import DEFAULT_UA

__all__ = ('create_environ', 'create_req', 'DEFAULT_HOST', 'DEFAULT_UA')
