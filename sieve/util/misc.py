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

"""Miscellaneous utilities."""

import re
import unicodedata

__all__ = ('secure_filename',)

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9.-]')


def secure_filename(filename: str) -> str:
    """Make a client-supplied upload name safe to use on a local disk.

    The name is first decomposed to the Unicode ``NFKD`` form, so that
    accented letters keep their base character. Every character outside
    ``[A-Za-z0-9.-]`` is then replaced by an underscore, and so is a
    leading dot, which means the result can never be a hidden file or a
    relative path component::

        >>> secure_filename('../../etc/passwd')
        '_._.._etc_passwd'
        >>> secure_filename('Ångström unit physics.pdf')
        'A_ngstro_m_unit_physics.pdf'

    Raises:
        ValueError: `filename` is empty.
    """
    if not filename:
        raise ValueError('cannot sanitize an empty filename')

    decomposed = unicodedata.normalize('NFKD', filename)
    if decomposed[0] == '.':
        decomposed = '_' + decomposed[1:]

    return _UNSAFE_CHARS.sub('_', decomposed)
