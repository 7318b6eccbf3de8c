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

"""Read-only views over host-supplied upload descriptors.

The host hands over one descriptor per form field. A descriptor for a
single file carries scalar attributes::

    {'avatar': {'name': 'me.png', 'type': 'image/png', 'size': 1024,
                'tmp_name': '/tmp/upload1', 'error': 0}}

while several files submitted under one field name (``docs[]``) arrive as
parallel sequences, one element per file::

    {'docs': {'name': ['a.pdf', 'b.pdf'], 'type': [...], 'size': [...],
              'tmp_name': [...], 'error': [0, 0]}}

The raw descriptors are kept exactly as received; :func:`iter_uploads`
only reads them.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterator, List, Mapping, Optional

from sieve._typing import RawGroup
from sieve.constants import UPLOAD_KEYS
from sieve.errors import MalformedUpload
from sieve.util.misc import secure_filename

__all__ = (
    'iter_uploads',
    'list_uploads',
    'UPLOAD_ERR_NO_FILE',
    'UPLOAD_ERR_OK',
    'UploadedFile',
)

UPLOAD_ERR_OK = 0
UPLOAD_ERR_NO_FILE = 4


@dataclasses.dataclass(frozen=True)
class UploadedFile:
    """A single uploaded file, as described by the host."""

    field: str
    filename: Optional[str]
    content_type: Optional[str]
    size: int
    tmp_name: Optional[str]
    error: int

    @property
    def ok(self) -> bool:
        """``True`` if the host reported no upload error."""
        return self.error == UPLOAD_ERR_OK

    @property
    def secure_filename(self) -> str:
        """The client-supplied filename made safe for a local file system."""
        if not self.filename:
            return ''

        return secure_filename(self.filename)


def _to_int(value: Any, field: str, key: str) -> int:
    if value is None:
        return 0

    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedUpload(
            'upload {0!r} has a non-integer {1!r}: {2!r}'.format(field, key, value)
        ) from None


def _make(field: str, attrs: Mapping[str, Any]) -> UploadedFile:
    return UploadedFile(
        field=field,
        filename=attrs.get('name'),
        content_type=attrs.get('type'),
        size=_to_int(attrs.get('size'), field, 'size'),
        tmp_name=attrs.get('tmp_name'),
        error=_to_int(attrs.get('error'), field, 'error'),
    )


def iter_uploads(files: RawGroup, field: str) -> Iterator[UploadedFile]:
    """Iterate over the files uploaded under a form field.

    Args:
        files (dict): Upload descriptors keyed by field name.
        field (str): Form field name.

    Yields:
        UploadedFile: One item per file; nothing if the field is missing.

    Raises:
        MalformedUpload: The descriptor is not a mapping, mixes scalar and
            sequence attributes, or its parallel sequences differ in length.
    """

    try:
        descriptor = files[field]
    except KeyError:
        return

    if not isinstance(descriptor, Mapping):
        raise MalformedUpload('upload {0!r} is not a descriptor mapping'.format(field))

    present = [key for key in UPLOAD_KEYS if key in descriptor]
    sequences = [key for key in present if isinstance(descriptor[key], (list, tuple))]

    if not sequences:
        yield _make(field, descriptor)
        return

    if len(sequences) != len(present):
        raise MalformedUpload(
            'upload {0!r} mixes scalar and sequence attributes'.format(field)
        )

    lengths = {len(descriptor[key]) for key in sequences}
    if len(lengths) != 1:
        raise MalformedUpload(
            'upload {0!r} has parallel sequences of different lengths'.format(field)
        )

    for index in range(lengths.pop()):
        yield _make(field, {key: descriptor[key][index] for key in sequences})


def list_uploads(files: RawGroup, field: str) -> List[UploadedFile]:
    """Same as :func:`iter_uploads`, but return a list."""
    return list(iter_uploads(files, field))
