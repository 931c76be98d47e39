"""File-name helpers shared by the record and image stores."""

from __future__ import annotations

import re

# Characters that are illegal in file names on at least one common platform.
_ILLEGAL_CHARS = re.compile(r'[\\/:*?"<>|]')


def safe_file_stem(name: str) -> str:
    """Replace path-illegal characters in *name* with ``_``.

    >>> safe_file_stem('a/b:c*d')
    'a_b_c_d'
    """
    return _ILLEGAL_CHARS.sub("_", name)
