import glob
import os
from os import path
import platform

from setuptools import setup

try:
    from Cython.Build import build_ext as _cy_build_ext
    from Cython.Distutils.extension import Extension as _cy_Extension
except ImportError:
    _cy_build_ext = _cy_Extension = None

MYDIR = path.abspath(os.path.dirname(__file__))

# NOTE: Only the query string and header parsing helpers are compiled;
#   everything else stays pure Python.
CYTHON_PACKAGE = 'sieve.util'
CYTHON_EXCLUDE = {'__init__', 'misc'}


def cython_extensions():
    if _cy_Extension is None:
        return []
    if platform.python_implementation() != 'CPython':
        return []
    if os.environ.get('SIEVE_DISABLE_CYTHON'):
        return []

    package_dir = path.join(MYDIR, *CYTHON_PACKAGE.split('.'))
    extensions = []

    for filename in sorted(glob.glob(path.join(package_dir, '*.py'))):
        module = path.splitext(path.basename(filename))[0]
        if module in CYTHON_EXCLUDE:
            continue

        extensions.append(
            _cy_Extension(
                CYTHON_PACKAGE + '.' + module,
                sources=[path.relpath(filename, MYDIR)],
                cython_directives={'language_level': '3', 'annotation_typing': False},
                optional=True,
            )
        )

    return extensions


ext_modules = cython_extensions()

setup(
    cmdclass={'build_ext': _cy_build_ext} if ext_modules else {},
    ext_modules=ext_modules,
)
