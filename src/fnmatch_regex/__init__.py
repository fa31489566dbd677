from .__version__ import __version__
from .errors import ErrorKind, GlobError
from .glob import SEPARATOR, glob_to_regex, translate
from .matcher import GlobMatcher, compile_glob, globmatches

__all__ = [
    "SEPARATOR",
    "ErrorKind",
    "GlobError",
    "GlobMatcher",
    "__version__",
    "compile_glob",
    "glob_to_regex",
    "globmatches",
    "translate",
]
