from __future__ import annotations

import functools
import os
import re
from pathlib import PurePath
from typing import Any, Union

from . import config
from .glob import glob_to_regex

__all__ = ["GlobMatcher", "compile_glob", "globmatches"]


class GlobMatcher:
    """A compiled glob pattern.

    `matches` tests whole strings; a path-like candidate is compared in its POSIX form.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.regex: re.Pattern[str] = glob_to_regex(pattern)

    @property
    def source(self) -> str:
        return self.regex.pattern

    def matches(self, candidate: Union[PurePath, str, os.PathLike[str]]) -> bool:
        if isinstance(candidate, PurePath):
            candidate = candidate.as_posix()
        else:
            candidate = str(os.fspath(candidate))

        return self.regex.fullmatch(candidate) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GlobMatcher):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __str__(self) -> str:
        return self.pattern

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}(pattern={self.pattern!r}, source={self.source!r})"


@functools.lru_cache(maxsize=config.cache_size())
def compile_glob(pattern: str) -> GlobMatcher:
    return GlobMatcher(pattern)


def globmatches(pattern: str, candidate: Union[PurePath, str, os.PathLike[Any]]) -> bool:
    return compile_glob(pattern).matches(candidate)
