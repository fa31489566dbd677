from enum import Enum
from typing import Optional

__all__ = ["ErrorKind", "GlobError"]


class ErrorKind(Enum):
    BARE_ESCAPE = "bare escape"
    UNCLOSED_CLASS = "unclosed class"
    UNCLOSED_ALTERNATION = "unclosed alternation"
    REVERSED_RANGE = "reversed range"
    RANGE_AFTER_RANGE = "range after range"
    UNSUPPORTED = "unsupported"
    INVALID_REGEX = "invalid regex"

    def __str__(self) -> str:
        return self.value


class GlobError(ValueError):
    """Raised when a glob pattern cannot be translated into a regular expression.

    Attributes:
        kind: what went wrong, see `ErrorKind`.
        message: a human readable description.
        pattern: the glob pattern being compiled, if known.
        fragment: the regular expression built up to the point of failure.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        pattern: Optional[str] = None,
        fragment: Optional[str] = None,
    ) -> None:
        super().__init__(kind, message)
        self.kind = kind
        self.message = message
        self.pattern = pattern
        self.fragment = fragment

    def __str__(self) -> str:
        if self.pattern is None:
            return self.message
        return f"{self.message} in pattern {self.pattern!r}"

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}(kind={self.kind.name}, message={self.message!r}, pattern={self.pattern!r})"
