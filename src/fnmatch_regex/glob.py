"""Translate shell glob-like patterns into regular expressions.

The supported syntax is:

- ``?`` matches any single character except the path separator
- ``*`` matches any run of characters not containing the path separator
- ``[...]`` a character class, ``[!...]`` a negated one; ``a-z`` ranges are allowed,
  a ``-`` or ``]`` as the first member, or a ``-`` as the last one, is taken literally
- ``{foo,bar}`` alternation between literal strings
- ``\\`` escapes the next character; ``\\a \\b \\e \\f \\n \\r \\t \\v`` denote control characters

A character class never matches the path separator, whether it is negated or not.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Set, Tuple, Union

from typing_extensions import Final, assert_never

from . import config
from .errors import ErrorKind, GlobError
from .utils.logging import LoggingDescriptor

__all__ = [
    "SEPARATOR",
    "ClassAccumulator",
    "ClassChar",
    "ClassRange",
    "close_alternate",
    "close_class",
    "escape_char",
    "escape_class_char",
    "glob_to_regex",
    "map_letter_escape",
    "translate",
]

SEPARATOR: Final = "/"

_ANY_CHAR: Final = f"[^{SEPARATOR}]"
_ANY_RUN: Final = _ANY_CHAR + "*"
_NEVER_MATCHES: Final = "(?!)"
_END: Final = "\\Z"

_LETTER_ESCAPES: Final[Dict[str, str]] = {
    "a": "\x07",
    "b": "\x08",
    "e": "\x1b",
    "f": "\x0c",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\x0b",
}

_SPECIAL_CHARS: Final[FrozenSet[str]] = frozenset("[{()|^$.*?+\\")

# `re` treats these specially inside a set, or warns about them
_SPECIAL_CLASS_CHARS: Final[FrozenSet[str]] = frozenset("]\\^[-&~|")

_TRACE: Final = config.trace_enabled()

_logger = LoggingDescriptor(name=__name__)


def map_letter_escape(c: str) -> str:
    return _LETTER_ESCAPES.get(c, c)


def escape_char(c: str) -> str:
    if c in _SPECIAL_CHARS:
        return "\\" + c
    return c


def escape_class_char(c: str) -> str:
    if c in _SPECIAL_CLASS_CHARS:
        return "\\" + c
    return c


class ClassChar(NamedTuple):
    char: str


class ClassRange(NamedTuple):
    start: str
    end: str


ClassItem = Union[ClassChar, ClassRange]


@dataclass
class ClassAccumulator:
    negated: bool = False
    items: List[ClassItem] = field(default_factory=list)


def _covers_separator(item: ClassItem) -> bool:
    if isinstance(item, ClassChar):
        return item.char == SEPARATOR
    return item.start <= SEPARATOR <= item.end


def _make_range(start: str, end: str) -> Optional[ClassItem]:
    if start > end:
        return None
    if start == end:
        return ClassChar(start)
    return ClassRange(start, end)


def _exclude_separator(items: Iterable[ClassItem]) -> List[ClassItem]:
    below = chr(ord(SEPARATOR) - 1)
    above = chr(ord(SEPARATOR) + 1)

    result: List[ClassItem] = []
    for item in items:
        if not _covers_separator(item):
            result.append(item)
            continue

        if isinstance(item, ClassRange):
            for part in (_make_range(item.start, below), _make_range(above, item.end)):
                if part is not None:
                    result.append(part)

    return result


def _include_separator(items: List[ClassItem]) -> List[ClassItem]:
    if any(_covers_separator(item) for item in items):
        return items
    return [*items, ClassChar(SEPARATOR)]


def close_class(acc: ClassAccumulator) -> str:
    """Render a finished character class as a regular expression set.

    The path separator is removed from a plain class and added to a negated one,
    so that the resulting set never matches it. Members are deduplicated and sorted,
    single characters first, then ranges, then a literal dash if there was one.
    """
    items = _include_separator(acc.items) if acc.negated else _exclude_separator(acc.items)

    if not acc.negated and not items:
        return _NEVER_MATCHES

    chars: Set[str] = {item.char for item in items if isinstance(item, ClassChar)}
    ranges: Set[Tuple[str, str]] = {(item.start, item.end) for item in items if isinstance(item, ClassRange)}

    has_dash = "-" in chars
    chars.discard("-")

    result = ["[^" if acc.negated else "["]
    result.extend(escape_class_char(c) for c in sorted(chars))
    result.extend(f"{escape_class_char(start)}-{escape_class_char(end)}" for start, end in sorted(ranges))
    if has_dash:
        result.append("-")
    result.append("]")

    return "".join(result)


def close_alternate(gathered: Iterable[str]) -> str:
    branches = sorted("".join(escape_char(c) for c in branch) for branch in set(gathered))
    return "(" + "|".join(branches) + ")"


@dataclass(frozen=True)
class LiteralState:
    pass


@dataclass(frozen=True)
class EscapeState:
    pass


@dataclass(frozen=True)
class ClassStartState:
    pass


@dataclass
class ClassState:
    acc: ClassAccumulator


@dataclass
class ClassRangeState:
    acc: ClassAccumulator
    start: str


@dataclass
class ClassRangeDashState:
    acc: ClassAccumulator
    last: ClassRange


@dataclass
class ClassEscapeState:
    acc: ClassAccumulator


@dataclass
class AlternateState:
    current: str = ""
    gathered: List[str] = field(default_factory=list)


@dataclass
class AlternateEscapeState:
    current: str
    gathered: List[str]


State = Union[
    LiteralState,
    EscapeState,
    ClassStartState,
    ClassState,
    ClassRangeState,
    ClassRangeDashState,
    ClassEscapeState,
    AlternateState,
    AlternateEscapeState,
]

_LITERAL: Final = LiteralState()
_ESCAPE: Final = EscapeState()
_CLASS_START: Final = ClassStartState()


class _GlobCompiler:
    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._result: List[str] = ["^"]

    def _fail(self, kind: ErrorKind, message: str) -> GlobError:
        fragment = "".join(self._result)
        _logger.debug(lambda: f"{kind}: {message} in {self.pattern!r}, regex so far {fragment!r}")
        return GlobError(kind, message, pattern=self.pattern, fragment=fragment)

    def _close_class(self, acc: ClassAccumulator) -> State:
        self._result.append(close_class(acc))
        return _LITERAL

    def _literal(self, c: str) -> State:
        if c == "\\":
            return _ESCAPE
        if c == "[":
            return _CLASS_START
        if c == "{":
            return AlternateState()

        if c == "?":
            self._result.append(_ANY_CHAR)
        elif c == "*":
            self._result.append(_ANY_RUN)
        elif c in "]}.":
            self._result.append("\\" + c)
        else:
            self._result.append(escape_char(c))
        return _LITERAL

    def _escape(self, c: str) -> State:
        self._result.append(escape_char(map_letter_escape(c)))
        return _LITERAL

    def _class_start(self, c: str) -> State:
        if c == "!":
            return ClassState(ClassAccumulator(negated=True))
        if c == "\\":
            return ClassEscapeState(ClassAccumulator())
        return ClassState(ClassAccumulator(items=[ClassChar(c)]))

    def _class(self, state: ClassState, c: str) -> State:
        acc = state.acc

        if c == "]":
            if acc.items:
                return self._close_class(acc)
            acc.items.append(ClassChar(c))
            return state

        if c == "-":
            if not acc.items:
                acc.items.append(ClassChar(c))
                return state

            last = acc.items[-1]
            if isinstance(last, ClassRange):
                return ClassRangeDashState(acc, last)

            acc.items.pop()
            return ClassRangeState(acc, last.char)

        if c == "\\":
            return ClassEscapeState(acc)

        acc.items.append(ClassChar(c))
        return state

    def _class_range(self, state: ClassRangeState, c: str) -> State:
        acc, start = state.acc, state.start

        if c == "\\":
            raise self._fail(
                ErrorKind.UNSUPPORTED, f"Escape character after the range dash following {start!r} is not supported"
            )

        if c == "]":
            acc.items.extend((ClassChar(start), ClassChar("-")))
            return self._close_class(acc)

        if start > c:
            raise self._fail(ErrorKind.REVERSED_RANGE, f"Reversed range from {start!r} to {c!r}")

        acc.items.append(ClassChar(start) if start == c else ClassRange(start, c))
        return ClassState(acc)

    def _class_range_dash(self, state: ClassRangeDashState, c: str) -> State:
        acc = state.acc

        if c == "]":
            acc.items.append(ClassChar("-"))
            return self._close_class(acc)

        last = state.last
        raise self._fail(ErrorKind.RANGE_AFTER_RANGE, f"Range following a {last.start!r}-{last.end!r} range")

    def _class_escape(self, state: ClassEscapeState, c: str) -> State:
        state.acc.items.append(ClassChar(map_letter_escape(c)))
        return ClassState(state.acc)

    def _alternate(self, state: AlternateState, c: str) -> State:
        if c == ",":
            state.gathered.append(state.current)
            return AlternateState("", state.gathered)

        if c == "}":
            if not state.current and not state.gathered:
                self._result.append(escape_char("{") + escape_char("}"))
            else:
                state.gathered.append(state.current)
                self._result.append(close_alternate(state.gathered))
            return _LITERAL

        if c == "\\":
            return AlternateEscapeState(state.current, state.gathered)

        if c == "[":
            raise self._fail(ErrorKind.UNSUPPORTED, "Character classes within an alternation are not supported")

        return AlternateState(state.current + c, state.gathered)

    def _alternate_escape(self, state: AlternateEscapeState, c: str) -> State:
        return AlternateState(state.current + map_letter_escape(c), state.gathered)

    def _step(self, state: State, c: str) -> State:
        if isinstance(state, LiteralState):
            return self._literal(c)
        if isinstance(state, EscapeState):
            return self._escape(c)
        if isinstance(state, ClassStartState):
            return self._class_start(c)
        if isinstance(state, ClassState):
            return self._class(state, c)
        if isinstance(state, ClassRangeState):
            return self._class_range(state, c)
        if isinstance(state, ClassRangeDashState):
            return self._class_range_dash(state, c)
        if isinstance(state, ClassEscapeState):
            return self._class_escape(state, c)
        if isinstance(state, AlternateState):
            return self._alternate(state, c)
        if isinstance(state, AlternateEscapeState):
            return self._alternate_escape(state, c)

        assert_never(state)

    def _finish(self, state: State) -> str:
        if isinstance(state, LiteralState):
            self._result.append(_END)
            return "".join(self._result)

        if isinstance(state, EscapeState):
            raise self._fail(ErrorKind.BARE_ESCAPE, "Bare escape character")

        if isinstance(state, (ClassStartState, ClassState, ClassRangeState, ClassRangeDashState, ClassEscapeState)):
            raise self._fail(ErrorKind.UNCLOSED_CLASS, "Unclosed character class")

        if isinstance(state, (AlternateState, AlternateEscapeState)):
            raise self._fail(ErrorKind.UNCLOSED_ALTERNATION, "Unclosed alternation")

        assert_never(state)

    def translate(self) -> str:
        state: State = _LITERAL
        for c in self.pattern:
            state = self._step(state, c)
            _logger.trace(lambda: f"{c!r} -> {state!r}", condition=lambda: _TRACE)

        return self._finish(state)


def translate(pattern: str) -> str:
    """Translate a glob pattern into the source of an anchored regular expression.

    Raises:
        GlobError: if the pattern is malformed or uses an unsupported construct.
    """
    return _GlobCompiler(pattern).translate()


def glob_to_regex(pattern: str) -> "re.Pattern[str]":
    """Translate a glob pattern and compile the result with `re`.

    Raises:
        GlobError: if the pattern is malformed, or with kind `ErrorKind.INVALID_REGEX`
            if `re` rejects the generated expression.
    """
    source = translate(pattern)

    try:
        result = re.compile(source)
    except re.error as e:
        raise GlobError(ErrorKind.INVALID_REGEX, str(e), pattern=pattern, fragment=source) from e

    _logger.debug(lambda: f"compiled glob {pattern!r} to {source!r}")

    return result
