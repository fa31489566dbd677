from typing import List

import pytest

from fnmatch_regex import ErrorKind, GlobError, translate
from fnmatch_regex.glob import (
    ClassAccumulator,
    ClassChar,
    ClassRange,
    close_alternate,
    close_class,
    escape_char,
    escape_class_char,
    map_letter_escape,
)


@pytest.mark.parametrize(
    ("letter", "expected"),
    [
        ("a", "\x07"),
        ("b", "\x08"),
        ("e", "\x1b"),
        ("f", "\x0c"),
        ("n", "\n"),
        ("r", "\r"),
        ("t", "\t"),
        ("v", "\x0b"),
        ("d", "d"),
        ("\\", "\\"),
        ("*", "*"),
    ],
)
def test_map_letter_escape(letter: str, expected: str) -> None:
    assert map_letter_escape(letter) == expected


@pytest.mark.parametrize("c", list("[{()|^$.*?+\\"))
def test_escape_char_escapes_regex_metacharacters(c: str) -> None:
    assert escape_char(c) == "\\" + c


@pytest.mark.parametrize("c", list("aZ0/-,!]}#~ \t"))
def test_escape_char_keeps_other_characters(c: str) -> None:
    assert escape_char(c) == c


@pytest.mark.parametrize(("c", "expected"), [("]", "\\]"), ("\\", "\\\\"), ("^", "\\^"), ("-", "\\-"), ("a", "a")])
def test_escape_class_char(c: str, expected: str) -> None:
    assert escape_class_char(c) == expected


@pytest.mark.parametrize(
    ("acc", "expected"),
    [
        (ClassAccumulator(items=[ClassChar("b"), ClassChar("a"), ClassChar("b")]), "[ab]"),
        (ClassAccumulator(items=[ClassRange("a", "z"), ClassRange("0", "9"), ClassRange("a", "z")]), "[0-9a-z]"),
        (ClassAccumulator(items=[ClassChar("-"), ClassChar("x")]), "[x-]"),
        (ClassAccumulator(items=[ClassChar("/"), ClassChar("x")]), "[x]"),
        (ClassAccumulator(items=[ClassRange(".", "/")]), "[.]"),
        (ClassAccumulator(items=[ClassRange("/", "0")]), "[0]"),
        (ClassAccumulator(items=[ClassRange("/", "9")]), "[0-9]"),
        (ClassAccumulator(items=[ClassRange("!", "/")]), "[!-.]"),
        (ClassAccumulator(items=[ClassRange(".", "0")]), "[.0]"),
        (ClassAccumulator(items=[ClassRange(" ", "~")]), "[ -.0-\\~]"),
        (ClassAccumulator(items=[ClassChar("/")]), "(?!)"),
        (ClassAccumulator(negated=True, items=[ClassRange("0", "9")]), "[^/0-9]"),
        (ClassAccumulator(negated=True, items=[ClassChar("/")]), "[^/]"),
        (ClassAccumulator(negated=True, items=[ClassRange("!", "9")]), "[^!-9]"),
        (ClassAccumulator(negated=True), "[^/]"),
        (ClassAccumulator(items=[ClassChar("]"), ClassChar("^")]), "[\\]\\^]"),
    ],
)
def test_close_class(acc: ClassAccumulator, expected: str) -> None:
    assert close_class(acc) == expected


@pytest.mark.parametrize(
    ("gathered", "expected"),
    [
        (["b", "a"], "(a|b)"),
        (["a", "a", "b"], "(a|b)"),
        (["a", ""], "(|a)"),
        (["th?is", "that", "...*"], "(\\.\\.\\.\\*|th\\?is|that)"),
        (["(x)"], "(\\(x\\))"),
    ],
)
def test_close_alternate(gathered: List[str], expected: str) -> None:
    assert close_alternate(gathered) == expected


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("", "^\\Z"),
        ("con.st", "^con\\.st\\Z"),
        ("this/is/?.test", "^this/is/[^/]\\.test\\Z"),
        ("*.txt", "^[^/]*\\.txt\\Z"),
        ("a]b}c", "^a\\]b\\}c\\Z"),
        ("a(b)c+d|e^f$", "^a\\(b\\)c\\+d\\|e\\^f\\$\\Z"),
        ("[0-9]", "^[0-9]\\Z"),
        ("[!0-9]", "^[^/0-9]\\Z"),
        ("[]]", "^[\\]]\\Z"),
        ("[!]]", "^[^/\\]]\\Z"),
        ("[-a]", "^[a-]\\Z"),
        ("[!-]", "^[^/-]\\Z"),
        ("[^a]", "^[\\^a]\\Z"),
        ("[ab.-9c]", "^[.abc0-9]\\Z"),
        ("[ab+-9c]", "^[abc+-.0-9]\\Z"),
        ("[ab0-9c-]", "^[abc0-9-]\\Z"),
        ("[0-9abc-]", "^[abc0-9-]\\Z"),
        ("[+a-]", "^[+a-]\\Z"),
        ("[0-9-]", "^[0-9-]\\Z"),
        ("[a-a]", "^[a]\\Z"),
        ("[!--0]", "^[^\\--0]\\Z"),
        ("[/]", "^(?!)\\Z"),
        ("[\\t\\]]", "^[\t\\]]\\Z"),
        ("[\\n]", "^[\n]\\Z"),
        ("{a,b}", "^(a|b)\\Z"),
        ("{b,a,a}", "^(a|b)\\Z"),
        ("{}", "^\\{}\\Z"),
        ("{,}", "^()\\Z"),
        ("{a\\,b,c}", "^(a,b|c)\\Z"),
        ("{a\\tb}", "^(a\tb)\\Z"),
        ("look at {th?is,that,...*}", "^look at (\\.\\.\\.\\*|th\\?is|that)\\Z"),
        ("\\*", "^\\*\\Z"),
        ("\\d", "^d\\Z"),
        ("\\t", "^\t\\Z"),
        ("\\\\", "^\\\\\\Z"),
    ],
)
def test_translate(pattern: str, expected: str) -> None:
    assert translate(pattern) == expected


def test_translate_class_order_does_not_matter() -> None:
    assert translate("[ab0-9c-]") == translate("[0-9abc-]") == translate("[cba0-90-9-]")


def test_translate_alternation_deduplicates() -> None:
    assert translate("{a,a,b}") == translate("{b,a}")


def test_range_ascending_is_kept() -> None:
    assert translate("[a-c]") == "^[a-c]\\Z"


def test_range_of_one_character_collapses() -> None:
    assert translate("[c-c]") == "^[c]\\Z"


def test_range_descending_is_rejected() -> None:
    with pytest.raises(GlobError) as e:
        translate("[c-a]")

    assert e.value.kind is ErrorKind.REVERSED_RANGE
    assert "'c'" in e.value.message
    assert "'a'" in e.value.message


@pytest.mark.parametrize(
    ("pattern", "kind", "fragment"),
    [
        ("abc\\", ErrorKind.BARE_ESCAPE, "^abc"),
        ("\\", ErrorKind.BARE_ESCAPE, "^"),
        ("[0-9", ErrorKind.UNCLOSED_CLASS, "^"),
        ("x[", ErrorKind.UNCLOSED_CLASS, "^x"),
        ("[!", ErrorKind.UNCLOSED_CLASS, "^"),
        ("[a-", ErrorKind.UNCLOSED_CLASS, "^"),
        ("[a-c-", ErrorKind.UNCLOSED_CLASS, "^"),
        ("[\\", ErrorKind.UNCLOSED_CLASS, "^"),
        ("[]", ErrorKind.UNCLOSED_CLASS, "^"),
        ("{a,b", ErrorKind.UNCLOSED_ALTERNATION, "^"),
        ("a{", ErrorKind.UNCLOSED_ALTERNATION, "^a"),
        ("{a\\", ErrorKind.UNCLOSED_ALTERNATION, "^"),
        ("[z-a]", ErrorKind.REVERSED_RANGE, "^"),
        ("[a-c-e]", ErrorKind.RANGE_AFTER_RANGE, "^"),
        ("x[a-\\z]", ErrorKind.UNSUPPORTED, "^x"),
        ("{a,[b]}", ErrorKind.UNSUPPORTED, "^"),
    ],
)
def test_translate_errors(pattern: str, kind: ErrorKind, fragment: str) -> None:
    with pytest.raises(GlobError) as e:
        translate(pattern)

    assert e.value.kind is kind
    assert e.value.pattern == pattern
    assert e.value.fragment == fragment


def test_error_renders_message_and_pattern() -> None:
    with pytest.raises(GlobError) as e:
        translate("{a,b")

    assert str(e.value) == "Unclosed alternation in pattern '{a,b'"
    assert str(e.value.kind) == "unclosed alternation"


def test_glob_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        translate("[b-a]")


def test_range_after_range_names_the_previous_range() -> None:
    with pytest.raises(GlobError) as e:
        translate("[a-c-e]")

    assert e.value.kind is ErrorKind.RANGE_AFTER_RANGE
    assert "'a'-'c'" in e.value.message
