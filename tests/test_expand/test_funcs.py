"""Tests for the string operators and glob matching."""

import re
import warnings
import pytest
from envsubst.lib.errors import ExpansionError
from envsubst.lib.expand.funcs import (
    glob_to_regex,
    replace_all,
    replace_first,
    replace_prefix,
    replace_suffix,
    to_lower_first,
    to_substr,
    to_upper_first,
    trim_longest_prefix,
    trim_longest_suffix,
    trim_shortest_prefix,
    trim_shortest_suffix,
)


@pytest.mark.parametrize(
    "pattern, text, matches",
    [
        ("*.txt", "notes.txt", True),
        ("*.txt", "dir/notes.txt", True),
        ("*.txt", "notes.txt.bak", False),
        ("?", "a", True),
        ("?", "ab", False),
        ("[abc]x", "bx", True),
        ("[!abc]x", "bx", False),
        ("[^abc]x", "dx", True),
        ("[]]", "]", True),
        (r"a\*b", "a*b", True),
        (r"a\*b", "axb", False),
        ("a.b", "axb", False),
        ("[unclosed", "[unclosed", True),
        ("[[a]", "[", True),
        ("[[a]", "a", True),
        ("[a&&b]", "&", True),
        ("[a~|]", "|", True),
        ("[a~|]", "b", False),
    ],
)
def test_glob_to_regex(pattern, text, matches):
    assert (re.fullmatch(glob_to_regex(pattern), text) is not None) is matches


def test_trim_prefix():
    assert trim_shortest_prefix("aXbXc", "*X") == "bXc"
    assert trim_longest_prefix("aXbXc", "*X") == "c"
    assert trim_shortest_prefix("abc", "?") == "bc"
    assert trim_longest_prefix("abc", "z*") == "abc"


def test_trim_suffix():
    assert trim_shortest_suffix("file.tar.gz", ".*") == "file.tar"
    assert trim_longest_suffix("file.tar.gz", ".*") == "file"
    assert trim_shortest_suffix("file", ".*") == "file"


def test_replace():
    assert replace_first("a1b2c3", "[0-9]", "#") == "a#b2c3"
    assert replace_all("a1b2c3", "[0-9]", "#") == "a#b#c#"
    assert replace_all("a1b2c3", "[!0-9]", "#") == "#1#2#3"
    assert replace_all("a*b", r"\*", "-") == "a-b"


def test_replace_all_skips_empty_match_after_a_match():
    assert replace_all("abc", "*", "x") == "x"
    assert replace_all("abc", "a*", "x") == "x"
    assert replace_all("abc", "b*", "x") == "ax"


def test_class_body_compiles_without_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        for pattern in ("[[x]", "[x&&y]", "[x~~y]", "[x||y]"):
            re.compile(glob_to_regex(pattern))


def test_replace_treats_replacement_literally():
    assert replace_all("ab", "a", r"\1") == r"\1b"


def test_replace_anchored():
    assert replace_prefix("foobar", "foo", "X") == "Xbar"
    assert replace_prefix("foobar", "bar", "X") == "foobar"
    assert replace_suffix("foobar", "bar", "X") == "fooX"
    assert replace_suffix("foobar", "foo", "X") == "foobar"


def test_replace_empty_pattern():
    assert replace_first("abc", "", "X") == "abc"
    assert replace_prefix("abc", "", "X") == "Xabc"
    assert replace_suffix("abc", "", "X") == "abcX"


def test_case_first_on_empty_value():
    assert to_upper_first("") == ""
    assert to_lower_first("") == ""


@pytest.mark.parametrize(
    "offset, length, expected",
    [
        ("0", None, "abcdef"),
        ("6", None, ""),
        ("7", None, ""),
        ("-6", None, "abcdef"),
        ("-7", None, ""),
        ("2", "0", ""),
        ("2", "-5", ""),
        (" 1 ", " 2 ", "bc"),
    ],
)
def test_substr_bounds(offset, length, expected):
    assert to_substr("abcdef", offset, length) == expected


def test_substr_rejects_non_numeric_length():
    with pytest.raises(ExpansionError):
        to_substr("abcdef", "1", "two")
