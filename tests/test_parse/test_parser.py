"""Tests for template parsing into node trees."""

import dataclasses
import pytest
from envsubst.lib.errors import (
    BadSubstitution,
    EnvsubstError,
    MissingClosingBrace,
    ParseError,
    ParseFuncSubstitution,
    ParseVariableName,
)
from envsubst.lib.parse import (
    EMPTY,
    FuncName,
    FuncNode,
    ListNode,
    TextNode,
    Tree,
    parse,
)


def test_empty_template():
    assert parse("").root == EMPTY


def test_plain_text():
    assert parse("hello world").root == TextNode("hello world")


def test_text_and_substitutions_form_right_leaning_list():
    tree = parse("a${B}c")
    assert tree.root == ListNode(
        TextNode("a"),
        ListNode(FuncNode(FuncName.PLAIN, "B"), TextNode("c")),
    )


def test_adjacent_substitutions():
    tree = parse("${A}${B}")
    assert tree.root == ListNode(
        FuncNode(FuncName.PLAIN, "A"), FuncNode(FuncName.PLAIN, "B")
    )


def test_length():
    assert parse("${#VAR}").root == FuncNode(FuncName.LENGTH, "VAR")


@pytest.mark.parametrize(
    "template, name",
    [
        ("${VAR:-w}", FuncName.DEFAULT),
        ("${VAR:=w}", FuncName.ASSIGN_DEFAULT),
        ("${VAR=w}", FuncName.ASSIGN),
        ("${VAR:?w}", FuncName.ERROR),
        ("${VAR:+w}", FuncName.ALTERNATE),
    ],
)
def test_default_family(template, name):
    assert parse(template).root == FuncNode(name, "VAR", (TextNode("w"),))


def test_default_word_with_nested_substitution():
    tree = parse("${VAR:-a${B}c}")
    assert tree.root == FuncNode(
        FuncName.DEFAULT,
        "VAR",
        (TextNode("a"), FuncNode(FuncName.PLAIN, "B"), TextNode("c")),
    )


def test_empty_default_word():
    assert parse("${VAR:-}").root == FuncNode(FuncName.DEFAULT, "VAR")


def test_substring_offset_only():
    assert parse("${VAR:2}").root == FuncNode(
        FuncName.SUBSTRING, "VAR", (TextNode("2"),)
    )


def test_substring_offset_and_length():
    assert parse("${VAR:1:3}").root == FuncNode(
        FuncName.SUBSTRING, "VAR", (TextNode("1"), TextNode("3"))
    )


def test_substring_nested_offset():
    assert parse("${VAR:${OFF}}").root == FuncNode(
        FuncName.SUBSTRING, "VAR", (FuncNode(FuncName.PLAIN, "OFF"),)
    )


@pytest.mark.parametrize(
    "template, name",
    [
        ("${VAR#*/}", FuncName.TRIM_PREFIX),
        ("${VAR##*/}", FuncName.TRIM_PREFIX_LONGEST),
        ("${VAR%*/}", FuncName.TRIM_SUFFIX),
        ("${VAR%%*/}", FuncName.TRIM_SUFFIX_LONGEST),
    ],
)
def test_trim(template, name):
    assert parse(template).root == FuncNode(name, "VAR", (TextNode("*/"),))


@pytest.mark.parametrize(
    "template, name",
    [
        ("${VAR/o/0}", FuncName.REPLACE),
        ("${VAR//o/0}", FuncName.REPLACE_ALL),
        ("${VAR/#o/0}", FuncName.REPLACE_PREFIX),
        ("${VAR/%o/0}", FuncName.REPLACE_SUFFIX),
    ],
)
def test_replace(template, name):
    assert parse(template).root == FuncNode(
        name, "VAR", (TextNode("o"), TextNode("0"))
    )


def test_replace_without_replacement():
    assert parse("${VAR//o/}").root == FuncNode(
        FuncName.REPLACE_ALL, "VAR", (TextNode("o"),)
    )


def test_replace_escaped_slash_in_pattern():
    assert parse(r"${VAR/a\/b/c}").root == FuncNode(
        FuncName.REPLACE, "VAR", (TextNode("a/b"), TextNode("c"))
    )


@pytest.mark.parametrize(
    "template, name",
    [
        ("${VAR,}", FuncName.LOWER_FIRST),
        ("${VAR,,}", FuncName.LOWER),
        ("${VAR^}", FuncName.UPPER_FIRST),
        ("${VAR^^}", FuncName.UPPER),
    ],
)
def test_casing(template, name):
    assert parse(template).root == FuncNode(name, "VAR")


def test_escaped_closing_brace_in_default():
    assert parse(r"${VAR:-a\}b}").root == FuncNode(
        FuncName.DEFAULT, "VAR", (TextNode("a}b"),)
    )


def test_escaped_substitution_is_text():
    assert parse(r"\${VAR}").root == TextNode("${VAR}")


@pytest.mark.parametrize(
    "template, error",
    [
        ("${VAR", MissingClosingBrace),
        ("${VAR x}", MissingClosingBrace),
        ("${VAR:-x", MissingClosingBrace),
        ("${VAR:1", MissingClosingBrace),
        ("${VAR:1:2", MissingClosingBrace),
        ("${}", ParseVariableName),
        ("${-x}", ParseVariableName),
        ("${VAR^x}", BadSubstitution),
        ("${VAR/a}", BadSubstitution),
        ("${#}", BadSubstitution),
        ("${#VAR:-x}", BadSubstitution),
        ("${VAR#}", ParseFuncSubstitution),
        ("${VAR:}", ParseFuncSubstitution),
        ("${VAR:1:}", ParseFuncSubstitution),
    ],
)
def test_parse_errors(template, error):
    with pytest.raises(error):
        parse(template)


def test_parse_errors_share_base_class():
    with pytest.raises(ParseError) as exc_info:
        parse("${VAR")
    assert isinstance(exc_info.value, EnvsubstError)
    assert "missing closing brace" in str(exc_info.value)
    assert exc_info.value.pos == 5


def test_scanner_is_dropped_after_parse():
    tree = parse("${A}")
    with pytest.raises(RuntimeError):
        tree.scanner


def test_scanner_is_dropped_after_failed_parse():
    tree = Tree()
    with pytest.raises(ParseError):
        tree.parse("${")
    with pytest.raises(RuntimeError):
        tree.scanner


def test_nodes_are_immutable():
    node = FuncNode(FuncName.PLAIN, "A")
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.param = "B"


def test_func_node_requires_param():
    with pytest.raises(ValueError):
        FuncNode(FuncName.PLAIN, "")


def test_long_template_does_not_recurse():
    tree = parse("x${A}" * 5000)
    node = tree.root
    count = 0
    while isinstance(node, ListNode):
        count += 1
        node = node.right
    assert count == 9999
    assert node == FuncNode(FuncName.PLAIN, "A")
