"""
Node model for parsed templates.

A template parses into a tree of immutable nodes:

- `EmptyNode`: nothing here; only ever the root of an empty template
- `TextNode`: a literal run of characters
- `ListNode`: ordered concatenation, `left` then `right`
- `FuncNode`: a substitution on a single variable

Every node is a frozen dataclass, so a finished tree can be shared freely
between callers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class FuncName(Enum):
    """Substitution operators carried by `FuncNode.name`.

    Values are the operator text as written in a template, except for
    PLAIN and LENGTH which have no operator after the variable name.
    """

    PLAIN = ""
    LENGTH = "len"

    DEFAULT = ":-"
    ASSIGN_DEFAULT = ":="
    ASSIGN = "="
    ERROR = ":?"
    ALTERNATE = ":+"

    SUBSTRING = ":"

    TRIM_PREFIX = "#"
    TRIM_PREFIX_LONGEST = "##"
    TRIM_SUFFIX = "%"
    TRIM_SUFFIX_LONGEST = "%%"

    REPLACE = "/"
    REPLACE_ALL = "//"
    REPLACE_PREFIX = "/#"
    REPLACE_SUFFIX = "/%"

    LOWER_FIRST = ","
    LOWER = ",,"
    UPPER_FIRST = "^"
    UPPER = "^^"


# Operators that already handle an unset or empty variable themselves.
DEFAULT_FAMILY: frozenset[FuncName] = frozenset(
    {
        FuncName.DEFAULT,
        FuncName.ASSIGN_DEFAULT,
        FuncName.ASSIGN,
        FuncName.ERROR,
        FuncName.ALTERNATE,
    }
)


@dataclass(frozen=True)
class EmptyNode:
    """Zero-length sentinel for an exhausted parse."""


@dataclass(frozen=True)
class TextNode:
    value: str


@dataclass(frozen=True)
class ListNode:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class FuncNode:
    """A `${...}` substitution.

    Attributes:
        name: The operator
        param: The variable identifier, never empty
        args: Parsed argument sub-trees; each may hold nested substitutions
    """

    name: FuncName
    param: str
    args: tuple["Node", ...] = ()

    def __post_init__(self) -> None:
        if not self.param:
            raise ValueError("FuncNode param must not be empty")


Node = Union[EmptyNode, TextNode, ListNode, FuncNode]

EMPTY: EmptyNode = EmptyNode()


def list_join(left: Node, right: Node) -> Node:
    """Concatenate two nodes, dropping an empty right-hand side."""
    if isinstance(right, EmptyNode):
        return left
    return ListNode(left, right)
