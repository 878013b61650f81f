"""
Parser package for envsubst templates.

Provides the scanner, the node model and the recursive-descent parser that
turns a template into a reusable `Tree`.
"""

from .node import (
    EMPTY,
    EmptyNode,
    FuncName,
    FuncNode,
    ListNode,
    Node,
    TextNode,
)
from .parser import Tree, parse
from .scanner import LexContext, Scanner, Token

__all__ = [
    "EMPTY",
    "EmptyNode",
    "FuncName",
    "FuncNode",
    "ListNode",
    "Node",
    "TextNode",
    "Tree",
    "parse",
    "LexContext",
    "Scanner",
    "Token",
]
