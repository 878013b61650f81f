"""
envsubst: shell-style parameter expansion for templates.

Example:
    from envsubst import parse, expand

    tree = parse("${NAME:-world}")
    tree.execute({"NAME": "you"})     # -> "you"
    expand("${HOME##*/}", {"HOME": "/home/me"})   # -> "me"
"""

from envsubst.lib.errors import (
    BadSubstitution,
    EmptyVariableError,
    EnvsubstError,
    ExpansionError,
    MissingClosingBrace,
    ParseDefaultFunction,
    ParseError,
    ParseFuncSubstitution,
    ParseVariableName,
    ResolverError,
    UnsetParameterError,
    UnsetVariableError,
)
from envsubst.lib.expand import (
    CallableResolver,
    EnvironmentResolver,
    MappingResolver,
    VariableResolver,
    WritableResolver,
    execute,
    expand,
    expand_env,
)
from envsubst.lib.parse import (
    EmptyNode,
    FuncName,
    FuncNode,
    ListNode,
    TextNode,
    Tree,
    parse,
)
from envsubst.models.dataModel import Restrictions

__all__ = [
    "BadSubstitution",
    "EmptyVariableError",
    "EnvsubstError",
    "ExpansionError",
    "MissingClosingBrace",
    "ParseDefaultFunction",
    "ParseError",
    "ParseFuncSubstitution",
    "ParseVariableName",
    "ResolverError",
    "UnsetParameterError",
    "UnsetVariableError",
    "CallableResolver",
    "EnvironmentResolver",
    "MappingResolver",
    "VariableResolver",
    "WritableResolver",
    "execute",
    "expand",
    "expand_env",
    "EmptyNode",
    "FuncName",
    "FuncNode",
    "ListNode",
    "TextNode",
    "Tree",
    "parse",
    "Restrictions",
]
