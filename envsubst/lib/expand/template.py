r"""
Expansion engine: evaluates a parsed `Tree` against a variable resolver.

The walk is pure. The tree is never modified, so one tree can be expanded
any number of times, concurrently, against independent resolvers. The only
side effect is the optional write-back of `:=` and `=` into a writable
resolver.

Expansion is all or nothing: any error aborts the walk and nothing of the
partially built output is returned.

Example:
    tree = parse("${GREETING:-Hello}, ${NAME^}!")
    execute(tree, {"NAME": "world"})          # -> "Hello, World!"
    expand("${PATH##*/}", EnvironmentResolver())
"""

from typing import Callable, Optional, Self

from envsubst.lib.errors import (
    EmptyVariableError,
    ExpansionError,
    ResolverError,
    UnsetParameterError,
    UnsetVariableError,
)
from envsubst.lib.expand.funcs import STRING_FUNCS, to_len
from envsubst.lib.expand.resolvers import (
    EnvironmentResolver,
    ResolverLike,
    VariableResolver,
    WritableResolver,
    resolver_from,
)
from envsubst.lib.log import LOG
from envsubst.lib.parse.node import (
    DEFAULT_FAMILY,
    EmptyNode,
    FuncName,
    FuncNode,
    ListNode,
    Node,
    TextNode,
)
from envsubst.lib.parse.parser import Tree, parse
from envsubst.models.dataModel import RELAXED, Restrictions


class Evaluator:
    """Walks one tree for one expansion.

    Attributes:
        resolver: Where variable values come from
        restrictions: Strict-mode checks to apply
    """

    def __init__(
        self: Self, resolver: VariableResolver, restrictions: Restrictions = RELAXED
    ) -> None:
        self.resolver: VariableResolver = resolver
        self.restrictions: Restrictions = restrictions
        self._defaults: dict[FuncName, Callable[[FuncNode, Optional[str]], str]] = {
            FuncName.DEFAULT: self._to_default,
            FuncName.ASSIGN_DEFAULT: self._to_assign,
            FuncName.ASSIGN: self._to_assign,
            FuncName.ERROR: self._to_error,
            FuncName.ALTERNATE: self._to_alternate,
        }

    def evaluate(self: Self, node: Node) -> str:
        out: list[str] = []
        self._walk(node, out)
        return "".join(out)

    def _walk(self: Self, node: Node, out: list[str]) -> None:
        # List chains lean right; follow them iteratively.
        while isinstance(node, ListNode):
            self._walk(node.left, out)
            node = node.right

        match node:
            case TextNode(value=value):
                out.append(value)
            case FuncNode():
                out.append(self._eval_func(node))
            case EmptyNode():
                pass

    def _lookup(self: Self, name: str) -> Optional[str]:
        try:
            value = self.resolver.resolve(name)
        except ExpansionError:
            raise
        except Exception as e:
            raise ResolverError(name, e) from e
        if value is not None and not isinstance(value, str):
            raise ResolverError(
                name, TypeError(f"expected str, got {type(value).__name__}")
            )
        return value

    def _check_restrictions(self: Self, name: str, value: Optional[str]) -> None:
        if value is None and self.restrictions.no_unset:
            raise UnsetVariableError(name)
        if value == "" and self.restrictions.no_empty:
            raise EmptyVariableError(name)

    def _word(self: Self, node: FuncNode) -> str:
        return "".join(self.evaluate(arg) for arg in node.args)

    def _eval_func(self: Self, node: FuncNode) -> str:
        value: Optional[str] = self._lookup(node.param)

        if node.name in DEFAULT_FAMILY:
            return self._defaults[node.name](node, value)

        self._check_restrictions(node.param, value)
        if node.name is FuncName.PLAIN:
            return value or ""
        if node.name is FuncName.LENGTH:
            return to_len(value or "")

        args: list[str] = [self.evaluate(arg) for arg in node.args]
        return STRING_FUNCS[node.name](value or "", *args)

    def _to_default(self: Self, node: FuncNode, value: Optional[str]) -> str:
        """${param:-word}"""
        if value:
            return value
        return self._word(node)

    def _to_assign(self: Self, node: FuncNode, value: Optional[str]) -> str:
        """${param:=word} and ${param=word}"""
        if value:
            return value
        word: str = self._word(node)
        if isinstance(self.resolver, WritableResolver):
            self.resolver.assign(node.param, word)
        return word

    def _to_error(self: Self, node: FuncNode, value: Optional[str]) -> str:
        """${param:?word}"""
        if value:
            return value
        raise UnsetParameterError(node.param, self._word(node))

    def _to_alternate(self: Self, node: FuncNode, value: Optional[str]) -> str:
        """${param:+word}"""
        if value:
            return self._word(node)
        return ""


def execute(
    tree: Tree, resolver: ResolverLike, restrictions: Optional[Restrictions] = None
) -> str:
    """Expand a parsed template.

    Args:
        tree: The parsed template
        resolver: A `VariableResolver`, a mapping, or a `name -> value`
            function returning None for unset variables
        restrictions: Optional strict-mode checks

    Returns:
        The expanded string

    Raises:
        ExpansionError: UnsetParameterError for `:?`, UnsetVariableError or
            EmptyVariableError in strict mode, ResolverError when the
            resolver fails
    """
    evaluator = Evaluator(resolver_from(resolver), restrictions or RELAXED)
    try:
        return evaluator.evaluate(tree.root)
    except ExpansionError as e:
        LOG(f"Expansion failed: {e}")
        raise


def expand(
    template: str, resolver: ResolverLike, restrictions: Optional[Restrictions] = None
) -> str:
    """Parse and expand `template` in one step."""
    return execute(parse(template), resolver, restrictions)


def expand_env(template: str, restrictions: Optional[Restrictions] = None) -> str:
    """Expand `template` against the process environment."""
    return execute(parse(template), EnvironmentResolver(), restrictions)
