r"""
Recursive-descent parser for shell-style parameter expansion templates.

Turns a template such as

    "host=${HOST:-localhost} port=${PORT:-${DEFAULT_PORT}}"

into a `Tree` of immutable nodes. Each grammar production is one method;
before every scan the production puts the scanner into the `LexContext`
that fits its grammar position. Every decision needs at most one character
of lookahead.

Parsing is fail-fast: the first malformed token raises a `ParseError`
subclass and no tree is returned.

Example:
    tree = parse("Hello ${NAME:-world}")
    tree.execute({"NAME": "you"}.get)   # -> "Hello you"
"""

from typing import Optional, Self, TYPE_CHECKING

from envsubst.lib.errors import (
    BadSubstitution,
    MissingClosingBrace,
    ParseDefaultFunction,
    ParseError,
    ParseFuncSubstitution,
    ParseVariableName,
)
from envsubst.lib.log import LOG
from envsubst.lib.parse.node import (
    EMPTY,
    FuncName,
    FuncNode,
    Node,
    TextNode,
    list_join,
)
from envsubst.lib.parse.scanner import EOF, LexContext, Scanner, Token

if TYPE_CHECKING:
    from envsubst.lib.expand.resolvers import ResolverLike
    from envsubst.models.dataModel import Restrictions


class Tree:
    """A parsed template.

    Attributes:
        root: The root node; `EMPTY` for an empty template
        text: The template the tree was parsed from
    """

    def __init__(self: Self) -> None:
        self.root: Node = EMPTY
        self.text: str = ""
        # Parsing only; dropped once the parse finishes.
        self._scanner: Optional[Scanner] = None

    def parse(self: Self, text: str) -> Self:
        """Parse `text` into this tree.

        Raises:
            ParseError: on the first malformed token
        """
        self._scanner = Scanner(text)
        try:
            self.root = self._parse_any()
        except ParseError as e:
            LOG(f"Parse failed for template of {len(text)} characters: {e}")
            raise
        finally:
            self._scanner = None
        self.text = text
        return self

    def execute(
        self: Self,
        resolver: "ResolverLike",
        restrictions: Optional["Restrictions"] = None,
    ) -> str:
        """Expand this tree; see `envsubst.lib.expand.template.execute`."""
        from envsubst.lib.expand.template import execute

        return execute(self, resolver, restrictions)

    def __repr__(self: Self) -> str:
        return f"Tree({self.root!r})"

    @property
    def scanner(self: Self) -> Scanner:
        if self._scanner is None:
            raise RuntimeError("Tree is not being parsed")
        return self._scanner

    def _scan(self: Self, context: LexContext) -> Token:
        self.scanner.context = context
        return self.scanner.scan()

    def _parse_any(self: Self) -> Node:
        """Top level: alternating literal runs and substitutions.

        Collected in a loop and folded into a right-leaning `ListNode` chain,
        so long templates do not recurse once per fragment.
        """
        nodes: list[Node] = []
        while True:
            match self._scan(LexContext.TEXT):
                case Token.IDENT:
                    nodes.append(TextNode(self.scanner.string()))
                case Token.LBRACK:
                    nodes.append(self._parse_func())
                case Token.EOF:
                    break
                case _:
                    raise BadSubstitution(self.scanner.start)

        root: Node = EMPTY
        for node in reversed(nodes):
            root = list_join(node, root)
        return root

    def _parse_func(self: Self) -> FuncNode:
        """Parse a substitution; the `${` has already been consumed."""
        if self.scanner.peek() == "#":
            return self._parse_len_func()

        if self._scan(LexContext.NAME) != Token.IDENT:
            raise ParseVariableName(self.scanner.start)
        name: str = self.scanner.string()

        match self.scanner.peek():
            case ":":
                return self._parse_default_or_substr(name)
            case "=":
                return self._parse_default_func(name)
            case "," | "^":
                return self._parse_casing_func(name)
            case "/":
                return self._parse_replace_func(name)
            case "#":
                return self._parse_remove_func(name, LexContext.TRIM_PREFIX_OP)
            case "%":
                return self._parse_remove_func(name, LexContext.TRIM_SUFFIX_OP)

        if self._scan(LexContext.CLOSE) != Token.RBRACK:
            raise MissingClosingBrace(self.scanner.start)
        return FuncNode(FuncName.PLAIN, name)

    def _parse_param(self: Self, context: LexContext) -> Node:
        """Parse one function argument: a literal run or a nested substitution."""
        match self._scan(context):
            case Token.LBRACK:
                return self._parse_func()
            case Token.IDENT:
                return TextNode(self.scanner.string())
            case _:
                raise ParseFuncSubstitution(self.scanner.start)

    def _parse_op(self: Self, context: LexContext) -> FuncName:
        if self._scan(context) != Token.IDENT:
            raise BadSubstitution(self.scanner.start)
        return FuncName(self.scanner.string())

    def _parse_default_or_substr(self: Self, name: str) -> FuncNode:
        # VAR:-, VAR:=, VAR:?, VAR:+ are defaults; anything else after the
        # colon is a substring offset.
        self.scanner.read()
        ch: str = self.scanner.peek()
        self.scanner.unread()
        if ch in ("=", "-", "?", "+"):
            return self._parse_default_func(name)
        return self._parse_substr_func(name)

    def _parse_substr_func(self: Self, name: str) -> FuncNode:
        """${param:offset} and ${param:offset:length}"""
        op: FuncName = self._parse_op(LexContext.SUBSTR_OP)
        args: list[Node] = [self._parse_param(LexContext.OFFSET)]

        match self._scan(LexContext.SUBSTR_DELIM):
            case Token.RBRACK:
                return FuncNode(op, name, tuple(args))
            case Token.IDENT:
                pass
            case Token.EOF:
                raise MissingClosingBrace(self.scanner.start)
            case _:
                raise BadSubstitution(self.scanner.start)

        args.append(self._parse_param(LexContext.ARG))
        self._consume_rbrack()
        return FuncNode(op, name, tuple(args))

    def _parse_remove_func(self: Self, name: str, context: LexContext) -> FuncNode:
        """${param#word}, ${param##word}, ${param%word} and ${param%%word}"""
        op: FuncName = self._parse_op(context)
        pattern: Node = self._parse_param(LexContext.ARG)
        self._consume_rbrack()
        return FuncNode(op, name, (pattern,))

    def _parse_replace_func(self: Self, name: str) -> FuncNode:
        """${param/pattern/string} and its //, /# and /% variants"""
        op: FuncName = self._parse_op(LexContext.REPLACE_OP)
        args: list[Node] = [self._parse_param(LexContext.PATTERN)]

        if self._scan(LexContext.REPLACE_DELIM) != Token.IDENT:
            raise BadSubstitution(self.scanner.start)

        # An empty replacement string deletes the match.
        if self.scanner.peek() != "}":
            args.append(self._parse_param(LexContext.ARG))
        self._consume_rbrack()
        return FuncNode(op, name, tuple(args))

    def _parse_default_func(self: Self, name: str) -> FuncNode:
        """${param=word}, ${param:=word}, ${param:-word}, ${param:?word}, ${param:+word}

        The word may be any mix of literal runs and nested substitutions, so
        each fragment becomes one argument.
        """
        context: LexContext = LexContext.DEFAULT_OP
        if self.scanner.peek() == "=":
            context = LexContext.ASSIGN_OP
        if self._scan(context) != Token.IDENT:
            raise ParseDefaultFunction(self.scanner.start)
        op: FuncName = FuncName(self.scanner.string())

        args: list[Node] = []
        while self.scanner.peek() != "}":
            if self.scanner.peek() == EOF:
                raise MissingClosingBrace(self.scanner.pos)
            args.append(self._parse_param(LexContext.ARG))
        self._consume_rbrack()
        return FuncNode(op, name, tuple(args))

    def _parse_casing_func(self: Self, name: str) -> FuncNode:
        """${param,}, ${param,,}, ${param^} and ${param^^}"""
        op: FuncName = self._parse_op(LexContext.CASE_OP)
        self._consume_rbrack()
        return FuncNode(op, name)

    def _parse_len_func(self: Self) -> FuncNode:
        """${#param}"""
        if self._scan(LexContext.LEN_OP) != Token.IDENT:
            raise BadSubstitution(self.scanner.start)
        if self._scan(LexContext.NAME) != Token.IDENT:
            raise BadSubstitution(self.scanner.start)
        name: str = self.scanner.string()
        self._consume_rbrack()
        return FuncNode(FuncName.LENGTH, name)

    def _consume_rbrack(self: Self) -> None:
        """Consume the closing brace of a substitution."""
        match self._scan(LexContext.CLOSE):
            case Token.RBRACK:
                return
            case Token.EOF:
                raise MissingClosingBrace(self.scanner.start)
            case _:
                raise BadSubstitution(self.scanner.start)


def parse(text: str) -> Tree:
    """Parse a template string into a `Tree`.

    Args:
        text: Template containing literal text and `${...}` substitutions

    Returns:
        The parsed tree, ready for repeated expansion

    Raises:
        ParseError: BadSubstitution, MissingClosingBrace, ParseVariableName,
            ParseFuncSubstitution or ParseDefaultFunction
    """
    return Tree().parse(text)
