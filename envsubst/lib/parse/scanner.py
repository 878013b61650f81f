r"""
Lexical scanner for template parsing.

The scanner has no fixed automaton. Before every call to `scan()` the parser
selects a `LexContext` for the current grammar position; the `CONTEXTS`
table maps that context to:

- an acceptance predicate deciding which characters belong to the token,
- a `ScanMode` flag set deciding which token kinds are legal,
- the sequences a backslash may escape at this position.

Outside substitutions a backslash only escapes a `$` that would otherwise
open `${`. Inside substitutions every operator and delimiter character can
be escaped, so `${VAR/a\/b/c}` matches the literal pattern `a/b`.
"""

from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Callable, Final, Sequence

EOF: Final[str] = ""

# Every character with a meaning somewhere inside ${...}
ESCAPE_ALL: Final[tuple[str, ...]] = tuple("\\${}:/#%,^=-?+")
ESCAPE_DOLLAR: Final[tuple[str, ...]] = ("${",)

AcceptFunc = Callable[[str, Sequence[str]], bool]


class Token(Enum):
    ILLEGAL = auto()
    EOF = auto()
    IDENT = auto()
    LBRACK = auto()
    RBRACK = auto()


class ScanMode(Flag):
    NONE = 0
    IDENT = auto()
    LBRACK = auto()
    RBRACK = auto()
    ESCAPE = auto()


def accept_any(ch: str, token: Sequence[str]) -> bool:
    return True


def accept_ident(ch: str, token: Sequence[str]) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def accept_not_closing(ch: str, token: Sequence[str]) -> bool:
    return ch != "}"


def reject_colon_close(ch: str, token: Sequence[str]) -> bool:
    return ch not in ":}"


def accept_not_slash(ch: str, token: Sequence[str]) -> bool:
    return ch not in "/}"


def accept_one(expected: str) -> AcceptFunc:
    """Accept exactly one `expected` character."""

    def accept(ch: str, token: Sequence[str]) -> bool:
        return not token and ch == expected

    return accept


def accept_doubled(expected: str) -> AcceptFunc:
    """Accept `expected` once or twice, e.g. `#` and `##`."""

    def accept(ch: str, token: Sequence[str]) -> bool:
        return len(token) < 2 and ch == expected

    return accept


def accept_default_op(ch: str, token: Sequence[str]) -> bool:
    if not token:
        return ch == ":"
    return len(token) == 1 and ch in "-=?+"


def accept_casing_op(ch: str, token: Sequence[str]) -> bool:
    if not token:
        return ch in ",^"
    return len(token) == 1 and ch == token[0]


def accept_replace_op(ch: str, token: Sequence[str]) -> bool:
    if not token:
        return ch == "/"
    return len(token) == 1 and ch in "/#%"


class LexContext(Enum):
    """Grammar positions the parser can put the scanner in."""

    TEXT = auto()
    NAME = auto()
    CLOSE = auto()
    LEN_OP = auto()
    DEFAULT_OP = auto()
    ASSIGN_OP = auto()
    CASE_OP = auto()
    TRIM_PREFIX_OP = auto()
    TRIM_SUFFIX_OP = auto()
    REPLACE_OP = auto()
    REPLACE_DELIM = auto()
    SUBSTR_OP = auto()
    SUBSTR_DELIM = auto()
    OFFSET = auto()
    PATTERN = auto()
    ARG = auto()


@dataclass(frozen=True)
class ContextSpec:
    accept: AcceptFunc
    mode: ScanMode
    escapes: tuple[str, ...] = ()


_ARG_MODE: Final[ScanMode] = ScanMode.IDENT | ScanMode.LBRACK | ScanMode.ESCAPE

CONTEXTS: Final[dict[LexContext, ContextSpec]] = {
    LexContext.TEXT: ContextSpec(accept_any, _ARG_MODE, ESCAPE_DOLLAR),
    LexContext.NAME: ContextSpec(accept_ident, ScanMode.IDENT),
    LexContext.CLOSE: ContextSpec(accept_ident, ScanMode.RBRACK),
    LexContext.LEN_OP: ContextSpec(accept_one("#"), ScanMode.IDENT),
    LexContext.DEFAULT_OP: ContextSpec(accept_default_op, ScanMode.IDENT),
    LexContext.ASSIGN_OP: ContextSpec(accept_one("="), ScanMode.IDENT),
    LexContext.CASE_OP: ContextSpec(accept_casing_op, ScanMode.IDENT),
    LexContext.TRIM_PREFIX_OP: ContextSpec(accept_doubled("#"), ScanMode.IDENT),
    LexContext.TRIM_SUFFIX_OP: ContextSpec(accept_doubled("%"), ScanMode.IDENT),
    LexContext.REPLACE_OP: ContextSpec(accept_replace_op, ScanMode.IDENT),
    LexContext.REPLACE_DELIM: ContextSpec(accept_one("/"), ScanMode.IDENT),
    LexContext.SUBSTR_OP: ContextSpec(accept_one(":"), ScanMode.IDENT),
    LexContext.SUBSTR_DELIM: ContextSpec(
        accept_one(":"), ScanMode.IDENT | ScanMode.RBRACK
    ),
    LexContext.OFFSET: ContextSpec(reject_colon_close, _ARG_MODE, ESCAPE_ALL),
    LexContext.PATTERN: ContextSpec(accept_not_slash, _ARG_MODE, ESCAPE_ALL),
    LexContext.ARG: ContextSpec(accept_not_closing, _ARG_MODE, ESCAPE_ALL),
}


class Scanner:
    """Cursor over a template string.

    Attributes:
        start: Offset where the most recent token began
    """

    def __init__(self, text: str) -> None:
        self._text: str = text
        self._pos: int = 0
        self._width: int = 0
        self._buf: list[str] = []
        self.start: int = 0
        self.context = LexContext.TEXT

    @property
    def context(self) -> LexContext:
        return self._context

    @context.setter
    def context(self, context: LexContext) -> None:
        spec = CONTEXTS[context]
        self._context = context
        self._accept = spec.accept
        self._mode = spec.mode
        self._escapes = spec.escapes

    @property
    def pos(self) -> int:
        return self._pos

    def read(self) -> str:
        """Consume and return the next character, or EOF."""
        if self._pos >= len(self._text):
            self._width = 0
            return EOF
        ch = self._text[self._pos]
        self._pos += 1
        self._width = 1
        return ch

    def unread(self) -> None:
        """Step back over the character returned by the last `read()`."""
        self._pos -= self._width
        self._width = 0

    def peek(self) -> str:
        """Return the next character without consuming it."""
        if self._pos >= len(self._text):
            return EOF
        return self._text[self._pos]

    def string(self) -> str:
        """Text covered by the last IDENT token, escapes removed."""
        return "".join(self._buf)

    def scan(self) -> Token:
        self.start = self._pos
        self._buf = []
        ch = self.read()
        if ch == EOF:
            return Token.EOF
        if self._scan_lbrack(ch):
            return Token.LBRACK
        if self._scan_rbrack(ch):
            return Token.RBRACK
        if self._scan_ident(ch):
            return Token.IDENT
        self.unread()
        return Token.ILLEGAL

    def _scan_lbrack(self, ch: str) -> bool:
        if ScanMode.LBRACK in self._mode and ch == "$" and self.peek() == "{":
            self.read()
            return True
        return False

    def _scan_rbrack(self, ch: str) -> bool:
        return ScanMode.RBRACK in self._mode and ch == "}"

    def _scan_ident(self, ch: str) -> bool:
        if ScanMode.IDENT not in self._mode or not self._take(ch):
            return False
        while True:
            ch = self.read()
            if ch == EOF:
                break
            if ScanMode.LBRACK in self._mode and ch == "$" and self.peek() == "{":
                self.unread()
                break
            if not self._take(ch):
                self.unread()
                break
        return True

    def _take(self, ch: str) -> bool:
        """Append `ch` (or the character it escapes) to the current token."""
        if ScanMode.ESCAPE in self._mode and ch == "\\" and self._escapable():
            self._buf.append(self.read())
            return True
        if self._accept(ch, self._buf):
            self._buf.append(ch)
            return True
        return False

    def _escapable(self) -> bool:
        return any(self._text.startswith(seq, self._pos) for seq in self._escapes)
