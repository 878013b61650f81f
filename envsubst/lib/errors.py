"""
Error hierarchy for template parsing and expansion.

Parse errors are raised by the parser on the first malformed token; no
partial tree is ever returned. Expansion errors are raised by the engine
and abort the whole expansion; no partial output is returned.

    EnvsubstError
    ├── ParseError
    │   ├── BadSubstitution
    │   ├── MissingClosingBrace
    │   ├── ParseVariableName
    │   ├── ParseFuncSubstitution
    │   └── ParseDefaultFunction
    └── ExpansionError
        ├── UnsetParameterError
        ├── UnsetVariableError
        ├── EmptyVariableError
        └── ResolverError
"""

from typing import Optional


class EnvsubstError(Exception):
    """Base class for every error raised by this package."""


class ParseError(EnvsubstError):
    """A template could not be parsed.

    Attributes:
        pos: Offset into the template where the error was detected
    """

    message: str = "parse error"

    def __init__(self, pos: Optional[int] = None) -> None:
        self.pos = pos
        if pos is None:
            super().__init__(self.message)
        else:
            super().__init__(f"{self.message} (at offset {pos})")


class BadSubstitution(ParseError):
    message = "bad substitution"


class MissingClosingBrace(ParseError):
    message = "missing closing brace"


class ParseVariableName(ParseError):
    message = "unable to parse variable name"


class ParseFuncSubstitution(ParseError):
    message = "unable to parse substitution within function"


class ParseDefaultFunction(ParseError):
    message = "unable to parse default function"


class ExpansionError(EnvsubstError):
    """A parsed template could not be expanded."""


class UnsetParameterError(ExpansionError):
    """Raised by ``${VAR:?word}`` when VAR is unset or empty.

    The evaluated word is the user-facing message.
    """

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        self.message = message or "parameter null or not set"
        super().__init__(f"{name}: {self.message}")


class UnsetVariableError(ExpansionError):
    """Raised in strict mode when a referenced variable is unset."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"variable not set (strict mode): {name}")


class EmptyVariableError(ExpansionError):
    """Raised in strict mode when a referenced variable is empty."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"variable is empty (strict mode): {name}")


class ResolverError(ExpansionError):
    """Wraps whatever the resolver raised while looking up a variable."""

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"failed to resolve {name}: {cause}")
