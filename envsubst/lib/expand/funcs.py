"""
String operators behind the substitution functions.

Each operator takes the resolved variable value plus its already expanded
arguments and returns the substituted text. They are pure functions; the
variable lookup, strict-mode checks and the default family (which needs the
resolver) live in `template.py`.

Patterns are shell globs:

- `*` matches any run of characters, including `/`
- `?` matches one character
- `[...]` matches a character class, `[!...]` or `[^...]` its complement
- a backslash makes the next character literal
"""

import re
from functools import lru_cache
from typing import Callable, Final, Optional

from envsubst.lib.errors import ExpansionError
from envsubst.lib.parse.node import FuncName

# Characters with a meaning of their own inside a regex character class.
_CLASS_SPECIAL: Final[re.Pattern[str]] = re.compile(r"[\\\[&~|]")


def glob_to_regex(pattern: str) -> str:
    """Translate a shell glob into an equivalent regular expression."""
    out: list[str] = []
    i: int = 0
    n: int = len(pattern)
    while i < n:
        ch = pattern[i]
        i += 1
        if ch == "*":
            # Collapse runs of stars; they match the same strings.
            while i < n and pattern[i] == "*":
                i += 1
            out.append(".*")
        elif ch == "?":
            out.append(".")
        elif ch == "\\" and i < n:
            out.append(re.escape(pattern[i]))
            i += 1
        elif ch == "[":
            end = _class_end(pattern, i)
            if end < 0:
                out.append(re.escape(ch))
                continue
            body = pattern[i:end]
            i = end + 1
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            body = _CLASS_SPECIAL.sub(r"\\\g<0>", body)
            out.append(f"[{'^' if negate else ''}{body}]")
        else:
            out.append(re.escape(ch))
    return "".join(out)


def _class_end(pattern: str, start: int) -> int:
    """Index of the `]` closing a class opened just before `start`, or -1."""
    i: int = start
    if i < len(pattern) and pattern[i] in ("!", "^"):
        i += 1
    # A leading ] is a literal member of the class.
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    return pattern.find("]", i)


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    return re.compile(glob_to_regex(pattern), re.DOTALL)


def _matches(pattern: re.Pattern[str], text: str) -> bool:
    return pattern.fullmatch(text) is not None


def to_len(value: str) -> str:
    """Length in characters."""
    return str(len(value))


def to_lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]


def to_lower(value: str) -> str:
    return value.lower()


def to_upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def to_upper(value: str) -> str:
    return value.upper()


def _to_int(text: str, what: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ExpansionError(f"invalid substring {what}: {text!r}") from None


def to_substr(value: str, offset: str, length: Optional[str] = None) -> str:
    """${param:offset} and ${param:offset:length}

    A negative offset counts back from the end of the value, a negative
    length stops that many characters before the end. Anything out of
    range yields the empty string.
    """
    size: int = len(value)
    start: int = _to_int(offset, "offset")
    if start < 0:
        start += size
    if start < 0 or start > size:
        return ""
    if length is None:
        return value[start:]

    count: int = _to_int(length, "length")
    end: int = size + count if count < 0 else min(start + count, size)
    if end <= start:
        return ""
    return value[start:end]


def trim_shortest_prefix(value: str, pattern: str) -> str:
    regex = compile_glob(pattern)
    for i in range(len(value) + 1):
        if _matches(regex, value[:i]):
            return value[i:]
    return value


def trim_longest_prefix(value: str, pattern: str) -> str:
    regex = compile_glob(pattern)
    for i in range(len(value), -1, -1):
        if _matches(regex, value[:i]):
            return value[i:]
    return value


def trim_shortest_suffix(value: str, pattern: str) -> str:
    regex = compile_glob(pattern)
    for i in range(len(value), -1, -1):
        if _matches(regex, value[i:]):
            return value[:i]
    return value


def trim_longest_suffix(value: str, pattern: str) -> str:
    regex = compile_glob(pattern)
    for i in range(len(value) + 1):
        if _matches(regex, value[i:]):
            return value[:i]
    return value


def replace_first(value: str, pattern: str, replacement: str = "") -> str:
    if not pattern:
        return value
    return compile_glob(pattern).sub(lambda _: replacement, value, count=1)


def replace_all(value: str, pattern: str, replacement: str = "") -> str:
    if not pattern:
        return value
    out: list[str] = []
    last: int = 0
    matched: bool = False
    for m in compile_glob(pattern).finditer(value):
        # An empty match right where the previous one ended is not a new match.
        if matched and m.start() == m.end() == last:
            continue
        out.append(value[last : m.start()])
        out.append(replacement)
        last = m.end()
        matched = True
    out.append(value[last:])
    return "".join(out)


def replace_prefix(value: str, pattern: str, replacement: str = "") -> str:
    if not pattern:
        return replacement + value
    regex = compile_glob(pattern)
    for i in range(len(value), -1, -1):
        if _matches(regex, value[:i]):
            return replacement + value[i:]
    return value


def replace_suffix(value: str, pattern: str, replacement: str = "") -> str:
    if not pattern:
        return value + replacement
    regex = compile_glob(pattern)
    for i in range(len(value) + 1):
        if _matches(regex, value[i:]):
            return value[:i] + replacement
    return value


# Operators whose result depends only on the value and their arguments.
STRING_FUNCS: Final[dict[FuncName, Callable[..., str]]] = {
    FuncName.LENGTH: to_len,
    FuncName.SUBSTRING: to_substr,
    FuncName.TRIM_PREFIX: trim_shortest_prefix,
    FuncName.TRIM_PREFIX_LONGEST: trim_longest_prefix,
    FuncName.TRIM_SUFFIX: trim_shortest_suffix,
    FuncName.TRIM_SUFFIX_LONGEST: trim_longest_suffix,
    FuncName.REPLACE: replace_first,
    FuncName.REPLACE_ALL: replace_all,
    FuncName.REPLACE_PREFIX: replace_prefix,
    FuncName.REPLACE_SUFFIX: replace_suffix,
    FuncName.LOWER_FIRST: to_lower_first,
    FuncName.LOWER: to_lower,
    FuncName.UPPER_FIRST: to_upper_first,
    FuncName.UPPER: to_upper,
}
