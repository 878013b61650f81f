"""
Variable resolvers for template expansion.

A resolver maps a variable name to its value, or `None` when the variable
is unset. Resolvers that also implement `assign` receive the write-back of
the `:=` and `=` operators, so later references in the same expansion see
the assigned word.

Implements:
- MappingResolver: a dict-backed store, writable by default
- EnvironmentResolver: the process environment with an override layer
- CallableResolver: adapts a plain `name -> value` function
"""

import os
from collections.abc import Mapping
from typing import Callable, Optional, Protocol, Self, Union, runtime_checkable


@runtime_checkable
class VariableResolver(Protocol):
    """Protocol every resolver implements."""

    def resolve(self: Self, name: str) -> Optional[str]:
        """Return the value of `name`, or None if it is unset."""
        ...


@runtime_checkable
class WritableResolver(VariableResolver, Protocol):
    """A resolver whose backing store accepts assignments."""

    def assign(self: Self, name: str, value: str) -> None:
        ...


class MappingResolver:
    """Resolve variables from a copy of a mapping.

    Attributes:
        writable: Whether `:=` and `=` assignments are kept
    """

    def __init__(
        self: Self, mapping: Optional[Mapping[str, str]] = None, writable: bool = True
    ) -> None:
        self._values: dict[str, str] = dict(mapping or {})
        self.writable: bool = writable

    def resolve(self: Self, name: str) -> Optional[str]:
        return self._values.get(name)

    def assign(self: Self, name: str, value: str) -> None:
        if self.writable:
            self._values[name] = value

    def as_dict(self: Self) -> dict[str, str]:
        return dict(self._values)


class EnvironmentResolver:
    """Resolve variables from the process environment.

    Overrides take precedence over the environment. Assignments land in the
    override layer; `os.environ` itself is never modified.
    """

    def __init__(
        self: Self,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        self._overrides: dict[str, str] = dict(overrides or {})

    def resolve(self: Self, name: str) -> Optional[str]:
        if name in self._overrides:
            return self._overrides[name]
        return self._environ.get(name)

    def assign(self: Self, name: str, value: str) -> None:
        self._overrides[name] = value


class CallableResolver:
    """Read-only resolver around a `name -> value` function."""

    def __init__(self: Self, func: Callable[[str], Optional[str]]) -> None:
        self._func = func

    def resolve(self: Self, name: str) -> Optional[str]:
        return self._func(name)


ResolverLike = Union[
    VariableResolver, Mapping[str, str], Callable[[str], Optional[str]]
]


def resolver_from(source: ResolverLike) -> VariableResolver:
    """Adapt a mapping or a plain function into a resolver.

    Mappings are copied, so assignments made during expansion never leak
    back into the caller's dict.

    Raises:
        TypeError: if `source` is none of the supported kinds
    """
    if isinstance(source, VariableResolver):
        return source
    if isinstance(source, Mapping):
        return MappingResolver(source)
    if callable(source):
        return CallableResolver(source)
    raise TypeError(f"Unsupported resolver type: {type(source).__name__}")
