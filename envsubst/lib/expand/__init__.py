"""
Expansion package for envsubst templates.

Evaluates parsed trees against variable resolvers.
"""

from .resolvers import (
    CallableResolver,
    EnvironmentResolver,
    MappingResolver,
    VariableResolver,
    WritableResolver,
)
from .template import Evaluator, execute, expand, expand_env

__all__ = [
    "CallableResolver",
    "EnvironmentResolver",
    "MappingResolver",
    "VariableResolver",
    "WritableResolver",
    "Evaluator",
    "execute",
    "expand",
    "expand_env",
]
