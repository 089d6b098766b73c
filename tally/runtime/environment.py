"""Scopes that map names to values or to stored functions.

Each scope holds a plain reference to its parent; nothing holds a reference to its children, so a child scope simply
goes away once the block or call that made it returns. Lookup starts at the innermost scope and the first scope that
knows a name decides what it is, so an inner binding shadows an outer function of the same name and vice versa.
"""

from dataclasses import dataclass
from typing import Tuple

from tally.lang.error import EvaluationError
from tally.runtime.values import Number
from tally.syntax.ast import Statement


@dataclass(frozen=True)
class Binding:
    value: Number


@dataclass(frozen=True)
class Function:
    parameters: Tuple[str, ...]
    body: Statement


class Environment:
    """A single scope in a chain of scopes."""

    def __init__(self, parent=None):
        self.named = {}       # dict of name: Binding/Function
        self.parent = parent  # None for the root scope

    def create_child(self):
        return Environment(parent=self)

    def root(self):
        """Returns the outermost scope of this chain."""
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def store_binding(self, name, value):
        self.named[name] = Binding(value)

    def store_func(self, name, parameters, body):
        self.named[name] = Function(tuple(parameters), body)

    def get_binding(self, name):
        """Returns the value bound to name. Fails if name is unknown or the nearest definition is a function."""
        entry = self._get_named(name)
        if not isinstance(entry, Binding):
            raise EvaluationError("binding with name '{}' does not exist", name)
        return entry.value

    def get_func(self, name):
        """Returns the Function stored under name. Fails if name is unknown or the nearest definition is a binding."""
        entry = self._get_named(name)
        if not isinstance(entry, Function):
            raise EvaluationError("function with name '{}' does not exist", name)
        return entry

    def _get_named(self, name):
        env = self
        while env is not None:
            if name in env.named:
                return env.named[name]
            env = env.parent
        return None

    def __repr__(self):
        return f"Environment(named={self.named}, parent={'None' if self.parent is None else '...'})"
