"""Abstract syntax tree for the tally language.

```
<stmt>          ::= <binding_def> | <func_def> | <expr>
<binding_def>   ::= "let" <ws> <ident> <ws> "=" <ws> <expr>
<func_def>      ::= "fn" <ws> <ident> (<ws> <ident>)* <ws> "=>" <ws> <stmt>
<expr>          ::= <block> | <number> | <operation> | <func_call> | <binding_usage>
<block>         ::= "{" <ws> (<stmt> <ws>)* "}"
<operation>     ::= <expr> <ws> <operator> <ws> <expr>    ; one operator per operation, no precedence
<func_call>     ::= <ident> (<ws> <expr>)+
<binding_usage> ::= <ident>
<number>        ::= "-"? <digit>+
<operator>      ::= "+" | "-"
```

Nodes are immutable and compared structurally. str() of a node is source text that parses back to an equal node.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class Operator(Enum):
    """Binary operators, keyed by their source symbol."""
    ADD = "+"
    SUBTRACT = "-"

    def apply(self, left, right):
        if self is Operator.ADD:
            return left + right
        return left - right

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class NumberLiteral:
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class BindingUsage:
    """A bare name. Evaluates to a stored value, or calls a stored function with no arguments."""
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Operation:
    left: "Expression"
    right: "Expression"
    operator: Operator

    def __str__(self):
        return f"{self.left} {self.operator} {self.right}"


@dataclass(frozen=True)
class Block:
    statements: Tuple["Statement", ...] = ()

    def __str__(self):
        if not self.statements:
            return "{}"
        return "{\n" + "\n".join(str(stmt) for stmt in self.statements) + "\n}"


@dataclass(frozen=True)
class FunctionCall:
    callee: str
    arguments: Tuple["Expression", ...] = ()

    def __str__(self):
        return " ".join([self.callee] + [str(argument) for argument in self.arguments])


@dataclass(frozen=True)
class BindingDefinition:
    name: str
    value: "Expression"

    def __str__(self):
        return f"let {self.name} = {self.value}"


@dataclass(frozen=True)
class FunctionDefinition:
    """Stores a function under name. The body is not checked until the function is called."""
    name: str
    parameters: Tuple[str, ...]
    body: "Statement"

    def __str__(self):
        return " ".join(["fn", self.name, *self.parameters, "=>", str(self.body)])


@dataclass(frozen=True)
class ExpressionStatement:
    expression: "Expression"

    def __str__(self):
        return str(self.expression)


Expression = Union[NumberLiteral, BindingUsage, Operation, Block, FunctionCall]
Statement = Union[BindingDefinition, FunctionDefinition, ExpressionStatement]


def children(node):
    """Returns the direct sub nodes of node, in evaluation order."""
    if isinstance(node, Operation):
        return [node.left, node.right]
    if isinstance(node, Block):
        return list(node.statements)
    if isinstance(node, FunctionCall):
        return list(node.arguments)
    if isinstance(node, BindingDefinition):
        return [node.value]
    if isinstance(node, FunctionDefinition):
        return [node.body]
    if isinstance(node, ExpressionStatement):
        return [node.expression]
    return []


def label(node):
    """Short description of node itself, without its children."""
    if isinstance(node, Operation):
        return f"Operation(operator='{node.operator}')"
    if isinstance(node, FunctionCall):
        return f"FunctionCall(callee='{node.callee}')"
    if isinstance(node, BindingDefinition):
        return f"BindingDefinition(name='{node.name}')"
    if isinstance(node, FunctionDefinition):
        return f"FunctionDefinition(name='{node.name}', parameters={list(node.parameters)})"
    if isinstance(node, (NumberLiteral, BindingUsage)):
        return repr(node)
    return f"{type(node).__name__}()"


def display(node, indents=0):
    """Recursively displays a syntax tree with readable format.

    Format:
    <Node>(<fields>, nodes=[
        <Node>(<fields>, nodes=[
            ...
            <Node>(<fields>)  # <-- if node has no children
        ])
    ])
    """
    result = f"{'    ' * indents}{label(node)}"
    nodes = children(node)
    if nodes:
        result = result[:-1]  # reopen label's closing paren
        result += ("" if result.endswith("(") else ", ") + "nodes=["
        for sub_node in nodes:
            result += "\n" + display(sub_node, indents + 1) + ","
        result = result[:-1] + f"\n{'    ' * indents}])"
    return result
