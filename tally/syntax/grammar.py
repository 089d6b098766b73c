"""Recursive-descent parser for the tally language. See tally/syntax/ast.py for the grammar.

Each parse_* function takes source text and returns (remaining text, node), or raises a ParseError. Alternatives are
tried in a fixed order and the first success wins; if every alternative fails, the last failure is raised.

Operations are flat: `lhs op rhs` with a single operator, where neither side is itself an operation. Longer chains
have to be grouped with blocks, e.g. `{1 + 2} + 3`.
"""

from tally.lang.error import ParseError
from tally.syntax import cursor
from tally.syntax.ast import (Block, BindingDefinition, BindingUsage, ExpressionStatement, FunctionCall,
                              FunctionDefinition, NumberLiteral, Operation, Operator)


INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def first_success(parsers, s):
    """Returns the result of the first parser in parsers that accepts s."""
    error = None
    for parser in parsers:
        try:
            return parser(s)
        except ParseError as exc:
            error = exc
    raise error


def parse_number(s):
    s, literal = cursor.extract_number(s)
    value = int(literal)
    if not INT_MIN <= value <= INT_MAX:
        raise ParseError("number literal out of range: {}", literal)
    return s, NumberLiteral(value)


def parse_binding_usage(s):
    s, name = cursor.extract_ident(s)
    return s, BindingUsage(name)


def parse_block(s):
    s = cursor.tag("{", s)
    s, __ = cursor.extract_whitespace(s)

    s, statements = cursor.sequence(parse_statement, cursor.extract_whitespace, s)

    s, __ = cursor.extract_whitespace(s)
    s = cursor.tag("}", s)
    return s, Block(tuple(statements))


def parse_function_call(s):
    """A name followed by one or more arguments on the same line. A name with no arguments is a BindingUsage."""
    s, callee = cursor.extract_ident(s)
    s, spaces = cursor.extract_spaces(s)
    if not spaces:  # `x-1` subtracts, `x -1` calls x
        raise ParseError("expected arguments to '{}'", callee)

    s, arguments = cursor.sequence(parse_expression, cursor.extract_spaces, s)
    if not arguments:
        raise ParseError("expected arguments to '{}'", callee)
    return s, FunctionCall(callee, tuple(arguments))


def parse_non_operation(s):
    return first_success([parse_block, parse_number, parse_function_call, parse_binding_usage], s)


def parse_operator_and_right(s):
    """Parses the `<ws> op <ws> rhs` tail of an operation."""
    s, __ = cursor.extract_whitespace(s)

    s, symbol = cursor.extract_operator(s, [operator.value for operator in Operator])
    s, __ = cursor.extract_whitespace(s)

    s, right = parse_non_operation(s)
    return s, Operator(symbol), right


def parse_expression(s):
    """The left operand is parsed once; without an operator after it, it is the whole expression."""
    s, left = parse_non_operation(s)
    try:
        rest, operator, right = parse_operator_and_right(s)
    except ParseError:
        return s, left
    return rest, Operation(left, right, operator)


def parse_binding_definition(s):
    s = cursor.tag("let", s)
    s, __ = cursor.extract_whitespace1(s)

    s, name = cursor.extract_ident(s)
    s, __ = cursor.extract_whitespace(s)

    s = cursor.tag("=", s)
    s, __ = cursor.extract_whitespace(s)

    s, value = parse_expression(s)
    return s, BindingDefinition(name, value)


def parse_function_definition(s):
    s = cursor.tag("fn", s)
    s, __ = cursor.extract_whitespace1(s)

    s, name = cursor.extract_ident(s)
    s, __ = cursor.extract_whitespace(s)

    s, parameters = cursor.sequence(cursor.extract_ident, cursor.extract_whitespace, s)

    s = cursor.tag("=>", s)
    s, __ = cursor.extract_whitespace(s)

    s, body = parse_statement(s)
    return s, FunctionDefinition(name, tuple(parameters), body)


def parse_expression_statement(s):
    s, expression = parse_expression(s)
    return s, ExpressionStatement(expression)


def parse_statement(s):
    return first_success([parse_binding_definition, parse_function_definition, parse_expression_statement], s)


def parse(source):
    """Parses source as exactly one statement. Surrounding whitespace is ignored."""
    s, __ = cursor.extract_whitespace(source)
    s, stmt = parse_statement(s)

    s, __ = cursor.extract_whitespace(s)
    if s:
        raise ParseError("input was not consumed fully by parser")
    return stmt
