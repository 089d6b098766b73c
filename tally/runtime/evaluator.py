"""Tree-walking evaluator. evaluate(node, env) runs any statement or expression against a mutable Environment and
returns a Number or UNIT. Errors are raised as EvaluationErrors and abort the rest of the evaluation.

Scoping:
    - blocks run in a child of the environment they appear in, so they can read outer names, and their own
      definitions disappear when the block ends
    - function bodies run in a child of the root environment: they see their parameters and the global names,
      but never the caller's local bindings
"""

from tally.lang.error import EvaluationError
from tally.syntax.ast import (Block, BindingDefinition, BindingUsage, ExpressionStatement, FunctionCall,
                              FunctionDefinition, NumberLiteral, Operation)
from tally.runtime.values import Number, UNIT


def evaluate(node, env):
    """Evaluates node (any Statement or Expression) in env."""
    try:
        evaluator = EVALUATORS[type(node)]
    except KeyError:
        raise TypeError(f"cannot evaluate {type(node).__name__}") from None
    return evaluator(node, env)


def evaluate_number(node, env):
    return Number(node.value)


def evaluate_binding_usage(node, env):
    """Looks up a value; if node names a function instead, calls it with no arguments."""
    try:
        return env.get_binding(node.name)
    except EvaluationError as error:
        try:
            env.get_func(node.name)
        except EvaluationError:
            raise error from None
    return call(node.name, [], env)


def evaluate_operation(node, env):
    left = evaluate(node.left, env)
    right = evaluate(node.right, env)
    return Number(node.operator.apply(left.value, right.value))


def evaluate_block(node, env):
    if not node.statements:
        return UNIT

    child = env.create_child()

    *init, last = node.statements
    for stmt in init:
        evaluate(stmt, child)
    return evaluate(last, child)


def evaluate_function_call(node, env):
    return call(node.callee, node.arguments, env)


def call(callee, arguments, env):
    """Calls the function stored as callee. arguments are evaluated left to right in env (the caller's scope) and
    bound by position; surplus arguments are dropped and missing ones stay unbound.
    """
    func = env.get_func(callee)
    values = [evaluate(argument, env) for argument in arguments]

    scope = env.root().create_child()
    for parameter, value in zip(func.parameters, values):
        scope.store_binding(parameter, value)
    return evaluate(func.body, scope)


def evaluate_binding_definition(node, env):
    env.store_binding(node.name, evaluate(node.value, env))
    return UNIT


def evaluate_function_definition(node, env):
    env.store_func(node.name, node.parameters, node.body)
    return UNIT


def evaluate_expression_statement(node, env):
    return evaluate(node.expression, env)


EVALUATORS = {
    NumberLiteral: evaluate_number,
    BindingUsage: evaluate_binding_usage,
    Operation: evaluate_operation,
    Block: evaluate_block,
    FunctionCall: evaluate_function_call,
    BindingDefinition: evaluate_binding_definition,
    FunctionDefinition: evaluate_function_definition,
    ExpressionStatement: evaluate_expression_statement,
}
