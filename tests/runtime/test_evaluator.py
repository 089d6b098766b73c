import unittest

from tally.lang.error import EvaluationError
from tally.runtime.environment import Environment
from tally.runtime.evaluator import evaluate
from tally.runtime.values import Number, UNIT
from tally.syntax.ast import Block, BindingDefinition, BindingUsage, ExpressionStatement, NumberLiteral, Operation, \
    Operator
from tally.syntax.grammar import parse


def run(env, *sources):
    """Parses and evaluates each of sources in env, returning the last result."""
    result = None
    for source in sources:
        result = evaluate(parse(source), env)
    return result


class ArithmeticTestCase(unittest.TestCase):

    def test_operations(self):
        cases = {
            "1 + 2": 3,
            "1+1": 2,
            "100 - 30": 70,
            "10 - -5": 15,
            "-7 + 2": -5,
            "{1 + 2} - {10 - 4}": -3,
        }
        for case, result in cases.items():
            self.assertEqual(Number(result), run(Environment(), case), case)

    def test_wraparound(self):
        cases = {
            "2147483647 + 1": -2147483648,
            "-2147483648 - 1": 2147483647,
            "2147483647 + 2147483647": -2,
        }
        for case, result in cases.items():
            self.assertEqual(Number(result), run(Environment(), case), case)

    def test_left_evaluated_first(self):
        node = Operation(BindingUsage("missing"), BindingUsage("other"), Operator.ADD)
        with self.assertRaises(EvaluationError) as context:
            evaluate(node, Environment())
        self.assertIn("'missing'", str(context.exception))


class BindingTestCase(unittest.TestCase):

    def test_binding_definition(self):
        env = Environment()
        self.assertEqual(UNIT, run(env, "let x = 5"))
        self.assertEqual(Number(5), run(env, "x"))
        self.assertEqual(Number(6), run(env, "let y = x + 1", "y"))

    def test_undefined_binding(self):
        with self.assertRaises(EvaluationError) as context:
            run(Environment(), "nope")
        self.assertEqual("binding with name 'nope' does not exist", str(context.exception))

    def test_failed_definition_leaves_env(self):
        env = Environment()
        self.assertRaises(EvaluationError, run, env, "let x = y")
        self.assertEqual({}, env.named)

    def test_redefinition(self):
        env = Environment()
        self.assertEqual(Number(3), run(env, "let x = 1", "let x = x + 2", "x"))


class BlockTestCase(unittest.TestCase):

    def test_blocks(self):
        cases = {
            "{}": UNIT,
            "{ let a = 1 }": UNIT,
            "{ 1\n2 }": Number(2),
            "{\n    let a = 10\n    let b = a\n    b\n}": Number(10),
            "{ let a = 1\nlet b = 2\nlet c = 3 }": UNIT,
        }
        for case, result in cases.items():
            self.assertEqual(result, run(Environment(), case), case)

    def test_block_ast(self):
        block = Block((ExpressionStatement(NumberLiteral(100)),
                       ExpressionStatement(NumberLiteral(30)),
                       ExpressionStatement(Operation(NumberLiteral(100), NumberLiteral(30), Operator.SUBTRACT))))
        self.assertEqual(Number(70), evaluate(block, Environment()))

    def test_block_scope_ends(self):
        env = Environment()
        self.assertEqual(Number(1), run(env, "{ let inner = 1\ninner }"))
        self.assertRaises(EvaluationError, run, env, "inner")
        self.assertEqual({}, env.named)

    def test_block_sees_outer_bindings(self):
        env = Environment()
        self.assertEqual(Number(3), run(env, "let x = 2", "{ let y = 1\nx + y }"))

    def test_block_shadowing(self):
        env = Environment()
        self.assertEqual(Number(10), run(env, "let x = 1", "{ let x = 10\nx }"))
        self.assertEqual(Number(1), run(env, "x"))

    def test_block_error_rolls_back(self):
        env = Environment()
        self.assertRaises(EvaluationError, run, env, "{ let a = 1\nlet b = nope\na }")
        self.assertEqual({}, env.named)


class FunctionTestCase(unittest.TestCase):

    def test_definition_returns_unit(self):
        self.assertEqual(UNIT, run(Environment(), "fn add x y => x + y"))

    def test_call(self):
        env = Environment()
        self.assertEqual(Number(5), run(env, "fn add x y => x + y", "add 2 3"))
        self.assertEqual(Number(-1), run(env, "add 2 -3"))
        self.assertEqual(Number(15), run(env, "add {add 1 2} {10 + 2}"))

    def test_call_with_bindings(self):
        env = Environment()
        self.assertEqual(Number(9), run(env, "fn dec x => x - 1", "let ten = 10", "dec ten"))

    def test_zero_parameter_function_as_value(self):
        env = Environment()
        self.assertEqual(Number(5), run(env, "fn five => 5", "five"))
        self.assertEqual(Number(6), run(env, "five + 1"))

    def test_missing_argument_fails_at_usage(self):
        env = Environment()
        run(env, "fn add x y => x + y")
        with self.assertRaises(EvaluationError) as context:
            run(env, "add 1")
        self.assertEqual("binding with name 'y' does not exist", str(context.exception))

        self.assertEqual(Number(1), run(env, "fn first x y => x", "first 1"))

    def test_surplus_arguments_ignored(self):
        env = Environment()
        self.assertEqual(Number(7), run(env, "fn id x => x", "id 7 8"))

    def test_undefined_function(self):
        with self.assertRaises(EvaluationError) as context:
            run(Environment(), "nope 1")
        self.assertEqual("function with name 'nope' does not exist", str(context.exception))

    def test_binding_is_not_callable(self):
        env = Environment()
        run(env, "let x = 1")
        self.assertRaises(EvaluationError, run, env, "x 2")

    def test_body_not_checked_until_called(self):
        env = Environment()
        self.assertEqual(UNIT, run(env, "fn broken => nothing"))
        self.assertRaises(EvaluationError, run, env, "broken")

    def test_body_sees_root_not_caller(self):
        env = Environment()
        run(env, "let g = 100", "fn addg x => x + g", "fn peek => local")
        self.assertEqual(Number(101), run(env, "{ let g = 1\naddg 1 }"))
        self.assertRaises(EvaluationError, run, env, "{ let local = 1\npeek }")

    def test_arguments_evaluated_in_caller_scope(self):
        env = Environment()
        run(env, "fn id x => x")
        self.assertEqual(Number(4), run(env, "{ let local = 4\nid local }"))

    def test_function_defined_in_block(self):
        env = Environment()
        self.assertEqual(Number(3), run(env, "{ fn three => 3\nthree }"))
        self.assertRaises(EvaluationError, run, env, "three")

    def test_parameters_do_not_leak(self):
        env = Environment()
        run(env, "fn id x => x", "id 1")
        self.assertRaises(EvaluationError, run, env, "x")

    def test_recursion_reaches_python_limit(self):
        env = Environment()
        run(env, "fn loop => loop")
        self.assertRaises(RecursionError, run, env, "loop")

    def test_definition_inside_function_body_is_local(self):
        env = Environment()
        self.assertEqual(UNIT, run(env, "fn set x => let y = x", "set 1"))
        self.assertRaises(EvaluationError, run, env, "y")


class DirectEvaluationTestCase(unittest.TestCase):

    def test_binding_definition_node(self):
        env = Environment()
        self.assertEqual(UNIT, evaluate(BindingDefinition("whatever", NumberLiteral(-10)), env))
        self.assertEqual(Number(-10), env.get_binding("whatever"))

    def test_unknown_node(self):
        self.assertRaises(TypeError, evaluate, "1 + 1", Environment())


if __name__ == '__main__':
    unittest.main()
