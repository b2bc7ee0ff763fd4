import unittest

from lceval.config import EvaluatorConfig
from lceval.lang.error import LambdaTypeError, StepLimitError
from lceval.pure.environment import Environment
from lceval.pure.evaluator import Evaluator, evaluate, substitute
from lceval.pure.parser import parse
from lceval.pure.term import Abstraction, Application, Variable


OMEGA = "(λx.(x x) λx.(x x))"


class EvaluateTestCase(unittest.TestCase):

    def test_evaluate(self):
        cases = {
            "x": Variable("x"),
            "λx.x": Abstraction("x", Variable("x")),
            "(λx.x y)": Variable("y"),
            "(λx.λy.(x y) a)": Abstraction("y", Application(Variable("a"), Variable("y"))),
            "((λx.λy.x a) b)": Variable("a"),
            "((λx.λy.y a) b)": Variable("b"),
            "(λf.(f a) λx.x)": Variable("a"),
            "(λx.(λy.y x) z)": Variable("z"),
            "(λx.λq.(z x) w)": Abstraction("q", Application(Variable("z"), Variable("w"))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(parse(case), Environment()), case)

    def test_evaluate_non_function(self):
        should_raise = ["(x y)", "((x y) z)", "(λx.(x y) z)", "((λx.x a) b)", "(λx.(z x) w)"]
        for case in should_raise:
            self.assertRaises(LambdaTypeError, evaluate, parse(case), Environment())

        with self.assertRaises(LambdaTypeError) as context:
            evaluate(parse("(x y)"), Environment())
        self.assertEqual(Variable("x"), context.exception.term)
        self.assertIn("expected function in application", str(context.exception))

    def test_evaluate_with_env(self):
        env = Environment()
        env.set("x", Variable("y"))
        env.set("I", parse("λz.z"))

        self.assertEqual(Variable("y"), evaluate(Variable("x"), env))
        self.assertEqual(Variable("w"), evaluate(parse("(I w)"), env))
        self.assertEqual(parse("λa.(y a)"), evaluate(parse("λa.(x a)"), env))
        self.assertEqual(Variable("y"), env.get("x"))  # evaluation never touches the caller's frame

    def test_default_env(self):
        self.assertEqual(Variable("y"), evaluate(parse("(λx.x y)")))

    def test_steps(self):
        evaluator = Evaluator(EvaluatorConfig())
        evaluator.evaluate(parse("((λx.λy.x a) b)"), Environment())
        self.assertEqual(2, evaluator.steps)

    def test_max_steps(self):
        config = EvaluatorConfig(max_steps=50)
        with self.assertRaises(StepLimitError) as context:
            evaluate(parse(OMEGA), Environment(), config)
        self.assertEqual(50, context.exception.max_steps)

        self.assertEqual(Variable("a"), evaluate(parse("((λx.λy.x a) b)"), Environment(), EvaluatorConfig(max_steps=2)))
        self.assertRaises(StepLimitError, evaluate, parse("((λx.λy.x a) b)"), Environment(), EvaluatorConfig(max_steps=1))

    def test_divergence(self):
        self.assertRaises(RecursionError, evaluate, parse(OMEGA), Environment(), EvaluatorConfig())

    def test_logs_reductions(self):
        with self.assertLogs("lceval.pure.evaluator", level="DEBUG") as logs:
            evaluate(parse("(λx.x y)"), Environment(), EvaluatorConfig())
        self.assertEqual(1, len(logs.output))
        self.assertIn("β: λx.x [x := y]", logs.output[0])


class CaptureTestCase(unittest.TestCase):
    """Substitution permits variable capture unless capture_avoiding is set."""

    def test_capture(self):
        cases = {
            "((λx.λx.x a) b)": (Variable("a"), Variable("b")),
            "(λx.λy.(x y) y)": (
                Abstraction("y", Application(Variable("y"), Variable("y"))),
                Abstraction("y₀", Application(Variable("y"), Variable("y₀")))
            ),
            "(λf.(λw.(f b) c) λz.w)": (Variable("c"), Variable("w")),
            "(λx.λy.(x y) a)": (
                Abstraction("y", Application(Variable("a"), Variable("y"))),
                Abstraction("y", Application(Variable("a"), Variable("y")))
            ),
        }
        for case, (captured, avoided) in cases.items():
            self.assertEqual(captured, evaluate(parse(case), Environment(), EvaluatorConfig()), case)
            self.assertEqual(avoided, evaluate(parse(case), Environment(), EvaluatorConfig(capture_avoiding=True)), case)

    def test_fresh_name_avoids_body(self):
        # y₀ already occurs in the body, so the renamed parameter has to skip it
        result = evaluate(parse("(λx.λy.(x (y y₀)) y)"), Environment(), EvaluatorConfig(capture_avoiding=True))
        self.assertEqual(parse("λy₁.(y (y₁ y₀))"), result)

    def test_substituted_free_names_stay_free(self):
        # a free name that arrives inside a substituted value must not be looked up again in an outer frame
        cases = {
            "(λz.((λz.z z) z) λy.z)": Variable("z"),
            "(λx.(λz.(z z) λx.z) y)": Variable("z"),
            "((λy.(y (y x)) λx.λz.(z y)) λz.z)": Variable("y"),
        }
        for case, expected in cases.items():
            result = evaluate(parse(case), Environment(), EvaluatorConfig(capture_avoiding=True))
            self.assertTrue(expected.alpha_equals(result), f"{case} gave {result}")


class SubstituteTestCase(unittest.TestCase):

    def test_substitute(self):
        env = Environment()
        env.set("y", Variable("z"))
        self.assertEqual(parse("λx.(x z)"), substitute(parse("λx.(x y)"), env, EvaluatorConfig()))
        self.assertEqual(parse("((λa.a z) z)"), substitute(parse("((λa.a y) y)"), env, EvaluatorConfig()))

    def test_substitute_does_not_reduce(self):
        self.assertEqual(parse("(λx.x y)"), substitute(parse("(λx.x y)"), Environment(), EvaluatorConfig()))

    def test_substitute_shadowed(self):
        env = Environment()
        env.set("x", Variable("a"))
        self.assertEqual(parse("λx.a"), substitute(parse("λx.x"), env, EvaluatorConfig()))
        self.assertEqual(parse("λx.x"), substitute(parse("λx.x"), env, EvaluatorConfig(capture_avoiding=True)))


if __name__ == '__main__':
    unittest.main()
