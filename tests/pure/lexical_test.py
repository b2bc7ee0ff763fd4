import random
import unittest

from lceval.lang.error import TokenizerError
from lceval.pure.lexical import CLOSE_PAREN, IDENTIFIER, LAMBDA, OPEN_PAREN, PERIOD, Token, tokenize


def ident(name):
    return Token(IDENTIFIER, name)


class TokenizeTestCase(unittest.TestCase):

    def test_tokenize(self):
        cases = {
            "x": [ident("x")],
            "λx.x": [Token(LAMBDA), ident("x"), Token(PERIOD), ident("x")],
            "\\x.x": [Token(LAMBDA), ident("x"), Token(PERIOD), ident("x")],
            "(f x)": [Token(OPEN_PAREN), ident("f"), ident("x"), Token(CLOSE_PAREN)],
            "λx.(y z)": [Token(LAMBDA), ident("x"), Token(PERIOD), Token(OPEN_PAREN), ident("y"), ident("z"),
                         Token(CLOSE_PAREN)],
            "λ x .  y z \n\t": [Token(LAMBDA), ident("x"), Token(PERIOD), ident("y"), ident("z")],
            "foo_bar1 _x 42": [ident("foo_bar1"), ident("_x"), ident("42")],
            "xλy": [ident("xλy")],  # λ continues an identifier once one has started
            "x₀": [ident("x₀")],
            "": [],
            " \n ": [],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokenize(case), repr(case))

    def test_tokenize_invalid(self):
        should_raise = ["λx@x", "x = y", "x:y", "#", "x\ry", "λx.x;"]
        for case in should_raise:
            self.assertRaises(TokenizerError, tokenize, case)

    def test_tokenizer_error(self):
        with self.assertRaises(TokenizerError) as context:
            tokenize("λx@x")

        error = context.exception
        self.assertEqual("@", error.char)
        self.assertIn("@", str(error))
        self.assertEqual("λx@x", error.expr)
        self.assertEqual((2, 3), (error.start, error.end))

    def test_tokenize_total(self):
        alphabet = ["λ", "\\", ".", "(", ")", " ", "\t", "\n", "x", "y1", "_", "foo", "Z9"]
        rng = random.Random(0)
        for __ in range(200):
            case = "".join(rng.choice(alphabet) for __ in range(rng.randint(0, 30)))
            self.assertIsInstance(tokenize(case), list, repr(case))


class TokenTestCase(unittest.TestCase):

    def test_str(self):
        cases = {
            Token(LAMBDA): "λ",
            Token(PERIOD): ".",
            Token(OPEN_PAREN): "(",
            Token(CLOSE_PAREN): ")",
            ident("abc"): "abc",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(case))

    def test_value(self):
        self.assertEqual([None, "x", None, "x"], [token.value for token in tokenize("λx.x")])


if __name__ == '__main__':
    unittest.main()
