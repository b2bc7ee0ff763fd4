"""Lambda calculus interpreter.

For reference:
- "Pure lambda calculus": lambda calculus as defined by Church, see lceval/pure
- "lceval statements": pure lambda calculus plus comments and named definitions, see lceval/lang

Basic program flow:
    1. Lexical analysis: splits an expression into tokens (pure/lexical.py)
    2. Parser: builds a LambdaTerm by recursive descent over the tokens (pure/parser.py)
    3. Evaluation: reduces the LambdaTerm, carrying bindings in an Environment (pure/evaluator.py)

Anything layered on top (sessions, the shell, the command line) should only need the names exported here.
"""

from lceval.pure.environment import Environment
from lceval.pure.evaluator import Evaluator, evaluate
from lceval.pure.lexical import Token, tokenize
from lceval.pure.parser import parse
from lceval.pure.term import Abstraction, Application, LambdaTerm, Variable

__all__ = [
    "Abstraction", "Application", "Environment", "Evaluator", "LambdaTerm", "Token", "Variable",
    "evaluate", "interpret", "parse", "tokenize"
]


def interpret(expr, env=None, config=None):
    """Parses and evaluates expr, returning the resulting LambdaTerm."""
    return evaluate(parse(expr), env if env is not None else Environment(), config)
