"""Recursive-descent parser for pure lambda calculus.

```
<term>        ::= <abstraction> | <application> | <variable>
<abstraction> ::= <lambda> <identifier> <period> <term>
<application> ::= <open_paren> <term> <term> <close_paren>
<variable>    ::= <identifier>
```

Every parse function takes the remaining tokens and returns (term, remaining tokens): there is no cursor, the shrinking
remainder is the only form of progress. One token of lookahead is enough to pick a rule, so nothing is ever
backtracked. There is no precedence, associativity or implicit application: `f x y` has to be written `((f x) y)`.
"""

from lceval.lang.error import ParseError
from lceval.pure.lexical import CLOSE_PAREN, IDENTIFIER, LAMBDA, OPEN_PAREN, PERIOD, tokenize
from lceval.pure.term import Abstraction, Application, Variable


def parse(expr):
    """Parses expr into a LambdaTerm. All of expr must be consumed by a single term."""
    tokens = tokenize(expr)
    term, remaining = parse_term(tokens)

    if remaining:
        raise ParseError("unexpected tokens at end of input")
    return term


def parse_term(tokens):
    """Dispatches on the first token: <lambda> starts an abstraction, <open_paren> an application, and an identifier
    is a variable.
    """
    if not tokens:
        raise ParseError("unexpected end of input")

    token = tokens[0]
    if token.kind == LAMBDA:
        return parse_abstraction(tokens[1:])
    elif token.kind == OPEN_PAREN:
        return parse_application(tokens[1:])
    elif token.kind == IDENTIFIER:
        return Variable(token.value), tokens[1:]

    raise ParseError("unexpected token '{}'", str(token))


def parse_abstraction(tokens):
    """Parses the rest of an abstraction, after its <lambda>."""
    if not tokens or tokens[0].kind != IDENTIFIER:
        raise ParseError("expected parameter in abstraction")
    elif len(tokens) < 2 or tokens[1].kind != PERIOD:
        raise ParseError("expected '.' after parameter in abstraction")

    body, remaining = parse_term(tokens[2:])
    return Abstraction(tokens[0].value, body), remaining


def parse_application(tokens):
    """Parses the rest of an application, after its <open_paren>."""
    function, remaining = parse_term(tokens)
    argument, remaining = parse_term(remaining)

    if not remaining or remaining[0].kind != CLOSE_PAREN:
        raise ParseError("expected closing parenthesis")
    return Application(function, argument), remaining[1:]
