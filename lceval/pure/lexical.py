"""Lexical analysis for pure lambda calculus: converts an expression into a flat list of Tokens in a single
left-to-right pass.

```
<lambda>      ::= "λ" | "\"
<period>      ::= "."
<open_paren>  ::= "("
<close_paren> ::= ")"
<identifier>  ::= (<alphanumeric> | "_")+   ; maximal munch
```

Space, tab and newline separate tokens and are otherwise ignored. Tokens carry no position.
"""

from dataclasses import dataclass
from typing import Optional

from lceval.lang.error import TokenizerError


LAMBDA = "<lambda>"
PERIOD = "<period>"
OPEN_PAREN = "<open_paren>"
CLOSE_PAREN = "<close_paren>"
IDENTIFIER = "<identifier>"

BUILTINS = {
    "λ": LAMBDA,
    "\\": LAMBDA,
    ".": PERIOD,
    "(": OPEN_PAREN,
    ")": CLOSE_PAREN
}
WHITESPACE = [" ", "\t", "\n"]


@dataclass(frozen=True)
class Token:
    """A single token. Only identifiers have a value."""
    kind: str
    value: Optional[str] = None

    def __str__(self):
        if self.kind == IDENTIFIER:
            return self.value
        return next(char for char, kind in BUILTINS.items() if kind == self.kind)  # "λ" comes before "\"


def is_identifier_char(char):
    """Whether or not char can be part of an identifier. Note that λ is alphabetic, so it continues an identifier
    that has already started even though it never starts one.
    """
    return char.isalnum() or char == "_"


def tokenize(expr):
    """Returns the list of Tokens in expr. Raises a TokenizerError on the first character that is neither whitespace
    nor the start of a token.
    """
    tokens = []
    idx = 0

    while idx < len(expr):
        char = expr[idx]

        if char in BUILTINS:
            tokens.append(Token(BUILTINS[char]))
            idx += 1

        elif char in WHITESPACE:
            idx += 1

        elif is_identifier_char(char):
            start = idx
            while idx < len(expr) and is_identifier_char(expr[idx]):
                idx += 1
            tokens.append(Token(IDENTIFIER, expr[start:idx]))

        else:
            raise TokenizerError(char, expr, idx)

    return tokens
