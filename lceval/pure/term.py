"""Pure lambda calculus terms.

Formally, pure lambda calculus can be defined as

```
<λ-term> ::= <var>                      ; "variable"
           | "λ" <var> "." <λ-term>     ; "abstraction"
           | "(" <λ-term> <λ-term> ")"  ; "application"
```

Terms are immutable trees: every variant is a frozen dataclass, so equality is structural (no alpha-equivalence, see
alpha_equals for that) and a subtree can be reused in another tree without copying it.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class LambdaTerm(ABC):
    """Represents a λ-term: variable, abstraction, or application."""
    SUBS = ["₀", "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈", "₉"]

    @property
    @abstractmethod
    def expr(self):
        """Canonical rendering: always λ (never backslash), applications always parenthesized."""

    @property
    @abstractmethod
    def nodes(self):
        """Children of this term, in order."""

    @abstractmethod
    def free_variables(self):
        """Frozenset of names occurring in this term with no enclosing binder of the same name."""

    @abstractmethod
    def alpha_equals(self, other, bound=None, other_bound=None, depth=0):
        """Whether or not two LambdaTerms are alpha-equivalent. bound (other_bound) maps each bound name of self
        (other) to the depth of its binder, so that two bound variables match iff they refer to binders at the same
        depth and two free variables match iff their names are equal.
        """

    def variables(self):
        """Every name occurring in this term, whether free, bound or binding."""
        names = set()
        for node in self.nodes:
            names |= node.variables()
        return frozenset(names)

    def display(self, indents=0):
        """Recursively displays LambdaTerm tree with readable format.

        Format:
        <LambdaTerm>(expr='<expr>', nodes=[
            <LambdaTerm>(expr='<expr>', nodes=[
                ...
                <LambdaTerm>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return self.expr


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Variable in lambda calculus: a name that refers to a bound or free identifier."""
    name: str

    @property
    def expr(self):
        return self.name

    @property
    def nodes(self):
        return ()

    def free_variables(self):
        return frozenset([self.name])

    def variables(self):
        return frozenset([self.name])

    def alpha_equals(self, other, bound=None, other_bound=None, depth=0):
        if not isinstance(other, Variable):
            return False

        bound = bound if bound is not None else {}
        other_bound = other_bound if other_bound is not None else {}
        return bound.get(self.name, self.name) == other_bound.get(other.name, other.name)

    @classmethod
    def subscript(cls, var, num):
        """Returns var with subscript of num."""
        return cls(var + "".join(LambdaTerm.SUBS[int(digit)] for digit in str(num)))

    @staticmethod
    def split(expr):
        """Splits expr into var and subscript (-1 if there is none)."""
        subscript = []
        while expr and expr[-1] in LambdaTerm.SUBS:
            subscript.insert(0, LambdaTerm.SUBS.index(expr[-1]))
            expr = expr[:-1]
        return expr, int("".join(str(sub) for sub in subscript)) if subscript else -1

    def fresh(self, used):
        """Returns a Variable that is like self but whose name isn't in used. Subscripts count up from the largest
        one already in use for the same base name.
        """
        var, __ = Variable.split(self.name)
        max_subscript = -1

        for name in used:
            other_var, subscript = Variable.split(name)
            if other_var == var and subscript > max_subscript:
                max_subscript = subscript

        return Variable.subscript(var, max_subscript + 1)


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """Abstraction: a one-parameter function, λparam.body."""
    param: str
    body: LambdaTerm

    @property
    def expr(self):
        return f"λ{self.param}.{self.body.expr}"

    @property
    def nodes(self):
        return Variable(self.param), self.body

    def free_variables(self):
        return self.body.free_variables() - {self.param}

    def alpha_equals(self, other, bound=None, other_bound=None, depth=0):
        if not isinstance(other, Abstraction):
            return False

        bound = {**(bound or {}), self.param: depth}
        other_bound = {**(other_bound or {}), other.param: depth}
        return self.body.alpha_equals(other.body, bound, other_bound, depth + 1)


@dataclass(frozen=True)
class Application(LambdaTerm):
    """Application of one λ-term to another."""
    function: LambdaTerm
    argument: LambdaTerm

    @property
    def expr(self):
        return f"({self.function.expr} {self.argument.expr})"

    @property
    def nodes(self):
        return self.function, self.argument

    def free_variables(self):
        return self.function.free_variables() | self.argument.free_variables()

    def alpha_equals(self, other, bound=None, other_bound=None, depth=0):
        if not isinstance(other, Application):
            return False

        return (self.function.alpha_equals(other.function, bound, other_bound, depth)
                and self.argument.alpha_equals(other.argument, bound, other_bound, depth))
