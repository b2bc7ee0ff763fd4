"""Substitution-based evaluation of pure lambda calculus terms.

Rather than rewriting the tree one redex at a time, the evaluator carries an Environment of pending substitutions:

- a variable evaluates to its binding, or to itself if it is free
- an abstraction has the environment substituted into its body but is not reduced any further
- an application evaluates its function, then its argument, binds the parameter to the argument in a new frame and
  evaluates the body in that frame

By default substitution walks straight through nested abstractions, even ones that rebind a name being substituted, and
never renames anything, so variable capture is possible: `((λx.λx.x a) b)` evaluates to `a`. With
EvaluatorConfig.capture_avoiding a nested parameter shadows outer bindings and is renamed (x -> x₀, x₁, ...) when it
would capture a free variable of a substituted value. In that mode an applied function and its argument already have
the environment substituted into them, so the function's body is evaluated in a fresh Environment that binds only its
parameter.

Evaluation need not terminate. EvaluatorConfig.max_steps bounds the number of beta-reductions; without it a divergent
term runs until Python's recursion limit.
"""

import logging

from lceval.config import get_config
from lceval.lang.error import GenericException, LambdaTypeError, StepLimitError
from lceval.pure.environment import Environment
from lceval.pure.term import Abstraction, Application, Variable


logger = logging.getLogger(__name__)


class Evaluator:
    """Evaluates terms under one EvaluatorConfig. steps counts beta-reductions over every call made on this instance,
    so use a fresh Evaluator (or the module-level evaluate) per top-level evaluation.
    """

    def __init__(self, config=None):
        self.config = config if config is not None else get_config().evaluator
        self.steps = 0

    def evaluate(self, term, env):
        """Reduces term in env. Raises LambdaTypeError if a non-abstraction is applied."""
        if isinstance(term, Variable):
            value = env.get(term.name)
            return value if value is not None else term

        elif isinstance(term, Abstraction):
            return self.substitute(term, env)

        elif isinstance(term, Application):
            function = self.evaluate(term.function, env)
            if not isinstance(function, Abstraction):
                raise LambdaTypeError(function)

            argument = self.evaluate(term.argument, env)
            self._step(function, argument)

            # capture-avoiding values are already closed over env, so the body must not see env again
            child = Environment() if self.config.capture_avoiding else env.extend()
            child.set(function.param, argument)
            return self.evaluate(function.body, child)

        raise GenericException(f"cannot evaluate '{term!r}'", internal=True)

    def substitute(self, term, env):
        """Replaces every variable in term that is bound in env with its binding. Nothing is reduced."""
        if isinstance(term, Variable):
            value = env.get(term.name)
            return value if value is not None else term

        elif isinstance(term, Application):
            return Application(self.substitute(term.function, env), self.substitute(term.argument, env))

        elif isinstance(term, Abstraction):
            if not self.config.capture_avoiding:
                return Abstraction(term.param, self.substitute(term.body, env))
            return self._substitute_abstraction(term, env)

        raise GenericException(f"cannot substitute into '{term!r}'", internal=True)

    def _substitute_abstraction(self, term, env):
        """Capture-avoiding substitution into an abstraction: the parameter hides outer bindings of the same name and
        is renamed if it occurs free in a value that is substituted into the body.
        """
        incoming = set()
        for name in term.body.free_variables() - {term.param}:
            value = env.get(name)
            if value is not None:
                incoming |= value.free_variables()

        param = term.param
        if param in incoming:
            used = incoming | term.body.variables() | {param}
            param = Variable(param).fresh(used).name
            logger.debug("α: %s -> %s", term.param, param)

        child = env.extend()
        child.set(term.param, Variable(param))
        return Abstraction(param, self.substitute(term.body, child))

    def _step(self, function, argument):
        self.steps += 1

        max_steps = self.config.max_steps
        if max_steps is not None and self.steps > max_steps:
            raise StepLimitError(max_steps)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("β: %s [%s := %s]", function.expr, function.param, argument.expr)


def evaluate(term, env=None, config=None):
    """Evaluates term in env (a new, empty Environment if None)."""
    return Evaluator(config).evaluate(term, env if env is not None else Environment())


def substitute(term, env, config=None):
    """Substitutes env into term without reducing it."""
    return Evaluator(config).substitute(term, env)
