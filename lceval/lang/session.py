"""Session control for lceval statements, either in command-line mode or file interpretation mode.

Statements are loosely defined as follows:

```
<definition> ::= <identifier> ":=" <λ-term>   ; evaluated immediately and bound in the session namespace
<expression> ::= <λ-term>                     ; evaluated when the session is run
<comment>    ::= ";;" <char>*
```

A line with more open than close parentheses continues onto the next line.
"""

from lceval.config import get_config
from lceval.lang.error import GenericException
from lceval.pure.environment import Environment
from lceval.pure.evaluator import evaluate, substitute
from lceval.pure.lexical import IDENTIFIER, tokenize
from lceval.pure.parser import parse


class Session:
    """Governs a lceval session, with control over the namespace of named definitions."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = ";;"
    DECLARE = ":="

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True, config=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.config = config if config is not None else get_config().evaluator

        self.namespace = Environment()  # root frame holding named definitions
        self.to_exec = {}               # dict of line num: (expr, LambdaTerm) to evaluate on run
        self.results = []

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            for expr, line_num in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but the returned flag will indicate whether a line continuation is necessary. Returns
        the (accumulated) line and that flag.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments
        line = line.strip()

        if exprs is not None:
            if add_to_prev and exprs:
                exprs[-1][0] = f"{exprs[-1][0]} {line}".rstrip()
                line = exprs[-1][0]
            elif line:
                exprs.append([line, line_num])

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Adds a statement to the current session. Definitions are evaluated right away, expressions are delayed
        until run is called.
        """
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        if Session.DECLARE in expr:
            self._define(expr)
        else:
            self.to_exec[line_num] = (expr, parse(expr))

        self.error_handler.remove_line(self.path)  # error was not raised

    def _define(self, expr):
        """Binds the value of a '<name> := <λ-term>' statement in the namespace."""
        if expr.count(Session.DECLARE) > 1:
            start = expr.rfind(Session.DECLARE)
            raise GenericException("'{}' contains illegal reserved ':='", expr, start=start, end=start + 2)

        lval, rval = expr.split(Session.DECLARE)

        tokens = tokenize(lval)
        if len(tokens) != 1 or tokens[0].kind != IDENTIFIER:
            raise GenericException("l-value of '{}' is not a valid variable", expr, end=expr.index(Session.DECLARE))
        name = tokens[0].value

        term = parse(rval)
        if name in term.free_variables():
            start = expr.index(Session.DECLARE) + 2
            raise GenericException("recursive definitions not supported", expr, start=start)

        if name in self.namespace:
            self.error_handler.warn("'{}' redefined", name, diagnosis=False)

        self.namespace.set(name, self._evaluate(term))

    def _evaluate(self, term):
        """Evaluates term with the named definitions substituted in. The reduction itself runs in an empty
        Environment, so a name that is free in a definition stays free even if it is defined later.
        """
        return evaluate(substitute(term, self.namespace, self.config), Environment(), self.config)

    def run(self):
        """Evaluates this session's pending expressions against the namespace and appends the results to
        self.results. Will raise any errors that are encountered.
        """
        for line_num, (expr, term) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                self.results.append(self._evaluate(term))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Pops the oldest result."""
        return self.results.pop(0)
