"""Error handling for lceval. Only GenericExceptions should be encountered during running: if another type of error
is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

The pure pipeline (tokenize, parse, evaluate) raises the subclasses below and never catches them itself: the first
error aborts the whole call and reaches the caller unchanged.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a lceval error/warning. Essentially just a
    wrapper around parse_args.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class TokenizerError(GenericException):
    """Raised when a character cannot begin any token. Only the character is named in the message; expr and start
    are kept so that ErrorHandler can underline it.
    """

    def __init__(self, char, expr=None, start=0):
        super().__init__("unexpected character '{}'", char)
        self.char = char

        if expr is not None:
            self.expr = expr
            self.start = start
            self.end = start + len(char)


class ParseError(GenericException):
    """Raised when the token sequence does not match the grammar. Tokens carry no position, so there is nothing to
    diagnose.
    """

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False)


class LambdaTypeError(GenericException):
    """Raised when something other than an abstraction is applied."""

    def __init__(self, term):
        super().__init__("expected function in application, got '{}'", str(term), diagnosis=False)
        self.term = term


class UnboundVariableError(GenericException):
    """Raised by strict environment lookups."""

    def __init__(self, name):
        super().__init__("unbound variable '{}'", name, diagnosis=False)
        self.name = name


class StepLimitError(GenericException):
    """Raised when evaluation performs more beta-reductions than it was allowed."""

    def __init__(self, max_steps):
        super().__init__("normal form not reached within {} beta-reductions", str(max_steps), diagnosis=False)
        self.max_steps = max_steps


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom lceval errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                col = line.find(error.expr) + error.start if error.expr in line else 0
                location = f"{file}:{line_num}:{col}: "
                break

        error_msg = colored(location, attrs=["bold"]) if location else ""
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # keep files, forget failed lines

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("normal form might exist, but maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
