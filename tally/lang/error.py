"""Error handling for the tally language. Only GenericExceptions should be encountered during running: if another type
of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Parsing and evaluation fail with different subclasses (ParseError, EvaluationError) so that the user can tell which
phase rejected a line. Either way the first failure aborts the statement and nothing is retried.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a tally error. str() of the exception is the plain
    message; ErrorHandler re-renders it with the offending snippets in bold.
    """
    label = "error"

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = list(exprs)
        self.msg = msg.format(*self.exprs)
        self.internal = internal

        super().__init__(self.msg)

    def highlighted(self):
        """Returns self.msg with expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class ParseError(GenericException):
    """Malformed syntax. Raised before anything is evaluated, so the environment is never touched."""
    label = "parse error"


class EvaluationError(GenericException):
    """Failure while walking a parsed tree, e.g. an unresolved name."""
    label = "evaluation error"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report tally errors instead."""
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

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args."""
        warning = GenericException(*args, **kwargs)
        print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.highlighted())

    def throw(self, error):
        """Throws error using self.traceback. error must be a GenericException, and self.traceback must be a dict of
        file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.label}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.highlighted()
        print(error_msg)

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, forget the offending lines (no need if error is fatal)
            self.traceback[path] = (None, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
