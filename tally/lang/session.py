"""Session control for the tally language: runs the interpreter either in command-line mode or file interpretation
mode. A session owns the root environment, so definitions made on one line stay visible on every later line.
"""

from collections import deque

from tally.lang.error import GenericException
from tally.runtime.environment import Environment
from tally.runtime.evaluator import evaluate
from tally.runtime.values import UNIT
from tally.syntax.ast import display
from tally.syntax.grammar import parse


class Session:
    """Governs a tally session, with control over the root scope."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = ";;"

    def __init__(self, error_handler, path, cmd_line, show_tree=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.show_tree = show_tree  # print each parsed tree before running it

        self.env = Environment()  # root scope, lives as long as the session
        self.to_exec = {}         # dict of line num: (line, statement) to execute
        self.results = deque()    # non-Unit values, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path)

            if add_to_prev:
                raise GenericException("'{}' ends inside an unclosed block", path)

            for expr in exprs:
                self.add(*expr)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev. A line continues onto the next one while it has unclosed braces.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments
        line = line.rstrip()

        if exprs is not None:
            if add_to_prev:
                prev_line, first_line_num = exprs.pop()
                line = prev_line + "\n" + line
                exprs.append((line, first_line_num))
            elif line.strip():
                exprs.append((line, line_num))

        return line, line.count("{") > line.count("}")

    def add(self, line, line_num):
        """Parses line and queues it for execution. Nothing is evaluated until run is called."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        stmt = parse(line)
        if self.show_tree:
            print(display(stmt))
        self.to_exec[line_num] = (line, stmt)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued statements in order against the root environment. Will raise the first
        error that is encountered.
        """
        for line_num, (line, stmt) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, line, line_num)

            try:
                value = evaluate(stmt, self.env)
            finally:
                if self.cmd_line:
                    del self.to_exec[line_num]

            if value != UNIT:
                self.results.append(value)
            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.popleft()
