"""Handles interactive/command-line mode for the tally interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """tally interpreter shell."""
    intro = "tally interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used while a block is still open
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def onecmd(self, line):
        """While a block is open every line belongs to it, even one that reads like a shell command."""
        if self._tmp_line and line != "EOF":
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary tally statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if self._tmp_line:
                line = self._tmp_line + "\n" + line
            line, add_to_prev = self.sess.preprocess_line(line, self.line_num, False)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            if not line.strip():
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the tally interpreter!\n\n"
              "tally is a tiny expression language over 32-bit integers. It supports '+' and '-',\n"
              "immutable bindings, blocks and single-expression functions.\n\n"
              "Try it out by typing 'let x = 5', then 'x + 1'. Functions are defined with\n"
              "'fn add a b => a + b' and called with 'add 2 3'. A block such as '{ let y = 2\n"
              "y - 1 }' evaluates to its last statement; its bindings end with the block.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit("")

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn("'exit' takes no arguments, ignoring '{}'", arg)
        return True
