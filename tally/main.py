"""Runs the tally interpreter on a .tally file, or in command-line mode. Also uses the error handling context manager.
Installed as the `tally` script.
"""

import argparse

from tally.lang.error import ErrorHandler
from tally.lang.session import Session
from tally.lang.shell import Shell


def main(argv=None):
    """Runs tally interpreter."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="tally")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--tree", help="print the syntax tree of each statement before running it",
                            action="store_true")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, show_tree=args.tree)
            sess.run()

            for value in sess.results:
                print(value)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_tree=args.tree)).cmdloop()


if __name__ == "__main__":
    main()
