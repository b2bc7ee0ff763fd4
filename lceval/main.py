"""Uses the lceval interpreter to run files of lambda calculus statements or run in command-line mode. Also uses the
error handling context manager. Installed as the lceval console script.
"""

import argparse

from lceval.config import EvaluatorConfig, LcevalConfig, set_config, setup_logging
from lceval.lang.error import ErrorHandler
from lceval.lang.session import Session
from lceval.lang.shell import Shell


def main(argv=None):
    """Runs lceval interpreter."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lceval", description="Untyped lambda calculus interpreter")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--capture-avoiding", action="store_true",
                            help="rename bound variables instead of capturing free ones during substitution")
        parser.add_argument("--max-steps", type=int, default=None,
                            help="give up after this many beta-reductions per expression")
        parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG traces every reduction)")
        args = parser.parse_args(argv)

        config = LcevalConfig(EvaluatorConfig(args.capture_avoiding, args.max_steps), args.log_level)
        set_config(config)
        setup_logging(config.log_level)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, config=config.evaluator)
            sess.run()

            for result in sess.results:
                print(result.expr)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, config=config.evaluator)).cmdloop()


if __name__ == "__main__":
    main()
