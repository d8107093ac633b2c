import argparse
import logging
import os
import sys

from searcher.engine import run_search
from searcher.models import SearchOptions
from searcher.pattern import InvalidPatternError

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130

# Flags other grep-like tools (and test harnesses) pass that have no effect here
IGNORED_FLAGS = {"-r", "--with-filename", "--line-number", "--no-ignore"}
IGNORED_PREFIXES = ("--color=", "--exclude=")


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")

    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")

    return number

def build_arg_parser() -> argparse.ArgumentParser:
    # -h means --hidden, so the automatic help flag is replaced by --help only
    parser = argparse.ArgumentParser(
        prog="searcher",
        usage="searcher [OPTIONS] PATTERN [PATH ...]",
        description="Recursively search files for lines matching a regular expression.",
        add_help=False,
    )
    parser.add_argument("pattern", metavar="PATTERN", help="regular expression to search for")
    parser.add_argument("paths", metavar="PATH", nargs="*", help="files or directories to search")

    parser.add_argument("-A", "--after-context", type=_non_negative_int, default=0, metavar="N",
                        help="print N lines of trailing context")
    parser.add_argument("-B", "--before-context", type=_non_negative_int, default=0, metavar="N",
                        help="print N lines of leading context")
    parser.add_argument("-C", "--context", type=_non_negative_int, default=None, metavar="N",
                        help="print N lines of leading and trailing context")
    parser.add_argument("-c", "--color", action="store_true",
                        help="highlight matches in color")
    parser.add_argument("-h", "--hidden", action="store_true",
                        help="search hidden files and folders")
    parser.add_argument("-i", "--ignore-case", action="store_true",
                        help="case-insensitive search")
    parser.add_argument("--no-heading", action="store_true",
                        help="print filename for each match on same line")
    parser.add_argument("--debug", action="store_true",
                        help="log skipped files and other details to stderr")
    parser.add_argument("--help", action="help",
                        help="show this help message and exit")

    return parser

def strip_ignored_flags(argv: list[str]) -> list[str]:
    kept: list[str] = []
    for i, arg in enumerate(argv):
        if arg == "--":
            # Everything after "--" is a pattern or a path
            kept.extend(argv[i:])
            break
        if arg not in IGNORED_FLAGS and not arg.startswith(IGNORED_PREFIXES):
            kept.append(arg)

    return kept

def parse_options(argv: list[str]) -> tuple[argparse.Namespace, SearchOptions]:
    parser = build_arg_parser()
    args = parser.parse_args(strip_ignored_flags(argv))

    if not args.paths:
        parser.error("missing PATTERN or PATH")

    before = args.before_context
    after = args.after_context
    if args.context is not None:
        before = after = args.context

    options = SearchOptions(
        ignore_case=args.ignore_case,
        color=args.color,
        no_heading=args.no_heading,
        before=before,
        after=after,
        show_hidden=args.hidden,
    )

    return args, options

def _silence_stdout() -> None:
    # The reader went away; send whatever Python still wants to flush at exit to /dev/null
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())

def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args, options = parse_options(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        outcome = run_search(args.pattern, args.paths, options, sink=sys.stdout)
    except InvalidPatternError as e:
        print(f"searcher: {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED

    try:
        sys.stdout.flush()
    except BrokenPipeError:
        _silence_stdout()

    logging.debug(f"{outcome.lines_matched} matching lines in {outcome.files_matched} files")

    return EXIT_FOUND if outcome.found_any else EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
