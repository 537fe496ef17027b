"""Main entry point for the is command."""

import argparse
import logging
import sys
from typing import List, Tuple

from predicate import PredicateDispatcher, PredicateRegistry, PredicateSettings

from is_test import __version__


# Global options that consume the following token as their value
OPTIONS_WITH_VALUE = {"--timeout"}


def setup_logging(verbose: bool) -> None:
    """
    Configure logging on stderr so stdout stays clean for scripting.

    Args:
        verbose: Log at DEBUG level rather than WARNING
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def positive_seconds(value: str) -> float:
    """Argument type for timeouts given in seconds."""
    try:
        seconds = float(value)

    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid timeout: '{value}'") from e

    if not seconds > 0:
        raise argparse.ArgumentTypeError(f"timeout must be positive, got '{value}'")

    return seconds


def create_parser() -> argparse.ArgumentParser:
    """Create the parser for the global options that precede the category."""
    parser = argparse.ArgumentParser(
        prog="is",
        usage="%(prog)s [options] <category> <predicate> [operand ...]",
        description="A descriptive replacement for the test command. "
            "The answer is the exit status: 0 if the predicate holds, 1 if it does not, "
            "2 for usage errors and 3 for unexpected errors.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Categories:
  file, string, int, float, semver, env, net, system

Examples:
  %(prog)s file exists README.md
  %(prog)s string matches-regex "$name" '^v[0-9]+$'
  %(prog)s int in-range "$n" 1 10
  %(prog)s semver ge 1.10.0 1.9.3
  %(prog)s --timeout 1 net online
  %(prog)s --list                       # Show every predicate signature
        """
    )

    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('--verbose', '-v', action='store_true', help='Log evaluation details to stderr')
    parser.add_argument(
        '--timeout', type=positive_seconds, default=None, metavar='SECONDS',
        help='Timeout for network probes (default: %(default)s, meaning 3 seconds)'
    )
    parser.add_argument('--list', action='store_true', help='List every category and predicate, then exit')
    return parser


def split_global_options(argv: List[str]) -> Tuple[List[str], List[str]]:
    """
    Split the arguments into global options and the invocation.

    Global options must come before the category.  Everything from the category onward
    is returned untouched, so operands may themselves start with '-'.

    Args:
        argv: Arguments without the program name

    Returns:
        Tuple of (global option tokens, invocation tokens)
    """
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == "--":
            return argv[:index], argv[index + 1:]

        if not token.startswith("-") or token == "-":
            break

        index += 1
        if token in OPTIONS_WITH_VALUE and index < len(argv):
            index += 1

    return argv[:index], argv[index:]


def list_predicates(registry: PredicateRegistry) -> str:
    """Build the text printed by --list."""
    return "\n\n".join(category.describe() for category in registry.get_categories())


def main(argv: List[str] | None = None) -> int:
    """
    Run the is command.

    Args:
        argv: Arguments without the program name, defaults to sys.argv[1:]

    Returns:
        Process exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    global_tokens, invocation_tokens = split_global_options(argv)
    args = create_parser().parse_args(global_tokens)
    setup_logging(args.verbose)

    logger = logging.getLogger("is")

    try:
        settings = PredicateSettings.create_default(args.timeout)
        registry = PredicateRegistry.create_default(settings)

        if args.list:
            print(list_predicates(registry))
            return 0

        return PredicateDispatcher(registry).dispatch(invocation_tokens)

    except KeyboardInterrupt:
        return 130

    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.critical("Uncaught exception", exc_info=True)
        print(f"is: internal error: {str(e)}", file=sys.stderr)
        return PredicateDispatcher.EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
