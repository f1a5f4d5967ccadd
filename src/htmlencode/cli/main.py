"""Main CLI entry point for the htmlencode command-line tool.

Reads standard input, writes standard output, and reports problems on
standard error. Exit status is 0 on success, 1 on a bad option or
configuration, 1 on a malformed entity while decoding and 130 when
interrupted.
"""

import argparse
import os
import re
import sys
import uuid
from pathlib import Path
from typing import BinaryIO, List, NoReturn, Optional

from htmlencode import __version__
from htmlencode.codec import MalformedEntityError, transcode
from htmlencode.shared.config import ConfigError, TranscodeConfig
from htmlencode.shared.logging import configure_logging, get_logger

PROG = "htmlencode"

USAGE = (
    "Usage: htmlencode [OPTION]\n"
    "Translate to and from HTML entity encoding.\n"
    "Reads from standard input, writes to standard output.\n"
    "\n"
    "  -a encode all characters\n"
    "  -b do not automatically encode non printable (i.e. binary) characters\n"
    "  -c specify a different set of special characters when encoding\n"
    "  -d decode data\n"
    "  -l encode input line by line\n"
    "  -n do not output the trailing newline when encoding\n"
    "  -x use hexadecimal entities (&#xHH;) instead of decimal (&#NNN;)\n"
    "\n"
    "  --config FILE  read default settings from a JSON file\n"
    "  --verbose      log debug information to standard error\n"
    "  --quiet        log errors only\n"
    "  --version      display version information and exit\n"
    "\n"
    "  -h display this help and exit\n"
)

_MISSING_ARGUMENT = re.compile(r"argument (-[^/:\s]+)\S*: expected one argument")
_IGNORED_ARGUMENT = re.compile(r"ignored explicit argument ['\"](.)")

# Short flags that take no argument, and the one that does
_SHORT_FLAGS = "abdhlnx"
_CHARS_FLAG = "c"


class UsageError(ConfigError):
    """Exception raised for command-line arguments that cannot be parsed."""

    def __init__(self, message: str, show_usage: bool = True):
        super().__init__(message)
        self.show_usage = show_usage


class OptionParser(argparse.ArgumentParser):
    """Argument parser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        match = _MISSING_ARGUMENT.search(message)
        if match:
            raise UsageError(
                f"missing argument for option {match.group(1)}", show_usage=False
            )
        match = _IGNORED_ARGUMENT.search(message)
        if match:
            # A grouped flag such as -aq names the unknown letter
            raise UsageError(f"unrecognized option `-{match.group(1)}'")
        raise UsageError(message)


def create_argument_parser() -> OptionParser:
    """Create the main argument parser.

    Flag values default to None so that only options given on the command
    line override a configuration file.
    """
    parser = OptionParser(prog=PROG, add_help=False, allow_abbrev=False)

    parser.add_argument(
        "-a", "--all", dest="encode_all", action="store_true", default=None,
        help="encode all characters"
    )
    parser.add_argument(
        "-b", "--no-binary", dest="encode_binary", action="store_false", default=None,
        help="do not automatically encode non printable characters"
    )
    parser.add_argument(
        "-c", "--chars", dest="special_chars", metavar="SET",
        help="set of special characters to encode"
    )
    parser.add_argument(
        "-d", "--decode", dest="decode", action="store_true", default=None,
        help="decode data"
    )
    parser.add_argument(
        "-l", "--lines", dest="line_mode", action="store_true", default=None,
        help="encode input line by line"
    )
    parser.add_argument(
        "-n", "--no-newline", dest="suppress_newline", action="store_true",
        default=None, help="do not output the trailing newline when encoding"
    )
    parser.add_argument(
        "-x", "--hex", dest="use_hex", action="store_true", default=None,
        help="use hexadecimal entities"
    )
    parser.add_argument(
        "-h", "--help", dest="help", action="store_true",
        help="display this help and exit"
    )

    parser.add_argument("--config", type=Path, help="JSON configuration file")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", action="store_true", help="Quiet output")
    parser.add_argument("--version", action="store_true", help="Show version")

    return parser


def attach_option_values(argv: List[str]) -> List[str]:
    """Bind the word after a trailing ``-c`` to it, whatever it looks like.

    argparse refuses a value that starts with ``-``, while a character set
    such as ``-<`` is ordinary input. The word following ``-c``, ``--chars``
    or a flag group ending in ``c`` (``-nc``) is rewritten to the
    ``--chars=SET`` form so it is always taken as the set.
    """
    result: List[str] = []
    index = 0
    while index < len(argv):
        word = argv[index]
        index += 1
        if word == "--":
            result.extend(argv[index - 1:])
            break

        flags = None
        if word == "--chars":
            flags = ""
        elif (
            word.startswith("-") and not word.startswith("--")
            and word.endswith(_CHARS_FLAG)
            and all(letter in _SHORT_FLAGS for letter in word[1:-1])
        ):
            flags = word[1:-1]

        if flags is None or index >= len(argv):
            result.append(word)
            continue

        if flags:
            result.append(f"-{flags}")
        result.append(f"--chars={argv[index]}")
        index += 1
    return result


def parse_arguments(
    parser: argparse.ArgumentParser,
    argv: Optional[List[str]] = None
) -> argparse.Namespace:
    """Parse the command line, rejecting unknown options and operands.

    Raises:
        UsageError: For an unrecognized option, a positional argument or a
            missing option argument
    """
    if argv is None:
        argv = sys.argv[1:]
    args, extras = parser.parse_known_args(attach_option_values(argv))
    if extras:
        raise UsageError(f"unrecognized option `{_unknown_option(extras[0])}'")
    return args


def _unknown_option(word: str) -> str:
    if word.startswith("-") and not word.startswith("--"):
        for letter in word[1:]:
            if letter not in _SHORT_FLAGS + _CHARS_FLAG:
                return f"-{letter}"
    return word


def resolve_config(args: argparse.Namespace) -> TranscodeConfig:
    """Build the configuration from defaults, config file and flags.

    Raises:
        ConfigError: If the configuration file is unreadable or invalid
    """
    base = TranscodeConfig.from_file(args.config) if args.config else None

    options = vars(args).copy()
    if options.get("special_chars") is not None:
        # Raw argument bytes, as the shell passed them
        options["special_chars"] = os.fsencode(options["special_chars"])

    return TranscodeConfig.from_options(options, base)


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None
) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    try:
        args = parse_arguments(parser, argv)
    except UsageError as e:
        print(f"{e}\n", file=sys.stderr)
        if e.show_usage:
            sys.stderr.write(USAGE)
        return 1

    if args.help:
        sys.stdout.write(USAGE)
        return 0
    if args.version:
        print(f"{PROG} {__version__}")
        return 0

    configure_logging(verbose=args.verbose, quiet=args.quiet)
    correlation_id = uuid.uuid4().hex[:8]
    logger = get_logger(__name__, correlation_id, "cli")

    try:
        config = resolve_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    source = stdin if stdin is not None else sys.stdin.buffer
    sink = stdout if stdout is not None else sys.stdout.buffer

    try:
        metrics = transcode(source, sink, config, correlation_id)
    except MalformedEntityError as e:
        print(e, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT

    logger.info(
        f"{metrics.mode.capitalize()}d {metrics.bytes_read} bytes into "
        f"{metrics.bytes_written} bytes",
        extra=metrics.to_dict()
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
