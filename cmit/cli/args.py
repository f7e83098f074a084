"""CLI Argument Parsing"""

import argparse
import argcomplete

from cmit import __version__
from cmit.llm import PROVIDER_NAMES


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number")
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive number")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cmit',
        description='Generate a commit message for staged changes, edit it, and commit',
        epilog='Example: git add -A && cmit'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation options
    parser.add_argument('-p', '--provider', type=str, choices=PROVIDER_NAMES, help='AI provider (none uses rule-based messages)')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name for the AI provider')
    parser.add_argument('--no-emoji', action='store_true', help='Do not prefix rule-based subjects with an emoji')

    # Editing options
    length = parser.add_mutually_exclusive_group()
    length.add_argument('--max-length', type=_positive_int, metavar='N', help='Reject messages longer than N characters')
    length.add_argument('--no-max-length', action='store_true', help='Do not limit message length')
    parser.add_argument('--no-edit', action='store_true', help='Commit the generated message without opening the editor')
    parser.add_argument('--dry-run', action='store_true', help='Print the generated message only, do not edit or commit')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show debug info (message source, timings)')

    # Setup/config
    parser.add_argument('--setup', action='store_true', help='Configure defaults')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
