"""CLI Argument Parsing"""

import argparse
import argcomplete

from gemini_commit import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gcm',
        description='Suggest a commit message for staged changes using Gemini',
        epilog='Example: gcm (reads GEMINI_API_KEY, copies the message to the clipboard)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    parser.add_argument('api_key', nargs='?', default=None, metavar='API_KEY',
                        help='Gemini API key (default: $GEMINI_API_KEY)')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Gemini model name')

    # Output options
    parser.add_argument('--no-copy', action='store_true', help='Print message only, do not copy to clipboard')
    parser.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, tokens used, timings)')

    # Config / setup
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
