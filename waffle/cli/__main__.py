from __future__ import annotations

import argparse
import sys

from waffle.cli import generate_puzzle, validate_words

COMMANDS = {
    "generate": generate_puzzle.main,
    "validate-words": validate_words.main,
}


def main() -> int:
    parser = argparse.ArgumentParser(description="Waffle backend CLI")
    parser.add_argument("command", choices=sorted(COMMANDS), help="Command to execute")
    args, remaining = parser.parse_known_args()

    sys.argv = [args.command, *remaining]
    return COMMANDS[args.command]()


if __name__ == "__main__":
    raise SystemExit(main())
