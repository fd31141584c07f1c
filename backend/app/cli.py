"""
Soil Advisor CLI
================

Paste raw AI team output and see how it gets normalized.

HOW TO USE:
    soil-advisor-cli              # interactive: paste lines, type DONE
    soil-advisor-cli --strict     # only trust JSON objects
    cat advice.txt | soil-advisor-cli

In interactive mode:
    DONE = normalize everything pasted so far
    QUIT = exit
"""

import argparse
import sys
from typing import Optional, TextIO

from app.services import parse_advice_to_object


def render(raw: str, strict: bool = False) -> str:
    """Normalize raw AI output and format it as pretty JSON."""
    return parse_advice_to_object(raw, strict=strict).model_dump_json(indent=2)


class SoilAdviceRunner:
    """Line-buffering loop behind the interactive CLI."""

    def __init__(self, strict: bool = False, out: TextIO = sys.stdout):
        self.strict = strict
        self.out = out
        self.lines: list[str] = []

    def handle_line(self, line: str) -> bool:
        """
        Take one input line.

        Returns:
            False once the user asked to quit, True otherwise
        """
        command = line.strip().lower()
        if command == "done":
            print(render("\n".join(self.lines), strict=self.strict), file=self.out)
            self.lines = []
            print('\nPaste new AI output (multi-line). Type "DONE" when finished:', file=self.out)
        elif command == "quit":
            return False
        else:
            self.lines.append(line.rstrip("\r\n"))
        return True

    def run(self, stream: TextIO):
        print("🌱 Welcome to Soil Advisor!", file=self.out)
        print('Paste raw AI output (multi-line supported). Type "DONE" when finished:', file=self.out)
        for line in stream:
            if not self.handle_line(line):
                break
        print("Thank you for using Soil Advisor. Goodbye!", file=self.out)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="soil-advisor-cli",
        description="Normalize soil sensor AI output into seven advice fields."
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="only trust JSON that decodes to an object"
    )
    args = parser.parse_args(argv)

    if sys.stdin.isatty():
        SoilAdviceRunner(strict=args.strict).run(sys.stdin)
    else:
        print(render(sys.stdin.read(), strict=args.strict))
    return 0


if __name__ == "__main__":
    sys.exit(main())
