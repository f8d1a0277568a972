"""
Savefile Formatter

Writes a Node tree back out as savefile text. This is the inverse of the
parser: parsing the output yields a tree equal to the input.

Layout:
- Properties first, then children, one item per line
- A child without children of its own goes on one line:
      BEGIN key k1 v1 k2 v2  END
- A child with children is written as an indented block:
      BEGIN key
          ...
      END

Usage:
    python -m prison_savefile.tools.format <file>             # Format and print to stdout
    python -m prison_savefile.tools.format <file> --inplace   # Format in place
    python -m prison_savefile.tools.format <file> --check     # Check if formatted (exit 1 if not)
"""

import argparse
import logging
import os
import shutil
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..node import Node
from ..parser import ParseError, parse_file, parse_source, read_source
from ..parser.lexer import KEYWORDS, WHITESPACE_CHARS

logger = logging.getLogger(__name__)

# Characters that force a string to be quoted
QUOTE_TRIGGERS = frozenset(WHITESPACE_CHARS + '"')

# Escapes applied inside quotes. Space, tab and CR stay literal.
_QUOTED_ESCAPES = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
})


@dataclass
class FormatOptions:
    """Configuration for the formatter."""
    indent: str = "    "       # One nesting step
    newline: str = "\n"        # Line separator between items
    encoding: str = "utf-8"    # Used when writing files


def quote_string(value: str) -> str:
    """
    Render a key or value as a savefile token.

    Strings with whitespace or quotes, empty strings, and the words
    BEGIN/END are quoted; anything else is written as is.
    """
    if value and value not in KEYWORDS and QUOTE_TRIGGERS.isdisjoint(value):
        return value
    return '"' + value.translate(_QUOTED_ESCAPES) + '"'


class SaveFormatter:
    """
    Formats Node trees as savefile text.

    The formatter walks the tree depth first, appending text fragments to
    one output list that is joined at the end.
    """

    def __init__(self, options: FormatOptions = None):
        self.options = options or FormatOptions()

    def format_node(self, node: Node) -> str:
        """Format a tree to string."""
        out: List[str] = []
        self._write_node(out, node, 0)
        return "".join(out)

    def format_string(self, content: str, filename: str = "<string>") -> str:
        """Re-format savefile text."""
        return self.format_node(parse_source(content, filename))

    def format_file(self, file_path: Union[str, Path]) -> str:
        """Format a file and return the formatted content."""
        return self.format_node(parse_file(file_path))

    def write_file(self, file_path: Union[str, Path], node: Node, backup: bool = False) -> None:
        """
        Format node and write it to file_path, replacing it wholesale.

        The text is encoded before the target is touched, then written to a
        temporary file beside it and moved into place, so a failed write
        leaves any existing file unchanged.

        Raises:
            UnicodeError: if the text cannot be encoded
            LookupError: if the configured encoding is unknown
            OSError: on I/O failure
        """
        file_path = Path(file_path)
        data = self.format_node(node).encode(self.options.encoding)

        if backup and file_path.exists():
            backup_path = file_path.with_name(file_path.name + ".bak")
            shutil.copyfile(file_path, backup_path)
            logger.info("Backed up %s to %s", file_path, backup_path)

        fd, tmp_name = tempfile.mkstemp(prefix=file_path.name + ".", suffix=".tmp",
                                        dir=file_path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            if file_path.exists():
                shutil.copymode(file_path, tmp_name)
            os.replace(tmp_name, file_path)
        except BaseException:
            os.unlink(tmp_name)
            raise
        logger.debug("Wrote %s (%d bytes)", file_path, len(data))

    def _newline(self, out: List[str], depth: int) -> None:
        out.append(self.options.newline)
        out.append(self.options.indent * depth)

    def _write_property(self, out: List[str], key: str, value: str) -> None:
        out.append(quote_string(key))
        out.append(" ")
        out.append(quote_string(value))

    def _write_node(self, out: List[str], node: Node, depth: int) -> None:
        first = True

        for key, value in node.properties():
            if not first:
                self._newline(out, depth)
            first = False
            self._write_property(out, key, value)

        for key, child in node.children():
            if not first:
                self._newline(out, depth)
            first = False

            out.append("BEGIN ")
            out.append(quote_string(key))

            if not child.has_children():
                # Leaf object on one line, two spaces before END
                out.append(" ")
                for prop_key, prop_value in child.properties():
                    self._write_property(out, prop_key, prop_value)
                    out.append(" ")
                out.append(" ")
            else:
                self._newline(out, depth + 1)
                self._write_node(out, child, depth + 1)
                self._newline(out, depth)

            out.append("END")


def format_node(node: Node, options: FormatOptions = None) -> str:
    """Convenience function to format a tree."""
    return SaveFormatter(options).format_node(node)


def format_file(file_path: Union[str, Path], options: FormatOptions = None) -> str:
    """Convenience function to format a file."""
    return SaveFormatter(options).format_file(file_path)


def write_file(file_path: Union[str, Path], node: Node,
               options: FormatOptions = None, backup: bool = False) -> None:
    """Convenience function to write a tree to a file."""
    SaveFormatter(options).write_file(file_path, node, backup=backup)


write = write_file


def check_formatted(file_path: Union[str, Path], options: FormatOptions = None) -> bool:
    """Check if a file is already formatted. Returns True if formatted."""
    original = read_source(file_path)
    return SaveFormatter(options).format_string(original, str(file_path)) == original


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Format prison savefiles")
    parser.add_argument("path", type=Path, help="File to format")
    parser.add_argument("--inplace", "-i", action="store_true",
                        help="Modify file in place")
    parser.add_argument("--check", "-c", action="store_true",
                        help="Check if file is formatted (exit 1 if not)")
    parser.add_argument("--indent", type=int, default=4,
                        help="Spaces per nesting level")
    parser.add_argument("--encoding", default="utf-8",
                        help="Encoding used with --inplace")

    args = parser.parse_args(argv)
    options = FormatOptions(indent=" " * args.indent, encoding=args.encoding)

    try:
        if args.check:
            if check_formatted(args.path, options):
                print(f"{args.path} is formatted")
                return 0
            print(f"{args.path} needs formatting")
            return 1

        if args.inplace:
            write_file(args.path, parse_file(args.path), options)
            print(f"Formatted: {args.path}")
        else:
            print(format_file(args.path, options))

    except (OSError, ParseError, UnicodeError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
