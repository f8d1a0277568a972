"""
CLI entry point for prison_savefile.

Usage:
    prison-savefile parse <file>              Parse a savefile and show a summary
    prison-savefile format <file>             Re-format a savefile
    prison-savefile query <file> --path A.B   Navigate, search or list keys
    prison-savefile dump <file>               Print the tree as JSON
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import get_config
from .parser import ParseError, parse_file

logger = logging.getLogger(__name__)


def cmd_parse(args):
    """Parse a file and show a summary."""
    try:
        root = parse_file(args.file)
    except (OSError, ParseError) as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    properties = list(root.properties())
    children = list(root.children())
    print(f"Parsed: {args.file}")
    print(f"Top-level properties: {len(properties)}")
    print(f"Top-level children: {len(children)}")

    if args.verbose:
        for key, _ in children[:20]:
            print(f"  - {key}")
        if len(children) > 20:
            print(f"  ... and {len(children) - 20} more")

    return 0


def cmd_format(args):
    """Format a savefile."""
    from .tools.format import SaveFormatter, check_formatted

    config = get_config(args.config)
    logger.debug("Format config: %s", config.to_dict())
    options = config.format_options()
    formatter = SaveFormatter(options)

    try:
        if args.check:
            if check_formatted(args.file, options):
                print(f"{args.file} is formatted")
                return 0
            print(f"{args.file} needs formatting")
            return 1

        root = parse_file(args.file)
        if args.inplace:
            formatter.write_file(args.file, root, backup=config.backup_on_write)
            print(f"Formatted: {args.file}")
        else:
            print(formatter.format_node(root))

    except (OSError, ParseError, UnicodeError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def cmd_query(args):
    """Navigate, search or list keys of a savefile."""
    from .tools.query import run_query
    return run_query(args)


def cmd_dump(args):
    """Print a savefile tree as JSON."""
    from .serde import serialize_node

    try:
        root = parse_file(args.file)
    except (OSError, ParseError) as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    print(serialize_node(root).decode('utf-8'))
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Prison savefile toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    prison-savefile parse saves/felrock.prison -v
    prison-savefile format saves/felrock.prison --inplace
    prison-savefile query saves/felrock.prison --path Reform.Programs
    prison-savefile dump saves/felrock.prison > felrock.json
"""
    )
    parser.add_argument('--version', action='version', version=f'prison-savefile {__version__}')
    parser.add_argument('--config', type=Path, help='YAML config file')
    parser.add_argument('--log-level', default='WARNING', type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (default: WARNING)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # parse
    parse_p = subparsers.add_parser('parse', help='Parse a savefile')
    parse_p.add_argument('file', type=Path, help='File to parse')
    parse_p.add_argument('-v', '--verbose', action='store_true')
    parse_p.set_defaults(func=cmd_parse)

    # format
    format_p = subparsers.add_parser('format', help='Format a savefile')
    format_p.add_argument('file', type=Path, help='File to format')
    format_p.add_argument('-i', '--inplace', action='store_true', help='Modify in place')
    format_p.add_argument('-c', '--check', action='store_true',
                          help='Exit 1 if the file is not already formatted')
    format_p.set_defaults(func=cmd_format)

    # query
    query_p = subparsers.add_parser('query', help='Query a savefile')
    query_p.add_argument('file', type=Path, help='File to query')
    query_p.add_argument('-p', '--path', help='Dot-separated child path')
    query_p.add_argument('-s', '--search', help='Search for keys or values containing text')
    query_p.add_argument('-l', '--list', action='store_true', help='List top-level keys')
    query_p.add_argument('--json', action='store_true', help='Output as JSON')
    query_p.set_defaults(func=cmd_query)

    # dump
    dump_p = subparsers.add_parser('dump', help='Print a savefile as JSON')
    dump_p.add_argument('file', type=Path, help='File to dump')
    dump_p.set_defaults(func=cmd_dump)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
