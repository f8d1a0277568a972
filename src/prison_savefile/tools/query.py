"""
Savefile Query Tool

Navigate and search parsed savefile trees.

Usage:
    python -m prison_savefile.tools.query <file> --path <dotpath>   # Navigate to path
    python -m prison_savefile.tools.query <file> --search <text>    # Search for values
    python -m prison_savefile.tools.query <file> --list             # List top-level keys
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..node import Node
from ..parser import ParseError, parse_file
from ..serde import node_to_dict


def find_by_path(root: Node, path: str) -> Optional[Node]:
    """Navigate to a child path like 'Reform.Programs', taking the first child at each step."""
    current = root
    for part in path.split('.'):
        current = current.child(part)
        if current is None:
            return None
    return current


def find_all_by_path(root: Node, path: str) -> List[Node]:
    """Collect every node reachable by path, following repeated keys at each step."""
    current = [root]
    for part in path.split('.'):
        current = [child for node in current for key, child in node.children() if key == part]
        if not current:
            break
    return current


def search_values(root: Node, search_text: str) -> List[Dict[str, Any]]:
    """Search for properties whose key or value contains search_text."""
    results = []
    search_lower = search_text.lower()

    def walk(node: Node, path: str):
        for key, value in node.properties():
            if search_lower in value.lower() or search_lower in key.lower():
                results.append({
                    'path': f"{path}.{key}" if path else key,
                    'key': key,
                    'value': value,
                })
        for key, child in node.children():
            walk(child, f"{path}.{key}" if path else key)

    walk(root, "")
    return results


def get_all_keys(root: Node) -> List[str]:
    """Get all distinct top-level keys, properties first."""
    keys = []
    for key, _ in root.properties():
        if key not in keys:
            keys.append(key)
    for key, _ in root.children():
        if key not in keys:
            keys.append(key)
    return keys


def summarize_node(node: Node, indent: int = 0) -> str:
    """Readable one-level summary of a node."""
    ind = "  " * indent
    lines = []
    for key, value in node.properties():
        lines.append(f"{ind}{key} = {value}")
    for key, child in node.children():
        counts = sum(1 for _ in child.properties()), sum(1 for _ in child.children())
        lines.append(f"{ind}{key} {{ {counts[0]} properties, {counts[1]} children }}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Query prison savefile trees")
    parser.add_argument("file", type=Path, help="File to query")
    parser.add_argument("--path", "-p", help="Navigate to dot-separated child path")
    parser.add_argument("--search", "-s", help="Search for keys or values containing text")
    parser.add_argument("--list", "-l", action="store_true", help="List top-level keys")
    parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args(argv)
    return run_query(args)


def run_query(args) -> int:
    """Execute a query described by parsed arguments."""
    try:
        root = parse_file(args.file)
    except (OSError, ParseError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.list:
        keys = get_all_keys(root)
        if args.json:
            print(json.dumps(keys, indent=2))
        else:
            for key in keys:
                print(key)
        return 0

    if args.search:
        results = search_values(root, args.search)
        if args.json:
            print(json.dumps(results, indent=2))
        else:
            for result in results:
                print(f"{result['path']}: {result['value']}")
            print(f"\n{len(results)} matches")
        return 0

    node = root
    if args.path:
        node = find_by_path(root, args.path)
        if node is None:
            print(f"Path not found: {args.path}", file=sys.stderr)
            return 1

    if args.json:
        print(json.dumps(node_to_dict(node), indent=2))
    else:
        print(summarize_node(node))
    return 0


if __name__ == "__main__":
    sys.exit(main())
