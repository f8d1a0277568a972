"""
Savefile Tree Model

A savefile is a tree of Nodes. Each Node holds two ordered multi-maps:
properties (key -> string values) and children (key -> child Nodes).

A key may repeat. Repeats are kept in the order they were added, and that
order is what the formatter writes back out, so it matters for round-trips.

Usage:
    node = Node()
    node.set_property("Version", "2")
    node.add_child("Objects", Node())
    print(node.property("Version"))
"""

import copy
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union


class Node:
    """
    A single element of a savefile.

    Lookups never fail: an absent key yields None (or an empty result),
    and a key is only present while it holds at least one value.
    """

    __slots__ = ("_properties", "_children")

    def __init__(self):
        self._properties: Dict[str, List[str]] = {}
        self._children: Dict[str, List["Node"]] = {}

    # -------------------------------------------------------------------------
    # Construction / I/O
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, source: str, filename: str = "<unknown>") -> "Node":
        """Parse a node from savefile text."""
        from prison_savefile.parser.parser import parse_source
        return parse_source(source, filename)

    @classmethod
    def read(cls, path: Union[str, Path]) -> "Node":
        """Read and parse a savefile from the file system."""
        from prison_savefile.parser.parser import parse_file
        return parse_file(path)

    def write(self, path: Union[str, Path]) -> None:
        """Format this node and write it to path, replacing any existing file."""
        from prison_savefile.tools.format import write_file
        write_file(path, self)

    def copy(self) -> "Node":
        """Return an independent deep copy of this tree."""
        return copy.deepcopy(self)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    def properties(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all (key, value) properties, in stored order."""
        for key, values in self._properties.items():
            for value in values:
                yield key, value

    def property(self, key: str) -> Optional[str]:
        """Get the first value for key, or None if absent."""
        values = self._properties.get(key)
        return values[0] if values else None

    def has_property(self, key: str) -> bool:
        """True if at least one value is stored under key."""
        return bool(self._properties.get(key))

    def has_properties(self) -> bool:
        return bool(self._properties)

    def set_property(self, key: str, value: str) -> None:
        """
        Set key to a single value, dropping any other values.

        An existing key keeps its position; a new key goes last.
        """
        values = self._properties.setdefault(key, [])
        values.clear()
        values.append(value)

    def add_property(self, key: str, value: str) -> None:
        """Add another value under key. Existing values are kept."""
        self._properties.setdefault(key, []).append(value)

    def clear_property(self, key: str) -> List[str]:
        """Remove all values for key and return them."""
        return self._properties.pop(key, [])

    def clear_properties(self) -> List[Tuple[str, str]]:
        """Remove every property and return them as (key, value) pairs."""
        removed = list(self.properties())
        self._properties.clear()
        return removed

    def extend_properties(self, properties: Iterable[Tuple[str, str]]) -> None:
        """Add each (key, value) pair, in order."""
        for key, value in properties:
            self.add_property(key, value)

    # -------------------------------------------------------------------------
    # Children
    # -------------------------------------------------------------------------

    def children(self) -> Iterator[Tuple[str, "Node"]]:
        """Iterate over all (key, child) pairs, in stored order."""
        for key, nodes in self._children.items():
            for node in nodes:
                yield key, node

    # Yielded children are the stored objects, so mutating them edits the tree.
    children_mut = children

    def child(self, key: str) -> Optional["Node"]:
        """Get the first child for key, or None if absent."""
        nodes = self._children.get(key)
        return nodes[0] if nodes else None

    child_mut = child

    def has_child(self, key: str) -> bool:
        """True if at least one child is stored under key."""
        return bool(self._children.get(key))

    def has_children(self) -> bool:
        return bool(self._children)

    def set_child(self, key: str, child: "Node") -> None:
        """
        Set key to a single child, dropping any other children.

        An existing key keeps its position; a new key goes last.
        """
        nodes = self._children.setdefault(key, [])
        nodes.clear()
        nodes.append(child)

    def add_child(self, key: str, child: "Node") -> None:
        """Add another child under key. Existing children are kept."""
        self._children.setdefault(key, []).append(child)

    def clear_child(self, key: str) -> List["Node"]:
        """Remove all children for key and return them."""
        return self._children.pop(key, [])

    def clear_children(self) -> List[Tuple[str, "Node"]]:
        """Remove every child and return them as (key, child) pairs."""
        removed = list(self.children())
        self._children.clear()
        return removed

    def extend_children(self, children: Iterable[Tuple[str, "Node"]]) -> None:
        """Add each (key, child) pair, in order."""
        for key, child in children:
            self.add_child(key, child)

    # -------------------------------------------------------------------------
    # Comparison / display
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        # dict equality ignores insertion order, so compare item sequences
        return (
            list(self._properties.items()) == list(other._properties.items())
            and list(self._children.items()) == list(other._children.items())
        )

    __hash__ = None

    def __repr__(self):
        entries = [f"{key!r}: {value!r}" for key, value in self.properties()]
        entries += [f"{key!r}: {child!r}" for key, child in self.children()]
        return "{" + ", ".join(entries) + "}"

    def __str__(self):
        from prison_savefile.tools.format import format_node
        return format_node(self)
