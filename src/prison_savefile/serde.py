"""
Tree Serialization - JSON conversion for Node trees.

Properties and children are written as lists of [key, value] pairs rather
than JSON objects, so repeated keys and their order survive the trip.

Usage:
    from prison_savefile.serde import serialize_node, deserialize_node, count_nodes
"""

import json
from typing import Any, Dict, Union

from prison_savefile.node import Node


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Convert a tree to a JSON-ready dict."""
    return {
        'properties': [[key, value] for key, value in node.properties()],
        'children': [[key, node_to_dict(child)] for key, child in node.children()],
    }


def dict_to_node(data: Dict[str, Any]) -> Node:
    """Rebuild a tree from the output of node_to_dict."""
    node = Node()
    node.extend_properties((key, value) for key, value in data.get('properties', []))
    node.extend_children((key, dict_to_node(child)) for key, child in data.get('children', []))
    return node


def serialize_node(node: Node) -> bytes:
    """
    Serialize a tree to JSON bytes.

    Args:
        node: Root of the tree

    Returns:
        UTF-8 encoded JSON bytes
    """
    data = node_to_dict(node)
    return json.dumps(data, separators=(',', ':'), ensure_ascii=False).encode('utf-8')


def deserialize_node(data: Union[bytes, str]) -> Node:
    """
    Deserialize a tree from JSON bytes or string.

    Args:
        data: JSON bytes or string

    Returns:
        Root Node
    """
    if isinstance(data, bytes):
        data = data.decode('utf-8')
    return dict_to_node(json.loads(data))


def count_nodes(node: Node) -> int:
    """Count nodes in a tree, including the root."""
    return 1 + sum(count_nodes(child) for _, child in node.children())
