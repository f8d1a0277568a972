"""
Tests for JSON serialization of trees.
"""

import json

from prison_savefile import Node
from prison_savefile.serde import count_nodes, deserialize_node, node_to_dict, serialize_node

from conftest import make_node


class TestSerde:
    """Test tree <-> JSON conversion."""

    def test_node_to_dict_keeps_order_and_repeats(self):
        node = make_node(("k", "a"), ("k", "b"), x=make_node(("n", "1")))
        assert node_to_dict(node) == {
            "properties": [["k", "a"], ["k", "b"]],
            "children": [["x", {"properties": [["n", "1"]], "children": []}]],
        }

    def test_serialize_is_compact_json(self):
        data = serialize_node(make_node(("a", "1")))
        assert data == b'{"properties":[["a","1"]],"children":[]}'
        assert json.loads(data.decode("utf-8"))["properties"] == [["a", "1"]]

    def test_deserialize_restores_tree(self, nested_node):
        assert deserialize_node(serialize_node(nested_node)) == nested_node

    def test_deserialize_accepts_str(self):
        node = deserialize_node('{"properties": [["a", "\\u00e9"]]}')
        assert node.property("a") == "é"
        assert not node.has_children()

    def test_count_nodes(self, parsed_example):
        assert count_nodes(Node()) == 1
        # root, Finance, Objects(+2), Reform, Programs(+2), Victory, Log(+2)
        assert count_nodes(parsed_example) == 13
