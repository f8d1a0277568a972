"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Import prison_savefile modules
from prison_savefile import Node, parse_file


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def example_path(fixtures_dir):
    """Path to the example savefile."""
    return fixtures_dir / "example.prison"


# =============================================================================
# PARSED TREE FIXTURES
# =============================================================================

@pytest.fixture
def example_text(example_path):
    """Raw text of the example savefile."""
    return example_path.read_text(encoding="utf-8")


@pytest.fixture
def parsed_example(example_path):
    """Parsed example savefile."""
    return parse_file(example_path)


@pytest.fixture
def nested_node():
    """A tree covering quoting, repeats and three levels of nesting."""
    leaf = Node()
    leaf.add_property("Name", 'Ed "Tiny" Cole')
    leaf.add_property("Notes", "line one\nline two")

    middle = Node()
    middle.add_property("Size", "2")
    middle.add_child("Prisoner", leaf)
    middle.add_child("Prisoner", Node())

    inner = Node()
    inner.add_property("Depth", "3")
    deepest = Node()
    deepest.add_property("x", "1")
    inner.add_child("Deepest", deepest)
    middle.add_child("Inner", inner)

    root = Node()
    root.add_property("k", "a")
    root.add_property("k", "b")
    root.add_property("with space", "a b c")
    root.add_child("Objects", middle)
    root.add_child("Objects", Node())
    return root


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def make_node(*properties, **children) -> Node:
    """Build a node from (key, value) pairs and keyword children."""
    node = Node()
    node.extend_properties(properties)
    node.extend_children(children.items())
    return node
