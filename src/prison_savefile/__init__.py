"""
prison_savefile - Prison Savefile Toolkit

Read, modify and write the keyed text savefiles of a prison simulation game.
"""

__version__ = "0.1.0"
__author__ = "prison_savefile contributors"

from prison_savefile.node import Node
from prison_savefile.parser import ParseError, LexerError, parse_file, parse_source, read
from prison_savefile.tools.format import format_node, write_file, write
