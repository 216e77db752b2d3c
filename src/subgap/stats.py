"""
Character and line statistics for subtitle text.
"""
from dataclasses import dataclass


@dataclass
class TextStats:
    characters: int;
    lines: int;


def text_stats( text: str ) -> TextStats:
    """Count characters and newline-separated lines (blank text is one line)."""
    return TextStats( characters=len( text ), lines=text.count( "\n" ) + 1 );


def format_stats( stats: TextStats ) -> str:
    return f"characters: {stats.characters} | lines: {stats.lines}";
