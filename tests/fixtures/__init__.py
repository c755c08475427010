"""Test fixtures package."""

from .mock_marker import ExplodingMarker, FakeEmojiable

__all__ = [
    "ExplodingMarker",
    "FakeEmojiable",
]
