"""
Split a flat list of text lines into slides.

A line that starts with the heading marker (``#`` by default) opens a new
slide; every other line is appended verbatim to the body of the slide
currently being built. Heading levels are not distinguished: ``## Foo``
opens a slide just like ``# Foo``.
"""
import logging
from typing import Iterable

from .models import Deck, Slide

logger = logging.getLogger(__name__)

DEFAULT_HEADING_MARKER = "#"


class SlideParser:
    """
    Line-oriented slide parser.
    """

    def __init__(self, heading_marker: str = DEFAULT_HEADING_MARKER):
        """
        Initialize the parser.

        Args:
            heading_marker: Literal prefix that marks a slide heading. Must be non-empty.
        """
        if not heading_marker:
            raise ValueError("heading_marker must be a non-empty string")
        self.heading_marker = heading_marker

    def is_heading(self, line: str) -> bool:
        """Check if *line* starts a new slide."""
        return line.startswith(self.heading_marker)

    def parse(self, lines: Iterable[str]) -> Deck:
        """
        Parse lines into a deck.

        Never fails: a document without headings yields one slide with an
        empty title holding every line, and empty input yields one empty
        slide.

        Args:
            lines: Source lines, without trailing newlines

        Returns:
            Deck with at least one slide
        """
        slides = []
        current = Slide()

        for line in lines:
            if self.is_heading(line):
                # Untitled preamble is dropped once a heading shows up
                if current.title:
                    slides.append(current)
                current = Slide(title=line)
            else:
                current.body.append(line)

        slides.append(current)

        logger.debug(f"Parsed {len(slides)} slide(s) using marker {self.heading_marker!r}")
        return Deck(slides=slides)


def parse_slides(lines: Iterable[str], marker: str = DEFAULT_HEADING_MARKER) -> Deck:
    """Parse *lines* into a :class:`Deck` with a one-off :class:`SlideParser`."""
    return SlideParser(heading_marker=marker).parse(lines)
