from __future__ import annotations

from typing import TextIO

from tikz_export.elements.base import Element, iter_lines


class TikzWriter:
    """Streams a bound document to a text sink, one line per ``write`` call."""

    def __init__(self, stream: TextIO) -> None:
        if stream is None:
            raise ValueError("stream must not be None")
        self.stream = stream
        self.lines_written = 0

    def write(self, element: Element) -> int:
        count = 0
        for line in iter_lines(element):
            self.stream.write(line)
            self.stream.write("\n")
            count += 1
        self.lines_written += count
        return count
