"""Marker parser: turns annotated text into clean text plus resolved spans.

Annotated text marks spans of interest with a delimiter pair, ``[|`` and
``|]`` by default::

    table T { [|field(1;F;Integer){}|] }

Delimiters are stripped from the output and every span is expressed in
offsets of the stripped (clean) text.  Marker pairs may follow each other
but may not nest; nesting and unmatched delimiters fail fast.
"""

from __future__ import annotations

from altestkit.errors import MalformedMarkupError
from altestkit.markup.spans import MarkedText, ResolvedSpan

DEFAULT_OPEN_MARKER = "[|"
DEFAULT_CLOSE_MARKER = "|]"


class MarkupParser:
    """Single-pass scanner over annotated text."""

    def __init__(
        self,
        source: str,
        open_marker: str = DEFAULT_OPEN_MARKER,
        close_marker: str = DEFAULT_CLOSE_MARKER,
    ) -> None:
        if not open_marker or not close_marker:
            raise ValueError("Marker delimiters must be non-empty")
        if open_marker == close_marker:
            raise ValueError("Open and close markers must differ")
        self._source = source
        self._open = open_marker
        self._close = close_marker
        self._pos = 0

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _looking_at(self, marker: str) -> bool:
        return self._source.startswith(marker, self._pos)

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def parse(self) -> MarkedText:
        """Scan the whole source and return the clean text with its spans."""
        self._pos = 0
        chunks: list[str] = []
        spans: list[ResolvedSpan] = []
        # Each pending entry is (clean offset, raw offset) of an open marker.
        pending: list[tuple[int, int]] = []
        clean_len = 0
        chunk_start = 0

        while not self._at_end():
            if self._looking_at(self._open):
                if pending:
                    raise MalformedMarkupError(
                        f"Nested marker {self._open!r} at offset {self._pos}; "
                        f"marker opened at offset {pending[-1][1]} is still open",
                        self._pos,
                    )
                chunks.append(self._source[chunk_start : self._pos])
                clean_len += self._pos - chunk_start
                pending.append((clean_len, self._pos))
                self._pos += len(self._open)
                chunk_start = self._pos
                continue

            if self._looking_at(self._close):
                if not pending:
                    raise MalformedMarkupError(
                        f"Unmatched closing marker {self._close!r} at offset {self._pos}",
                        self._pos,
                    )
                chunks.append(self._source[chunk_start : self._pos])
                clean_len += self._pos - chunk_start
                start, _ = pending.pop()
                spans.append(ResolvedSpan(start, clean_len - start, len(spans)))
                self._pos += len(self._close)
                chunk_start = self._pos
                continue

            self._pos += 1

        if pending:
            raw_offset = pending[-1][1]
            raise MalformedMarkupError(
                f"Unmatched opening marker {self._open!r} at offset {raw_offset}",
                raw_offset,
            )

        chunks.append(self._source[chunk_start:])
        return MarkedText("".join(chunks), tuple(spans))


def parse_markup(
    source: str,
    open_marker: str = DEFAULT_OPEN_MARKER,
    close_marker: str = DEFAULT_CLOSE_MARKER,
) -> MarkedText:
    """Parse annotated *source*. Returns clean text and spans sorted by start."""
    return MarkupParser(source, open_marker, close_marker).parse()
