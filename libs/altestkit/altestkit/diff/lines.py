"""Line splitting and whitespace visualization for diff reports."""

from __future__ import annotations

from dataclasses import dataclass

# Glyphs substituted for characters that would otherwise be invisible.
VISIBLE_GLYPHS: dict[str, str] = {
    " ": "·",
    "\t": "→",
    "\r": "␍",
    "\n": "␊",
}


@dataclass(frozen=True)
class Line:
    """One line of text with its terminator kept as metadata.

    ``ending`` is ``"\\r\\n"``, ``"\\n"``, ``"\\r"`` or ``""`` (last line
    without terminator).  Two lines are equal only if both text and ending
    match, so a CRLF/LF difference is itself a divergence.
    """

    text: str
    ending: str = ""

    def visible(self) -> str:
        return visualize(self.text + self.ending)


def split_lines(text: str) -> list[Line]:
    """Split *text* into lines, keeping each terminator.

    A trailing terminator does not produce an extra empty line, and the
    empty string has no lines at all.
    """
    lines: list[Line] = []
    start = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\r":
            if i + 1 < n and text[i + 1] == "\n":
                lines.append(Line(text[start:i], "\r\n"))
                i += 2
            else:
                lines.append(Line(text[start:i], "\r"))
                i += 1
            start = i
            continue
        if ch == "\n":
            lines.append(Line(text[start:i], "\n"))
            start = i + 1
        i += 1
    if start < n:
        lines.append(Line(text[start:], ""))
    return lines


def visualize(text: str) -> str:
    """Replace spaces, tabs and line terminators with visible glyphs."""
    return "".join(VISIBLE_GLYPHS.get(ch, ch) for ch in text)
