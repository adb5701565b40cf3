"""Code actions, text edits and completion items offered by components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from altestkit.diagnostics.location import TextSpan


@dataclass(frozen=True)
class TextEdit:
    """Replace the text under ``span`` with ``new_text``."""

    span: TextSpan
    new_text: str

    @classmethod
    def insert(cls, offset: int, text: str) -> TextEdit:
        return cls(TextSpan(offset, 0), text)

    @classmethod
    def delete(cls, span: TextSpan) -> TextEdit:
        return cls(span, "")


def apply_edits(text: str, edits: Sequence[TextEdit]) -> str:
    """Apply non-overlapping *edits* to *text*.

    Edits are applied from the end of the text backwards so earlier offsets
    stay valid.  Overlapping edits raise ``ValueError``.
    """
    ordered = sorted(edits, key=lambda e: (e.span.start, e.span.end))
    for before, after in zip(ordered, ordered[1:]):
        if after.span.start < before.span.end:
            raise ValueError(f"Overlapping edits at {before.span} and {after.span}")
    result = text
    for edit in reversed(ordered):
        if edit.span.end > len(result):
            raise ValueError(f"Edit {edit.span} is outside of the document")
        result = result[: edit.span.start] + edit.new_text + result[edit.span.end :]
    return result


@dataclass(frozen=True)
class CodeAction:
    """An offered transformation. The harness only looks at its title and key."""

    title: str
    create_changed_text: Callable[[], str] = field(compare=False, repr=False)
    equivalence_key: str | None = None

    @classmethod
    def from_edits(
        cls,
        title: str,
        text: str,
        edits: Sequence[TextEdit],
        equivalence_key: str | None = None,
    ) -> CodeAction:
        """Build an action that applies *edits* to *text* when invoked."""
        frozen_edits = tuple(edits)
        return cls(title, lambda: apply_edits(text, frozen_edits), equivalence_key)

    def apply(self) -> str:
        """Run the action and return the transformed document text."""
        return self.create_changed_text()


@dataclass(frozen=True)
class CompletionItem:
    """One entry of a completion list."""

    label: str
    kind: str = ""
    detail: str | None = None
