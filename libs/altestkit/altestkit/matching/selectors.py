"""Code action selectors: pick one action out of those a provider offered."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from altestkit.engine.actions import CodeAction
from altestkit.errors import AmbiguousCodeActionError, NoApplicableCodeActionError


class CodeActionSelector(ABC):
    """Selects one action from an ordered list, or None if nothing fits."""

    @abstractmethod
    def find(self, actions: Sequence[CodeAction]) -> CodeAction | None:
        ...

    def describe(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class ByIndex(CodeActionSelector):
    index: int

    def find(self, actions: Sequence[CodeAction]) -> CodeAction | None:
        if 0 <= self.index < len(actions):
            return actions[self.index]
        return None

    def describe(self) -> str:
        return f"index {self.index}"


@dataclass(frozen=True)
class ByTitle(CodeActionSelector):
    title: str

    def find(self, actions: Sequence[CodeAction]) -> CodeAction | None:
        return next((a for a in actions if a.title == self.title), None)

    def describe(self) -> str:
        return f"title {self.title!r}"


@dataclass(frozen=True)
class ByTitleContains(CodeActionSelector):
    fragment: str

    def find(self, actions: Sequence[CodeAction]) -> CodeAction | None:
        return next((a for a in actions if self.fragment in a.title), None)

    def describe(self) -> str:
        return f"title containing {self.fragment!r}"


@dataclass(frozen=True)
class ByEquivalenceKey(CodeActionSelector):
    key: str

    def find(self, actions: Sequence[CodeAction]) -> CodeAction | None:
        return next((a for a in actions if a.equivalence_key == self.key), None)

    def describe(self) -> str:
        return f"equivalence key {self.key!r}"


def select_code_action(
    actions: Sequence[CodeAction],
    selector: CodeActionSelector | None = None,
) -> CodeAction:
    """Return the action to apply.

    Without a selector exactly one action must be on offer.
    """
    titles = [a.title for a in actions]
    if selector is None:
        if not actions:
            raise NoApplicableCodeActionError(titles)
        if len(actions) > 1:
            raise AmbiguousCodeActionError(titles)
        return actions[0]
    chosen = selector.find(actions)
    if chosen is None:
        raise NoApplicableCodeActionError(titles, selector.describe())
    return chosen
