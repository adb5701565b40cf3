"""Version gate: decide whether a case applies to the detected engine version.

The detected version is read once into an immutable ``VersionGate`` that is
handed to fixtures.  Versions are dotted integers (``"15.0.20"``) compared
component-wise, missing components counting as zero.  Predicates return
False when either side is unknown or unparseable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import metadata
from typing import Sequence

import pytest

logger = logging.getLogger(__name__)

Version = tuple[int, ...]


def parse_version(text: str | None) -> Version | None:
    """Parse ``"major.minor[.build[.revision]]"``; return None if malformed."""
    if not text:
        return None
    parts = text.strip().split(".")
    if not 2 <= len(parts) <= 4:
        return None
    try:
        numbers = tuple(int(p) for p in parts)
    except ValueError:
        return None
    if any(n < 0 for n in numbers):
        return None
    return numbers


def _padded(version: Version) -> Version:
    return version + (0,) * (4 - len(version))


def _release_prefix(raw: str) -> str:
    """Leading numeric components of an installed version, e.g. ``1.2`` of ``1.2rc1.3``."""
    parts: list[str] = []
    for part in raw.split(".")[:4]:
        if not part.isdigit():
            break
        parts.append(part)
    return ".".join(parts)


@dataclass(frozen=True)
class VersionGate:
    """Comparison predicates and skip helpers over one detected version."""

    detected: Version | None = None
    component: str = "analysis engine"

    @classmethod
    def from_string(cls, text: str | None, component: str = "analysis engine") -> VersionGate:
        return cls(parse_version(text), component)

    @classmethod
    def detect(cls, distribution: str) -> VersionGate:
        """Read the installed version of *distribution*.

        A missing distribution yields a gate with no detected version.
        """
        try:
            raw = metadata.version(distribution)
        except metadata.PackageNotFoundError:
            logger.warning("Distribution %r is not installed; version unknown", distribution)
            return cls(None, distribution)
        gate = cls(parse_version(_release_prefix(raw)), distribution)
        logger.debug("%s version: %s", distribution, gate)
        return gate

    def __str__(self) -> str:
        if self.detected is None:
            return "unknown"
        return ".".join(str(p) for p in self.detected)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @property
    def is_detected(self) -> bool:
        return self.detected is not None

    def _compare(self, version: str) -> int | None:
        other = parse_version(version)
        if other is None or self.detected is None:
            return None
        mine, theirs = _padded(self.detected), _padded(other)
        return (mine > theirs) - (mine < theirs)

    def at_least(self, version: str) -> bool:
        cmp = self._compare(version)
        return cmp is not None and cmp >= 0

    def greater_than(self, version: str) -> bool:
        cmp = self._compare(version)
        return cmp is not None and cmp > 0

    def less_than(self, version: str) -> bool:
        cmp = self._compare(version)
        return cmp is not None and cmp < 0

    def at_most(self, version: str) -> bool:
        cmp = self._compare(version)
        return cmp is not None and cmp <= 0

    def in_range(self, minimum: str, maximum: str) -> bool:
        """Inclusive on both ends."""
        return self.at_least(minimum) and self.at_most(maximum)

    def is_version(self, major: int, minor: int | None = None) -> bool:
        if self.detected is None:
            return False
        if minor is None:
            return self.detected[0] == major
        return self.detected[0] == major and self.detected[1] == minor

    # ------------------------------------------------------------------
    # Whole-test requirements
    # ------------------------------------------------------------------

    def require_minimum(self, version: str, reason: str | None = None) -> None:
        if not self.at_least(version):
            pytest.skip(reason or f"Test requires {self.component} version {version} or higher.")

    def require_maximum(self, version: str, reason: str | None = None) -> None:
        if not self.at_most(version):
            pytest.skip(reason or f"Test requires {self.component} version {version} or lower.")

    def require_range(self, minimum: str, maximum: str, reason: str | None = None) -> None:
        if not self.in_range(minimum, maximum):
            pytest.skip(
                reason or f"Test requires {self.component} version between {minimum} and {maximum}."
            )

    def require_detection(self, reason: str | None = None) -> None:
        if self.detected is None:
            pytest.skip(reason or f"Test requires {self.component} version detection to be successful.")

    # ------------------------------------------------------------------
    # Per-case requirements
    # ------------------------------------------------------------------

    def skip_cases_below(
        self,
        cases: Sequence[str],
        current: str,
        minimum: str,
        reason: str | None = None,
    ) -> None:
        """Skip *current* if it is one of *cases* and the version is below *minimum*."""
        if current in cases and not self.at_least(minimum):
            pytest.skip(reason or f"Test case requires {self.component} version {minimum} or higher.")

    def skip_cases_above(
        self,
        cases: Sequence[str],
        current: str,
        maximum: str,
        reason: str | None = None,
    ) -> None:
        if current in cases and not self.at_most(maximum):
            pytest.skip(reason or f"Test case requires {self.component} version {maximum} or lower.")

    def skip_cases_outside(
        self,
        cases: Sequence[str],
        current: str,
        minimum: str,
        maximum: str,
        reason: str | None = None,
    ) -> None:
        if current in cases and not self.in_range(minimum, maximum):
            pytest.skip(
                reason
                or f"Test case requires {self.component} version between {minimum} and {maximum}."
            )
