"""Structured validation findings.

A ValidationViolation is produced by a rule and never changes afterwards;
a ValidationOutcome is the ordered, immutable result of one validation run.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from adms.domain.enums import ViolationKind


@dataclass(frozen=True)
class ValidationViolation:
    """One finding: a message, the member paths it cites, and its kind."""

    message: str
    field_path: tuple[str, ...] = ()
    kind: ViolationKind = ViolationKind.FORMAT

    @property
    def is_blocking(self) -> bool:
        return self.kind.is_blocking

    def prefixed(self, prefix: str) -> ValidationViolation:
        """Return a copy with every cited member re-rooted under prefix.

        A violation citing no member is re-rooted at prefix itself.
        """
        if not prefix:
            return self
        path = tuple(f"{prefix}.{member}" for member in self.field_path) or (prefix,)
        return ValidationViolation(self.message, path, self.kind)

    def __str__(self) -> str:
        return self.message


class ValidationOutcome(Sequence[ValidationViolation]):
    """Ordered violations of one validation run; empty means no findings."""

    __slots__ = ("_violations",)

    def __init__(self, violations: Iterable[ValidationViolation] = ()) -> None:
        self._violations: tuple[ValidationViolation, ...] = tuple(violations)

    def __getitem__(self, index):  # type: ignore[override]
        return self._violations[index]

    def __len__(self) -> int:
        return len(self._violations)

    def __iter__(self) -> Iterator[ValidationViolation]:
        return iter(self._violations)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValidationOutcome):
            return self._violations == other._violations
        if isinstance(other, (list, tuple)):
            return list(self._violations) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._violations)

    def __repr__(self) -> str:
        return f"ValidationOutcome({list(self._violations)!r})"

    @property
    def is_valid(self) -> bool:
        """True when no blocking violation was found (advisories allowed)."""
        return not any(v.is_blocking for v in self._violations)

    @property
    def blocking(self) -> tuple[ValidationViolation, ...]:
        return tuple(v for v in self._violations if v.is_blocking)

    @property
    def advisories(self) -> tuple[ValidationViolation, ...]:
        return tuple(v for v in self._violations if not v.is_blocking)

    def of_kind(self, kind: ViolationKind) -> tuple[ValidationViolation, ...]:
        return tuple(v for v in self._violations if v.kind is kind)

    def fields(self) -> tuple[str, ...]:
        """Distinct cited member paths in first-seen order."""
        seen: dict[str, None] = {}
        for violation in self._violations:
            for member in violation.field_path:
                seen.setdefault(member, None)
        return tuple(seen)

    def messages(self) -> tuple[str, ...]:
        return tuple(v.message for v in self._violations)

    def count_by_kind(self) -> Counter[ViolationKind]:
        return Counter(v.kind for v in self._violations)

    def summary(self) -> str:
        """Human-readable multi-line summary of the outcome."""
        if not self._violations:
            return "No validation errors."
        lines = [f"Validation failed with {len(self._violations)} error(s):"]
        for violation in self._violations:
            members = ", ".join(violation.field_path)
            suffix = f" ({members})" if members else ""
            lines.append(f"  - {violation.message}{suffix}")
        return "\n".join(lines)
