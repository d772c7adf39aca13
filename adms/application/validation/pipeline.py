"""Four-phase validation pipeline.

A RuleSet describes how to validate one aggregate type in four ordered
phases: core properties, business rules, cross-property rules and
collection rules. The ValidationPipeline looks up the rule set for an
aggregate's type and chains the phases lazily, so a consumer that stops
iterating stops the work.

Every phase always runs. When a required field is missing, the rule set
records it on the ValidationContext and later checks that depend on that
field skip themselves; nothing else is skipped.

Nested aggregates are visited through the context (ctx.visit and
ctx.visit_collection), which re-enters the pipeline with a fresh child
context and re-roots each child violation under 'name' or 'name[i]'.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from adms.application.validation.rules import missing
from adms.application.validation.violations import ValidationOutcome, ValidationViolation
from adms.core.config import Settings, get_settings
from adms.domain.enums import ViolationKind
from adms.domain.exceptions import ValidationException
from adms.shared.utils.datetime import ensure_utc, utc_now

T = TypeVar("T")

Violations = Iterator[ValidationViolation]


@dataclass
class ValidationContext:
    """Per-aggregate state for one validation run.

    Attributes:
        now: Reference instant for every temporal check in the run.
        settings: Thresholds and limits.
        pipeline: Pipeline used to visit nested aggregates.
        missing: Required fields found absent in this aggregate.
        failed: Fields that failed a blocking core check.
    """

    now: datetime
    settings: Settings
    pipeline: ValidationPipeline
    missing: set[str] = field(default_factory=set)
    failed: set[str] = field(default_factory=set)

    def mark_missing(self, *fields: str) -> None:
        self.missing.update(fields)

    def present(self, *fields: str) -> bool:
        """Return whether none of fields was recorded as missing."""
        return not self.missing.intersection(fields)

    def sound(self, *fields: str) -> bool:
        """Return whether fields are present and passed their core checks."""
        return self.present(*fields) and not self.failed.intersection(fields)

    def require(
        self,
        field_name: str,
        violations: Iterable[ValidationViolation],
    ) -> list[ValidationViolation]:
        """Record the outcome of field_name's core check and pass the violations on."""
        found = list(violations)
        for v in found:
            if v.kind is ViolationKind.MISSING_REQUIRED:
                self.missing.add(field_name)
            elif v.is_blocking:
                self.failed.add(field_name)
        return found

    def child(self) -> ValidationContext:
        """Return a fresh context for a nested aggregate sharing this run's clock."""
        return ValidationContext(now=self.now, settings=self.settings, pipeline=self.pipeline)

    def visit(self, name: str, child: Any) -> Violations:
        """Validate a nested aggregate (if present) and re-root its violations under name."""
        if child is None:
            return
        for v in self.pipeline.run(child, self.child()):
            yield v.prefixed(name)

    def visit_collection(self, name: str, items: Iterable[Any] | None) -> Violations:
        """Validate each item of a child collection under name[i].

        A None item is reported as missing at its position.
        """
        for index, item in enumerate(items or ()):
            path = f"{name}[{index}]"
            if item is None:
                yield missing(path, f"{path} cannot be null.")
                continue
            yield from self.visit(path, item)


class RuleSet(ABC, Generic[T]):
    """Validation rules for one aggregate type, grouped in four phases.

    Subclasses implement core_properties and override the other phases as
    needed. Each phase is a generator of violations.
    """

    @abstractmethod
    def core_properties(self, aggregate: T, ctx: ValidationContext) -> Violations:
        """Required-field presence and structural format."""

    def business_rules(self, aggregate: T, ctx: ValidationContext) -> Violations:
        """Domain policy independent of other fields."""
        yield from ()

    def cross_property_rules(self, aggregate: T, ctx: ValidationContext) -> Violations:
        """Invariants spanning two or more fields of the same aggregate."""
        yield from ()

    def collection_rules(self, aggregate: T, ctx: ValidationContext) -> Violations:
        """Nested aggregates and policy over child collections."""
        yield from ()

    def phases(self) -> tuple[Callable[[T, ValidationContext], Violations], ...]:
        return (
            self.core_properties,
            self.business_rules,
            self.cross_property_rules,
            self.collection_rules,
        )


class ValidationPipeline:
    """Registry of rule sets and the entry point for validating aggregates.

    Validation never raises for data problems; it raises ValidationException
    only when asked to validate a type with no registered rule set.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.settings = settings or get_settings()
        self._clock = clock
        self._rule_sets: dict[type, RuleSet[Any]] = {}

    def register(self, aggregate_type: type[T], rule_set: RuleSet[T]) -> None:
        self._rule_sets[aggregate_type] = rule_set

    def registered_types(self) -> tuple[type, ...]:
        return tuple(self._rule_sets)

    def rule_set_for(self, aggregate_type: type) -> RuleSet[Any]:
        """Return the rule set for aggregate_type or its nearest registered base."""
        for klass in aggregate_type.__mro__:
            rule_set = self._rule_sets.get(klass)
            if rule_set is not None:
                return rule_set
        raise ValidationException(
            f"No rule set registered for {aggregate_type.__name__}",
            field="aggregate_type",
        )

    def resolve_now(self, now: datetime | None = None) -> datetime:
        """Return now as UTC, reading the clock when it is None."""
        return ensure_utc(now) if now is not None else self._clock()

    def new_context(self, now: datetime | None = None) -> ValidationContext:
        return ValidationContext(
            now=self.resolve_now(now),
            settings=self.settings,
            pipeline=self,
        )

    def run(self, aggregate: Any, ctx: ValidationContext) -> Violations:
        """Run every phase of aggregate's rule set against ctx, in order."""
        rule_set = self.rule_set_for(type(aggregate))
        return self._chain(rule_set, aggregate, ctx)

    @staticmethod
    def _chain(rule_set: RuleSet[Any], aggregate: Any, ctx: ValidationContext) -> Violations:
        for phase in rule_set.phases():
            yield from phase(aggregate, ctx)

    def iter_violations(self, aggregate: Any, *, now: datetime | None = None) -> Violations:
        """Lazily yield aggregate's violations; stop iterating to stop validating."""
        return self.run(aggregate, self.new_context(now))

    def validate(self, aggregate: Any, *, now: datetime | None = None) -> ValidationOutcome:
        """Validate aggregate and return the complete outcome."""
        return ValidationOutcome(self.iter_violations(aggregate, now=now))

    def validate_model(
        self,
        aggregate: Any | None,
        aggregate_type: type | None = None,
        *,
        now: datetime | None = None,
    ) -> ValidationOutcome:
        """Validate an optional aggregate; None yields one MISSING_REQUIRED violation."""
        if aggregate is None:
            name = aggregate_type.__name__ if aggregate_type is not None else "Aggregate"
            return ValidationOutcome(
                [
                    ValidationViolation(
                        f"{name} instance is required and cannot be null.",
                        (),
                        ViolationKind.MISSING_REQUIRED,
                    )
                ]
            )
        return self.validate(aggregate, now=now)

    def is_valid(self, aggregate: Any, *, now: datetime | None = None) -> bool:
        """Return whether aggregate has no blocking violation; stops at the first one."""
        return not any(v.is_blocking for v in self.iter_violations(aggregate, now=now))
