"""Audit-trail consistency checks for activity and transfer records.

Audit records are append-only rows identified by a composite key
(subject, activity type, user, timestamp). On top of the generic pipeline
phases this module checks:

- composite-key validity (three non-empty GUIDs, a timestamp in range);
- cross-reference consistency between a foreign key and the id of its
  attached navigation object (a mismatch is reported, never corrected);
- the activity vocabulary allowed for the record type;
- temporal policy signals (very old, round-hour, maintenance window);
- for transfers: legal state at the destination, large-transfer,
  compliance-review, weekend and off-hours signals, and the counterpart
  predicate used to pair the FROM and TO halves of one MOVED/COPIED
  transfer.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, ClassVar, TypeVar
from uuid import UUID

from adms.application.validation.pipeline import RuleSet, ValidationContext, Violations
from adms.application.validation.rules import (
    validate_guid,
    validate_required_date,
    violation,
)
from adms.application.validation.violations import ValidationViolation
from adms.core.config import Settings, get_settings
from adms.core.constants import TRANSFER_ACTIVITIES
from adms.domain.enums import TransferDirection, ViolationKind
from adms.shared.utils.datetime import (
    age_in_days,
    business_days_between,
    ensure_utc,
    in_hour_window,
    is_top_of_hour,
    is_weekend,
)

T = TypeVar("T")


def activity_name(reference: Any) -> str | None:
    """Return the normalised activity name of an attached activity, or None."""
    name = getattr(reference, "activity", None) if reference is not None else None
    if not isinstance(name, str) or not name.strip():
        return None
    return name.strip().upper()


def reference_mismatch(
    reference: Any,
    ref_field: str,
    key_value: Any,
    key_field: str,
) -> ValidationViolation | None:
    """Compare an attached navigation object's id with its foreign key.

    Returns a REFERENTIAL_INTEGRITY violation citing both fields when the
    reference is present and its id differs from key_value, otherwise None.
    """
    if reference is None:
        return None
    ref_id = getattr(reference, "id", None)
    if ref_id == key_value:
        return None
    return violation(
        f"{ref_field}.id ({ref_id}) does not match {key_field} ({key_value}).",
        ref_field,
        key_field,
        kind=ViolationKind.REFERENTIAL_INTEGRITY,
    )


class AuditRecordRuleSet(RuleSet[T]):
    """Base rule set for append-only activity records.

    Subclasses name the subject/activity foreign keys, the attached activity
    reference, the other (reference, foreign key) pairs, and the allowed
    activity vocabulary.
    """

    subject_field: ClassVar[str]
    activity_field: ClassVar[str]
    activity_reference: ClassVar[str]
    allowed_activities: ClassVar[frozenset[str]]
    references: ClassVar[tuple[tuple[str, str], ...]] = (("user", "user_id"),)
    timestamp_field: ClassVar[str] = "created_at"

    def key_fields(self) -> tuple[str, ...]:
        return (self.subject_field, self.activity_field, "user_id")

    def core_properties(self, aggregate: T, ctx: ValidationContext) -> Violations:
        for name in self.key_fields():
            yield from ctx.require(name, validate_guid(getattr(aggregate, name), name))
        yield from ctx.require(
            self.timestamp_field,
            validate_required_date(
                getattr(aggregate, self.timestamp_field),
                self.timestamp_field,
                now=ctx.now,
                min_date=ctx.settings.min_system_date,
                future_tolerance_minutes=ctx.settings.future_date_tolerance_minutes,
            ),
        )

    def business_rules(self, aggregate: T, ctx: ValidationContext) -> Violations:
        name = activity_name(getattr(aggregate, self.activity_reference))
        if name is not None and name not in self.allowed_activities:
            yield violation(
                f"Activity '{name}' is not valid for this record. Allowed activities: "
                f"{', '.join(sorted(self.allowed_activities))}.",
                self.activity_reference,
            )
        if ctx.sound(self.timestamp_field):
            yield from self.temporal_rules(getattr(aggregate, self.timestamp_field), ctx)

    def temporal_rules(self, timestamp: datetime, ctx: ValidationContext) -> Violations:
        """Advisory signals derived from the record's timestamp alone."""
        settings = ctx.settings
        field_name = self.timestamp_field
        if age_in_days(timestamp, ctx.now) > settings.max_activity_age_days:
            yield violation(
                f"Activity is older than {settings.max_activity_age_days} days.",
                field_name,
                kind=ViolationKind.ADVISORY,
            )
        if is_top_of_hour(timestamp):
            yield violation(
                "Activity timestamp falls exactly on the hour; possible automated entry.",
                field_name,
                kind=ViolationKind.ADVISORY,
            )
        if in_hour_window(
            timestamp,
            settings.maintenance_window_start_hour,
            settings.maintenance_window_end_hour,
        ):
            yield violation(
                "Activity occurred during the maintenance window; possible automated entry.",
                field_name,
                kind=ViolationKind.ADVISORY,
            )

    def reference_pairs(self) -> tuple[tuple[str, str], ...]:
        return ((self.activity_reference, self.activity_field), *self.references)

    def cross_property_rules(self, aggregate: T, ctx: ValidationContext) -> Violations:
        for ref_field, key_field in self.reference_pairs():
            if not ctx.present(key_field):
                continue
            found = reference_mismatch(
                getattr(aggregate, ref_field),
                ref_field,
                getattr(aggregate, key_field),
                key_field,
            )
            if found is not None:
                yield found

    def collection_rules(self, aggregate: T, ctx: ValidationContext) -> Violations:
        for ref_field, _ in self.reference_pairs():
            yield from ctx.visit(ref_field, getattr(aggregate, ref_field))


class TransferRecordRuleSet(AuditRecordRuleSet[T]):
    """Rules for one half (FROM or TO) of a matter-to-matter document transfer."""

    subject_field = "document_id"
    activity_field = "matter_document_activity_id"
    activity_reference = "matter_document_activity"
    allowed_activities = TRANSFER_ACTIVITIES
    references = (
        ("matter", "matter_id"),
        ("counterpart_matter", "counterpart_matter_id"),
        ("document", "document_id"),
        ("user", "user_id"),
    )

    def core_properties(self, aggregate: T, ctx: ValidationContext) -> Violations:
        yield from super().core_properties(aggregate, ctx)
        yield from ctx.require("matter_id", validate_guid(aggregate.matter_id, "matter_id"))
        yield from ctx.require(
            "counterpart_matter_id",
            validate_guid(
                aggregate.counterpart_matter_id, "counterpart_matter_id", allow_empty=True
            ),
        )

    def business_rules(self, aggregate: T, ctx: ValidationContext) -> Violations:
        yield from super().business_rules(aggregate, ctx)
        settings = ctx.settings
        document = aggregate.document
        size = getattr(document, "file_size", None)
        if isinstance(size, int) and size > settings.large_transfer_threshold_bytes:
            yield violation(
                "Large document transfer; verify the transfer completed intact.",
                "document",
                kind=ViolationKind.ADVISORY,
            )
        name = activity_name(aggregate.matter_document_activity)
        if name in TRANSFER_ACTIVITIES and ctx.sound("created_at"):
            elapsed = business_days_between(aggregate.created_at, ctx.now)
            if elapsed > settings.compliance_review_business_days:
                yield violation(
                    f"{name} transfer is older than {settings.compliance_review_business_days} "
                    "business days; compliance review required.",
                    "created_at",
                    kind=ViolationKind.ADVISORY,
                )
        if ctx.sound("created_at"):
            yield from self.timing_rules(aggregate.created_at, ctx)

    def timing_rules(self, timestamp: datetime, ctx: ValidationContext) -> Violations:
        """Transfers are expected on weekdays within business hours."""
        settings = ctx.settings
        if is_weekend(timestamp):
            yield violation(
                "Transfer occurred on a weekend.",
                "created_at",
                kind=ViolationKind.ADVISORY,
            )
        if not in_hour_window(
            timestamp,
            settings.business_hours_start_hour,
            settings.business_hours_end_hour,
        ):
            yield violation(
                f"Transfer occurred outside business hours "
                f"({settings.business_hours_start_hour:02d}:00-"
                f"{settings.business_hours_end_hour:02d}:00 UTC).",
                "created_at",
                kind=ViolationKind.ADVISORY,
            )

    def cross_property_rules(self, aggregate: T, ctx: ValidationContext) -> Violations:
        if (
            ctx.sound("matter_id", "counterpart_matter_id")
            and aggregate.counterpart_matter_id is not None
            and aggregate.matter_id == aggregate.counterpart_matter_id
        ):
            yield violation(
                "A document cannot be transferred to the matter it came from.",
                "matter_id",
                "counterpart_matter_id",
                kind=ViolationKind.CROSS_PROPERTY,
            )
        yield from super().cross_property_rules(aggregate, ctx)
        yield from self.state_rules(aggregate)

    def state_rules(self, aggregate: T) -> Violations:
        """The destination matter must be open; the document must be at rest."""
        if aggregate.direction is TransferDirection.TO:
            ref_field, key_field = "matter", "matter_id"
        else:
            ref_field, key_field = "counterpart_matter", "counterpart_matter_id"
        destination = getattr(aggregate, ref_field)
        if destination is not None:
            if getattr(destination, "is_deleted", False):
                yield violation(
                    "Cannot transfer a document to a deleted matter.",
                    ref_field,
                    key_field,
                    kind=ViolationKind.STATE_ILLEGAL,
                )
            if getattr(destination, "is_archived", False):
                yield violation(
                    "Cannot transfer a document to an archived matter.",
                    ref_field,
                    key_field,
                    kind=ViolationKind.STATE_ILLEGAL,
                )
        document = aggregate.document
        if document is not None:
            if getattr(document, "is_deleted", False):
                yield violation(
                    "Cannot transfer a deleted document.",
                    "document",
                    "document_id",
                    kind=ViolationKind.STATE_ILLEGAL,
                )
            if getattr(document, "is_checked_out", False):
                yield violation(
                    "Cannot transfer a document that is checked out.",
                    "document",
                    "document_id",
                    kind=ViolationKind.STATE_ILLEGAL,
                )


def is_counterpart(a: Any, b: Any, tolerance_seconds: float = 0.0) -> bool:
    """Return whether transfer records a and b are the two halves of one transfer.

    They must sit on opposite sides, name the same document, activity and
    user, and have timestamps within tolerance_seconds. When a side records
    the matter on the other side, that matter must be the other record's
    own matter.
    """
    if a.direction is b.direction:
        return False
    if (a.document_id, a.matter_document_activity_id, a.user_id) != (
        b.document_id,
        b.matter_document_activity_id,
        b.user_id,
    ):
        return False
    if not isinstance(a.created_at, datetime) or not isinstance(b.created_at, datetime):
        return False
    delta = abs((ensure_utc(a.created_at) - ensure_utc(b.created_at)).total_seconds())
    if delta > tolerance_seconds:
        return False
    if a.counterpart_matter_id is not None and a.counterpart_matter_id != b.matter_id:
        return False
    if b.counterpart_matter_id is not None and b.counterpart_matter_id != a.matter_id:
        return False
    return True


@dataclass(frozen=True)
class CounterpartQuery:
    """The lookup a caller must run to confirm a transfer's other half exists.

    Attributes:
        direction: Side of the transfer the counterpart is stored on.
        document_id: Transferred document.
        matter_document_activity_id: Transfer activity type.
        user_id: User who performed the transfer.
        earliest: Lower bound (inclusive) of the counterpart's timestamp.
        latest: Upper bound (inclusive) of the counterpart's timestamp.
        matter_id: Counterpart's own matter, when the record knows it.
        counterpart_matter_id: Matter the counterpart must point back to.
    """

    direction: TransferDirection
    document_id: UUID
    matter_document_activity_id: UUID
    user_id: UUID
    earliest: datetime
    latest: datetime
    matter_id: UUID | None
    counterpart_matter_id: UUID | None

    def matches(self, candidate: Any) -> bool:
        """Return whether candidate satisfies every condition of the query."""
        if candidate.direction is not self.direction:
            return False
        if (
            candidate.document_id,
            candidate.matter_document_activity_id,
            candidate.user_id,
        ) != (self.document_id, self.matter_document_activity_id, self.user_id):
            return False
        if not isinstance(candidate.created_at, datetime):
            return False
        if not self.earliest <= ensure_utc(candidate.created_at) <= self.latest:
            return False
        if self.matter_id is not None and candidate.matter_id != self.matter_id:
            return False
        return (
            candidate.counterpart_matter_id is None
            or self.counterpart_matter_id is None
            or candidate.counterpart_matter_id == self.counterpart_matter_id
        )


def counterpart_query(record: Any, settings: Settings | None = None) -> CounterpartQuery:
    """Build the query that finds record's counterpart on the opposite side."""
    settings = settings or get_settings()
    tolerance = timedelta(seconds=settings.counterpart_tolerance_seconds)
    timestamp = ensure_utc(record.created_at)
    return CounterpartQuery(
        direction=record.direction.opposite,
        document_id=record.document_id,
        matter_document_activity_id=record.matter_document_activity_id,
        user_id=record.user_id,
        earliest=timestamp - tolerance,
        latest=timestamp + tolerance,
        matter_id=record.counterpart_matter_id,
        counterpart_matter_id=record.matter_id,
    )


def _is_transfer(record: Any) -> bool:
    name = activity_name(record.matter_document_activity)
    return name is None or name in TRANSFER_ACTIVITIES


def _unmatched(
    records: Sequence[Any],
    candidates: Sequence[Any],
    field_name: str,
    tolerance_seconds: float,
) -> Iterable[ValidationViolation]:
    for index, record in enumerate(records):
        if record is None or not _is_transfer(record):
            continue
        if any(
            candidate is not None and is_counterpart(record, candidate, tolerance_seconds)
            for candidate in candidates
        ):
            continue
        yield violation(
            f"Transfer record has no matching {record.direction.opposite.value.upper()} "
            "counterpart.",
            f"{field_name}[{index}]",
            kind=ViolationKind.REFERENTIAL_INTEGRITY,
        )


def check_transfer_pairs(
    from_records: Sequence[Any],
    to_records: Sequence[Any],
    tolerance_seconds: float = 0.0,
    *,
    from_field: str = "transfers_from",
    to_field: str = "transfers_to",
) -> Violations:
    """Yield a REFERENTIAL_INTEGRITY violation for each transfer with no counterpart.

    Records whose attached activity is known and is not MOVED or COPIED are
    not paired.
    """
    yield from _unmatched(from_records, to_records, from_field, tolerance_seconds)
    yield from _unmatched(to_records, from_records, to_field, tolerance_seconds)
