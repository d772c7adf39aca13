"""Rule sets for document, matter and revision activity records.

Also holds the collection policies the owning aggregates apply to their
activity trails.
"""

from collections.abc import Sequence
from typing import Any

from adms.application.dtos import (
    DocumentActivityUserDto,
    MatterActivityUserDto,
    RevisionActivityUserDto,
)
from adms.application.validation.audit_trail import AuditRecordRuleSet
from adms.application.validation.pipeline import ValidationContext, Violations
from adms.application.validation.rules import violation
from adms.core.constants import (
    CREATED_ACTIVITY,
    DOCUMENT_ACTIVITIES,
    MATTER_ACTIVITIES,
    REVISION_ACTIVITIES,
)
from adms.domain.enums import ViolationKind


class DocumentActivityRuleSet(AuditRecordRuleSet[DocumentActivityUserDto]):
    subject_field = "document_id"
    activity_field = "document_activity_id"
    activity_reference = "document_activity"
    allowed_activities = DOCUMENT_ACTIVITIES


class MatterActivityRuleSet(AuditRecordRuleSet[MatterActivityUserDto]):
    subject_field = "matter_id"
    activity_field = "matter_activity_id"
    activity_reference = "matter_activity"
    allowed_activities = MATTER_ACTIVITIES
    references = (("matter", "matter_id"), ("user", "user_id"))


class RevisionActivityRuleSet(AuditRecordRuleSet[RevisionActivityUserDto]):
    subject_field = "revision_id"
    activity_field = "revision_activity_id"
    activity_reference = "revision_activity"
    allowed_activities = REVISION_ACTIVITIES


def creation_activity_rule(
    activities: Sequence[Any],
    field_name: str,
    *,
    is_deleted: bool,
) -> Violations:
    """A non-empty activity trail must contain CREATED unless the owner is deleted.

    Skipped when any activity has no activity type attached, since its name
    cannot be known.
    """
    if is_deleted or not activities:
        return
    names = [a.activity_name if a is not None else None for a in activities]
    if any(name is None for name in names):
        return
    if CREATED_ACTIVITY not in names:
        yield violation(
            f"{field_name} must contain a {CREATED_ACTIVITY} activity.",
            field_name,
            kind=ViolationKind.BUSINESS_RULE,
        )


def owner_key_rule(
    items: Sequence[Any],
    field_name: str,
    key_field: str,
    owner_id: Any,
) -> Violations:
    """Each child record's foreign key must point back at its owner."""
    for index, item in enumerate(items):
        if item is None:
            continue
        value = getattr(item, key_field)
        if value is not None and value != owner_id:
            yield violation(
                f"{field_name}[{index}].{key_field} ({value}) does not match the owning id "
                f"({owner_id}).",
                f"{field_name}[{index}].{key_field}",
                kind=ViolationKind.REFERENTIAL_INTEGRITY,
            )


def activity_count_rule(
    activities: Sequence[Any],
    field_name: str,
    ctx: ValidationContext,
) -> Violations:
    limit = ctx.settings.max_activity_count
    if len(activities) > limit:
        yield violation(
            f"{field_name} has {len(activities)} entries, more than the expected {limit}.",
            field_name,
            kind=ViolationKind.ADVISORY,
        )
