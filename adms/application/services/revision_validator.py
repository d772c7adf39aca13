"""Rule set for document revisions."""

from adms.application.dtos import RevisionDto
from adms.application.services.activity_validator import (
    activity_count_rule,
    creation_activity_rule,
    owner_key_rule,
)
from adms.application.validation.pipeline import RuleSet, ValidationContext, Violations
from adms.application.validation.rules import (
    validate_guid,
    validate_number_range,
    validate_required_date,
    violation,
)
from adms.core.constants import REVISION_NUMBER_MAX, REVISION_NUMBER_MIN
from adms.domain.enums import ViolationKind
from adms.shared.utils.datetime import age_in_days, ensure_utc


class RevisionRuleSet(RuleSet[RevisionDto]):
    def core_properties(self, aggregate: RevisionDto, ctx: ValidationContext) -> Violations:
        settings = ctx.settings
        yield from ctx.require("id", validate_guid(aggregate.id, "id"))
        yield from ctx.require("document_id", validate_guid(aggregate.document_id, "document_id"))
        yield from ctx.require(
            "revision_number",
            validate_number_range(
                aggregate.revision_number,
                "revision_number",
                minimum=REVISION_NUMBER_MIN,
                maximum=REVISION_NUMBER_MAX,
            ),
        )
        for name in ("creation_date", "modification_date"):
            yield from ctx.require(
                name,
                validate_required_date(
                    getattr(aggregate, name),
                    name,
                    now=ctx.now,
                    min_date=settings.min_system_date,
                    future_tolerance_minutes=settings.future_date_tolerance_minutes,
                ),
            )

    def business_rules(self, aggregate: RevisionDto, ctx: ValidationContext) -> Violations:
        limit = ctx.settings.revision_review_age_days
        if ctx.sound("creation_date") and age_in_days(aggregate.creation_date, ctx.now) > limit:
            yield violation(
                f"Revision is older than {limit} days; consider archival review.",
                "creation_date",
                kind=ViolationKind.ADVISORY,
            )

    def cross_property_rules(self, aggregate: RevisionDto, ctx: ValidationContext) -> Violations:
        if not ctx.sound("creation_date", "modification_date"):
            return
        if ensure_utc(aggregate.modification_date) < ensure_utc(aggregate.creation_date):
            yield violation(
                "modification_date cannot be earlier than creation_date.",
                "creation_date",
                "modification_date",
                kind=ViolationKind.CROSS_PROPERTY,
            )

    def collection_rules(self, aggregate: RevisionDto, ctx: ValidationContext) -> Violations:
        activities = aggregate.activities
        yield from ctx.visit_collection("activities", activities)
        if ctx.present("id"):
            yield from owner_key_rule(activities, "activities", "revision_id", aggregate.id)
        yield from creation_activity_rule(
            activities, "activities", is_deleted=aggregate.is_deleted
        )
        yield from activity_count_rule(activities, "activities", ctx)
