"""Rule set for matters."""

import re

from adms.application.dtos import MatterDto
from adms.application.services.activity_validator import (
    activity_count_rule,
    creation_activity_rule,
    owner_key_rule,
)
from adms.application.validation.file_rules import contains_markup
from adms.application.validation.pipeline import RuleSet, ValidationContext, Violations
from adms.application.validation.rules import (
    validate_guid,
    validate_required_date,
    validate_string,
    violation,
)
from adms.core.constants import (
    MATTER_DESCRIPTION_MAX_LENGTH,
    MATTER_DESCRIPTION_MIN_LENGTH,
    PLACEHOLDER_PHRASES,
    RESERVED_MATTER_DESCRIPTIONS,
)
from adms.domain.enums import ViolationKind
from adms.shared.utils.datetime import age_in_days

PLACEHOLDER_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(p) for p in PLACEHOLDER_PHRASES) + r")\b",
    re.IGNORECASE,
)


class MatterRuleSet(RuleSet[MatterDto]):
    def core_properties(self, aggregate: MatterDto, ctx: ValidationContext) -> Violations:
        settings = ctx.settings
        yield from ctx.require("id", validate_guid(aggregate.id, "id"))
        yield from ctx.require(
            "description",
            validate_string(
                aggregate.description,
                "description",
                min_length=MATTER_DESCRIPTION_MIN_LENGTH,
                max_length=MATTER_DESCRIPTION_MAX_LENGTH,
                reserved_words=RESERVED_MATTER_DESCRIPTIONS,
            ),
        )
        yield from ctx.require(
            "creation_date",
            validate_required_date(
                aggregate.creation_date,
                "creation_date",
                now=ctx.now,
                min_date=settings.min_system_date,
                future_tolerance_minutes=settings.future_date_tolerance_minutes,
            ),
        )

    def business_rules(self, aggregate: MatterDto, ctx: ValidationContext) -> Violations:
        description = aggregate.description
        if ctx.present("description") and isinstance(description, str):
            if PLACEHOLDER_PATTERN.search(description):
                yield violation(
                    "description appears to contain placeholder text.",
                    "description",
                    kind=ViolationKind.BUSINESS_RULE,
                )
            if contains_markup(description):
                yield violation(
                    "description contains markup or script content.",
                    "description",
                    kind=ViolationKind.BUSINESS_RULE,
                )
        limit = ctx.settings.matter_review_age_days
        if ctx.sound("creation_date") and age_in_days(aggregate.creation_date, ctx.now) > limit:
            yield violation(
                f"Matter is older than {limit} days; review for archival.",
                "creation_date",
                kind=ViolationKind.ADVISORY,
            )

    def cross_property_rules(self, aggregate: MatterDto, ctx: ValidationContext) -> Violations:
        conflict = aggregate.status_flags.conflicting_flags()
        if conflict:
            yield violation(
                "A matter cannot be archived and deleted at the same time.",
                *conflict,
                kind=ViolationKind.CROSS_PROPERTY,
            )

    def collection_rules(self, aggregate: MatterDto, ctx: ValidationContext) -> Violations:
        documents = aggregate.documents
        yield from ctx.visit_collection("documents", documents)
        if aggregate.is_archived and not aggregate.is_deleted:
            for index, document in enumerate(documents):
                if document is not None and document.is_checked_out:
                    yield violation(
                        "An archived matter cannot hold a checked-out document.",
                        f"documents[{index}].is_checked_out",
                        kind=ViolationKind.STATE_ILLEGAL,
                    )

        activities = aggregate.activities
        yield from ctx.visit_collection("activities", activities)
        if ctx.present("id"):
            yield from owner_key_rule(activities, "activities", "matter_id", aggregate.id)
        yield from creation_activity_rule(
            activities, "activities", is_deleted=aggregate.is_deleted
        )
        yield from activity_count_rule(activities, "activities", ctx)
