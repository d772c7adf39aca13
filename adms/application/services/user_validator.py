"""Rule sets for users and activity-type lookup rows."""

import re

from adms.application.dtos import ActivityDto, UserDto
from adms.application.validation.pipeline import RuleSet, ValidationContext, Violations
from adms.application.validation.rules import validate_guid, validate_string, violation
from adms.core.constants import (
    ACTIVITY_MAX_LENGTH,
    ACTIVITY_MIN_LENGTH,
    RESERVED_USER_NAMES,
    USER_NAME_MAX_LENGTH,
    USER_NAME_MIN_LENGTH,
)
from adms.domain.enums import ViolationKind

USER_NAME_PATTERN = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9._\s-]*[a-zA-Z0-9]|[a-zA-Z0-9]")
ACTIVITY_PATTERN = re.compile(r"[A-Z][A-Z _]*[A-Z]")


class UserRuleSet(RuleSet[UserDto]):
    """Users: GUID id and a 2-50 character name that is not a reserved account."""

    def core_properties(self, aggregate: UserDto, ctx: ValidationContext) -> Violations:
        yield from ctx.require("id", validate_guid(aggregate.id, "id"))
        yield from ctx.require(
            "name",
            validate_string(
                aggregate.name,
                "name",
                min_length=USER_NAME_MIN_LENGTH,
                max_length=USER_NAME_MAX_LENGTH,
                pattern=USER_NAME_PATTERN,
                pattern_message=(
                    "name must start and end with a letter or digit and contain only "
                    "letters, digits, spaces, periods, underscores and hyphens."
                ),
            ),
        )

    def business_rules(self, aggregate: UserDto, ctx: ValidationContext) -> Violations:
        if not ctx.present("name") or not isinstance(aggregate.name, str):
            return
        if aggregate.name.strip().lower() in RESERVED_USER_NAMES:
            yield violation(
                f"User name '{aggregate.name.strip()}' is reserved.",
                "name",
                kind=ViolationKind.BUSINESS_RULE,
            )
        if aggregate.name.strip().isdigit():
            yield violation(
                "User name cannot consist of digits only.",
                "name",
                kind=ViolationKind.BUSINESS_RULE,
            )


class ActivityRuleSet(RuleSet[ActivityDto]):
    """Activity lookup rows: GUID id and an upper-case activity name."""

    def core_properties(self, aggregate: ActivityDto, ctx: ValidationContext) -> Violations:
        yield from ctx.require("id", validate_guid(aggregate.id, "id"))
        yield from ctx.require(
            "activity",
            validate_string(
                aggregate.activity,
                "activity",
                min_length=ACTIVITY_MIN_LENGTH,
                max_length=ACTIVITY_MAX_LENGTH,
                pattern=ACTIVITY_PATTERN,
                pattern_message="activity must be upper-case letters, spaces or underscores.",
            ),
        )
