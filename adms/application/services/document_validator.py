"""Rule set for documents.

Covers file metadata, status flags, and the document's nested collections:
revisions, activity trail and both sides of its transfer history.
"""

from collections import Counter
from datetime import datetime

from adms.application.dtos import DocumentDto
from adms.application.services.activity_validator import (
    activity_count_rule,
    creation_activity_rule,
    owner_key_rule,
)
from adms.application.validation.audit_trail import check_transfer_pairs
from adms.application.validation.file_rules import (
    contains_unsafe_content,
    is_extension_allowed,
    is_legal_document_format,
    validate_checksum,
    validate_extension,
    validate_file_name,
    validate_file_size,
    validate_mime_consistency,
    validate_mime_type,
)
from adms.application.validation.pipeline import RuleSet, ValidationContext, Violations
from adms.application.validation.rules import validate_guid, validate_required_date, violation
from adms.core.constants import CREATED_ACTIVITY
from adms.domain.enums import ViolationKind
from adms.shared.utils.datetime import age_in_days, ensure_utc, is_unset


class DocumentRuleSet(RuleSet[DocumentDto]):
    def core_properties(self, aggregate: DocumentDto, ctx: ValidationContext) -> Violations:
        settings = ctx.settings
        yield from ctx.require("id", validate_guid(aggregate.id, "id"))
        yield from ctx.require("file_name", validate_file_name(aggregate.file_name))
        yield from ctx.require("extension", validate_extension(aggregate.extension))
        yield from ctx.require(
            "file_size",
            validate_file_size(
                aggregate.file_size,
                max_bytes=settings.max_file_size_bytes,
                warning_bytes=settings.large_file_warning_bytes,
            ),
        )
        yield from ctx.require("mime_type", validate_mime_type(aggregate.mime_type))
        yield from ctx.require("checksum", validate_checksum(aggregate.checksum))
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

    def business_rules(self, aggregate: DocumentDto, ctx: ValidationContext) -> Violations:
        settings = ctx.settings
        file_name = aggregate.file_name
        if ctx.present("file_name") and isinstance(file_name, str):
            if not any(ch.isalnum() for ch in file_name):
                yield violation(
                    "file_name must contain at least one letter or digit.",
                    "file_name",
                    kind=ViolationKind.BUSINESS_RULE,
                )
            if contains_unsafe_content(file_name):
                yield violation(
                    "file_name contains markup or potentially unsafe content.",
                    "file_name",
                    kind=ViolationKind.BUSINESS_RULE,
                )
        if (
            ctx.sound("extension")
            and is_extension_allowed(aggregate.extension)
            and not is_legal_document_format(aggregate.extension)
        ):
            yield violation(
                f"'{aggregate.extension}' is not a standard legal document format.",
                "extension",
                kind=ViolationKind.ADVISORY,
            )
        if len(aggregate.revisions) > settings.max_revisions_per_document:
            yield violation(
                f"Document has {len(aggregate.revisions)} revisions, more than the "
                f"expected {settings.max_revisions_per_document}.",
                "revisions",
                kind=ViolationKind.ADVISORY,
            )
        limit = settings.document_review_age_days
        if ctx.sound("creation_date") and age_in_days(aggregate.creation_date, ctx.now) > limit:
            yield violation(
                f"Document is older than {limit} days; review retention.",
                "creation_date",
                kind=ViolationKind.ADVISORY,
            )

    def cross_property_rules(self, aggregate: DocumentDto, ctx: ValidationContext) -> Violations:
        conflict = aggregate.status_flags.conflicting_flags()
        if conflict:
            yield violation(
                "A document cannot be checked out and deleted at the same time.",
                *conflict,
                kind=ViolationKind.CROSS_PROPERTY,
            )
        if ctx.sound("extension", "mime_type"):
            yield from validate_mime_consistency(aggregate.extension, aggregate.mime_type)
        if ctx.sound("file_name", "extension"):
            full_name = aggregate.file_name.strip() + aggregate.extension.strip()
            limit = ctx.settings.max_full_file_name_length
            if len(full_name) > limit:
                yield violation(
                    f"Full file name cannot exceed {limit} characters.",
                    "file_name",
                    "extension",
                    kind=ViolationKind.CROSS_PROPERTY,
                )

    def collection_rules(self, aggregate: DocumentDto, ctx: ValidationContext) -> Violations:
        yield from self.revision_rules(aggregate, ctx)

        activities = aggregate.activities
        yield from ctx.visit_collection("activities", activities)
        if ctx.present("id"):
            yield from owner_key_rule(activities, "activities", "document_id", aggregate.id)
        yield from creation_activity_rule(
            activities, "activities", is_deleted=aggregate.is_deleted
        )
        yield from self.creation_activity_date_rule(aggregate, ctx)
        yield from activity_count_rule(activities, "activities", ctx)

        for name in ("transfers_from", "transfers_to"):
            transfers = getattr(aggregate, name)
            yield from ctx.visit_collection(name, transfers)
            if ctx.present("id"):
                yield from owner_key_rule(transfers, name, "document_id", aggregate.id)
        yield from check_transfer_pairs(
            aggregate.transfers_from,
            aggregate.transfers_to,
            ctx.settings.counterpart_tolerance_seconds,
        )

    def creation_activity_date_rule(
        self, aggregate: DocumentDto, ctx: ValidationContext
    ) -> Violations:
        """A CREATED activity cannot predate the document it records."""
        if not ctx.sound("creation_date"):
            return
        created = ensure_utc(aggregate.creation_date)
        for index, activity in enumerate(aggregate.activities):
            if activity is None or activity.activity_name != CREATED_ACTIVITY:
                continue
            logged = activity.created_at
            if not isinstance(logged, datetime) or is_unset(logged):
                continue
            if ensure_utc(logged) < created:
                yield violation(
                    f"{CREATED_ACTIVITY} activity cannot be dated before the document was created.",
                    f"activities[{index}].created_at",
                    kind=ViolationKind.BUSINESS_RULE,
                )

    def revision_rules(self, aggregate: DocumentDto, ctx: ValidationContext) -> Violations:
        """Revisions validate individually, belong to this document and number 1..n."""
        revisions = aggregate.revisions
        yield from ctx.visit_collection("revisions", revisions)
        if ctx.present("id"):
            yield from owner_key_rule(revisions, "revisions", "document_id", aggregate.id)

        numbers = [
            r.revision_number
            for r in revisions
            if r is not None and isinstance(r.revision_number, int)
        ]
        duplicates = sorted(n for n, count in Counter(numbers).items() if count > 1)
        if duplicates:
            yield violation(
                f"Revision numbers must be unique; duplicated: {', '.join(map(str, duplicates))}.",
                "revisions",
                kind=ViolationKind.BUSINESS_RULE,
            )
        elif numbers and sorted(numbers) != list(range(1, len(numbers) + 1)):
            yield violation(
                "Revision numbers must be sequential starting from 1.",
                "revisions",
                kind=ViolationKind.BUSINESS_RULE,
            )

        if not ctx.sound("creation_date"):
            return
        created = ensure_utc(aggregate.creation_date)
        for index, revision in enumerate(revisions):
            revised = getattr(revision, "creation_date", None)
            if not isinstance(revised, datetime) or is_unset(revised):
                continue
            if ensure_utc(revised) < created:
                yield violation(
                    "Revision cannot be created before its document.",
                    f"revisions[{index}].creation_date",
                    kind=ViolationKind.BUSINESS_RULE,
                )
