"""Tests for ValidationViolation and ValidationOutcome."""

from adms.application.validation.violations import ValidationOutcome, ValidationViolation
from adms.domain.enums import ViolationKind

MISSING = ValidationViolation("id is required.", ("id",), ViolationKind.MISSING_REQUIRED)
CONFLICT = ValidationViolation(
    "Flags conflict.", ("is_checked_out", "is_deleted"), ViolationKind.CROSS_PROPERTY
)
ADVISORY = ValidationViolation("Large file.", ("file_size",), ViolationKind.ADVISORY)


class TestValidationViolation:
    def test_prefixed_reroots_every_member(self) -> None:
        moved = CONFLICT.prefixed("documents[2]")
        assert moved.field_path == ("documents[2].is_checked_out", "documents[2].is_deleted")
        assert moved.message == CONFLICT.message
        assert moved.kind is CONFLICT.kind
        assert CONFLICT.field_path == ("is_checked_out", "is_deleted")

    def test_prefixed_without_members_cites_prefix(self) -> None:
        bare = ValidationViolation("Something is off.")
        assert bare.prefixed("user").field_path == ("user",)

    def test_nested_prefixes_compose(self) -> None:
        nested = MISSING.prefixed("revisions[0]").prefixed("documents[1]")
        assert nested.field_path == ("documents[1].revisions[0].id",)

    def test_blocking(self) -> None:
        assert MISSING.is_blocking
        assert not ADVISORY.is_blocking


class TestValidationOutcome:
    def test_empty_outcome(self) -> None:
        outcome = ValidationOutcome()
        assert outcome.is_valid
        assert len(outcome) == 0
        assert outcome.summary() == "No validation errors."

    def test_advisories_do_not_invalidate(self) -> None:
        outcome = ValidationOutcome([ADVISORY])
        assert outcome.is_valid
        assert outcome.advisories == (ADVISORY,)
        assert outcome.blocking == ()

    def test_accessors(self) -> None:
        outcome = ValidationOutcome([MISSING, CONFLICT, ADVISORY])
        assert not outcome.is_valid
        assert outcome[1] is CONFLICT
        assert list(outcome) == [MISSING, CONFLICT, ADVISORY]
        assert outcome.blocking == (MISSING, CONFLICT)
        assert outcome.of_kind(ViolationKind.CROSS_PROPERTY) == (CONFLICT,)
        assert outcome.fields() == ("id", "is_checked_out", "is_deleted", "file_size")
        assert outcome.messages() == ("id is required.", "Flags conflict.", "Large file.")
        assert outcome.count_by_kind()[ViolationKind.ADVISORY] == 1

    def test_equality_is_ordered(self) -> None:
        assert ValidationOutcome([MISSING, ADVISORY]) == ValidationOutcome([MISSING, ADVISORY])
        assert ValidationOutcome([MISSING, ADVISORY]) != ValidationOutcome([ADVISORY, MISSING])
        assert ValidationOutcome([MISSING]) == [MISSING]

    def test_summary(self) -> None:
        summary = ValidationOutcome([MISSING, CONFLICT]).summary()
        assert summary.splitlines() == [
            "Validation failed with 2 error(s):",
            "  - id is required. (id)",
            "  - Flags conflict. (is_checked_out, is_deleted)",
        ]
