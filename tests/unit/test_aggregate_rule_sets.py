"""Tests for the document, revision, matter and user rule sets."""

import uuid
from dataclasses import replace
from datetime import timedelta

import pytest

from adms.application.dtos import MatterActivityUserDto, RevisionDto, UserDto
from adms.application.services import create_validation_pipeline
from adms.core.config import MEGABYTE, Settings, get_settings
from adms.domain.enums import EntityStatus, ViolationKind


def cited(outcome, kind: ViolationKind) -> list[tuple[str, ...]]:
    return [v.field_path for v in outcome if v.kind is kind]


class TestDocumentRuleSet:
    def test_valid_document(self, pipeline, make_document_dto) -> None:
        document = make_document_dto()
        assert list(pipeline.validate(document)) == []
        assert document.is_valid
        assert document.status is EntityStatus.ACTIVE

    def test_checked_out_and_deleted_cites_both_flags(self, pipeline, make_document_dto) -> None:
        document = make_document_dto(is_checked_out=True, is_deleted=True)
        assert cited(pipeline.validate(document), ViolationKind.CROSS_PROPERTY) == [
            ("is_checked_out", "is_deleted")
        ]
        assert not document.is_valid
        assert document.status is EntityStatus.DELETED

    @pytest.mark.parametrize("checksum", ["a" * 63, "a" * 65, "z" * 64])
    def test_bad_checksum(self, pipeline, make_document_dto, checksum: str) -> None:
        document = make_document_dto(checksum=checksum)
        assert cited(pipeline.validate(document), ViolationKind.FORMAT) == [("checksum",)]
        assert not document.is_valid

    def test_mime_type_must_match_extension(self, pipeline, make_document_dto) -> None:
        document = make_document_dto(mime_type="image/png")
        assert cited(pipeline.validate(document), ViolationKind.CROSS_PROPERTY) == [
            ("extension", "mime_type")
        ]

    def test_missing_extension_skips_mime_consistency(self, pipeline, make_document_dto) -> None:
        outcome = pipeline.validate(make_document_dto(extension=None, mime_type="image/png"))
        assert cited(outcome, ViolationKind.MISSING_REQUIRED) == [("extension",)]
        assert cited(outcome, ViolationKind.CROSS_PROPERTY) == []

    def test_full_file_name_limit(self, make_document_dto, now) -> None:
        strict = create_validation_pipeline(
            Settings(_env_file=None, max_full_file_name_length=20), clock=lambda: now
        )
        outcome = strict.validate(make_document_dto(file_name="Notice of Motion Final"))
        assert cited(outcome, ViolationKind.CROSS_PROPERTY) == [("file_name", "extension")]

    def test_unsafe_file_name(self, pipeline, make_document_dto) -> None:
        outcome = pipeline.validate(make_document_dto(file_name="brief.exe notes"))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("file_name",)]

    def test_file_name_needs_alphanumeric(self, pipeline, make_document_dto) -> None:
        outcome = pipeline.validate(make_document_dto(file_name="---"))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("file_name",)]

    def test_large_and_non_legal_files_are_advisory(self, pipeline, make_document_dto) -> None:
        document = make_document_dto(
            extension=".png", mime_type="image/png", file_size=75 * MEGABYTE
        )
        outcome = pipeline.validate(document)
        assert outcome.is_valid
        assert cited(outcome, ViolationKind.ADVISORY) == [("file_size",), ("extension",)]

    def test_oversized_file_is_rejected(self, pipeline, make_document_dto) -> None:
        document = make_document_dto(file_size=101 * MEGABYTE)
        assert cited(pipeline.validate(document), ViolationKind.FORMAT) == [("file_size",)]
        assert not document.is_valid

    def test_missing_created_activity(self, pipeline, make_document_dto) -> None:
        document = make_document_dto()
        record = document.activities[0]
        checked_in = replace(
            record, document_activity=replace(record.document_activity, activity="CHECKED IN")
        )
        outcome = pipeline.validate(replace(document, activities=(checked_in,)))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("activities",)]
        deleted = replace(document, activities=(checked_in,), is_deleted=True)
        assert cited(pipeline.validate(deleted), ViolationKind.BUSINESS_RULE) == []

    def test_activity_owned_by_other_document(self, pipeline, make_document_dto) -> None:
        document = make_document_dto()
        stray = replace(document.activities[0], document_id=uuid.uuid4())
        outcome = pipeline.validate(replace(document, activities=(stray,)))
        assert cited(outcome, ViolationKind.REFERENTIAL_INTEGRITY) == [
            ("activities[0].document_id",)
        ]

    def test_revisions_are_validated_with_paths(
        self, pipeline, make_document_dto, make_revision_dto
    ) -> None:
        document = make_document_dto()
        revisions = (
            make_revision_dto(document.id, 1),
            make_revision_dto(document.id, 2),
            make_revision_dto(document.id, 3, id=None),
        )
        outcome = pipeline.validate(replace(document, revisions=revisions))
        assert cited(outcome, ViolationKind.MISSING_REQUIRED) == [("revisions[2].id",)]

    def test_revision_numbers_sequential_and_unique(
        self, pipeline, make_document_dto, make_revision_dto
    ) -> None:
        document = make_document_dto()
        gap = (make_revision_dto(document.id, 1), make_revision_dto(document.id, 3))
        outcome = pipeline.validate(replace(document, revisions=gap))
        assert [v.message for v in outcome] == [
            "Revision numbers must be sequential starting from 1."
        ]
        dup = (make_revision_dto(document.id, 1), make_revision_dto(document.id, 1))
        outcome = pipeline.validate(replace(document, revisions=dup))
        assert [v.message for v in outcome] == ["Revision numbers must be unique; duplicated: 1."]

    def test_revision_before_document(
        self, pipeline, make_document_dto, make_revision_dto
    ) -> None:
        document = make_document_dto()
        early = make_revision_dto(
            document.id,
            1,
            creation_date=document.creation_date - timedelta(days=1),
            modification_date=document.creation_date - timedelta(hours=20),
        )
        outcome = pipeline.validate(replace(document, revisions=(early,)))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("revisions[0].creation_date",)]

    def test_created_activity_before_document(self, pipeline, make_document_dto) -> None:
        document = make_document_dto()
        early = replace(
            document.activities[0],
            created_at=document.creation_date - timedelta(minutes=10, seconds=4),
        )
        outcome = pipeline.validate(replace(document, activities=(early,)))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("activities[0].created_at",)]

    def test_is_valid_follows_configured_size_limit(
        self, make_document_dto, monkeypatch, now
    ) -> None:
        monkeypatch.setenv("ADMS_MAX_FILE_SIZE_BYTES", str(200 * MEGABYTE))
        get_settings.cache_clear()
        try:
            document = make_document_dto(file_size=150 * MEGABYTE)
            pipeline = create_validation_pipeline(get_settings(), clock=lambda: now)
            assert document.is_valid
            assert pipeline.validate(document).is_valid
        finally:
            get_settings.cache_clear()

    def test_none_revision_is_missing(self, pipeline, make_document_dto) -> None:
        outcome = pipeline.validate(make_document_dto(revisions=(None,)))
        assert cited(outcome, ViolationKind.MISSING_REQUIRED) == [("revisions[0]",)]

    def test_state_helpers(self, make_document_dto) -> None:
        active = make_document_dto()
        checked_out = make_document_dto(is_checked_out=True)
        deleted = make_document_dto(is_deleted=True)
        assert active.can_be_checked_out() and active.can_be_deleted()
        assert checked_out.can_be_checked_in() and not checked_out.can_be_deleted()
        assert deleted.can_be_restored() and not deleted.can_be_checked_out()
        assert active.full_file_name == "Statement of Claim.pdf"
        assert active.formatted_file_size == "240.0 KB"


class TestRevisionRuleSet:
    def test_modification_before_creation(self, pipeline, make_revision_dto) -> None:
        revision = make_revision_dto(uuid.uuid4())
        bad = replace(revision, modification_date=revision.creation_date - timedelta(minutes=1))
        assert cited(pipeline.validate(bad), ViolationKind.CROSS_PROPERTY) == [
            ("creation_date", "modification_date")
        ]

    def test_revision_number_range(self, pipeline, make_revision_dto) -> None:
        outcome = pipeline.validate(make_revision_dto(uuid.uuid4(), 0))
        assert cited(outcome, ViolationKind.FORMAT) == [("revision_number",)]

    def test_old_revision_is_advisory(self, pipeline, make_revision_dto, now) -> None:
        created = now - timedelta(days=4000, minutes=13)
        revision = RevisionDto(
            id=uuid.uuid4(),
            document_id=uuid.uuid4(),
            revision_number=1,
            creation_date=created,
            modification_date=created + timedelta(days=1),
        )
        outcome = pipeline.validate(revision)
        assert outcome.is_valid
        assert cited(outcome, ViolationKind.ADVISORY) == [("creation_date",)]


class TestMatterRuleSet:
    def test_valid_matter(self, pipeline, make_matter_dto) -> None:
        matter = make_matter_dto()
        assert list(pipeline.validate(matter)) == []
        assert matter.is_valid

    def test_archived_and_deleted_conflict(self, pipeline, make_matter_dto) -> None:
        matter = make_matter_dto(is_archived=True, is_deleted=True)
        assert cited(pipeline.validate(matter), ViolationKind.CROSS_PROPERTY) == [
            ("is_archived", "is_deleted")
        ]
        assert not matter.is_valid

    @pytest.mark.parametrize("description", ["TBD", "Lorem ipsum dolor", "Smith estate - todo"])
    def test_placeholder_text(self, pipeline, make_matter_dto, description: str) -> None:
        outcome = pipeline.validate(make_matter_dto(description=description))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("description",)]

    def test_reserved_description(self, pipeline, make_matter_dto) -> None:
        matter = make_matter_dto(description="Sample")
        assert cited(pipeline.validate(matter), ViolationKind.BUSINESS_RULE) == [("description",)]
        assert not matter.is_valid

    @pytest.mark.parametrize(
        "description", ["Acme.Com licensing dispute", "Breach of data: Smith v Jones"]
    )
    def test_plain_text_with_dots_and_colons(
        self, pipeline, make_matter_dto, description: str
    ) -> None:
        assert list(pipeline.validate(make_matter_dto(description=description))) == []

    @pytest.mark.parametrize(
        "description", ["<b>Estate</b> of R. Alvarez", "Alvarez javascript:void(0)"]
    )
    def test_markup_in_description(self, pipeline, make_matter_dto, description: str) -> None:
        outcome = pipeline.validate(make_matter_dto(description=description))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("description",)]

    def test_description_length(self, pipeline, make_matter_dto) -> None:
        outcome = pipeline.validate(make_matter_dto(description="ab"))
        assert cited(outcome, ViolationKind.FORMAT) == [("description",)]

    def test_nested_document_paths(self, pipeline, make_matter_dto, make_document_dto) -> None:
        documents = (make_document_dto(), make_document_dto(checksum="abc"))
        outcome = pipeline.validate(make_matter_dto(documents=documents))
        assert outcome.fields() == ("documents[1].checksum",)

    def test_archived_matter_with_checked_out_document(
        self, pipeline, make_matter_dto, make_document_dto
    ) -> None:
        matter = make_matter_dto(
            is_archived=True, documents=(make_document_dto(is_checked_out=True),)
        )
        assert cited(pipeline.validate(matter), ViolationKind.STATE_ILLEGAL) == [
            ("documents[0].is_checked_out",)
        ]

    def test_matter_activity_trail(
        self, pipeline, make_matter_dto, make_activity_dto, user_dto, now
    ) -> None:
        matter_id = uuid.uuid4()
        viewed = MatterActivityUserDto(
            matter_id=matter_id,
            matter_activity_id=uuid.uuid4(),
            user_id=user_dto.id,
            created_at=now - timedelta(hours=5, minutes=3),
            matter_activity=None,
            user=user_dto,
        )
        named = replace(
            viewed, matter_activity=make_activity_dto("VIEWED", viewed.matter_activity_id)
        )
        assert list(pipeline.validate(make_matter_dto(id=matter_id, activities=(viewed,)))) == []
        outcome = pipeline.validate(make_matter_dto(id=matter_id, activities=(named,)))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("activities",)]


class TestUserRuleSet:
    @pytest.mark.parametrize("name", ["admin", "SYSTEM", "12345"])
    def test_reserved_or_numeric_names(self, pipeline, name: str) -> None:
        outcome = pipeline.validate(UserDto(id=uuid.uuid4(), name=name))
        assert cited(outcome, ViolationKind.BUSINESS_RULE) == [("name",)]

    def test_name_format(self, pipeline) -> None:
        outcome = pipeline.validate(UserDto(id=uuid.uuid4(), name="-jane"))
        assert cited(outcome, ViolationKind.FORMAT) == [("name",)]
