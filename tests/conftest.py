"""Pytest configuration and fixtures for the ADMS validation framework.

Provides a fixed reference instant, explicit Settings, a fully registered
pipeline, and factories for valid entities and DTOs. Factories accept
keyword overrides so each test states only what it changes.
"""

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from adms.application.dtos import (
    ActivityDto,
    DocumentActivityUserDto,
    DocumentDto,
    MatterDto,
    RevisionDto,
    TransferRecordDto,
    UserDto,
)
from adms.application.services import create_validation_pipeline
from adms.core.config import Settings
from adms.domain.entities import (
    ActivityEntity,
    DocumentActivityUserEntity,
    DocumentEntity,
    MatterEntity,
    RevisionEntity,
    UserEntity,
)
from adms.domain.enums import TransferDirection

# Tuesday afternoon, away from round hours and the maintenance window;
# records are created the Monday before, inside business hours
NOW = datetime(2026, 3, 10, 14, 37, 12, tzinfo=UTC)
CREATED_AT = NOW - timedelta(days=1, minutes=17, seconds=41)
CHECKSUM = "a3f1" * 16

USER_ID = uuid.UUID("11111111-1111-4111-8111-111111111111")
CREATED_ID = uuid.UUID("22222222-2222-4222-8222-222222222222")
MOVED_ID = uuid.UUID("33333333-3333-4333-8333-333333333333")
SOURCE_MATTER_ID = uuid.UUID("44444444-4444-4444-8444-444444444444")
TARGET_MATTER_ID = uuid.UUID("55555555-5555-4555-8555-555555555555")


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the process environment."""
    return Settings(_env_file=None)


@pytest.fixture
def pipeline(settings: Settings):
    return create_validation_pipeline(settings, clock=lambda: NOW)


@pytest.fixture
def user_dto() -> UserDto:
    return UserDto(id=USER_ID, name="Jane Smith")


@pytest.fixture
def make_activity_dto():
    def _make(activity: str = "CREATED", id: uuid.UUID = CREATED_ID) -> ActivityDto:
        return ActivityDto(id=id, activity=activity)

    return _make


@pytest.fixture
def make_document_dto(make_activity_dto, user_dto):
    """Build a valid document DTO; a CREATED activity is attached unless overridden."""

    def _make(**overrides) -> DocumentDto:
        doc_id = overrides.pop("id", uuid.uuid4())
        fields = {
            "id": doc_id,
            "file_name": "Statement of Claim",
            "extension": ".pdf",
            "file_size": 245_760,
            "mime_type": "application/pdf",
            "checksum": CHECKSUM,
            "creation_date": CREATED_AT,
            "activities": (
                DocumentActivityUserDto(
                    document_id=doc_id,
                    document_activity_id=CREATED_ID,
                    user_id=USER_ID,
                    created_at=CREATED_AT,
                    document_activity=make_activity_dto(),
                    user=user_dto,
                ),
            ),
        }
        fields.update(overrides)
        return DocumentDto(**fields)

    return _make


@pytest.fixture
def make_revision_dto():
    def _make(document_id: uuid.UUID, revision_number: int = 1, **overrides) -> RevisionDto:
        fields = {
            "id": uuid.uuid4(),
            "document_id": document_id,
            "revision_number": revision_number,
            "creation_date": CREATED_AT + timedelta(hours=revision_number),
            "modification_date": CREATED_AT + timedelta(hours=revision_number, minutes=5),
        }
        fields.update(overrides)
        return RevisionDto(**fields)

    return _make


@pytest.fixture
def make_matter_dto():
    def _make(**overrides) -> MatterDto:
        fields = {
            "id": uuid.uuid4(),
            "description": "Acme Holdings v. Brightline Logistics",
            "creation_date": CREATED_AT,
        }
        fields.update(overrides)
        return MatterDto(**fields)

    return _make


@pytest.fixture
def make_transfer_dto(make_activity_dto, make_document_dto, make_matter_dto, user_dto):
    """Build one side of a MOVED transfer from SOURCE_MATTER_ID to TARGET_MATTER_ID."""

    def _make(
        direction: TransferDirection = TransferDirection.TO, **overrides
    ) -> TransferRecordDto:
        document = overrides.pop("document", None) or make_document_dto(activities=())
        if direction is TransferDirection.TO:
            matter_id, counterpart_id = TARGET_MATTER_ID, SOURCE_MATTER_ID
        else:
            matter_id, counterpart_id = SOURCE_MATTER_ID, TARGET_MATTER_ID
        fields = {
            "direction": direction,
            "matter_id": matter_id,
            "document_id": document.id,
            "matter_document_activity_id": MOVED_ID,
            "user_id": USER_ID,
            "created_at": CREATED_AT,
            "counterpart_matter_id": counterpart_id,
            "matter_document_activity": make_activity_dto("MOVED", MOVED_ID),
            "matter": make_matter_dto(id=matter_id),
            "counterpart_matter": make_matter_dto(id=counterpart_id),
            "document": document,
            "user": user_dto,
        }
        fields.update(overrides)
        return TransferRecordDto(**fields)

    return _make


@pytest.fixture
def make_document_entity():
    """Build a valid document entity with one revision and a CREATED activity."""

    def _make(**overrides) -> DocumentEntity:
        doc_id = overrides.pop("id", uuid.uuid4())
        user = UserEntity(id=USER_ID, name="Jane Smith")
        entity = DocumentEntity(
            id=doc_id,
            file_name="Affidavit of Service",
            extension=".docx",
            file_size=48_213,
            mime_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            checksum=CHECKSUM,
            creation_date=CREATED_AT,
            revisions=[
                RevisionEntity(
                    id=uuid.uuid4(),
                    document_id=doc_id,
                    revision_number=1,
                    creation_date=CREATED_AT + timedelta(minutes=1),
                    modification_date=CREATED_AT + timedelta(minutes=9),
                )
            ],
            document_activity_users=[
                DocumentActivityUserEntity(
                    document_id=doc_id,
                    document_activity_id=CREATED_ID,
                    user_id=USER_ID,
                    created_at=CREATED_AT,
                    document_activity=ActivityEntity(id=CREATED_ID, activity="CREATED"),
                    user=user,
                )
            ],
        )
        for name, value in overrides.items():
            setattr(entity, name, value)
        return entity

    return _make


@pytest.fixture
def make_matter_entity():
    def _make(**overrides) -> MatterEntity:
        entity = MatterEntity(
            id=uuid.uuid4(),
            description="Estate of R. Alvarez",
            creation_date=CREATED_AT,
        )
        for name, value in overrides.items():
            setattr(entity, name, value)
        return entity

    return _make
