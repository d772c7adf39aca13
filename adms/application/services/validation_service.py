"""Default validation pipeline with every aggregate's rule set registered."""

from collections.abc import Callable
from datetime import datetime
from functools import lru_cache

from adms.application.dtos import (
    ActivityDto,
    DocumentActivityUserDto,
    DocumentDto,
    MatterActivityUserDto,
    MatterDto,
    RevisionActivityUserDto,
    RevisionDto,
    TransferRecordDto,
    UserDto,
)
from adms.application.services.activity_validator import (
    DocumentActivityRuleSet,
    MatterActivityRuleSet,
    RevisionActivityRuleSet,
)
from adms.application.services.document_validator import DocumentRuleSet
from adms.application.services.matter_validator import MatterRuleSet
from adms.application.services.revision_validator import RevisionRuleSet
from adms.application.services.user_validator import ActivityRuleSet, UserRuleSet
from adms.application.validation.audit_trail import TransferRecordRuleSet
from adms.application.validation.pipeline import ValidationPipeline
from adms.core.config import Settings
from adms.shared.utils.datetime import utc_now


def create_validation_pipeline(
    settings: Settings | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> ValidationPipeline:
    """Build a pipeline with the rule set of every DTO registered."""
    pipeline = ValidationPipeline(settings, clock)
    pipeline.register(UserDto, UserRuleSet())
    pipeline.register(ActivityDto, ActivityRuleSet())
    pipeline.register(RevisionDto, RevisionRuleSet())
    pipeline.register(DocumentDto, DocumentRuleSet())
    pipeline.register(MatterDto, MatterRuleSet())
    pipeline.register(DocumentActivityUserDto, DocumentActivityRuleSet())
    pipeline.register(MatterActivityUserDto, MatterActivityRuleSet())
    pipeline.register(RevisionActivityUserDto, RevisionActivityRuleSet())
    pipeline.register(TransferRecordDto, TransferRecordRuleSet())
    return pipeline


@lru_cache
def get_validation_pipeline() -> ValidationPipeline:
    """Return the shared pipeline built from get_settings()."""
    return create_validation_pipeline()
