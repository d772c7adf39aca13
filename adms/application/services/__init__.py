"""Application services: per-aggregate rule sets, the default pipeline and conversion."""

from adms.application.services.activity_validator import (
    DocumentActivityRuleSet,
    MatterActivityRuleSet,
    RevisionActivityRuleSet,
)
from adms.application.services.conversion_service import (
    BulkConversionResult,
    ConversionFailure,
    ConversionSummary,
    EntityConversionGateway,
    convert,
    convert_many,
)
from adms.application.services.document_validator import DocumentRuleSet
from adms.application.services.matter_validator import MatterRuleSet
from adms.application.services.revision_validator import RevisionRuleSet
from adms.application.services.user_validator import ActivityRuleSet, UserRuleSet
from adms.application.services.validation_service import (
    create_validation_pipeline,
    get_validation_pipeline,
)

__all__ = [
    "ActivityRuleSet",
    "BulkConversionResult",
    "ConversionFailure",
    "ConversionSummary",
    "DocumentActivityRuleSet",
    "DocumentRuleSet",
    "EntityConversionGateway",
    "MatterActivityRuleSet",
    "MatterRuleSet",
    "RevisionActivityRuleSet",
    "RevisionRuleSet",
    "UserRuleSet",
    "convert",
    "convert_many",
    "create_validation_pipeline",
    "get_validation_pipeline",
]
