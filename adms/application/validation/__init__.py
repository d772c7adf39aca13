"""Validation framework: violations, rule primitives, pipeline and audit-trail checks."""

from adms.application.validation.audit_trail import (
    AuditRecordRuleSet,
    CounterpartQuery,
    TransferRecordRuleSet,
    check_transfer_pairs,
    counterpart_query,
    is_counterpart,
    reference_mismatch,
)
from adms.application.validation.pipeline import (
    RuleSet,
    ValidationContext,
    ValidationPipeline,
)
from adms.application.validation.violations import ValidationOutcome, ValidationViolation

__all__ = [
    "AuditRecordRuleSet",
    "CounterpartQuery",
    "RuleSet",
    "TransferRecordRuleSet",
    "ValidationContext",
    "ValidationOutcome",
    "ValidationPipeline",
    "ValidationViolation",
    "check_transfer_pairs",
    "counterpart_query",
    "is_counterpart",
    "reference_mismatch",
]
