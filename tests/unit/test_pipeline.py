"""Tests for the four-phase validation pipeline."""

import uuid
from dataclasses import dataclass, field

import pytest

from adms.application.dtos import DocumentDto, UserDto
from adms.application.validation.pipeline import RuleSet, ValidationContext, ValidationPipeline
from adms.application.validation.rules import validate_guid, validate_string, violation
from adms.domain.enums import ViolationKind
from adms.domain.exceptions import ValidationException


@dataclass(frozen=True)
class Node:
    id: object
    label: object
    children: tuple = field(default_factory=tuple)
    parent: object = None


class NodeRuleSet(RuleSet[Node]):
    """Records the phases it runs so tests can observe ordering."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def core_properties(self, aggregate, ctx):
        self.calls.append("core")
        yield from ctx.require("id", validate_guid(aggregate.id, "id"))
        yield from ctx.require("label", validate_string(aggregate.label, "label", max_length=5))

    def business_rules(self, aggregate, ctx):
        self.calls.append("business")
        if ctx.present("label") and aggregate.label == "draft":
            yield violation("label cannot be 'draft'.", "label", kind=ViolationKind.BUSINESS_RULE)

    def cross_property_rules(self, aggregate, ctx):
        self.calls.append("cross")
        if ctx.sound("id", "label") and str(aggregate.id) == aggregate.label:
            yield violation("label repeats id.", "id", "label", kind=ViolationKind.CROSS_PROPERTY)

    def collection_rules(self, aggregate, ctx):
        self.calls.append("collection")
        yield from ctx.visit("parent", aggregate.parent)
        yield from ctx.visit_collection("children", aggregate.children)


@pytest.fixture
def rule_set() -> NodeRuleSet:
    return NodeRuleSet()


@pytest.fixture
def node_pipeline(settings, rule_set, now) -> ValidationPipeline:
    pipeline = ValidationPipeline(settings, clock=lambda: now)
    pipeline.register(Node, rule_set)
    return pipeline


class TestPhases:
    def test_every_phase_runs_in_order(self, node_pipeline, rule_set) -> None:
        node_pipeline.validate(Node(uuid.uuid4(), "ok"))
        assert rule_set.calls == ["core", "business", "cross", "collection"]

    def test_later_phases_run_after_core_failure(self, node_pipeline) -> None:
        bad_child = Node(None, "x")
        outcome = node_pipeline.validate(Node("not-a-guid", "draft", children=(bad_child,)))
        assert [v.kind for v in outcome] == [
            ViolationKind.FORMAT,
            ViolationKind.BUSINESS_RULE,
            ViolationKind.MISSING_REQUIRED,
        ]
        assert outcome[2].field_path == ("children[0].id",)

    def test_missing_field_skips_only_dependent_checks(self, node_pipeline) -> None:
        outcome = node_pipeline.validate(Node(uuid.uuid4(), None))
        assert outcome.messages() == ("label is required.",)

    def test_lazy_iteration_can_stop_early(self, node_pipeline, rule_set) -> None:
        violations = node_pipeline.iter_violations(Node(None, None))
        first = next(violations)
        assert first.field_path == ("id",)
        assert rule_set.calls == ["core"]


class TestNesting:
    def test_paths_are_prefixed_with_name_and_index(self, node_pipeline) -> None:
        grandchild = Node(uuid.uuid4(), "too long label")
        child = Node(uuid.uuid4(), "ok", children=(grandchild,))
        root = Node(uuid.uuid4(), "ok", children=(Node(uuid.uuid4(), "a"), child))
        outcome = node_pipeline.validate(root)
        assert outcome.fields() == ("children[1].children[0].label",)

    def test_none_collection_item_is_missing(self, node_pipeline) -> None:
        outcome = node_pipeline.validate(Node(uuid.uuid4(), "ok", children=(None,)))
        assert [(v.kind, v.field_path) for v in outcome] == [
            (ViolationKind.MISSING_REQUIRED, ("children[0]",))
        ]

    def test_single_reference_is_prefixed(self, node_pipeline) -> None:
        parent = Node(uuid.uuid4(), "draft")
        outcome = node_pipeline.validate(Node(uuid.uuid4(), "ok", parent=parent))
        assert outcome.fields() == ("parent.label",)


class TestEntryPoints:
    def test_validation_is_deterministic(self, pipeline, make_document_dto) -> None:
        document = make_document_dto(
            checksum="xyz", file_size=0, is_checked_out=True, is_deleted=True
        )
        first = pipeline.validate(document)
        second = pipeline.validate(document)
        assert first == second
        assert len(first) >= 3

    def test_validate_model_none(self, pipeline) -> None:
        outcome = pipeline.validate_model(None, DocumentDto)
        assert len(outcome) == 1
        assert outcome[0].kind is ViolationKind.MISSING_REQUIRED
        assert outcome[0].message == "DocumentDto instance is required and cannot be null."

    def test_validate_model_delegates(self, pipeline, user_dto) -> None:
        assert pipeline.validate_model(user_dto, UserDto).is_valid

    def test_unregistered_type_raises(self, pipeline) -> None:
        with pytest.raises(ValidationException, match="No rule set registered for Node"):
            pipeline.validate(Node(uuid.uuid4(), "ok"))

    def test_is_valid(self, pipeline, user_dto) -> None:
        assert pipeline.is_valid(user_dto)
        assert not pipeline.is_valid(UserDto(id=uuid.uuid4(), name="x"))

    def test_context_child_shares_clock(self, pipeline, now) -> None:
        ctx = pipeline.new_context()
        ctx.mark_missing("id")
        child = ctx.child()
        assert isinstance(child, ValidationContext)
        assert child.now == now
        assert child.present("id")
        assert not ctx.present("id")
