"""Entity conversion gateway: persistence entities in, validated DTOs out.

from_entity maps one entity and runs the full validation pipeline; it
either returns a DTO with no blocking violations or raises
EntityConversionException carrying the entity's natural key and the
aggregated messages.

from_entities converts a batch. STRICT mode raises on the first failure
with its position ("item 7 of 42"). TOLERANT mode skips failures, logs
each one, and returns the valid DTOs with counts and a summary grouping
failures by field and by message. With max_workers > 1 items are validated
on a thread pool and merged in input order, so the result is identical to
the sequential one.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial
from typing import Any, Generic, TypeVar

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
from adms.application.services.validation_service import (
    create_validation_pipeline,
    get_validation_pipeline,
)
from adms.application.validation.pipeline import ValidationPipeline
from adms.application.validation.violations import ValidationOutcome
from adms.core.config import Settings
from adms.domain.entities import (
    ActivityEntity,
    DocumentActivityUserEntity,
    DocumentEntity,
    MatterActivityUserEntity,
    MatterDocumentActivityUserFromEntity,
    MatterDocumentActivityUserToEntity,
    MatterEntity,
    RevisionActivityUserEntity,
    RevisionEntity,
    UserEntity,
)
from adms.domain.enums import ConversionMode
from adms.domain.exceptions import EntityConversionException, ValidationException
from adms.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

D = TypeVar("D")

NO_FIELD = "<entity>"
_INDEX = re.compile(r"\[\d+\]")

DTO_FOR_ENTITY: dict[type, type] = {
    ActivityEntity: ActivityDto,
    DocumentActivityUserEntity: DocumentActivityUserDto,
    DocumentEntity: DocumentDto,
    MatterActivityUserEntity: MatterActivityUserDto,
    MatterDocumentActivityUserFromEntity: TransferRecordDto,
    MatterDocumentActivityUserToEntity: TransferRecordDto,
    MatterEntity: MatterDto,
    RevisionActivityUserEntity: RevisionActivityUserDto,
    RevisionEntity: RevisionDto,
    UserEntity: UserDto,
}


@dataclass(frozen=True)
class ConversionFailure:
    """One skipped item of a tolerant bulk conversion."""

    index: int
    entity_key: str
    reason: str
    field_paths: tuple[str, ...]
    messages: tuple[str, ...]

    @classmethod
    def from_exception(cls, index: int, error: EntityConversionException) -> ConversionFailure:
        return cls(
            index=index,
            entity_key=error.entity_key,
            reason=error.details.get("reason", "validation"),
            field_paths=tuple(error.details.get("fields", ())),
            messages=error.messages,
        )


@dataclass(frozen=True)
class ConversionSummary:
    """Aggregate view of a tolerant bulk conversion.

    Attributes:
        processed_count: Items attempted.
        succeeded_count: Items converted.
        failed_count: Items skipped.
        failures_by_field: (field, failures citing it), most frequent first.
            Collection indices are folded ('revisions[]'); failures citing
            no field are counted under '<entity>'.
        top_messages: (message, occurrences), most frequent first.
    """

    processed_count: int = 0
    succeeded_count: int = 0
    failed_count: int = 0
    failures_by_field: tuple[tuple[str, int], ...] = ()
    top_messages: tuple[tuple[str, int], ...] = ()

    @classmethod
    def from_failures(
        cls,
        failures: Sequence[ConversionFailure],
        processed_count: int,
        top_n: int = 5,
    ) -> ConversionSummary:
        by_field: Counter[str] = Counter()
        by_message: Counter[str] = Counter()
        for failure in failures:
            folded = {_INDEX.sub("[]", path) for path in failure.field_paths} or {NO_FIELD}
            by_field.update(folded)
            by_message.update(failure.messages)
        return cls(
            processed_count=processed_count,
            succeeded_count=processed_count - len(failures),
            failed_count=len(failures),
            failures_by_field=_ranked(by_field),
            top_messages=_ranked(by_message)[:top_n],
        )

    @property
    def success_rate(self) -> float:
        """Fraction of processed items that converted (0.0 for an empty batch)."""
        if self.processed_count == 0:
            return 0.0
        return self.succeeded_count / self.processed_count

    def describe(self) -> str:
        """Human-readable multi-line summary."""
        lines = [
            f"Processed {self.processed_count} item(s): {self.succeeded_count} succeeded, "
            f"{self.failed_count} failed ({self.success_rate:.1%} success)."
        ]
        if self.failures_by_field:
            lines.append("Failures by field:")
            lines.extend(f"  - {name}: {count}" for name, count in self.failures_by_field)
        if self.top_messages:
            lines.append("Most frequent errors:")
            lines.extend(f"  - ({count}x) {message}" for message, count in self.top_messages)
        return "\n".join(lines)


def _ranked(counter: Counter[str]) -> tuple[tuple[str, int], ...]:
    return tuple(sorted(counter.items(), key=lambda item: (-item[1], item[0])))


@dataclass(frozen=True)
class BulkConversionResult(Generic[D]):
    """Result of a tolerant bulk conversion; succeeded keeps input order."""

    succeeded: tuple[D, ...] = ()
    processed_count: int = 0
    failed_count: int = 0
    failures: tuple[ConversionFailure, ...] = ()
    summary: ConversionSummary = field(default_factory=ConversionSummary)

    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded)


class EntityConversionGateway(Generic[D]):
    """Converts entities of one shape into validated DTOs of dto_type."""

    def __init__(
        self,
        dto_type: type[D],
        pipeline: ValidationPipeline | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.dto_type = dto_type
        if pipeline is None:
            pipeline = (
                create_validation_pipeline(settings)
                if settings is not None
                else get_validation_pipeline()
            )
        self.pipeline = pipeline
        self.settings = settings or pipeline.settings

    @property
    def type_name(self) -> str:
        return self.dto_type.__name__

    def describe(self, entity: Any) -> str:
        return self.dto_type.describe_entity(entity)  # type: ignore[attr-defined]

    def from_entity(self, entity: Any, *, now: datetime | None = None) -> D:
        """Map and validate one entity.

        Raises:
            EntityConversionException: entity is None, cannot be mapped, or
                the DTO has blocking violations (any violation when
                advisory_blocks_conversion is set).
        """
        return self._convert(entity, self.pipeline.resolve_now(now))

    def _convert(self, entity: Any, now: datetime) -> D:
        if entity is None:
            raise EntityConversionException(
                self.type_name,
                "<none>",
                [f"{self.type_name} source entity is required and cannot be null."],
                reason="missing",
            )
        key = self.describe(entity)
        try:
            dto = self.dto_type.map_entity(entity)  # type: ignore[attr-defined]
        except (AttributeError, TypeError, ValueError) as e:
            raise EntityConversionException(
                self.type_name,
                key,
                [f"Entity could not be mapped: {e}"],
                reason="mapping",
            ) from e
        try:
            outcome = self.pipeline.validate(dto, now=now)
        except (AttributeError, TypeError, ValueError) as e:
            raise EntityConversionException(
                self.type_name,
                key,
                [f"Entity could not be validated: {e}"],
                reason="validation",
            ) from e
        rejected = ValidationOutcome(
            outcome if self.settings.advisory_blocks_conversion else outcome.blocking
        )
        if rejected:
            raise EntityConversionException(
                self.type_name,
                key,
                rejected.messages(),
                fields=rejected.fields(),
                violations=tuple(rejected),
            )
        return dto

    def _attempt(
        self, entity: Any, now: datetime
    ) -> tuple[D | None, EntityConversionException | None]:
        try:
            return self._convert(entity, now), None
        except EntityConversionException as e:
            return None, e

    def from_entities(
        self,
        entities: Iterable[Any],
        mode: ConversionMode = ConversionMode.STRICT,
        *,
        now: datetime | None = None,
        max_workers: int | None = None,
    ) -> list[D] | BulkConversionResult[D]:
        """Convert a batch of entities.

        Args:
            entities: Source entities; consumed once.
            mode: STRICT returns list[D] and raises on the first failure;
                TOLERANT returns a BulkConversionResult.
            now: Reference instant shared by every item (defaults to the clock).
            max_workers: Thread pool size for TOLERANT mode; None or 1 runs
                sequentially.

        Raises:
            EntityConversionException: STRICT mode only, with item_index and
                item_count set.
        """
        items = list(entities)
        moment = self.pipeline.resolve_now(now)
        if ConversionMode(mode) is ConversionMode.STRICT:
            return self._convert_strict(items, moment)
        return self._convert_tolerant(items, moment, max_workers)

    def _convert_strict(self, items: list[Any], now: datetime) -> list[D]:
        converted: list[D] = []
        for index, entity in enumerate(items):
            try:
                converted.append(self._convert(entity, now))
            except EntityConversionException as e:
                positioned = e.at_position(index, len(items))
                logger.debug("Strict %s conversion aborted: %s", self.type_name, positioned.message)
                raise positioned from e
        return converted

    def _convert_tolerant(
        self,
        items: list[Any],
        now: datetime,
        max_workers: int | None,
    ) -> BulkConversionResult[D]:
        attempt = partial(self._attempt, now=now)
        if max_workers is not None and max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                attempts = list(executor.map(attempt, items))
        else:
            attempts = [attempt(entity) for entity in items]

        succeeded: list[D] = []
        failures: list[ConversionFailure] = []
        for index, (dto, error) in enumerate(attempts):
            if error is None:
                succeeded.append(dto)  # type: ignore[arg-type]
                continue
            failure = ConversionFailure.from_exception(index, error)
            failures.append(failure)
            logger.warning(
                "Skipping %s item %d of %d (%s): %s",
                self.type_name,
                index + 1,
                len(items),
                failure.entity_key,
                "; ".join(failure.messages),
            )

        summary = ConversionSummary.from_failures(
            failures, len(items), top_n=self.settings.summary_top_n
        )
        logger.info(
            "%s bulk conversion: %d processed, %d succeeded, %d failed",
            self.type_name,
            summary.processed_count,
            summary.succeeded_count,
            summary.failed_count,
        )
        return BulkConversionResult(
            succeeded=tuple(succeeded),
            processed_count=len(items),
            failed_count=len(failures),
            failures=tuple(failures),
            summary=summary,
        )


def dto_type_for(entity: Any) -> type:
    """Return the DTO type an entity converts into."""
    for klass in type(entity).__mro__:
        dto_type = DTO_FOR_ENTITY.get(klass)
        if dto_type is not None:
            return dto_type
    raise ValidationException(
        f"No DTO type registered for {type(entity).__name__}",
        field="entity",
    )


def convert(
    entity: Any,
    *,
    pipeline: ValidationPipeline | None = None,
    now: datetime | None = None,
) -> Any:
    """Convert one entity, choosing the DTO type from the entity's type."""
    if entity is None:
        raise ValidationException("entity is required", field="entity")
    return EntityConversionGateway(dto_type_for(entity), pipeline).from_entity(entity, now=now)


def convert_many(
    entities: Iterable[Any],
    mode: ConversionMode = ConversionMode.STRICT,
    *,
    dto_type: type | None = None,
    pipeline: ValidationPipeline | None = None,
    now: datetime | None = None,
    max_workers: int | None = None,
) -> list[Any] | BulkConversionResult[Any]:
    """Convert a batch of same-shaped entities.

    dto_type defaults to the type inferred from the first non-None entity;
    an empty batch with no dto_type converts to an empty result.
    """
    items = list(entities)
    if dto_type is None:
        first = next((e for e in items if e is not None), None)
        if first is None:
            if items:
                raise ValidationException(
                    "dto_type is required when every entity is None", field="dto_type"
                )
            return [] if ConversionMode(mode) is ConversionMode.STRICT else BulkConversionResult()
        dto_type = dto_type_for(first)
    gateway = EntityConversionGateway(dto_type, pipeline)
    return gateway.from_entities(items, mode, now=now, max_workers=max_workers)
