"""Ordered production stages (job statuses).

The pipeline is a snapshot of the configured statuses sorted by
``order_index``.  Stages are referenced by their integer id so that a
pipeline built for one request never holds on to live ORM objects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .exceptions import ConfigurationError, InvalidInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetColumn:
    """Date column a stage highlights in the job grid, with its colour."""

    column: str
    color: str


@dataclass(frozen=True)
class Stage:
    id: int
    name: str
    display_name: str
    order_index: int
    is_default: bool = False
    is_final: bool = False
    target_columns: tuple[TargetColumn, ...] = field(default_factory=tuple)
    color: str = ""
    background_color: str = ""


class StatusPipeline:
    """Immutable, ordered view over a set of stages."""

    def __init__(self, stages: Iterable[Stage]) -> None:
        ordered = tuple(sorted(stages, key=lambda stage: stage.order_index))
        self._check_unique(ordered, "id", lambda stage: stage.id)
        self._check_unique(ordered, "name", lambda stage: stage.name)
        self._check_unique(ordered, "order index", lambda stage: stage.order_index)
        self._stages = ordered
        self._by_id = {stage.id: stage for stage in ordered}
        self._by_name = {stage.name: stage for stage in ordered}
        self._index = {stage.id: idx for idx, stage in enumerate(ordered)}

    @staticmethod
    def _check_unique(stages, label, key) -> None:
        seen = set()
        for stage in stages:
            value = key(stage)
            if value in seen:
                raise ConfigurationError(f"Duplicate stage {label} {value!r} in pipeline.")
            seen.add(value)

    def __len__(self) -> int:
        return len(self._stages)

    def __iter__(self) -> Iterator[Stage]:
        return iter(self._stages)

    def __contains__(self, stage_id: object) -> bool:
        return stage_id in self._by_id

    def ordered_stages(self) -> tuple[Stage, ...]:
        return self._stages

    def find(self, name: str) -> Stage | None:
        return self._by_name.get(name)

    def get(self, stage_id: int) -> Stage | None:
        return self._by_id.get(stage_id)

    def index_of(self, stage_id: int) -> int:
        """Position of ``stage_id`` in pipeline order.

        Raises ``InvalidInput`` when the stage is not part of this pipeline.
        """
        try:
            return self._index[stage_id]
        except KeyError:
            raise InvalidInput(f"Unknown stage id {stage_id!r}.") from None

    def _exactly_one(self, flag: str) -> Stage:
        matches = [stage for stage in self._stages if getattr(stage, flag)]
        if len(matches) != 1:
            label = flag.replace("is_", "")
            raise ConfigurationError(
                f"Pipeline must have exactly one {label} stage, found {len(matches)}."
            )
        return matches[0]

    def default_stage(self) -> Stage:
        return self._exactly_one("is_default")

    def final_stage(self) -> Stage:
        return self._exactly_one("is_final")

    def validate(self) -> None:
        """Fail fast on a pipeline without a single default and final stage."""
        self.default_stage()
        final = self.final_stage()
        if final is not self._stages[-1]:
            logger.warning(
                "Final stage %r is not the last stage in pipeline order (last is %r).",
                final.name, self._stages[-1].name,
            )
