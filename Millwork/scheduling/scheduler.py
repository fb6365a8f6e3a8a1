"""Backward production-date scheduler.

Given an anchor (normally the delivery stage and its date) the scheduler
walks the requested upstream stages from the closest to the farthest and
places each one a number of working days before the nearest stage that
has already been placed.  Nesting is therefore measured from machining
when machining resolved, otherwise from assembly, otherwise from the
anchor.

Stages without an applicable rule are left out of the result rather than
raising; callers treat a missing key as "undetermined".
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Iterable

from .dates import parse_date
from .exceptions import InvalidInput
from .lead_times import LeadTimeRegistry, LeadTimeRule
from .pipeline import StatusPipeline
from .working_calendar import WorkingCalendar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleStep:
    """Outcome for one target stage.

    ``date`` is ``None`` when no rule chain reached the stage.  For resolved
    stages ``reference_stage_id`` names the stage the date was measured from
    and ``rule_id`` the lead time that was applied.
    """

    stage_id: int
    date: datetime.date | None
    reference_stage_id: int | None = None
    rule_id: int | None = None

    @property
    def resolved(self) -> bool:
        return self.date is not None


class BackwardScheduler:
    def __init__(self, pipeline: StatusPipeline, registry: LeadTimeRegistry, calendar: WorkingCalendar) -> None:
        self.pipeline = pipeline
        self.registry = registry
        self.calendar = calendar

    def _offset(self, reference_date: datetime.date, rule: LeadTimeRule) -> datetime.date:
        if rule.days > 0:
            return self.calendar.subtract_working_days(reference_date, rule.days)
        # A zero-day rule still has to land on a working day.
        return self.calendar.previous_working_day(reference_date)

    def _ordered_targets(self, anchor_stage_id: int, target_stage_ids: Iterable[int]) -> list[int]:
        anchor_index = self.pipeline.index_of(anchor_stage_id)
        targets = []
        for stage_id in target_stage_ids:
            if self.pipeline.index_of(stage_id) >= anchor_index:
                raise InvalidInput(
                    f"Stage {stage_id!r} is not upstream of anchor stage {anchor_stage_id!r}."
                )
            if stage_id not in targets:
                targets.append(stage_id)
        # Closest to the anchor first.
        targets.sort(key=self.pipeline.index_of, reverse=True)
        return targets

    def plan(
        self,
        anchor_stage_id: int,
        anchor_date: datetime.date | str,
        target_stage_ids: Iterable[int],
    ) -> list[ScheduleStep]:
        """Schedule every target and report how each one was reached.

        Steps come back in processing order (descending pipeline order).
        The anchor date is used as given even when it is not a working day.
        """
        anchor_date = parse_date(anchor_date)
        targets = self._ordered_targets(anchor_stage_id, target_stage_ids)

        reference_id, reference_date = anchor_stage_id, anchor_date
        steps: list[ScheduleStep] = []
        for stage_id in targets:
            rule = self.registry.rule(stage_id, reference_id)
            base_id, base_date = reference_id, reference_date
            if rule is None and reference_id != anchor_stage_id:
                rule = self.registry.rule(stage_id, anchor_stage_id)
                base_id, base_date = anchor_stage_id, anchor_date

            if rule is None:
                logger.debug(
                    "No lead time links stage %s to stage %s or anchor %s; leaving it unscheduled.",
                    stage_id, reference_id, anchor_stage_id,
                )
                steps.append(ScheduleStep(stage_id=stage_id, date=None))
                continue

            scheduled = self._offset(base_date, rule)
            steps.append(ScheduleStep(
                stage_id=stage_id,
                date=scheduled,
                reference_stage_id=base_id,
                rule_id=rule.id,
            ))
            reference_id, reference_date = stage_id, scheduled
        return steps

    def compute_upstream_dates(
        self,
        anchor_stage_id: int,
        anchor_date: datetime.date | str,
        target_stage_ids: Iterable[int],
    ) -> dict[int, datetime.date]:
        """Return ``{stage_id: date}`` for every target that could be scheduled."""
        return {
            step.stage_id: step.date
            for step in self.plan(anchor_stage_id, anchor_date, target_stage_ids)
            if step.date is not None
        }
