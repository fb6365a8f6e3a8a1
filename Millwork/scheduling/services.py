"""Scheduling services that sit between the ORM and the engine.

Every scheduling call works on one ``SchedulingSnapshot``: statuses, lead
times and holidays are read together inside a single transaction and then
handed to the engine as immutable records, so a concurrent edit of the
lead-time table can never mix old and new rules within one computation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from django import forms
from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Min

from .cycler import StatusCycler
from .exceptions import InvalidInput
from .job_dates import calculate_job_dates
from .lead_times import DEFAULT_DAYS_PER_STAGE, DIRECTION_BEFORE, DIRECTIONS, LeadTimeRegistry, default_rules
from .models import Holiday, JobStatus, LeadTime
from .pipeline import StatusPipeline
from .scheduler import BackwardScheduler
from .working_calendar import DEFAULT_WEEKEND_DAYS, WorkingCalendar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulingSnapshot:
    pipeline: StatusPipeline
    registry: LeadTimeRegistry
    calendar: WorkingCalendar

    def scheduler(self) -> BackwardScheduler:
        return BackwardScheduler(self.pipeline, self.registry, self.calendar)

    def cycler(self) -> StatusCycler:
        return StatusCycler(self.pipeline)

    def job_dates(self, delivery_date) -> dict[str, str]:
        return calculate_job_dates(
            delivery_date,
            self.pipeline,
            self.registry,
            self.calendar,
            stage_columns=getattr(settings, "SCHEDULING_STAGE_DATE_COLUMNS", None),
        )


def load_pipeline() -> StatusPipeline:
    return StatusPipeline(status.to_stage() for status in JobStatus.objects.order_by("order_index"))


def build_calendar(holidays: Iterable[Holiday]) -> WorkingCalendar:
    weekend = getattr(settings, "SCHEDULING_WEEKEND_DAYS", DEFAULT_WEEKEND_DAYS)
    return WorkingCalendar((h.to_holiday() for h in holidays), weekend_days=weekend)


def take_snapshot() -> SchedulingSnapshot:
    """Read the whole scheduling configuration in one transaction."""
    with transaction.atomic():
        pipeline = load_pipeline()
        # Primary key order is insertion order; the registry relies on it
        # to pick the first of several rules for the same pair.
        rules = [lead_time.to_rule() for lead_time in LeadTime.objects.order_by("id")]
        holidays = list(Holiday.objects.all())
    registry = LeadTimeRegistry(rules, pipeline=pipeline)
    return SchedulingSnapshot(pipeline=pipeline, registry=registry, calendar=build_calendar(holidays))


def holidays_for_year(year: int) -> list[Holiday]:
    return list(Holiday.objects.filter(date__year=year).order_by("date"))


# ---------------------------------------------------------------------------
# Lead-time maintenance
# ---------------------------------------------------------------------------
def _parse_days(value) -> int:
    """Whole, non-negative day counts only; ``2.7`` and ``true`` are rejected."""
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidInput(f"Days must be a whole number, got {value!r}.")
    try:
        days = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInput(f"Days must be a whole number, got {value!r}.") from None
    if days < 0:
        raise InvalidInput("Days must be zero or more.")
    return days


def _parse_flag(value, label: str) -> bool:
    """Read a JSON boolean or its form spelling (``true``/``false``/``1``/``0``)."""
    flag = forms.NullBooleanField().to_python(value)
    if flag is None:
        raise InvalidInput(f"{label} must be true or false, got {value!r}.")
    return flag


def upsert_lead_time(
    from_status_id: int,
    to_status_id: int,
    days: int,
    direction: str | None = None,
    is_active: bool | None = None,
) -> tuple[LeadTime, bool]:
    """Create or update the rule for a status pair.

    Returns ``(lead_time, created)``.  ``direction`` defaults to ``before``
    and ``is_active`` to ``True`` when a new rule is created.
    """
    if direction is not None and direction not in DIRECTIONS:
        raise InvalidInput('Direction must be either "before" or "after".')
    days = _parse_days(days)
    if is_active is not None:
        is_active = _parse_flag(is_active, "isActive")
    if from_status_id == to_status_id:
        raise InvalidInput("A lead time must link two different statuses.")

    statuses = JobStatus.objects.in_bulk([from_status_id, to_status_id])
    missing = [sid for sid in (from_status_id, to_status_id) if sid not in statuses]
    if missing:
        raise InvalidInput(f"Unknown status id(s): {', '.join(map(str, missing))}.")

    with transaction.atomic():
        lead_time = (
            LeadTime.objects.select_for_update()
            .filter(from_status_id=from_status_id, to_status_id=to_status_id)
            .first()
        )
        created = lead_time is None
        if created:
            lead_time = LeadTime(
                from_status_id=from_status_id,
                to_status_id=to_status_id,
                direction=DIRECTION_BEFORE,
                is_active=True,
            )
        lead_time.days = days
        if direction is not None:
            lead_time.direction = direction
        if is_active is not None:
            lead_time.is_active = is_active
        lead_time.save()
    logger.info(
        "%s lead time %s -> %s (%d days %s).",
        "Created" if created else "Updated",
        from_status_id, to_status_id, lead_time.days, lead_time.direction,
    )
    return lead_time, created


def initialize_default_lead_times(days_per_stage: int | None = None) -> tuple[int, int]:
    """Insert the default rule for every non-final status.

    Pairs that already have a rule are left untouched.  Each insert runs in
    its own savepoint so one conflict does not abort the batch.  Returns
    ``(created, skipped)``.
    """
    if days_per_stage is None:
        days_per_stage = getattr(settings, "SCHEDULING_DEFAULT_DAYS_PER_STAGE", DEFAULT_DAYS_PER_STAGE)
    rules = default_rules(load_pipeline(), days_per_stage=days_per_stage)

    created = skipped = 0
    for rule in rules:
        try:
            with transaction.atomic():
                LeadTime.objects.create(
                    from_status_id=rule.from_stage_id,
                    to_status_id=rule.to_stage_id,
                    days=rule.days,
                    direction=rule.direction,
                    is_active=rule.is_active,
                )
        except IntegrityError:
            logger.info(
                "Lead time already exists for status %s to %s; skipping.",
                rule.from_stage_id, rule.to_stage_id,
            )
            skipped += 1
        else:
            created += 1
    return created, skipped


# ---------------------------------------------------------------------------
# Status maintenance
# ---------------------------------------------------------------------------
def reorder_statuses(status_orders: Iterable[tuple[int, int]]) -> list[JobStatus]:
    """Apply ``(status_id, order_index)`` pairs atomically.

    Indexes are unique, so the affected rows are first parked on negative
    values and then moved to their targets; swapping two statuses works.
    """
    orders = [(int(status_id), int(order_index)) for status_id, order_index in status_orders]
    ids = [status_id for status_id, _ in orders]
    if len(set(ids)) != len(ids):
        raise InvalidInput("Each status may appear only once in a reorder request.")
    targets = [order_index for _, order_index in orders]
    if len(set(targets)) != len(targets):
        raise InvalidInput("Order indexes in a reorder request must be unique.")

    try:
        with transaction.atomic():
            existing = JobStatus.objects.select_for_update().in_bulk(ids)
            missing = [status_id for status_id in ids if status_id not in existing]
            if missing:
                raise InvalidInput(f"Unknown status id(s): {', '.join(map(str, missing))}.")
            floor = min(JobStatus.objects.aggregate(low=Min("order_index"))["low"] or 0, 0)
            for offset, status_id in enumerate(ids, start=1):
                JobStatus.objects.filter(pk=status_id).update(order_index=floor - offset)
            for status_id, order_index in orders:
                JobStatus.objects.filter(pk=status_id).update(order_index=order_index)
    except IntegrityError as exc:
        raise InvalidInput("Order index is already used by another status.") from exc
    return list(JobStatus.objects.order_by("order_index"))
