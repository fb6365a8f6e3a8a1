"""Job-related domain services."""

from __future__ import annotations

import logging

from django.db import transaction

from scheduling.dates import format_date, parse_date
from scheduling.job_dates import DATE_COLUMNS, result_key
from scheduling.models import JobStatus
from scheduling.pipeline import Stage
from scheduling.services import SchedulingSnapshot, take_snapshot
from scheduling.status_styles import column_styles

from .models import Job, Project

logger = logging.getLogger(__name__)


def _apply_schedule(job: Job, snapshot: SchedulingSnapshot) -> list[str]:
    """Copy the computed dates onto ``job`` and return the touched fields.

    Dates that could not be determined leave the existing value alone.
    """
    if job.delivery_date is None:
        return []
    dates = snapshot.job_dates(job.delivery_date)
    touched = []
    for column in DATE_COLUMNS:
        key = result_key(column)
        if column == "delivery" or key not in dates:
            continue
        field = Job.DATE_FIELDS[column]
        setattr(job, field, parse_date(dates[key]))
        touched.append(field)
    unresolved = [c for c in DATE_COLUMNS if c != "delivery" and result_key(c) not in dates]
    if unresolved:
        logger.debug("Job %s: no lead time chain for %s.", job.pk, ", ".join(unresolved))
    return touched


def create_job(project: Project, *, delivery_date=None, snapshot: SchedulingSnapshot | None = None, **fields) -> Job:
    """Create a job on the default status and schedule it when possible.

    ``delivery_date`` may be a date or DD/MM/YYYY text.
    """
    snapshot = snapshot or take_snapshot()
    default_stage = snapshot.cycler().initial_stage()
    job = Job(project=project, status_id=default_stage.id, **fields)
    if delivery_date not in (None, ""):
        job.delivery_date = parse_date(delivery_date)
        _apply_schedule(job, snapshot)
    job.save()
    return job


def reschedule_job(job: Job, *, delivery_date=None, snapshot: SchedulingSnapshot | None = None) -> list[str]:
    """Recompute upstream dates from the job's delivery date and persist them.

    Passing ``delivery_date`` replaces the job's delivery date first.
    Returns the names of the fields that were saved.
    """
    snapshot = snapshot or take_snapshot()
    touched = []
    if delivery_date not in (None, ""):
        job.delivery_date = parse_date(delivery_date)
        touched.append("delivery_date")
    touched += _apply_schedule(job, snapshot)
    if touched:
        job.save(update_fields=touched + ["updated_at"])
    return touched


def cycle_job_status(job: Job, *, snapshot: SchedulingSnapshot | None = None) -> Stage:
    """Move ``job`` to the next status in pipeline order and save it.

    A job without a status is placed on the default status.
    """
    snapshot = snapshot or take_snapshot()
    cycler = snapshot.cycler()
    with transaction.atomic():
        job = Job.objects.select_for_update().get(pk=job.pk)
        if job.status_id is None:
            stage = cycler.initial_stage()
        else:
            stage = cycler.next_stage(job.status_id)
        previous = job.status_id
        job.status_id = stage.id
        job.save(update_fields=["status", "updated_at"])
    logger.info("Job %s status %s -> %s (%s).", job.pk, previous, stage.id, stage.name)
    return stage


def serialize_job(job: Job, stages: dict[int, Stage] | None = None) -> dict:
    """Return the job grid row for ``job``.

    ``stages`` lets list views pass one pipeline snapshot for all rows;
    otherwise the job's own status is converted.
    """
    if stages is not None:
        stage = stages.get(job.status_id)
    elif job.status_id is not None:
        stage = JobStatus.objects.get(pk=job.status_id).to_stage()
    else:
        stage = None
    return {
        "id": job.pk,
        "projectId": job.project_id,
        "unit": job.unit,
        "type": job.job_type,
        "items": job.items,
        "statusId": job.status_id,
        "status": stage.name if stage else None,
        "statusDisplay": stage.display_name if stage else "",
        "nestingDate": format_date(job.nesting_date),
        "machiningDate": format_date(job.machining_date),
        "assemblyDate": format_date(job.assembly_date),
        "deliveryDate": format_date(job.delivery_date),
        "columnStyles": column_styles(stage),
        "comments": job.comments,
    }
