"""Map pipeline stages onto the four job date columns.

Jobs carry ``nesting``, ``machining``, ``assembly`` and ``delivery``
dates.  A scheduling request supplies the delivery date; the stages that
correspond to the other three columns are scheduled backward from it and
returned in the DD/MM/YYYY exchange format.
"""

from __future__ import annotations

from typing import Mapping

from .dates import format_date, parse_date
from .exceptions import ConfigurationError
from .lead_times import LeadTimeRegistry
from .pipeline import Stage, StatusPipeline
from .scheduler import BackwardScheduler
from .working_calendar import WorkingCalendar

DATE_COLUMNS = ("nesting", "machining", "assembly", "delivery")
DELIVERY_COLUMN = "delivery"

# Status names as configured in the shop, including the "-complete" names
# the default seed uses.
STAGE_DATE_COLUMNS = {
    "nesting": "nesting",
    "nesting-complete": "nesting",
    "machining": "machining",
    "machining-complete": "machining",
    "assembly": "assembly",
    "assembly-complete": "assembly",
    "delivery": "delivery",
    "delivered": "delivery",
}


def result_key(column: str) -> str:
    """``nesting`` -> ``nestingDate``."""
    return f"{column}Date"


def stages_by_column(pipeline: StatusPipeline, stage_columns: Mapping[str, str] | None = None) -> dict[str, Stage]:
    """Return the stage that feeds each date column.

    When two stages map to the same column the one later in the pipeline
    wins, since its completion is what the column tracks.
    """
    mapping = STAGE_DATE_COLUMNS if stage_columns is None else stage_columns
    # Status names are matched case-insensitively.
    mapping = {str(name).lower(): column for name, column in mapping.items()}
    found: dict[str, Stage] = {}
    for stage in pipeline.ordered_stages():
        column = mapping.get(stage.name.lower())
        if column in DATE_COLUMNS:
            found[column] = stage
    return found


def calculate_job_dates(
    delivery_date,
    pipeline: StatusPipeline,
    registry: LeadTimeRegistry,
    calendar: WorkingCalendar,
    stage_columns: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Answer a scheduling request.

    The result always holds ``deliveryDate`` (the anchor, echoed as given)
    plus a key for every upstream column whose stage could be scheduled.
    """
    anchor_date = parse_date(delivery_date)
    columns = stages_by_column(pipeline, stage_columns)
    anchor = columns.pop(DELIVERY_COLUMN, None)
    if anchor is None:
        try:
            anchor = pipeline.final_stage()
        except ConfigurationError as exc:
            raise ConfigurationError(f"Could not find the delivery stage: {exc}") from exc

    anchor_index = pipeline.index_of(anchor.id)
    upstream = {
        column: stage for column, stage in columns.items()
        if pipeline.index_of(stage.id) < anchor_index
    }

    scheduler = BackwardScheduler(pipeline, registry, calendar)
    resolved = scheduler.compute_upstream_dates(
        anchor.id, anchor_date, [stage.id for stage in upstream.values()]
    )

    result = {result_key(DELIVERY_COLUMN): format_date(anchor_date)}
    for column, stage in upstream.items():
        if stage.id in resolved:
            result[result_key(column)] = format_date(resolved[stage.id])
    return result
