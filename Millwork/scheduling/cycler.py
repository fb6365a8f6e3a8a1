"""Status cycling for jobs.

Clicking a job's status in the grid moves it to the next stage in pipeline
order.  Advancing past the last stage wraps back to the first one, so a
delivered job can be reset and reworked.
"""

from __future__ import annotations

from .exceptions import ConfigurationError
from .pipeline import Stage, StatusPipeline


class StatusCycler:
    def __init__(self, pipeline: StatusPipeline) -> None:
        self.pipeline = pipeline

    def initial_stage(self) -> Stage:
        """Stage assigned to a newly created job."""
        return self.pipeline.default_stage()

    def next_stage(self, current_stage_id: int) -> Stage:
        stages = self.pipeline.ordered_stages()
        if not stages:
            raise ConfigurationError("Cannot advance a job through an empty pipeline.")
        index = self.pipeline.index_of(current_stage_id)
        return stages[(index + 1) % len(stages)]

    def advance(self, current_stage_id: int) -> int:
        return self.next_stage(current_stage_id).id
