"""Lead-time rules between pipeline stages.

A rule ``(from, to, days, "before")`` says that the *from* stage is due
``days`` working days before the *to* stage.  The registry indexes an
immutable list of rules and answers the single question the scheduler
asks: which active ``before`` rule links this pair?
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from .exceptions import ConfigurationError
from .pipeline import StatusPipeline

logger = logging.getLogger(__name__)

DIRECTION_BEFORE = "before"
DIRECTION_AFTER = "after"
DIRECTIONS = (DIRECTION_BEFORE, DIRECTION_AFTER)

DEFAULT_DAYS_PER_STAGE = 2


@dataclass(frozen=True)
class LeadTimeRule:
    id: int | None
    from_stage_id: int
    to_stage_id: int
    days: int
    direction: str = DIRECTION_BEFORE
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.from_stage_id == self.to_stage_id:
            raise ConfigurationError(f"Lead time {self.id!r} links stage {self.from_stage_id} to itself.")
        if self.days < 0:
            raise ConfigurationError(f"Lead time {self.id!r} has negative days ({self.days}).")
        if self.direction not in DIRECTIONS:
            raise ConfigurationError(
                f"Lead time {self.id!r} direction must be 'before' or 'after', got {self.direction!r}."
            )

    @property
    def pair(self) -> tuple[int, int]:
        return (self.from_stage_id, self.to_stage_id)


class LeadTimeRegistry:
    """Read-only lookup over a snapshot of lead-time rules.

    Insertion order matters: when several active ``before`` rules exist for
    the same pair the first one wins and the ambiguity is logged once.
    """

    def __init__(self, rules: Iterable[LeadTimeRule], pipeline: StatusPipeline | None = None) -> None:
        self._rules = tuple(rules)
        if pipeline is not None:
            for rule in self._rules:
                for stage_id in rule.pair:
                    if stage_id not in pipeline:
                        raise ConfigurationError(
                            f"Lead time {rule.id!r} references unknown stage {stage_id!r}."
                        )

        candidates: dict[tuple[int, int], list[LeadTimeRule]] = {}
        for rule in self._rules:
            if rule.is_active and rule.direction == DIRECTION_BEFORE:
                candidates.setdefault(rule.pair, []).append(rule)

        self._by_pair = {pair: matches[0] for pair, matches in candidates.items()}
        self._duplicates = tuple(pair for pair, matches in candidates.items() if len(matches) > 1)
        for pair in self._duplicates:
            logger.warning(
                "%d active lead times for stages %s -> %s; using rule %r.",
                len(candidates[pair]), pair[0], pair[1], self._by_pair[pair].id,
            )

    def __iter__(self) -> Iterator[LeadTimeRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def rule(self, from_stage_id: int, to_stage_id: int) -> LeadTimeRule | None:
        return self._by_pair.get((from_stage_id, to_stage_id))

    def rules_from(self, stage_id: int) -> list[LeadTimeRule]:
        return [rule for rule in self._rules if rule.from_stage_id == stage_id]

    def duplicate_pairs(self) -> tuple[tuple[int, int], ...]:
        return self._duplicates


def default_rules(pipeline: StatusPipeline, days_per_stage: int = DEFAULT_DAYS_PER_STAGE) -> list[LeadTimeRule]:
    """Seed rules: every non-final stage measured back from the final stage.

    Each stage gets ``days_per_stage`` working days per pipeline step that
    separates it from the final stage, with a minimum of one day.
    """
    final = pipeline.final_stage()
    rules = []
    for stage in pipeline.ordered_stages():
        if stage.is_final:
            continue
        days = max(1, (final.order_index - stage.order_index) * days_per_stage)
        rules.append(LeadTimeRule(
            id=None,
            from_stage_id=stage.id,
            to_stage_id=final.id,
            days=days,
            direction=DIRECTION_BEFORE,
            is_active=True,
        ))
    return rules
