import datetime

import pytest

from scheduling.exceptions import InvalidInput
from scheduling.lead_times import LeadTimeRegistry, LeadTimeRule
from scheduling.scheduler import BackwardScheduler

NESTING, MACHINING, ASSEMBLY, DELIVERED = 2, 3, 4, 5
DELIVERY = datetime.date(2025, 9, 19)  # Friday
UPSTREAM = [NESTING, MACHINING, ASSEMBLY]


def d(day):
    return datetime.date(2025, 9, day)


def test_chained_schedule(pipeline, registry, calendar):
    scheduler = BackwardScheduler(pipeline, registry, calendar)
    dates = scheduler.compute_upstream_dates(DELIVERED, DELIVERY, UPSTREAM)
    assert dates == {ASSEMBLY: d(16), MACHINING: d(12), NESTING: d(10)}


def test_chained_schedule_skips_holiday(pipeline, registry, holiday_calendar):
    scheduler = BackwardScheduler(pipeline, registry, holiday_calendar)
    dates = scheduler.compute_upstream_dates(DELIVERED, DELIVERY, UPSTREAM)
    assert dates == {ASSEMBLY: d(15), MACHINING: d(11), NESTING: d(9)}


def test_anchor_date_as_text(pipeline, registry, calendar):
    scheduler = BackwardScheduler(pipeline, registry, calendar)
    assert scheduler.compute_upstream_dates(DELIVERED, "19/09/2025", [ASSEMBLY]) == {ASSEMBLY: d(16)}


def test_plan_reports_reference_stages(pipeline, registry, calendar):
    steps = BackwardScheduler(pipeline, registry, calendar).plan(DELIVERED, DELIVERY, UPSTREAM)
    assert [step.stage_id for step in steps] == [ASSEMBLY, MACHINING, NESTING]
    assert [step.reference_stage_id for step in steps] == [DELIVERED, ASSEMBLY, MACHINING]
    assert [step.rule_id for step in steps] == [1, 2, 3]
    assert all(step.resolved for step in steps)


def test_unresolved_stage_is_absent(pipeline, calendar):
    registry = LeadTimeRegistry([
        LeadTimeRule(1, ASSEMBLY, DELIVERED, 3),
        LeadTimeRule(2, NESTING, DELIVERED, 7),
    ], pipeline=pipeline)
    scheduler = BackwardScheduler(pipeline, registry, calendar)

    dates = scheduler.compute_upstream_dates(DELIVERED, DELIVERY, UPSTREAM)
    assert dates == {ASSEMBLY: d(16), NESTING: d(10)}

    steps = {step.stage_id: step for step in scheduler.plan(DELIVERED, DELIVERY, UPSTREAM)}
    assert not steps[MACHINING].resolved
    assert steps[MACHINING].date is None
    # No nesting -> assembly rule, so nesting falls back to the anchor.
    assert steps[NESTING].reference_stage_id == DELIVERED


def test_chain_continues_from_nearest_resolved_stage(pipeline, calendar):
    registry = LeadTimeRegistry([
        LeadTimeRule(1, ASSEMBLY, DELIVERED, 3),
        LeadTimeRule(2, NESTING, ASSEMBLY, 4),
    ], pipeline=pipeline)
    steps = {s.stage_id: s for s in BackwardScheduler(pipeline, registry, calendar).plan(DELIVERED, DELIVERY, UPSTREAM)}
    assert steps[MACHINING].date is None
    assert steps[NESTING].date == d(10)
    assert steps[NESTING].reference_stage_id == ASSEMBLY


def test_nothing_resolves_without_rules(pipeline, calendar):
    scheduler = BackwardScheduler(pipeline, LeadTimeRegistry([]), calendar)
    assert scheduler.compute_upstream_dates(DELIVERED, DELIVERY, UPSTREAM) == {}


def test_zero_day_rule_lands_on_previous_working_day(pipeline, calendar):
    registry = LeadTimeRegistry([LeadTimeRule(1, ASSEMBLY, DELIVERED, 0)], pipeline=pipeline)
    scheduler = BackwardScheduler(pipeline, registry, calendar)
    assert scheduler.compute_upstream_dates(DELIVERED, DELIVERY, [ASSEMBLY]) == {ASSEMBLY: DELIVERY}
    sunday = d(21)
    assert scheduler.compute_upstream_dates(DELIVERED, sunday, [ASSEMBLY]) == {ASSEMBLY: DELIVERY}


def test_non_working_anchor_is_used_as_given(pipeline, registry, calendar):
    saturday = d(20)
    scheduler = BackwardScheduler(pipeline, registry, calendar)
    assert scheduler.compute_upstream_dates(DELIVERED, saturday, [ASSEMBLY]) == {ASSEMBLY: d(17)}


def test_target_must_be_upstream(pipeline, registry, calendar):
    scheduler = BackwardScheduler(pipeline, registry, calendar)
    with pytest.raises(InvalidInput):
        scheduler.compute_upstream_dates(ASSEMBLY, DELIVERY, [DELIVERED])
    with pytest.raises(InvalidInput):
        scheduler.compute_upstream_dates(ASSEMBLY, DELIVERY, [ASSEMBLY])


def test_unknown_stage_ids(pipeline, registry, calendar):
    scheduler = BackwardScheduler(pipeline, registry, calendar)
    with pytest.raises(InvalidInput):
        scheduler.compute_upstream_dates(DELIVERED, DELIVERY, [99])
    with pytest.raises(InvalidInput):
        scheduler.compute_upstream_dates(99, DELIVERY, [NESTING])


def test_bad_anchor_date(pipeline, registry, calendar):
    with pytest.raises(InvalidInput):
        BackwardScheduler(pipeline, registry, calendar).compute_upstream_dates(DELIVERED, "2025-09-19", [ASSEMBLY])


def test_duplicate_targets_and_any_order(pipeline, registry, calendar):
    scheduler = BackwardScheduler(pipeline, registry, calendar)
    shuffled = scheduler.compute_upstream_dates(DELIVERED, DELIVERY, [MACHINING, NESTING, ASSEMBLY, MACHINING])
    assert shuffled == scheduler.compute_upstream_dates(DELIVERED, DELIVERY, UPSTREAM)


@pytest.mark.parametrize("delivery_day", range(1, 31))
def test_resolved_dates_are_working_days_before_anchor(pipeline, registry, holiday_calendar, delivery_day):
    anchor = d(delivery_day)
    scheduler = BackwardScheduler(pipeline, registry, holiday_calendar)
    dates = scheduler.compute_upstream_dates(DELIVERED, anchor, UPSTREAM)
    assert set(dates) == set(UPSTREAM)
    for value in dates.values():
        assert value < anchor
        assert holiday_calendar.is_working_day(value)
    assert dates[NESTING] < dates[MACHINING] < dates[ASSEMBLY]


def test_anchor_too_close_to_earliest_date(pipeline, registry, calendar):
    scheduler = BackwardScheduler(pipeline, registry, calendar)
    with pytest.raises(InvalidInput):
        scheduler.compute_upstream_dates(DELIVERED, "02/01/0001", UPSTREAM)
