import pytest

from scheduling.exceptions import ConfigurationError, InvalidInput
from scheduling.job_dates import calculate_job_dates, result_key, stages_by_column
from scheduling.lead_times import LeadTimeRegistry, LeadTimeRule
from scheduling.pipeline import Stage, StatusPipeline


def test_result_key():
    assert result_key("nesting") == "nestingDate"


def test_stages_by_column(pipeline):
    columns = stages_by_column(pipeline)
    assert {column: stage.id for column, stage in columns.items()} == {
        "nesting": 2, "machining": 3, "assembly": 4, "delivery": 5,
    }


def test_later_stage_wins_shared_column(pipeline):
    columns = stages_by_column(pipeline, {"nesting-complete": "nesting", "machining-complete": "nesting"})
    assert columns["nesting"].id == 3


def test_calculate_job_dates(pipeline, registry, calendar):
    assert calculate_job_dates("19/09/2025", pipeline, registry, calendar) == {
        "deliveryDate": "19/09/2025",
        "assemblyDate": "16/09/2025",
        "machiningDate": "12/09/2025",
        "nestingDate": "10/09/2025",
    }


def test_holiday_shifts_job_dates(pipeline, registry, holiday_calendar):
    assert calculate_job_dates("19/09/2025", pipeline, registry, holiday_calendar) == {
        "deliveryDate": "19/09/2025",
        "assemblyDate": "15/09/2025",
        "machiningDate": "11/09/2025",
        "nestingDate": "09/09/2025",
    }


def test_undetermined_columns_are_omitted(pipeline, calendar):
    registry = LeadTimeRegistry([LeadTimeRule(1, 4, 5, 3)], pipeline=pipeline)
    assert calculate_job_dates("19/09/2025", pipeline, registry, calendar) == {
        "deliveryDate": "19/09/2025",
        "assemblyDate": "16/09/2025",
    }


def test_final_stage_is_anchor_without_delivery_column(pipeline, calendar):
    registry = LeadTimeRegistry([LeadTimeRule(1, 2, 5, 7)], pipeline=pipeline)
    dates = calculate_job_dates("19/09/2025", pipeline, registry, calendar, stage_columns={"nesting-complete": "nesting"})
    assert dates == {"deliveryDate": "19/09/2025", "nestingDate": "10/09/2025"}


def test_downstream_columns_are_not_scheduled(pipeline, registry, calendar):
    stage_columns = {"assembly-complete": "delivery", "delivered": "nesting", "machining-complete": "machining"}
    dates = calculate_job_dates("19/09/2025", pipeline, registry, calendar, stage_columns=stage_columns)
    assert dates == {"deliveryDate": "19/09/2025", "machiningDate": "17/09/2025"}


def test_missing_delivery_stage(calendar):
    pipeline = StatusPipeline([Stage(1, "nesting", "Nesting", 1, is_default=True)])
    with pytest.raises(ConfigurationError):
        calculate_job_dates("19/09/2025", pipeline, LeadTimeRegistry([]), calendar)


def test_bad_delivery_date(pipeline, registry, calendar):
    with pytest.raises(InvalidInput):
        calculate_job_dates("2025-09-19", pipeline, registry, calendar)


def test_column_override_ignores_case(pipeline):
    columns = stages_by_column(pipeline, {"Delivered": "delivery", "NESTING-COMPLETE": "nesting"})
    assert {column: stage.id for column, stage in columns.items()} == {"delivery": 5, "nesting": 2}
