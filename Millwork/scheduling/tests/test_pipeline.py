import logging

import pytest

from scheduling.exceptions import ConfigurationError, InvalidInput
from scheduling.pipeline import Stage, StatusPipeline


def test_stages_sorted_by_order_index():
    pipeline = StatusPipeline([
        Stage(7, "delivered", "Delivered", 30, is_final=True),
        Stage(3, "not-assigned", "Not Assigned", 10, is_default=True),
        Stage(9, "assembly-complete", "Assembly Complete", 20),
    ])
    assert [stage.id for stage in pipeline] == [3, 9, 7]
    assert pipeline.index_of(7) == 2
    assert pipeline.index_of(3) == 0


def test_lookup(pipeline):
    assert len(pipeline) == 5
    assert 3 in pipeline
    assert 42 not in pipeline
    assert pipeline.find("delivered").id == 5
    assert pipeline.find("missing") is None
    assert pipeline.get(2).name == "nesting-complete"
    assert pipeline.get(42) is None


def test_index_of_unknown_stage(pipeline):
    with pytest.raises(InvalidInput):
        pipeline.index_of(42)


def test_default_and_final(pipeline):
    assert pipeline.default_stage().name == "not-assigned"
    assert pipeline.final_stage().name == "delivered"
    pipeline.validate()


@pytest.mark.parametrize("stages", [
    [Stage(1, "a", "A", 1), Stage(1, "b", "B", 2)],
    [Stage(1, "a", "A", 1), Stage(2, "a", "B", 2)],
    [Stage(1, "a", "A", 1), Stage(2, "b", "B", 1)],
])
def test_duplicates_rejected(stages):
    with pytest.raises(ConfigurationError):
        StatusPipeline(stages)


def test_missing_default_or_final():
    pipeline = StatusPipeline([Stage(1, "a", "A", 1), Stage(2, "b", "B", 2, is_final=True)])
    with pytest.raises(ConfigurationError):
        pipeline.default_stage()
    with pytest.raises(ConfigurationError):
        pipeline.validate()
    assert pipeline.final_stage().id == 2


def test_two_final_stages():
    pipeline = StatusPipeline([
        Stage(1, "a", "A", 1, is_default=True, is_final=True),
        Stage(2, "b", "B", 2, is_final=True),
    ])
    with pytest.raises(ConfigurationError):
        pipeline.final_stage()


def test_final_not_last_is_warned(caplog):
    pipeline = StatusPipeline([
        Stage(1, "a", "A", 1, is_default=True),
        Stage(2, "b", "B", 2, is_final=True),
        Stage(3, "c", "C", 3),
    ])
    with caplog.at_level(logging.WARNING, logger="scheduling.pipeline"):
        pipeline.validate()
    assert "not the last stage" in caplog.text
