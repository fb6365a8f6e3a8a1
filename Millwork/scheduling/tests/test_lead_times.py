import logging

import pytest

from scheduling.exceptions import ConfigurationError
from scheduling.lead_times import LeadTimeRegistry, LeadTimeRule, default_rules


def test_rule_validation():
    with pytest.raises(ConfigurationError):
        LeadTimeRule(1, 2, 2, 1)
    with pytest.raises(ConfigurationError):
        LeadTimeRule(1, 2, 3, -1)
    with pytest.raises(ConfigurationError):
        LeadTimeRule(1, 2, 3, 1, direction="sideways")


def test_lookup_by_pair(registry):
    assert registry.rule(4, 5).days == 3
    assert registry.rule(3, 4).days == 2
    assert registry.rule(5, 4) is None
    assert registry.rule(2, 5) is None
    assert len(registry) == 3
    assert [rule.id for rule in registry.rules_from(3)] == [2]


def test_inactive_and_after_rules_are_ignored(pipeline):
    registry = LeadTimeRegistry([
        LeadTimeRule(1, 4, 5, 3, is_active=False),
        LeadTimeRule(2, 3, 5, 4, direction="after"),
    ], pipeline=pipeline)
    assert registry.rule(4, 5) is None
    assert registry.rule(3, 5) is None
    assert len(list(registry)) == 2


def test_unknown_stage_reference(pipeline):
    with pytest.raises(ConfigurationError):
        LeadTimeRegistry([LeadTimeRule(1, 4, 99, 3)], pipeline=pipeline)


def test_first_duplicate_wins(pipeline, caplog):
    with caplog.at_level(logging.WARNING, logger="scheduling.lead_times"):
        registry = LeadTimeRegistry([
            LeadTimeRule(10, 4, 5, 3),
            LeadTimeRule(11, 4, 5, 7),
        ], pipeline=pipeline)
    assert registry.rule(4, 5).id == 10
    assert registry.duplicate_pairs() == ((4, 5),)
    assert "using rule 10" in caplog.text


def test_default_rules(pipeline):
    rules = default_rules(pipeline, days_per_stage=2)
    assert [(rule.from_stage_id, rule.to_stage_id, rule.days) for rule in rules] == [
        (1, 5, 8),
        (2, 5, 6),
        (3, 5, 4),
        (4, 5, 2),
    ]
    assert all(rule.direction == "before" and rule.is_active for rule in rules)


def test_default_rules_have_at_least_one_day(pipeline):
    assert min(rule.days for rule in default_rules(pipeline, days_per_stage=0)) == 1
