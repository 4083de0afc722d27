from __future__ import annotations

import pytest

from cognitive_core import config
from cognitive_core.relationships import describe_pair, relationship_insights
from cognitive_core.types import DomainScores


def test_cap_holds_when_every_pair_qualifies():
    scores = DomainScores(90, 90, 90, 90, 90, 90)
    out = relationship_insights(scores)
    assert len(out) == config.RELATIONSHIP_INSIGHTS_MAX == 3
    assert out[0].domains == ("Memory", "Problem Solving")


def test_explicit_cap():
    scores = DomainScores(90, 90, 90, 90, 90, 90)
    assert len(relationship_insights(scores, cap=1)) == 1
    assert relationship_insights(scores, cap=0) == []


def test_balanced_pair():
    text = describe_pair("Memory", "Navigation", 95, 75)
    assert "very well balanced" in text


def test_imbalance_names_the_stronger_domain():
    text = describe_pair("Vocabulary", "Memory", 40, 95)
    assert text.startswith("Your Memory abilities are significantly stronger than your Vocabulary abilities")


@pytest.mark.parametrize("sa,sb,expected", [
    (95, 75, "balanced"),  # gap 20
    (95, 74, None),  # gap 21
    (95, 72, None),  # gap 23
    (95, 71, None),  # gap 24
    (95, 70, "stronger"),  # gap 25, inclusive
    (40, 95, "stronger"),
])
def test_gap_boundaries(sa, sb, expected):
    text = describe_pair("Memory", "Cognitive Flexibility", sa, sb)
    if expected is None:
        assert text is None
    else:
        assert expected in text


def test_scenario_pairs_in_domain_order():
    scores = DomainScores(memory=95, vocabulary=40, navigation=75, cognitive_flexibility=72)
    out = relationship_insights(scores)
    assert [r.domains for r in out] == [
        ("Memory", "Vocabulary"),
        ("Memory", "Navigation"),
        ("Vocabulary", "Navigation"),
    ]


def test_fewer_than_two_domains():
    assert relationship_insights(DomainScores(memory=80)) == []
    assert relationship_insights(DomainScores()) == []
