from __future__ import annotations

import pytest

from cognitive_core.bands import band, band_rank
from cognitive_core.domain_insights import analysis_text, build_domain_analyses, build_domain_analysis, describe
from cognitive_core.types import Band, Domain, DomainScores


@pytest.mark.parametrize(
    "score,expected",
    [(100, Band.EXCELLENT), (85, Band.EXCELLENT), (84, Band.VERY_GOOD), (70, Band.VERY_GOOD),
     (69, Band.GOOD), (50, Band.GOOD), (49, Band.NEEDS_DEVELOPMENT), (0, Band.NEEDS_DEVELOPMENT)],
)
def test_band_cutoffs(score, expected):
    assert band(score) is expected


def test_bands_are_monotonic():
    ranks = [band_rank(band(s)) for s in range(0, 101)]
    assert ranks == sorted(ranks)
    assert band_rank(band(50)) >= band_rank(band(49))


def test_every_domain_band_has_specific_text():
    for dom in Domain:
        for b in Band:
            text = analysis_text(dom, b)
            assert text and "this cognitive domain" not in text


def test_strong_domain_lists_strengths_only():
    a = build_domain_analysis(Domain.MEMORY, 95)
    assert a.band is Band.EXCELLENT
    assert a.strengths[0] == "Strong memory performance (95/100)"
    assert a.weaknesses == []
    assert a.recommendations[1].startswith("Suggested activities: ")


def test_weak_domain_lists_weaknesses_only():
    a = build_domain_analysis(Domain.VOCABULARY, 40)
    assert a.band is Band.NEEDS_DEVELOPMENT
    assert a.strengths == []
    assert a.weaknesses[0] == "Vocabulary needs improvement (40/100)"


def test_middle_scores_have_neither():
    a = build_domain_analysis(Domain.NAVIGATION, 65)
    assert a.strengths == [] and a.weaknesses == []
    b = build_domain_analysis(Domain.NAVIGATION, 60)
    assert b.weaknesses == []
    c = build_domain_analysis(Domain.NAVIGATION, 70)
    assert c.strengths


def test_null_domains_are_left_out():
    scores = DomainScores(memory=95, vocabulary=40, navigation=75, cognitive_flexibility=72)
    analyses = build_domain_analyses(scores)
    assert [a.domain for a in analyses] == [
        Domain.MEMORY, Domain.VOCABULARY, Domain.NAVIGATION, Domain.COGNITIVE_FLEXIBILITY,
    ]


def test_to_dict_uses_label_and_key():
    d = build_domain_analysis(Domain.PROBLEM_SOLVING, 72).to_dict()
    assert d["domain"] == "Problem Solving"
    assert d["domainKey"] == "problemSolving"
    assert d["band"] == "Very Good"


def test_describe_has_default():
    assert describe(None) == "Cognitive ability score"
    assert "switch" in describe(Domain.COGNITIVE_FLEXIBILITY)
