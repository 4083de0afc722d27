from __future__ import annotations

import asyncio
import json
import logging

from cognitive_core import patterns
from cognitive_core.engine import (
    FALLBACK_SUMMARY,
    generate_report,
    generate_report_async,
    narrative_facts,
    rank_strengths,
    rank_weaknesses,
)
from cognitive_core.types import DomainScores, UserData

from tests.conftest import build_all_skipped, build_full_metrics


def _strip_time(d: dict) -> dict:
    d = dict(d)
    d.pop("createdAt", None)
    return d


def test_scenario_report(scenario_metrics, sample_user):
    report = generate_report(sample_user, scenario_metrics).to_dict()
    assert report["isFallback"] is False
    assert report["overallScore"] == 71
    assert [d["domain"] for d in report["domainAnalyses"]] == [
        "Memory", "Vocabulary", "Navigation", "Cognitive Flexibility",
    ]
    assert report["strengths"][0] == {"name": "Memory", "score": 95}
    assert {"name": "Vocabulary", "score": 40} in report["weaknesses"]
    assert len(report["relationshipInsights"]) <= 3
    assert report["learningStyle"]["primaryStyle"] == "Visual-Spatial"
    assert report["recommendations"][0].startswith("Vocabulary Building: ")
    assert report["summaryAnalysis"].startswith("Alex completed 4 of 6 assessments")

    detail = report["detailedPerformanceData"]
    assert detail["skippedGames"] == ["towerOfHanoi"]
    assert detail["domainScores"]["problemSolving"] is None
    assert set(detail["patternInsights"]) == set(patterns.ANALYZERS)


def test_report_is_idempotent():
    raw = build_full_metrics()
    a = generate_report({"id": "u"}, raw).to_dict()
    b = generate_report({"id": "u"}, json.loads(json.dumps(raw))).to_dict()
    assert json.dumps(_strip_time(a), sort_keys=True) == json.dumps(_strip_time(b), sort_keys=True)


def test_report_is_json_safe(full_metrics):
    json.dumps(generate_report(None, full_metrics).to_dict())


def test_all_skipped_is_not_a_failure():
    report = generate_report({"name": "Sam"}, build_all_skipped())
    assert report.is_fallback is False
    assert report.overall_score == 0
    assert report.domain_analyses == []
    assert report.strengths == [] and report.weaknesses == []
    assert report.learning_style.primary_style == "Visual"
    assert report.summary_analysis.startswith("No completed assessments")


def test_strength_and_weakness_ranking():
    scores = DomainScores(memory=80, problem_solving=90, vocabulary=80, spatial_reasoning=30,
                          navigation=60, cognitive_flexibility=30)
    assert [(e.name, e.score) for e in rank_strengths(scores)] == [
        ("Problem Solving", 90), ("Memory", 80), ("Vocabulary", 80),
    ]
    assert [(e.name, e.score) for e in rank_weaknesses(scores)] == [
        ("Spatial Reasoning", 30), ("Cognitive Flexibility", 30), ("Navigation", 60),
    ]
    assert len(rank_strengths(scores, limit=1)) == 1


def test_analyzer_failure_gives_fallback(monkeypatch, caplog, full_metrics):
    def boom(bag):
        raise KeyError("unexpected shape")

    monkeypatch.setitem(patterns.ANALYZERS, "strategyPatterns", boom)
    with caplog.at_level(logging.ERROR, logger="cognitive_core.engine"):
        report = generate_report({"id": "u1", "name": "Kim"}, full_metrics)

    assert report.is_fallback is True
    assert report.learning_style.primary_style == "Visual"
    assert report.summary_analysis == FALLBACK_SUMMARY
    assert report.overall_score == 0
    assert report.domain_analyses == [] and report.recommendations == []
    assert report.user_data.name == "Kim"
    assert any(r.exc_info for r in caplog.records)


def test_malformed_record_gives_fallback():
    report = generate_report({}, {"memoryMatch": ["not", "a", "record"]})
    assert report.is_fallback is True
    assert report.summary_analysis


def test_learning_style_label_from_user(scenario_metrics):
    report = generate_report({"learningStyle": "auditory"}, scenario_metrics)
    assert report.learning_style.primary_style == "Auditory"
    report = generate_report({}, scenario_metrics, learning_style="Sequential learner")
    assert report.learning_style.primary_style == "Sequential"


def test_unreadable_user_payload():
    report = generate_report(["nope"], {})
    assert isinstance(report.user_data, UserData)
    assert report.is_fallback is False


def test_async_fetch(scenario_metrics):
    async def fetch():
        return scenario_metrics

    report = asyncio.run(generate_report_async({"id": "a"}, fetch))
    assert report.overall_score == 71


def test_async_fetch_timeout_degrades_to_empty():
    async def slow():
        await asyncio.sleep(5)
        return build_full_metrics()

    report = asyncio.run(generate_report_async({"id": "a"}, slow, timeout=0.01))
    assert report.is_fallback is False
    assert report.overall_score == 0
    assert report.detailed_performance_data["missingGames"] == [
        "memoryMatch", "towerOfHanoi", "wordPuzzle", "spatialPattern", "mazeRun", "stroopChallenge",
    ]


def test_async_fetch_failure_degrades_to_empty():
    async def broken():
        raise ConnectionError("metrics service down")

    report = asyncio.run(generate_report_async({"id": "a"}, broken))
    assert report.overall_score == 0
    assert report.is_fallback is False


def test_narrative_facts(scenario_metrics, sample_user):
    report = generate_report(sample_user, scenario_metrics)
    facts = narrative_facts(report)
    assert facts["overallScore"] == 71
    assert facts["user"]["name"] == "Alex"
    assert [d["domain"] for d in facts["domains"]] == ["Memory", "Vocabulary", "Navigation", "Cognitive Flexibility"]
    assert facts["learningStyle"] == "Visual-Spatial"
    assert set(facts["patterns"]) == set(patterns.ANALYZERS)
    # dict form gives the same facts
    assert narrative_facts(report.to_dict()) == facts
    json.dumps(facts)
