from __future__ import annotations

from cognitive_core import config
from cognitive_core.recommendations import RecommendationSettings, prioritized_recommendations
from cognitive_core.types import Insight, ScoreEntry


def test_weakest_first_then_leverage():
    recs = prioritized_recommendations(
        [ScoreEntry("Memory", 95)],
        [ScoreEntry("Navigation", 55), ScoreEntry("Vocabulary", 40)],
        {},
    )
    assert recs[0].startswith("Vocabulary Building: ")
    assert recs[1].startswith("Mental Mapping: ")
    assert recs[-1].startswith("Leverage Memory: ")


def test_pattern_items_follow_weaknesses():
    patterns = {
        "speedAccuracyTradeoffs": Insight(summary="fast", dominant_style="Speed-Focused"),
        "consistencyPatterns": Insight(summary="var", consistency_level="Variable"),
        "errorPatterns": Insight(summary="err", detailed_analysis={"overallPattern": "High"}),
        "strategyPatterns": Insight(summary="exp", detailed_analysis={"towerOfHanoi": "Exploratory"}),
    }
    recs = prioritized_recommendations([], [ScoreEntry("Memory", 30)], patterns, {"RECOMMENDATIONS_MAX": 10})
    titles = [r.split(":")[0] for r in recs]
    assert titles == ["Daily Memory Practice", "Pace Yourself", "Steady Rhythm", "Check Before Committing", "Plan First"]


def test_cap_from_cfg():
    recs = prioritized_recommendations(
        [ScoreEntry("Memory", 95)],
        [ScoreEntry("Vocabulary", 40), ScoreEntry("Navigation", 45), ScoreEntry("Memory", 50)],
        {},
        {"RECOMMENDATIONS_MAX": 2},
    )
    assert len(recs) == 2


def test_empty_profile_gets_maintenance_item():
    assert prioritized_recommendations([], [], {}) == [
        "Maintain Your Skills: Keep a varied routine of puzzles, reading, and memory games to stay sharp."
    ]


def test_settings_tolerate_bad_values():
    assert RecommendationSettings.from_cfg({"RECOMMENDATIONS_MAX": "lots"}).max_items == config.RECOMMENDATIONS_MAX
    assert RecommendationSettings.from_cfg({"RECOMMENDATIONS_MAX": 0}).max_items == 1
    assert RecommendationSettings.from_cfg(None).max_items >= 1
