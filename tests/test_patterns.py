from __future__ import annotations

import pytest

from cognitive_core.games import parse_metrics
from cognitive_core.patterns import (
    ANALYZERS,
    analyze_consistency,
    analyze_cross_domain,
    analyze_errors,
    analyze_speed_accuracy,
    analyze_strategy,
    coefficient_of_variation,
    consistency_level,
    identify_unique_strengths,
    maze_strategy,
    process_detailed_metrics,
    tower_strategy,
)

from tests.conftest import build_all_skipped, build_full_metrics


def _bag(raw):
    return parse_metrics(raw)


def test_cv_constant_series_is_high_consistency():
    cv = coefficient_of_variation([1000, 1000, 1000])
    assert cv == 0
    assert consistency_level(cv) == "High"


def test_cv_spiky_series_is_variable():
    cv = coefficient_of_variation([100, 5000, 100])
    assert cv > 1.0
    assert consistency_level(cv) == "Variable"


def test_cv_needs_two_positive_values():
    assert coefficient_of_variation([]) == 0
    assert coefficient_of_variation([500]) == 0
    assert coefficient_of_variation([0, -3, 500]) == 0


def test_consistency_levels_boundaries():
    assert consistency_level(0.149) == "High"
    assert consistency_level(0.15) == "Moderate"
    assert consistency_level(0.299) == "Moderate"
    assert consistency_level(0.30) == "Variable"


def test_full_bag_analyzers(full_metrics):
    out = process_detailed_metrics(_bag(full_metrics))
    assert list(out) == list(ANALYZERS)

    speed = out["speedAccuracyTradeoffs"]
    assert speed.dominant_style == "Balanced"
    assert speed.detailed_analysis["averageSpeed"] == 1200

    consistency = out["consistencyPatterns"]
    assert consistency.consistency_level == "High"
    assert consistency.detailed_analysis["towerOfHanoi"] == {"moveIntervalsConsistency": 0}

    strategy = out["strategyPatterns"]
    assert strategy.detailed_analysis == {"towerOfHanoi": "Strategic", "mazeRun": "Efficient Explorer"}
    assert "strong strategic thinking" in strategy.summary

    errors = out["errorPatterns"]
    assert errors.detailed_analysis["memoryMatch"]["pattern"] == "Low"
    assert errors.detailed_analysis["overallPattern"] == "Low"

    cross = out["crossDomainStrengths"]
    assert cross.detailed_analysis["crossDomainPatterns"] == {"visualSpatial": "Strong", "executiveFunction": "Strong"}
    assert "visual-spatial" in cross.summary

    unique = out["uniqueStrengths"]
    assert unique.detailed_analysis["uniqueStrengths"] == [
        "Exceptional visual memory with both speed and accuracy",
        "Exceptional cognitive control and flexibility",
    ]
    assert unique.summary.startswith("You demonstrate 2 notable cognitive strengths")


def test_all_skipped_reports_insufficient_data():
    out = process_detailed_metrics(_bag(build_all_skipped()))
    for name in ("speedAccuracyTradeoffs", "consistencyPatterns", "strategyPatterns", "errorPatterns"):
        assert out[name].summary.startswith("Insufficient data"), name
    assert out["speedAccuracyTradeoffs"].dominant_style is None
    assert out["consistencyPatterns"].consistency_level is None
    assert out["crossDomainStrengths"].detailed_analysis["crossDomainPatterns"] == {}
    assert out["uniqueStrengths"].detailed_analysis["uniqueStrengths"] == []


def test_speed_focused_and_accuracy_focused():
    fast = _bag({"memoryMatch": {"memoryScore": 60, "accuracy": 60, "avgReactionTime": 500}})
    assert analyze_speed_accuracy(fast).dominant_style == "Speed-Focused"
    slow = _bag({"stroopChallenge": {"cognitiveFlexibilityScore": 80, "accuracy": 95, "averageResponseTime": 2500}})
    assert analyze_speed_accuracy(slow).dominant_style == "Accuracy-Focused"


def test_speed_requires_both_fields(scenario_metrics):
    # scenario memoryMatch has a reaction time but no accuracy
    insight = analyze_speed_accuracy(_bag(scenario_metrics))
    assert insight.summary.startswith("Insufficient data")


def test_single_value_series_does_not_dominate():
    bag = _bag({
        "memoryMatch": {"memoryScore": 70, "moves": [{"time": 1000}, {"time": 1000}, {"time": 1000}]},
        "stroopChallenge": {"cognitiveFlexibilityScore": 70, "trials": [{"responseTime": 9000}]},
    })
    insight = analyze_consistency(bag)
    assert insight.detailed_analysis["stroopChallenge"] == {"responseTimesConsistency": 0}
    assert insight.detailed_analysis["averageCoefficient"] == 0
    assert insight.consistency_level == "High"


def test_consistency_ignores_skipped_games():
    bag = _bag({"memoryMatch": {"is_skipped": True, "moves": [{"time": 100}, {"time": 5000}]}})
    assert analyze_consistency(bag).summary.startswith("Insufficient data")


@pytest.mark.parametrize("ratio,expected", [(0.95, "Highly Strategic"), (0.8, "Strategic"), (0.7, "Exploratory")])
def test_tower_strategy(ratio, expected):
    assert tower_strategy(ratio) == expected


def test_maze_strategy_needs_few_backtracks():
    assert maze_strategy(0.95, 1) == "Efficient Explorer"
    assert maze_strategy(0.95, 5) == "Methodical Explorer"
    assert maze_strategy(0.5, 0) == "Trial and Error Explorer"


def test_strategy_from_efficiency_percent():
    bag = _bag({"towerOfHanoi": {"problemSolvingScore": 50, "efficiency": 60},
                "mazeRun": {"spatialNavigationScore": 50, "efficiency": 50}})
    insight = analyze_strategy(bag)
    assert insight.detailed_analysis == {"towerOfHanoi": "Exploratory", "mazeRun": "Trial and Error Explorer"}
    assert "exploratory approach" in insight.summary


def test_memory_error_tier_uses_game_cutoffs():
    bag = _bag({"memoryMatch": {"memoryScore": 40, "errors": 5, "matches": 5}})
    insight = analyze_errors(bag)
    assert insight.detailed_analysis["memoryMatch"] == {"errorRate": 0.5, "pattern": "High"}
    assert insight.detailed_analysis["overallPattern"] == "High"


def test_zero_attempts_are_excluded_from_error_rate():
    bag = _bag({
        "memoryMatch": {"memoryScore": 40},
        "stroopChallenge": {"cognitiveFlexibilityScore": 50, "correctResponses": 40, "totalItems": 50},
    })
    insight = analyze_errors(bag)
    assert "memoryMatch" not in insight.detailed_analysis
    assert insight.detailed_analysis["stroopChallenge"]["errorRate"] == 0.2
    assert insight.detailed_analysis["overallPattern"] == "Moderate"


def test_cross_domain_specialized():
    bag = _bag({"spatialPattern": {"spatialScore": 90}, "mazeRun": {"spatialNavigationScore": 40}})
    insight = analyze_cross_domain(bag)
    assert insight.detailed_analysis["crossDomainPatterns"] == {}
    assert "specialized" in insight.summary


def test_unique_strength_requires_interference_field():
    raw = build_full_metrics()
    del raw["stroopChallenge"]["interferenceEffect"]
    found = identify_unique_strengths(_bag(raw)).detailed_analysis["uniqueStrengths"]
    assert "Exceptional cognitive control and flexibility" not in found


def test_single_unique_strength_wording():
    bag = _bag({"towerOfHanoi": {"problemSolvingScore": 95, "optimalMovesRatio": 0.97}})
    insight = identify_unique_strengths(bag)
    assert insight.summary == (
        "You demonstrate 1 notable cognitive strength: Exceptional strategic thinking and planning."
    )
