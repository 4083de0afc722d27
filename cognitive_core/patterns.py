# cognitive_core/patterns.py
"""Behavioural pattern analyzers.

Every analyzer reads the raw game records (not just the normalized scores),
ignores skipped games and returns exactly one Insight.  When the underlying
data is absent the summary says so instead of guessing a classification.
"""
from __future__ import annotations

import logging
from statistics import mean, pstdev
from typing import Any, Callable, Dict, List, Optional, Sequence

from .games import (
    MemoryMatchMetrics,
    MazeRunMetrics,
    MetricsBag,
    SpatialPatternMetrics,
    StroopChallengeMetrics,
    TowerOfHanoiMetrics,
    WordPuzzleMetrics,
)
from .types import Insight

log = logging.getLogger(__name__)

INSUFFICIENT = "Insufficient data to determine {what}."

# speed is in milliseconds, accuracy in percent
ACCURACY_FOCUSED_MIN_ACC = 85.0
ACCURACY_FOCUSED_MIN_SPEED_MS = 2000.0
SPEED_FOCUSED_MAX_ACC = 75.0
SPEED_FOCUSED_MAX_SPEED_MS = 1000.0

CONSISTENCY_HIGH = 0.15
CONSISTENCY_MODERATE = 0.30

ERROR_HIGH = 0.30
ERROR_MODERATE = 0.15
# per-game (high, moderate) error-rate cuts
_GAME_ERROR_TIERS: Dict[str, tuple[float, float]] = {
    "memoryMatch": (0.40, 0.20),
    "stroopChallenge": (0.30, 0.15),
}

CROSS_DOMAIN_MIN = 70.0


def _live(bag: MetricsBag, key: str, cls: type) -> Any:
    rec = bag.get(key)
    if isinstance(rec, cls) and not rec.is_skipped:
        return rec
    return None


# ---------------------------------------------------------------- speed/accuracy
def analyze_speed_accuracy(bag: MetricsBag) -> Insight:
    pairs: Dict[str, Dict[str, float]] = {}

    mem = _live(bag, "memoryMatch", MemoryMatchMetrics)
    if mem and mem.avg_reaction_time is not None and mem.accuracy is not None:
        pairs["memoryMatch"] = {"speed": mem.avg_reaction_time, "accuracy": mem.accuracy}

    stroop = _live(bag, "stroopChallenge", StroopChallengeMetrics)
    if stroop and stroop.average_response_time is not None and stroop.accuracy is not None:
        pairs["stroopChallenge"] = {"speed": stroop.average_response_time, "accuracy": stroop.accuracy}

    spatial = _live(bag, "spatialPattern", SpatialPatternMetrics)
    if spatial and spatial.reaction_time is not None and spatial.accuracy_rate is not None:
        pairs["spatialPattern"] = {"speed": spatial.reaction_time, "accuracy": spatial.accuracy_rate}

    if not pairs:
        return Insight(
            summary=INSUFFICIENT.format(what="speed-accuracy tradeoff patterns"),
            detailed_analysis={},
        )

    avg_speed = mean(p["speed"] for p in pairs.values())
    avg_acc = mean(p["accuracy"] for p in pairs.values())

    if avg_acc > ACCURACY_FOCUSED_MIN_ACC and avg_speed > ACCURACY_FOCUSED_MIN_SPEED_MS:
        style = "Accuracy-Focused"
        summary = "You tend to prioritize accuracy over speed, taking time to ensure correct responses."
    elif avg_acc < SPEED_FOCUSED_MAX_ACC and avg_speed < SPEED_FOCUSED_MAX_SPEED_MS:
        style = "Speed-Focused"
        summary = "You tend to prioritize speed over accuracy, responding quickly even at the cost of some errors."
    else:
        style = "Balanced"
        summary = "You maintain a good balance between speed and accuracy in cognitive tasks."

    detail: Dict[str, Any] = dict(pairs)
    detail["averageSpeed"] = round(avg_speed, 2)
    detail["averageAccuracy"] = round(avg_acc, 2)
    return Insight(summary=summary, dominant_style=style, detailed_analysis=detail)


# ---------------------------------------------------------------- consistency
def coefficient_of_variation(values: Sequence[float]) -> float:
    """Population std / mean over the positive values; < 2 of them gives 0."""
    valid = [float(v) for v in values if v is not None and v > 0]
    if len(valid) <= 1:
        return 0.0
    mu = mean(valid)
    return pstdev(valid, mu) / mu


def _deltas(timestamps: Sequence[float]) -> List[float]:
    return [b - a for a, b in zip(timestamps, timestamps[1:])]


def _valid_count(values: Sequence[float]) -> int:
    return sum(1 for v in values if v is not None and v > 0)


def consistency_level(cv: float) -> str:
    if cv < CONSISTENCY_HIGH:
        return "High"
    if cv < CONSISTENCY_MODERATE:
        return "Moderate"
    return "Variable"


def analyze_consistency(bag: MetricsBag) -> Insight:
    # per-action durations; tower reports absolute timestamps instead
    series: Dict[str, tuple[str, List[float]]] = {}

    mem = _live(bag, "memoryMatch", MemoryMatchMetrics)
    if mem and mem.move_times:
        series["memoryMatch"] = ("moveTimesConsistency", list(mem.move_times))

    stroop = _live(bag, "stroopChallenge", StroopChallengeMetrics)
    if stroop and stroop.response_times:
        series["stroopChallenge"] = ("responseTimesConsistency", list(stroop.response_times))

    tower = _live(bag, "towerOfHanoi", TowerOfHanoiMetrics)
    if tower and len(tower.move_timestamps) > 1:
        series["towerOfHanoi"] = ("moveIntervalsConsistency", _deltas(tower.move_timestamps))

    detail: Dict[str, Any] = {}
    coefficients: List[float] = []
    for game, (label, values) in series.items():
        cv = coefficient_of_variation(values)
        detail[game] = {label: round(cv, 4)}
        # a single value or an empty series reports 0 but stays out of the average
        if _valid_count(values) >= 2:
            coefficients.append(cv)

    if not coefficients:
        return Insight(
            summary=INSUFFICIENT.format(what="consistency patterns"),
            detailed_analysis=detail,
        )

    avg_cv = mean(coefficients)
    level = consistency_level(avg_cv)
    if level == "High":
        summary = ("You demonstrate high consistency in your cognitive performance, "
                   "maintaining steady performance across tasks.")
    elif level == "Moderate":
        summary = ("You show moderate consistency in your cognitive performance, "
                   "with some variation between attempts.")
    else:
        summary = ("Your cognitive performance shows significant variability, "
                   "with notable differences between attempts.")
    detail["averageCoefficient"] = round(avg_cv, 4)
    return Insight(summary=summary, consistency_level=level, detailed_analysis=detail)


# ---------------------------------------------------------------- strategy
# rank 3 wins the summary; ties resolve to the highest rank's wording
_STRATEGY_RANK: Dict[str, int] = {
    "Highly Strategic": 3,
    "Efficient Explorer": 3,
    "Strategic": 2,
    "Methodical Explorer": 2,
    "Exploratory": 1,
    "Trial and Error Explorer": 1,
}

_STRATEGY_SUMMARY: Dict[int, str] = {
    3: "You demonstrate strong strategic thinking, efficiently solving problems with minimal wasted effort.",
    2: "You show good strategic thinking, approaching problems methodically.",
    1: "You tend to use an exploratory approach to problem-solving, learning through trial and error.",
}


def tower_strategy(ratio: float) -> str:
    if ratio > 0.9:
        return "Highly Strategic"
    if ratio > 0.7:
        return "Strategic"
    return "Exploratory"


def maze_strategy(ratio: float, backtracks: float) -> str:
    if ratio > 0.9 and backtracks < 3:
        return "Efficient Explorer"
    if ratio > 0.7:
        return "Methodical Explorer"
    return "Trial and Error Explorer"


def analyze_strategy(bag: MetricsBag) -> Insight:
    indicators: Dict[str, str] = {}

    tower = _live(bag, "towerOfHanoi", TowerOfHanoiMetrics)
    if tower:
        ratio = tower.efficiency_ratio()
        if ratio is not None:
            indicators["towerOfHanoi"] = tower_strategy(ratio)

    maze = _live(bag, "mazeRun", MazeRunMetrics)
    if maze:
        ratio = maze.path_efficiency_ratio()
        if ratio is not None:
            indicators["mazeRun"] = maze_strategy(ratio, maze.backtrack_count or 0.0)

    if not indicators:
        return Insight(summary=INSUFFICIENT.format(what="strategy patterns"), detailed_analysis={})

    best = max(_STRATEGY_RANK[s] for s in indicators.values())
    return Insight(summary=_STRATEGY_SUMMARY[best], detailed_analysis=dict(indicators))


# ---------------------------------------------------------------- errors
def error_rate(incorrect: float, correct: float) -> Optional[float]:
    total = incorrect + correct
    if total <= 0:
        return None
    return incorrect / total


def error_tier(rate: float, high: float = ERROR_HIGH, moderate: float = ERROR_MODERATE) -> str:
    if rate > high:
        return "High"
    if rate > moderate:
        return "Moderate"
    return "Low"


def analyze_errors(bag: MetricsBag) -> Insight:
    patterns: Dict[str, Dict[str, Any]] = {}

    mem = _live(bag, "memoryMatch", MemoryMatchMetrics)
    if mem:
        incorrect = mem.errors or 0.0
        correct = mem.matches
        if correct is None and mem.total_moves is not None:
            correct = max(0.0, mem.total_moves - incorrect)
        rate = error_rate(incorrect, correct or 0.0)
        if rate is not None:
            high, moderate = _GAME_ERROR_TIERS["memoryMatch"]
            patterns["memoryMatch"] = {"errorRate": round(rate, 4), "pattern": error_tier(rate, high, moderate)}

    stroop = _live(bag, "stroopChallenge", StroopChallengeMetrics)
    if stroop:
        correct = stroop.correct_responses or 0.0
        incorrect = stroop.incorrect_responses
        if incorrect is None and stroop.total_items is not None:
            incorrect = max(0.0, stroop.total_items - correct)
        rate = error_rate(incorrect or 0.0, correct)
        if rate is not None:
            high, moderate = _GAME_ERROR_TIERS["stroopChallenge"]
            patterns["stroopChallenge"] = {"errorRate": round(rate, 4), "pattern": error_tier(rate, high, moderate)}

    if not patterns:
        return Insight(summary=INSUFFICIENT.format(what="error patterns"), detailed_analysis={})

    avg = mean(p["errorRate"] for p in patterns.values())
    overall = error_tier(avg)
    if overall == "High":
        summary = ("You tend to make more errors in cognitive tasks, which may indicate "
                   "opportunities to improve focus or processing.")
    elif overall == "Moderate":
        summary = "You make a moderate number of errors in cognitive tasks, balancing speed with accuracy."
    else:
        summary = "You make few errors in cognitive tasks, showing strong focus and attention to detail."
    detail: Dict[str, Any] = dict(patterns)
    detail["averageErrorRate"] = round(avg, 4)
    detail["overallPattern"] = overall
    return Insight(summary=summary, detailed_analysis=detail)


# ---------------------------------------------------------------- cross-domain
def _cross_domain_scores(bag: MetricsBag) -> Dict[str, float]:
    scores: Dict[str, float] = {}
    mem = _live(bag, "memoryMatch", MemoryMatchMetrics)
    if mem:
        scores["memory"] = mem.memory_score or 0.0
    tower = _live(bag, "towerOfHanoi", TowerOfHanoiMetrics)
    if tower:
        scores["problemSolving"] = tower.problem_solving_score or 0.0
        if tower.planning_score is not None:
            scores["planning"] = tower.planning_score
    word = _live(bag, "wordPuzzle", WordPuzzleMetrics)
    if word:
        scores["vocabulary"] = word.vocabulary_score or 0.0
        if word.language_score is not None:
            scores["language"] = word.language_score
    spatial = _live(bag, "spatialPattern", SpatialPatternMetrics)
    if spatial:
        scores["spatial"] = spatial.spatial_score or 0.0
        if spatial.pattern_recognition_score is not None:
            scores["patternRecognition"] = spatial.pattern_recognition_score
    maze = _live(bag, "mazeRun", MazeRunMetrics)
    if maze:
        scores["navigation"] = maze.spatial_navigation_score or 0.0
    stroop = _live(bag, "stroopChallenge", StroopChallengeMetrics)
    if stroop:
        scores["cognitiveFlexibility"] = stroop.cognitive_flexibility_score or 0.0
        if stroop.attention_score is not None:
            scores["attention"] = stroop.attention_score
    return scores


def analyze_cross_domain(bag: MetricsBag) -> Insight:
    scores = _cross_domain_scores(bag)
    patterns: Dict[str, str] = {}

    if scores.get("spatial", 0.0) > CROSS_DOMAIN_MIN and scores.get("navigation", 0.0) > CROSS_DOMAIN_MIN:
        patterns["visualSpatial"] = "Strong"
    if (scores.get("problemSolving", 0.0) > CROSS_DOMAIN_MIN
            and scores.get("cognitiveFlexibility", 0.0) > CROSS_DOMAIN_MIN):
        patterns["executiveFunction"] = "Strong"

    # fixed first-match order: visual-spatial before executive function
    if "visualSpatial" in patterns:
        summary = ("You show strong visual-spatial abilities across different tasks, "
                   "indicating good mental visualization skills.")
    elif "executiveFunction" in patterns:
        summary = ("You demonstrate strong executive function skills across different tasks, "
                   "showing good cognitive control and planning abilities.")
    else:
        summary = "Your cognitive strengths appear specialized rather than showing strong cross-domain patterns."

    return Insight(
        summary=summary,
        detailed_analysis={"domainScores": scores, "crossDomainPatterns": patterns},
    )


# ---------------------------------------------------------------- unique strengths
def identify_unique_strengths(bag: MetricsBag) -> Insight:
    found: List[str] = []

    mem = _live(bag, "memoryMatch", MemoryMatchMetrics)
    if mem and mem.accuracy is not None:
        acc = mem.accuracy
        rt = mem.avg_reaction_time
        fast = rt is not None and rt < 1500
        if acc > 90 and fast:
            found.append("Exceptional visual memory with both speed and accuracy")
        elif acc > 90:
            found.append("Highly accurate visual memory")
        elif fast and acc > 75:
            found.append("Fast visual memory processing")

    tower = _live(bag, "towerOfHanoi", TowerOfHanoiMetrics)
    if tower:
        ratio = tower.efficiency_ratio()
        if ratio is not None and ratio > 0.9:
            found.append("Exceptional strategic thinking and planning")

    stroop = _live(bag, "stroopChallenge", StroopChallengeMetrics)
    if stroop and stroop.accuracy is not None and stroop.interference_effect is not None:
        if stroop.accuracy > 90 and stroop.interference_effect < 200:
            found.append("Exceptional cognitive control and flexibility")

    if found:
        noun = "strength" if len(found) == 1 else "strengths"
        summary = f"You demonstrate {len(found)} notable cognitive {noun}: {', '.join(found)}."
    else:
        summary = ("No exceptional strengths identified in the available data, "
                   "though you show balanced abilities across domains.")
    return Insight(summary=summary, detailed_analysis={"uniqueStrengths": found})


ANALYZERS: Dict[str, Callable[[MetricsBag], Insight]] = {
    "speedAccuracyTradeoffs": analyze_speed_accuracy,
    "consistencyPatterns": analyze_consistency,
    "strategyPatterns": analyze_strategy,
    "errorPatterns": analyze_errors,
    "crossDomainStrengths": analyze_cross_domain,
    "uniqueStrengths": identify_unique_strengths,
}


def process_detailed_metrics(bag: MetricsBag) -> Dict[str, Insight]:
    """Run every analyzer; failures propagate to the report boundary."""
    out: Dict[str, Insight] = {}
    for name, fn in ANALYZERS.items():
        out[name] = fn(bag)
        log.debug("pattern %s: %s", name, out[name].summary)
    return out
