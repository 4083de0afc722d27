from __future__ import annotations

import copy

import pytest


SCENARIO_METRICS: dict = {
    "memoryMatch": {"memoryScore": 95, "avgReactionTime": 800, "is_skipped": False},
    "towerOfHanoi": {"is_skipped": True},
    "wordPuzzle": {"vocabularyScore": 40},
    "spatialPattern": None,
    "mazeRun": {"spatialNavigationScore": 75},
    "stroopChallenge": {"cognitiveFlexibilityScore": 72},
}

SAMPLE_USER: dict = {
    "id": "user-1",
    "name": "Alex",
    "age": 29,
    "education": "Bachelor",
    "difficulty": "medium",
}


def build_full_metrics(**overrides) -> dict:
    """A complete six-game bag with every field the analyzers read."""

    bag = {
        "memoryMatch": {
            "memoryScore": 88,
            "accuracy": 92,
            "avgReactionTime": 1200,
            "errors": 2,
            "matches": 8,
            "moves": [{"time": 1000}, {"time": 1000}, {"time": 1000}],
        },
        "towerOfHanoi": {
            "problemSolvingScore": 80,
            "planningScore": 75,
            "moves": 8,
            "optimalMoves": 7,
            "moveHistory": [{"time": 0}, {"time": 1000}, {"time": 2000}, {"time": 3000}],
        },
        "wordPuzzle": {"vocabularyScore": 65, "accuracy": 80},
        "spatialPattern": {
            "spatialScore": 78,
            "patternRecognitionScore": 74,
            "accuracyRate": 85,
            "reactionTime": 1500,
        },
        "mazeRun": {"spatialNavigationScore": 82, "pathEfficiency": 95, "backtrackingCount": 1},
        "stroopChallenge": {
            "cognitiveFlexibilityScore": 76,
            "attentionScore": 80,
            "accuracy": 94,
            "averageResponseTime": 900,
            "correctResponses": 47,
            "incorrectResponses": 3,
            "interferenceEffect": 150,
            "trials": [{"responseTime": 900}, {"responseTime": 900}, {"responseTime": 900}],
        },
    }
    for key, value in overrides.items():
        bag[key] = value
    return bag


def build_all_skipped() -> dict:
    from cognitive_core.games import GAME_KEYS

    return {key: {"is_skipped": True} for key in GAME_KEYS}


@pytest.fixture
def scenario_metrics() -> dict:
    return copy.deepcopy(SCENARIO_METRICS)


@pytest.fixture
def full_metrics() -> dict:
    return build_full_metrics()


@pytest.fixture
def sample_user() -> dict:
    return dict(SAMPLE_USER)
