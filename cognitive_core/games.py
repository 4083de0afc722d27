"""Per-game metric records as produced by the six assessment games.

Each game reports a different payload shape (camelCase keys, with a few
aliases depending on the game build).  The records below read those payloads
into one frozen dataclass per game.  A record with ``is_skipped`` set keeps no
score data at all: every numeric field stays ``None``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type

from .config import COMPLETED_SCORE_DEFAULT
from .types import Domain

log = logging.getLogger(__name__)

GAME_KEYS: Tuple[str, ...] = (
    "memoryMatch",
    "towerOfHanoi",
    "wordPuzzle",
    "spatialPattern",
    "mazeRun",
    "stroopChallenge",
)


class MetricsShapeError(TypeError):
    """A metrics record is not a mapping (or a parsed record) at all."""


def _num(payload: Mapping[str, Any], *keys: str) -> Optional[float]:
    for key in keys:
        if key not in payload:
            continue
        val = payload.get(key)
        if isinstance(val, bool) or val is None:
            continue
        try:
            f = float(val)
        except (TypeError, ValueError):
            continue
        if math.isfinite(f):
            return f
    return None


def _series(raw: Any, key: str) -> Tuple[float, ...]:
    """Pull a numeric series from a list of numbers or a list of dicts."""
    if not isinstance(raw, (list, tuple)):
        return ()
    out = []
    for entry in raw:
        if isinstance(entry, Mapping):
            val = _num(entry, key)
        else:
            val = _num({"v": entry}, "v")
        out.append(0.0 if val is None else val)
    return tuple(out)


@dataclass(frozen=True)
class GameMetrics:
    game: ClassVar[str] = ""
    domain: ClassVar[Domain]

    is_skipped: bool = False
    difficulty: Optional[str] = None
    score: Optional[float] = None
    time_spent: Optional[float] = None

    def primary_score(self) -> Optional[float]:
        raise NotImplementedError

    def domain_score(self) -> Tuple[Domain, Optional[float]]:
        """Map the record onto its domain; skipped means no data, never zero."""
        if self.is_skipped:
            return self.domain, None
        raw = self.primary_score()
        return self.domain, (float(COMPLETED_SCORE_DEFAULT) if raw is None else raw)

    @classmethod
    def _fields_from(cls, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GameMetrics":
        # only a literal true marks a skip; "false" or 1 keep the record
        skipped = payload.get("is_skipped") is True or payload.get("isSkipped") is True
        difficulty = payload.get("difficulty")
        difficulty = str(difficulty) if difficulty is not None else None
        if skipped:
            return cls(is_skipped=True, difficulty=difficulty)
        return cls(
            is_skipped=False,
            difficulty=difficulty,
            score=_num(payload, "score"),
            time_spent=_num(payload, "timeSpent", "totalTime"),
            **cls._fields_from(payload),
        )


@dataclass(frozen=True)
class MemoryMatchMetrics(GameMetrics):
    game: ClassVar[str] = "memoryMatch"
    domain: ClassVar[Domain] = Domain.MEMORY

    memory_score: Optional[float] = None
    accuracy: Optional[float] = None
    avg_reaction_time: Optional[float] = None
    errors: Optional[float] = None
    matches: Optional[float] = None
    total_moves: Optional[float] = None
    move_times: Tuple[float, ...] = ()

    def primary_score(self) -> Optional[float]:
        return self.memory_score

    @classmethod
    def _fields_from(cls, payload: Mapping[str, Any]) -> Dict[str, Any]:
        moves = payload.get("moves")
        total_moves = _num(payload, "totalMoves")
        if total_moves is None and not isinstance(moves, (list, tuple)):
            total_moves = _num(payload, "moves")
        return {
            "memory_score": _num(payload, "memoryScore"),
            "accuracy": _num(payload, "accuracy"),
            "avg_reaction_time": _num(payload, "avgReactionTime", "averageMatchTime"),
            "errors": _num(payload, "errors", "incorrectAttempts"),
            "matches": _num(payload, "matches", "matchesMade"),
            "total_moves": total_moves,
            "move_times": _series(moves, "time"),
        }


@dataclass(frozen=True)
class TowerOfHanoiMetrics(GameMetrics):
    game: ClassVar[str] = "towerOfHanoi"
    domain: ClassVar[Domain] = Domain.PROBLEM_SOLVING

    problem_solving_score: Optional[float] = None
    planning_score: Optional[float] = None
    moves: Optional[float] = None
    optimal_moves: Optional[float] = None
    optimal_moves_ratio: Optional[float] = None
    efficiency: Optional[float] = None
    move_timestamps: Tuple[float, ...] = ()

    def primary_score(self) -> Optional[float]:
        return self.problem_solving_score

    def efficiency_ratio(self) -> Optional[float]:
        """Optimal moves over actual moves, 1.0 being a perfect solve."""
        if self.optimal_moves_ratio is not None:
            return self.optimal_moves_ratio
        if self.optimal_moves is not None and self.moves:
            return self.optimal_moves / self.moves
        if self.efficiency is not None:
            return self.efficiency / 100.0
        return None

    @classmethod
    def _fields_from(cls, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "problem_solving_score": _num(payload, "problemSolvingScore"),
            "planning_score": _num(payload, "planningScore"),
            "moves": _num(payload, "moves", "movesCount"),
            "optimal_moves": _num(payload, "optimalMoves"),
            "optimal_moves_ratio": _num(payload, "optimalMovesRatio"),
            "efficiency": _num(payload, "efficiency"),
            "move_timestamps": _series(payload.get("moveHistory"), "time"),
        }


@dataclass(frozen=True)
class WordPuzzleMetrics(GameMetrics):
    game: ClassVar[str] = "wordPuzzle"
    domain: ClassVar[Domain] = Domain.VOCABULARY

    vocabulary_score: Optional[float] = None
    language_score: Optional[float] = None
    accuracy: Optional[float] = None
    correct_answers: Optional[float] = None
    total_words: Optional[float] = None
    avg_word_time: Optional[float] = None
    processing_speed: Optional[float] = None

    def primary_score(self) -> Optional[float]:
        return self.vocabulary_score

    @classmethod
    def _fields_from(cls, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "vocabulary_score": _num(payload, "vocabularyScore"),
            "language_score": _num(payload, "languageScore"),
            "accuracy": _num(payload, "accuracy"),
            "correct_answers": _num(payload, "correctAnswers", "wordsFound"),
            "total_words": _num(payload, "totalWords"),
            "avg_word_time": _num(payload, "avgWordTime"),
            "processing_speed": _num(payload, "processingSpeed"),
        }


@dataclass(frozen=True)
class SpatialPatternMetrics(GameMetrics):
    game: ClassVar[str] = "spatialPattern"
    domain: ClassVar[Domain] = Domain.SPATIAL_REASONING

    spatial_score: Optional[float] = None
    pattern_recognition_score: Optional[float] = None
    accuracy_rate: Optional[float] = None
    reaction_time: Optional[float] = None
    max_level: Optional[float] = None

    def primary_score(self) -> Optional[float]:
        return self.spatial_score

    @classmethod
    def _fields_from(cls, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "spatial_score": _num(payload, "spatialScore"),
            "pattern_recognition_score": _num(payload, "patternRecognitionScore"),
            "accuracy_rate": _num(payload, "accuracyRate"),
            "reaction_time": _num(payload, "reactionTime"),
            "max_level": _num(payload, "maxLevel", "complexityLevel"),
        }


@dataclass(frozen=True)
class MazeRunMetrics(GameMetrics):
    game: ClassVar[str] = "mazeRun"
    domain: ClassVar[Domain] = Domain.NAVIGATION

    spatial_navigation_score: Optional[float] = None
    planning_score: Optional[float] = None
    path_efficiency: Optional[float] = None
    efficiency: Optional[float] = None
    backtrack_count: Optional[float] = None
    path_length: Optional[float] = None
    optimal_path_length: Optional[float] = None

    def primary_score(self) -> Optional[float]:
        return self.spatial_navigation_score

    def path_efficiency_ratio(self) -> Optional[float]:
        """Optimal path length over walked path length, as a 0..1 ratio."""
        if self.path_efficiency is not None:
            return self.path_efficiency / 100.0 if self.path_efficiency > 1.0 else self.path_efficiency
        if self.efficiency is not None:
            return self.efficiency / 100.0
        if self.optimal_path_length is not None and self.path_length:
            return self.optimal_path_length / self.path_length
        return None

    @classmethod
    def _fields_from(cls, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "spatial_navigation_score": _num(payload, "spatialNavigationScore", "navigationScore"),
            "planning_score": _num(payload, "planningScore"),
            "path_efficiency": _num(payload, "pathEfficiency"),
            "efficiency": _num(payload, "efficiency"),
            "backtrack_count": _num(payload, "backtrackingCount", "backtrackCount"),
            "path_length": _num(payload, "pathLength"),
            "optimal_path_length": _num(payload, "optimalPathLength"),
        }


@dataclass(frozen=True)
class StroopChallengeMetrics(GameMetrics):
    game: ClassVar[str] = "stroopChallenge"
    domain: ClassVar[Domain] = Domain.COGNITIVE_FLEXIBILITY

    cognitive_flexibility_score: Optional[float] = None
    attention_score: Optional[float] = None
    accuracy: Optional[float] = None
    average_response_time: Optional[float] = None
    correct_responses: Optional[float] = None
    incorrect_responses: Optional[float] = None
    total_items: Optional[float] = None
    interference_effect: Optional[float] = None
    response_times: Tuple[float, ...] = ()

    def primary_score(self) -> Optional[float]:
        return self.cognitive_flexibility_score

    @classmethod
    def _fields_from(cls, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "cognitive_flexibility_score": _num(payload, "cognitiveFlexibilityScore", "flexibilityScore"),
            "attention_score": _num(payload, "attentionScore", "attentionControlScore"),
            "accuracy": _num(payload, "accuracy"),
            "average_response_time": _num(payload, "averageResponseTime", "avgResponseTime", "responseTime"),
            "correct_responses": _num(payload, "correctResponses"),
            "incorrect_responses": _num(payload, "incorrectResponses", "errors"),
            "total_items": _num(payload, "totalItems"),
            "interference_effect": _num(payload, "interferenceEffect"),
            "response_times": _series(payload.get("trials"), "responseTime"),
        }


GAME_TYPES: Dict[str, Type[GameMetrics]] = {
    t.game: t
    for t in (
        MemoryMatchMetrics,
        TowerOfHanoiMetrics,
        WordPuzzleMetrics,
        SpatialPatternMetrics,
        MazeRunMetrics,
        StroopChallengeMetrics,
    )
}

GAME_FOR_DOMAIN: Dict[Domain, str] = {t.domain: key for key, t in GAME_TYPES.items()}

MetricsBag = Dict[str, Optional[GameMetrics]]


def parse_game(key: str, payload: Any) -> Optional[GameMetrics]:
    if payload is None:
        return None
    cls = GAME_TYPES[key]
    if isinstance(payload, cls):
        return payload
    if not isinstance(payload, Mapping):
        raise MetricsShapeError(f"{key}: expected a mapping, got {type(payload).__name__}")
    return cls.from_payload(payload)


def parse_metrics(raw: Mapping[str, Any] | None) -> MetricsBag:
    """Read a raw metrics bag into typed records, keyed in fixed game order."""
    src = dict(raw or {})
    for extra in sorted(set(src) - set(GAME_KEYS)):
        log.debug("ignoring unknown game key %s", extra)
    return {key: parse_game(key, src.get(key)) for key in GAME_KEYS}
