from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from . import config as cfg_defaults
from .types import Domain, Insight, ScoreEntry

log = logging.getLogger(__name__)


_FOCUS_TITLES: Dict[Domain, str] = {
    Domain.MEMORY: "Daily Memory Practice",
    Domain.PROBLEM_SOLVING: "Strategic Problem-Solving",
    Domain.VOCABULARY: "Vocabulary Building",
    Domain.SPATIAL_REASONING: "Spatial Visualization",
    Domain.NAVIGATION: "Mental Mapping",
    Domain.COGNITIVE_FLEXIBILITY: "Task-Switching Practice",
}

_FOCUS_TEXT: Dict[Domain, str] = {
    Domain.MEMORY: "Spend 15 minutes daily on memory exercises to strengthen recall and pattern recognition.",
    Domain.PROBLEM_SOLVING: "Practice breaking down complex problems into manageable steps to improve efficiency.",
    Domain.VOCABULARY: "Read diverse texts daily and keep a log of five new words each week.",
    Domain.SPATIAL_REASONING: "Work through mental rotation and pattern recreation exercises three times a week.",
    Domain.NAVIGATION: "Sketch routes from memory and navigate familiar places without GPS.",
    Domain.COGNITIVE_FLEXIBILITY: "Alternate between two different tasks in short timed blocks to train switching.",
}

_LEVERAGE_TEXT: Dict[Domain, str] = {
    Domain.MEMORY: "Use your recall strength to anchor new material with summaries and flashcards.",
    Domain.PROBLEM_SOLVING: "Take on planning-heavy projects where structured reasoning pays off.",
    Domain.VOCABULARY: "Use writing and explanation to consolidate what you learn in other areas.",
    Domain.SPATIAL_REASONING: "Turn abstract material into diagrams and spatial layouts.",
    Domain.NAVIGATION: "Use mental maps to organize sequences of information.",
    Domain.COGNITIVE_FLEXIBILITY: "Mix study topics within a session to keep engagement high.",
}


@dataclass(frozen=True)
class RecommendationSettings:
    max_items: int

    @staticmethod
    def from_cfg(cfg: Mapping[str, Any] | None) -> "RecommendationSettings":
        raw = cfg_defaults.RECOMMENDATIONS_MAX
        if isinstance(cfg, Mapping) and "RECOMMENDATIONS_MAX" in cfg:
            raw = cfg["RECOMMENDATIONS_MAX"]
        return RecommendationSettings(max_items=max(1, _safe_int(raw, cfg_defaults.RECOMMENDATIONS_MAX)))


def _safe_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _pattern_items(patterns: Mapping[str, Insight]) -> List[str]:
    items: List[str] = []
    speed = patterns.get("speedAccuracyTradeoffs")
    if speed and speed.dominant_style == "Speed-Focused":
        items.append("Pace Yourself: Slow down slightly on timed tasks; accuracy gains tend to outweigh the lost seconds.")
    elif speed and speed.dominant_style == "Accuracy-Focused":
        items.append("Build Fluency: Practice familiar tasks under a gentle time limit to speed up without losing accuracy.")

    consistency = patterns.get("consistencyPatterns")
    if consistency and consistency.consistency_level == "Variable":
        items.append("Steady Rhythm: Short, regular sessions at the same time of day help even out performance.")

    errors = patterns.get("errorPatterns")
    if errors and errors.detailed_analysis.get("overallPattern") == "High":
        items.append("Check Before Committing: Pause briefly before each response to cut avoidable errors.")

    strategy = patterns.get("strategyPatterns")
    if strategy and strategy.detailed_analysis:
        tiers = set(strategy.detailed_analysis.values())
        if tiers <= {"Exploratory", "Trial and Error Explorer"}:
            items.append("Plan First: Sketch a plan before starting multi-step puzzles instead of exploring by trial and error.")
    return items


def prioritized_recommendations(
    strengths: Sequence[ScoreEntry],
    weaknesses: Sequence[ScoreEntry],
    patterns: Mapping[str, Insight],
    cfg: Mapping[str, Any] | None = None,
) -> List[str]:
    """Ordered "Title: description" items, weakest domains first.

    Order: one item per weakness (lowest score first), then behavioural items
    from the pattern insights, then one item leveraging the top strength.
    """
    settings = RecommendationSettings.from_cfg(cfg)
    out: List[str] = []

    for weak in sorted(weaknesses, key=lambda w: w.score):
        dom = Domain.from_label(weak.name)
        if dom is None:
            out.append(f"{weak.name} Training: Regular practice in {weak.name.lower()} activities can help improve this cognitive domain.")
            continue
        out.append(f"{_FOCUS_TITLES[dom]}: {_FOCUS_TEXT[dom]}")

    out.extend(_pattern_items(patterns))

    if strengths:
        top = Domain.from_label(strengths[0].name)
        if top is not None:
            out.append(f"Leverage {top.label}: {_LEVERAGE_TEXT[top]}")

    if not out:
        out.append("Maintain Your Skills: Keep a varied routine of puzzles, reading, and memory games to stay sharp.")

    if len(out) > settings.max_items:
        log.debug("trimming recommendations from %d to %d", len(out), settings.max_items)
        out = out[: settings.max_items]
    return out
