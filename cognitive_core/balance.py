from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from . import config
from .games import MetricsBag
from .normalizer import clamp_score
from .types import Domain, DomainScores


@dataclass(frozen=True)
class BalanceComparison:
    title: str
    labels: tuple
    scores: tuple
    balance_score: int

    @property
    def balanced(self) -> bool:
        return self.balance_score >= config.BALANCE_BALANCED_MIN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "labels": list(self.labels),
            "scores": list(self.scores),
            "balanceScore": self.balance_score,
            "isBalanced": self.balanced,
        }


# (title, (left label, left domains), (right label, right domains))
DOMAIN_PAIRS = (
    ("Analytical vs. Creative",
     ("Analytical", (Domain.PROBLEM_SOLVING, Domain.NAVIGATION)),
     ("Creative", (Domain.VOCABULARY, Domain.SPATIAL_REASONING))),
    ("Visual vs. Verbal",
     ("Visual", (Domain.SPATIAL_REASONING, Domain.NAVIGATION)),
     ("Verbal", (Domain.VOCABULARY, Domain.COGNITIVE_FLEXIBILITY))),
)


def balance_score(a: float, b: float) -> int:
    """100 when both sides match; drops with the gap relative to their mean."""
    total = a + b
    if total <= 0:
        return 50
    return clamp_score(100 - abs(a - b) / (total / 2) * 100)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _side(scores: DomainScores, domains: Sequence[Domain]) -> Optional[int]:
    values = [scores.get(d) for d in domains]
    if any(v is None for v in values):
        return None
    return clamp_score(_mean(values))


def speed_index(avg_ms: float) -> int:
    if avg_ms <= 0:
        return 0
    return clamp_score(100 * config.SPEED_INDEX_REFERENCE_MS / avg_ms)


def _speed_vs_accuracy(bag: MetricsBag) -> Optional[BalanceComparison]:
    memory = bag.get("memoryMatch")
    stroop = bag.get("stroopChallenge")
    if memory is None or stroop is None or memory.is_skipped or stroop.is_skipped:
        return None
    times = (memory.avg_reaction_time, stroop.average_response_time)
    accuracy = (memory.accuracy, stroop.accuracy)
    if any(v is None for v in times + accuracy):
        return None
    speed = speed_index(_mean(times))
    acc = clamp_score(_mean(accuracy))
    return BalanceComparison("Processing Speed vs. Accuracy", ("Speed", "Accuracy"), (speed, acc),
                             balance_score(speed, acc))


def _domain_pair(scores: DomainScores, pair) -> Optional[BalanceComparison]:
    title, (left, left_doms), (right, right_doms) = pair
    a, b = _side(scores, left_doms), _side(scores, right_doms)
    if a is None or b is None:
        return None
    return BalanceComparison(title, (left, right), (a, b), balance_score(a, b))


def balance_analysis(scores: DomainScores, bag: MetricsBag) -> List[BalanceComparison]:
    """Balance comparisons for which every contributing domain has data.

    A comparison touching a skipped or missing game is left out, never scored
    against zero.
    """
    analytical, visual = (_domain_pair(scores, p) for p in DOMAIN_PAIRS)
    return [c for c in (analytical, _speed_vs_accuracy(bag), visual) if c is not None]


def reference_comparison(scores: DomainScores) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for dom, score in scores.known():
        ref = config.REFERENCE_AVERAGES.get(dom.value)
        if ref is None:
            continue
        diff = score - ref
        rows.append({
            "domain": dom.label,
            "score": score,
            "referenceAverage": ref,
            "difference": diff,
            "position": "Above" if diff > 0 else ("Below" if diff < 0 else "At"),
        })
    return rows
