from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .config import SCORE_MAX, SCORE_MIN
from .games import GAME_FOR_DOMAIN, GAME_KEYS, MetricsBag, parse_metrics
from .types import DOMAINS, Domain, DomainScores


def round_half_up(x: float) -> int:
    """Round .5 away from zero for positive scores (70.5 -> 71)."""
    return int(math.floor(float(x) + 0.5))


def clamp_score(x: float) -> int:
    return max(SCORE_MIN, min(SCORE_MAX, round_half_up(x)))


@dataclass(frozen=True)
class NormalizedMetrics:
    scores: DomainScores
    completed_games: List[str]
    skipped_games: List[str]
    missing_games: List[str]


def extract_domain_scores(bag: MetricsBag) -> DomainScores:
    values: Dict[Domain, Optional[int]] = {}
    for dom in DOMAINS:
        rec = bag.get(GAME_FOR_DOMAIN[dom])
        if rec is None:
            values[dom] = None
            continue
        _, raw = rec.domain_score()
        values[dom] = None if raw is None else clamp_score(raw)
    return DomainScores.from_mapping(values)


def normalize(raw: Mapping[str, Any] | MetricsBag | None) -> tuple[MetricsBag, NormalizedMetrics]:
    """Parse the raw bag and build the canonical DomainScores.

    A partially completed assessment is an expected state: missing or skipped
    games simply map to None.
    """
    bag = parse_metrics(raw)
    done, skipped, missing = [], [], []
    for key in GAME_KEYS:
        rec = bag.get(key)
        if rec is None:
            missing.append(key)
        elif rec.is_skipped:
            skipped.append(key)
        else:
            done.append(key)
    return bag, NormalizedMetrics(
        scores=extract_domain_scores(bag),
        completed_games=done,
        skipped_games=skipped,
        missing_games=missing,
    )


def overall_score(scores: DomainScores) -> int:
    """Mean over known domains only; zero known domains gives 0."""
    known = [s for _, s in scores.known()]
    if not known:
        return 0
    return round_half_up(sum(known) / len(known))
