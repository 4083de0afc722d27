# cognitive_core/engine.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from . import config
from .balance import balance_analysis, reference_comparison
from .bands import band
from .domain_insights import build_domain_analyses
from .learning_style import classify, default_style
from .normalizer import NormalizedMetrics, normalize, overall_score
from .patterns import process_detailed_metrics
from .recommendations import prioritized_recommendations
from .relationships import relationship_insights
from .training_plan import build_training_plan
from .types import CognitiveReport, DomainScores, Insight, ScoreEntry, UserData, to_basic

log = logging.getLogger(__name__)

FALLBACK_SUMMARY = (
    "Detailed analysis is currently unavailable. Your results were received, "
    "but the report could not be fully generated; please try again later."
)

MetricsFetcher = Callable[[], Awaitable[Optional[Mapping[str, Any]]]]


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def rank_strengths(scores: DomainScores, limit: Optional[int] = None) -> List[ScoreEntry]:
    cap = config.STRENGTHS_MAX if limit is None else limit
    picked = [ScoreEntry(d.label, s) for d, s in scores.known() if s >= config.REPORT_STRENGTH_MIN]
    # sorted() is stable: ties keep the fixed domain order
    return sorted(picked, key=lambda e: -e.score)[:cap]


def rank_weaknesses(scores: DomainScores, limit: Optional[int] = None) -> List[ScoreEntry]:
    cap = config.WEAKNESSES_MAX if limit is None else limit
    picked = [ScoreEntry(d.label, s) for d, s in scores.known() if s < config.REPORT_STRENGTH_MIN]
    return sorted(picked, key=lambda e: e.score)[:cap]


def _summary_text(
    user: UserData,
    overall: int,
    norm: NormalizedMetrics,
    strengths: List[ScoreEntry],
    weaknesses: List[ScoreEntry],
) -> str:
    done = len(norm.completed_games)
    if done == 0:
        return (
            "No completed assessments were available, so no domain scores could be calculated. "
            "Complete at least one game to receive a personalized analysis."
        )
    who = user.name or "You"
    parts = [
        f"{who} completed {done} of {len(norm.scores.items())} assessments with an overall score of "
        f"{overall} ({band(overall).value})."
    ]
    if strengths:
        top = strengths[0]
        parts.append(f"The strongest area is {top.name} ({top.score}).")
    if weaknesses:
        low = weaknesses[0]
        parts.append(f"The area with the most room to grow is {low.name} ({low.score}).")
    if norm.skipped_games:
        parts.append(f"{len(norm.skipped_games)} skipped game(s) were excluded from scoring.")
    return " ".join(parts)


def assemble_report(
    user: UserData,
    raw_metrics: Mapping[str, Any] | None,
    *,
    learning_style: Optional[str] = None,
    cfg: Mapping[str, Any] | None = None,
    created_at: Optional[str] = None,
) -> CognitiveReport:
    """Run the full pipeline. Any failure propagates to generate_report."""
    bag, norm = normalize(raw_metrics)
    patterns: Dict[str, Insight] = process_detailed_metrics(bag)
    analyses = build_domain_analyses(norm.scores)
    relations = relationship_insights(norm.scores)

    strengths = rank_strengths(norm.scores)
    weaknesses = rank_weaknesses(norm.scores)
    style = classify(learning_style or user.learning_style, strengths, weaknesses)
    recs = prioritized_recommendations(strengths, weaknesses, patterns, cfg)

    overall = overall_score(norm.scores)
    detailed: Dict[str, Any] = {
        "domainScores": norm.scores.to_dict(),
        "completedGames": list(norm.completed_games),
        "skippedGames": list(norm.skipped_games),
        "missingGames": list(norm.missing_games),
        "patternInsights": {name: ins.to_dict() for name, ins in patterns.items()},
        "balanceAnalysis": [c.to_dict() for c in balance_analysis(norm.scores, bag)],
        "referenceComparison": reference_comparison(norm.scores),
        "trainingPlan": build_training_plan(norm.scores),
    }

    return CognitiveReport(
        user_data=user,
        overall_score=overall,
        summary_analysis=_summary_text(user, overall, norm, strengths, weaknesses),
        domain_analyses=analyses,
        learning_style=style,
        recommendations=recs,
        detailed_performance_data=detailed,
        strengths=strengths,
        weaknesses=weaknesses,
        relationship_insights=relations,
        created_at=created_at or utcnow_iso(),
    )


def fallback_report(user: UserData, created_at: Optional[str] = None) -> CognitiveReport:
    """Minimal, well-formed report used whenever assembly fails."""
    return CognitiveReport(
        user_data=user,
        overall_score=0,
        summary_analysis=FALLBACK_SUMMARY,
        domain_analyses=[],
        learning_style=default_style(),
        recommendations=[],
        detailed_performance_data={},
        strengths=[],
        weaknesses=[],
        relationship_insights=[],
        is_fallback=True,
        created_at=created_at or utcnow_iso(),
    )


def _as_user(user: Any) -> UserData:
    if isinstance(user, UserData):
        return user
    try:
        return UserData.from_payload(user)
    except (TypeError, ValueError):
        log.warning("unreadable user payload; continuing with an anonymous profile")
        return UserData()


def generate_report(
    user: UserData | Mapping[str, Any] | None,
    raw_metrics: Mapping[str, Any] | None,
    *,
    learning_style: Optional[str] = None,
    cfg: Mapping[str, Any] | None = None,
    created_at: Optional[str] = None,
) -> CognitiveReport:
    """Build a CognitiveReport; never raises.

    Identical inputs yield identical reports apart from ``created_at``.
    """
    user_data = _as_user(user)
    try:
        report = assemble_report(
            user_data,
            raw_metrics,
            learning_style=learning_style,
            cfg=cfg,
            created_at=created_at,
        )
    except Exception:
        log.exception("report assembly failed for user %s; using fallback report", user_data.id)
        return fallback_report(user_data, created_at=created_at)
    log.info(
        "report built user=%s overall=%d domains=%d",
        user_data.id,
        report.overall_score,
        len(report.domain_analyses),
    )
    return report


async def generate_report_async(
    user: UserData | Mapping[str, Any] | None,
    fetch_metrics: MetricsFetcher,
    *,
    timeout: Optional[float] = None,
    learning_style: Optional[str] = None,
    cfg: Mapping[str, Any] | None = None,
) -> CognitiveReport:
    """Await the metrics fetch, then run the synchronous pipeline.

    A fetch that times out or fails degrades to an empty metrics bag, which
    still yields a structurally valid report.
    """
    limit = config.METRICS_FETCH_TIMEOUT_SEC if timeout is None else timeout
    try:
        raw = await asyncio.wait_for(fetch_metrics(), timeout=limit)
    except asyncio.TimeoutError:
        log.warning("metrics fetch timed out after %.1fs; building report without data", limit)
        raw = {}
    except Exception:
        log.exception("metrics fetch failed; building report without data")
        raw = {}
    return generate_report(user, raw, learning_style=learning_style, cfg=cfg)


def narrative_facts(report: CognitiveReport | Mapping[str, Any]) -> Dict[str, Any]:
    """Structured, JSON-safe facts for an external text generator."""
    data = report.to_dict() if isinstance(report, CognitiveReport) else dict(report or {})
    user = data.get("userData") or {}
    patterns = (data.get("detailedPerformanceData") or {}).get("patternInsights") or {}
    style = data.get("learningStyle") or {}
    return to_basic({
        "user": {k: user.get(k) for k in ("name", "age", "education", "difficulty")},
        "overallScore": data.get("overallScore", 0),
        "domains": [
            {"domain": d.get("domain"), "score": d.get("score"), "band": d.get("band")}
            for d in data.get("domainAnalyses") or []
        ],
        "strengths": data.get("strengths") or [],
        "weaknesses": data.get("weaknesses") or [],
        "patterns": {name: (p or {}).get("summary") for name, p in patterns.items()},
        "relationships": [r.get("insight") for r in data.get("relationshipInsights") or []],
        "learningStyle": style.get("primaryStyle"),
        "isFallback": bool(data.get("isFallback")),
    })
