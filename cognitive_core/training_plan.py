from __future__ import annotations

from typing import Any, Dict, List

from .domain_insights import TRAINING_ACTIVITIES
from .types import DomainScores

PHASE_TITLES = ("Week 1-2", "Week 3-4", "Week 5-6")
FOCUS_PHASES = 2

BALANCED_PHASE = {
    "focus": "Balanced Training",
    "activities": [
        "Combine exercises from all cognitive domains",
        "Increase difficulty progressively",
        "Track improvements weekly",
    ],
}

DAILY_PRACTICE = [
    {"title": "Morning Routine (10-15 minutes)",
     "description": "Start your day with quick memory and attention exercises to boost cognitive alertness."},
    {"title": "Midday Challenge (15-20 minutes)",
     "description": "Focus on your weaker cognitive domains during peak mental energy hours."},
    {"title": "Evening Review (5-10 minutes)",
     "description": "Light practice on strengths to reinforce neural pathways before sleep."},
]


def build_training_plan(scores: DomainScores) -> Dict[str, Any]:
    """Phased plan: the two lowest known domains first, then balanced training.

    Domains without data never get a focus phase. Ties keep Domain order.
    """
    lowest = sorted(scores.known(), key=lambda item: item[1])[:FOCUS_PHASES]
    phases: List[Dict[str, Any]] = [
        {"focus": f"Focus on {dom.label}", "domain": dom.label, "activities": list(TRAINING_ACTIVITIES[dom])}
        for dom, _ in lowest
    ]
    phases.append({**BALANCED_PHASE, "activities": list(BALANCED_PHASE["activities"])})
    for title, phase in zip(PHASE_TITLES, phases):
        phase["title"] = title
    return {"phases": phases, "dailyPractice": [dict(p) for p in DAILY_PRACTICE]}
