from __future__ import annotations
from typing import List
from . import config
from .types import DomainScores, RelationshipInsight


def describe_pair(a: str, b: str, sa: int, sb: int) -> str | None:
    gap = abs(sa - sb)
    if 100 - gap >= config.RELATIONSHIP_BALANCED_MIN:
        return (f"Your {a} and {b} abilities are very well balanced, "
                "indicating integrated cognitive processing across these domains.")
    if gap >= config.RELATIONSHIP_GAP_MIN:
        strong, weak = (a, b) if sa > sb else (b, a)
        return (f"Your {strong} abilities are significantly stronger than your {weak} abilities, "
                f"suggesting an opportunity for targeted development: use {strong} strategies to bridge the gap.")
    return None


def relationship_insights(scores: DomainScores, cap: int | None = None) -> List[RelationshipInsight]:
    """Pairwise balance narratives over known domains.

    Pairs run in fixed Domain order and the first `cap` matches are kept.
    This is a FIFO cap for simplicity, not a ranking of the most useful pairs.
    """
    limit = config.RELATIONSHIP_INSIGHTS_MAX if cap is None else cap
    known = scores.known(); out: List[RelationshipInsight] = []
    for i in range(len(known)):
        for j in range(i + 1, len(known)):
            if len(out) >= limit: return out
            (da, sa), (db, sb) = known[i], known[j]
            text = describe_pair(da.label, db.label, sa, sb)
            if text is None: continue
            out.append(RelationshipInsight(domains=(da.label, db.label), insight=text))
    return out
