# cognitive_core/bands.py
from .config import BAND_EXCELLENT, BAND_VERY_GOOD, BAND_GOOD
from .types import Band

def band(score: float) -> Band:
    s = float(score)
    if s >= BAND_EXCELLENT: return Band.EXCELLENT
    if s >= BAND_VERY_GOOD: return Band.VERY_GOOD
    if s >= BAND_GOOD: return Band.GOOD
    return Band.NEEDS_DEVELOPMENT

_RANK = {Band.NEEDS_DEVELOPMENT: 0, Band.GOOD: 1, Band.VERY_GOOD: 2, Band.EXCELLENT: 3}

def band_rank(b: Band) -> int:
    return _RANK[b]
