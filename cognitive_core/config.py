from __future__ import annotations
import os, json, pathlib


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Completed-but-missing score field. Zero is valid data, not absence:
# only the is_skipped flag marks a game as "no data".
COMPLETED_SCORE_DEFAULT: int = 0

SCORE_MIN: int = 0
SCORE_MAX: int = 100

BAND_EXCELLENT: int = 85
BAND_VERY_GOOD: int = 70
BAND_GOOD: int = 50

STRENGTH_MIN_SCORE: int = 70
WEAKNESS_MAX_SCORE: int = 60
REPORT_STRENGTH_MIN: int = 70

RELATIONSHIP_BALANCED_MIN: int = 80
RELATIONSHIP_GAP_MIN: int = 25
RELATIONSHIP_INSIGHTS_MAX: int = 3

STRENGTHS_MAX: int = 3
WEAKNESSES_MAX: int = 3
RECOMMENDATIONS_MAX: int = 5

# Balance cards: a pair counts as balanced at or above this balance score.
BALANCE_BALANCED_MIN: int = 70
# Mean response time that maps to a speed index of 100.
SPEED_INDEX_REFERENCE_MS: float = 1000.0

# Population averages shown next to the user's scores, in Domain order.
REFERENCE_AVERAGES: dict = {
    "memory": 70,
    "problemSolving": 65,
    "vocabulary": 72,
    "spatialReasoning": 68,
    "navigation": 67,
    "cognitiveFlexibility": 63,
}

# Deterministic learning-style fallback so the report always renders.
DEFAULT_LEARNING_STYLE: str = "visual"

NARRATIVE_ENABLED: bool = False
NARRATIVE_TIMEOUT_SEC: float = 20.0
NARRATIVE_MAX_TOKENS: int = 600
METRICS_FETCH_TIMEOUT_SEC: float = 10.0

# // env overrides for staging/ops; thresholds above stay fixed.
RELATIONSHIP_INSIGHTS_MAX = _env_int("RELATIONSHIP_INSIGHTS_MAX", RELATIONSHIP_INSIGHTS_MAX)
RECOMMENDATIONS_MAX = _env_int("RECOMMENDATIONS_MAX", RECOMMENDATIONS_MAX)
STRENGTHS_MAX = _env_int("STRENGTHS_MAX", STRENGTHS_MAX)
WEAKNESSES_MAX = _env_int("WEAKNESSES_MAX", WEAKNESSES_MAX)
NARRATIVE_ENABLED = _env_bool("NARRATIVE_ENABLED", NARRATIVE_ENABLED)
NARRATIVE_TIMEOUT_SEC = _env_float("NARRATIVE_TIMEOUT_SEC", NARRATIVE_TIMEOUT_SEC)
NARRATIVE_MAX_TOKENS = _env_int("NARRATIVE_MAX_TOKENS", NARRATIVE_MAX_TOKENS)
METRICS_FETCH_TIMEOUT_SEC = _env_float("METRICS_FETCH_TIMEOUT_SEC", METRICS_FETCH_TIMEOUT_SEC)


def _env_true(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1","true","yes","on")
def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    e = os.environ
    if e.get("NARRATIVE_ENABLED"): cfg["NARRATIVE_ENABLED"] = _env_true("NARRATIVE_ENABLED")
    if e.get("LLM_BACKEND"): cfg["LLM_BACKEND"] = e.get("LLM_BACKEND")
    for k in ("AZURE_OPENAI_ENDPOINT","AZURE_OPENAI_API_VERSION","AZURE_OPENAI_API_KEY","AZURE_OPENAI_DEPLOYMENT"):
        if e.get(k): cfg[k] = e.get(k)
    if e.get("RECOMMENDATIONS_MAX"): cfg["RECOMMENDATIONS_MAX"] = _env_int("RECOMMENDATIONS_MAX", RECOMMENDATIONS_MAX)
    return cfg
def narrative_backend(cfg: dict) -> str|None:
    if not cfg.get("NARRATIVE_ENABLED", NARRATIVE_ENABLED): return None
    b = (cfg.get("LLM_BACKEND") or "azure").lower().strip()
    return b if b == "azure" else None
