from __future__ import annotations
import asyncio, logging, time
from typing import Any, Mapping, Optional

from . import config
from .azure_cfg import client as azure_client, settings as azure_settings

log = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You write short cognitive assessment narratives for learners and educators. "
    "Use only the facts provided. Do not invent scores, domains or diagnoses. "
    "Write in a professional but accessible style, avoid technical jargon, "
    "and keep it to four short paragraphs."
)


def backend_in_use(cfg: Mapping[str, Any] | None = None) -> str:
    return config.narrative_backend(dict(cfg or config.load_config())) or "none"


def build_prompt(facts: Mapping[str, Any]) -> str:
    user = facts.get("user") or {}
    lines = [
        "User information:",
        f"- Name: {user.get('name') or 'Not specified'}",
        f"- Age: {user.get('age') if user.get('age') is not None else 'Not specified'}",
        f"- Education level: {user.get('education') or 'Not specified'}",
        f"- Difficulty level: {user.get('difficulty') or 'Not specified'}",
        "",
        f"Overall score: {facts.get('overallScore', 0)}/100",
        "Domain results:",
    ]
    for d in facts.get("domains") or []:
        lines.append(f"- {d.get('domain')}: {d.get('score')}/100 ({d.get('band')})")
    if not facts.get("domains"):
        lines.append("- No completed assessments")
    lines.append("Behavioural patterns:")
    for name, summary in (facts.get("patterns") or {}).items():
        lines.append(f"- {name}: {summary}")
    lines.append(f"Learning style: {facts.get('learningStyle') or 'Not determined'}")
    lines += [
        "",
        "Please cover: overall performance, strengths and weaknesses per domain, "
        "how the abilities relate to each other, and how they show up in everyday, "
        "academic and professional activities.",
    ]
    return "\n".join(lines)


def _narrate_azure(facts: Mapping[str, Any], cfg: Mapping[str, Any]) -> str:
    s = azure_settings(cfg)
    cli = azure_client(s)
    resp = cli.chat.completions.create(
        model=s.deployment,
        messages=[{"role": "system", "content": SYSTEM_PROMPT}, {"role": "user", "content": build_prompt(facts)}],
        temperature=0.4,
        max_tokens=config.NARRATIVE_MAX_TOKENS,
        timeout=config.NARRATIVE_TIMEOUT_SEC,
    )
    return (resp.choices[0].message.content or "").strip()


def generate_narrative(facts: Mapping[str, Any], cfg: Mapping[str, Any] | None = None) -> Optional[str]:
    """Prose narrative for a report's facts, or None when disabled or failing."""
    cfg = dict(cfg if cfg is not None else config.load_config())
    backend = config.narrative_backend(cfg)
    if backend is None:
        return None
    t0 = time.time()
    try:
        text = _narrate_azure(facts, cfg)
    except Exception:
        log.debug("narrative generation failed", exc_info=True)
        return None
    log.info("narrative generated backend=%s chars=%d rt_ms=%d", backend, len(text), int((time.time() - t0) * 1000))
    return text or None


async def narrate(
    facts: Mapping[str, Any],
    cfg: Mapping[str, Any] | None = None,
    timeout: Optional[float] = None,
) -> Optional[str]:
    limit = config.NARRATIVE_TIMEOUT_SEC if timeout is None else timeout
    try:
        return await asyncio.wait_for(asyncio.to_thread(generate_narrative, facts, cfg), timeout=limit)
    except asyncio.TimeoutError:
        log.debug("narrative timed out after %.1fs", limit)
        return None

