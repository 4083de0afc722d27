# app_cli/analyze.py
from __future__ import annotations
import argparse, asyncio, datetime, json, logging, os, re, sys
from typing import Any, Dict

from cognitive_core.config import load_config
from cognitive_core.engine import generate_report, narrative_facts
from cognitive_core.games import GAME_KEYS
from cognitive_core.llm_bridge import narrate
from cognitive_core.report_html import export_report_html


def _read_input(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise SystemExit(f"{path}: expected a JSON object")
    # a bare metrics bag is accepted too
    if "metrics" not in data and any(k in data for k in GAME_KEYS):
        data = {"user": {}, "metrics": data}
    return data


def _slug(text: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]+", "_", text).strip("_") or "anonymous"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Build a cognitive report from a JSON metrics file.")
    ap.add_argument("input", help="JSON file holding {user, metrics} or a bare metrics bag")
    ap.add_argument("--out", default="reports", help="output directory")
    ap.add_argument("--style", default=None, help="learning style label from an external assessment")
    ap.add_argument("--narrate", action="store_true", help="ask the configured LLM for a prose narrative")
    ap.add_argument("--no-html", action="store_true")
    ap.add_argument("-v", "--verbose", action="store_true")
    a = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if a.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    data = _read_input(a.input)
    cfg = load_config()
    report = generate_report(data.get("user"), data.get("metrics"), learning_style=a.style, cfg=cfg).to_dict()
    if a.narrate:
        report["narrative"] = asyncio.run(narrate(narrative_facts(report), cfg))

    os.makedirs(a.out, exist_ok=True)
    who = _slug(str((report.get("userData") or {}).get("id") or (report.get("userData") or {}).get("name") or ""))
    ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    base = os.path.join(a.out, f"report_{who}_{ts}")
    with open(base + ".json", "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
    print(f"Report: {base}.json")
    if not a.no_html:
        export_report_html(report, base + ".html")
        print(f"HTML  : {base}.html")
    print(f"Overall: {report['overallScore']}/100{' (fallback)' if report['isFallback'] else ''}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
