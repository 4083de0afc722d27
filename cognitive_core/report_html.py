from __future__ import annotations
from html import escape
from typing import Any, Dict, List

from .domain_insights import describe
from .types import Domain


def _e(v: Any) -> str:
    return escape("" if v is None else str(v))


def _ul(items: List[Any]) -> str:
    if not items:
        return ""
    return "<ul>" + "".join(f"<li>{_e(i)}</li>" for i in items) + "</ul>"


def _recommendation_li(text: str) -> str:
    title, sep, rest = str(text).partition(": ")
    if sep:
        return f"<li><b>{_e(title)}</b>: {_e(rest)}</li>"
    return f"<li>{_e(text)}</li>"


def _row(d: Dict[str, Any]) -> str:
    dom = Domain.from_label(d.get("domainKey") or d.get("domain") or "")
    return (
        f"<tr><td>{_e(d.get('domain'))}</td><td>{_e(d.get('score'))}</td>"
        f"<td>{_e(d.get('band'))}</td><td>{_e(describe(dom))}</td></tr>"
    )


def _domain_block(d: Dict[str, Any]) -> str:
    parts = [f"<h4>{_e(d.get('domain'))} &middot; {_e(d.get('score'))}/100 ({_e(d.get('band'))})</h4>",
             f"<p>{_e(d.get('analysis'))}</p>"]
    if d.get("strengths"):
        parts.append("<p><b>Strengths</b></p>" + _ul(d["strengths"]))
    if d.get("weaknesses"):
        parts.append("<p><b>Areas to develop</b></p>" + _ul(d["weaknesses"]))
    if d.get("recommendations"):
        parts.append("<p><b>Recommendations</b></p>" + _ul(d["recommendations"]))
    return "<div class=\"domain\">" + "".join(parts) + "</div>"


def render_report_html(report: Dict[str, Any]) -> str:
    """Self-contained HTML page for a report dict (CognitiveReport.to_dict())."""
    user = report.get("userData") or {}
    overall = report.get("overallScore", 0)
    doms: List[Dict[str, Any]] = report.get("domainAnalyses") or []
    style = report.get("learningStyle") or {}
    detail = report.get("detailedPerformanceData") or {}
    patterns: Dict[str, Any] = detail.get("patternInsights") or {}

    fallback_html = ""
    if report.get("isFallback"):
        fallback_html = "<div class=\"banner warning\">Detailed analysis was unavailable for this report.</div>"

    rows = "\n".join(_row(d) for d in doms)
    table = ""
    if rows:
        table = (
            "<table border='1' cellpadding='6' cellspacing='0'>"
            "<thead><tr><th>Domain</th><th>Score</th><th>Band</th><th>Measures</th></tr></thead>"
            f"<tbody>{rows}</tbody></table>"
        )

    def _scores(entries: List[Dict[str, Any]]) -> str:
        return _ul([f"{e.get('name')}: {e.get('score')}" for e in entries])

    sw = ""
    if report.get("strengths") or report.get("weaknesses"):
        sw = (
            "<div class=\"cols\">"
            f"<div><h3>Strengths</h3>{_scores(report.get('strengths') or []) or '<p>None above 70 yet.</p>'}</div>"
            f"<div><h3>Areas to develop</h3>{_scores(report.get('weaknesses') or []) or '<p>None below 70.</p>'}</div>"
            "</div>"
        )

    rel = report.get("relationshipInsights") or []
    rel_html = ""
    if rel:
        rel_html = "<h3>How your abilities relate</h3><ul>" + "".join(
            f"<li><b>{_e(' & '.join(r.get('domains') or []))}</b>: {_e(r.get('insight'))}</li>" for r in rel
        ) + "</ul>"

    pat_html = ""
    if patterns:
        pat_html = "<h3>Performance patterns</h3><ul>" + "".join(
            f"<li>{_e((p or {}).get('summary'))}</li>" for p in patterns.values()
        ) + "</ul>"

    balance = detail.get("balanceAnalysis") or []
    balance_html = ""
    if balance:
        balance_html = "<h3>Cognitive balance</h3><ul>" + "".join(
            f"<li><b>{_e(c.get('title'))}</b>: "
            f"{_e(' / '.join(f'{lab} {s}' for lab, s in zip(c.get('labels') or [], c.get('scores') or [])))}"
            f" &middot; balance {_e(c.get('balanceScore'))}%"
            f"{'' if c.get('isBalanced') else ' (uneven)'}</li>"
            for c in balance
        ) + "</ul>"

    ref_rows = detail.get("referenceComparison") or []
    ref_html = ""
    if ref_rows:
        ref_html = (
            "<h3>Compared with average scores</h3>"
            "<table border='1' cellpadding='6' cellspacing='0'>"
            "<thead><tr><th>Domain</th><th>You</th><th>Average</th><th>Difference</th></tr></thead><tbody>"
            + "".join(
                f"<tr><td>{_e(r.get('domain'))}</td><td>{_e(r.get('score'))}</td>"
                f"<td>{_e(r.get('referenceAverage'))}</td><td>{_e(r.get('difference'))}</td></tr>"
                for r in ref_rows
            )
            + "</tbody></table>"
        )

    plan = detail.get("trainingPlan") or {}
    plan_html = ""
    if plan.get("phases"):
        plan_html = "<h3>Training plan</h3>" + "".join(
            f"<h4>{_e(p.get('title'))}: {_e(p.get('focus'))}</h4>" + _ul(p.get("activities") or [])
            for p in plan["phases"]
        ) + "<h4>Daily practice</h4>" + _ul(
            [f"{d.get('title')}: {d.get('description')}" for d in plan.get("dailyPractice") or []]
        )

    recs = report.get("recommendations") or []
    recs_html = ""
    if recs:
        recs_html = "<h3>Recommendations</h3><ol>" + "".join(_recommendation_li(r) for r in recs) + "</ol>"

    style_html = ""
    if style:
        style_html = (
            f"<h3>Learning style: {_e(style.get('primaryStyle'))}</h3>"
            f"<p>{_e(style.get('description'))}</p>"
            "<h4>Teaching strategies</h4>" + _ul(style.get("teachingStrategies") or [])
            + "<h4>Accommodations</h4>" + _ul(style.get("accommodations") or [])
        )

    narrative_html = ""
    if report.get("narrative"):
        paras = [p for p in str(report["narrative"]).split("\n\n") if p.strip()]
        narrative_html = "<h3>Narrative</h3>" + "".join(f"<p>{_e(p)}</p>" for p in paras)

    title = f"Cognitive Report &middot; {_e(user.get('name'))}" if user.get("name") else "Cognitive Report"
    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<title>Cognitive Report</title>
<style>
 body{{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,'Helvetica Neue',Arial}}
 .wrap{{max-width:960px;margin:40px auto;padding:0 16px}}
 h1{{margin:0 0 16px}}
 .overall{{font-size:1.1rem;margin:8px 0 16px}}
 .banner{{padding:12px 16px;border-radius:6px;margin:16px 0}}
 .banner.warning{{background:#ffe7d9;border:1px solid #f5a623;color:#7a2d00}}
 .cols{{display:flex;gap:32px}}
 .domain{{margin:12px 0}}
 table{{border-collapse:collapse;width:100%}}
 th,td{{text-align:left}}
</style>
</head>
<body>
<div class="wrap">
  <h1>{title}</h1>
  <div class="overall"><b>Overall:</b> {_e(overall)}/100</div>
  {fallback_html}
  <p>{_e(report.get('summaryAnalysis'))}</p>

  {table}

  {sw}

  {''.join(_domain_block(d) for d in doms)}

  {rel_html}

  {pat_html}

  {balance_html}

  {ref_html}

  {style_html}

  {recs_html}

  {plan_html}

  {narrative_html}

  <p><i>Generated {_e(report.get('createdAt') or report.get('created_at'))}</i></p>
</div>
</body>
</html>"""


def export_report_html(report: Dict[str, Any], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_report_html(report))
