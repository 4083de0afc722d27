from __future__ import annotations
from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
import logging, os, uuid, typing as t

from cognitive_core.azure_cfg import is_configured as azure_configured
from cognitive_core.config import load_config
from cognitive_core.engine import generate_report, narrative_facts, utcnow_iso
from cognitive_core.llm_bridge import backend_in_use, narrate
from cognitive_core.report_html import render_report_html
from .storage import (
    delete_report,
    list_reports_for_user,
    load_report,
    report_metadata,
    save_report,
)

log = logging.getLogger(__name__)

app = FastAPI(title="Cognitive Report API")


@app.get("/")
def root():
    return {"status": "ok", "service": "cognitive-report-api"}


ALLOWED_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)


# ---- Schemas ----
class UserIn(BaseModel):
    id: str | None = None
    name: str = ""
    age: int | None = None
    education: str | None = None
    difficulty: str | None = None
    learningStyle: str | None = None


class CreateReportReq(BaseModel):
    user: UserIn = Field(default_factory=UserIn)
    # game key -> raw record or null; shapes are checked by the pipeline
    metrics: dict[str, t.Any] | None = None
    narrate: bool = False


# ---- Helpers ----
def _decorate_report(base: dict[str, t.Any], report_id: str | None = None) -> dict[str, t.Any]:
    rid = report_id or str(uuid.uuid4())
    report = dict(base)
    report["id"] = rid
    report["reportId"] = rid
    report["created_at"] = report.get("createdAt") or utcnow_iso()
    return report


def _require_report(report_id: str) -> dict[str, t.Any]:
    report = load_report(report_id)
    if not report:
        raise HTTPException(404, "report not found")
    return report


# ---- Health ----
@app.get("/health")
def health():
    cfg = load_config()
    return {
        "narrative_backend": backend_in_use(cfg),
        "azure_config_present": azure_configured(cfg),
    }


# ---- Reports ----
# Handlers that await the narrative run file I/O in the threadpool.
@app.post("/reports")
async def create_report(req: CreateReportReq):
    cfg = await run_in_threadpool(load_config)
    built = await run_in_threadpool(generate_report, req.user.model_dump(), req.metrics or {}, cfg=cfg)
    report = _decorate_report(built.to_dict())
    if req.narrate:
        report["narrative"] = await narrate(narrative_facts(report), cfg)
    await run_in_threadpool(save_report, report["id"], report, report_metadata(report))
    log.info("stored report %s user=%s fallback=%s", report["id"], req.user.id, report["isFallback"])
    return report


@app.get("/reports/{report_id}")
def get_report(report_id: str):
    return _require_report(report_id)


@app.get("/reports/{report_id}/html")
def report_html_endpoint(report_id: str):
    return {"html": render_report_html(_require_report(report_id))}


@app.get("/reports/{report_id}/facts")
def report_facts(report_id: str):
    return narrative_facts(_require_report(report_id))


@app.post("/reports/{report_id}/narrative")
async def create_narrative(report_id: str):
    report = await run_in_threadpool(_require_report, report_id)
    cfg = await run_in_threadpool(load_config)
    text = await narrate(narrative_facts(report), cfg)
    if text is not None:
        report["narrative"] = text
        await run_in_threadpool(save_report, report_id, report, report_metadata(report))
    return {"reportId": report_id, "narrative": text}


@app.delete("/reports/{report_id}")
def delete_report_endpoint(report_id: str):
    ok = delete_report(report_id)
    if not ok:
        raise HTTPException(404, "report not found")
    return {"ok": True}


@app.get("/users/{user_id}/reports")
def list_reports(user_id: str):
    reports = list_reports_for_user(user_id)
    return {"reports": reports}
