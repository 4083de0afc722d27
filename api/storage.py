"""JSON-file persistence for generated cognitive reports.

Each report lives in ``<DATA_DIR>/reports/<id>.json``; a single index file
maps report ids to their metadata (user, creation time, overall score) so a
user's history can be listed without opening every report. Concurrent writers
to the same id resolve as last write wins.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

log = logging.getLogger(__name__)

DATA_ROOT = Path(os.getenv("DATA_DIR", "data")).resolve()
REPORTS_DIR = DATA_ROOT / "reports"
REPORT_INDEX_PATH = DATA_ROOT / "reports_index.json"

_LOCK = threading.Lock()


def _ensure_dirs() -> None:
    REPORTS_DIR.mkdir(parents=True, exist_ok=True)


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        log.warning("unreadable store file %s; treating as empty", path)
        return default


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    tmp.replace(path)


def report_metadata(report: Dict[str, Any]) -> Dict[str, Any]:
    user = report.get("userData") or {}
    return {
        "userId": user.get("id"),
        "userName": user.get("name"),
        "createdAt": report.get("createdAt") or report.get("created_at"),
        "overallScore": report.get("overallScore"),
        "isFallback": bool(report.get("isFallback")),
    }


def save_report(report_id: str, report: Dict[str, Any], metadata: Optional[Dict[str, Any]] = None) -> None:
    """Persist the report JSON and its index entry."""

    _ensure_dirs()
    meta = metadata if metadata is not None else report_metadata(report)
    with _LOCK:
        index: Dict[str, Dict[str, Any]] = _read_json(REPORT_INDEX_PATH, {})
        index[report_id] = meta
        _write_json(REPORT_INDEX_PATH, index)
        _write_json(REPORTS_DIR / f"{report_id}.json", report)


def load_report(report_id: str) -> Optional[Dict[str, Any]]:
    return _read_json(REPORTS_DIR / f"{report_id}.json", None)


def delete_report(report_id: str) -> bool:
    removed = False
    with _LOCK:
        index: Dict[str, Dict[str, Any]] = _read_json(REPORT_INDEX_PATH, {})
        if report_id in index:
            index.pop(report_id, None)
            _write_json(REPORT_INDEX_PATH, index)
            removed = True
        report_path = REPORTS_DIR / f"{report_id}.json"
        if report_path.exists():
            report_path.unlink()
            removed = True
    return removed


def list_reports_for_user(user_id: str) -> List[Dict[str, Any]]:
    index: Dict[str, Dict[str, Any]] = _read_json(REPORT_INDEX_PATH, {})
    out: List[Dict[str, Any]] = []
    for rid, meta in index.items():
        if meta.get("userId") == user_id:
            item = {"id": rid}
            item.update({k: v for k, v in meta.items() if k != "id"})
            out.append(item)
    out.sort(key=lambda r: r.get("createdAt") or "", reverse=True)
    return out
