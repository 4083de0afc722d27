from __future__ import annotations

import asyncio
import time
import types

from cognitive_core import azure_cfg, config, llm_bridge
from cognitive_core.engine import generate_report, narrative_facts

from tests.conftest import SAMPLE_USER, SCENARIO_METRICS

AZURE = {
    "AZURE_OPENAI_ENDPOINT": "https://example.openai.azure.com",
    "AZURE_OPENAI_API_KEY": "k",
    "AZURE_OPENAI_API_VERSION": "2024-06-01",
    "AZURE_OPENAI_DEPLOYMENT": "gpt-4o-mini",
}


def _facts() -> dict:
    return narrative_facts(generate_report(SAMPLE_USER, SCENARIO_METRICS))


def test_prompt_carries_facts():
    prompt = llm_bridge.build_prompt(_facts())
    assert "- Name: Alex" in prompt
    assert "- Memory: 95/100 (Excellent)" in prompt
    assert "Learning style: Visual-Spatial" in prompt


def test_disabled_returns_none(monkeypatch):
    def never(*a, **k):
        raise AssertionError("backend should not be called")

    monkeypatch.setattr(llm_bridge, "_narrate_azure", never)
    assert llm_bridge.generate_narrative(_facts(), {"NARRATIVE_ENABLED": False}) is None


def test_backend_failure_returns_none(monkeypatch):
    def broken(facts, cfg):
        raise ConnectionError("azure down")

    monkeypatch.setattr(llm_bridge, "_narrate_azure", broken)
    assert llm_bridge.generate_narrative(_facts(), {"NARRATIVE_ENABLED": True, **AZURE}) is None


def test_backend_success(monkeypatch):
    monkeypatch.setattr(llm_bridge, "_narrate_azure", lambda facts, cfg: "  Hello.  ")
    assert llm_bridge.generate_narrative(_facts(), {"NARRATIVE_ENABLED": True}) == "  Hello.  "


def test_narrate_times_out(monkeypatch):
    def slow(facts, cfg=None):
        time.sleep(0.5)
        return "late"

    monkeypatch.setattr(llm_bridge, "generate_narrative", slow)
    assert asyncio.run(llm_bridge.narrate(_facts(), {}, timeout=0.05)) is None


def test_narrative_backend_selection():
    assert config.narrative_backend({"NARRATIVE_ENABLED": True}) == "azure"
    assert config.narrative_backend({"NARRATIVE_ENABLED": True, "LLM_BACKEND": "ollama"}) is None
    assert config.narrative_backend({"NARRATIVE_ENABLED": False}) is None


def test_load_config_merges_file_and_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.json").write_text('{"RECOMMENDATIONS_MAX": 4, "LLM_BACKEND": "azure"}', encoding="utf-8")
    monkeypatch.delenv("RECOMMENDATIONS_MAX", raising=False)
    monkeypatch.setenv("NARRATIVE_ENABLED", "yes")
    cfg = config.load_config()
    assert cfg["RECOMMENDATIONS_MAX"] == 4
    assert cfg["NARRATIVE_ENABLED"] is True

    monkeypatch.setenv("RECOMMENDATIONS_MAX", "2")
    assert config.load_config()["RECOMMENDATIONS_MAX"] == 2


def test_load_config_ignores_broken_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    for key in ("NARRATIVE_ENABLED", "LLM_BACKEND", "RECOMMENDATIONS_MAX", *AZURE):
        monkeypatch.delenv(key, raising=False)
    assert config.load_config() == {}


def test_azure_settings_from_cfg_and_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in AZURE:
        monkeypatch.delenv(key, raising=False)
    assert azure_cfg.is_configured({}) is False
    s = azure_cfg.settings(AZURE)
    assert s.deployment == "gpt-4o-mini"
    assert azure_cfg.is_configured(AZURE) is True


def test_azure_settings_from_json_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in AZURE:
        monkeypatch.delenv(key, raising=False)
    (tmp_path / ".azure_config.json").write_text(
        '{"endpoint": "https://e", "api_key": "k", "api_version": "v", "deployment": "d"}', encoding="utf-8"
    )
    assert azure_cfg.settings().endpoint == "https://e"


def test_azure_request_carries_timeout(monkeypatch):
    seen = {}

    class FakeCompletions:
        def create(self, **kwargs):
            seen.update(kwargs)
            msg = types.SimpleNamespace(content=" Narrative. ")
            return types.SimpleNamespace(choices=[types.SimpleNamespace(message=msg)])

    fake = types.SimpleNamespace(chat=types.SimpleNamespace(completions=FakeCompletions()))
    monkeypatch.setattr(llm_bridge, "azure_client", lambda s: fake)
    assert llm_bridge._narrate_azure(_facts(), AZURE) == "Narrative."
    assert seen["timeout"] == config.NARRATIVE_TIMEOUT_SEC
    assert seen["model"] == "gpt-4o-mini"
