import runpy

import uvicorn


def test_running_main_starts_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    runpy.run_module("main", run_name="__main__")

    assert calls == [(("main:app",), {"host": "0.0.0.0", "port": 9001, "log_level": "info"})]
