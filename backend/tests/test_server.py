# tests/test_server.py
from pitchcraft import server


def test_run_starts_uvicorn_with_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(server.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
    monkeypatch.setattr(server.settings, "PORT", 9001)

    server.run()

    (args, kwargs), = calls
    assert args == ("pitchcraft.main:app",)
    assert kwargs["port"] == 9001
    assert kwargs["host"] == server.settings.HOST
    assert kwargs["reload"] is False
