"""Tests for package module entrypoint."""

import runpy


def test_main_module_invokes_cli_main(monkeypatch):
    called = {"count": 0}

    def fake_main():
        called["count"] += 1
        return 0

    monkeypatch.setattr("pitchreplay.cli.main", fake_main)
    try:
        runpy.run_module("pitchreplay.__main__", run_name="__main__")
    except SystemExit as e:
        assert e.code == 0
    assert called["count"] == 1
