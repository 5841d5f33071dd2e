"""Test the command-line entry point in dump mode."""

import json

from slide_presenter.cli import main


def test_dump_prints_deck_json(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("SLIDE_PRESENTER_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    source = tmp_path / "talk.md"
    source.write_text("# A\nx\n# B\ny\nz\n", encoding="utf-8")

    assert main([str(source), "--dump"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out == {
        "slides": [
            {"title": "# A", "body": ["x"]},
            {"title": "# B", "body": ["y", "z"]},
        ]
    }


def test_dump_uses_configured_marker(tmp_path, capsys):
    config = tmp_path / "config.yaml"
    config.write_text("heading_marker: '%%'\n", encoding="utf-8")
    source = tmp_path / "talk.txt"
    source.write_text("%% One\n# plain\n", encoding="utf-8")

    assert main([str(source), "--dump", "--config", str(config)]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["slides"] == [{"title": "%% One", "body": ["# plain"]}]


def test_missing_source_fails(tmp_path):
    assert main([str(tmp_path / "nope.md"), "--dump"]) == 1


def test_invalid_config_fails(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("heading_marker: ''\n", encoding="utf-8")
    source = tmp_path / "talk.md"
    source.write_text("# A\n", encoding="utf-8")

    assert main([str(source), "--dump", "--config", str(config)]) == 1
