"""Tests for the command-line interface."""

from __future__ import annotations

import json

import pytest

from sanitext.__main__ import main


@pytest.fixture
def html_file(tmp_path):
    path = tmp_path / "in.html"
    path.write_text("<p>A \u2014 B e.g. x\u200by</p><p><br></p><p></p>", encoding="utf-8")
    return path


class TestSanitizeCommand:
    def test_sanitize_to_stdout(self, html_file, capsys):
        assert main(["sanitize", str(html_file)]) == 0
        assert capsys.readouterr().out == "<p>A; B for example xy</p><p></p>\n"

    def test_sanitize_to_file(self, html_file, tmp_path):
        out = tmp_path / "out.html"
        assert main(["sanitize", str(html_file), "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "<p>A; B for example xy</p><p></p>"

    def test_profile_and_flags(self, html_file, capsys):
        assert main(
            ["sanitize", str(html_file), "--profile", "strict", "--disable", "remove_zero_width"]
        ) == 0
        assert capsys.readouterr().out == "<p>A; B e.g. x\u200by</p><p></p>\n"

    def test_unknown_profile(self, html_file, capsys):
        assert main(["sanitize", str(html_file), "--profile", "nope"]) == 1
        assert "nope" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["sanitize", str(tmp_path / "missing.html")]) == 1

    def test_invalid_utf8_input(self, tmp_path, capsys):
        path = tmp_path / "bad.html"
        path.write_bytes(b"<p>\xff\xfe</p>")
        assert main(["sanitize", str(path)]) == 1
        assert "UTF-8" in capsys.readouterr().err

    def test_unknown_flag_is_usage_error(self, html_file):
        with pytest.raises(SystemExit) as exc:
            main(["sanitize", str(html_file), "--enable", "shout"])
        assert exc.value.code == 2


class TestHighlightCommand:
    def test_highlight_markup(self, html_file, capsys):
        assert main(["highlight", str(html_file)]) == 0
        out = capsys.readouterr().out
        assert 'class="highlight-invisible"' in out

    def test_report(self, html_file, capsys):
        assert main(["highlight", str(html_file), "--report"]) == 0
        findings = json.loads(capsys.readouterr().out)
        assert [f["codepoint"] for f in findings] == ["U+2014", "U+200B"]


class TestProfilesCommand:
    def test_lists_builtins(self, capsys):
        assert main(["profiles"]) == 0
        out = capsys.readouterr().out
        assert "default" in out
        assert "strict" in out
