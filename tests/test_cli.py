import json

import pytest

from encleaner import cli
from encleaner.spellcheck import SpellChecker, load_dict


@pytest.fixture(autouse=True)
def small_dictionary(monkeypatch, words):
    monkeypatch.setattr(cli, "default_checker", lambda paths=(): SpellChecker(words + load_dict(paths)))


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "mail.txt"
    path.write_text("hello   world", encoding="utf-8")
    return path


def test_text_report(sample, capsys):
    assert cli.main([str(sample)]) == 0
    out = capsys.readouterr().out
    assert "Total: 3 issue(s)" in out
    assert ":1:1: [WARN]" in out
    assert "suggest: 'H'" in out
    assert "rule: SPACE_MULTI" in out


def test_clean_file(tmp_path, capsys):
    path = tmp_path / "ok.txt"
    path.write_text("Hello world.", encoding="utf-8")
    assert cli.main([str(path), "--fail-on-issue"]) == 0
    assert "No issues found." in capsys.readouterr().out


def test_fail_on_issue(sample):
    assert cli.main([str(sample), "--fail-on-issue"]) == 1


def test_json_output(sample, capsys):
    cli.main([str(sample), "--json"])
    records = json.loads(capsys.readouterr().out)
    assert len(records) == 3
    first = records[0]
    assert (first["file"], first["line"], first["col"]) == (str(sample), 1, 1)
    assert first["suggested_text"] == "H"
    assert first["category"] == "capitalization"


def test_fix_rewrites_file(sample, capsys):
    cli.main([str(sample), "--fix"])
    assert sample.read_text(encoding="utf-8") == "Hello world."
    assert "Fixed 1 file(s)" in capsys.readouterr().out


def test_diff_without_fix_leaves_file(sample, capsys):
    cli.main([str(sample), "--diff"])
    assert sample.read_text(encoding="utf-8") == "hello   world"
    out = capsys.readouterr().out
    assert "{+" in out and "[-" in out


def test_json_keeps_diff_off_stdout(sample, capsys):
    cli.main([str(sample), "--json", "--diff"])
    captured = capsys.readouterr()
    json.loads(captured.out)
    assert "{+" in captured.err


@pytest.mark.parametrize("flags,count", [
    (["--category", "spacing"], 1),
    (["--category", "spacing", "--category", "punctuation"], 2),
    (["--min-severity", "WARN"], 1),
])
def test_filters(sample, capsys, flags, count):
    cli.main([str(sample), "--json", *flags])
    assert len(json.loads(capsys.readouterr().out)) == count


def test_config_file(sample, tmp_path, capsys):
    cfg = tmp_path / "pyproject.toml"
    cfg.write_text('[tool.encleaner]\nminSeverity = "WARN"\n', encoding="utf-8")
    cli.main([str(sample), "--config", str(cfg)])
    assert "Total: 1 issue(s)" in capsys.readouterr().out


def test_flag_overrides_config(sample, tmp_path, capsys):
    cfg = tmp_path / "pyproject.toml"
    cfg.write_text('[tool.encleaner]\nminSeverity = "WARN"\n', encoding="utf-8")
    cli.main([str(sample), "--config", str(cfg), "--min-severity", "INFO"])
    assert "Total: 3 issue(s)" in capsys.readouterr().out


def test_invalid_config(sample, tmp_path, capsys):
    cfg = tmp_path / "bad.toml"
    cfg.write_text("[tool.encleaner\n", encoding="utf-8")
    assert cli.main([str(sample), "--config", str(cfg)]) == 2
    assert "[error]" in capsys.readouterr().err


def test_personal_word_list(tmp_path, capsys):
    text = tmp_path / "note.txt"
    text.write_text("We like qzxv.", encoding="utf-8")
    assert cli.main([str(text), "--fail-on-issue"]) == 1
    words = tmp_path / "words.txt"
    words.write_text("# team jargon\nqzxv\n", encoding="utf-8")
    assert cli.main([str(text), "--fail-on-issue", "--dict", str(words)]) == 0


def test_missing_word_list(sample, tmp_path, capsys):
    assert cli.main([str(sample), "--dict", str(tmp_path / "nope.txt")]) == 2
    assert "word list" in capsys.readouterr().err


def test_directory_suffix_filter(tmp_path, capsys):
    (tmp_path / "a.txt").write_text("hello   world", encoding="utf-8")
    (tmp_path / "b.py").write_text("hello world", encoding="utf-8")
    cli.main([str(tmp_path)])
    assert "Total: 3 issue(s)" in capsys.readouterr().out
    cli.main([str(tmp_path), "--all-files"])
    assert "Total: 5 issue(s)" in capsys.readouterr().out


def test_parallel_jobs_match_serial(tmp_path, capsys):
    for n in range(4):
        (tmp_path / f"f{n}.txt").write_text("hello   world", encoding="utf-8")
    cli.main([str(tmp_path), "--json"])
    serial = json.loads(capsys.readouterr().out)
    cli.main([str(tmp_path), "--json", "--jobs", "3"])
    assert json.loads(capsys.readouterr().out) == serial


def test_offset_to_linecol():
    text = "ab\ncd\n"
    assert cli.offset_to_linecol(text, 0) == (1, 1)
    assert cli.offset_to_linecol(text, 4) == (2, 2)


def test_rejects_zero_diff_window(sample, capsys):
    assert cli.main([str(sample), "--diff", "--diff-window", "0"]) == 2
    assert "--diff-window" in capsys.readouterr().err


@pytest.mark.parametrize("body", ['categories = "spelling"', "diffWindow = [4]"])
def test_malformed_config_values_exit_2(sample, tmp_path, capsys, body):
    cfg = tmp_path / "pyproject.toml"
    cfg.write_text(f"[tool.encleaner]\n{body}\n", encoding="utf-8")
    assert cli.main([str(sample), "--config", str(cfg)]) == 2
    assert "[error]" in capsys.readouterr().err
