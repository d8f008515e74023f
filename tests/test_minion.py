import logging
import os

import pytest

from minion import main


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("LANGUAGE", "en_US")
    monkeypatch.chdir(tmp_path)


def test_empty_source_exits_non_zero(tmp_path, capsys):
    source = tmp_path / "src"
    source.mkdir()
    target = tmp_path / "out"

    assert main(["--source", str(source), "--target", str(target)]) == 1

    assert "No PDF files found" in capsys.readouterr().err
    assert not target.exists()


def test_non_empty_target_without_force_exits_non_zero(tmp_path, make_pdf, capsys):
    source = tmp_path / "src"
    target = tmp_path / "out"
    source.mkdir()
    target.mkdir()
    make_pdf(source / "a.pdf", 1)
    (target / "old.txt").write_text("old", encoding="utf-8")

    assert main(["-s", str(source), "-t", str(target)]) == 1

    assert "--force" in capsys.readouterr().err
    assert sorted(os.listdir(target)) == ["old.txt"]


def test_successful_run(tmp_path, make_pdf, capsys):
    source = tmp_path / "src"
    target = tmp_path / "out"
    source.mkdir()
    make_pdf(source / "a.pdf", 3)

    assert main(["-s", str(source), "-t", str(target), "--language", "de"]) == 0

    assert (target / "a.pdf").exists()
    assert "Copied:" in capsys.readouterr().out


def test_config_file_read_failure_exits_non_zero(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 2
    assert "Cannot read config file" in capsys.readouterr().err


def test_strict_language(capsys):
    assert main(["settings", "--language", "is-IS", "--strict-language"]) == 2
    assert "not supported" in capsys.readouterr().err


def test_settings_command_shows_merged_configuration(tmp_path, capsys):
    (tmp_path / "pdfminion.yaml").write_text("language: fr\nsource: docs\n", encoding="utf-8")

    assert main(["settings", "--chapter-prefix", "Ch."]) == 0

    out = capsys.readouterr().out
    assert "Language: fr" in out
    assert "Source directory: docs" in out
    assert "Chapter prefix: Ch." in out
    assert "Blank page text: Cette page est intentionnellement laissée vide" in out


def test_immediate_commands(capsys):
    assert main(["version"]) == 0
    assert "PDFminion version" in capsys.readouterr().out

    assert main(["credits"]) == 0
    assert "pypdf" in capsys.readouterr().out

    assert main(["list-languages"]) == 0
    out = capsys.readouterr().out
    assert "Code de (Deutsch, German)" in out
    assert "Current system language: en" in out


def test_immediate_commands_ignore_broken_config(tmp_path, capsys):
    (tmp_path / "pdfminion.yaml").write_text("language: [oops\n", encoding="utf-8")
    assert main(["version"]) == 0
    assert main(["settings"]) == 2


def test_verbose_in_config_file_enables_debug_logging(tmp_path):
    (tmp_path / "pdfminion.yaml").write_text("verbose: true\n", encoding="utf-8")
    root = logging.getLogger()
    level = root.level
    try:
        assert main(["settings"]) == 0
        assert root.getEffectiveLevel() == logging.DEBUG
    finally:
        root.setLevel(level)
