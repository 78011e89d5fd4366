import io
import os
import sys

import pytest

from iacguard.helpers import (
    Printer,
    ProgressBar,
    file_analyzer,
    get_default_query_path,
    get_executable_directory,
    list_report_formats,
    validate_report_formats,
    word_wrap,
)


@pytest.mark.parametrize(
    "label, space, want",
    [
        ("ProgressTest", 5, "ProgressTest[===== 100.0% =====]"),
        ("", 5, "[===== 100.0% =====]"),
        ("", 10, "[========== 100.0% ==========]"),
    ],
)
def test_progress_bar_final_state(label, space, want):
    out = io.StringIO()
    bar = ProgressBar(label, space, 100.0, writer=out)
    bar.start([1.0] * 101)
    assert out.getvalue().split("\r")[-1] == want


def test_progress_bar_intermediate_frames():
    out = io.StringIO()
    bar = ProgressBar("ProgressTest", 5, 100.0, writer=out)
    bar.start([1.0] * 100)
    frames = out.getvalue().split("\r")
    assert frames[1] == "ProgressTest[" + " " * 7 + "1.0%" + " " * 6 + "]"
    assert frames[50] == "ProgressTest[===== 50.0%      ]"


def test_progress_bar_stops_when_input_ends():
    out = io.StringIO()
    bar = ProgressBar("", 5, 100.0, writer=out)
    bar.start([10.0])
    assert out.getvalue().split("\r")[-1] == "[===== 100.0% =====]"


def test_progress_bar_discarded_does_not_consume():
    progress = iter([1.0, 2.0])
    bar = ProgressBar("", 10, 100.0, writer=None)
    bar.start(progress)
    assert next(progress) == 1.0


@pytest.mark.parametrize(
    "content, sev",
    [
        ("test_high_content", "HIGH"),
        ("test_medium_content", "MEDIUM"),
        ("test_low_content", "LOW"),
        ("test_info_content", "INFO"),
        ("test_no_sev_content", "no_sev"),
    ],
)
def test_printer_without_color(content, sev):
    printer = Printer(minimal=False, color=False)
    assert printer.print_by_sev(content, sev) == content


def test_printer_with_color_uses_severity_colour():
    printer = Printer(color=True)
    got = printer.print_by_sev("x", "high")
    assert got == "\x1b[38;2;187;33;36mx\x1b[0m"
    assert printer.print_by_sev("x", "unknown") == "x"


@pytest.mark.parametrize(
    "text, indentation, limit, want",
    [
        ("testing", "-", 1, "-testing\r\n"),
        ("", "-", 1, ""),
        ("testing string word wrap", "-", 2, "-testing string\r\n-word wrap\r\n"),
        ("a b c", "\t", 5, "\ta b c\r\n"),
    ],
)
def test_word_wrap(text, indentation, limit, want):
    assert word_wrap(text, indentation, limit) == want


def test_word_wrap_rejects_zero_limit():
    with pytest.raises(ValueError):
        word_wrap("some words", "-", 0)


@pytest.mark.parametrize(
    "name, content, want",
    [
        ("kics.json", '{"path": "x", "verbose": true}', "json"),
        ("kics.config_json", '{"path": "x"}', "json"),
        ("kics.yaml", "path: x\nverbose: true\n", "yaml"),
        ("kics_wrong.js", "path: x\nlog-level: INFO\n", "yaml"),
        ("kics.toml", 'path = "x"\n[section]\nkey = 1\n', "toml"),
        ("kics.config_hcl", 'path = "x"\nqueries {\n  dir = "q"\n  list = [1, 2]\n}\n', "hcl"),
    ],
)
def test_file_analyzer(tmp_path, name, content, want):
    target = tmp_path / name
    target.write_text(content)
    assert file_analyzer(str(target)) == want


def test_file_analyzer_invalid(tmp_path):
    target = tmp_path / "kics.config_js"
    target.write_text("function() { return 1; }\n")
    with pytest.raises(ValueError, match="invalid configuration file format"):
        file_analyzer(str(target))


def test_file_analyzer_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        file_analyzer(str(tmp_path / "absent.json"))


def test_get_executable_directory(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "bin" / "tool")])
    assert get_executable_directory() == str(tmp_path / "bin")


def test_default_query_path_next_to_executable(tmp_path, monkeypatch):
    (tmp_path / "bin" / "queries_dir").mkdir(parents=True)
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "bin" / "tool")])
    assert get_default_query_path("queries_dir") == str(tmp_path / "bin" / "queries_dir")


def test_default_query_path_in_working_directory(tmp_path, monkeypatch):
    (tmp_path / "work" / "assets" / "queries").mkdir(parents=True)
    (tmp_path / "bin").mkdir()
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "bin" / "tool")])
    monkeypatch.chdir(tmp_path / "work")
    got = get_default_query_path(os.path.join("assets", "queries"))
    assert got == os.path.join(os.getcwd(), "assets", "queries")


def test_default_query_path_missing(tmp_path, monkeypatch):
    (tmp_path / "bin").mkdir()
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "bin" / "tool")])
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        get_default_query_path("error")


def test_list_report_formats():
    formats = list_report_formats()
    assert sorted(formats) == sorted(["json", "sarif", "html", "glsast", "pdf"])
    validate_report_formats(formats)
    assert len(set(formats)) == len(formats)


def test_validate_report_formats_unknown():
    with pytest.raises(ValueError, match="Report format not supported: unknown"):
        validate_report_formats(["json", "html", "sarif", "unknown"])