"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from srccombine import cli
from srccombine.cli import _build_parser, _parse_flag, main


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("True", True), (" TRUE ", True), ("false", False), ("yes", False), ("1", False), (None, False)],
)
def test_parse_flag_is_lenient(value, expected) -> None:
    assert _parse_flag(value) is expected


def test_parser_accepts_positional_flags() -> None:
    args = _build_parser().parse_args(["Game.sln", "out.cs", "false", "true", "--verbose"])
    assert args.project_list == "Game.sln"
    assert args.output == "out.cs"
    assert args.open_when_done == "false"
    assert args.minify == "true"
    assert args.verbose is True


@pytest.mark.parametrize("token", ["help", "-help", "/?", "?", "-h", "--help"])
def test_help_tokens_print_usage(token: str, capsys, monkeypatch) -> None:
    def _fail(*args, **kwargs):
        raise AssertionError("Orchestrator should not run when help is requested")

    monkeypatch.setattr(cli.Orchestrator, "run", _fail)

    main([token])

    assert "usage: srccombine" in capsys.readouterr().out


def test_missing_output_prints_usage(capsys) -> None:
    main(["Game.sln"])
    assert "usage: srccombine" in capsys.readouterr().out


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "srccombine 1.0.0" in capsys.readouterr().out


def test_main_combines_and_minifies(project_builder, tmp_path: Path, capsys) -> None:
    project_builder.write({"A.cs": "using System;\n// note\nclass A {}\n"})
    list_path = project_builder.write_list("sources.txt", ["A.cs"])
    output = tmp_path / "Combined.cs"

    main([str(list_path), str(output), "false", "True"])

    assert output.read_text(encoding="utf-8") == "using System;class A {}"
    assert "Combined 1 files into" in capsys.readouterr().out


def test_main_opens_output_when_requested(project_builder, tmp_path: Path, monkeypatch) -> None:
    project_builder.write({"A.cs": "class A {}\n"})
    list_path = project_builder.write_list("sources.txt", ["A.cs"])
    output = tmp_path / "Combined.cs"
    opened = []
    monkeypatch.setattr(cli, "_open_file", opened.append)

    main([str(list_path), str(output), "true"])

    assert opened == [output]


def test_main_open_failure_is_not_fatal(project_builder, tmp_path: Path, monkeypatch) -> None:
    project_builder.write({"A.cs": "class A {}\n"})
    list_path = project_builder.write_list("sources.txt", ["A.cs"])
    output = tmp_path / "Combined.cs"

    def _broken(path):
        raise FileNotFoundError("xdg-open")

    monkeypatch.setattr(cli, "_open_file", _broken)

    main([str(list_path), str(output), "true"])

    assert output.exists()


def test_main_exits_nonzero_on_unreadable_source(project_builder, tmp_path: Path, capsys) -> None:
    list_path = project_builder.write_list("sources.txt", ["Missing.cs"])
    output = tmp_path / "Combined.cs"

    with pytest.raises(SystemExit) as excinfo:
        main([str(list_path), str(output)])

    assert excinfo.value.code == 1
    assert "srccombine failed" in capsys.readouterr().err
    assert not output.exists()


def test_log_file_receives_debug_records(project_builder, tmp_path: Path) -> None:
    project_builder.write({"A.cs": "using System;\nclass A {}\n"})
    list_path = project_builder.write_list("sources.txt", ["A.cs"])
    log_file = tmp_path / "run.log"

    main([str(list_path), str(tmp_path / "Combined.cs"), "--quiet", "--log-file", str(log_file)])

    log_text = log_file.read_text(encoding="utf-8")
    assert "A.cs: 1 using directives, 1 body lines" in log_text
    assert "Discovered 1 source files" in log_text


def test_main_exits_nonzero_on_unknown_encoding(project_builder, tmp_path: Path, capsys) -> None:
    project_builder.write({"A.cs": "class A {}\n", ".srccombine.yml": "encoding: utf-9\n"})
    list_path = project_builder.write_list("sources.txt", ["A.cs"])

    with pytest.raises(SystemExit) as excinfo:
        main([str(list_path), str(tmp_path / "Combined.cs")])

    assert excinfo.value.code == 1
    assert "unknown encoding" in capsys.readouterr().err


def test_main_uses_explicit_config_file(project_builder, tmp_path: Path) -> None:
    project_builder.write({"A.cs": "// note\nclass A {}\n"})
    list_path = project_builder.write_list("sources.txt", ["A.cs"])
    settings = tmp_path / "settings.txt"
    settings.write_text("minify: true\n", encoding="utf-8")
    output = tmp_path / "Combined.cs"

    main([str(list_path), str(output), "--config", str(settings)])

    assert output.read_text(encoding="utf-8") == "class A {}"
