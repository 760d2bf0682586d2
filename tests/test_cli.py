from __future__ import annotations

from pathlib import Path

import pytest

from codetree.builder import Builder
from codetree.cli import main, parse_entity_types, validate_languages
from codetree.formatter import format_tree
from codetree.model import EntityType

PY_SOURCE = (
    "def hello(name):\n"
    '    """Say hi."""\n'
    "    return name\n"
    "\n"
    "class Greeter:\n"
    "    def greet(self):\n"
    "        pass\n"
)

GO_SOURCE = "package main\n\nfunc Run() error {\n\treturn nil\n}\n"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "proj"
    root.mkdir()
    (root / "a.py").write_text(PY_SOURCE, encoding="utf-8")
    (root / "main.go").write_text(GO_SOURCE, encoding="utf-8")
    sub = root / "pkg"
    sub.mkdir()
    (sub / "inner.py").write_text("def inner():\n    pass\n", encoding="utf-8")
    return root


def test_parse_entity_types_aliases():
    assert parse_entity_types(["func", "function"]) == {EntityType.FUNCTION}
    assert parse_entity_types(["const", "constant", "var", "variable"]) == {
        EntityType.CONSTANT,
        EntityType.VARIABLE,
    }
    assert parse_entity_types(["struct", "type"]) == {EntityType.STRUCT}


def test_parse_entity_types_case_and_unknown():
    assert parse_entity_types(["CLASS", "Method", "bogus"]) == {
        EntityType.CLASS,
        EntityType.METHOD,
    }
    assert parse_entity_types([]) == set()


def test_validate_languages_warns_on_unknown(capsys):
    assert validate_languages(["python", "cobol"]) == ["cobol"]
    err = capsys.readouterr().err
    assert "Warning: language 'cobol' is not supported" in err
    assert "python" in err


def test_validate_languages_all_supported(capsys):
    assert validate_languages(["go", "typescript"]) == []
    assert capsys.readouterr().err == ""


def test_main_writes_output_file(project: Path, tmp_path: Path):
    out_file = tmp_path / "out.txt"
    assert main([str(project), "-o", str(out_file)]) == 0
    expected = format_tree(Builder().build(project))
    assert out_file.read_text(encoding="utf-8") == expected
    assert expected.startswith("proj/\n")


def test_main_writes_stdout(project: Path, capsys):
    assert main([str(project)]) == 0
    out = capsys.readouterr().out
    assert out == format_tree(Builder().build(project))
    assert "def hello(name)" in out
    assert "Say hi." in out


def test_no_signatures_shows_type_and_name(project: Path, capsys):
    assert main([str(project), "--no-signatures"]) == 0
    out = capsys.readouterr().out
    assert "func hello" in out
    assert "def hello(name)" not in out


def test_no_docstrings(project: Path, capsys):
    assert main([str(project), "--no-docstrings"]) == 0
    out = capsys.readouterr().out
    assert "Say hi." not in out
    assert "def hello(name)" in out


def test_type_filter(project: Path, capsys):
    assert main([str(project), "-t", "class"]) == 0
    out = capsys.readouterr().out
    assert "class Greeter" in out
    assert "def hello(name)" not in out
    assert "func Run()" not in out


def test_type_filter_comma_separated(project: Path, capsys):
    assert main([str(project), "--type", "func,class"]) == 0
    out = capsys.readouterr().out
    expected = format_tree(
        Builder(entity_types={EntityType.FUNCTION, EntityType.CLASS}).build(project)
    )
    assert out == expected


def test_lang_filter(project: Path, capsys):
    assert main([str(project), "--lang", "python"]) == 0
    out = capsys.readouterr().out
    assert "a.py" in out
    assert "main.go" not in out


def test_depth_zero_skips_subdirectory_contents(project: Path, capsys):
    assert main([str(project), "-d", "0"]) == 0
    out = capsys.readouterr().out
    assert "pkg/" in out
    assert "inner.py" not in out


def test_exclude_dirs(project: Path, capsys):
    assert main([str(project), "--exclude-dirs", "PKG", "--exclude-dirs-ignore-case"]) == 0
    out = capsys.readouterr().out
    assert "pkg/" not in out
    assert "a.py" in out


def test_max_signature_truncates(project: Path, capsys):
    assert main([str(project), "--max-signature", "5"]) == 0
    out = capsys.readouterr().out
    assert out == format_tree(Builder().build(project), max_signature_len=5)
    assert "def h..." in out


def test_missing_directory_fails(tmp_path: Path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    assert "failed to build tree" in capsys.readouterr().err


def test_too_many_arguments_fails(project: Path):
    assert main([str(project), str(project)]) == 1


def test_unwritable_output_fails(project: Path, tmp_path: Path, capsys):
    target = tmp_path / "nodir" / "out.txt"
    assert main([str(project), "-o", str(target)]) == 1
    assert "failed to create output file" in capsys.readouterr().err