"""Tests for the ``breeze`` command-line interface."""

import json

import pytest

from breeze import __version__
from breeze.cli import parse_define, run_cli
from breeze.environment import terminal


@pytest.fixture(autouse=True)
def no_colors(monkeypatch):
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


@pytest.fixture
def page(tmp_path):
    path = tmp_path / "page.txt"
    path.write_text(
        "Hello {{ name }}, you are {{ age }}.\n"
        "{% for f in fruits %}\n"
        "- {{ f }}\n"
        "{% endfor %}\n",
        encoding="utf-8",
    )
    return path


class TestParseDefine:
    def test_json_values(self):
        assert parse_define("age=30") == ("age", 30)
        assert parse_define("ok=true") == ("ok", True)
        assert parse_define("xs=[1, 2]") == ("xs", [1, 2])

    def test_plain_string_fallback(self):
        assert parse_define("name=John") == ("name", "John")

    def test_value_may_contain_equals(self):
        assert parse_define("expr=a=b") == ("expr", "a=b")

    @pytest.mark.parametrize("text", ["novalue", "=x", "  =x"])
    def test_malformed(self, text):
        with pytest.raises(ValueError, match="NAME=VALUE"):
            parse_define(text)


class TestRunCli:
    def test_context_file(self, page, tmp_path, capsys):
        ctx = tmp_path / "ctx.json"
        ctx.write_text(json.dumps({"name": "John", "age": 30, "fruits": ["apple", "pear"]}))
        assert run_cli([str(page), "--context", str(ctx)]) == 0
        assert capsys.readouterr().out == "Hello John, you are 30.\n- apple\n- pear\n"

    def test_defines_override_context_file(self, page, tmp_path, capsys):
        ctx = tmp_path / "ctx.json"
        ctx.write_text(json.dumps({"name": "John", "age": 30, "fruits": []}))
        assert run_cli([str(page), "-c", str(ctx), "-D", "name=Ada"]) == 0
        assert capsys.readouterr().out == "Hello Ada, you are 30.\n\n"

    def test_output_file(self, page, tmp_path, capsys):
        out = tmp_path / "out.txt"
        code = run_cli(
            [str(page), "-D", "name=Ada", "-D", "age=36", "-D", 'fruits=["fig"]', "-o", str(out)]
        )
        assert code == 0
        assert out.read_text(encoding="utf-8") == "Hello Ada, you are 36.\n- fig\n"
        assert capsys.readouterr().out == ""

    def test_render_error_exit_code(self, page, capsys):
        assert run_cli([str(page), "-D", "nme=Ada"]) == 1
        err = capsys.readouterr().err
        assert err.startswith("B-RUN-001: Missing template variable for 'name'")
        assert "page.txt:1" in err
        assert "Did you mean 'nme'?" in err

    def test_missing_template(self, tmp_path, capsys):
        assert run_cli([str(tmp_path / "nope.txt")]) == 2
        assert "B-TPL-001" in capsys.readouterr().err

    def test_context_must_be_object(self, page, tmp_path, capsys):
        ctx = tmp_path / "ctx.json"
        ctx.write_text("[1, 2]")
        assert run_cli([str(page), "-c", str(ctx)]) == 2
        assert "must hold a JSON object" in capsys.readouterr().err

    def test_missing_context_file(self, page, tmp_path, capsys):
        assert run_cli([str(page), "-c", str(tmp_path / "missing.json")]) == 2
        assert capsys.readouterr().err.startswith("ERROR:")

    def test_template_not_utf8(self, tmp_path, capsys):
        path = tmp_path / "latin.txt"
        path.write_bytes(b"Hello \xff\xfe {{ name }}")
        assert run_cli([str(path), "-D", "name=x"]) == 2
        err = capsys.readouterr().err
        assert err.startswith("ERROR:")
        assert "latin.txt" in err

    def test_unwritable_output(self, page, tmp_path, capsys):
        out = tmp_path / "missing-dir" / "out.txt"
        args = [str(page), "-D", "name=Ada", "-D", "age=1", "-D", "fruits=[]", "-o", str(out)]
        assert run_cli(args) == 2
        assert capsys.readouterr().err.startswith("ERROR:")
        assert not out.exists()

    def test_unsupported_value(self, page, capsys):
        assert run_cli([str(page), "-D", 'obj={"a": 1}']) == 2
        assert "cannot convert dict" in capsys.readouterr().err

    def test_output_limit(self, page, capsys):
        args = [str(page), "-D", "name=Ada", "-D", "age=1", "-D", "fruits=[]"]
        assert run_cli([*args, "--max-output-size", "5"]) == 1
        assert "B-MEM-001" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
