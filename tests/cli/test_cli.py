"""CLI tests: `algow infer` and `algow primitives`."""

import json

import pytest

from algow.cli import main

ID_APPLIED = {
    "kind": "let", "name": "id",
    "binding": {"kind": "abs", "param": "x", "body": {"kind": "var", "name": "x"}},
    "body": {"kind": "app", "fn": {"kind": "var", "name": "id"},
             "arg": {"kind": "bool", "value": True}},
}

TWO_USES = {
    "kind": "let", "name": "id",
    "binding": {"kind": "abs", "param": "x", "body": {"kind": "var", "name": "x"}},
    "body": {
        "kind": "app",
        "fn": {"kind": "app", "fn": {"kind": "var", "name": "const"},
               "arg": {"kind": "app", "fn": {"kind": "var", "name": "id"},
                       "arg": {"kind": "int", "value": 1}}},
        "arg": {"kind": "app", "fn": {"kind": "var", "name": "id"},
                "arg": {"kind": "bool", "value": True}},
    },
}


def run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write(path, data):
    path.write_text(json.dumps(data))
    return str(path)


class TestInferCommand:

    def test_pretty_output(self, workdir, capsys):
        src = write(workdir / "e.json", {"kind": "abs", "param": "x",
                                         "body": {"kind": "var", "name": "x"}})
        assert run(["infer", src]) == 0
        assert capsys.readouterr().out.strip() == "forall a. a -> a"

    def test_json_output(self, workdir, capsys):
        src = write(workdir / "e.json", ID_APPLIED)
        assert run(["infer", src, "--format", "json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["type"] == {"kind": "bool"}
        assert out["pretty"] == "Bool"

    def test_error_is_json(self, workdir, capsys):
        src = write(workdir / "e.json", TWO_USES)
        assert run(["infer", src]) == 1
        out = json.loads(capsys.readouterr().out)
        assert out["kind"] == "unification_mismatch"

    def test_let_generalization_flag(self, workdir, capsys):
        src = write(workdir / "e.json", TWO_USES)
        assert run(["infer", src, "--let-generalization"]) == 0
        assert capsys.readouterr().out.strip() == "Int"

    def test_let_generalization_from_config(self, workdir, capsys):
        (workdir / ".algowrc.yml").write_text("let_generalization: true\n")
        src = write(workdir / "e.json", TWO_USES)
        assert run(["infer", src]) == 0
        assert capsys.readouterr().out.strip() == "Int"

    def test_no_prelude(self, workdir, capsys):
        src = write(workdir / "e.json", {"kind": "var", "name": "add"})
        assert run(["infer", src, "--no-prelude"]) == 1
        assert json.loads(capsys.readouterr().out)["kind"] == "unbound_variable"

    def test_extra_context(self, workdir, capsys):
        ctx = write(workdir / "ctx.json", {"not": {"vars": [], "type": {
            "kind": "fun", "arg": {"kind": "bool"}, "result": {"kind": "bool"}}}})
        src = write(workdir / "e.json", {"kind": "app", "fn": {"kind": "var", "name": "not"},
                                         "arg": {"kind": "bool", "value": False}})
        assert run(["infer", src, "--context", ctx]) == 0
        assert capsys.readouterr().out.strip() == "Bool"

    def test_context_type_variable_stays_free(self, workdir, capsys):
        ctx = write(workdir / "ctx.json", {"x": {"vars": [], "type": {"kind": "var", "name": "q"}}})
        src = write(workdir / "e.json", {"kind": "var", "name": "x"})
        assert run(["infer", src, "--context", ctx]) == 0
        assert capsys.readouterr().out.strip() == "q"

    def test_context_variable_same_in_both_document_shapes(self, workdir, capsys):
        ctx = write(workdir / "ctx.json", {"x": {"vars": [], "type": {
            "kind": "fun", "arg": {"kind": "var", "name": "q"}, "result": {"kind": "int"}}}})
        single = write(workdir / "e.json", {"kind": "var", "name": "x"})
        program = write(workdir / "p.json", {"definitions": [
            {"name": "y", "expr": {"kind": "var", "name": "x"}}]})
        assert run(["infer", single, "--context", ctx]) == 0
        assert run(["infer", program, "--context", ctx]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines == ["q -> Int", "y : q -> Int"]

    def test_definitions(self, workdir, capsys):
        src = write(workdir / "p.json", {"definitions": [
            {"name": "k", "expr": {"kind": "abs", "param": "x", "body": {
                "kind": "abs", "param": "y", "body": {"kind": "var", "name": "x"}}}},
            {"name": "one", "expr": {"kind": "app", "fn": {"kind": "app",
                "fn": {"kind": "var", "name": "k"}, "arg": {"kind": "int", "value": 1}},
                "arg": {"kind": "bool", "value": True}}},
        ]})
        assert run(["infer", src]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines == ["k : forall a b. a -> b -> a", "one : Int"]

    def test_decode_error(self, workdir, capsys):
        src = write(workdir / "e.json", {"kind": "int", "value": "1"})
        assert run(["infer", src]) == 1
        assert json.loads(capsys.readouterr().out)["kind"] == "decode_error"

    def test_input_not_utf8(self, workdir, capsys):
        src = workdir / "e.json"
        src.write_bytes(b'{"kind": "var", "name": "\xff"}')
        assert run(["infer", str(src)]) == 1
        assert json.loads(capsys.readouterr().out)["kind"] == "decode_error"

    def test_missing_file(self, workdir, capsys):
        assert run(["infer", str(workdir / "nope.json")]) == 2
        assert "File not found" in capsys.readouterr().out

    def test_missing_context_file(self, workdir, capsys):
        src = write(workdir / "e.json", {"kind": "int", "value": 1})
        assert run(["infer", src, "--context", str(workdir / "nope.json")]) == 2
        assert "Cannot read input" in capsys.readouterr().out

    def test_bad_config(self, workdir, capsys):
        (workdir / ".algowrc.yml").write_text("format: xml\n")
        src = write(workdir / "e.json", {"kind": "int", "value": 1})
        assert run(["infer", src]) == 2
        assert "Invalid configuration" in capsys.readouterr().out


class TestPrimitivesCommand:

    def test_lists_environment(self, workdir, capsys):
        assert run(["primitives"]) == 0
        out = capsys.readouterr().out
        assert "identity : forall a. a -> a" in out
        assert "add      : Int -> Int -> Int" in out
        assert "if       : forall a. Bool -> a -> a -> a" in out

    def test_json(self, workdir, capsys):
        assert run(["primitives", "--format", "json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert set(out) == {"identity", "const", "add", "gte", "if"}
        assert out["const"]["vars"] == ["a", "b"]

    def test_no_command(self, workdir):
        assert run([]) == 1
