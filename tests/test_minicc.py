"""Driver tests: minicc reads a source file and writes the assembly listing."""

from __future__ import annotations

from minic.minicc import main


def _write(tmp_path, text: str):
    src = tmp_path / "prog.mc"
    src.write_text(text)
    return src


def test_compiles_to_output_file(tmp_path, capsys):
    src = _write(tmp_path, "fn main() {\n  let x = 40;\n  x = x + 2;\n  print x;\n}\n")
    out = tmp_path / "prog.asm"
    assert main([str(src), "-o", str(out)]) == 0
    lines = out.read_text().splitlines()
    assert lines[0] == "\tCALL main"
    assert lines[1] == "main:"
    assert lines[-2:] == ["\tRET", "\tHALT"]
    assert capsys.readouterr().err == ""


def test_writes_to_stdout_by_default(tmp_path, capsys):
    src = _write(tmp_path, "print 1;")
    assert main([str(src)]) == 0
    assert capsys.readouterr().out == "\tCALL main\n\tPUSH 1\n\tPRINTI\n\tHALT\n"


def test_entry_option(tmp_path, capsys):
    src = _write(tmp_path, "fn start() { }")
    assert main([str(src), "--entry", "start"]) == 0
    assert capsys.readouterr().out == "\tCALL start\nstart:\n\tRET\n\tHALT\n"


def test_undeclared_identifier_writes_nothing(tmp_path, capsys):
    src = _write(tmp_path, "fn main() {\n  print 1;\n  y = 2;\n}\n")
    out = tmp_path / "prog.asm"
    assert main([str(src), "-o", str(out)]) == 1
    err = capsys.readouterr().err
    assert "identifier: 'y' has not been declared" in err
    assert "prog.mc:3:3: error" in err
    assert not out.exists()


def test_syntax_error_reported(tmp_path, capsys):
    src = _write(tmp_path, "fn main() { let = 1; }")
    out = tmp_path / "prog.asm"
    assert main([str(src), "-o", str(out)]) == 1
    assert "syntax error" in capsys.readouterr().err
    assert not out.exists()


def test_call_sites_warn(tmp_path, capsys):
    src = _write(tmp_path, "fn main() { helper(); }\nfn helper() { print 1; }")
    assert main([str(src)]) == 0
    captured = capsys.readouterr()
    assert "warning" in captured.err
    assert "'helper'" in captured.err
    assert "\tCALL main\nmain:\n\tRET\nhelper:\n" in captured.out


def test_dump_ast(tmp_path, capsys):
    src = _write(tmp_path, "fn main() { print 'a' }")
    assert main([str(src), "--dump-ast"]) == 0
    err = capsys.readouterr().err
    assert "FunctionDef main" in err
    assert "PrintC" in err
