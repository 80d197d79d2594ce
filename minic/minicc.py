#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, TextIO

from lark.exceptions import UnexpectedInput

from . import ast, parser
from .diagnostics import CompileError, Diagnostic
from .emitter import emit_program, format_program
from .lower_to_vm import CompilationContext


def compile_ast(
    root: Optional[ast.Node],
    entry: str = "main",
    ctx: CompilationContext | None = None,
) -> str:
    """Lower and serialize a whole program. Nothing is returned on failure."""
    items = emit_program(root, entry=entry, ctx=ctx)
    return format_program(items)


def compile_source(source: str, entry: str = "main", ctx: CompilationContext | None = None) -> str:
    return compile_ast(parser.parse(source), entry=entry, ctx=ctx)


def _report(diag: Diagnostic, source_name: str, err: TextIO) -> None:
    print(diag.format(source_name), file=err)


def compile_file(
    source_path: Path,
    output_path: Path | None,
    entry: str,
    dump_ast: bool,
    err: TextIO | None = None,
) -> int:
    if err is None:
        err = sys.stderr
    source_name = str(source_path)
    source = source_path.read_text()
    ctx = CompilationContext()
    try:
        root = parser.parse(source)
        if dump_ast:
            print(ast.dump(root), file=err)
        text = compile_ast(root, entry=entry, ctx=ctx)
    except UnexpectedInput as e:
        loc = ast.Located(line=e.line, column=e.column)
        _report(Diagnostic(message="syntax error", code="P0001", loc=loc), source_name, err)
        print(e.get_context(source).rstrip("\n"), file=err)
        return 1
    except CompileError as e:
        _report(e.to_diagnostic(), source_name, err)
        return 1
    except MemoryError:
        _report(Diagnostic(message="out of memory"), source_name, err)
        return 1
    for warning in ctx.warnings:
        _report(warning, source_name, err)
    # Only touch the output once the whole program is available.
    if output_path is None:
        sys.stdout.write(text)
    else:
        output_path.write_text(text)
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="minicc: minic -> stack machine assembly compiler")
    ap.add_argument("source", type=Path, help="minic source file")
    ap.add_argument("-o", "--output", type=Path, help="Output assembly file (default: stdout)")
    ap.add_argument("--entry", default="main", help="Label called by the program prologue (default: main)")
    ap.add_argument("--dump-ast", action="store_true", help="Print the parsed AST to stderr before lowering")
    args = ap.parse_args(argv)

    return compile_file(args.source, args.output, args.entry, args.dump_ast)


if __name__ == "__main__":
    raise SystemExit(main())
