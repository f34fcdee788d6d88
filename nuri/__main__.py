"""CLI entry point for the Nuri interpreter.

Usage:
    python -m nuri [-v|-vv|-vvv] <program_file>
    python -m nuri [-v...] --emit-ast <program_file>
    python -m nuri [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Write debug output to this file instead of stderr
  --emit-ast    Parse the given .nuri file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

On success the display string of the program's final value is printed.
Errors are reported with their source position and exit status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import NuriError
from .interpreter import parse_program, Interpreter


def describe_error(err: NuriError, source: Optional[str] = None) -> str:
    """Format an error with the offending source line and a caret marker."""
    rng = err.range
    lines = [f"{err.kind} at line {rng.begin.row + 1}, column {rng.begin.col + 1}: {err.message}"]
    if source is not None:
        source_lines = source.split('\n')
        if rng.begin.row < len(source_lines):
            text = source_lines[rng.begin.row]
            if rng.end.row == rng.begin.row:
                width = max(rng.end.col - rng.begin.col + 1, 1)
            else:
                width = max(len(text) - rng.begin.col, 1)
            lines.append('  ' + text)
            lines.append('  ' + ' ' * rng.begin.col + '^' * width)
    return '\n'.join(lines)


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='nuri', description="Nuri language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', metavar='FILE', help='write debug output to FILE instead of stderr')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='NURI_FILE', help='emit AST JSON for the given .nuri file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Nuri program file (.nuri) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = parse_program(source)
        except NuriError as e:
            print(describe_error(e, source), file=sys.stderr)
            sys.exit(1)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_program = ast_from_obj(json.loads(read_source(Path(args.ast))))
        source = None
    else:
        if not args.program:
            parser.error('missing program file; or use --emit-ast/--ast')
        source = read_source(Path(args.program))
        try:
            ast_program = parse_program(source)
        except NuriError as e:
            print(describe_error(e, source), file=sys.stderr)
            sys.exit(1)

    with Interpreter(debug_level=args.v, debug_file=args.debug_file) as interpreter:
        try:
            value = interpreter.run(ast_program)
        except NuriError as e:
            print(describe_error(e, source), file=sys.stderr)
            sys.exit(1)
    print(value.representation)


if __name__ == '__main__':
    main()
