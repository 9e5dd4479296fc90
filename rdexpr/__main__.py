"""CLI entry point for the rdexpr evaluator.

Usage:
    python -m rdexpr [-v|-vv|-vvv|-vvvv] <program_file>
    python -m rdexpr [-v...] -e EXPR [-e EXPR ...]
    python -m rdexpr [-v...] < program

Options:
  -v            Increase debug verbosity (can be repeated)
  -e, --expr    Evaluate EXPR; may be repeated
  --dump        Print the user variables after evaluation

All sources are evaluated on one parser, the program file first, so
variables assigned earlier are visible later. With neither a program file
nor -e the program is read from stdin. The value of each source is printed
on its own line.

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path
from .errors import ExprError
from .interpreter import Parser
from .types import to_string


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Recursive-descent expression evaluator")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('-e', '--expr', action='append', default=[], metavar='EXPR', help='evaluate EXPR (can be repeated)')
    parser.add_argument('--dump', action='store_true', help='print user variables after evaluation')
    parser.add_argument('program', nargs='?', help='program file of ;-separated expressions')
    args = parser.parse_args(argv)

    sources: list[str] = []
    if args.program:
        program_file = Path(args.program)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)
        with open(program_file, 'r', encoding='utf-8') as f:
            sources.append(f.read())
    sources.extend(args.expr)
    if not sources:
        sources.append(sys.stdin.read())

    evaluator = Parser(debug_level=args.v, debug_file='debug.txt' if args.v > 0 else None)
    try:
        for source in sources:
            print(to_string(evaluator.evaluate(source)))
        if args.dump:
            for name, value in evaluator.variables.snapshot().items():
                print(f"{name} = {to_string(value)}")
    except ExprError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Error: expression nested too deeply", file=sys.stderr)
        sys.exit(1)
    finally:
        evaluator.close()

if __name__ == '__main__':
    main()
