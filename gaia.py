import argparse
import json
import os
import sys

from compiler import CompileOptions, analyze_source, compile_source, set_verbose
from gaia_core.errors import GaiaCompileError

TARGETS = ["typescript", "javascript", "go"]


def log(message):
    """Log informational messages to stderr."""
    print(f"\033[92m\033[1mINFO:\033[0m {message}", file=sys.stderr)


def read_source(filepath):
    if filepath is None or filepath == "-":
        # Read from stdin
        return sys.stdin.read(), "<stdin>"
    if not os.path.exists(filepath):
        print(f"Error: File '{filepath}' not found.", file=sys.stderr)
        sys.exit(1)
    with open(filepath, 'r', encoding='utf-8') as f:
        return f.read(), filepath


def cmd_build(args):
    """Compile a GaiaScript file to the selected target."""
    set_verbose(args.verbose)
    source_code, name = read_source(args.filename)

    options = CompileOptions(target=args.target, debug=args.debug, strict=args.strict)
    result = compile_source(source_code, options)

    for message in result.diagnostics:
        log(message)
    if not result.success:
        print("Error: Compilation Failed:\n" + "\n".join(result.errors), file=sys.stderr)
        sys.exit(1)

    output = result.output
    if args.out:
        with open(args.out, 'w', encoding='utf-8') as f:
            f.write(output)
        log(f"Compiled {name} -> {args.out} ({args.target})")
    else:
        sys.stdout.write(output)


def cmd_outline(args):
    """Print the declarations of a GaiaScript file as JSON."""
    set_verbose(args.verbose)
    source_code, _ = read_source(args.filename)
    try:
        entries = analyze_source(source_code)
    except GaiaCompileError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps(entries, indent=2, ensure_ascii=False))


def main(argv=None):
    parser = argparse.ArgumentParser(description="GaiaScript CLI")
    subparsers = parser.add_subparsers(dest="command")

    build = subparsers.add_parser("build", help="Compile a GaiaScript file")
    build.add_argument("filename", nargs="?", default="-", help="Source file (default: read from stdin)")
    build.add_argument("--target", "-t", choices=TARGETS, default="typescript", help="Output language")
    build.add_argument("--out", "-o", help="Output file (default: stdout)")
    build.add_argument("--debug", action="store_true", help="Print phase diagnostics")
    build.add_argument("--strict", action="store_true", help="Treat degraded output as an error")
    build.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output (sent to stderr)")

    outline = subparsers.add_parser("outline", help="List the declarations in a file")
    outline.add_argument("filename", nargs="?", default="-", help="Source file (default: read from stdin)")
    outline.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output (sent to stderr)")

    args = parser.parse_args(argv)

    if args.command == "build": cmd_build(args)
    elif args.command == "outline": cmd_outline(args)
    else: parser.print_help()

if __name__ == "__main__":
    main()
