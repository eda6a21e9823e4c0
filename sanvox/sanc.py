# sanvox/sanc.py
"""sanc – sanvox CLI

Usage)
    $ python -m sanvox translate "bishop to d7 check" "castle kingside"
    $ python -m sanvox translate --input transcripts.txt --aliases aliases.json -D
    $ python -m sanvox check --grammar moves.peg -D

Commands
--------
- translate : convert transcripts to SAN, one per line
- check     : compile the grammar (and alias file) and print a summary

Debug mode (-D/--debug) prints the grammar/alias summary and the parser's
error detail for transcripts that were not understood.
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from .errors import MoveError

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)

# ------------------------------
# translator loading
# ------------------------------

def _load_translator(args):
    from .loader import load_aliases, load_grammar_text
    from .translator import MoveTranslator
    from .grammar import MOVE_GRAMMAR

    src = load_grammar_text(args.grammar) if args.grammar else MOVE_GRAMMAR
    if args.debug: _eprint(f"[DEBUG] grammar ready | source={args.grammar or '<builtin>'}")

    aliases = load_aliases(args.aliases) if args.aliases else None
    if args.debug and aliases is not None:
        _eprint(f"[DEBUG] aliases loaded | file={args.aliases} keys={len(aliases)}")

    tr = MoveTranslator(aliases=aliases, grammar_src=src)
    if args.debug: _eprint("[DEBUG] program compiled | rules=%d start=%s aliases=%d" %
                           (len(tr.program.grammar.rules), tr.program.grammar.start, len(tr.aliases)))
    return tr

def _load_or_report(args):
    try:
        return _load_translator(args)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
    except (OSError, ValueError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
    return None

# ------------------------------
# debug output helpers
# ------------------------------

def _print_rules(tr) -> None:
    _eprint("\n[Rules]")
    for name, rule in tr.program.grammar.rules.items():
        _eprint(f"  {name} <- {type(rule.expr).__name__}")

def _print_aliases(tr) -> None:
    _eprint("\n[Aliases]")
    table = tr.aliases.as_dict()
    if not table:
        _eprint("  (none)")
    for key, forms in table.items():
        _eprint(f"  {key:<12} : {', '.join(forms)}")

# ------------------------------
# command implementations
# ------------------------------

def cmd_translate(args) -> int:
    tr = _load_or_report(args)
    if tr is None:
        return 2

    if args.input is not None:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                texts = [line.rstrip("\n") for line in f if line.strip()]
        except OSError as e:
            _eprint("[ERROR]", type(e).__name__, str(e))
            return 2
    else:
        texts = args.text

    failed = 0
    for text in texts:
        try:
            print(tr.parse(text))
        except MoveError as e:
            failed += 1
            _eprint(f"Invalid move: {text}")
            if args.debug:
                _eprint(f"[DEBUG] {type(e).__name__}: {e}")
    return 1 if failed else 0


def cmd_check(args) -> int:
    tr = _load_or_report(args)
    if tr is None:
        return 2

    if args.debug:
        _print_rules(tr)
        _print_aliases(tr)

    g = tr.program.grammar
    print(f"[CHECK OK] rules={len(g.rules)} start={g.start} aliases={len(tr.aliases)}")
    return 0

# ------------------------------
# entrypoint
# ------------------------------

def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--grammar", help="PEG grammar file (default: built-in move grammar)")
    p.add_argument("--aliases", help="JSON alias file (default: built-in aliases)")
    p.add_argument("-D", "--debug", action="store_true", help="print debug details to stderr")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="sanc", description="spoken chess moves to SAN")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_tr = sub.add_parser("translate", help="convert transcripts to SAN")
    p_tr.add_argument("text", nargs="*", help="transcripts")
    p_tr.add_argument("--input", help="file with one transcript per line")
    _add_common(p_tr)
    p_tr.set_defaults(func=cmd_translate)

    p_check = sub.add_parser("check", help="compile the grammar and aliases and print a summary")
    _add_common(p_check)
    p_check.set_defaults(func=cmd_check)

    args = ap.parse_args(argv)
    if args.cmd == "translate" and bool(args.text) == (args.input is not None):
        p_tr.error("expected transcripts or --input (exactly one of them)")
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
