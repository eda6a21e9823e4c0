# sanvox/peg/parser.py
from __future__ import annotations
import regex as re
import ast as _pyast
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from .ast import (
    Literal, CharClass, Ref, Repeat, Labeled, Seq, Choice, Action,
    RuleDef, PegGrammar, Node
)

# Grammar (PEG subset) we parse:
#   grammar  := (rule)*
#   rule     := IDENT "<-" expr
#   expr     := alt ("/" alt)*
#   alt      := (item)* ("{" IDENT "}")?
#   item     := (IDENT ":")? primary ("?"|"*"|"+")?
#   primary  := IDENT | literal | class | "(" expr ")"
#
#   literal  := ' ... ' | " ... "  followed by an optional `i` (case-insensitive)
#   class    := "[" (range | escaped | raw_char)+ "]"  followed by an optional `i`
#   comments/space allowed:
#       - whitespace
#       - "#" ... endline
#       - "//" ... endline
#       - "/*" ... "*/"

_TOKEN_SPEC = [
    ("WS",       r"[ \t\f\r]+"),
    ("NEWLINE",  r"\n"),
    ("COMMENT",  r"(?://|\#)[^\n]*"),
    ("MCOMMENT", r"/\*.*?\*/"),
    ("ARROW",    r"<-"),
    ("SLASH",    r"/"),
    ("COLON",    r":"),
    ("LPAREN",   r"\("),
    ("RPAREN",   r"\)"),
    ("LBRACE",   r"\{"),
    ("RBRACE",   r"\}"),
    ("QMARK",    r"\?"),
    ("STAR",     r"\*"),
    ("PLUS",     r"\+"),
    ("STRING",   r'"(?:\\.|[^"\\])*"i?'),
    ("SSTRING",  r"'(?:\\.|[^'\\])*'i?"),
    ("CLASS",    r"\[(?:\\.|[^\]\\])+\]i?"),
    ("IDENT",    r"[\p{L}_][\p{L}\p{N}_]*"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC), re.S)

_SKIP = ("WS", "NEWLINE", "COMMENT", "MCOMMENT")

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "]": "]", "[": "[", "-": "-", "^": "^"}

@dataclass
class Tok:
    kind: str
    lexeme: str
    start: int
    end: int
    line: int
    col: int

def _scan(src: str) -> List[Tok]:
    toks: List[Tok] = []
    line = col = 1
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            raise SyntaxError(f"PEG: unexpected char {src[i]!r} at {line}:{col}\n"
                              + _snippet_caret_at_pos(src, i))
        kind = m.lastgroup or ""
        lex = m.group(0)
        if kind not in _SKIP:
            toks.append(Tok(kind, lex, i, m.end(), line, col))
        nl_count = lex.count("\n")
        if nl_count:
            line += nl_count
            col = len(lex) - lex.rfind("\n")
        else:
            col += len(lex)
        i = m.end()
    toks.append(Tok("EOF", "", len(src), len(src), line, col))
    return toks

# ---------- error handling utils ----------
def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    start = src.rfind("\n", 0, pos)
    start = 0 if start == -1 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end == -1 else end
    return start, end

def _snippet_caret_at_pos(src: str, pos: int) -> str:
    start, end = _line_bounds(src, pos)
    caret = " " * (pos - start) + "^"
    return f"{src[start:end]}\n{caret}"

# ---------- literal helpers ----------
def _case_flag(lexeme: str) -> Tuple[str, bool]:
    if lexeme.endswith("i"):
        return lexeme[:-1], True
    return lexeme, False

def _unquote(lexeme: str) -> str:
    return _pyast.literal_eval(lexeme)

def _class_items(body: str) -> Tuple[Tuple[Tuple[int, int], ...], Tuple[str, ...]]:
    chars: List[str] = []
    escaped: List[bool] = []
    j = 0
    while j < len(body):
        c = body[j]
        if c == "\\" and j + 1 < len(body):
            chars.append(_ESCAPES.get(body[j + 1], body[j + 1]))
            escaped.append(True)
            j += 2
            continue
        chars.append(c)
        escaped.append(False)
        j += 1

    ranges: List[Tuple[int, int]] = []
    singles: List[str] = []
    k = 0
    while k < len(chars):
        if k + 2 < len(chars) and chars[k + 1] == "-" and not escaped[k + 1]:
            a, b = chars[k], chars[k + 2]
            if ord(a) > ord(b):
                a, b = b, a
            ranges.append((ord(a), ord(b)))
            k += 3
        else:
            singles.append(chars[k])
            k += 1
    return tuple(ranges), tuple(singles)

# --- token stream ---
class _TS:
    def __init__(self, toks: List[Tok], src: str):
        self.toks = toks
        self.i = 0
        self.src = src

    def la(self, k: int = 0) -> Tok:
        j = min(self.i + k, len(self.toks) - 1)
        return self.toks[j]

    def err(self, tok: Tok, msg: str) -> SyntaxError:
        return SyntaxError(f"PEG parse error at {tok.line}:{tok.col}: {msg}\n"
                           + _snippet_caret_at_pos(self.src, tok.start))

    def eat(self, kind: str) -> Tok:
        t = self.la()
        if t.kind != kind:
            raise self.err(t, f"expected {kind}, got {t.kind}")
        self.i += 1
        return t

    def match(self, kind: str) -> Optional[Tok]:
        if self.la().kind == kind:
            return self.eat(kind)
        return None

    def at_rule_head(self) -> bool:
        return self.la().kind == "IDENT" and self.la(1).kind == "ARROW"

    # --- recursive descent for expressions ---

    def parse_grammar(self) -> PegGrammar:
        rules: Dict[str, RuleDef] = {}
        first: Optional[str] = None
        while self.la().kind != "EOF":
            head = self.eat("IDENT")
            self.eat("ARROW")
            expr = self._parse_expr()
            if head.lexeme in rules:
                raise self.err(head, f"duplicate rule '{head.lexeme}'")
            rules[head.lexeme] = RuleDef(head.lexeme, expr)
            if first is None:
                first = head.lexeme
        if first is None:
            raise SyntaxError("PEG: empty grammar")
        start = "start" if "start" in rules else first
        return PegGrammar(rules=rules, start=start)

    def _parse_expr(self) -> Node:
        alts = [self._parse_alt()]
        while self.match("SLASH"):
            alts.append(self._parse_alt())
        if len(alts) == 1:
            return alts[0]
        return Choice(tuple(alts))

    def _parse_alt(self) -> Node:
        items: List[Node] = []
        while self.la().kind not in ("SLASH", "RPAREN", "LBRACE", "RBRACE", "EOF"):
            if self.at_rule_head():
                break
            items.append(self._parse_item())
        node: Node = items[0] if len(items) == 1 else Seq(tuple(items))
        if self.match("LBRACE"):
            name = self.eat("IDENT").lexeme
            self.eat("RBRACE")
            node = Action(node, name)
        return node

    def _parse_item(self) -> Node:
        label: Optional[str] = None
        if self.la().kind == "IDENT" and self.la(1).kind == "COLON":
            label = self.eat("IDENT").lexeme
            self.eat("COLON")
        node = self._parse_suffix()
        if label is not None:
            return Labeled(label, node)
        return node

    def _parse_suffix(self) -> Node:
        node = self._parse_primary()
        for kind, sym in (("QMARK", "?"), ("STAR", "*"), ("PLUS", "+")):
            if self.match(kind):
                return Repeat(node, sym)
        return node

    def _parse_primary(self) -> Node:
        t = self.la()
        if self.match("LPAREN"):
            e = self._parse_expr()
            self.eat("RPAREN")
            return e
        if t.kind in ("STRING", "SSTRING"):
            self.i += 1
            body, nocase = _case_flag(t.lexeme)
            text = _unquote(body)
            if not text:
                raise self.err(t, "empty literal")
            return Literal(text, nocase)
        if t.kind == "CLASS":
            self.i += 1
            body, nocase = _case_flag(t.lexeme)
            ranges, singles = _class_items(body[1:-1])
            return CharClass(ranges=ranges, singles=singles, ignore_case=nocase)
        if t.kind == "IDENT":
            self.i += 1
            return Ref(t.lexeme)
        raise self.err(t, f"unexpected {t.kind or 'token'} {t.lexeme!r}")


def parse_peg_grammar(src: str) -> PegGrammar:
    """Parse PEG grammar source into a `PegGrammar`."""
    ts = _TS(_scan(src), src)
    return ts.parse_grammar()
