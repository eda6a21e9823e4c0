# sanvox/peg/ast.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Tuple, Union

# ---- PEG AST node definitions ----

@dataclass(frozen=True)
class Literal:
    text: str  # unescaped text
    ignore_case: bool = False

@dataclass(frozen=True)
class CharClass:
    # ranges are inclusive (lo..hi). singles are single codepoints (as str of length 1)
    ranges: Tuple[Tuple[int, int], ...] = ()
    singles: Tuple[str, ...] = ()
    ignore_case: bool = False

@dataclass(frozen=True)
class Ref:
    name: str

@dataclass(frozen=True)
class Repeat:
    node: "Node"
    kind: str  # '?', '*', '+'

@dataclass(frozen=True)
class Labeled:
    label: str
    node: "Node"

@dataclass(frozen=True)
class Seq:
    items: Tuple["Node", ...]

@dataclass(frozen=True)
class Choice:
    alts: Tuple["Node", ...]

@dataclass(frozen=True)
class Action:
    node: "Node"
    name: str  # key into the program's action table

Node = Union[Literal, CharClass, Ref, Repeat, Labeled, Seq, Choice, Action]

@dataclass(frozen=True)
class RuleDef:
    name: str
    expr: Node

@dataclass(frozen=True)
class PegGrammar:
    rules: Mapping[str, RuleDef]
    start: str

    def require_rule(self, name: str) -> RuleDef:
        try:
            return self.rules[name]
        except KeyError:
            raise SyntaxError(f"PEG: undefined rule '{name}'")


def describe(node: Node) -> str:
    """Short human-readable form of a terminal matcher, used in error messages."""
    if isinstance(node, Literal):
        return repr(node.text) + ("i" if node.ignore_case else "")
    if isinstance(node, CharClass):
        parts = [f"{chr(lo)}-{chr(hi)}" for (lo, hi) in node.ranges]
        parts.extend(node.singles)
        return "[" + "".join(parts) + "]" + ("i" if node.ignore_case else "")
    if isinstance(node, Ref):
        return node.name
    return type(node).__name__
