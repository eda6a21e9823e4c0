# sanvox/peg/runtime.py
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple
from .ast import Ref, Repeat, Labeled, Seq, Choice, Action, PegGrammar, Node
from .parser import parse_peg_grammar
from .engine import Packrat
from ..errors import ParseError
from ..lexicon import AliasTable


def _children(node: Node) -> Tuple[Node, ...]:
    if isinstance(node, (Repeat, Labeled, Action)):
        return (node.node,)
    if isinstance(node, Seq):
        return node.items
    if isinstance(node, Choice):
        return node.alts
    return ()


def _check(g: PegGrammar, actions: Mapping[str, Callable[..., Any]]) -> None:
    """Reject references to undefined rules and actions up front."""
    for rule in g.rules.values():
        stack = [rule.expr]
        while stack:
            node = stack.pop()
            if isinstance(node, Ref) and node.name not in g.rules:
                raise SyntaxError(f"PEG: undefined rule '{node.name}' referenced from '{rule.name}'")
            if isinstance(node, Action) and node.name not in actions:
                raise SyntaxError(f"PEG: unknown action '{node.name}' in rule '{rule.name}'")
            stack.extend(_children(node))


@dataclass(frozen=True)
class PegProgram:
    """Compiled PEG program: grammar plus the actions its alternatives name."""
    grammar: PegGrammar
    actions: Mapping[str, Callable[..., Any]]

    @classmethod
    def from_source(cls, src: str,
                    actions: Optional[Mapping[str, Callable[..., Any]]] = None) -> "PegProgram":
        g = parse_peg_grammar(src)
        acts = dict(actions or {})
        _check(g, acts)
        frozen = PegGrammar(rules=MappingProxyType(dict(g.rules)), start=g.start)
        return cls(frozen, MappingProxyType(acts))


class PegRunner:
    """Execute PEG program on input text."""
    def __init__(self, program: PegProgram, aliases: Optional[AliasTable] = None):
        self.program = program
        self.aliases = aliases if aliases is not None else AliasTable()

    def run(self, rule_name: str, text: str, pos: int = 0) -> Tuple[bool, int, Any]:
        engine = Packrat(self.program.grammar, self.program.actions, self.aliases)
        return engine.parse(rule_name, text, pos)

    def parse(self, text: str, rule_name: Optional[str] = None) -> Any:
        """Match `rule_name` (default: the start rule) against the whole of `text`.

        Returns the rule's value. Raises `ParseError` unless the match consumes
        every character.
        """
        rule = rule_name or self.program.grammar.start
        engine = Packrat(self.program.grammar, self.program.actions, self.aliases)
        ok, end, value = engine.parse(rule, text, 0)
        if ok and end == len(text):
            return value
        if ok:
            engine.expect(end, "end of input")
        raise ParseError(text, engine.fail_pos, sorted(engine.expected))
