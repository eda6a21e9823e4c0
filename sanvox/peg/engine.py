# sanvox/peg/engine.py
from __future__ import annotations
from typing import Any, Callable, Dict, Mapping, Set, Tuple
from .ast import (
    Literal, CharClass, Ref, Repeat, Labeled, Seq, Choice, Action,
    PegGrammar, Node, describe
)
from ..lexicon import AliasTable, match_form

# Packrat engine:
# - Memoize only rule applications (rule_name, pos) -> (ok, end_pos, value)
# - Left recursion is not supported (typical PEG restriction).
# - Ordered choice: the first alternative that matches wins, later ones are never tried.
# - Actions fire as soon as their expression matches; they must be pure.
# - One Packrat per parse call; the grammar, actions and aliases are only read.

Result = Tuple[bool, int, Any]


def _class_match(cc: CharClass, ch: str) -> bool:
    cands = (ch, ch.lower(), ch.upper()) if cc.ignore_case else (ch,)
    for c in cands:
        if len(c) != 1:
            continue
        cp = ord(c)
        for (lo, hi) in cc.ranges:
            if lo <= cp <= hi:
                return True
        if c in cc.singles:
            return True
    return False


class Packrat:
    def __init__(self, g: PegGrammar, actions: Mapping[str, Callable[..., Any]],
                 aliases: AliasTable):
        self.g = g
        self.actions = actions
        self.aliases = aliases
        # memo: (rule_name, pos) -> (visited_flag:int, ok:bool, end:int, value)
        # visited_flag: 1=in progress, 2=done
        self.memo: Dict[Tuple[str, int], Tuple[int, bool, int, Any]] = {}
        # farthest position a terminal failed at, and what was expected there
        self.fail_pos = 0
        self.expected: Set[str] = set()

    # ---- Public entrypoint for one rule ----
    def parse(self, rule_name: str, text: str, pos: int = 0) -> Result:
        self.memo.clear()
        self.fail_pos = pos
        self.expected = set()
        return self._apply_rule(rule_name, text, pos)

    def expect(self, pos: int, what: str) -> None:
        """Record an expectation at `pos`; only the farthest position is kept."""
        if pos > self.fail_pos:
            self.fail_pos = pos
            self.expected = {what}
        elif pos == self.fail_pos:
            self.expected.add(what)

    def _fail(self, node: Node, pos: int) -> Result:
        self.expect(pos, describe(node))
        return False, pos, None

    # ---- Rule application with memoization ----
    def _apply_rule(self, name: str, text: str, pos: int) -> Result:
        key = (name, pos)
        m = self.memo.get(key)
        if m is not None:
            flag, ok, end, value = m
            if flag == 1:
                # left recursion or re-entry -> fail (PEG disallows left recursion)
                return False, pos, None
            return ok, end, value

        self.memo[key] = (1, False, pos, None)
        rule = self.g.require_rule(name)
        # each rule body gets its own label scope
        ok, end, value = self._eval(rule.expr, text, pos, {})
        self.memo[key] = (2, ok, end, value)
        return ok, end, value

    # ---- Evaluator for expressions ----
    def _eval(self, node: Node, text: str, pos: int, env: Dict[str, Any]) -> Result:
        if isinstance(node, Literal):
            n = len(node.text)
            if match_form(text, pos, node.text, node.ignore_case):
                return True, pos + n, text[pos:pos + n]
            for form in self.aliases.aliases(node.text):
                if match_form(text, pos, form):
                    return True, pos + len(form), node.text
            return self._fail(node, pos)

        if isinstance(node, CharClass):
            if pos < len(text) and _class_match(node, text[pos]):
                return True, pos + 1, text[pos]
            for key, forms in self.aliases.char_entries():
                if not _class_match(node, key):
                    continue
                for form in forms:
                    if match_form(text, pos, form):
                        return True, pos + len(form), key
            return self._fail(node, pos)

        if isinstance(node, Ref):
            return self._apply_rule(node.name, text, pos)

        if isinstance(node, Labeled):
            ok, end, value = self._eval(node.node, text, pos, env)
            if ok:
                env[node.label] = value
            return ok, end, value

        if isinstance(node, Action):
            scope: Dict[str, Any] = {}
            ok, end, value = self._eval(node.node, text, pos, scope)
            if not ok:
                return False, pos, None
            return True, end, self.actions[node.name](value, **scope)

        if isinstance(node, Repeat):
            if node.kind == "?":
                ok, end, value = self._eval(node.node, text, pos, env)
                return (True, end, value) if ok else (True, pos, None)
            if node.kind not in ("*", "+"):
                raise AssertionError(f"unknown repeat kind {node.kind!r}")
            values = []
            cur = pos
            while True:
                ok, end, value = self._eval(node.node, text, cur, env)
                if not ok or end == cur:
                    break
                values.append(value)
                cur = end
            if node.kind == "+" and not values:
                return False, pos, None
            return True, cur, values

        if isinstance(node, Seq):
            # labels bound by a failed sequence must not leak into the caller
            local = dict(env)
            cur = pos
            values = []
            for it in node.items:
                ok, end, value = self._eval(it, text, cur, local)
                if not ok:
                    return False, pos, None
                values.append(value)
                cur = end
            env.update(local)
            return True, cur, values

        if isinstance(node, Choice):
            for it in node.alts:
                ok, end, value = self._eval(it, text, pos, env)
                if ok:
                    return True, end, value
            return False, pos, None

        raise AssertionError(f"unknown node: {node!r}")
