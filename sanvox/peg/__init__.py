# sanvox/peg/__init__.py
"""PEG submodule for sanvox.

This package provides:
- AST nodes for a small PEG subset (with labels and named actions)
- A PEG grammar parser
- A Packrat (memoizing) PEG engine/runtime that evaluates actions
"""

from .ast import (
    Literal, CharClass, Ref, Repeat, Labeled, Seq, Choice, Action,
    RuleDef, PegGrammar,
)
from .parser import parse_peg_grammar
from .runtime import PegProgram, PegRunner
