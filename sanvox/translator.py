# sanvox/translator.py
"""Convert long-form move descriptions to chess standard algebraic notation (SAN).

    >>> MoveTranslator().parse("bishop a takes e4")
    'Baxe4'
    >>> MoveTranslator(aliases={"takes": ["tex"]}).parse("queen tex h8")
    'Qxh8'

A translator is immutable once built: the compiled grammar and the alias
table are only read while parsing, so one instance can be shared freely.
Build another instance to use different aliases.
"""

from __future__ import annotations
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from .actions import ACTIONS
from .grammar import MOVE_GRAMMAR
from .lexicon import AliasSpec, AliasTable
from .peg import PegProgram, PegRunner

# speech recognisers regularly hear "knight" as "night"
DEFAULT_ALIASES: Mapping[str, Tuple[str, ...]] = MappingProxyType({"knight": ("night",)})


class MoveTranslator:
    def __init__(self,
                 aliases: Optional[Union[AliasSpec, AliasTable]] = None,
                 grammar_src: str = MOVE_GRAMMAR,
                 actions: Optional[Mapping[str, Callable[..., Any]]] = None):
        if isinstance(aliases, AliasTable):
            self.aliases = aliases
        else:
            self.aliases = AliasTable(DEFAULT_ALIASES if aliases is None else aliases)
        self.program = PegProgram.from_source(grammar_src, ACTIONS if actions is None else actions)
        self._runner = PegRunner(self.program, self.aliases)

    def parse(self, text: str) -> str:
        """Translate one transcript into a SAN move (or result token).

        Raises `ParseError` if the whole transcript is not a move and
        `InvalidEnPassant` for an en passant capture onto an impossible rank.
        """
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        return self._runner.parse(text)

    to_san = parse


@lru_cache(maxsize=1)
def _default_translator() -> MoveTranslator:
    return MoveTranslator()


def text_to_san(text: str) -> str:
    """Translate with the default grammar and aliases."""
    return _default_translator().parse(text)
