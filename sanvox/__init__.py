# sanvox/__init__.py
"""sanvox: spoken chess move descriptions to standard algebraic notation.

- `MoveTranslator` : immutable translator (grammar + alias table)
- `text_to_san`    : translate with the default translator
- errors           : `MoveError`, `ParseError`, `InvalidEnPassant`
"""

from .errors import MoveError, ParseError, InvalidEnPassant
from .lexicon import AliasTable
from .translator import DEFAULT_ALIASES, MoveTranslator, text_to_san

__all__ = [
    "MoveError", "ParseError", "InvalidEnPassant",
    "AliasTable", "DEFAULT_ALIASES", "MoveTranslator", "text_to_san",
]
