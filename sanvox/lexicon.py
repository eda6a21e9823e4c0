# sanvox/lexicon.py
"""Alias table: canonical grammar tokens and the surface forms accepted for them.

Speech recognisers routinely hand back homophones ("night" for "knight",
"for" for "4"). An `AliasTable` maps each canonical token the grammar
spells out (a literal such as ``"knight"`` or a single character a
character class accepts, such as ``"h"`` or ``"4"``) to the extra strings
that should be read as that token.

Rules
-----
- keys and forms are case-folded to lowercase; matching is case-insensitive
- forms keep their configured order (first match wins, no longest match)
- duplicates are dropped, the first occurrence is kept
- the table is frozen after construction
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

AliasSpec = Mapping[str, Union[str, Iterable[str]]]


def _forms(key: str, raw: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    if isinstance(raw, str):
        raw = [raw]
    out: List[str] = []
    for form in raw:
        if not isinstance(form, str):
            raise ValueError(f"alias for {key!r} must be a string, got {type(form).__name__}")
        f = form.lower()
        if not f:
            raise ValueError(f"empty alias for {key!r}")
        if f == key or f in out:
            continue
        out.append(f)
    return tuple(out)


class AliasTable:
    """Read-only canonical token -> aliases lookup."""

    def __init__(self, entries: Optional[AliasSpec] = None):
        table: Dict[str, Tuple[str, ...]] = {}
        for key, raw in (entries or {}).items():
            if not isinstance(key, str) or not key:
                raise ValueError(f"alias key must be a non-empty string, got {key!r}")
            k = key.lower()
            merged = table.get(k, ()) + _forms(k, raw)
            table[k] = tuple(dict.fromkeys(merged))
        self._table = MappingProxyType(table)
        self._chars = tuple((k, v) for k, v in table.items() if len(k) == 1 and v)

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and token.lower() in self._table

    def __repr__(self) -> str:
        return f"AliasTable({dict(self._table)!r})"

    def aliases(self, token: str) -> Tuple[str, ...]:
        return self._table.get(token.lower(), ())

    def resolve(self, token: str) -> Tuple[str, ...]:
        """Canonical token followed by its aliases, in configured order."""
        return (token,) + self.aliases(token)

    def char_entries(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        """Entries keyed by a single character (file letters, digits)."""
        return self._chars

    def as_dict(self) -> Dict[str, List[str]]:
        return {k: list(v) for k, v in self._table.items()}


def match_form(text: str, pos: int, form: str, ignore_case: bool = True) -> bool:
    """True if `form` occurs in `text` at `pos`."""
    seg = text[pos:pos + len(form)]
    if ignore_case:
        return seg.lower() == form.lower()
    return seg == form
