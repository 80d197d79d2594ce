from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .ast import Located
from .diagnostics import UndeclaredIdentifier


class SymbolTable:
    """
    Maps identifiers to storage slots for one compilation unit.

    Slots are handed out from 0 upwards and never reused. Declaring a name a
    second time adds a new entry; `resolve` returns the most recent one.
    There is no removal.
    """

    def __init__(self) -> None:
        self._slots: Dict[str, List[int]] = {}
        self._next_slot = 0

    def declare(self, name: str) -> int:
        slot = self._next_slot
        self._next_slot += 1
        self._slots.setdefault(name, []).append(slot)
        return slot

    def resolve(self, name: str, loc: Optional[Located] = None) -> int:
        slots = self._slots.get(name)
        if not slots:
            raise UndeclaredIdentifier(name, loc)
        return slots[-1]

    def entries(self) -> List[Tuple[str, int]]:
        """All (name, slot) pairs ordered by name, then by slot."""
        return [(name, slot) for name in sorted(self._slots) for slot in self._slots[name]]

    def __contains__(self, name: object) -> bool:
        return name in self._slots

    def __len__(self) -> int:
        return self._next_slot

    def __repr__(self) -> str:
        return f"SymbolTable({self.entries()!r})"


__all__ = ["SymbolTable"]
