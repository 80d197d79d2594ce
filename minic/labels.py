from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConditionalLabels:
    """The cooperating label names of one if/else region."""

    number: int

    @property
    def if_def(self) -> str:
        return f"_if_{self.number}"

    @property
    def else_target(self) -> str:
        return f"_else_{self.number}"

    @property
    def else_def(self) -> str:
        return self.else_target

    @property
    def end_target(self) -> str:
        return f"_end_if_{self.number}"

    @property
    def end_def(self) -> str:
        return self.end_target


class LabelAllocator:
    """
    Hands out label sets for conditional regions.

    Numbers come from a counter owned by one compilation, so no two regions
    in a program share a label, whatever their nesting.
    """

    def __init__(self, start: int = 0) -> None:
        self._next = start

    def allocate(self) -> ConditionalLabels:
        labels = ConditionalLabels(self._next)
        self._next += 1
        return labels

    @property
    def allocated(self) -> int:
        return self._next


__all__ = ["ConditionalLabels", "LabelAllocator"]
