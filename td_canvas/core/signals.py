"""Signals returned by widget event handlers.

Every widget in the tree speaks the same vocabulary, so containers can pass a
child's signal upwards without knowing the child's concrete type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SignalKind(str, Enum):
    OPEN_SEARCH = "open_search"
    OPEN_SORT = "open_sort"
    SELECT_COLUMN = "select_column"
    NO_OP = "no_op"


@dataclass(frozen=True)
class Signal:
    kind: SignalKind
    column: int | None = None

    @classmethod
    def open_search(cls) -> "Signal":
        return cls(SignalKind.OPEN_SEARCH)

    @classmethod
    def open_sort(cls) -> "Signal":
        return cls(SignalKind.OPEN_SORT)

    @classmethod
    def select_column(cls, column: int) -> "Signal":
        return cls(SignalKind.SELECT_COLUMN, column)

    @classmethod
    def no_op(cls) -> "Signal":
        return cls(SignalKind.NO_OP)


__all__ = ["Signal", "SignalKind"]
