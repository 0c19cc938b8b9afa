"""Keypad layouts: symbol positions plus the single gap cell an arm may not cross."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Tuple


Point = Tuple[int, int]  # (column, row), row 0 at the top

ACTIVATE = "A"
GAP_CHAR = " "

# Directional keys and the unit move each one applies to the arm above.
MOVE_DELTAS: Dict[str, Point] = {
    "^": (0, -1),
    "v": (0, 1),
    "<": (-1, 0),
    ">": (1, 0),
}


class LayoutError(ValueError):
    pass


class UnknownSymbolError(LookupError):
    def __init__(self, symbol: str, layout_name: str):
        super().__init__(f"symbol {symbol!r} is not on the {layout_name} keypad")
        self.symbol = symbol
        self.layout_name = layout_name


@dataclass(frozen=True)
class Layout:
    name: str
    rows: Tuple[str, ...]
    positions: Dict[str, Point] = field(init=False, repr=False, compare=False)
    gap: Point = field(init=False, compare=False)

    def __post_init__(self) -> None:
        positions: Dict[str, Point] = {}
        gaps = []
        for y, row in enumerate(self.rows):
            for x, ch in enumerate(row):
                if ch == GAP_CHAR:
                    gaps.append((x, y))
                    continue
                if ch in positions:
                    raise LayoutError(f"{self.name}: symbol {ch!r} appears twice")
                positions[ch] = (x, y)
        if len(gaps) != 1:
            raise LayoutError(f"{self.name}: expected exactly one gap cell, found {len(gaps)}")
        if ACTIVATE not in positions:
            raise LayoutError(f"{self.name}: missing activate key {ACTIVATE!r}")
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "gap", gaps[0])

    @property
    def symbols(self) -> Tuple[str, ...]:
        return tuple(self.positions)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.positions


def parse_layout(name: str, rows: Iterable[str]) -> Layout:
    return Layout(name=name, rows=tuple(rows))


def position_of(layout: Layout, symbol: str) -> Point:
    try:
        return layout.positions[symbol]
    except KeyError:
        raise UnknownSymbolError(symbol, layout.name) from None


def is_gap(layout: Layout, x: int, y: int) -> bool:
    return layout.gap == (x, y)


def symbol_at(layout: Layout, x: int, y: int) -> Optional[str]:
    """Key under (x, y), or None for the gap and anything off the pad."""
    if y < 0 or y >= len(layout.rows):
        return None
    row = layout.rows[y]
    if x < 0 or x >= len(row) or row[x] == GAP_CHAR:
        return None
    return row[x]


def validate_sequence(layout: Layout, sequence: Sequence[str]) -> None:
    for symbol in sequence:
        if symbol not in layout.positions:
            raise UnknownSymbolError(symbol, layout.name)


DIRECTIONAL = parse_layout("directional", (" ^A", "<v>"))
NUMERIC = parse_layout("numeric", ("789", "456", "123", " 0A"))
