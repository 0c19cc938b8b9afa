"""Minimal physical press counts through a chain of keypad-steering arms.

Layer 0 is the human hand: every press costs exactly 1.  Layer L (1..N) is the
arm steered by layer L-1; the outermost layer N works the numeric keypad and
every layer below it works a directional keypad.  For each layer we keep the
cheapest cost, in human presses, of moving that layer's arm from one key to
another and pressing it.  Because the arm below always returns to the activate
key after each press, a transition's cost only depends on its two endpoints,
so layer L is filled purely from layer L-1 and the whole press string never
has to be built.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from keypad_layout import (
    ACTIVATE,
    DIRECTIONAL,
    MOVE_DELTAS,
    NUMERIC,
    Layout,
    Point,
    position_of,
    symbol_at,
    validate_sequence,
)
from log_utils import setup_logger


DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)

LayerTable = Mapping[Tuple[str, str], int]


class UnreachableTransitionError(ValueError):
    pass


def move_run(distance: int, positive: str, negative: str) -> str:
    return (positive if distance > 0 else negative) * abs(distance)


def crosses_gap(layout: Layout, start: Point, moves: str) -> bool:
    x, y = start
    for key in moves:
        if key == ACTIVATE:
            break
        dx, dy = MOVE_DELTAS[key]
        x, y = x + dx, y + dy
        # the gap, or a cell a ragged row does not have
        if symbol_at(layout, x, y) is None:
            return True
    return False


def candidate_moves(layout: Layout, start: str, end: str) -> List[str]:
    """Valid move strings (each ending in an activate press) from start to end.

    Horizontal-first comes before vertical-first; a grouping whose path runs
    over the gap or off the pad is dropped, and identical strings are returned once.
    """
    sx, sy = position_of(layout, start)
    ex, ey = position_of(layout, end)
    horizontal = move_run(ex - sx, ">", "<")
    vertical = move_run(ey - sy, "v", "^")

    moves: List[str] = []
    for candidate in (horizontal + vertical + ACTIVATE, vertical + horizontal + ACTIVATE):
        if candidate in moves or crosses_gap(layout, (sx, sy), candidate):
            continue
        moves.append(candidate)
    if not moves:
        raise UnreachableTransitionError(
            f"{layout.name}: both orderings from {start!r} to {end!r} leave the keys"
        )
    return moves


def chain_cost(lower: Optional[LayerTable], presses: str) -> int:
    # lower=None is the human hand: one press per key.
    if lower is None:
        return len(presses)
    total = 0
    prev = ACTIVATE
    for key in presses:
        total += lower[prev, key]
        prev = key
    return total


def build_layer(layout: Layout, lower: Optional[LayerTable]) -> LayerTable:
    table: Dict[Tuple[str, str], int] = {}
    for start in layout.symbols:
        for end in layout.symbols:
            table[start, end] = min(
                chain_cost(lower, moves) for moves in candidate_moves(layout, start, end)
            )
    return MappingProxyType(table)


class TransitionTable:
    def __init__(
        self,
        depth: int,
        layers: Sequence[LayerTable],
        numeric: Layout = NUMERIC,
        directional: Layout = DIRECTIONAL,
    ):
        if len(layers) != depth:
            raise ValueError(f"expected {depth} layers, got {len(layers)}")
        self.depth = depth
        self.numeric = numeric
        self.directional = directional
        self._layers: Tuple[LayerTable, ...] = tuple(layers)

    def _check_layer(self, layer: int) -> None:
        if not 0 <= layer <= self.depth:
            raise ValueError(f"layer {layer} outside 0..{self.depth}")

    def layout_for(self, layer: int) -> Layout:
        self._check_layer(layer)
        return self.numeric if layer == self.depth else self.directional

    def layer(self, layer: int) -> LayerTable:
        self._check_layer(layer)
        if layer == 0:
            raise ValueError("layer 0 is the human hand and has no stored table")
        return self._layers[layer - 1]

    def _lower(self, layer: int) -> Optional[LayerTable]:
        return self._layers[layer - 2] if layer > 1 else None

    def cost(self, layer: int, start: str, end: str) -> int:
        layout = self.layout_for(layer)
        validate_sequence(layout, (start, end))
        if layer == 0:
            return 1
        return self._layers[layer - 1][start, end]

    def best_moves(self, layer: int, start: str, end: str) -> str:
        """Cheapest grouping for one transition at layer (>= 1); ties keep horizontal-first."""
        layout = self.layout_for(layer)
        if layer == 0:
            raise ValueError("layer 0 presses keys directly")
        lower = self._lower(layer)
        return min(candidate_moves(layout, start, end), key=lambda moves: chain_cost(lower, moves))

    def sequence_cost(self, sequence: str, layer: Optional[int] = None) -> int:
        if layer is None:
            layer = self.depth
        validate_sequence(self.layout_for(layer), sequence)
        if layer == 0:
            return len(sequence)
        return chain_cost(self._layers[layer - 1], sequence)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return (
            self.depth == other.depth
            and self.numeric == other.numeric
            and self.directional == other.directional
            and [dict(t) for t in self._layers] == [dict(t) for t in other._layers]
        )


class PressCounter:
    """Keeps layers around between queries.

    Directional layers 1..K are identical for every depth above K, so they are
    grown on demand and shared; only the numeric top layer is per depth.
    """

    def __init__(self, numeric: Layout = NUMERIC, directional: Layout = DIRECTIONAL):
        self.numeric = numeric
        self.directional = directional
        self._directional_layers: List[LayerTable] = []
        self._top_layers: Dict[int, LayerTable] = {}

    def _grow_directional(self, count: int) -> None:
        while len(self._directional_layers) < count:
            lower = self._directional_layers[-1] if self._directional_layers else None
            self._directional_layers.append(build_layer(self.directional, lower))
            logger.debug(f"built directional layer {len(self._directional_layers)}")

    def table(self, depth: int) -> TransitionTable:
        if depth < 0:
            raise ValueError(f"chain depth must be >= 0, got {depth}")
        if depth == 0:
            return TransitionTable(0, [], self.numeric, self.directional)
        self._grow_directional(depth - 1)
        below = self._directional_layers[: depth - 1]
        top = self._top_layers.get(depth)
        if top is None:
            top = build_layer(self.numeric, below[-1] if below else None)
            self._top_layers[depth] = top
            logger.debug(f"built numeric top layer for depth {depth}")
        return TransitionTable(depth, below + [top], self.numeric, self.directional)

    def press_count(self, sequence: str, depth: int) -> int:
        return self.table(depth).sequence_cost(sequence)


def build_transition_table(
    depth: int, numeric: Layout = NUMERIC, directional: Layout = DIRECTIONAL
) -> TransitionTable:
    return PressCounter(numeric, directional).table(depth)


def count_min_presses(sequence: str, depth: int) -> int:
    return build_transition_table(depth).sequence_cost(sequence)


# ---------- Complexity ----------


def numeric_part(code: str) -> int:
    digits = code[:-1] if code.endswith(ACTIVATE) else code
    if not digits:
        return 0
    if not digits.isdigit():
        raise ValueError(f"code {code!r} has a non-numeric body")
    return int(digits)


def code_complexity(code: str, depth: int, counter: Optional[PressCounter] = None) -> int:
    if counter is None:
        counter = PressCounter()
    return counter.press_count(code, depth) * numeric_part(code)


def total_complexity(
    codes: Iterable[str], depth: int, counter: Optional[PressCounter] = None
) -> int:
    if counter is None:
        counter = PressCounter()
    return sum(code_complexity(code, depth, counter) for code in codes)
