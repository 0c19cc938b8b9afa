"""Press-level model of the arm chain, used to check the layered cost tables.

simulate_presses replays human key presses through every arm, and
brute_force_min_presses searches that state space directly (no grouping
restriction), so both are independent of press_cost's recurrence.
expand_presses goes the other way and spells out one optimal press string.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import List, Optional, Tuple

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
from press_cost import TransitionTable, build_transition_table


DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)

DEFAULT_MAX_STATES = 2_000_000
HUMAN_KEYS = "^v<>A"

Arms = Tuple[Point, ...]


class ChainFault(RuntimeError):
    pass


def chain_layouts(depth: int) -> List[Layout]:
    # pads[i] is worked by arm i+1; the last one is the numeric keypad.
    return [DIRECTIONAL] * (depth - 1) + [NUMERIC] if depth > 0 else []


def press(
    pads: List[Layout], arms: Arms, key: str
) -> Tuple[Optional[Arms], Optional[str]]:
    """Apply one human press.

    Returns (new_arms, typed) where typed is the numeric symbol produced, if
    any; new_arms is None when some arm is pushed onto the gap or off its pad.
    """
    level = 0
    while True:
        pad = pads[level]
        if key in MOVE_DELTAS:
            dx, dy = MOVE_DELTAS[key]
            x, y = arms[level]
            nx, ny = x + dx, y + dy
            if symbol_at(pad, nx, ny) is None:
                return None, None
            return arms[:level] + ((nx, ny),) + arms[level + 1:], None
        # activate: the key under this arm is pressed on its pad
        x, y = arms[level]
        key = symbol_at(pad, x, y)
        if level == len(pads) - 1:
            return arms, key
        level += 1


def home_arms(pads: List[Layout]) -> Arms:
    return tuple(position_of(pad, ACTIVATE) for pad in pads)


def simulate_presses(presses: str, depth: int) -> str:
    if depth < 0:
        raise ValueError(f"chain depth must be >= 0, got {depth}")
    if depth == 0:
        validate_sequence(NUMERIC, presses)
        return presses
    pads = chain_layouts(depth)
    arms: Optional[Arms] = home_arms(pads)
    typed: List[str] = []
    for idx, key in enumerate(presses):
        if key not in HUMAN_KEYS:
            raise ChainFault(f"press {idx}: {key!r} is not a directional key")
        arms, out = press(pads, arms, key)
        if arms is None:
            raise ChainFault(f"press {idx}: {key!r} drives an arm onto the gap or off its pad")
        if out is not None:
            typed.append(out)
    return "".join(typed)


def brute_force_min_presses(
    target: str, depth: int, max_states: int = DEFAULT_MAX_STATES
) -> int:
    if depth < 0:
        raise ValueError(f"chain depth must be >= 0, got {depth}")
    validate_sequence(NUMERIC, target)
    if depth == 0 or not target:
        return len(target)
    pads = chain_layouts(depth)
    start = (home_arms(pads), 0)

    queue = deque([start])
    seen = {start}
    steps = 0
    while queue:
        steps += 1
        for _ in range(len(queue)):
            arms, done = queue.popleft()
            for key in HUMAN_KEYS:
                new_arms, out = press(pads, arms, key)
                if new_arms is None:
                    continue
                new_done = done
                if out is not None:
                    if out != target[done]:
                        continue
                    new_done += 1
                    if new_done == len(target):
                        logger.debug(f"{target} depth {depth}: {len(seen)} states explored")
                        return steps
                state = (new_arms, new_done)
                if state in seen:
                    continue
                seen.add(state)
                if len(seen) > max_states:
                    raise ChainFault(f"state budget {max_states} exhausted at {steps} presses")
                queue.append(state)
    raise ChainFault(f"{target!r} cannot be typed through {depth} layers")


def expand_layer(table: TransitionTable, sequence: str, layer: int) -> str:
    if layer == 0:
        return sequence
    parts = []
    prev = ACTIVATE
    for key in sequence:
        moves = table.best_moves(layer, prev, key)
        parts.append(expand_layer(table, moves, layer - 1))
        prev = key
    return "".join(parts)


def expand_presses(
    target: str, depth: int, table: Optional[TransitionTable] = None
) -> str:
    """One optimal human press string; it grows geometrically, keep depth small."""
    if table is None:
        table = build_transition_table(depth)
    elif table.depth != depth:
        raise ValueError(f"table depth {table.depth} does not match {depth}")
    validate_sequence(NUMERIC, target)
    return expand_layer(table, target, depth)
