#!/usr/bin/env python3
"""Keypad chain puzzle: sum of code complexities for one or more chain depths.

Examples:
  python3 keypad_solver.py input.txt
  python3 keypad_solver.py --example --depth 3 --show-presses --verify
  WITH_EXAMPLE=true python3 keypad_solver.py --depth 2 --depth 25
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from chain_sim import (
    DEFAULT_MAX_STATES,
    ChainFault,
    brute_force_min_presses,
    expand_presses,
    simulate_presses,
)
from keypad_layout import NUMERIC, UnknownSymbolError, validate_sequence
from log_utils import get_level_from_string, set_level, setup_logger
from press_cost import PressCounter, code_complexity, numeric_part


DEFAULT_INIT_LOG_LEVEL = logging.ERROR
logger = setup_logger(__name__, level=DEFAULT_INIT_LOG_LEVEL)

# Part one drives the numeric arm through two directional robots, part two through 25.
DEFAULT_DEPTHS = (3, 26)
DEFAULT_MAX_SHOW_DEPTH = 4
DEFAULT_MAX_VERIFY_DEPTH = 3
INPUT_FILE = "input.txt"
EXAMPLE_FILE = "example.txt"
LOGGER_NAMES = (__name__, "press_cost", "chain_sim")


def resolve_input_path(path: Optional[str] = None, example: bool = False) -> Path:
    if path:
        return Path(path)
    if not example:
        example = os.environ.get("WITH_EXAMPLE", "").lower() == "true"
    base = Path(os.environ.get("KEYPAD_INPUT_DIR", "."))
    return base / (EXAMPLE_FILE if example else INPUT_FILE)


def parse_codes(text: str) -> List[str]:
    codes = [line.strip() for line in text.splitlines()]
    codes = [code for code in codes if code]
    for code in codes:
        validate_sequence(NUMERIC, code)
        numeric_part(code)
    return codes


def load_codes(path: Path) -> List[str]:
    return parse_codes(Path(path).read_text(encoding="ascii"))


def verify_code(code: str, depth: int, counter: PressCounter, max_states: int) -> bool:
    expected = counter.press_count(code, depth)
    found = brute_force_min_presses(code, depth, max_states=max_states)
    if found != expected:
        logger.error(f"{code} depth {depth}: table {expected} != search {found}")
        return False
    presses = expand_presses(code, depth, counter.table(depth))
    if len(presses) != expected or simulate_presses(presses, depth) != code:
        logger.error(f"{code} depth {depth}: expanded presses do not replay to the code")
        return False
    return True


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Minimal key presses through a chain of keypad robots")
    parser.add_argument("input", nargs="?", help="codes file, one per line (default: input.txt)")
    parser.add_argument("--example", action="store_true", help="read example.txt instead of input.txt")
    parser.add_argument(
        "--depth",
        type=int,
        action="append",
        help="chain depth, repeatable (default: 3 and 26)",
    )
    parser.add_argument("--show-presses", action="store_true", help="print one optimal press string per code")
    parser.add_argument("--max-show-depth", type=int, default=DEFAULT_MAX_SHOW_DEPTH)
    parser.add_argument("--verify", action="store_true", help="cross-check against exhaustive search")
    parser.add_argument("--max-verify-depth", type=int, default=DEFAULT_MAX_VERIFY_DEPTH)
    parser.add_argument("--max-states", type=int, default=DEFAULT_MAX_STATES)
    parser.add_argument("--log-level", default="warning")
    parser.add_argument("--log-file", help="also append log lines to this file")
    args = parser.parse_args(argv)

    level = get_level_from_string(args.log_level)
    if args.log_file:
        for name in LOGGER_NAMES:
            setup_logger(name, level=level, log_file=args.log_file)
    set_level(level, LOGGER_NAMES)

    depths = args.depth or list(DEFAULT_DEPTHS)
    for depth in depths:
        if depth < 0:
            raise SystemExit(f"depth must be >= 0: {depth}")

    path = resolve_input_path(args.input, args.example)
    try:
        codes = load_codes(path)
    except FileNotFoundError:
        raise SystemExit(f"input file not found: {path}")
    except (UnknownSymbolError, ValueError) as exc:
        raise SystemExit(f"{path}: {exc}")
    logger.info(f"loaded {len(codes)} codes from {path}")

    counter = PressCounter()
    failed = []
    for depth in depths:
        total = 0
        for code in codes:
            total += code_complexity(code, depth, counter)
            if args.show_presses and depth <= args.max_show_depth:
                presses = counter.press_count(code, depth)
                print(f"{code} depth {depth}: {presses} {expand_presses(code, depth, counter.table(depth))}")
            if args.verify and depth <= args.max_verify_depth:
                try:
                    ok = verify_code(code, depth, counter, args.max_states)
                except ChainFault as exc:
                    logger.error(f"{code} depth {depth}: {exc}")
                    ok = False
                print(f"verify {code} depth {depth}: {'ok' if ok else 'MISMATCH'}")
                if not ok:
                    failed.append((code, depth))
        print(f"Sum of complexities (depth {depth}): {total}")

    if failed:
        raise SystemExit(f"verification failed for {len(failed)} code/depth pairs")


if __name__ == "__main__":
    main()
