"""Puzzle parser: convert a puzzle record into a Grid with its constraints and givens.

A record is a dictionary such as::

    {
        "id": "killer-1",
        "givens": "53..7....6..195...",          # 81 chars, '0' or '.' for blanks
        "standard": true,                        # rows, columns and boxes (default)
        "cages": [{"cells": [0, 1, 9], "sum": 15}],
        "renban": [[36, 37, 38]],
        "whispers": [["r1c5", "r2c5", "r3c5"]],
    }

Cells are linear indices (row * 9 + col) or 1-based "r<row>c<col>" references.
"""

from __future__ import annotations

import json
import numbers
import re
from typing import Any, Dict, List, Optional

from .constraints import (
    GermanWhispersConstraint,
    KillerCageConstraint,
    RenbanConstraint,
    build_standard_constraints,
)
from .errors import ConstraintConstructionError, PuzzleFormatError
from .grid import Grid
from src.utils.trace import Tracer

GIVENS_KEYS = ("givens", "puzzle", "quizzes", "grid")
_CELL_REF = re.compile(r"^\s*r([0-9])\s*c([0-9])\s*$", re.IGNORECASE)


def extract_givens(record: Dict[str, Any]) -> Optional[str]:
    for key in GIVENS_KEYS:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def parse_givens(text: str) -> List[int]:
    cleaned = re.sub(r"\s+", "", text)
    if len(cleaned) != 81:
        raise PuzzleFormatError(f"givens must have 81 cells, got {len(cleaned)}")
    values: List[int] = []
    for ch in cleaned:
        if ch in ".0_-":
            values.append(0)
        elif ch in "123456789":
            values.append(int(ch))
        else:
            raise PuzzleFormatError(f"unexpected character {ch!r} in givens")
    return values


def parse_cell_ref(ref: Any) -> int:
    if isinstance(ref, str):
        m = _CELL_REF.match(ref)
        if m:
            row, col = int(m.group(1)), int(m.group(2))
            if not (1 <= row <= 9 and 1 <= col <= 9):
                raise PuzzleFormatError(f"cell reference out of range: {ref!r}")
            return (row - 1) * 9 + (col - 1)
        if re.fullmatch(r"\s*[0-9]+\s*", ref):
            return int(ref)
        raise PuzzleFormatError(f"unrecognized cell reference: {ref!r}")
    whole = _as_whole_number(ref)
    if whole is None:
        raise PuzzleFormatError(f"unrecognized cell reference: {ref!r}")
    return whole


def _as_whole_number(value: Any) -> Optional[int]:
    """Integers (including numpy ones from pandas) and integral floats; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    return None


def parse_cage_sum(value: Any) -> int:
    if isinstance(value, str) and re.fullmatch(r"\s*[0-9]+\s*", value):
        return int(value)
    whole = _as_whole_number(value)
    if whole is None:
        raise PuzzleFormatError(f"cage sum must be a whole number, got {value!r}")
    return whole


def _decode_field(value: Any) -> Any:
    # CSV and Parquet sources carry nested fields as JSON strings.
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise PuzzleFormatError(f"could not decode field: {text[:40]!r}") from e
    if value is None:
        return []
    if hasattr(value, "tolist"):
        return value.tolist()
    return value


def _parse_lines(raw: Any, kind: str) -> List[List[int]]:
    lines = _decode_field(raw)
    if not isinstance(lines, list):
        raise PuzzleFormatError(f"{kind} must be a list of cell lists")
    parsed = []
    for line in lines:
        line = _decode_field(line)
        if not isinstance(line, list):
            raise PuzzleFormatError(f"{kind} entry must be a list of cells, got {line!r}")
        parsed.append([parse_cell_ref(ref) for ref in line])
    return parsed


def _parse_cages(raw: Any) -> List[Dict[str, Any]]:
    cages = _decode_field(raw)
    if not isinstance(cages, list):
        raise PuzzleFormatError("cages must be a list")
    parsed = []
    for cage in cages:
        if not isinstance(cage, dict) or "cells" not in cage or "sum" not in cage:
            raise PuzzleFormatError(f"cage needs 'cells' and 'sum': {cage!r}")
        cells = [parse_cell_ref(ref) for ref in _decode_field(cage["cells"])]
        parsed.append({"cells": cells, "sum": parse_cage_sum(cage["sum"])})
    return parsed


def _is_standard(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        text = value.strip().lower()
        return text not in ("0", "false", "no")
    return bool(value)


def parse_puzzle(puzzle_json: Dict[str, Any], tracer: Optional[Tracer] = None) -> Grid:
    """Build a grid from a puzzle record: constraints first, then the givens."""
    grid = Grid(tracer=tracer)

    try:
        # 1) House constraints
        if _is_standard(puzzle_json.get("standard")):
            for constraint in build_standard_constraints():
                grid.add_constraint(constraint)

        # 2) Variant constraints
        for cage in _parse_cages(puzzle_json.get("cages")):
            grid.add_constraint(KillerCageConstraint(cage["cells"], cage["sum"]))
        for line in _parse_lines(puzzle_json.get("renban"), "renban"):
            grid.add_constraint(RenbanConstraint(line))
        for line in _parse_lines(puzzle_json.get("whispers"), "whispers"):
            grid.add_constraint(GermanWhispersConstraint(line))
    except ConstraintConstructionError as e:
        raise PuzzleFormatError(f"puzzle {puzzle_json.get('id', 'unknown')}: {e}") from e

    # 3) Givens, placed after registration so they propagate
    givens = extract_givens(puzzle_json)
    if givens is not None:
        for index, value in enumerate(parse_givens(givens)):
            if value:
                grid.set(index // 9, index % 9, value)

    return grid
