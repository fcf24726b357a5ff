"""Tracing module: logs deduction steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

LEVELS: Dict[str, int] = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}

FIELDNAMES = [
    'timestamp', 'step_number', 'action_type', 'level', 'row', 'col', 'value',
    'remaining', 'technique', 'constraint_checked', 'is_valid', 'reason'
]


@dataclass
class TraceStep:
    """A single step in the deduction process."""

    timestamp: float
    step_number: int
    action_type: str  # 'cell_solved', 'candidate_eliminated', 'single_candidate', 'technique', etc.
    level: str = "INFO"
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[int] = None  # placed value, or the candidate concerned
    remaining: Optional[int] = None  # candidates left after an elimination
    technique: Optional[str] = None
    constraint_checked: Optional[str] = None
    is_valid: Optional[bool] = None
    reason: Optional[str] = None


def _cell_label(row: int, col: int) -> str:
    return f"R{row + 1}C{col + 1}"


class Tracer:
    """Records deduction steps for logging and analysis."""

    def __init__(self, enabled: bool = True, level: str = "DEBUG"):
        self.enabled = enabled
        self.level = _normalize_level(level)
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def is_enabled_for(self, level: str) -> bool:
        return self.enabled and LEVELS[_normalize_level(level)] >= LEVELS[self.level]

    def _append(self, action_type: str, level: str, **fields: Any) -> None:
        if not self.is_enabled_for(level):
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            level=_normalize_level(level),
            **fields,
        ))

    def log_message(self, level: str, message: str):
        """Log a free-form leveled message."""
        self._append('message', level, reason=message)

    def log_cell_solved(self, row: int, col: int, value: int, reason: str = ""):
        """Log a value being placed in a cell."""
        self._append(
            'cell_solved', "INFO",
            row=row,
            col=col,
            value=value,
            reason=reason or f"{_cell_label(row, col)} set to {value}",
        )

    def log_candidate_eliminated(self, row: int, col: int, candidate: int, remaining: int):
        """Log a candidate removal."""
        self._append(
            'candidate_eliminated', "DEBUG",
            row=row,
            col=col,
            value=candidate,
            remaining=remaining,
        )

    def log_single_candidate(self, row: int, col: int, candidate: int):
        """Log a cell reduced to one candidate (advisory, the cell is not assigned)."""
        self._append(
            'single_candidate', "INFO",
            row=row,
            col=col,
            value=candidate,
            remaining=1,
            reason=f"Only candidate {candidate} remains in {_cell_label(row, col)}",
        )

    def log_contradiction(self, row: int, col: int, candidate: int):
        """Log an unsolved cell whose last candidate was removed."""
        self._append(
            'contradiction', "WARNING",
            row=row,
            col=col,
            value=candidate,
            remaining=0,
            reason=f"{_cell_label(row, col)} has no candidates left",
        )

    def log_technique(self, technique: str, eliminated: int, reason: str = ""):
        """Log a deduction technique that found a pattern."""
        self._append(
            'technique', "INFO",
            technique=technique,
            remaining=eliminated,
            reason=reason,
        )

    def log_constraint_check(self, constraint_desc: str, is_valid: bool):
        """Log a constraint check."""
        self._append(
            'constraint_check', "DEBUG" if is_valid else "WARNING",
            constraint_checked=constraint_desc,
            is_valid=is_valid,
        )

    def to_frame(self) -> pd.DataFrame:
        """Return the trace as a DataFrame (one row per step)."""
        return pd.DataFrame([asdict(step) for step in self.steps], columns=FIELDNAMES)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        technique_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1
            if step.technique:
                technique_counts[step.technique] = technique_counts.get(step.technique, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'technique_counts': technique_counts,
            'num_placements': action_counts.get('cell_solved', 0),
            'num_eliminations': action_counts.get('candidate_eliminated', 0),
            'num_contradictions': action_counts.get('contradiction', 0),
        }


def _normalize_level(level: str) -> str:
    name = str(level).upper()
    if name == "WARN":
        name = "WARNING"
    if name not in LEVELS:
        raise ValueError(f"Unknown trace level: {level!r}")
    return name


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled


def set_trace_level(level: str) -> None:
    """Drop steps below `level` on the global tracer."""
    get_tracer().level = _normalize_level(level)
