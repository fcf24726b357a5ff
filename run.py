"""CLI entrypoint: load puzzle(s), run the deduction solver, and report metrics."""

import argparse
import csv
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from solver import solve_puzzle
from src.sudoku.loader import load_puzzles
from src.sudoku.solver_core import DEFAULT_MAX_ROUNDS, SolveReport
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer, set_trace_level

PUZZLE_SUFFIXES = [".json", ".jsonl", ".parquet", ".csv"]


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Run the logical Sudoku solver on puzzle files")
    parser.add_argument("input", type=Path, help="Path to a puzzle file or directory of puzzle files")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write the results CSV")
    parser.add_argument(
        "--trace-dir",
        type=Path,
        default=None,
        help="Optional directory for per-puzzle trace CSVs and a summary.json.",
    )
    parser.add_argument(
        "--trace-level",
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level of trace steps to record.",
    )
    parser.add_argument(
        "--no-advanced",
        action="store_true",
        help="Skip X-Wing, Swordfish and XY-Wing; use singles and subsets only.",
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=DEFAULT_MAX_ROUNDS,
        help="Upper bound on solve rounds per puzzle.",
    )
    parser.add_argument(
        "--include-status",
        action="store_true",
        help="Include a 'status' column (solved, invalid, stuck, contradiction) in the results.",
    )
    return parser.parse_args(argv)


def format_solution(report: Optional[SolveReport], blank: str = ".", as_rows: bool = False) -> str:
    """
    Row-major digits with `blank` where the solver left a cell empty.
    One 81-char string by default, or nine newline-separated rows.
    """
    if report is None:
        return ""
    text = report.values.replace("0", blank)
    if as_rows:
        return "\n".join(text[r * 9:(r + 1) * 9] for r in range(9))
    return text


def _safe_name(puzzle_id: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", puzzle_id) or "puzzle"


def collect_puzzles(input_path: Path) -> List[Dict[str, Any]]:
    puzzles: List[Dict[str, Any]] = []
    if input_path.is_file():
        puzzles = load_puzzles(str(input_path))
    elif input_path.is_dir():
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {input_path} is neither file nor directory")
    return puzzles


def write_results_csv(results, output_path: Path, include_status: bool = False):
    header = ["id", "status", "solution", "steps"] if include_status else ["id", "solution", "steps"]
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)

        for r in results:
            writer.writerow([r[column] for column in header])


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    puzzles = collect_puzzles(args.input)
    results = []
    summaries: Dict[str, Any] = {}

    for puzzle in puzzles:
        reset_tracer()
        set_trace_level(args.trace_level)
        tracer = get_tracer()
        puzzle_id = str(puzzle.get("id", "unknown"))

        try:
            report = solve_puzzle(
                puzzle,
                use_advanced=not args.no_advanced,
                max_rounds=args.max_rounds,
            )
            results.append({
                "id": puzzle_id,
                "status": report.status,
                "solution": format_solution(report),
                # Deduced placements only; givens are not counted.
                "steps": len(report.placements),
            })
        except Exception as e:
            print(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}")
            tracer.log_message("ERROR", f"Failed to solve puzzle {puzzle_id}: {e}")
            results.append({
                "id": puzzle_id,
                "status": "error",
                "solution": "",
                "steps": -1,
            })

        if args.trace_dir:
            tracer.to_csv(args.trace_dir / f"{_safe_name(puzzle_id)}.csv")
            summaries[puzzle_id] = {"status": results[-1]["status"], **tracer.summary()}

    if args.trace_dir and summaries:
        save_json(args.trace_dir / "summary.json", summaries)

    if args.output:
        write_results_csv(results, args.output, include_status=args.include_status)
    else:
        print(results)


if __name__ == "__main__":
    main()
