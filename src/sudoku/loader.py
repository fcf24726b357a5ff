import json
import math
import os
from typing import Any, Dict, List

import pandas as pd

from src.utils.io import iter_json_lines, load_json

from .parser import GIVENS_KEYS, extract_givens


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .parquet, .csv, .json and .jsonl formats.
    Returns a list of raw puzzle dictionaries ready for `parse_puzzle`.
    """
    file_path = str(file_path)
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and math.isnan(value):
            return True
        return isinstance(value, str) and value.strip() == ""

    def _normalize_record(record: Dict[str, Any], position: int) -> Dict[str, Any]:
        record = {k: v for k, v in record.items() if not _is_missing(v)}

        givens = extract_givens(record)
        if givens is not None:
            record["givens"] = givens
            for key in GIVENS_KEYS[1:]:
                record.pop(key, None)

        if "id" not in record:
            record["id"] = f"puzzle-{position + 1}"
        else:
            record["id"] = str(record["id"])

        return record

    def _normalize_all(records: List[Any]) -> List[Dict[str, Any]]:
        dicts = [r for r in records if isinstance(r, dict)]
        return [_normalize_record(r, i) for i, r in enumerate(dicts)]

    # Case 1: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 2: CSV File (nested fields stored as JSON strings)
    if file_path.endswith(".csv"):
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 3: JSON File (Text; array or object)
    if file_path.endswith(".json"):
        try:
            payload = load_json(file_path)
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            return _normalize_all(list(iter_json_lines(file_path)))
        if isinstance(payload, list):
            return _normalize_all(payload)
        if isinstance(payload, dict):
            if isinstance(payload.get("puzzles"), list):
                return _normalize_all(payload["puzzles"])
            return _normalize_all([payload])
        return []

    # Case 4: JSONL File (Text)
    return _normalize_all(list(iter_json_lines(file_path)))
