"""
File Store Adapter

Reads comparison and treatment-effect records from local JSON, YAML or CSV
files and writes assessment results as JSON.

Accepted layouts:
    JSON / YAML : a list of records, or a mapping holding the list under
                  "comparisons" / "effects"
    CSV         : one record per row with a header line; empty cells are
                  treated as missing values
"""

import csv
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

from treatment_network.core.exceptions import InvalidInput
from treatment_network.core.models import TreatmentComparison, TreatmentEffect

logger = logging.getLogger(__name__)

_INT_FIELDS = {"n_a", "n_b"}
_FLOAT_FIELDS = {"effect_size", "standard_error"}
_BOOL_FIELDS = {"is_reference"}


class LocalFileStore:
    """Local filesystem access for engine inputs and outputs."""

    def read_records(self, path: str, key: str) -> List[Dict[str, Any]]:
        """Read a list of raw records from ``path``; ``key`` names the list in mapping layouts."""
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = file_path.suffix.lower()
        logger.info("Reading %s from %s", key, path)

        if suffix == ".csv":
            return self._read_csv(file_path)
        if suffix in (".yaml", ".yml"):
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        elif suffix == ".json":
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise InvalidInput(f"Unsupported file format '{suffix}' (expected .json, .yaml, .yml or .csv)")

        if isinstance(data, dict):
            data = data.get(key)
        if not isinstance(data, list):
            raise InvalidInput(f"{path} does not contain a list of {key}")
        return data

    def read_comparisons(self, path: str) -> List[TreatmentComparison]:
        return [TreatmentComparison.from_dict(r) for r in self.read_records(path, "comparisons")]

    def read_effects(self, path: str) -> List[TreatmentEffect]:
        return [TreatmentEffect.from_dict(r) for r in self.read_records(path, "effects")]

    def write_json(self, path: str, data: Dict[str, Any]) -> str:
        """Write data as JSON to file. Returns the written path."""
        self.makedirs(os.path.dirname(path))
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)
        return path

    def makedirs(self, path: str) -> None:
        if path:
            os.makedirs(path, exist_ok=True)

    # ------------------------------------------------------------------

    def _read_csv(self, file_path: Path) -> List[Dict[str, Any]]:
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            return [self._convert_row(row, i) for i, row in enumerate(csv.DictReader(f), start=2)]

    @staticmethod
    def _convert_row(row: Dict[str, str], line: int) -> Dict[str, Any]:
        record: Dict[str, Any] = {}
        for name, raw in row.items():
            if name is None:
                raise InvalidInput(f"CSV line {line} has more cells than header columns")
            value = (raw or "").strip()
            if value == "":
                continue
            try:
                if name in _INT_FIELDS or name in _FLOAT_FIELDS:
                    number = float(value)
            except ValueError as exc:
                raise InvalidInput(f"CSV line {line}: invalid value {value!r} for '{name}'") from exc

            if name in _INT_FIELDS:
                if not number.is_integer():
                    raise InvalidInput(f"CSV line {line}: '{name}' must be a whole number, got {value!r}")
                record[name] = int(number)
            elif name in _FLOAT_FIELDS:
                record[name] = number
            elif name in _BOOL_FIELDS:
                record[name] = value.lower() in ("1", "true", "yes", "y")
            else:
                record[name] = value
        return record
