from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterator

from crashguard.errors import InvalidSampleError
from crashguard.inputs.base_input import SampleSource
from crashguard.inputs.payload import sample_from_payload
from crashguard.scoring.types import Sample
from crashguard.utils.logger import get_logger

SUPPORTED_SUFFIXES = (".csv", ".jsonl")


class RecordedInput(SampleSource):
    """Replays a recorded sensor log (.csv with a header row, or .jsonl with one message per line)."""

    def __init__(self, path: str | Path, allow_missing: bool = False, strict: bool = False):
        self.path = Path(path)
        self.logger = get_logger(__name__)
        self.strict = strict
        self.skipped = 0
        self.available = False

        if self.path.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise ValueError(f"Unsupported recording format {self.path.suffix!r}; expected one of {SUPPORTED_SUFFIXES}")

        if not self.path.exists():
            if allow_missing:
                self.logger.warning("Recording %s not found; proceeding inert for testing.", self.path)
                return
            raise FileNotFoundError(f"Recording not found: {self.path}")

        self.available = True
        self.logger.info("Recording opened: %s", self.path)

    def start(self) -> None:
        # Files are opened lazily in samples()
        return

    def _rows(self) -> Iterator[Dict[str, Any]]:
        with self.path.open("r", encoding="utf-8", newline="") as f:
            if self.path.suffix.lower() == ".csv":
                yield from csv.DictReader(f)
                return
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    row = json.loads(line)
                except json.JSONDecodeError as exc:
                    row = {"_error": f"line {line_no}: {exc.msg}"}
                yield row

    def samples(self) -> Iterator[Sample]:
        if not self.available:
            return
        for idx, row in enumerate(self._rows(), start=1):
            try:
                if not isinstance(row, dict) or "_error" in row:
                    detail = row.get("_error") if isinstance(row, dict) else type(row).__name__
                    raise InvalidSampleError(f"Malformed record: {detail}")
                yield sample_from_payload(row)
            except InvalidSampleError as exc:
                if self.strict:
                    raise
                self.skipped += 1
                self.logger.warning("Skipping record %d in %s: %s", idx, self.path.name, exc)

    def stop(self) -> None:
        if self.skipped:
            self.logger.info("Closed recording %s (%d records skipped)", self.path, self.skipped)
        else:
            self.logger.info("Closed recording %s", self.path)
