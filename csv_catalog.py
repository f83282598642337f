"""Shared CSV reading for the catalog loaders.

Every catalog source is a CSV file with a header row.  A source that cannot be
read yields no records plus a diagnostic; a malformed field falls back to the
column default and is reported, but the row is kept.
"""
from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CatalogDiagnostic:
    source: str
    message: str

    def __str__(self) -> str:
        return f"[{self.source}] {self.message}"


@dataclass(frozen=True)
class CatalogSection(Generic[T]):
    records: Tuple[T, ...]
    diagnostics: Tuple[CatalogDiagnostic, ...] = ()


class CatalogSourceError(Exception):
    """Raised when a whole catalog source is unreadable."""


def read_csv_rows(path: Path) -> List[Tuple[int, Dict[str, str]]]:
    """Return ``(line, row)`` pairs for every non-blank data row.

    ``line`` is the physical line number the row ends on, so diagnostics stay
    accurate when blank rows are skipped.  A leading UTF-8 BOM is ignored.
    """
    if not path.exists():
        raise CatalogSourceError(f"{path.name} not found")
    try:
        with path.open(newline="", encoding="utf-8-sig") as handle:
            reader = csv.DictReader(handle)
            if not reader.fieldnames:
                raise CatalogSourceError(f"{path.name} has no header row")
            return [
                (reader.line_num, row)
                for row in reader
                if any((value or "").strip() for value in row.values() if isinstance(value, str))
            ]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise CatalogSourceError(f"{path.name} unreadable: {exc}") from exc


class RowReader:
    """Typed access to one CSV row, recording a diagnostic for every fallback."""

    def __init__(self, source: str, line: int, row: Dict[str, str], diagnostics: List[CatalogDiagnostic]) -> None:
        self.source = source
        self.line = line
        self.row = row
        self.diagnostics = diagnostics

    def _raw(self, column: str) -> str:
        value = self.row.get(column)
        return value.strip() if isinstance(value, str) else ""

    def _fallback(self, column: str, raw: str, default: object) -> None:
        reason = "missing" if not raw else f"malformed value {raw!r}"
        self.diagnostics.append(
            CatalogDiagnostic(self.source, f"line {self.line}: {column} {reason}, using {default!r}")
        )

    def text(self, column: str, default: str = "") -> str:
        return self._raw(column) or default

    def number(
        self,
        column: str,
        default: float,
        *,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
    ) -> float:
        raw = self._raw(column)
        try:
            value = float(raw)
        except ValueError:
            self._fallback(column, raw, default)
            return default
        if not math.isfinite(value):
            self._fallback(column, raw, default)
            return default
        if minimum is not None:
            value = max(minimum, value)
        if maximum is not None:
            value = min(maximum, value)
        return value

    def integer(self, column: str, default: int, *, minimum: Optional[int] = None) -> int:
        raw = self._raw(column)
        try:
            value = float(raw)
        except ValueError:
            self._fallback(column, raw, default)
            return default
        if not math.isfinite(value) or not value.is_integer():
            self._fallback(column, raw, default)
            return default
        result = int(value)
        if minimum is not None:
            result = max(minimum, result)
        return result


def load_csv_section(
    source: str,
    path: Path,
    id_column: str,
    parse_row: Callable[[str, RowReader], T],
) -> CatalogSection[T]:
    """Read ``path`` and build one record per row via ``parse_row(key, reader)``."""
    try:
        rows = read_csv_rows(path)
    except CatalogSourceError as exc:
        return CatalogSection((), (CatalogDiagnostic(source, str(exc)),))

    diagnostics: List[CatalogDiagnostic] = []
    records: Dict[str, T] = {}
    for line, row in rows:
        reader = RowReader(source, line, row, diagnostics)
        key = reader.text(id_column)
        if not key:
            diagnostics.append(CatalogDiagnostic(source, f"line {line}: blank {id_column}, row skipped"))
            continue
        if key in records:
            diagnostics.append(CatalogDiagnostic(source, f"line {line}: duplicate {id_column} {key!r}, row skipped"))
            continue
        records[key] = parse_row(key, reader)

    return CatalogSection(tuple(records.values()), tuple(diagnostics))
