"""CSV reader for the food catalog."""

import csv
import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from meal_scorer.domain.records import NUTRIENT_FIELDS, NutrientRecord
from meal_scorer.services.catalog import CatalogReader

# name followed by the eight nutrients in NUTRIENT_FIELDS order
_MIN_FIELDS = 1 + len(NUTRIENT_FIELDS)

_logger = logging.getLogger(__name__)


@dataclass
class CsvCatalogReader(CatalogReader):
    """Reads `name,kcal,protein,fat,carbs,sugar,fiber,satfat,sodium` rows."""

    path: Path

    def read_records(self) -> list[NutrientRecord]:
        """Load every valid row of the file, skipping the header."""
        with Path(self.path).open(
            newline="", encoding="utf-8", errors="replace"
        ) as handle:
            rows = csv.reader(handle)
            next(rows, None)
            records, skipped = parse_rows(rows)
        _logger.info(
            "Loaded %s food items from %s (skipped %s rows)",
            len(records),
            self.path,
            skipped,
        )
        return records


def parse_rows(rows: Iterable[Sequence[str]]) -> tuple[list[NutrientRecord], int]:
    """Convert raw rows to records, returning them with the skipped count."""
    records: list[NutrientRecord] = []
    skipped = 0
    for row in rows:
        if not row or all(not cell.strip() for cell in row):
            continue
        name = row[0].strip()
        if len(row) < _MIN_FIELDS or not name:
            skipped += 1
            continue
        raw_values = row[1:_MIN_FIELDS]
        values = {
            field_name: to_nutrient(raw)
            for field_name, raw in zip(NUTRIENT_FIELDS, raw_values, strict=True)
        }
        records.append(NutrientRecord(name=name, **values))
    return records, skipped


def to_nutrient(raw: str) -> float:
    """Parse a nutrient value, using 0 for blank, invalid or negative input."""
    try:
        value = float(raw.strip())
    except ValueError:
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value
