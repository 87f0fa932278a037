"""Bulk import of medicine records from a drug-database CSV export."""

import csv
import logging
from dataclasses import dataclass

from meditime.services.characteristic_extractor import extract

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0

    @property
    def total(self):
        return self.imported + self.skipped

    def to_dict(self):
        return {"imported": self.imported, "skipped": self.skipped, "total": self.total}


def import_medicines(store, rows):
    """
    Classify and store each row.

    Rows without a name, or whose name already exists, are skipped. A row
    that fails to classify or store is rolled back, skipped and counted; it
    never stops the batch.
    """
    result = ImportResult()

    for row in rows:
        try:
            attributes = extract(row)
            if not attributes.name or store.find_medicine_by_name(attributes.name):
                result.skipped += 1
                continue

            store.add_medicine(**attributes.to_model_kwargs())
            store.commit()
        except Exception as e:
            store.rollback()
            logger.warning("Skipping row (error): %s", e)
            result.skipped += 1
            continue

        result.imported += 1
        if result.imported % PROGRESS_EVERY == 0:
            logger.info("Import in progress... %d saved", result.imported)

    logger.info(
        "Import finished: %d imported, %d skipped, %d total",
        result.imported, result.skipped, result.total,
    )
    return result


def read_csv_rows(path):
    with open(path, newline="", encoding="utf-8-sig") as f:
        return list(csv.DictReader(f))
