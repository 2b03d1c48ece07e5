"""
Flat-file persistence for readings.

The text format is one header line followed by one comma-separated row per
reading, in collection order:

    id,date,time,systolic,diastolic,heartRate

A missing heart rate is written as an empty field.
"""
import csv
import io
import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional

from bplog.models.reading import Reading, TimeSlot
from bplog.utils.dates import parse_iso_date

logger = logging.getLogger(__name__)

HEADERS = ['id', 'date', 'time', 'systolic', 'diastolic', 'heartRate']

MIN_FIELDS = 5


def _parse_int(value) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (ValueError, TypeError):
        return None


def parse(text: str) -> List[Reading]:
    """
    Parse persisted text into readings.

    Short rows (fewer than five fields) are skipped. A missing or non-numeric id
    is replaced by the current time in milliseconds plus the row offset. Rows
    with an unusable date, slot, systolic or diastolic are dropped with a
    warning; a bad heart rate just becomes None. Parsing never fails as a whole.
    """
    if not text or not text.strip():
        return []

    lines = text.strip().splitlines()
    base_id = int(time.time() * 1000)
    readings = []

    for offset, line in enumerate(lines[1:], start=1):
        # One reader per line so a bad row cannot take the rest of the file with it
        try:
            row = next(csv.reader([line]), [])
        except csv.Error as e:
            logger.warning(f"Dropping row {offset}: {e}")
            continue

        if len(row) < MIN_FIELDS:
            continue

        reading_id = _parse_int(row[0])
        if reading_id is None:
            reading_id = base_id + offset

        reading_date = parse_iso_date(row[1])
        systolic = _parse_int(row[3])
        diastolic = _parse_int(row[4])
        heart_rate = _parse_int(row[5]) if len(row) > 5 else None
        if heart_rate is not None and heart_rate <= 0:
            heart_rate = None

        try:
            time_slot = TimeSlot.parse(row[2])
        except ValueError:
            time_slot = None

        if reading_date is None or time_slot is None:
            logger.warning(f"Dropping row {offset}: invalid date or time slot {row[1]!r}/{row[2]!r}")
            continue
        if systolic is None or diastolic is None or systolic <= 0 or diastolic <= 0:
            logger.warning(f"Dropping row {offset}: invalid blood pressure {row[3]!r}/{row[4]!r}")
            continue

        readings.append(Reading(
            id=reading_id,
            date=reading_date,
            time=time_slot,
            systolic=systolic,
            diastolic=diastolic,
            heart_rate=heart_rate,
        ))

    return readings


def serialize(readings: Iterable[Reading]) -> str:
    """Render readings in their current order, header first."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(HEADERS)

    for reading in readings:
        writer.writerow([
            reading.id,
            reading.date.isoformat(),
            reading.time.value,
            reading.systolic,
            reading.diastolic,
            reading.heart_rate if reading.heart_rate is not None else '',
        ])

    return output.getvalue()


class FileStore:
    """Loads and saves the whole collection from a single CSV file."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> List[Reading]:
        if not self.path.exists():
            return []
        return parse(self.path.read_text(encoding='utf-8'))

    def save(self, readings: Iterable[Reading]):
        readings = list(readings)
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(serialize(readings), encoding='utf-8')
        logger.info(f"Saved {len(readings)} reading(s) to {self.path}")

    def __repr__(self):
        return f'<FileStore {self.path}>'
