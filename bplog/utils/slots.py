"""
Slot resolution: at most one reading per (date, AM/PM) pair.

Every function here returns a new list and leaves its input untouched, so a
declined or failed operation can never leave a half-modified collection behind.
"""
from dataclasses import dataclass, replace as dc_replace
from enum import Enum
from typing import Iterable, List, Optional

from bplog.models.reading import Reading, TimeSlot


class SlotOutcome(str, Enum):
    INSERTED = 'inserted'
    REPLACED = 'replaced'
    CONFLICT = 'conflict'


@dataclass(frozen=True)
class UpsertResult:
    """
    Outcome of an upsert.

    For CONFLICT, ``readings`` is the unchanged collection and ``existing`` is the
    reading occupying the slot; the caller decides how to ask for confirmation
    and retries with ``replace=True``. For REPLACED, ``existing`` is the reading
    that was removed.
    """
    readings: List[Reading]
    outcome: SlotOutcome
    existing: Optional[Reading] = None

    @property
    def conflict(self) -> bool:
        return self.outcome is SlotOutcome.CONFLICT


def sort_readings(readings: Iterable[Reading]) -> List[Reading]:
    """Newest date first; PM before AM on the same date."""
    return sorted(readings, key=lambda r: (r.date, r.time is TimeSlot.PM), reverse=True)


def find_slot(readings: Iterable[Reading], reading_date, time_slot) -> Optional[Reading]:
    time_slot = TimeSlot.parse(time_slot)
    for reading in readings:
        if reading.date == reading_date and reading.time is time_slot:
            return reading
    return None


def upsert(readings: Iterable[Reading], reading: Reading, replace: bool = False) -> UpsertResult:
    """Insert a reading, or report the conflict when its slot is already taken."""
    readings = list(readings)
    existing = find_slot(readings, reading.date, reading.time)

    if existing is not None and not replace:
        return UpsertResult(readings=readings, outcome=SlotOutcome.CONFLICT, existing=existing)

    if existing is not None:
        readings = [r for r in readings if r is not existing]

    # Ids must stay unique even if two readings land in the same millisecond
    taken = {r.id for r in readings}
    if reading.id in taken:
        reading = dc_replace(reading, id=max(taken) + 1)

    outcome = SlotOutcome.REPLACED if existing is not None else SlotOutcome.INSERTED
    return UpsertResult(readings=sort_readings(readings + [reading]), outcome=outcome, existing=existing)


def remove(readings: Iterable[Reading], reading_id: int) -> List[Reading]:
    """Remove the first reading with this id. A missing id is a no-op."""
    readings = list(readings)
    for index, reading in enumerate(readings):
        if reading.id == reading_id:
            return readings[:index] + readings[index + 1:]
    return readings


def dedupe(readings: Iterable[Reading]) -> List[Reading]:
    """Sort a raw collection and keep the first reading seen for each slot."""
    result = []
    for reading in readings:
        result = upsert(result, reading).readings
    return result
