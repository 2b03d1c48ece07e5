"""
Blood Pressure Reading model.
"""
import time
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class TimeSlot(str, Enum):
    """Morning or evening measurement slot. Not a clock time."""
    AM = 'AM'
    PM = 'PM'

    @classmethod
    def parse(cls, value):
        """Map a raw token to a slot, ignoring case. Raises ValueError on anything else."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


def new_reading_id() -> int:
    """Identity derived from the creation timestamp, in milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Reading:
    """
    One blood pressure measurement.
    Readings are immutable: an edit is a delete followed by a fresh insert.
    """
    id: int
    date: date
    time: TimeSlot
    systolic: int
    diastolic: int
    heart_rate: Optional[int] = None

    @classmethod
    def create(cls, reading_date, time_slot, systolic, diastolic, heart_rate=None):
        return cls(
            id=new_reading_id(),
            date=reading_date,
            time=TimeSlot.parse(time_slot),
            systolic=int(systolic),
            diastolic=int(diastolic),
            heart_rate=int(heart_rate) if heart_rate is not None else None,
        )

    @property
    def slot(self):
        return (self.date, self.time)

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'time': self.time.value,
            'systolic': self.systolic,
            'diastolic': self.diastolic,
            'heartRate': self.heart_rate,
        }

    def __repr__(self):
        return f'<Reading {self.id}: {self.systolic}/{self.diastolic} {self.date} {self.time.value}>'
