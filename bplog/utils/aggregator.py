"""
Summary statistics over a collection of readings.

Everything here is a pure read. Day windows are measured with ``days_ago``:
the whole number of days between ``now`` and midnight of the reading's date,
rounded down. Means are rounded with Python's ``round`` (half to even), so
78.5 becomes 78 and 62.5 becomes 62.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from bplog.models.reading import Reading
from bplog.utils.classifier import Category, classify
from bplog.utils.dates import short_label

TREND_THRESHOLD = 5
SERIES_DAYS = 14


class TrendDirection(str, Enum):
    IMPROVING = 'Improving'
    STABLE = 'Stable'
    RISING = 'Rising'


@dataclass(frozen=True)
class Averages:
    systolic: Optional[int] = None
    diastolic: Optional[int] = None
    heart_rate: Optional[int] = None

    def to_dict(self):
        return {
            'systolic': self.systolic,
            'diastolic': self.diastolic,
            'heartRate': self.heart_rate,
        }


@dataclass(frozen=True)
class ValueRange:
    systolic_min: Optional[int] = None
    systolic_max: Optional[int] = None
    diastolic_min: Optional[int] = None
    diastolic_max: Optional[int] = None

    def to_dict(self):
        return {
            'systolic': {'min': self.systolic_min, 'max': self.systolic_max},
            'diastolic': {'min': self.diastolic_min, 'max': self.diastolic_max},
        }


@dataclass(frozen=True)
class SeriesPoint:
    date: date
    systolic: Optional[int] = None
    diastolic: Optional[int] = None

    @property
    def is_gap(self) -> bool:
        return self.systolic is None


@dataclass(frozen=True)
class Stats:
    total: int
    last_7_count: int
    last_7_days: int
    average: Averages
    category: Optional[Category]
    last_7_average: Averages
    trend: Optional[int]
    trend_direction: Optional[TrendDirection]
    range: ValueRange
    series: List[SeriesPoint] = field(default_factory=list)

    def to_dict(self):
        return {
            'totalReadings': self.total,
            'last7': self.last_7_count,
            'last7Days': self.last_7_days,
            'average': self.average.to_dict(),
            'category': self.category.value if self.category else None,
            'categoryLabel': self.category.label if self.category else None,
            'last7Average': self.last_7_average.to_dict(),
            'trend': self.trend,
            'trendDirection': self.trend_direction.value if self.trend_direction else None,
            'range': self.range.to_dict(),
            'series': series_to_chart(self.series),
        }


def _mean(values) -> Optional[int]:
    values = list(values)
    if not values:
        return None
    return round(sum(values) / len(values))


def _as_datetime(now) -> datetime:
    if isinstance(now, datetime):
        return now.replace(tzinfo=None)
    return datetime.combine(now, datetime.min.time())


def days_ago(reading: Reading, now) -> int:
    midnight = datetime.combine(reading.date, datetime.min.time())
    return (_as_datetime(now) - midnight).days


def in_window(reading: Reading, now, days: int, after: Optional[int] = None) -> bool:
    """True when ``after < days_ago(reading) <= days``; no lower bound without ``after``."""
    age = days_ago(reading, now)
    if after is not None and age <= after:
        return False
    return age <= days


def window(readings: Iterable[Reading], now, days: int, after: Optional[int] = None) -> List[Reading]:
    return [r for r in readings if in_window(r, now, days, after)]


def averages(readings: Iterable[Reading]) -> Averages:
    readings = list(readings)
    return Averages(
        systolic=_mean(r.systolic for r in readings),
        diastolic=_mean(r.diastolic for r in readings),
        heart_rate=_mean(r.heart_rate for r in readings if r.heart_rate is not None),
    )


def trend(readings: Iterable[Reading], now) -> Optional[int]:
    """
    This week's average systolic minus the previous week's.
    None when either week has no readings; an empty week is never treated as zero.
    """
    readings = list(readings)
    recent = _mean(r.systolic for r in window(readings, now, 7))
    previous = _mean(r.systolic for r in window(readings, now, 14, after=7))
    if recent is None or previous is None:
        return None
    return recent - previous


def trend_direction(value: Optional[int]) -> Optional[TrendDirection]:
    if value is None:
        return None
    if value < -TREND_THRESHOLD:
        return TrendDirection.IMPROVING
    if value > TREND_THRESHOLD:
        return TrendDirection.RISING
    return TrendDirection.STABLE


def value_range(readings: Iterable[Reading]) -> ValueRange:
    readings = list(readings)
    if not readings:
        return ValueRange()
    systolic = [r.systolic for r in readings]
    diastolic = [r.diastolic for r in readings]
    return ValueRange(
        systolic_min=min(systolic),
        systolic_max=max(systolic),
        diastolic_min=min(diastolic),
        diastolic_max=max(diastolic),
    )


def unique_day_count(readings: Iterable[Reading]) -> int:
    return len({r.date for r in readings})


def daily_series(readings: Iterable[Reading], today: date, days: int = SERIES_DAYS) -> List[SeriesPoint]:
    """Per-day mean systolic/diastolic for the trailing days, oldest first. Empty days are gaps."""
    if isinstance(today, datetime):
        today = today.date()
    by_date = {}
    for reading in readings:
        by_date.setdefault(reading.date, []).append(reading)

    points = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        matches = by_date.get(day, [])
        points.append(SeriesPoint(
            date=day,
            systolic=_mean(r.systolic for r in matches),
            diastolic=_mean(r.diastolic for r in matches),
        ))
    return points


def series_to_chart(points: Iterable[SeriesPoint]) -> dict:
    points = list(points)
    return {
        'dates': [p.date.isoformat() for p in points],
        'labels': [short_label(p.date) for p in points],
        'systolic': [p.systolic for p in points],
        'diastolic': [p.diastolic for p in points],
    }


def summarize(readings: Iterable[Reading], now) -> Stats:
    readings = list(readings)
    last_7 = window(readings, now, 7)
    overall = averages(readings)
    category = None
    if overall.systolic is not None:
        category = classify(overall.systolic, overall.diastolic)
    change = trend(readings, now)

    return Stats(
        total=len(readings),
        last_7_count=len(last_7),
        last_7_days=unique_day_count(last_7),
        average=overall,
        category=category,
        last_7_average=averages(last_7),
        trend=change,
        trend_direction=trend_direction(change),
        range=value_range(readings),
        series=daily_series(readings, _as_datetime(now).date()),
    )
