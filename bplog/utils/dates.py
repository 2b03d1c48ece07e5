"""
Calendar helpers shared by the browser surface and the command line.
"""
import re
from datetime import date, datetime, timedelta
from typing import Optional

ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')
MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def parse_iso_date(value) -> Optional[date]:
    """Parse a strict YYYY-MM-DD string. Returns None when it is not a real date."""
    if value is None or not ISO_DATE_RE.match(str(value).strip()):
        return None
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except ValueError:
        return None


def is_day_offset(token: str) -> bool:
    """True for a signed day offset such as -1, -14 or +2."""
    if not token or token[0] not in '+-':
        return False
    try:
        int(token)
    except ValueError:
        return False
    return True


def resolve_date_arg(arg, today: date) -> date:
    """
    Turn a command-line date argument into a calendar date.

    Accepts nothing (today), a signed day offset relative to today, or an ISO
    date. Anything else falls back to today.
    """
    if not arg:
        return today
    if arg[0] in '+-':
        try:
            return today + timedelta(days=int(arg))
        except ValueError:
            return today
    return parse_iso_date(arg) or today


def shift_date(current: date, days: int, today: date) -> date:
    """Step the selected date, refusing to move past today."""
    shifted = current + timedelta(days=days)
    if shifted > today:
        return current
    return shifted


def short_label(value: date) -> str:
    return f'{MONTHS[value.month - 1]} {value.day}'


def date_label(selected: date, today: date) -> str:
    diff = (today - selected).days
    if diff == 0:
        return 'Today'
    if diff == 1:
        return 'Yesterday'
    if diff < 7:
        return WEEKDAYS[selected.weekday()]
    return short_label(selected)
