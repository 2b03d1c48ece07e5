"""
Input validation for readings entered through the browser or the command line.
"""
from bplog.models.reading import TimeSlot
from bplog.utils.dates import parse_iso_date


def _positive_int_error(value, label):
    if isinstance(value, bool):
        return f'{label} must be an integer'
    try:
        number = int(value)
    except (ValueError, TypeError):
        return f'{label} must be an integer'
    if isinstance(value, float) and value != number:
        return f'{label} must be an integer'
    if number <= 0:
        return f'{label} must be greater than 0'
    return None


def validate_reading(data: dict) -> list:
    """Validate blood pressure reading input. Returns list of error strings (empty = valid)."""
    errors = []

    for key, label in (('systolic', 'Systolic'), ('diastolic', 'Diastolic')):
        value = data.get(key)
        if value is None or value == '':
            errors.append(f'{label} is required')
            continue
        error = _positive_int_error(value, label)
        if error:
            errors.append(error)

    heart_rate = data.get('heartRate')
    if heart_rate is not None and heart_rate != '':
        error = _positive_int_error(heart_rate, 'Heart rate')
        if error:
            errors.append(error)

    reading_date = data.get('date')
    if not reading_date:
        errors.append('Date is required')
    elif parse_iso_date(reading_date) is None:
        errors.append('Date must be a valid YYYY-MM-DD date')

    time_slot = data.get('time')
    if not time_slot:
        errors.append('Time is required')
    else:
        try:
            TimeSlot.parse(time_slot)
        except ValueError:
            errors.append('Time must be AM or PM')

    return errors
