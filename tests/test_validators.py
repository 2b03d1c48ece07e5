"""
Tests for reading input validation.
"""
from bplog.utils.validators import validate_reading


def _payload(**overrides):
    data = {'systolic': 120, 'diastolic': 80, 'heartRate': 70, 'date': '2024-06-01', 'time': 'AM'}
    data.update(overrides)
    return data


def test_valid_reading():
    assert validate_reading(_payload()) == []


def test_string_numbers_are_accepted():
    assert validate_reading(_payload(systolic='120', diastolic='80', heartRate='')) == []


def test_missing_required_values():
    errors = validate_reading({})
    assert 'Systolic is required' in errors
    assert 'Diastolic is required' in errors
    assert 'Date is required' in errors
    assert 'Time is required' in errors


def test_non_numeric_and_non_positive():
    errors = validate_reading(_payload(systolic='abc', diastolic=0, heartRate=-3))
    assert errors == [
        'Systolic must be an integer',
        'Diastolic must be greater than 0',
        'Heart rate must be greater than 0',
    ]


def test_fractional_and_boolean_values_rejected():
    errors = validate_reading(_payload(systolic=120.5, diastolic=True))
    assert errors == ['Systolic must be an integer', 'Diastolic must be an integer']


def test_bad_date_and_slot():
    errors = validate_reading(_payload(date='06/01/2024', time='noon'))
    assert errors == ['Date must be a valid YYYY-MM-DD date', 'Time must be AM or PM']
