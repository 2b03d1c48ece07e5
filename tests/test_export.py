"""
Tests for CSV and PDF export helpers.
"""
from datetime import date, datetime

from bplog.utils.aggregator import summarize
from bplog.utils.export import export_filename, generate_readings_csv, generate_readings_pdf
from bplog.utils.store import parse


def test_export_filename():
    assert export_filename(date(2024, 6, 1)) == 'bp-data-2024-06-01.csv'
    assert export_filename(date(2024, 6, 1), 'pdf') == 'bp-data-2024-06-01.pdf'


def test_csv_export_round_trips(make_reading):
    readings = [make_reading('2024-06-02', 'PM', 125, 82), make_reading('2024-06-02', 'AM', 118, 76, 60)]
    output = generate_readings_csv(readings)
    assert parse(output.getvalue()) == readings


def test_pdf_report(make_reading):
    readings = [make_reading('2024-06-15', 'AM', 118, 76, 60), make_reading('2024-06-05', 'AM', 130, 85)]
    stats = summarize(readings, datetime(2024, 6, 15, 9, 0))
    output = generate_readings_pdf(readings, stats)
    assert output.getvalue().startswith(b'%PDF')


def test_pdf_report_empty():
    output = generate_readings_pdf([], summarize([], datetime(2024, 6, 15)))
    assert output.getvalue().startswith(b'%PDF')
