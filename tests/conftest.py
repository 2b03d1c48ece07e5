import pytest
from datetime import date

from bplog import create_app
from bplog.models.reading import Reading, TimeSlot


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / 'bp-data.csv'


@pytest.fixture
def app(tmp_path, data_file):
    app = create_app({
        'TESTING': True,
        'DATA_FILE': str(data_file),
        'AUDIT_LOG_FILE': str(tmp_path / 'logs' / 'audit.log'),
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_reading():
    """Factory for readings with sensible defaults."""
    counter = {'id': 1000}

    def _make(reading_date='2024-06-01', time='AM', systolic=120, diastolic=80,
              heart_rate=None, id=None):
        if isinstance(reading_date, str):
            reading_date = date.fromisoformat(reading_date)
        if id is None:
            counter['id'] += 1
            id = counter['id']
        return Reading(
            id=id,
            date=reading_date,
            time=TimeSlot(time),
            systolic=systolic,
            diastolic=diastolic,
            heart_rate=heart_rate,
        )

    return _make
