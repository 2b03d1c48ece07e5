"""
JSON routes behind the browser surface.
"""
from datetime import date, datetime
from flask import Blueprint, current_app

from bplog.utils.store import FileStore

readings_bp = Blueprint('readings', __name__)


def get_store():
    """Store for the configured data file. Each request loads and saves the whole file."""
    return FileStore(current_app.config['DATA_FILE'])


def today():
    return date.today()


def now():
    return datetime.now()


# Import submodules to register routes on readings_bp
from . import readings  # noqa: E402, F401
from . import stats     # noqa: E402, F401
from . import exports   # noqa: E402, F401
