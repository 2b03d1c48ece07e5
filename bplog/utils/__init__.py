from .audit_logger import audit_log, configure_audit_logging
from .classifier import Category, classify
from .slots import SlotOutcome, UpsertResult, upsert, remove
from .store import FileStore, parse, serialize
from .validators import validate_reading
