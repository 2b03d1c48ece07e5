"""
Audit logging for changes to the reading log.
Every mutation and export is written as a JSON line with timestamp, action and resource.
"""
import os
import logging
import structlog
from datetime import datetime, timezone
from flask import has_request_context, request, current_app


def configure_audit_logging(log_file=None):
    """
    Configure structlog for JSON output and attach a file handler to the audit logger.
    Without ``log_file`` events are still structured but not written anywhere.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    audit_logger = logging.getLogger('audit')
    audit_logger.setLevel(logging.INFO)

    # One file per process; a new app or CLI run replaces the previous target
    for handler in list(audit_logger.handlers):
        if isinstance(handler, logging.FileHandler):
            audit_logger.removeHandler(handler)
            handler.close()

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(message)s'))
        audit_logger.addHandler(file_handler)

    return structlog.get_logger('audit')


def setup_audit_logging(app):
    """Configure audit logging for the app from its AUDIT_LOG_FILE setting."""
    app.config['AUDIT_LOGGER'] = configure_audit_logging(app.config.get('AUDIT_LOG_FILE'))


def get_audit_logger():
    """Get the audit logger instance."""
    if has_request_context():
        return current_app.config.get('AUDIT_LOGGER', structlog.get_logger('audit'))
    return structlog.get_logger('audit')


def audit_log(action: str, resource_type: str, resource_id: str = None,
              details: dict = None):
    """
    Log an audit event.

    Args:
        action: The action performed (CREATE, UPDATE, DELETE, IMPORT, EXPORT)
        resource_type: Type of resource touched (reading, readings_csv, ...)
        resource_id: ID of the specific resource (optional)
        details: Additional details about the action (optional)
    """
    logger = get_audit_logger()

    if has_request_context():
        source = 'web'
        client_ip = request.remote_addr or 'unknown'
    else:
        source = 'cli'
        client_ip = 'local'

    log_entry = {
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'action': action,
        'resource_type': resource_type,
        'resource_id': resource_id,
        'source': source,
        'client_ip': client_ip,
        'details': details or {}
    }

    logger.info("audit_event", **log_entry)
