import os
import logging
from flask import Flask, request, jsonify
from flask_cors import CORS
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def create_app(test_config=None):
    app = Flask(__name__)

    # Flat-file storage; the whole collection lives in one CSV file
    app.config['DATA_FILE'] = os.getenv('BP_DATA_FILE', 'bp-data.csv')
    app.config['AUDIT_LOG_FILE'] = os.getenv('AUDIT_LOG_FILE', 'logs/audit.log')
    app.config['ALLOWED_ORIGINS'] = os.getenv('ALLOWED_ORIGINS', '')

    try:
        app.config['HISTORY_LIMIT'] = int(os.getenv('HISTORY_LIMIT', 50))
    except ValueError:
        raise RuntimeError('HISTORY_LIMIT must be an integer')

    # Request size limit (1 MB)
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024

    if test_config:
        app.config.update(test_config)

    if app.config['HISTORY_LIMIT'] < 1:
        raise RuntimeError('HISTORY_LIMIT must be at least 1')

    # CORS: a separately served page may call the JSON endpoints
    allowed_origins = app.config['ALLOWED_ORIGINS']
    if allowed_origins:
        origins_list = [o.strip() for o in allowed_origins.split(',') if o.strip()]
    else:
        # Development: allow localhost variants
        origins_list = [
            'http://localhost:*',
            'http://127.0.0.1:*',
        ]

    CORS(app, resources={r"/*": {"origins": origins_list}})

    # Security headers
    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Referrer-Policy'] = 'no-referrer'
        return response

    # Validate Content-Type on POST/PUT requests
    @app.before_request
    def validate_content_type():
        if request.method in ('POST', 'PUT') and request.path != '/health':
            content_type = request.content_type or ''
            if 'application/json' not in content_type:
                return jsonify({'error': 'Content-Type must be application/json'}), 415

    # Setup audit logging
    from bplog.utils.audit_logger import setup_audit_logging
    setup_audit_logging(app)

    # Register blueprints
    from bplog.routes import readings_bp
    app.register_blueprint(readings_bp)

    # Health check endpoint
    @app.route('/health')
    def health():
        return {'status': 'healthy'}, 200

    logger.info(f"Reading log at {app.config['DATA_FILE']}")

    return app
