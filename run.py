"""
Flask development server entry point for the browser surface.
"""
import os
from bplog import create_app

app = create_app()

if __name__ == '__main__':
    host = os.getenv('FLASK_HOST', '127.0.0.1')
    port = int(os.getenv('FLASK_PORT', 3001))
    debug = os.getenv('FLASK_ENV') != 'production'

    app.run(
        host=host,
        port=port,
        debug=debug,
    )
