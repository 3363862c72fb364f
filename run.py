# run.py
# Development server entry point. Use a WSGI server such as gunicorn in production.

from synccircle import create_app
import os

app = create_app()

if __name__ == '__main__':
    host = os.environ.get('FLASK_RUN_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_RUN_PORT', 5000))
    # FLASK_DEBUG=1 enables debug mode (and the reloader)
    debug_mode = os.environ.get('FLASK_DEBUG', '0') == '1'

    app.run(host=host, port=port, debug=debug_mode)
