# synccircle/views/__init__.py

from .auth_views import auth_bp
from .form_views import form_bp
from .response_views import response_bp
from .space_views import space_bp
from .health_views import health_bp

from flask import jsonify

def ping_standalone():
    """Registered as /api/ping"""
    return jsonify({"status": "pong", "message": "Server is running"}), 200

def register_blueprints(app):
    """Register all blueprints with the Flask application"""
    blueprints = [
        (auth_bp, '/api/auth'),
        (form_bp, '/api/forms'),
        (response_bp, '/api/responses'),
        (space_bp, '/api/spaces'),
        (health_bp, '/api/health'),
    ]

    for blueprint, url_prefix in blueprints:
        app.register_blueprint(blueprint, url_prefix=url_prefix)

    app.route('/api/ping', methods=['GET'])(ping_standalone)
