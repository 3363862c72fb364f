# synccircle/__init__.py
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_caching import Cache
from werkzeug.exceptions import HTTPException
from synccircle.utils.logging_config import setup_logging
from functools import wraps
import logging
import os

# --- Configure logging ONCE at the module level ---
module_logger = setup_logging()

# Extensions are bound to an app instance later with init_app()
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
cache = Cache()

def cached_blocklist_check(expire=300):
    """Caching decorator for blocklist checks"""
    def decorator(f):
        @wraps(f)
        def decorated_function(jwt_header, jwt_payload):
            jti = jwt_payload.get("jti")
            if not jti:
                return False

            cache_key = f"blocklist:{jti}"
            cached_result = cache.get(cache_key)
            if cached_result is not None:
                return cached_result

            result = f(jwt_header, jwt_payload)
            cache.set(cache_key, result, timeout=expire)
            return result
        return decorated_function
    return decorator

@jwt.token_in_blocklist_loader
@cached_blocklist_check(expire=300)
def check_if_token_revoked(jwt_header, jwt_payload: dict) -> bool:
    from synccircle.models.token_blocklist import TokenBlocklist

    jti = jwt_payload.get("jti")
    if not jti:
        return False
    return TokenBlocklist.query.filter_by(jti=jti).first() is not None

def _unauthorized(message):
    return jsonify({"error": message, "error_type": "unauthorized"}), 401

@jwt.unauthorized_loader
def missing_token_callback(reason):
    return _unauthorized(f"Missing or malformed credentials: {reason}")

@jwt.invalid_token_loader
def invalid_token_callback(reason):
    return _unauthorized(f"Invalid token: {reason}")

@jwt.expired_token_loader
def expired_token_callback(jwt_header, jwt_payload):
    return _unauthorized("Token has expired")

@jwt.revoked_token_loader
def revoked_token_callback(jwt_header, jwt_payload):
    return _unauthorized("Token has been revoked")

def register_error_handlers(app):
    """Render framework-level errors with the same JSON body as service errors."""
    error_types = {404: "not_found", 405: "validation_error"}

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        error_type = error_types.get(e.code, "internal_error" if e.code >= 500 else "validation_error")
        return jsonify({"error": e.description, "error_type": error_type}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_exception(e):
        logging.getLogger("synccircle").error(f"Unhandled exception: {str(e)}", exc_info=True)
        return jsonify({"error": "Internal server error", "error_type": "internal_error"}), 500


def create_app(config_class=None):
    """Create and configure the Flask application instance."""
    app_init_logger = logging.getLogger("synccircle")

    app = Flask(__name__)

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["OPTIONS", "GET", "POST", "PUT", "DELETE"],
            "allow_headers": ["Content-Type", "Authorization", "X-Requested-With", "Origin"],
            "supports_credentials": True,
        }
    })

    try:
        if config_class is None:
            from config import Config
            config_class = Config()
        app.config.from_object(config_class)

        db.init_app(app)
        migrate.init_app(app, db)
        jwt.init_app(app)
        cache.init_app(app)

        register_error_handlers(app)

        with app.app_context():
            # Import models so they are registered on the metadata
            from synccircle.models import ( # noqa F401
                User, Space, SpaceMember, Form, Response, TokenBlocklist
            )

            from synccircle.views import register_blueprints
            register_blueprints(app)

            from management.commands import register_commands
            register_commands(app)

            # Only the main reloader process touches the schema
            is_main_process = os.environ.get('WERKZEUG_RUN_MAIN') == 'true'
            if is_main_process:
                db.create_all()
                app_init_logger.info("Database tables created (or already exist)")
                app_init_logger.info("Application initialized successfully (Main Process)")

        return app

    except Exception as e:
        module_logger.error(f"Application initialization failed critically: {str(e)}", exc_info=True)
        raise
