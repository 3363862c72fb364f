# synccircle/views/health_views.py

from flask import Blueprint, jsonify
from synccircle.controllers.health_controller import HealthController
import logging

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__)

@health_bp.route('/ping', methods=['GET'])
def ping():
    """Simple ping endpoint to check if the server is responsive"""
    return jsonify(HealthController.ping()), 200

@health_bp.route('/status', methods=['GET'])
def health_status():
    """Detailed health status; 503 when the database is unreachable"""
    result = HealthController.get_health_status()
    status_code = 503 if result.get('health_status') == 'unhealthy' else 200
    if status_code != 200:
        logger.warning(f"Health check reports {result.get('health_status')}")
    return jsonify(result), status_code
