# synccircle/views/auth_views.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt
from synccircle.controllers.auth_controller import AuthController
from synccircle.utils.api_errors import ApiError, error_response
from synccircle.utils.permission_manager import PermissionManager
import logging

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange username/password for a bearer token"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response(ApiError.validation("No data provided"))

    username = data.get('username')
    password = data.get('password')
    if not username or not password:
        return error_response(ApiError.validation("Missing username or password"))

    access_token = AuthController.login(username, password)
    if not access_token:
        return error_response(ApiError.unauthorized("Invalid credentials"))
    return jsonify({"access_token": access_token}), 200

@auth_bp.route('/logout', methods=['POST'])
@jwt_required()
@PermissionManager.require_current_user
def logout(current_user):
    """Revoke the token used for this request"""
    success, error = AuthController.logout(get_jwt()["jti"], current_user.username)
    if not success:
        return error_response(ApiError.internal(error))
    return jsonify({"message": "Successfully logged out"}), 200

@auth_bp.route('/me', methods=['GET'])
@jwt_required()
@PermissionManager.require_current_user
def me(current_user):
    return jsonify(current_user.to_dict()), 200
