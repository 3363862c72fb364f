# synccircle/views/response_views.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from synccircle.controllers.response_controller import ResponseController
from synccircle.utils.api_errors import error_response
from synccircle.utils.permission_manager import PermissionManager
response_bp = Blueprint('responses', __name__)

@response_bp.route('', methods=['POST'])
@jwt_required()
@PermissionManager.require_current_user
def save_response(current_user):
    """
    Save a draft or submit a response.

    Body: formId, answers (question id -> value), isDraft. A draft replaces
    the caller's current draft for the form when there is one; a final
    submission always creates a new response.
    """
    response, error = ResponseController.save_response(current_user, request.get_json(silent=True))
    if error:
        return error_response(error)
    return jsonify(response.to_dict()), 200

@response_bp.route('/<int:response_id>', methods=['PUT'])
@jwt_required()
@PermissionManager.require_current_user
def update_response(response_id, current_user):
    """Edit one of the caller's own responses in place. Body: answers, isDraft."""
    response, error = ResponseController.update_response(response_id, current_user, request.get_json(silent=True))
    if error:
        return error_response(error)
    return jsonify(response.to_dict()), 200

@response_bp.route('/<int:response_id>', methods=['GET'])
@jwt_required()
@PermissionManager.require_current_user
def get_response(response_id, current_user):
    response, error = ResponseController.get_response(response_id, current_user)
    if error:
        return error_response(error)
    return jsonify(response.to_dict()), 200
