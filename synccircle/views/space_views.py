# synccircle/views/space_views.py

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required
from synccircle.controllers.form_controller import FormController
from synccircle.utils.api_errors import error_response
from synccircle.utils.permission_manager import PermissionManager

space_bp = Blueprint('spaces', __name__)

@space_bp.route('/<int:space_id>/forms', methods=['GET'])
@jwt_required()
@PermissionManager.require_current_user
def get_space_forms(space_id, current_user):
    """Forms of a space, newest first (members only)"""
    forms, error = FormController.get_space_forms(space_id, current_user)
    if error:
        return error_response(error)
    return jsonify([form.to_dict() for form in forms]), 200
