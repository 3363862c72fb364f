# synccircle/views/form_views.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from synccircle.controllers.form_controller import FormController
from synccircle.controllers.response_controller import ResponseController
from synccircle.utils.api_errors import ApiError, error_response
from synccircle.utils.permission_manager import PermissionManager
form_bp = Blueprint('forms', __name__)

@form_bp.route('', methods=['POST'])
@jwt_required()
@PermissionManager.require_current_user
def create_form(current_user):
    """
    Create a form in a space the caller administers.

    Body: title, description (optional), spaceId, questions, frequency,
    sendTime (HH:MM) and isActive (optional, default true).
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return error_response(ApiError.validation("No data provided"))

    form, error = FormController.create_form(current_user, data)
    if error:
        return error_response(error)
    return jsonify(form.to_dict()), 201

@form_bp.route('/<int:form_id>', methods=['GET'])
@jwt_required()
@PermissionManager.require_current_user
def get_form(form_id, current_user):
    form, error = FormController.get_form(form_id, current_user)
    if error:
        return error_response(error)
    return jsonify(form.to_dict()), 200

@form_bp.route('/<int:form_id>', methods=['PUT'])
@jwt_required()
@PermissionManager.require_current_user
def update_form(form_id, current_user):
    """Partial update; only the space's admins may edit a form"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return error_response(ApiError.validation("No data provided"))

    form, error = FormController.update_form(form_id, current_user, data)
    if error:
        return error_response(error)
    return jsonify(form.to_dict()), 200

@form_bp.route('/<int:form_id>/my-response', methods=['GET'])
@jwt_required()
@PermissionManager.require_current_user
def get_my_response(form_id, current_user):
    """The caller's in-progress draft for this form, or null"""
    draft, error = ResponseController.get_my_draft(form_id, current_user)
    if error:
        return error_response(error)
    return jsonify(draft.to_dict() if draft else None), 200

@form_bp.route('/<int:form_id>/pending-submission', methods=['GET'])
@jwt_required()
@PermissionManager.require_current_user
def get_pending_submission(form_id, current_user):
    pending, error = ResponseController.has_pending_submission(form_id, current_user)
    if error:
        return error_response(error)
    return jsonify({"hasPendingSubmission": pending}), 200

@form_bp.route('/<int:form_id>/responses', methods=['GET'])
@jwt_required()
@PermissionManager.require_current_user
def get_form_responses(form_id, current_user):
    """Submitted responses with their authors, plus aggregate stats (admins only)"""
    result, error = ResponseController.get_form_responses(form_id, current_user)
    if error:
        return error_response(error)
    return jsonify({
        "responses": [response.to_dict(include_user=True) for response in result['responses']],
        "stats": result['stats'],
    }), 200
