# routes/employees.py
from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from staff_directory.errors import ApiError, render_api_error, render_http_error
from staff_directory.routes.auth import admin_required, jwt_required
from staff_directory.services.employee_repository import EmployeeRepository
from staff_directory.validation import validate_create, validate_update

employees_bp = Blueprint("employees", __name__)

# Generic 500 bodies; the real error only goes to the log.
FAILURE_MESSAGES = {
    "employees.list_employees": "Error fetching employees",
    "employees.get_employee": "Error fetching employee",
    "employees.create_employee": "Error creating employee",
    "employees.update_employee": "Error updating employee",
    "employees.delete_employee": "Error deleting employee",
}


def _repository() -> EmployeeRepository:
    return current_app.extensions["employee_repository"]


@employees_bp.errorhandler(Exception)
def handle_error(err):
    if isinstance(err, ApiError):
        if err.status_code == 400:
            current_app.logger.warning("%s rejected: %s", request.endpoint, err.to_dict())
        return render_api_error(err)
    if isinstance(err, HTTPException):
        return render_http_error(err)

    current_app.logger.exception("Unexpected failure in %s", request.endpoint)
    message = FAILURE_MESSAGES.get(request.endpoint, "Internal server error")
    return jsonify({"message": message}), 500


# ---------------- Read ---------------- #
@employees_bp.route("/", methods=["GET"], strict_slashes=False)
@jwt_required
def list_employees(identity):
    employees = _repository().list()
    return jsonify([e.to_dict() for e in employees]), 200


@employees_bp.route("/<employee_id>", methods=["GET"])
@jwt_required
def get_employee(employee_id, identity):
    employee = _repository().get(employee_id)
    return jsonify(employee.to_dict()), 200


# ---------------- Write (admin only) ---------------- #
@employees_bp.route("/", methods=["POST"], strict_slashes=False)
@admin_required
def create_employee(identity):
    payload = validate_create(request.get_json(silent=True))
    employee = _repository().create(payload)
    current_app.logger.info("Employee %s created by %s", employee.id, identity.username or identity.subject)
    return jsonify(employee.to_dict()), 201


@employees_bp.route("/<employee_id>", methods=["PUT"])
@admin_required
def update_employee(employee_id, identity):
    payload = validate_update(request.get_json(silent=True))
    employee = _repository().update(employee_id, payload)
    current_app.logger.info("Employee %s updated by %s", employee.id, identity.username or identity.subject)
    return jsonify(employee.to_dict()), 200


@employees_bp.route("/<employee_id>", methods=["DELETE"])
@admin_required
def delete_employee(employee_id, identity):
    _repository().delete(employee_id)
    current_app.logger.info("Employee %s deleted by %s", employee_id, identity.username or identity.subject)
    return jsonify({"message": "Employee deleted successfully"}), 200
