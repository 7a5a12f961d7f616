# routes/employees.py
from flask import Blueprint, request, jsonify

from models import Employee
from routes.auth import jwt_required
from services.employee_service import EmployeeService

employees_bp = Blueprint("employees", __name__)


def employee_summary(emp: Employee) -> dict:
    return {
        "id": str(emp.id),
        "name": emp.name,
        "email": emp.email,
        "mobile": emp.mobile,
        "designation": emp.designation,
        "gender": emp.gender,
        "course": list(emp.courses or []),
        "image": emp.image,
        "createdAt": emp.created_at.isoformat() if emp.created_at else None,
    }


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@employees_bp.route("/employees", methods=["GET"])
@jwt_required
def list_employees():
    return jsonify([employee_summary(e) for e in EmployeeService.list_employees()]), 200


@employees_bp.route("/employees/search", methods=["GET"])
@jwt_required
def search_employees():
    keyword = request.args.get("keyword", "")
    return jsonify([employee_summary(e) for e in EmployeeService.search(keyword)]), 200


@employees_bp.route("/employees", methods=["POST"])
@jwt_required
def create_employee():
    employee = EmployeeService.create(_json_body())
    return jsonify(employee_summary(employee)), 201


@employees_bp.route("/employees/<employee_id>", methods=["PUT"])
@jwt_required
def update_employee(employee_id):
    employee = EmployeeService.update(employee_id, _json_body())
    return jsonify(employee_summary(employee)), 200


@employees_bp.route("/employees/<employee_id>", methods=["DELETE"])
@jwt_required
def delete_employee(employee_id):
    EmployeeService.delete(employee_id)
    return jsonify({"message": "Employee deleted successfully"}), 200
