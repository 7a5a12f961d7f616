# services/employee_service.py
import base64
import binascii
import re
import uuid

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from database import db
from exceptions import DuplicateEmail, NotFound, ValidationError
from models import Employee

DESIGNATIONS = ("HR", "Manager", "Sales")
GENDERS = ("M", "F")
COURSES = ("MCA", "BCA", "BSC")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MOBILE_RE = re.compile(r"^[0-9]{10}$")
IMAGE_RE = re.compile(r"^data:image/(png|jpeg);base64,(.+)$", re.I | re.S)


def _text(payload: dict, key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(key, f"{key.capitalize()} must be a string")
    return value.strip()


def _courses(payload: dict):
    raw = payload.get("course")
    if raw is None:
        raw = payload.get("courses")
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        raise ValidationError("course", "Course must be a list")
    courses = []
    for item in raw:
        if item not in COURSES:
            raise ValidationError("course", f"Course must be one of: {', '.join(COURSES)}")
        if item not in courses:
            courses.append(item)
    return courses


def _image(value):
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("image", "Image must be a data URL")
    m = IMAGE_RE.match(value)
    if not m:
        raise ValidationError("image", "Image must be a PNG or JPEG data URL")
    try:
        raw = base64.b64decode(m.group(2), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("image", "Image data is not valid base64")
    if len(raw) > current_app.config.get("MAX_IMAGE_BYTES", 2 * 1024 * 1024):
        raise ValidationError("image", "Image is too large")
    return value


def validate_payload(payload: dict) -> dict:
    """
    Validate and normalize an employee payload. The single authoritative
    check for create and update; raises ValidationError on the first bad field.
    """
    if not isinstance(payload, dict):
        payload = {}

    name = _text(payload, "name")
    if not name:
        raise ValidationError("name", "Name is required")

    email = _text(payload, "email")
    if not email:
        raise ValidationError("email", "Email is required")
    if not EMAIL_RE.match(email):
        raise ValidationError("email", "Email is invalid")

    mobile = _text(payload, "mobile")
    if not mobile:
        raise ValidationError("mobile", "Mobile is required")
    if not MOBILE_RE.match(mobile):
        raise ValidationError("mobile", "Mobile must be 10 digits")

    designation = _text(payload, "designation")
    if designation not in DESIGNATIONS:
        raise ValidationError("designation", f"Designation must be one of: {', '.join(DESIGNATIONS)}")

    gender = _text(payload, "gender")
    if gender not in GENDERS:
        raise ValidationError("gender", "Gender must be M or F")

    fields = {
        "name": name,
        "email": email,
        "mobile": mobile,
        "designation": designation,
        "gender": gender,
        "courses": _courses(payload),
    }
    if "image" in payload:
        fields["image"] = _image(payload["image"])
    return fields


def _parse_id(employee_id):
    if isinstance(employee_id, uuid.UUID):
        return employee_id
    try:
        return uuid.UUID(str(employee_id))
    except ValueError:
        raise NotFound()


def _escape_like(keyword: str) -> str:
    return keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class EmployeeService:
    @staticmethod
    def list_employees():
        return Employee.query.order_by(Employee.created_at.desc()).all()

    @staticmethod
    def get(employee_id) -> Employee:
        employee = db.session.get(Employee, _parse_id(employee_id))
        if employee is None:
            raise NotFound()
        return employee

    @staticmethod
    def _ensure_unique_email(email: str, exclude_id=None):
        query = Employee.query.filter(Employee.email_key == email.lower())
        if exclude_id is not None:
            query = query.filter(Employee.id != exclude_id)
        if query.first() is not None:
            raise DuplicateEmail()

    @staticmethod
    def _commit():
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            # a concurrent writer won the race on the unique email index
            if "email_key" in str(exc.orig):
                raise DuplicateEmail()
            raise

    @staticmethod
    def create(payload: dict) -> Employee:
        fields = validate_payload(payload)
        EmployeeService._ensure_unique_email(fields["email"])

        employee = Employee(
            name=fields["name"],
            mobile=fields["mobile"],
            designation=fields["designation"],
            gender=fields["gender"],
            courses=fields["courses"],
            image=fields.get("image"),
        )
        employee.set_email(fields["email"])
        db.session.add(employee)
        EmployeeService._commit()
        current_app.logger.info("Employee %s created", employee.id)
        return employee

    @staticmethod
    def update(employee_id, payload: dict) -> Employee:
        employee = EmployeeService.get(employee_id)
        fields = validate_payload(payload)
        EmployeeService._ensure_unique_email(fields["email"], exclude_id=employee.id)

        employee.name = fields["name"]
        employee.set_email(fields["email"])
        employee.mobile = fields["mobile"]
        employee.designation = fields["designation"]
        employee.gender = fields["gender"]
        employee.courses = fields["courses"]
        if "image" in fields:
            employee.image = fields["image"]
        EmployeeService._commit()
        current_app.logger.info("Employee %s updated", employee.id)
        return employee

    @staticmethod
    def delete(employee_id) -> None:
        employee = EmployeeService.get(employee_id)
        db.session.delete(employee)
        db.session.commit()
        current_app.logger.info("Employee %s deleted", employee.id)

    @staticmethod
    def search(keyword: str):
        keyword = (keyword or "").strip()
        if not keyword:
            return EmployeeService.list_employees()
        pattern = f"%{_escape_like(keyword)}%"
        return (
            Employee.query
            .filter(or_(
                Employee.name.ilike(pattern, escape="\\"),
                Employee.email.ilike(pattern, escape="\\"),
            ))
            .order_by(Employee.created_at.desc())
            .all()
        )
