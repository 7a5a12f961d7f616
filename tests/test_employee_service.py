from __future__ import annotations

import base64

import pytest

from conftest import employee_payload
from exceptions import DuplicateEmail, NotFound, ValidationError
from services.employee_service import EmployeeService, validate_payload


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield


def _field_of(payload) -> str:
    with pytest.raises(ValidationError) as exc:
        validate_payload(payload)
    return exc.value.field


def test_validate_normalizes_whitespace_and_courses(ctx):
    fields = validate_payload(employee_payload(
        name="  Jane Doe ", email=" jane@x.com ", mobile=" 9876543210 ", courses=["BCA", "MCA", "BCA"], course=None,
    ))

    assert fields["name"] == "Jane Doe"
    assert fields["email"] == "jane@x.com"
    assert fields["mobile"] == "9876543210"
    assert fields["courses"] == ["BCA", "MCA"]
    assert "image" not in fields


def test_validate_accepts_single_course_string(ctx):
    assert validate_payload(employee_payload(course="BSC"))["courses"] == ["BSC"]


@pytest.mark.parametrize("overrides, field", [
    ({"name": ""}, "name"),
    ({"name": None}, "name"),
    ({"name": 42}, "name"),
    ({"email": ""}, "email"),
    ({"email": "jane@"}, "email"),
    ({"email": "jane x@x.com"}, "email"),
    ({"mobile": ""}, "mobile"),
    ({"mobile": "12345"}, "mobile"),
    ({"mobile": "98765432100"}, "mobile"),
    ({"mobile": "98765abcde"}, "mobile"),
    ({"designation": "CEO"}, "designation"),
    ({"gender": "X"}, "gender"),
    ({"course": ["MBA"]}, "course"),
    ({"course": {"MCA": True}}, "course"),
    ({"image": "http://example.com/a.png"}, "image"),
    ({"image": "data:image/gif;base64,R0lGOD=="}, "image"),
    ({"image": "data:image/png;base64,***"}, "image"),
])
def test_validate_rejects_bad_fields(ctx, overrides, field):
    assert _field_of(employee_payload(**overrides)) == field


def test_validate_reports_first_failing_field(ctx):
    assert _field_of({"email": "bad", "mobile": "1"}) == "name"


def test_validate_treats_non_dict_as_empty(ctx):
    assert _field_of(None) == "name"


def test_image_size_is_bounded(app, ctx):
    app.config["MAX_IMAGE_BYTES"] = 8
    big = "data:image/jpeg;base64," + base64.b64encode(b"x" * 9).decode()
    small = "data:image/jpeg;base64," + base64.b64encode(b"x" * 8).decode()

    assert _field_of(employee_payload(image=big)) == "image"
    assert validate_payload(employee_payload(image=small))["image"] == small


def test_create_and_search_through_service(ctx):
    jane = EmployeeService.create(employee_payload())
    EmployeeService.create(employee_payload(name="Ann_Lee", email="ann@y.org"))

    assert [e.id for e in EmployeeService.search("JANE")] == [jane.id]
    assert [e.name for e in EmployeeService.search("_")] == ["Ann_Lee"]
    assert {e.id for e in EmployeeService.search("")} == {e.id for e in EmployeeService.list_employees()}


def test_duplicate_email_is_a_validation_error_on_email(ctx):
    EmployeeService.create(employee_payload())

    with pytest.raises(DuplicateEmail) as exc:
        EmployeeService.create(employee_payload(email="Jane@x.com"))
    assert isinstance(exc.value, ValidationError)
    assert exc.value.field == "email"
    assert exc.value.status_code == 400


def test_failed_update_leaves_record_untouched(ctx):
    jane = EmployeeService.create(employee_payload())

    with pytest.raises(ValidationError):
        EmployeeService.update(jane.id, employee_payload(name="Changed", mobile="1"))

    reloaded = EmployeeService.get(jane.id)
    assert reloaded.name == "Jane Doe"
    assert reloaded.mobile == "9876543210"


def test_delete_unknown_raises_not_found(ctx):
    jane = EmployeeService.create(employee_payload())
    EmployeeService.delete(jane.id)

    with pytest.raises(NotFound):
        EmployeeService.delete(jane.id)
    with pytest.raises(NotFound):
        EmployeeService.get("garbage")
