from decimal import Decimal

import pytest
from flask import Flask

from src.hr_payroll.hr_payroll.container import Container
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.payroll.assembler import PayslipAssembler
from src.hr_payroll.hr_payroll.payroll.controller import register
from src.hr_payroll.hr_payroll.payroll.service import PayrollService
from src.hr_payroll.hr_payroll.payroll.settings import PayrollSettings


@pytest.fixture
def app(attendance_factory, employees_factory, workdays_factory, hourly_employee, payslips_repo, ticking_clock):
    settings = PayrollSettings()
    attendance = attendance_factory(
        workdays_factory("e1", 2025, 1, range(2, 12)) + workdays_factory("e2", 2025, 1, range(2, 4))
    )
    employees = employees_factory(
        [hourly_employee, Employee(employee_id="e2", full_name="Ben Reyes", hourly_rate=Decimal("50"))]
    )
    service = PayrollService(
        attendance,
        employees,
        payslips_repo,
        settings=settings,
        assembler=PayslipAssembler(payslips_repo, settings=settings, clock=ticking_clock),
    )
    container = Container(
        conn=None,
        settings=settings,
        attendance_repo=attendance,
        employees_repo=employees,
        payslips_repo=payslips_repo,
        payroll_service=service,
    )

    app = Flask(__name__)
    app.config.update(TESTING=True, SECRET_KEY="test")
    register(app, container)
    return app


def _login(client, user_id, role):
    with client.session_transaction() as s:
        s["user_id"] = user_id
        s["role"] = role


@pytest.fixture
def officer(app):
    client = app.test_client()
    _login(client, "officer-1", "payroll_officer")
    return client


def test_requires_login(app):
    res = app.test_client().post("/api/payroll/finalize", json={"employee_id": "e1", "year": 2025, "month": 1, "period": 1})

    assert res.status_code == 401


def test_employee_cannot_finalize(app):
    client = app.test_client()
    _login(client, "e1", "employee")

    res = client.post("/api/payroll/finalize", json={"employee_id": "e1", "year": 2025, "month": 1, "period": 1})

    assert res.status_code == 403
    assert res.get_json()["error"] == "AuthorizationError"


def test_finalize_creates_then_updates(officer):
    body = {"employee_id": "e1", "year": 2025, "month": 1, "period": 1}

    created = officer.post("/api/payroll/finalize", json=body)
    updated = officer.post("/api/payroll/finalize", json={**body, "adjustments": {"bonus": 1000}})

    assert created.status_code == 201
    assert updated.status_code == 200
    assert created.get_json()["payslip"]["id"] == updated.get_json()["payslip"]["id"]
    assert updated.get_json()["action"] == "updated"
    assert updated.get_json()["payslip"]["components"]["bonus"] == 1000


def test_preview_returns_draft(officer):
    res = officer.post("/api/payroll/preview", json={"employee_id": "e1", "year": 2025, "month": 1, "period": 1})

    data = res.get_json()
    assert res.status_code == 200
    assert data["hours"]["regular_hours"] == "80"
    assert data["gross_pay"] == 480_000
    assert data["net_pay"] == 480_000 - 43_200


def test_invalid_period_is_bad_request(officer):
    res = officer.post("/api/payroll/finalize", json={"employee_id": "e1", "year": 2025, "month": 1, "period": 3})

    assert res.status_code == 400
    assert res.get_json()["error"] == "InvalidInputError"


def test_missing_field_is_bad_request(officer):
    res = officer.post("/api/payroll/preview", json={"employee_id": "e1", "year": 2025, "month": 1})

    assert res.status_code == 400


def test_fractional_amount_adjustment_is_rejected(officer):
    res = officer.post(
        "/api/payroll/preview",
        json={"employee_id": "e1", "year": 2025, "month": 1, "period": 1, "adjustments": {"bonus": 10.5}},
    )

    assert res.status_code == 400


def test_unknown_employee_is_not_found(officer):
    res = officer.post("/api/payroll/preview", json={"employee_id": "zz", "year": 2025, "month": 1, "period": 1})

    assert res.status_code == 404


def test_batch_reports_failures(officer):
    res = officer.post(
        "/api/payroll/batch", json={"year": 2025, "month": 1, "period": 1, "employee_ids": ["e1", "zz", "e2"]}
    )

    data = res.get_json()
    assert res.status_code == 200
    assert data["created"] == 2
    assert [f["employee_id"] for f in data["failed"]] == ["zz"]


def test_employee_sees_only_own_payslips(app, officer):
    officer.post("/api/payroll/batch", json={"year": 2025, "month": 1, "period": 1, "employee_ids": ["e1", "e2"]})
    client = app.test_client()
    _login(client, "e2", "employee")

    own = client.get("/api/payslips").get_json()
    everyone = client.get("/api/payslips?all=true")

    assert [p["employee_id"] for p in own] == ["e2"]
    assert everyone.status_code == 403


def test_officer_lists_all_payslips(officer):
    officer.post("/api/payroll/batch", json={"year": 2025, "month": 1, "period": 1, "employee_ids": ["e1", "e2"]})

    rows = officer.get("/api/payslips?all=true&period=1").get_json()

    assert sorted(p["employee_id"] for p in rows) == ["e1", "e2"]


def test_payslip_detail_is_owner_or_officer(app, officer):
    created = officer.post(
        "/api/payroll/finalize", json={"employee_id": "e1", "year": 2025, "month": 1, "period": 1}
    ).get_json()
    payslip_id = created["payslip"]["id"]

    owner = app.test_client()
    _login(owner, "e1", "employee")
    stranger = app.test_client()
    _login(stranger, "e2", "employee")

    assert owner.get(f"/api/payslips/{payslip_id}").status_code == 200
    assert stranger.get(f"/api/payslips/{payslip_id}").status_code == 403
    assert officer.get("/api/payslips/does-not-exist").status_code == 404


def test_delete_payslip(officer):
    created = officer.post(
        "/api/payroll/finalize", json={"employee_id": "e1", "year": 2025, "month": 1, "period": 1}
    ).get_json()
    payslip_id = created["payslip"]["id"]

    assert officer.delete(f"/api/payslips/{payslip_id}").status_code == 200
    assert officer.delete(f"/api/payslips/{payslip_id}").status_code == 404


def test_status_change_and_paid_lock(officer):
    body = {"employee_id": "e1", "year": 2025, "month": 1, "period": 1}
    payslip_id = officer.post("/api/payroll/finalize", json={**body, "payment_status": "draft"}).get_json()["payslip"]["id"]

    assert officer.patch(f"/api/payslips/{payslip_id}/status", json={"payment_status": "finalized"}).status_code == 200
    paid = officer.patch(f"/api/payslips/{payslip_id}/status", json={"payment_status": "paid"})
    refinalized = officer.post("/api/payroll/finalize", json=body)

    assert paid.get_json()["payment_status"] == "paid"
    assert refinalized.status_code == 400
    assert refinalized.get_json()["error"] == "InvariantViolationError"


def test_bad_status_change(officer):
    body = {"employee_id": "e1", "year": 2025, "month": 1, "period": 1}
    payslip_id = officer.post("/api/payroll/finalize", json=body).get_json()["payslip"]["id"]

    assert officer.patch(f"/api/payslips/{payslip_id}/status", json={"payment_status": "void"}).status_code == 400
    assert officer.patch("/api/payslips/nope/status", json={"payment_status": "paid"}).status_code == 404


def test_fractional_period_is_bad_request(officer):
    res = officer.post("/api/payroll/preview", json={"employee_id": "e1", "year": 2025, "month": 1, "period": 1.5})

    assert res.status_code == 400
