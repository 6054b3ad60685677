from __future__ import annotations

from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session

from ..common.logging_config import get_logger
from ..core.enums import PaymentStatus, Role, SaveAction
from ..core.exceptions import (
    AuthorizationError,
    ConcurrentUpdateError,
    DomainError,
    InvalidInputError,
    InvariantViolationError,
    NotFoundError,
)
from ..container import Container
from .serializers import (
    adjustments_from_dict,
    assemble_result_to_dict,
    batch_result_to_dict,
    draft_to_dict,
    payslip_to_dict,
)

logger = get_logger("payroll.controller")

PAYROLL_ROLES = {Role.ADMIN.value, Role.PAYROLL_OFFICER.value}

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (InvalidInputError, 400),
    (InvariantViolationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConcurrentUpdateError, 409),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Authentication required"}), 401
            return view(*args, **kwargs)

        return wrapper

    def payroll_officer_required(view):
        """Allow only admins and payroll officers (role set by the auth layer)."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Authentication required"}), 401
            if session.get("role") not in PAYROLL_ROLES:
                raise AuthorizationError("Access denied")
            return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        logger.info("payroll_request_rejected", extra={"status": status, "error_type": type(e).__name__})
        return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), status

    def _json_body() -> dict[str, Any]:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidInputError("Request body must be a JSON object")
        return data

    def _required(data: dict[str, Any], key: str) -> Any:
        if data.get(key) is None:
            raise InvalidInputError(f"Missing field: {key}")
        return data[key]

    def _int_arg(name: str):
        value = request.args.get(name)
        if value in (None, ""):
            return None
        try:
            return int(value)
        except ValueError:
            raise InvalidInputError(f"{name} must be a number")

    @app.route("/api/payslips", methods=["GET"], endpoint="api_payslips")
    @login_required
    def list_payslips():
        filters = {"year": _int_arg("year"), "month": _int_arg("month"), "period": _int_arg("period")}
        if request.args.get("all") == "true":
            if session.get("role") not in PAYROLL_ROLES:
                raise AuthorizationError("Access denied")
            employee_id = request.args.get("employee_id") or None
        else:
            employee_id = str(session["user_id"])

        rows = service.list_payslips(employee_id=employee_id, **filters)
        return jsonify([payslip_to_dict(p) for p in rows])

    @app.route("/api/payslips/<payslip_id>", methods=["GET"], endpoint="api_payslip_detail")
    @login_required
    def get_payslip(payslip_id: str):
        payslip = service.get_payslip(payslip_id)
        if session.get("role") not in PAYROLL_ROLES and payslip.employee_id != str(session["user_id"]):
            raise AuthorizationError("Access denied")
        return jsonify(payslip_to_dict(payslip))

    @app.route("/api/payroll/preview", methods=["POST"], endpoint="api_payroll_preview")
    @payroll_officer_required
    def preview():
        data = _json_body()
        draft = service.preview(
            str(_required(data, "employee_id")),
            year=_required(data, "year"),
            month=_required(data, "month"),
            period=_required(data, "period"),
            adjustments=adjustments_from_dict(data.get("adjustments")),
        )
        return jsonify(draft_to_dict(draft))

    @app.route("/api/payroll/finalize", methods=["POST"], endpoint="api_payroll_finalize")
    @payroll_officer_required
    def finalize():
        data = _json_body()
        result = service.finalize(
            str(_required(data, "employee_id")),
            year=_required(data, "year"),
            month=_required(data, "month"),
            period=_required(data, "period"),
            adjustments=adjustments_from_dict(data.get("adjustments")),
            payment_status=data.get("payment_status") or PaymentStatus.FINALIZED.value,
        )
        status = 201 if result.action == SaveAction.CREATED else 200
        return jsonify(assemble_result_to_dict(result)), status

    @app.route("/api/payroll/batch", methods=["POST"], endpoint="api_payroll_batch")
    @payroll_officer_required
    def batch():
        data = _json_body()
        employee_ids = data.get("employee_ids")
        if employee_ids is not None and not isinstance(employee_ids, list):
            raise InvalidInputError("employee_ids must be a list")
        result = service.run_batch(
            year=_required(data, "year"),
            month=_required(data, "month"),
            period=_required(data, "period"),
            employee_ids=[str(e) for e in employee_ids] if employee_ids is not None else None,
        )
        return jsonify(batch_result_to_dict(result))

    @app.route("/api/payslips/<payslip_id>", methods=["DELETE"], endpoint="api_payslip_delete")
    @payroll_officer_required
    def delete_payslip(payslip_id: str):
        service.delete_payslip(payslip_id)
        return jsonify({"success": True, "id": payslip_id})

    @app.route("/api/payslips/<payslip_id>/status", methods=["PATCH"], endpoint="api_payslip_status")
    @payroll_officer_required
    def change_status(payslip_id: str):
        data = _json_body()
        payslip = service.change_payment_status(payslip_id, _required(data, "payment_status"))
        return jsonify(payslip_to_dict(payslip))
