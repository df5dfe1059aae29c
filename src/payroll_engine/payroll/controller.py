from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..container import Container
from ..core.exceptions import FieldError, ValidationError
from .payloads import parse_employee_input, parse_holidays, parse_period
from .payslip import PayslipOptions


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    def generate_payroll():
        payload = request.get_json(silent=True) or {}
        period = parse_period(payload)
        holidays = parse_holidays(payload.get("tanggal_merah") or [])
        items = [parse_employee_input(raw) for raw in payload.get("karyawan") or []]
        if not items:
            raise ValidationError("Pilih minimal satu karyawan", errors=[FieldError("karyawan", "kosong")])

        result = container.batch_runner.run(
            items,
            period=period,
            holidays=holidays,
            options=PayslipOptions.from_dict(payload.get("opsi") or {}),
        )
        return jsonify({"data": result.to_dict()}), 201

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    def list_payroll():
        period = request.args.get("periode", "")
        if not period:
            raise ValidationError("Periode wajib diisi", errors=[FieldError("periode", "wajib diisi")])
        return jsonify({"data": [r.to_dict() for r in service.list_for_period(period)]})

    @app.route("/api/payroll/<int:gaji_id>", methods=["GET"], endpoint="payroll_detail")
    def payroll_detail(gaji_id: int):
        return jsonify({"data": service.get(gaji_id).to_dict()})

    @app.route("/api/payroll/<int:gaji_id>/approve", methods=["POST"], endpoint="payroll_approve")
    def approve_payroll(gaji_id: int):
        return jsonify({"data": service.approve(gaji_id).to_dict()})

    @app.route("/api/payroll/<int:gaji_id>/pay", methods=["POST"], endpoint="payroll_pay")
    def pay_payroll(gaji_id: int):
        payload = request.get_json(silent=True) or {}
        raw = payload.get("tanggal_pembayaran")
        try:
            paid_on = parse_iso_date(str(raw)) if raw else now_local().date()
        except ValueError as exc:
            raise ValidationError(
                "Tanggal pembayaran tidak valid",
                errors=[FieldError("tanggal_pembayaran", str(exc))],
            ) from exc
        return jsonify({"data": service.mark_paid(gaji_id, paid_on).to_dict()})

    @app.route("/api/payroll/<int:gaji_id>/cancel", methods=["POST"], endpoint="payroll_cancel")
    def cancel_payroll(gaji_id: int):
        return jsonify({"data": service.cancel(gaji_id).to_dict()})
