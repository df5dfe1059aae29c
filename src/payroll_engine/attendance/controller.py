from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import FieldError, ValidationError
from ..payroll.payloads import parse_employee_input, parse_holidays, parse_period


def register(app: Flask, container: Container) -> None:
    @app.route("/api/absensi/classify", methods=["POST"], endpoint="absensi_classify")
    def classify_attendance():
        """Preview one employee's attendance for a period (nothing is stored)."""
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload.get("karyawan"), dict):
            raise ValidationError("Data karyawan wajib diisi", errors=[FieldError("karyawan", "wajib diisi")])

        period = parse_period(payload)
        holidays = parse_holidays(payload.get("tanggal_merah") or [])
        item = parse_employee_input(payload["karyawan"])
        policy = container.policy_store.get_active()

        days, totals = container.batch_runner.compute_attendance(item, period=period, policy=policy, holidays=holidays)
        return jsonify(
            {
                "data": [d.to_dict() for d in days],
                "stats": totals.to_dict(),
                "setting_id": policy.setting_id,
            }
        )

    @app.route("/api/absensi/<int:karyawan_id>", methods=["GET"], endpoint="absensi_list")
    def list_attendance(karyawan_id: int):
        period = parse_period(request.args)
        days = container.attendance_repo.list_for_employee(karyawan_id, start=period.start, end=period.end)
        return jsonify({"data": [d.to_dict() for d in days]})
