from __future__ import annotations

import pytest

from payroll_engine.core.constants import DEFAULT_POLICY_VALUES
from payroll_engine.main import create_app
from payroll_engine.policy.model import WIRE_NAMES


@pytest.fixture()
def client():
    app = create_app("payroll_engine.config.testing")
    return app.test_client()


def _setting_payload(**overrides):
    data = {WIRE_NAMES[name]: value for name, value in DEFAULT_POLICY_VALUES.items()}
    data.update(overrides)
    return data


def _karyawan(**overrides):
    data = {
        "karyawan_id": 1,
        "nama_lengkap": "Budi",
        "role_karyawan": "produksi",
        "kategori_gaji": "Harian",
        "gaji_pokok": 100000,
        "jam_kerja_masuk": "08:00",
        "jam_kerja_pulang": "17:00",
        "scans": [
            {"tanggal": f"2024-01-{day:02d}", "jam_scan_masuk": "07:55", "jam_scan_pulang": "17:00"}
            for day in range(8, 13)
        ],
        "potongan": [{"deskripsi": "Kasbon", "jumlah": 50000}],
    }
    data.update(overrides)
    return data


def test_active_setting_missing_returns_409(client):
    resp = client.get("/api/setting-gaji/active")

    assert resp.status_code == 409
    assert resp.get_json()["error"]["kind"] == "no_active_policy"


def test_create_and_read_active_setting(client):
    resp = client.post("/api/setting-gaji", json=_setting_payload(premi_staff=0))

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["data"]["is_active"] is True
    assert body["warnings"] == [{"field": "premium_staff", "message": "bernilai 0"}]

    active = client.get("/api/setting-gaji/active").get_json()["data"]
    assert active["setting_id"] == body["data"]["setting_id"]


def test_invalid_setting_lists_fields(client):
    resp = client.post("/api/setting-gaji", json=_setting_payload(premi_produksi=-5, uang_makan_staff_weekday="x"))

    assert resp.status_code == 422
    fields = {e["field"] for e in resp.get_json()["error"]["errors"]}
    assert fields == {"premium_production", "meal_staff_weekday"}


def test_history_and_activate(client):
    first = client.post("/api/setting-gaji", json=_setting_payload()).get_json()["data"]
    client.post("/api/setting-gaji", json=_setting_payload(premi_produksi=25000))

    history = client.get("/api/setting-gaji?limit=1").get_json()["data"]
    assert len(history) == 1 and history[0]["premi_produksi"] == 25000

    resp = client.post(f"/api/setting-gaji/{first['setting_id']}/activate")
    assert resp.status_code == 200
    assert client.get("/api/setting-gaji/active").get_json()["data"]["setting_id"] == first["setting_id"]

    assert client.post("/api/setting-gaji/999/activate").status_code == 404


def test_classify_preview(client):
    client.post("/api/setting-gaji", json=_setting_payload())

    resp = client.post(
        "/api/absensi/classify",
        json={"periode": "2024-W02", "tipe_periode": "mingguan", "karyawan": _karyawan()},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert [d["status"] for d in body["data"]] == ["Hadir"] * 5 + ["Libur"] * 2
    assert body["stats"]["totalHadir"] == 5
    assert body["stats"]["persentaseKehadiran"] == 100


def test_generate_approve_and_pay(client):
    client.post("/api/setting-gaji", json=_setting_payload())

    resp = client.post(
        "/api/payroll/generate",
        json={"periode": "2024-W02", "tipe_periode": "mingguan", "karyawan": [_karyawan()]},
    )
    assert resp.status_code == 201
    record = resp.get_json()["data"]["riwayat_gaji"][0]
    assert record["gaji_final"] == 5 * 100000 - 50000
    assert record["status"] == "draft"

    gaji_id = record["gaji_id"]
    assert client.post(f"/api/payroll/{gaji_id}/approve").status_code == 200
    paid = client.post(f"/api/payroll/{gaji_id}/pay", json={"tanggal_pembayaran": "2024-01-15"}).get_json()["data"]
    assert paid["status"] == "paid"
    assert paid["tanggal_pembayaran"] == "2024-01-15"

    assert client.post(f"/api/payroll/{gaji_id}/cancel").status_code == 409
    assert client.get(f"/api/payroll/{gaji_id}").get_json()["data"]["status"] == "paid"
    assert [r["gaji_id"] for r in client.get("/api/payroll?periode=2024-W02").get_json()["data"]] == [gaji_id]


def test_generate_requires_employees(client):
    client.post("/api/setting-gaji", json=_setting_payload())

    resp = client.post("/api/payroll/generate", json={"periode": "2024-01", "karyawan": []})

    assert resp.status_code == 422


def test_unknown_payroll_is_404(client):
    assert client.get("/api/payroll/77").status_code == 404
