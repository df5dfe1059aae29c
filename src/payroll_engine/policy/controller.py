from __future__ import annotations

from itertools import islice

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT


def register(app: Flask, container: Container) -> None:
    store = container.policy_store

    @app.route("/api/setting-gaji/active", methods=["GET"], endpoint="setting_gaji_active")
    def active_setting():
        return jsonify({"data": store.get_active().to_dict()})

    @app.route("/api/setting-gaji", methods=["GET"], endpoint="setting_gaji_history")
    def setting_history():
        limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int)
        versions = islice(store.list_history(), max(limit, 0))
        return jsonify({"data": [v.to_dict() for v in versions]})

    @app.route("/api/setting-gaji", methods=["POST"], endpoint="setting_gaji_create")
    def create_setting():
        payload = request.get_json(silent=True) or {}
        warnings = store.validate_fields(payload)
        version = store.create_version(payload)
        return (
            jsonify(
                {
                    "data": version.to_dict(),
                    "warnings": [{"field": w.field, "message": w.message} for w in warnings],
                }
            ),
            201,
        )

    @app.route("/api/setting-gaji/<int:setting_id>/activate", methods=["POST"], endpoint="setting_gaji_activate")
    def activate_setting(setting_id: int):
        return jsonify({"data": store.activate(setting_id).to_dict()})
