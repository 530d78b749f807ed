from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/allocate", methods=["POST"], endpoint="api_allocate")
    def api_allocate():
        payload = request.get_json(silent=True) or {}
        shift = payload.get("shift")
        if not isinstance(shift, dict):
            return jsonify({"error": "shift is required"}), 400

        customer = payload.get("customer")
        try:
            if "rates" in payload:
                rates = payload["rates"]
            else:
                rates = container.rate_service.resolve(customer)
            result = container.allocator.allocate(shift, rates)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(result.to_dict())
