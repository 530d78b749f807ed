from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rates/defaults", methods=["GET", "PUT", "PATCH"], endpoint="api_rate_defaults")
    def api_rate_defaults():
        try:
            if request.method == "PUT":
                container.rate_service.set_defaults(request.get_json(silent=True) or {})
            elif request.method == "PATCH":
                container.rate_service.update_defaults(request.get_json(silent=True) or {})
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(container.rate_service.defaults.to_dict())

    @app.route("/api/rates/defaults/reset", methods=["POST"], endpoint="api_rate_defaults_reset")
    def api_rate_defaults_reset():
        return jsonify(container.rate_service.reset_defaults().to_dict())

    @app.route(
        "/api/rates/customers/<customer>",
        methods=["GET", "PUT", "DELETE"],
        endpoint="api_customer_rates",
    )
    def api_customer_rates(customer: str):
        try:
            if request.method == "PUT":
                table = container.rate_service.set_customer_rates(customer, request.get_json(silent=True) or {})
                return jsonify(table.to_dict())
            if request.method == "DELETE":
                container.rate_service.delete_customer_rates(customer)
                return "", 204
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(container.rate_service.resolve(customer).to_dict())
