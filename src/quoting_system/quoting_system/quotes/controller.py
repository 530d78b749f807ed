from __future__ import annotations

import io
import logging
from functools import wraps

from flask import Flask, jsonify, request, send_file

from ..core.enums import QuoteStatus
from ..core.exceptions import (
    InvalidStatusTransition,
    QuoteLockedError,
    QuoteNotFound,
    ValidationError,
)
from ..container import Container
from .service import ACTIONS

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    quotes = container.quote_service
    reports = container.report_service

    def domain_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except QuoteNotFound as e:
                return jsonify({"error": str(e)}), 404
            except (QuoteLockedError, InvalidStatusTransition) as e:
                return jsonify({"error": str(e)}), 409
            except ValidationError as e:
                return jsonify({"error": str(e)}), 400

        return wrapper

    def _quote_payload(quote):
        data = quote.to_dict()
        data["totals"] = quotes.totals(quote).to_dict()
        return data

    @app.route("/api/quotes", methods=["GET", "POST"], endpoint="api_quotes")
    @domain_errors
    def api_quotes():
        if request.method == "POST":
            quote = quotes.create_quote(request.get_json(silent=True) or {})
            return jsonify(_quote_payload(quote)), 201

        status_s = request.args.get("status")
        try:
            status = QuoteStatus(status_s) if status_s else None
        except ValueError:
            raise ValidationError(f"Unknown status: {status_s}")
        return jsonify([_quote_payload(q) for q in quotes.list_quotes(status=status)])

    @app.route("/api/quotes/<int:quote_id>", methods=["GET", "PATCH", "DELETE"], endpoint="api_quote")
    @domain_errors
    def api_quote(quote_id: int):
        if request.method == "DELETE":
            quotes.delete_quote(quote_id)
            return "", 204
        if request.method == "PATCH":
            quote = quotes.update_job(quote_id, request.get_json(silent=True) or {})
        else:
            quote = quotes.get(quote_id)
        return jsonify(_quote_payload(quote))

    @app.route("/api/quotes/<int:quote_id>/rates", methods=["PUT"], endpoint="api_quote_rates")
    @domain_errors
    def api_quote_rates(quote_id: int):
        quote = quotes.set_rates(quote_id, request.get_json(silent=True) or {})
        return jsonify(_quote_payload(quote))

    @app.route("/api/quotes/<int:quote_id>/shifts", methods=["POST"], endpoint="api_quote_shifts")
    @domain_errors
    def api_quote_shifts(quote_id: int):
        shift = quotes.add_shift(quote_id, request.get_json(silent=True) or {})
        return jsonify(shift.to_dict()), 201

    @app.route(
        "/api/quotes/<int:quote_id>/shifts/<int:shift_id>",
        methods=["PATCH", "DELETE"],
        endpoint="api_quote_shift",
    )
    @domain_errors
    def api_quote_shift(quote_id: int, shift_id: int):
        if request.method == "DELETE":
            quotes.remove_shift(quote_id, shift_id)
            return "", 204
        shift = quotes.update_shift(quote_id, shift_id, request.get_json(silent=True) or {})
        return jsonify(shift.to_dict())

    @app.route("/api/quotes/<int:quote_id>/extras", methods=["POST"], endpoint="api_quote_extras")
    @domain_errors
    def api_quote_extras(quote_id: int):
        payload = request.get_json(silent=True) or {}
        extra = quotes.add_extra(quote_id, description=payload.get("description", ""), cost=payload.get("cost", 0))
        return jsonify(extra.to_dict()), 201

    @app.route(
        "/api/quotes/<int:quote_id>/extras/<int:extra_id>",
        methods=["DELETE"],
        endpoint="api_quote_extra",
    )
    @domain_errors
    def api_quote_extra(quote_id: int, extra_id: int):
        quotes.remove_extra(quote_id, extra_id)
        return "", 204

    @app.route("/api/quotes/<int:quote_id>/status/<action>", methods=["POST"], endpoint="api_quote_status")
    @domain_errors
    def api_quote_status(quote_id: int, action: str):
        if action not in ACTIONS:
            return jsonify({"error": f"Unknown action: {action}"}), 404
        quote = quotes.transition(quote_id, action)
        return jsonify(_quote_payload(quote))

    @app.route("/api/quotes/<int:quote_id>/summary", methods=["GET"], endpoint="api_quote_summary")
    @domain_errors
    def api_quote_summary(quote_id: int):
        quote = quotes.get(quote_id)
        return jsonify(
            {
                "totals": quotes.totals(quote).to_dict(),
                "financial": reports.financial_breakdown(quote).to_dict(),
            }
        )

    @app.route("/api/quotes/<int:quote_id>/breakdown", methods=["GET"], endpoint="api_quote_breakdown")
    @domain_errors
    def api_quote_breakdown(quote_id: int):
        quote = quotes.get(quote_id)
        return reports.shift_breakdown_text(quote), 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route("/api/quotes/<int:quote_id>/export", methods=["GET"], endpoint="api_quote_export")
    @domain_errors
    def api_quote_export(quote_id: int):
        quote = quotes.get(quote_id)
        data = reports.export_breakdown_xlsx(quote)
        logger.info("Exported breakdown for quote %s (%d shifts)", quote.quote_number, len(quote.shifts))
        return send_file(
            io.BytesIO(data),
            download_name=f"quote_{quote.quote_number}_breakdown.xlsx",
            as_attachment=True,
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
