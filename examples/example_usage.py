"""Example: price a small job through the service layer (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.quoting_system.quoting_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(default_rates=getattr(settings, "DEFAULT_RATES", None))
    quotes = container.quote_service

    quote = quotes.create_quote({"customer": "Example Co", "jobNo": "J1001", "technicians": ["Tech 1"]})
    quotes.add_shift(
        quote.quote_id,
        {"date": "2024-03-04", "dayType": "weekday", "startTime": "06:00", "finishTime": "18:00",
         "travelIn": 1, "travelOut": 1, "vehicle": True},
    )
    quotes.add_shift(
        quote.quote_id,
        {"date": "2024-03-09", "dayType": "weekend", "startTime": "08:00", "finishTime": "14:00",
         "travelIn": 0.5, "travelOut": 0.5},
    )

    quote = quotes.get(quote.quote_id)
    print(container.report_service.shift_breakdown_text(quote))
    print(quotes.totals(quote).to_dict())


if __name__ == "__main__":
    main()
