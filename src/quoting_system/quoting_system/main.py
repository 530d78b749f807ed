from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .allocation.controller import register as register_allocation
from .quotes.controller import register as register_quotes
from .rates.controller import register as register_rates


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("quoting_system")
    logger.info("settings=%s debug=%s", settings_module, app.config["DEBUG"])

    container = build_container(default_rates=getattr(settings, "DEFAULT_RATES", None))
    app.extensions["container"] = container

    register_allocation(app, container)
    register_rates(app, container)
    register_quotes(app, container)

    return app
