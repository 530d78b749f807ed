import json
import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Optional JSON object overriding entries of the built-in default rate table,
# e.g. DEFAULT_RATES='{"siteNormal": 170}'
DEFAULT_RATES = json.loads(os.getenv("DEFAULT_RATES", "{}"))
