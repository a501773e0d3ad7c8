import os

IPQUERY_BASE_URL = os.getenv("IPQUERY_BASE_URL", "https://api.ipquery.io")
IPQUERY_TIMEOUT_SECONDS = float(os.getenv("IPQUERY_TIMEOUT_SECONDS", "5.0"))

APP_HOST = os.getenv("APP_HOST", "127.0.0.1")
APP_PORT = int(os.getenv("APP_PORT", "8000"))
