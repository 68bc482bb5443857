# config.py
# Values come from the environment; defaults are for local development.
import os

DATABRICKS_HOST = os.getenv("DATABRICKS_HOST", "")
DATABRICKS_HTTP_PATH = os.getenv("DATABRICKS_HTTP_PATH", "")
DATABRICKS_TOKEN = os.getenv("DATABRICKS_TOKEN", "")
QUERY_TIMEOUT = int(os.getenv("QUERY_TIMEOUT", "120"))   # seconds

# Optional scope for SHOW TABLES (empty = warehouse default schema)
BROWSE_CATALOG = os.getenv("BROWSE_CATALOG", "")
BROWSE_SCHEMA = os.getenv("BROWSE_SCHEMA", "")

# Comma-separated tokens accepted as administrator credentials
ADMIN_TOKENS = [t.strip() for t in os.getenv("ADMIN_TOKENS", "").split(",") if t.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
# JSON-lines audit trail of served requests; disabled when empty
AUDIT_LOG_PATH = os.getenv("AUDIT_LOG_PATH", "")

PORT = int(os.getenv("PORT", "8000"))

# Rows per page (fixed)
PAGE_SIZE = 10
