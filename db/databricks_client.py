# db/databricks_client.py
import logging
from databricks.sql import connect
from databricks.sql.exc import Error as DatabricksError
from config import DATABRICKS_HOST, DATABRICKS_HTTP_PATH, DATABRICKS_TOKEN, QUERY_TIMEOUT
from errors import StoreError

LOG = logging.getLogger(__name__)


def run_query(sql, params=None, timeout=QUERY_TIMEOUT):
    """
    Run one statement on a fresh connection and return
    {"columns": [...], "rows": [tuple, ...]}.

    `params` is a dict bound to :name markers by the connector.
    Any connector failure is logged and re-raised as StoreError so
    the store's own message never reaches a client.
    """
    LOG.debug("SQL: %s params=%r", sql, params)
    try:
        conn = connect(server_hostname=DATABRICKS_HOST, http_path=DATABRICKS_HTTP_PATH,
                       access_token=DATABRICKS_TOKEN, timeout=timeout)
    except DatabricksError as e:
        LOG.exception("could not connect to warehouse")
        raise StoreError() from e
    try:
        with conn.cursor() as cur:
            if params:
                cur.execute(sql, params)
            else:
                cur.execute(sql)
            cols = [c[0] for c in cur.description] if cur.description else []
            rows = [tuple(r) for r in cur.fetchall()] if cur.description else []
        return {"columns": cols, "rows": rows}
    except DatabricksError as e:
        LOG.exception("query failed")
        raise StoreError() from e
    finally:
        conn.close()


def fetch_scalar(sql, params=None):
    """Return the first column of the first row, or None."""
    res = run_query(sql, params)
    if not res["rows"]:
        return None
    return res["rows"][0][0]
